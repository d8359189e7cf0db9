import logging
import pytest

from scripts.inflect_target import main


@pytest.fixture(autouse=True)
def _restore_root_logger():
    lg = logging.getLogger("strinflect")
    handlers, propagate, level = list(lg.handlers), lg.propagate, lg.level
    yield
    lg.handlers = handlers
    lg.propagate = propagate
    lg.setLevel(level)


def test_resolves_view_script(cfg_path, capsys):
    rc = main([
        "--config", str(cfg_path),
        "--inflector", "view_script",
        "--set", "controller=UserAccount",
        "--set", "action=showItems",
    ])
    assert rc == 0
    assert capsys.readouterr().out.strip() == "modules/default/views/user-account/show-items.phtml"


def test_target_override(cfg_path, capsys):
    rc = main([
        "--config", str(cfg_path),
        "--inflector", "route",
        "--target", ":controller-:action",
        "--set", ":controller=Blog",
        "--set", ":action=Show",
    ])
    assert rc == 0
    assert capsys.readouterr().out.strip() == "blog-show"


def test_unresolved_placeholder_exit_code(cfg_path, capsys):
    rc = main(["--config", str(cfg_path), "--inflector", "route", "--set", "controller=Blog"])
    assert rc == 2
    assert capsys.readouterr().out == ""


def test_unknown_inflector_is_usage_error(cfg_path):
    with pytest.raises(SystemExit) as ei:
        main(["--config", str(cfg_path), "--inflector", "nope"])
    assert ei.value.code == 2


def test_print_config(cfg_path, capsys):
    assert main(["--config", str(cfg_path), "--print-config"]) == 0
    assert "[inflectors.route]" in capsys.readouterr().out
