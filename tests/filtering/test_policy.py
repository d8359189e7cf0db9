from __future__ import annotations
import pytest

from strinflect.config_model.model import InflectorCfg
from strinflect.filtering.policy import build_inflector_from_config, build_inflectors, describe_rules
from strinflect.filtering.inflector import Inflector
from strinflect.filtering.errors import RegistryLookupError, UnresolvedPlaceholderError


def test_build_inflectors_from_sample_config(cfg):
    infs = build_inflectors(cfg)
    assert set(infs) == {"layout", "view_script", "route"}
    # one registry shared across the whole config
    assert infs["layout"].registry is infs["route"].registry


def test_view_script_resolves(cfg):
    inf = build_inflectors(cfg)["view_script"]
    out = inf.filter({"controller": "UserAccount", "action": "showItems"})
    assert out == "modules/default/views/user-account/show-items.phtml"


def test_view_script_controller_dots_become_dashes(cfg):
    inf = build_inflectors(cfg)["view_script"]
    out = inf.filter({"module": "Blog", "controller": "Admin.PostList", "action": "edit"})
    assert out == "modules/default/views/admin-post-list/edit.phtml"


def test_view_script_missing_action_raises(cfg):
    inf = build_inflectors(cfg)["view_script"]
    with pytest.raises(UnresolvedPlaceholderError):
        inf.filter({"controller": "Index"})


def test_layout_and_route(cfg):
    infs = build_inflectors(cfg)
    assert infs["layout"].filter({"script": "UserAccount"}) == "user-account.phtml"
    assert infs["route"].filter({"controller": "UserAccount", "action": "Create"}) == "app/useraccount/create"


def test_rules_follow_file_order(cfg):
    inf = build_inflectors(cfg)["view_script"]
    rows = describe_rules(inf)
    assert [r["spec"] for r in rows] == ["moduleDir", "module", "controller", "action", "suffix"]
    assert rows[0] == {"spec": "moduleDir", "kind": "static", "value": "modules/default"}
    assert rows[1]["kind"] == "chain" and len(rows[1]["filters"]) == 2


def test_camel_case_keys_and_custom_identifier():
    cfg = InflectorCfg.model_validate(
        {
            "target": "%page.html",
            "targetReplacementIdentifier": "%",
            "throwTargetExceptionsOn": False,
            "rules": [{"spec": "%page", "filters": ["slugify"]}],
        }
    )
    inf = build_inflector_from_config(cfg)
    assert isinstance(inf, Inflector)
    assert inf.throw_on_unresolved is False
    assert inf.filter({"page": "About Us"}) == "about-us.html"

    same = Inflector.from_config(cfg)
    assert same.filter({"%page": "Contact"}) == "contact.html"


def test_unknown_filter_name_fails_at_build_time(registry):
    cfg = InflectorCfg(target=":a", rules=[{"spec": ":a", "filters": ["no_such_filter"]}])
    with pytest.raises(RegistryLookupError):
        build_inflector_from_config(cfg, registry=registry)
