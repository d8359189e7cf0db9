from __future__ import annotations
import pytest

from strinflect.filtering.refs import FilterCall, parse_filter_ref
from strinflect.filtering.errors import ConfigurationError


def test_bare_name():
    call = parse_filter_ref("  string_to_lower ")
    assert call == FilterCall("string_to_lower")
    assert call.args == () and call.kwargs == {}


def test_positional_and_keyword_args():
    call = parse_filter_ref("regex_replace('-', \"_\", flags='I')")
    assert call.name == "regex_replace"
    assert call.args == ("-", "_")
    assert call.kwargs == {"flags": "I"}


def test_literal_kinds():
    call = parse_filter_ref("f(1, -2.5, true, None, ['a', 2], [])")
    assert call.args == (1, -2.5, True, None, ["a", 2], [])


def test_string_escapes_keep_regex_text():
    call = parse_filter_ref(r"f('\.', '\d+', 'a\'b', '\\', '\n')")
    assert call.args == ("\\.", "\\d+", "a'b", "\\", "\n")


def test_empty_call():
    assert parse_filter_ref("slugify()") == FilterCall("slugify")


@pytest.mark.parametrize(
    "expr",
    [
        "",
        "   ",
        "f(",
        "f('x'",
        "f('x) ",
        "f(a=1, 2)",
        "f(a=1, a=2)",
        "f(x)",
        "f() g",
        "f($)",
        "1f",
        "f(1.)",
    ],
)
def test_malformed_refs_raise(expr):
    with pytest.raises(ConfigurationError):
        parse_filter_ref(expr)


def test_bind_maps_positionals_and_keywords_win():
    call = FilterCall("regex_replace", ("a", "b"), {"flags": "I"})
    assert call.bind(("pattern", "replacement", "flags")) == {
        "pattern": "a",
        "replacement": "b",
        "flags": "I",
    }
    assert FilterCall("x", ("a",), {"p": "z"}).bind(("p",)) == {"p": "z"}


def test_bind_rejects_extra_positionals():
    with pytest.raises(ConfigurationError):
        FilterCall("string_to_lower", ("x",)).bind(())
