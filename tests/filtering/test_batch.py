from __future__ import annotations
import pandas as pd
import pytest

from strinflect.filtering.batch import filter_series, inflect_frame
from strinflect.filtering.inflector import Inflector
from strinflect.filtering.filters_builtin.string_case import StringToLower
from strinflect.filtering.errors import InputTypeError


def test_filter_series_preserves_na_and_returns_string_dtype():
    s = pd.Series(["UserAccount", None, "FooBar"])
    out = filter_series(s, ["word_camel_case_to_dash", "string_to_lower"])
    assert str(out.dtype) == "string"
    assert out.iloc[0] == "user-account"
    assert pd.isna(out.iloc[1])
    assert out.iloc[2] == "foo-bar"


def test_filter_series_accepts_single_filter_and_registry(registry):
    s = pd.Series(["A", "B"], dtype="string")
    assert filter_series(s, StringToLower()).tolist() == ["a", "b"]
    assert filter_series(s, "regex_replace('[AB]', 'x')", registry=registry).tolist() == ["x", "x"]


def test_filter_series_leaves_non_string_series_alone():
    s = pd.Series([1, 2, 3])
    out = filter_series(s, ["string_to_lower"])
    assert out is not s
    assert out.equals(s)


def test_filter_series_rejects_bad_refs():
    with pytest.raises(InputTypeError):
        filter_series(pd.Series(["a"]), [5])


def _route() -> Inflector:
    inf = Inflector(":module/:controller/:action")
    inf.set_static_rule("module", "app")
    inf.add_filter_rule(":controller", [StringToLower()])
    inf.add_filter_rule(":action", [StringToLower()])
    return inf


def test_inflect_frame_one_call_per_row_with_na_falling_back_to_static():
    df = pd.DataFrame(
        [
            {"module": None, "controller": "User", "action": "List"},
            {"module": "admin", "controller": "Blog", "action": "Show"},
        ]
    )
    out = inflect_frame(df, _route())
    assert out.tolist() == ["app/user/list", "admin/blog/show"]
    assert str(out.dtype) == "string"
    assert list(out.index) == list(df.index)


def test_inflect_frame_column_mapping():
    df = pd.DataFrame({"c": ["Index"], "a": ["View"], "ignored": ["x"]})
    out = inflect_frame(df, _route(), columns={"c": ":controller", "a": "action"})
    assert out.tolist() == ["app/index/view"]

    with pytest.raises(KeyError):
        inflect_frame(df, _route(), columns={"missing": "controller"})


def test_inflect_frame_empty():
    df = pd.DataFrame({"controller": [], "action": []})
    out = inflect_frame(df, _route())
    assert len(out) == 0
