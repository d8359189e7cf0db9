from __future__ import annotations
from typing import Mapping, Sequence
import pandas as pd

from .base import FilterRef, is_filter
from .errors import InputTypeError
from .inflector import Inflector
from .registry import FilterRegistry, compile_filter_registry
from .rules import ChainRule

__all__ = ["filter_series", "inflect_frame"]


# ----------------------------- helpers ---------------------------------

def _to_string_series(s: pd.Series) -> pd.Series:
    """Convert to pandas StringDtype, preserving NA."""
    try:
        return s.astype("string")
    except Exception:
        return s.astype(object).astype("string")


def _build_chain(filters: Sequence[FilterRef], registry: FilterRegistry | None) -> ChainRule:
    out = []
    for ref in filters:
        if is_filter(ref):
            out.append(ref)
        elif isinstance(ref, str):
            if registry is None:
                registry = compile_filter_registry()
            out.append(registry.resolve_ref(ref))
        else:
            raise InputTypeError(f"Invalid rule type {type(ref).__name__!r}")
    return ChainRule(tuple(out))


# ----------------------------- public API ---------------------------------

def filter_series(
    s: pd.Series,
    filters: Sequence[FilterRef],
    *,
    registry: FilterRegistry | None = None,
) -> pd.Series:
    """
    Run a filter chain over every element of a string-like series.

    Parameters
    ----------
    s : pd.Series
        Input series. Non-string/object series are returned unchanged (copy).
    filters : sequence of filters or registry references
        Applied in order; each filter's output feeds the next one.
    registry : FilterRegistry, optional
        Used to resolve string references; built-ins when omitted.

    Returns
    -------
    pd.Series (StringDtype)

    Notes
    -----
    - NA values remain NA.
    - Filter errors propagate; nothing is swallowed per element.
    """
    if isinstance(filters, str) or is_filter(filters):
        filters = [filters]
    chain = _build_chain(filters, registry)

    if not (pd.api.types.is_object_dtype(s.dtype) or pd.api.types.is_string_dtype(s.dtype)):
        return s.copy(deep=True)

    x = _to_string_series(s)

    def _apply_one(val: object) -> object:
        if pd.isna(val):
            return pd.NA
        return chain.apply(str(val))

    return x.map(_apply_one).astype("string")


def inflect_frame(
    df: pd.DataFrame,
    inflector: Inflector,
    *,
    columns: Mapping[str, str] | None = None,
) -> pd.Series:
    """
    One `inflector.filter` call per row.

    `columns` maps column name -> spec (":controller" or "controller"); by default
    every column is passed under its own name. NA cells are left out of the row's
    source so static defaults still apply to them.
    """
    if columns is None:
        columns = {str(c): str(c) for c in df.columns}
    missing = [c for c in columns if c not in df.columns]
    if missing:
        raise KeyError(f"Columns not in frame: {missing}")

    def _row(row: pd.Series) -> str:
        source = {
            spec: str(row[col])
            for col, spec in columns.items()
            if not pd.isna(row[col])
        }
        return inflector.filter(source)

    if df.empty:
        return pd.Series([], index=df.index, dtype="string")
    return df.apply(_row, axis=1).astype("string")
