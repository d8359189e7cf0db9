from __future__ import annotations
from dataclasses import dataclass
from typing import Iterator, Sequence
import logging

from .base import Filter, FilterFactory, is_filter
from .errors import ConfigurationError, InflectorError, RegistryLookupError
from .refs import parse_filter_ref

log = logging.getLogger(__name__)


@dataclass(frozen=True)
class _Entry:
    factory: FilterFactory
    params: tuple[str, ...] = ()


# -------- registry --------

class FilterRegistry:
    """
    Name -> zero-argument filter constructor.

    Written once per filter variant at start-up, read whenever a rule references a
    filter by name. Re-registering a name overwrites the previous entry.
    """

    def __init__(self) -> None:
        self._entries: dict[str, _Entry] = {}

    def register(self, name: str, factory: FilterFactory, *, params: Sequence[str] = ()) -> None:
        """
        `params` names the keyword arguments that positional arguments of a call-style
        reference map onto, e.g. ("pattern", "replacement") for regex_replace.
        """
        if not name or not isinstance(name, str):
            raise ConfigurationError(f"Filter name must be a non-empty string, got {name!r}")
        if not callable(factory):
            raise ConfigurationError(f"Factory for {name!r} is not callable")
        if name in self._entries:
            log.debug("registry_overwrite", extra={"filter": name})
        self._entries[name] = _Entry(factory, tuple(params))

    def resolve(self, name: str, **params) -> Filter:
        entry = self._entries.get(name)
        if entry is None:
            raise RegistryLookupError(name)
        try:
            flt = entry.factory(**params)
        except InflectorError:
            raise
        except TypeError as e:
            raise ConfigurationError(f"Cannot build filter {name!r} with {params!r}: {e}") from e
        if not is_filter(flt):
            raise ConfigurationError(f"Factory for {name!r} returned {type(flt).__name__}, not a filter")
        flt.defaults()
        return flt

    def resolve_ref(self, expr: str) -> Filter:
        """Resolve `name` or a call-style reference `name(arg, key=value)`."""
        call = parse_filter_ref(expr)
        entry = self._entries.get(call.name)
        if entry is None:
            raise RegistryLookupError(call.name)
        return self.resolve(call.name, **call.bind(entry.params))

    def names(self) -> list[str]:
        return list(self._entries)

    def __contains__(self, name: object) -> bool:
        return name in self._entries

    def __iter__(self) -> Iterator[str]:
        return iter(self._entries)

    def __len__(self) -> int:
        return len(self._entries)


def compile_filter_registry() -> FilterRegistry:
    """
    Fresh registry holding every built-in filter.
    Add your plug-ins with `registry.register(...)`.
    """
    from .filters_builtin.string_case import StringToLower
    from .filters_builtin.regex_replace import RegexReplace
    from .filters_builtin.word import (
        SeparatorToSeparator,
        SeparatorToUnderscore,
        UnderscoreToSeparator,
        CamelCaseToSeparator,
        CamelCaseToDash,
    )
    from .filters_builtin.text_norm import TextNormalize, Slugify
    from .inflector import Inflector

    # name -> (factory, positional param names)
    builtins: dict[str, tuple[FilterFactory, tuple[str, ...]]] = {
        "string_to_lower": (StringToLower, ()),
        "regex_replace":   (RegexReplace, ("pattern", "replacement", "flags")),

        # Word inflection
        "word_separator_to_separator":  (SeparatorToSeparator, ("search_separator", "replacement_separator")),
        "word_separator_to_underscore": (SeparatorToUnderscore, ("search_separator",)),
        "word_underscore_to_separator": (UnderscoreToSeparator, ("replacement_separator",)),
        "word_camel_case_to_separator": (CamelCaseToSeparator, ("separator",)),
        "word_camel_case_to_dash":      (CamelCaseToDash, ()),

        # Text
        "text_normalize": (TextNormalize, ("strip", "lower")),
        "slugify":        (Slugify, ("separator", "lowercase")),

        "inflector": (Inflector, ("target",)),
    }

    # Back-compat aliases (names used by older rule sets)
    aliases = {
        "StringToLower": "string_to_lower",
        "RegexpReplace": "regex_replace",
        "Word_SeparatorToSeparator": "word_separator_to_separator",
        "Word_SeparatorToUnderscore": "word_separator_to_underscore",
        "Word_UnderscoreToSeparator": "word_underscore_to_separator",
        "Word_CamelCaseToSeparator": "word_camel_case_to_separator",
        "Word_CamelCaseToDash": "word_camel_case_to_dash",
        "TextNormalize": "text_normalize",
        "Slugify": "slugify",
        "Inflector": "inflector",
    }

    registry = FilterRegistry()
    for name, (factory, params) in builtins.items():
        registry.register(name, factory, params=params)
    for alias, target in aliases.items():
        factory, params = builtins[target]
        registry.register(alias, factory, params=params)
    return registry
