from __future__ import annotations

# Public API re-exports (keep small & stable)
from .errors import (
    InflectorError,
    InputTypeError,
    ConfigurationError,
    UnresolvedPlaceholderError,
    RegistryLookupError,
)
from .base import Filter, FilterFactory, FilterRef
from .rules import StaticRule, ChainRule, Rule, RuleStack
from .registry import FilterRegistry, compile_filter_registry
from .inflector import Inflector
from .filters_builtin.string_case import StringToLower
from .filters_builtin.regex_replace import RegexReplace
