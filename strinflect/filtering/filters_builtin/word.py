from __future__ import annotations
import re

from .regex_replace import RegexReplace

__all__ = [
    "Separator",
    "SeparatorToSeparator",
    "SeparatorToUnderscore",
    "UnderscoreToSeparator",
    "CamelCaseToSeparator",
    "CamelCaseToDash",
]


def _literal_template(text: str) -> str:
    """Make `text` safe to embed in an `re` replacement template."""
    return text.replace("\\", "\\\\")


# ----------------------------- separator family ---------------------------------

class Separator(RegexReplace):
    """Base for word filters that carry a single separator."""

    def __init__(self, separator: str = " ") -> None:
        super().__init__()
        self.separator = str(separator)
        self.defaults()

    def set_separator(self, separator: str) -> None:
        self.separator = str(separator)
        self.defaults()


class SeparatorToSeparator(RegexReplace):
    def __init__(self, search_separator: str = " ", replacement_separator: str = "-") -> None:
        super().__init__()
        self.search_separator = str(search_separator)
        self.replacement_separator = str(replacement_separator)
        self.defaults()

    def defaults(self) -> None:
        # rebuilt from the current separators, so calling it again is harmless
        self.set_match_pattern(re.escape(self.search_separator))
        self.set_replacement(_literal_template(self.replacement_separator))

    def set_search_separator(self, separator: str) -> None:
        self.search_separator = str(separator)
        self.set_match_pattern(re.escape(self.search_separator))

    def set_replacement_separator(self, separator: str) -> None:
        self.replacement_separator = str(separator)
        self.set_replacement(_literal_template(self.replacement_separator))


class SeparatorToUnderscore(SeparatorToSeparator):
    def __init__(self, search_separator: str = " ") -> None:
        super().__init__(search_separator, "_")


class UnderscoreToSeparator(SeparatorToSeparator):
    def __init__(self, replacement_separator: str = " ") -> None:
        super().__init__("_", replacement_separator)


# ----------------------------- camel case ---------------------------------

# "HTMLParser" -> "HTML<sep>Parser", then "userAccount2Id" -> "user<sep>Account2<sep>Id"
_CAMEL_PATTERNS = (
    r"([A-Z]+)([A-Z][a-z])",
    r"([a-z0-9])([A-Z])",
)


class CamelCaseToSeparator(Separator):
    def defaults(self) -> None:
        self.set_match_patterns(_CAMEL_PATTERNS)
        sep = _literal_template(self.separator)
        self.set_replacements([rf"\g<1>{sep}\g<2>"] * len(_CAMEL_PATTERNS))


class CamelCaseToDash(CamelCaseToSeparator):
    def __init__(self) -> None:
        super().__init__("-")
