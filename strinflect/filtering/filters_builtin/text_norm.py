from __future__ import annotations
from typing import Any
import re
import unicodedata

from slugify import slugify as _slugify

from ..errors import InputTypeError

__all__ = ["TextNormalize", "Slugify", "normalize_text"]

_CONTROL_RE = re.compile(r"[\x00-\x08\x0B-\x0C\x0E-\x1F\x7F]")
_WHITESPACE_RE = re.compile(r"\s+")

_FANCY_TRANSLATE = {
    ord("\u2018"): "'",
    ord("\u2019"): "'",
    ord("\u201C"): '"',
    ord("\u201D"): '"',
    ord("\u2013"): "-",
    ord("\u2014"): "-",
    ord("\u2212"): "-",
    ord("\u00A0"): " ",
}


def _require_str(value: Any) -> str:
    if not isinstance(value, str):
        raise InputTypeError(f"Value {value!r} is not a string")
    return value


def normalize_text(s: str, *, strip: bool = True, lower: bool = False) -> str:
    s = unicodedata.normalize("NFKC", s)
    s = s.translate(_FANCY_TRANSLATE)
    s = _CONTROL_RE.sub("", s)
    s = _WHITESPACE_RE.sub(" ", s)
    if strip:
        s = s.strip()
    if lower:
        s = s.lower()
    return s


class TextNormalize:
    """NFKC + ASCII punctuation + collapsed whitespace; optional strip/lower."""

    def __init__(self, strip: bool = True, lower: bool = False) -> None:
        self.strip = bool(strip)
        self.lower = bool(lower)

    def filter(self, value: Any) -> str:
        return normalize_text(_require_str(value), strip=self.strip, lower=self.lower)

    def defaults(self) -> None:
        return None

    def __repr__(self) -> str:
        return f"TextNormalize(strip={self.strip}, lower={self.lower})"


class Slugify:
    def __init__(self, separator: str = "-", lowercase: bool = True) -> None:
        self.separator = str(separator)
        self.lowercase = bool(lowercase)

    def filter(self, value: Any) -> str:
        return _slugify(_require_str(value), lowercase=self.lowercase, separator=self.separator)

    def defaults(self) -> None:
        return None

    def __repr__(self) -> str:
        return f"Slugify(separator={self.separator!r}, lowercase={self.lowercase})"
