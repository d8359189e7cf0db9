from __future__ import annotations
from typing import Any, Iterable, Optional, Sequence, Union
import re

from ..errors import ConfigurationError, InputTypeError

__all__ = ["RegexReplace", "parse_flags"]

PatternLike = Union[str, re.Pattern]
FlagsLike = Union[None, str, int, Iterable[str]]


# ----------------------------- helpers ---------------------------------

def parse_flags(flags: FlagsLike) -> int:
    """
    Accepts:
      - None
      - int bitmask (re.*)
      - "IMSXA" (any order, case-insensitive)
      - iterable of one-letter flag strings
    """
    if flags is None:
        return 0
    if isinstance(flags, bool):
        raise ConfigurationError(f"Regex flags must be letters or an re.* bitmask, got {flags!r}")
    if isinstance(flags, int):
        return int(flags)

    if isinstance(flags, str):
        items = list(flags.upper())
    else:
        items = [str(f).upper() for f in flags]

    m = {"I": re.IGNORECASE, "M": re.MULTILINE, "S": re.DOTALL,
         "X": re.VERBOSE, "A": re.ASCII}
    out = 0
    for ch in items:
        if ch not in m:
            raise ConfigurationError(f"Unknown regex flag {ch!r}")
        out |= m[ch]
    return out


def _compile_one(p: PatternLike, flags: int) -> re.Pattern:
    try:
        if isinstance(p, re.Pattern):
            # keep the precompiled flags, OR in ours
            return re.compile(p.pattern, p.flags | flags)
        return re.compile(p, flags)
    except (re.error, ValueError) as e:
        # ValueError: incompatible flag combinations such as ASCII with a str pattern's UNICODE
        raise ConfigurationError(f"Invalid match pattern {getattr(p, 'pattern', p)!r}: {e}") from e


# ----------------------------- filter ---------------------------------

class RegexReplace:
    """
    Multi-pattern regex replacement.

    Patterns run in registration order over the running value, each replacing every
    occurrence. When there are fewer replacements than patterns the last replacement
    is reused for the remaining patterns. Replacement strings are `re` templates, so
    group references (``\\1``, ``\\g<name>``) work.
    """

    def __init__(
        self,
        pattern: Optional[Union[PatternLike, Sequence[PatternLike]]] = None,
        replacement: Optional[Union[str, Sequence[str]]] = None,
        flags: FlagsLike = None,
    ) -> None:
        self._flags = parse_flags(flags)
        self.match_patterns: list[re.Pattern] = []
        self.replacements: list[str] = []
        if pattern is not None:
            if isinstance(pattern, (str, re.Pattern)):
                self.set_match_pattern(pattern)
            else:
                self.set_match_patterns(pattern)
        if replacement is not None:
            if isinstance(replacement, str):
                self.set_replacement(replacement)
            else:
                self.set_replacements(replacement)

    def filter(self, value: Any) -> str:
        if not self.match_patterns:
            raise ConfigurationError("Match pattern is not set")
        if not self.replacements:
            raise ConfigurationError("Replacement is not set")
        if not isinstance(value, str):
            raise InputTypeError(f"Value {value!r} is not a string")

        out = value
        last = len(self.replacements) - 1
        for k, rx in enumerate(self.match_patterns):
            rpl = self.replacements[k] if k <= last else self.replacements[last]
            try:
                out = rx.sub(rpl, out)
            except re.error as e:
                # bad group reference in the template only shows up at sub() time
                raise ConfigurationError(f"Invalid replacement {rpl!r} for {rx.pattern!r}: {e}") from e
        return out

    def defaults(self) -> None:
        return None

    # ---- patterns ----

    def set_match_patterns(self, patterns: Sequence[PatternLike]) -> None:
        self.match_patterns = [_compile_one(p, self._flags) for p in patterns]

    def add_match_patterns(self, patterns: Sequence[PatternLike]) -> None:
        self.match_patterns.extend(_compile_one(p, self._flags) for p in patterns)

    def set_match_pattern(self, pattern: PatternLike) -> None:
        self.match_patterns = [_compile_one(pattern, self._flags)]

    def add_match_pattern(self, pattern: PatternLike) -> None:
        self.match_patterns.append(_compile_one(pattern, self._flags))

    # ---- replacements ----

    def set_replacements(self, replacements: Sequence[str]) -> None:
        self.replacements = [str(r) for r in replacements]

    def add_replacements(self, replacements: Sequence[str]) -> None:
        self.replacements.extend(str(r) for r in replacements)

    def set_replacement(self, replacement: str) -> None:
        self.replacements = [str(replacement)]

    def add_replacement(self, replacement: str) -> None:
        self.replacements.append(str(replacement))

    def __repr__(self) -> str:
        pats = [p.pattern for p in self.match_patterns]
        return f"{type(self).__name__}(patterns={pats!r}, replacements={self.replacements!r})"
