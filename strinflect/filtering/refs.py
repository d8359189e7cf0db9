from __future__ import annotations
from dataclasses import dataclass, field
from typing import Any, Sequence

from .errors import ConfigurationError

# -------- public types --------

@dataclass(frozen=True)
class FilterCall:
    """A parsed filter reference: `name` or `name(args...)`."""
    name: str
    args: tuple[Any, ...] = ()
    kwargs: dict[str, Any] = field(default_factory=dict)

    def bind(self, positional: Sequence[str]) -> dict[str, Any]:
        """Map positional args onto `positional` names; keywords win on conflict."""
        if len(self.args) > len(positional):
            raise ConfigurationError(
                f"{self.name}() takes {len(positional)} positional argument(s), got {len(self.args)}"
            )
        params = dict(zip(positional, self.args))
        params.update(self.kwargs)
        return params


# -------- tokenizer --------

class Tok:
    __slots__ = ("typ", "val", "pos")
    def __init__(self, typ: str, val: Any, pos: int) -> None:
        self.typ, self.val, self.pos = typ, val, pos
    def __repr__(self) -> str:
        return f"Tok({self.typ!r},{self.val!r}@{self.pos})"

_WHITESPACE = set(" \t\r\n")
_DIG = set("0123456789")
_ID0 = set("_abcdefghijklmnopqrstuvwxyzABCDEFGHIJKLMNOPQRSTUVWXYZ")
_IDN = _ID0.union(_DIG)
_PUNCT = {"(": "LP", ")": "RP", ",": "COMMA", "=": "EQ", "[": "LB", "]": "RB"}


def _read_while(s: str, i: int, pred) -> tuple[str, int]:
    j = i
    n = len(s)
    while j < n and pred(s[j]):
        j += 1
    return s[i:j], j


def _read_string(s: str, i: int) -> tuple[str, int]:
    quote = s[i]
    i += 1
    out = []
    n = len(s)
    esc = False
    while i < n:
        ch = s[i]; i += 1
        if esc:
            if ch == "n":
                out.append("\n")
            elif ch == "t":
                out.append("\t")
            elif ch in ("\\", '"', "'"):
                out.append(ch)
            else:
                # unknown escapes stay as written so regex text survives: '\d' -> \d
                out.append("\\" + ch)
            esc = False
        elif ch == "\\":
            esc = True
        elif ch == quote:
            return "".join(out), i
        else:
            out.append(ch)
    raise ConfigurationError("Unterminated string literal")


def _read_number(s: str, i: int) -> tuple[int | float, int]:
    j = i
    n = len(s)
    if j < n and s[j] == "-":
        j += 1
    ints, j = _read_while(s, j, lambda c: c in _DIG)
    if ints == "":
        raise ConfigurationError(f"Invalid number at {i}")
    if j < n and s[j] == ".":
        j += 1
        frac, j = _read_while(s, j, lambda c: c in _DIG)
        if frac == "":
            raise ConfigurationError(f"Invalid float at {i}")
        return float(s[i:j]), j
    return int(s[i:j]), j


def _tokenize(text: str) -> list[Tok]:
    s = text
    i, n = 0, len(s)
    toks: list[Tok] = []
    while i < n:
        ch = s[i]
        if ch in _WHITESPACE:
            i += 1; continue
        if ch in _PUNCT:
            toks.append(Tok(_PUNCT[ch], ch, i)); i += 1; continue

        if ch in ("'", '"'):
            val, j = _read_string(s, i)
            toks.append(Tok("STR", val, i)); i = j; continue

        if ch in _DIG or (ch == "-" and i + 1 < n and s[i + 1] in _DIG):
            val, j = _read_number(s, i)
            toks.append(Tok("NUM", val, i)); i = j; continue

        if ch in _ID0:
            raw, j = _read_while(s, i, lambda c: c in _IDN)
            low = raw.lower()
            if low in ("true", "false"):
                toks.append(Tok("BOOL", low == "true", i))
            elif low in ("none", "null"):
                toks.append(Tok("NONE", None, i))
            else:
                toks.append(Tok("ID", raw, i))
            i = j; continue

        raise ConfigurationError(f"Unexpected character {ch!r} at position {i}")
    toks.append(Tok("EOF", None, n))
    return toks


# -------- parser --------

class _Parser:
    def __init__(self, toks: list[Tok]) -> None:
        self.t = toks; self.i = 0

    def peek(self) -> Tok:
        return self.t[self.i]

    def eat(self, typ: str | None = None) -> Tok:
        tok = self.peek()
        if typ and tok.typ != typ:
            raise ConfigurationError(f"Expected {typ}, got {tok.typ} at {tok.pos}")
        self.i += 1
        return tok

    def parse(self) -> FilterCall:
        # name [ '(' args? ')' ]
        name = self.eat("ID").val
        if self.peek().typ == "EOF":
            return FilterCall(name)
        self.eat("LP")
        pos_args: list[Any] = []
        kw_args: dict[str, Any] = {}
        if self.peek().typ != "RP":
            while True:
                if self.peek().typ == "ID":
                    key = self.eat("ID").val
                    self.eat("EQ")
                    if key in kw_args:
                        raise ConfigurationError(f"Duplicate keyword argument {key!r}")
                    kw_args[key] = self.parse_value()
                else:
                    if kw_args:
                        raise ConfigurationError("Positional argument follows keyword argument")
                    pos_args.append(self.parse_value())
                if self.peek().typ == "COMMA":
                    self.eat("COMMA"); continue
                break
        self.eat("RP")
        self.eat("EOF")
        return FilterCall(name, tuple(pos_args), kw_args)

    def parse_value(self) -> Any:
        tok = self.peek()
        if tok.typ in ("STR", "NUM", "BOOL", "NONE"):
            return self.eat().val
        if tok.typ == "LB":
            return self.parse_list()
        raise ConfigurationError(f"Unexpected token {tok} in value")

    def parse_list(self) -> list[Any]:
        self.eat("LB")
        items: list[Any] = []
        if self.peek().typ != "RB":
            while True:
                items.append(self.parse_value())
                if self.peek().typ == "COMMA":
                    self.eat("COMMA"); continue
                break
        self.eat("RB")
        return items


def parse_filter_ref(expr: str) -> FilterCall:
    """
    Parse a filter reference like:
      'string_to_lower'
      'regex_replace("-", "_")'
      'regex_replace(pattern=["a", "b"], replacement="x", flags="I")'
      'Word_SeparatorToSeparator(" ", "-")'

    Strings, numbers, booleans, none/null and list literals are accepted as
    arguments; bare identifiers are only allowed as keyword names.
    """
    if not isinstance(expr, str) or not expr.strip():
        raise ConfigurationError(f"Empty filter reference {expr!r}")
    return _Parser(_tokenize(expr.strip())).parse()
