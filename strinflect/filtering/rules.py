from __future__ import annotations
from dataclasses import dataclass
from typing import Any, Iterable, Iterator, Mapping, Sequence, Union

from .base import Filter
from .errors import ConfigurationError, InputTypeError

# -------- rule variants --------

@dataclass(frozen=True)
class StaticRule:
    value: str


@dataclass(frozen=True)
class ChainRule:
    filters: tuple[Filter, ...]

    def __len__(self) -> int:
        return len(self.filters)

    def apply(self, value: Any) -> Any:
        # each filter's output is the next filter's input
        out = value
        for flt in self.filters:
            out = flt.filter(out)
        return out


Rule = Union[StaticRule, ChainRule]

Bindings = Union[Mapping[str, Rule], Iterable[tuple[str, Rule]]]


def _iter_bindings(bindings: Bindings) -> Iterator[tuple[str, Any]]:
    if isinstance(bindings, Mapping):
        yield from bindings.items()
        return
    for pair in bindings:
        try:
            spec, rule = pair
        except (TypeError, ValueError) as e:
            raise InputTypeError(f"Rule binding must be a (spec, rule) pair, got {pair!r}") from e
        yield spec, rule


def _check_spec(spec: Any) -> str:
    if not isinstance(spec, str):
        raise InputTypeError(f"Rule spec must be a string, got {type(spec).__name__}")
    if not spec:
        raise ConfigurationError("Rule spec must not be empty")
    return spec


# -------- stack --------

class RuleStack:
    """
    Ordered spec -> rule bindings.

    Positions are handed out in insertion order and never reused until the stack is
    cleared; `_ref` (spec -> position) and `_backref` (position -> spec) are kept as
    exact inverses. Insertion order is the substitution order used by the inflector.
    """

    def __init__(self, bindings: Bindings | None = None) -> None:
        self._stack: list[Rule | None] = []
        self._ref: dict[str, int] = {}
        self._backref: dict[int, str] = {}
        if bindings is not None:
            self.add_rules(bindings)

    # ---- bulk ----

    def set_rules(self, bindings: Bindings) -> RuleStack:
        self.clear_rules()
        return self.add_rules(bindings)

    def add_rules(self, bindings: Bindings) -> RuleStack:
        for spec, rule in _iter_bindings(bindings):
            if isinstance(rule, StaticRule):
                self.set_static_rule(spec, rule.value)
            elif isinstance(rule, ChainRule):
                self.add_rule(spec, rule.filters)
            else:
                raise InputTypeError(
                    f"Rule for spec {spec!r} must be a StaticRule or ChainRule, got {type(rule).__name__}"
                )
        return self

    def clear_rules(self) -> RuleStack:
        self._stack = []
        self._ref = {}
        self._backref = {}
        return self

    # ---- single spec ----

    def set_rule(self, spec: str, filters: Sequence[Filter]) -> RuleStack:
        spec = _check_spec(spec)
        filters = tuple(filters)
        if not filters:
            raise ConfigurationError(f"Filter chain for spec {spec!r} must not be empty")
        if spec in self._ref:
            # drop the content, keep the position
            self._stack[self._ref[spec]] = None
        return self.add_rule(spec, filters)

    def add_rule(self, spec: str, filters: Sequence[Filter]) -> RuleStack:
        spec = _check_spec(spec)
        new = tuple(filters)
        idx = self._ref.get(spec)
        if idx is None:
            if not new:
                raise ConfigurationError(f"Filter chain for spec {spec!r} must not be empty")
            self._append(spec, ChainRule(new))
            return self

        current = self._stack[idx]
        # a static value has no chain to extend, start a fresh one in place
        old = current.filters if isinstance(current, ChainRule) else ()
        if not old and not new:
            raise ConfigurationError(f"Filter chain for spec {spec!r} must not be empty")
        self._stack[idx] = ChainRule(old + new)
        return self

    def set_static_rule(self, spec: str, value: str) -> RuleStack:
        spec = _check_spec(spec)
        if not isinstance(value, str):
            raise InputTypeError(f"Static rule for spec {spec!r} must be a string, got {type(value).__name__}")
        idx = self._ref.get(spec)
        if idx is None:
            self._append(spec, StaticRule(value))
        else:
            self._stack[idx] = StaticRule(value)
        return self

    def _append(self, spec: str, rule: Rule) -> None:
        self._stack.append(rule)
        idx = len(self._stack) - 1
        self._ref[spec] = idx
        self._backref[idx] = spec

    # ---- reads ----

    def stack_order(self) -> list[tuple[str, Rule]]:
        out: list[tuple[str, Rule]] = []
        for idx, rule in enumerate(self._stack):
            spec = self._backref.get(idx)
            if spec is None or rule is None:
                continue
            out.append((spec, rule))
        return out

    def stack_spec(self, index: int) -> str | None:
        return self._backref.get(index)

    def spec_rules(self, spec: str) -> Rule | None:
        idx = self._ref.get(spec)
        return None if idx is None else self._stack[idx]

    def rule(self, spec: str, index: int) -> Filter | None:
        rule = self.spec_rules(spec)
        if not isinstance(rule, ChainRule):
            return None
        if 0 <= index < len(rule.filters):
            return rule.filters[index]
        return None

    def rules(self) -> dict[str, Rule]:
        return dict(self.stack_order())

    def __len__(self) -> int:
        return len(self.stack_order())

    def __contains__(self, spec: object) -> bool:
        return spec in self._ref

    def __iter__(self) -> Iterator[tuple[str, Rule]]:
        return iter(self.stack_order())

    def __repr__(self) -> str:
        return f"RuleStack({self.stack_order()!r})"
