from __future__ import annotations
from typing import TYPE_CHECKING, Any, Iterable, Mapping, Sequence, Union
import logging
import re

from .base import Filter, FilterRef, is_filter
from .errors import ConfigurationError, InputTypeError, UnresolvedPlaceholderError
from .rules import ChainRule, Rule, RuleStack, StaticRule

if TYPE_CHECKING:
    from ..config_model.model import InflectorCfg
    from .registry import FilterRegistry

log = logging.getLogger(__name__)

# markers stripped from the front of every spec and source key
_SPEC_MARKERS = ":&"

RuleSet = Union[FilterRef, Sequence[FilterRef]]
RuleBindings = Union[Mapping[str, Any], Iterable[tuple[str, Any]]]


def _escape_backrefs(part: str) -> str:
    # doubled so the value is never read as a group reference by re.sub
    return part.replace("\\", "\\\\")


def _pairs(bindings: RuleBindings) -> Iterable[tuple[str, Any]]:
    if isinstance(bindings, Mapping):
        return bindings.items()
    return bindings


class Inflector:
    """
    Resolve a target template such as ":module/:controller/:action" into a string.

    Rules live in an ordered `RuleStack`; each spec is bound either to a static value
    or to a filter chain. `filter(source)` walks the stack in insertion order, queues
    one substitution per satisfied spec and applies them one after the other to an
    accumulating result seeded from the target. Later substitutions therefore see
    the text produced by earlier ones.
    """

    def __init__(
        self,
        target: str = "",
        *,
        replacement_identifier: str = ":",
        throw_on_unresolved: bool = True,
        rules: RuleStack | None = None,
        registry: FilterRegistry | None = None,
    ) -> None:
        self._target = ""
        self._replacement_identifier = ":"
        self.set_target(target)
        self.set_replacement_identifier(replacement_identifier)
        self.throw_on_unresolved = bool(throw_on_unresolved)
        self._rules = rules if rules is not None else RuleStack()
        self._registry = registry

    # ---- configuration ----

    @property
    def target(self) -> str:
        return self._target

    @target.setter
    def target(self, value: str) -> None:
        self.set_target(value)

    def set_target(self, target: str) -> Inflector:
        if not isinstance(target, str):
            raise InputTypeError(f"Target must be a string, got {type(target).__name__}")
        self._target = target
        return self

    def get_target(self) -> str:
        return self._target

    @property
    def replacement_identifier(self) -> str:
        return self._replacement_identifier

    @replacement_identifier.setter
    def replacement_identifier(self, value: str) -> None:
        self.set_replacement_identifier(value)

    def set_replacement_identifier(self, value: str) -> Inflector:
        if not isinstance(value, str) or not value:
            raise ConfigurationError(f"Replacement identifier must be a non-empty string, got {value!r}")
        self._replacement_identifier = value
        return self

    def get_replacement_identifier(self) -> str:
        return self._replacement_identifier

    @property
    def rule_stack(self) -> RuleStack:
        return self._rules

    @property
    def registry(self) -> FilterRegistry:
        if self._registry is None:
            from .registry import compile_filter_registry
            self._registry = compile_filter_registry()
        return self._registry

    @classmethod
    def from_config(cls, cfg: InflectorCfg, registry: FilterRegistry | None = None) -> Inflector:
        from .policy import build_inflector_from_config
        return build_inflector_from_config(cfg, registry=registry)

    # ---- rules ----

    def normalize_spec(self, spec: str) -> str:
        if not isinstance(spec, str):
            raise InputTypeError(f"Spec must be a string, got {type(spec).__name__}")
        return spec.lstrip(_SPEC_MARKERS + self._replacement_identifier[0])

    def set_rules(self, rules: RuleBindings) -> Inflector:
        self.clear_rules()
        return self.add_rules(rules)

    def add_rules(self, rules: RuleBindings) -> Inflector:
        """
        Keys starting with the identifier's marker (":controller") are filter rules,
        anything else ("suffix") is a static rule whose value must be a string.
        """
        marker = self._replacement_identifier[0]
        for spec, rule in _pairs(rules):
            if not isinstance(spec, str):
                raise InputTypeError(f"Rule key must be a string, got {type(spec).__name__}")
            if spec[:1] == marker:
                self.add_filter_rule(spec, rule)
            else:
                self.set_static_rule(spec, rule)
        return self

    def rules(self) -> dict[str, Rule]:
        return self._rules.rules()

    def spec_rules(self, spec: str) -> Rule | None:
        if not spec:
            return None
        return self._rules.spec_rules(self.normalize_spec(spec))

    def rule(self, spec: str, index: int) -> Filter | None:
        return self._rules.rule(self.normalize_spec(spec), index)

    def set_filter_rule(self, spec: str, rule_set: RuleSet) -> Inflector:
        self._rules.set_rule(self.normalize_spec(spec), self._resolve_rule_set(rule_set))
        return self

    def add_filter_rule(self, spec: str, rule_set: RuleSet) -> Inflector:
        self._rules.add_rule(self.normalize_spec(spec), self._resolve_rule_set(rule_set))
        return self

    def set_static_rule(self, spec: str, value: str) -> Inflector:
        if not isinstance(value, str):
            raise InputTypeError(f"Static rule for {spec!r} must be a string, got {type(value).__name__}")
        self._rules.set_static_rule(self.normalize_spec(spec), value)
        return self

    def clear_rules(self) -> Inflector:
        self._rules.clear_rules()
        return self

    def _resolve_rule_set(self, rule_set: RuleSet) -> list[Filter]:
        if isinstance(rule_set, str) or is_filter(rule_set):
            items: list[Any] = [rule_set]
        elif isinstance(rule_set, (list, tuple)):
            items = list(rule_set)
        else:
            raise InputTypeError(f"Invalid rule type {type(rule_set).__name__!r}")

        out: list[Filter] = []
        for item in items:
            if is_filter(item):
                out.append(item)
            elif isinstance(item, str):
                out.append(self.registry.resolve_ref(item))
            else:
                raise InputTypeError(f"Invalid rule type {type(item).__name__!r}")
        return out

    # ---- filtering ----

    def filter(self, source: Any) -> str:
        if not isinstance(source, Mapping):
            raise InputTypeError(f"Bad source {source!r}")
        values: dict[str, str] = {}
        for name, val in source.items():
            if not isinstance(name, str) or not isinstance(val, str):
                raise InputTypeError(f"Bad source entry {name!r}: {val!r}, expected str -> str")
            values[self.normalize_spec(name)] = val

        quoted_identifier = re.escape(self._replacement_identifier)
        parts: list[tuple[str, str]] = []
        unsatisfied: list[str] = []

        for spec, rule in self._rules.stack_order():
            if spec in values:
                if isinstance(rule, StaticRule):
                    # source value overrides the static default
                    part = values[spec]
                else:
                    part = self._run_chain(spec, rule, values[spec])
                parts.append((spec, _escape_backrefs(part)))
            elif isinstance(rule, StaticRule):
                parts.append((spec, _escape_backrefs(rule.value)))
            else:
                unsatisfied.append(spec)

        inflected = self._target
        for spec, part in parts:
            try:
                rx = re.compile(quoted_identifier + spec)
            except re.error:
                if self.throw_on_unresolved:
                    raise UnresolvedPlaceholderError(self._replacement_identifier, spec, inflected) from None
                log.warning("placeholder_skipped", extra={"spec": spec, "target": self._target})
                continue
            inflected = rx.sub(part, inflected)

        for spec in unsatisfied:
            self._check_unsatisfied(quoted_identifier, spec, inflected)

        return inflected

    def _run_chain(self, spec: str, rule: ChainRule, value: str) -> str:
        out = rule.apply(value)
        if not isinstance(out, str):
            raise InputTypeError(f"Filter chain for {spec!r} returned {type(out).__name__}, not a string")
        return out

    def _check_unsatisfied(self, quoted_identifier: str, spec: str, inflected: str) -> None:
        try:
            left = re.search(quoted_identifier + spec, inflected) is not None
        except re.error:
            # spec is not a valid pattern; only a literal leftover counts
            left = (self._replacement_identifier + spec) in inflected
        if not left:
            return
        if self.throw_on_unresolved:
            raise UnresolvedPlaceholderError(self._replacement_identifier, spec, inflected)
        log.debug("placeholder_unresolved", extra={"spec": spec, "target": self._target})

    def defaults(self) -> None:
        return None

    def __repr__(self) -> str:
        return (
            f"Inflector(target={self._target!r}, "
            f"replacement_identifier={self._replacement_identifier!r}, "
            f"throw_on_unresolved={self.throw_on_unresolved}, rules={len(self._rules)})"
        )
