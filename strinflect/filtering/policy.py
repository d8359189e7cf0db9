from __future__ import annotations
from typing import Any

from ..config_model.model import InflectorCfg, RootCfg
from .inflector import Inflector
from .registry import FilterRegistry, compile_filter_registry
from .rules import StaticRule


def build_inflector_from_config(cfg: InflectorCfg, registry: FilterRegistry | None = None) -> Inflector:
    """
    Build an Inflector from an [inflectors.<name>] section.
    Rules are applied in file order, which is also the substitution order.
    """
    inflector = Inflector(
        cfg.target,
        replacement_identifier=cfg.replacement_identifier,
        throw_on_unresolved=cfg.throw_on_unresolved,
        registry=registry,
    )
    for rule in cfg.rules:
        if rule.value is not None:
            inflector.set_static_rule(rule.spec, rule.value)
        else:
            inflector.add_filter_rule(rule.spec, list(rule.filters))
    return inflector


def build_inflectors(root_cfg: RootCfg, registry: FilterRegistry | None = None) -> dict[str, Inflector]:
    # one registry shared by every inflector built from the same config
    if registry is None:
        registry = compile_filter_registry()
    return {
        name: build_inflector_from_config(cfg, registry=registry)
        for name, cfg in root_cfg.inflectors.items()
    }


def describe_rules(inflector: Inflector) -> list[dict[str, Any]]:
    """Plain-data view of the rule stack, in substitution order (for logs and reports)."""
    out: list[dict[str, Any]] = []
    for spec, rule in inflector.rule_stack.stack_order():
        if isinstance(rule, StaticRule):
            out.append({"spec": spec, "kind": "static", "value": rule.value})
        else:
            out.append({"spec": spec, "kind": "chain", "filters": [repr(f) for f in rule.filters]})
    return out
