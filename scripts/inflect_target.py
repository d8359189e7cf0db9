from __future__ import annotations
import argparse, sys
from typing import List, Optional

from strinflect.config_model.model import RootCfg
from strinflect.filtering.errors import InflectorError
from strinflect.filtering.policy import build_inflectors, describe_rules
from strinflect.utils.log import get_logger


def _parse_sets(items: List[str]) -> dict[str, str]:
    out: dict[str, str] = {}
    for item in items:
        if "=" not in item:
            raise SystemExit(f"--set expects key=value, got {item!r}")
        k, v = item.split("=", 1)
        out[k.strip()] = v
    return out


def main(argv: Optional[List[str]] = None) -> int:
    ap = argparse.ArgumentParser(description="Resolve an inflector target from config rules.")
    ap.add_argument("--config", default=None, help="TOML config (default: $STRINFLECT_CFG or config/config.toml)")
    ap.add_argument("--inflector", default=None, help="Name of the [inflectors.<name>] section")
    ap.add_argument("--target", default=None, help="Override the configured target")
    ap.add_argument("--set", dest="sets", action="append", default=[], metavar="KEY=VALUE",
                    help="Source value for a spec; repeatable")
    ap.add_argument("--print-config", action="store_true", help="Print the loaded config as TOML and exit")
    args = ap.parse_args(argv)

    cfg = RootCfg.load(args.config)
    log = get_logger("strinflect", cfg.logging.level, cfg.logging.structured_json, stream=sys.stderr)

    if args.print_config:
        print(cfg.to_toml())
        return 0

    if not args.inflector:
        ap.error(f"--inflector is required; configured: {sorted(cfg.inflectors)}")
    if args.inflector not in cfg.inflectors:
        ap.error(f"unknown inflector {args.inflector!r}; configured: {sorted(cfg.inflectors)}")

    try:
        inflector = build_inflectors(cfg)[args.inflector]
        if args.target is not None:
            inflector.set_target(args.target)
        source = _parse_sets(args.sets)
        log.info("inflect_start", extra={"inflector": args.inflector, "rules": describe_rules(inflector)})
        result = inflector.filter(source)
    except InflectorError as e:
        log.error("inflect_failed", extra={"inflector": args.inflector, "error": str(e)})
        return 2

    log.info("inflect_done", extra={"inflector": args.inflector, "result": result})
    print(result)
    return 0


if __name__ == "__main__":
    sys.exit(main())
