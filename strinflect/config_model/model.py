from __future__ import annotations
from typing import Dict, List, Optional
from pathlib import Path
import os
from pydantic import (
    BaseModel,
    ConfigDict,
    Field,
    field_validator,
    model_validator,
)
from tomlkit import document, dumps, table, aot


# ---------- Leaf models ----------

class LoggingCfg(BaseModel):
    level: str = "INFO"
    structured_json: bool = True


class RuleCfg(BaseModel):
    """
    One rule binding. Exactly one of `value` (static rule) or `filters`
    (filter chain, by name or call-style reference) is set.
    """
    spec: str
    value: Optional[str] = None
    filters: List[str] = []

    @model_validator(mode="after")
    def _one_kind(self):
        if self.value is None and not self.filters:
            raise ValueError(f"rule {self.spec!r} needs either 'value' or 'filters'")
        if self.value is not None and self.filters:
            raise ValueError(f"rule {self.spec!r} cannot have both 'value' and 'filters'")
        return self


class InflectorCfg(BaseModel):
    # allow alias-based population so camelCase keys from older configs still work
    model_config = ConfigDict(populate_by_name=True)

    target: str = ""
    replacement_identifier: str = Field(":", alias="targetReplacementIdentifier")
    throw_on_unresolved: bool = Field(True, alias="throwTargetExceptionsOn")
    rules: List[RuleCfg] = []

    @field_validator("replacement_identifier")
    @classmethod
    def _identifier_not_empty(cls, v: str) -> str:
        if not v:
            raise ValueError("replacement_identifier must not be empty")
        return v


# ---------- Root ----------

class RootCfg(BaseModel):
    model_config = ConfigDict(extra="ignore")

    logging: LoggingCfg = LoggingCfg()
    inflectors: Dict[str, InflectorCfg] = {}

    @classmethod
    def from_toml(cls, path: str | os.PathLike[str]) -> "RootCfg":
        try:
            import tomllib  # py>=3.11
        except Exception:
            import tomli as tomllib

        p = Path(path)

        def _parse_raw_dict() -> dict:
            # 1) Try normal binary parse
            try:
                with p.open("rb") as f:
                    return tomllib.load(f)
            except tomllib.TOMLDecodeError:
                pass

            # 2) Retry: decode with utf-8-sig (strips BOM), strip accidental wrappers, then loads()
            text = p.read_text(encoding="utf-8-sig", errors="replace")
            cleaned = text.strip()
            if cleaned.startswith("```"):
                # Trim leading and trailing fences if present
                cleaned = cleaned.lstrip("`").strip()
                if cleaned.startswith("toml"):
                    cleaned = cleaned[len("toml"):]
                if cleaned.endswith("```"):
                    cleaned = cleaned.rstrip("`").strip()

            cleaned = cleaned.lstrip("\uFEFF\u200B\u200C\u200D\u2060")

            try:
                return tomllib.loads(cleaned)
            except Exception as e:
                # Surface a helpful message including first 80 chars for diagnostics
                snippet = cleaned[:80].replace("\n", "\\n")
                raise RuntimeError(
                    f"Failed to parse TOML at {p} after BOM/cleanup. "
                    f"First chars: {snippet!r}"
                ) from e

        raw = _parse_raw_dict()
        raw.setdefault("logging", {})
        raw.setdefault("inflectors", {})
        return cls.model_validate(raw)

    @classmethod
    def load(cls, path: str | None = None) -> "RootCfg":
        final = Path(path or os.environ.get("STRINFLECT_CFG", "config/config.toml")).resolve()
        return cls.from_toml(final)

    def to_toml(self) -> str:
        doc = document()

        log_tbl = table()
        log_tbl.add("level", self.logging.level)
        log_tbl.add("structured_json", self.logging.structured_json)
        doc.add("logging", log_tbl)

        inflectors = table()
        for name, inf in self.inflectors.items():
            tbl = table()
            tbl.add("target", inf.target)
            tbl.add("replacement_identifier", inf.replacement_identifier)
            tbl.add("throw_on_unresolved", inf.throw_on_unresolved)
            rules = aot()
            for r in inf.rules:
                item = table()
                item.add("spec", r.spec)
                if r.value is not None:
                    item.add("value", r.value)
                else:
                    item.add("filters", list(r.filters))
                rules.append(item)
            if inf.rules:
                tbl.add("rules", rules)
            inflectors.add(name, tbl)
        doc.add("inflectors", inflectors)
        return dumps(doc)


def load_config(path: str | None = None) -> RootCfg:
    return RootCfg.load(path)
