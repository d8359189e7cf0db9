from __future__ import annotations
from typing import Any

from ..errors import InputTypeError

__all__ = ["StringToLower"]


class StringToLower:
    def filter(self, value: Any) -> str:
        if isinstance(value, str):
            return value.lower()
        raise InputTypeError(f"Value {value!r} is not a string")

    def defaults(self) -> None:
        return None

    def __repr__(self) -> str:
        return "StringToLower()"
