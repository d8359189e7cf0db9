from __future__ import annotations
from typing import Any, Callable, Protocol, Union, runtime_checkable

# -------- public types --------

@runtime_checkable
class Filter(Protocol):
    """
    A unit that transforms one value into another or raises.

    `defaults()` sets configuration-independent defaults; the registry calls it on
    every instance it builds.
    """

    def filter(self, value: Any) -> Any:
        ...

    def defaults(self) -> None:
        ...


# Zero-argument call must produce a ready-to-use filter; keyword args are optional
# parameters coming from a call-style reference such as "regex_replace('-', '_')".
FilterFactory = Callable[..., Filter]

# A chain element before resolution: a live filter or a registry reference.
FilterRef = Union[Filter, str]


def is_filter(obj: Any) -> bool:
    # Protocol isinstance checks only look at attributes; reject classes themselves.
    return not isinstance(obj, type) and isinstance(obj, Filter)
