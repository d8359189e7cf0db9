from __future__ import annotations

# -------- error taxonomy --------

class InflectorError(Exception):
    """Base class for every error raised by the filtering engine."""


class InputTypeError(InflectorError, TypeError):
    """A value of the wrong shape reached a filter or the inflector."""


class ConfigurationError(InflectorError, ValueError):
    """A filter, rule or reference is not configured well enough to run."""


class UnresolvedPlaceholderError(InflectorError, LookupError):
    def __init__(self, identifier: str, spec: str, partial: str) -> None:
        self.identifier = identifier
        self.spec = spec
        self.partial = partial
        super().__init__(
            f"A replacement identifier {identifier!r} was found inside the inflected target "
            f"for spec {spec!r}, perhaps a rule was not satisfied with a target source? "
            f"Unsatisfied inflected target: {partial!r}"
        )


class RegistryLookupError(InflectorError, KeyError):
    def __init__(self, name: str) -> None:
        self.name = name
        super().__init__(name)

    def __str__(self) -> str:
        return f"Unknown filter {self.name!r}"
