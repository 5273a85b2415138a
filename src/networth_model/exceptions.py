# Copyright 2025 Spencer Williams
#
# Use of this source code is governed by an MIT license:
# https://github.com/sw23/life-model/blob/main/LICENSE

"""
Exceptions raised by the projection and simulation engines.

Insufficient history and depleted simulation paths are modelled outcomes
and never raise. Errors are reserved for caller contract violations such
as an allocation that does not sum to 100% or a simulation with no runs.
"""

from typing import Any, Dict, Optional


class NetWorthModelError(Exception):
    """Base class for all errors raised by this package.

    Attributes:
        message: Human-readable error description
        details: Extra context (offending field, value, ...)
    """

    def __init__(self, message: str, *, details: Optional[Dict[str, Any]] = None):
        super().__init__(message)
        self.message = message
        self.details = details or {}

    def __str__(self) -> str:
        if self.details:
            detail_str = ", ".join(f"{k}={v!r}" for k, v in self.details.items())
            return f"{self.message} ({detail_str})"
        return self.message


class ConfigurationError(NetWorthModelError, ValueError):
    """An input configuration violates its invariants."""

    def __init__(self, message: str, *, field: Optional[str] = None,
                 value: Any = None, details: Optional[Dict[str, Any]] = None):
        merged = dict(details or {})
        if field is not None:
            merged.setdefault("field", field)
            merged.setdefault("value", value)
        super().__init__(message, details=merged)
        self.field = field
        self.value = value


class EmptyInputError(NetWorthModelError, ValueError):
    """A statistic was requested over an empty sequence."""


class SimulationCancelledError(NetWorthModelError):
    """A Monte Carlo batch was cancelled before all paths completed."""

    def __init__(self, completed: int, requested: int):
        super().__init__(
            "Monte Carlo simulation cancelled",
            details={"completed": completed, "requested": requested},
        )
        self.completed = completed
        self.requested = requested
