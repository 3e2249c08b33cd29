from __future__ import annotations

from typing import Any


class UnderbarError(Exception):
    """Base class for errors raised by underbar itself."""


class InvalidArgumentError(UnderbarError, TypeError):
    """Raised when a caller passes a value the contract does not accept."""


class ConfigurationError(UnderbarError, ValueError):
    """Raised when environment configuration cannot be interpreted."""


def require_callable(value: Any, name: str) -> None:
    if not callable(value):
        raise InvalidArgumentError(
            f"{name} must be callable, got {type(value).__name__}"
        )


class SchedulerError(UnderbarError, RuntimeError):
    """Raised when a scheduler cannot accept a timer in the current context."""
