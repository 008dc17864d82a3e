"""
Argument checks shared by the balancer and the configuration layer.

Two error types:
- ArgumentNullError: a required argument is None.
- ArgumentError: an argument is present but its value is unusable.
"""

from __future__ import annotations

from typing import Any


class ArgumentError(ValueError):
    """Raised when an argument has an invalid value."""

    def __init__(self, name: str, message: str):
        self.name = name
        super().__init__(f"{name}: {message}")


class ArgumentNullError(ArgumentError):
    """Raised when a required argument is None."""

    def __init__(self, name: str):
        super().__init__(name, "must not be None")


def must_not_be_none(name: str, value: Any) -> Any:
    if value is None:
        raise ArgumentNullError(name)
    return value


def must_not_be_empty_or_whitespace(name: str, value: str | None) -> str:
    """
    Reject None, "" and strings made only of whitespace (CR/LF included).
    """
    must_not_be_none(name, value)
    if not isinstance(value, str):
        raise ArgumentError(name, f"must be a string, got {type(value).__name__}")
    if not value.strip():
        raise ArgumentError(name, "must not be empty or whitespace")
    return value


def must_be_greater_than_zero(name: str, value: int | None) -> int:
    must_not_be_none(name, value)
    if value <= 0:
        raise ArgumentError(name, f"must be greater than zero, got {value}")
    return value
