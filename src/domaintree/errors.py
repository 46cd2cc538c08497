"""
Error hierarchy for domaintree.
"""

from __future__ import annotations

from typing import Any


class DomainError(Exception):
    """Base error for domain parsing, building and editing failures."""


class UnsupportedDomainError(DomainError):
    """
    Raised when a domain cannot be represented as an editable tree.

    Callers rebuilding a tree convert this into the "unsupported" state and
    offer the raw-text editor instead.
    """


class DomainParseError(UnsupportedDomainError):
    """Raised when domain text or tokens are not well formed."""


class UnresolvedFieldError(UnsupportedDomainError):
    def __init__(self, path: Any) -> None:
        self.path = path
        super().__init__(f"Field path {path!r} could not be resolved")


class UnsupportedOperatorError(UnsupportedDomainError):
    def __init__(self, symbol: Any, field_type: str | None = None) -> None:
        self.symbol = symbol
        self.field_type = field_type
        if field_type:
            message = f"Operator {symbol!r} is not supported for field type '{field_type}'"
        else:
            message = f"Operator {symbol!r} is not supported"
        super().__init__(message)


class UnknownOperatorError(DomainError, LookupError):
    """
    Raised when an operator key is not registered.

    Operator keys come from the registry itself, so this signals a caller bug
    rather than bad user input.
    """

    def __init__(self, key: Any) -> None:
        self.key = key
        super().__init__(f"Unknown operator key {key!r}")


class ConfigurationError(DomainError):
    """Raised when selector configuration values are invalid."""
