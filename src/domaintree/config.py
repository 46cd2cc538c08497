"""
Selector configuration.
"""

from __future__ import annotations

import os
from dataclasses import dataclass
from typing import Any, Mapping, Optional, Tuple

from .domain.parser import parse
from .errors import ConfigurationError, DomainParseError

DEFAULT_LEAF_VALUE: Tuple[Any, str, Any] = ("id", "=", 1)

_TRUE_VALUES = {"1", "true", "yes", "on"}
_FALSE_VALUES = {"0", "false", "no", "off"}


def _parse_bool(value: str, *, key: str) -> bool:
    normalized = value.strip().lower()
    if normalized in _TRUE_VALUES:
        return True
    if normalized in _FALSE_VALUES:
        return False
    raise ConfigurationError(f"Invalid boolean value for '{key}': {value!r}")


def _parse_int(value: str, *, key: str) -> int:
    try:
        return int(value)
    except ValueError as exc:
        raise ConfigurationError(f"Invalid integer value for '{key}': {value!r}") from exc


def _parse_leaf(value: str, *, key: str) -> Tuple[Any, str, Any]:
    try:
        domain = parse(f"[{value}]")
    except DomainParseError as exc:
        raise ConfigurationError(f"Invalid default leaf for '{key}': {value!r}") from exc
    conditions = list(domain.conditions())
    if len(domain) != 1 or len(conditions) != 1:
        raise ConfigurationError(f"Default leaf for '{key}' must be a single condition: {value!r}")
    return conditions[0].as_tuple()


@dataclass
class SelectorConfig:
    """
    Options of a :class:`~domaintree.selector.DomainSelector`.

    ``default_leaf_value`` is the condition inserted whenever the user adds a
    new rule. ``build_warning_ms`` is the duration above which a tree build is
    logged as a warning.
    """

    readonly: bool = True
    is_debug_mode: bool = False
    default_leaf_value: Tuple[Any, str, Any] = DEFAULT_LEAF_VALUE
    build_warning_ms: int = 100

    def __post_init__(self) -> None:
        if len(self.default_leaf_value) != 3:
            raise ConfigurationError(
                f"Default leaf must be a (path, operator, value) triple: {self.default_leaf_value!r}"
            )
        self.default_leaf_value = tuple(self.default_leaf_value)  # type: ignore[assignment]
        if self.build_warning_ms < 0:
            raise ConfigurationError("build_warning_ms must not be negative")

    @classmethod
    def from_mapping(cls, values: Mapping[str, str], *, prefix: str = "DOMAINTREE_", **kwargs: Any) -> "SelectorConfig":
        """
        Build a config from string values such as environment variables.
        Explicit keyword arguments win over mapped values.
        """

        def lookup(name: str) -> Optional[str]:
            return values.get(f"{prefix}{name}")

        parsed: dict[str, Any] = {}
        readonly = lookup("READONLY")
        if readonly is not None:
            parsed["readonly"] = _parse_bool(readonly, key=f"{prefix}READONLY")
        debug = lookup("DEBUG")
        if debug is not None:
            parsed["is_debug_mode"] = _parse_bool(debug, key=f"{prefix}DEBUG")
        leaf = lookup("DEFAULT_LEAF")
        if leaf is not None:
            parsed["default_leaf_value"] = _parse_leaf(leaf, key=f"{prefix}DEFAULT_LEAF")
        warning_ms = lookup("BUILD_WARNING_MS")
        if warning_ms is not None:
            parsed["build_warning_ms"] = _parse_int(warning_ms, key=f"{prefix}BUILD_WARNING_MS")

        parsed.update(kwargs)
        return cls(**parsed)

    @classmethod
    def from_env(cls, *, prefix: str = "DOMAINTREE_", **kwargs: Any) -> "SelectorConfig":
        return cls.from_mapping(os.environ, prefix=prefix, **kwargs)
