"""
Operator registry describing the comparisons a leaf can express.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from types import MappingProxyType
from typing import Any, Iterable, Mapping, Tuple

from ..domain.tokens import Condition
from ..errors import UnknownOperatorError, UnsupportedOperatorError


class ValueMode(str, Enum):
    NONE = "none"
    SINGLE = "single"
    MULTIPLE = "multiple"


@dataclass(frozen=True)
class Operator:
    """
    Describes one operator offered by the selector.

    ``key`` identifies the operator inside the selector, ``symbol`` is what
    appears in the serialized domain. They only differ for the ``set`` and
    ``not_set`` operators, which compare against ``False``.
    """

    key: str
    label: str
    symbol: str
    value_mode: ValueMode

    def matches(self, symbol: str, value: Any) -> bool:
        if symbol != self.symbol:
            return False
        if self.value_mode is ValueMode.NONE:
            return value is False
        return True

    def to_condition(self, path: Any, value: Any) -> Condition:
        if self.value_mode is ValueMode.NONE:
            value = False
        elif isinstance(value, tuple):
            value = list(value)
        return Condition(path, self.symbol, value)


OPERATORS: Tuple[Operator, ...] = (
    Operator("=", "=", "=", ValueMode.SINGLE),
    Operator("!=", "!=", "!=", ValueMode.SINGLE),
    Operator(">", ">", ">", ValueMode.SINGLE),
    Operator(">=", ">=", ">=", ValueMode.SINGLE),
    Operator("<", "<", "<", ValueMode.SINGLE),
    Operator("<=", "<=", "<=", ValueMode.SINGLE),
    Operator("ilike", "contains", "ilike", ValueMode.SINGLE),
    Operator("not ilike", "does not contain", "not ilike", ValueMode.SINGLE),
    Operator("like", "like", "like", ValueMode.SINGLE),
    Operator("not like", "not like", "not like", ValueMode.SINGLE),
    Operator("=like", "=like", "=like", ValueMode.SINGLE),
    Operator("=ilike", "=ilike", "=ilike", ValueMode.SINGLE),
    Operator("in", "in", "in", ValueMode.MULTIPLE),
    Operator("not in", "not in", "not in", ValueMode.MULTIPLE),
    Operator("child_of", "child of", "child_of", ValueMode.SINGLE),
    Operator("parent_of", "parent of", "parent_of", ValueMode.SINGLE),
    Operator("set", "is set", "!=", ValueMode.NONE),
    Operator("not_set", "is not set", "=", ValueMode.NONE),
)

_OPERATORS_BY_KEY: Mapping[str, Operator] = MappingProxyType(
    {operator.key: operator for operator in OPERATORS}
)


def find_operator(key: str) -> Operator:
    try:
        return _OPERATORS_BY_KEY[key]
    except KeyError as exc:
        raise UnknownOperatorError(key) from exc


def match_operator(operators: Iterable[Operator], symbol: str, value: Any) -> Operator | None:
    """
    Return the first operator in ``operators`` accepting ``symbol``/``value``.

    Operators without a value are tried first so ``("x", "!=", False)`` reads
    as "is set" rather than a plain inequality.
    """
    candidates = sorted(operators, key=lambda operator: operator.value_mode is not ValueMode.NONE)
    for operator in candidates:
        if operator.matches(symbol, value):
            return operator
    return None


def resolve_operator(field_type: str, symbol: str, value: Any) -> Operator:
    """
    Resolve the operator of a parsed leaf on a field of ``field_type``.

    Operators registered for the field type win; otherwise any registered
    operator with a matching symbol is accepted so hand-written domains still
    load. Raises :class:`UnsupportedOperatorError` when nothing matches.
    """
    from .fields import get_operators_info

    for candidates in (get_operators_info(field_type), OPERATORS):
        operator = match_operator(candidates, symbol, value)
        if operator is not None:
            return operator
    raise UnsupportedOperatorError(symbol, field_type)
