"""
Parse domain text into :class:`Domain` token sequences.
"""

from __future__ import annotations

import ast
import math
from typing import Any, List, Sequence, Union

from ..errors import DomainParseError
from .tokens import Condition, Connective, Domain, Token

DomainSource = Union[str, Sequence[Any], Domain]

TRUE_LEAF = (1, "=", 1)
FALSE_LEAF = (0, "=", 1)

_SCALAR_TYPES = (str, int, float, bool, type(None))
_PSEUDO_PATHS = (0, 1)


def parse(source: DomainSource) -> Domain:
    """
    Parse ``source`` into a :class:`Domain`.

    ``source`` may be domain text such as ``'["|", ("a", "=", 1), ("b", "=", 2)]'``,
    an already materialized list of terms, or a :class:`Domain`.

    Raises :class:`DomainParseError` for anything that is not a well formed
    prefix-notation domain.
    """
    if isinstance(source, Domain):
        return source
    if isinstance(source, str):
        items = _load(source)
    elif isinstance(source, (list, tuple)):
        items = source
    else:
        raise DomainParseError(f"Cannot parse domain from {type(source).__name__}")

    tokens = [_parse_term(item) for item in items]
    _check_arity(tokens)
    return Domain(tuple(tokens))


def _load(text: str) -> Sequence[Any]:
    stripped = text.strip()
    if not stripped:
        raise DomainParseError("Domain text is empty")
    try:
        loaded = ast.literal_eval(stripped)
    except (ValueError, TypeError, SyntaxError, MemoryError, RecursionError) as exc:
        raise DomainParseError(f"Domain {text!r} is not a literal expression") from exc
    if not isinstance(loaded, (list, tuple)):
        raise DomainParseError(f"Domain {text!r} must be a list of terms")
    return loaded


def _parse_term(item: Any) -> Token:
    if isinstance(item, str):
        try:
            return Connective.from_symbol(item)
        except ValueError as exc:
            raise DomainParseError(f"Unknown domain connective {item!r}") from exc
    if isinstance(item, (list, tuple)) and len(item) == 3:
        path, operator, value = item
        return Condition(_parse_path(path), _parse_operator(operator), _parse_value(value))
    raise DomainParseError(f"Invalid domain term {item!r}")


def _parse_path(path: Any) -> Union[str, int]:
    if isinstance(path, bool):
        raise DomainParseError(f"Invalid field path {path!r}")
    if isinstance(path, int):
        if path not in _PSEUDO_PATHS:
            raise DomainParseError(f"Invalid field path {path!r}")
        return path
    if not isinstance(path, str) or not path:
        raise DomainParseError(f"Invalid field path {path!r}")
    if any(not segment for segment in path.split(".")):
        raise DomainParseError(f"Invalid field path {path!r}")
    return path


def _parse_operator(operator: Any) -> str:
    if not isinstance(operator, str) or not operator.strip():
        raise DomainParseError(f"Invalid operator {operator!r}")
    return operator


def _parse_value(value: Any) -> Any:
    if isinstance(value, _SCALAR_TYPES):
        return _check_finite(value)
    if isinstance(value, (list, tuple)):
        items: List[Any] = []
        for item in value:
            if not isinstance(item, _SCALAR_TYPES):
                raise DomainParseError(f"Unsupported nested value {item!r}")
            items.append(_check_finite(item))
        return items
    raise DomainParseError(f"Unsupported value {value!r}")


def _check_finite(value: Any) -> Any:
    if isinstance(value, float) and not math.isfinite(value):
        raise DomainParseError(f"Non-finite number {value!r} is not a domain literal")
    return value


def _check_arity(tokens: Sequence[Token]) -> None:
    if not tokens:
        return
    expected = 1
    for position, token in enumerate(tokens):
        if expected == 0:
            raise DomainParseError(f"Unexpected trailing term at position {position}")
        expected -= 1
        if isinstance(token, Connective):
            expected += token.arity
    if expected:
        raise DomainParseError(f"Domain is missing {expected} operand(s)")
