"""
Token primitives making up a parsed domain.

A domain is a flat prefix-notation sequence: connectives consume the next
``arity`` complete sub-expressions, conditions are the leaves.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Any, Iterator, List, Tuple, Union


class Connective(str, Enum):
    AND = "AND"
    OR = "OR"
    NOT = "NOT"

    @property
    def symbol(self) -> str:
        return _SYMBOLS[self]

    @property
    def arity(self) -> int:
        return 1 if self is Connective.NOT else 2

    @classmethod
    def from_symbol(cls, symbol: str) -> "Connective":
        for connective, candidate in _SYMBOLS.items():
            if candidate == symbol:
                return connective
        raise ValueError(f"Unknown connective symbol {symbol!r}")

    def opposite(self) -> "Connective":
        """
        Return the connective a nested branch should default to.

        Children of a negation are grouped under AND, so NOT nests OR.
        """
        return Connective.AND if self is Connective.OR else Connective.OR


_SYMBOLS = {
    Connective.AND: "&",
    Connective.OR: "|",
    Connective.NOT: "!",
}


@dataclass(frozen=True)
class Condition:
    """
    A single ``(path, operator, value)`` comparison.
    """

    path: Union[str, int]
    operator: str
    value: Any

    kind = "condition"

    def as_tuple(self) -> Tuple[Any, str, Any]:
        value = list(self.value) if isinstance(self.value, list) else self.value
        return (self.path, self.operator, value)


Token = Union[Connective, Condition]


@dataclass(frozen=True)
class Domain:
    """
    Immutable prefix-notation token sequence.

    Use :func:`domaintree.domain.parse` to build one from text; ``str()``
    serializes it back.
    """

    tokens: Tuple[Token, ...] = ()

    def __post_init__(self) -> None:
        object.__setattr__(self, "tokens", tuple(self.tokens))

    def __str__(self) -> str:
        from .serializer import format_domain

        return format_domain(self)

    def __len__(self) -> int:
        return len(self.tokens)

    def __iter__(self) -> Iterator[Token]:
        return iter(self.tokens)

    def __add__(self, other: "Domain") -> "Domain":
        return Domain(self.tokens + other.tokens)

    def is_empty(self) -> bool:
        return not self.tokens

    def conditions(self) -> Iterator[Condition]:
        for token in self.tokens:
            if isinstance(token, Condition):
                yield token

    def field_paths(self) -> List[Union[str, int]]:
        """
        Distinct condition paths in order of first appearance.
        """
        paths: List[Union[str, int]] = []
        for condition in self.conditions():
            if condition.path not in paths:
                paths.append(condition.path)
        return paths

    def to_list(self) -> List[Any]:
        items: List[Any] = []
        for token in self.tokens:
            if isinstance(token, Connective):
                items.append(token.symbol)
            else:
                items.append(token.as_tuple())
        return items
