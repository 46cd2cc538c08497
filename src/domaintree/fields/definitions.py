"""
Field definitions describing what a domain path points at.
"""

from __future__ import annotations

from dataclasses import dataclass, field, replace
from typing import Any, Optional, Tuple, Union

from ..utils.naming import humanize_field_name

RELATIONAL_TYPES = frozenset({"many2one", "one2many", "many2many"})


@dataclass(frozen=True)
class FieldDef:
    """
    Metadata of a single model field.

    ``name`` holds the technical name on its model. Once attached to a leaf it
    holds the full path as written in the domain (``partner_id.country_id``).
    """

    name: Union[str, int]
    type: str
    string: str = ""
    relation: Optional[str] = None
    selection: Tuple[Tuple[Any, str], ...] = field(default_factory=tuple)

    def __post_init__(self) -> None:
        object.__setattr__(self, "selection", tuple(tuple(option) for option in self.selection))
        if not self.string and isinstance(self.name, str):
            object.__setattr__(self, "string", humanize_field_name(self.name.split(".")[-1]))

    @property
    def is_relational(self) -> bool:
        return self.type in RELATIONAL_TYPES

    def with_name(self, name: Union[str, int]) -> "FieldDef":
        return replace(self, name=name)


def pseudo_integer_field(name: int) -> FieldDef:
    """
    Field used for the ``(1, "=", 1)`` / ``(0, "=", 1)`` shorthands.
    """
    return FieldDef(name=name, type="integer", string=str(name))
