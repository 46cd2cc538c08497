"""
In-memory model schemas and dotted path resolution.
"""

from __future__ import annotations

from collections import OrderedDict
from dataclasses import dataclass, field
from typing import Dict, Iterable, List, Optional, Tuple

from .definitions import FieldDef


class SchemaError(Exception):
    """Raised when a model schema is misconfigured."""


@dataclass
class ModelSchema:
    """
    Ordered collection of the fields declared on one model.
    """

    name: str
    fields: "OrderedDict[str, FieldDef]" = field(default_factory=OrderedDict)

    def add_field(self, field_def: FieldDef) -> None:
        if not isinstance(field_def.name, str) or "." in field_def.name:
            raise SchemaError(f"Invalid field name {field_def.name!r} on model '{self.name}'")
        if field_def.name in self.fields:
            raise SchemaError(f"Duplicate field name '{field_def.name}' on model '{self.name}'")
        if field_def.is_relational and not field_def.relation:
            raise SchemaError(
                f"Relational field '{field_def.name}' on model '{self.name}' has no relation"
            )
        self.fields[field_def.name] = field_def

    def get_field(self, name: str) -> FieldDef:
        try:
            return self.fields[name]
        except KeyError as exc:
            raise KeyError(f"Unknown field '{name}' on model '{self.name}'") from exc

    def get_fields(self) -> Iterable[FieldDef]:
        return self.fields.values()


@dataclass(frozen=True)
class PathInfo:
    """
    Result of resolving a dotted path.

    ``names`` lists the path segments and ``models`` the schema each segment
    was looked up on, so ``models[-1].get_field(names[-1])`` is the target.
    """

    is_invalid: bool
    names: Tuple[str, ...] = ()
    models: Tuple[ModelSchema, ...] = ()

    @property
    def field_def(self) -> Optional[FieldDef]:
        if self.is_invalid or not self.names:
            return None
        return self.models[-1].get_field(self.names[-1])


class SchemaRegistry:
    def __init__(self) -> None:
        self.models: Dict[str, ModelSchema] = {}

    def register_model(self, name: str, fields: Iterable[FieldDef] = ()) -> ModelSchema:
        if name in self.models:
            raise SchemaError(f"Model '{name}' is already registered")
        declared = list(fields)
        schema = ModelSchema(name=name)
        if all(field_def.name != "id" for field_def in declared):
            schema.add_field(FieldDef(name="id", type="id", string="ID"))
        for field_def in declared:
            schema.add_field(field_def)
        self.models[name] = schema
        return schema

    def get_model(self, name: str) -> ModelSchema:
        try:
            return self.models[name]
        except KeyError as exc:
            raise KeyError(f"Unknown model '{name}'") from exc

    def resolve_path(self, model: str, path: str) -> PathInfo:
        """
        Follow ``path`` segment by segment through relational fields.

        Unknown models, unknown fields and traversal through a non-relational
        field all yield an invalid :class:`PathInfo`.
        """
        if not path:
            return PathInfo(is_invalid=True)
        current = self.models.get(model)
        names: List[str] = []
        models: List[ModelSchema] = []
        segments = path.split(".")
        for position, segment in enumerate(segments):
            if current is None or segment not in current.fields:
                return PathInfo(is_invalid=True)
            names.append(segment)
            models.append(current)
            field_def = current.fields[segment]
            if position == len(segments) - 1:
                break
            if not field_def.is_relational:
                return PathInfo(is_invalid=True)
            current = self.models.get(field_def.relation or "")
        return PathInfo(is_invalid=False, names=tuple(names), models=tuple(models))
