"""
Field metadata: definitions, schemas and lookup services.
"""

from .cache import FieldCache, InMemoryFieldCache, NoOpFieldCache
from .definitions import RELATIONAL_TYPES, FieldDef, pseudo_integer_field
from .schema import ModelSchema, PathInfo, SchemaError, SchemaRegistry
from .service import FieldService, SchemaFieldService, load_field_def, load_field_defs

__all__ = [
    "FieldCache",
    "FieldDef",
    "FieldService",
    "InMemoryFieldCache",
    "ModelSchema",
    "NoOpFieldCache",
    "PathInfo",
    "RELATIONAL_TYPES",
    "SchemaError",
    "SchemaFieldService",
    "SchemaRegistry",
    "load_field_def",
    "load_field_defs",
    "pseudo_integer_field",
]
