"""
Static operator and field-type lookup tables.
"""

from .fields import (
    FIELD_TYPES,
    EditorInfo,
    EditorKind,
    FieldTypeInfo,
    get_default_field_value,
    get_default_operator,
    get_default_value,
    get_editor_info,
    get_field_type_info,
    get_operators_info,
    migrate_value,
)
from .operators import OPERATORS, Operator, ValueMode, find_operator, match_operator, resolve_operator

__all__ = [
    "EditorInfo",
    "EditorKind",
    "FIELD_TYPES",
    "FieldTypeInfo",
    "OPERATORS",
    "Operator",
    "ValueMode",
    "find_operator",
    "get_default_field_value",
    "get_default_operator",
    "get_default_value",
    "get_editor_info",
    "get_field_type_info",
    "get_operators_info",
    "match_operator",
    "migrate_value",
    "resolve_operator",
]
