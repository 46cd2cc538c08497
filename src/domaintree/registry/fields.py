"""
Field-type registry: which operators, value editors and default values each
field type offers.
"""

from __future__ import annotations

import math
from dataclasses import dataclass
from datetime import date, datetime
from enum import Enum
from types import MappingProxyType
from typing import TYPE_CHECKING, Any, Callable, List, Mapping, Tuple

from .operators import Operator, ValueMode, find_operator

if TYPE_CHECKING:
    from ..fields.definitions import FieldDef


DATE_FORMAT = "%Y-%m-%d"
DATETIME_FORMAT = "%Y-%m-%d %H:%M:%S"


class EditorKind(str, Enum):
    NONE = "none"
    TEXT = "text"
    INTEGER = "integer"
    FLOAT = "float"
    BOOLEAN = "boolean"
    DATE = "date"
    DATETIME = "datetime"
    SELECTION = "selection"
    RECORD = "record"


# Conversion -------------------------------------------------------------
def _to_text(value: Any) -> str:
    return "" if value is None else str(value)


def _to_integer(value: Any) -> int:
    if isinstance(value, bool):
        raise ValueError(f"Invalid integer value '{value}'")
    try:
        return int(value)
    except (TypeError, ValueError) as exc:
        raise ValueError(f"Invalid integer value '{value}'") from exc


def _to_float(value: Any) -> float:
    if isinstance(value, bool):
        raise ValueError(f"Invalid float value '{value}'")
    try:
        result = float(value)
    except (TypeError, ValueError) as exc:
        raise ValueError(f"Invalid float value '{value}'") from exc
    if not math.isfinite(result):
        raise ValueError(f"Invalid float value '{value}'")
    return result


def _to_boolean(value: Any) -> bool:
    if isinstance(value, bool):
        return value
    if isinstance(value, str):
        lowered = value.strip().lower()
        if lowered in {"true", "t", "1"}:
            return True
        if lowered in {"false", "f", "0"}:
            return False
    if isinstance(value, (int, float)):
        return bool(value)
    raise ValueError(f"Invalid boolean value '{value}'")


def _to_temporal(fmt: str) -> Callable[[Any], str]:
    def convert(value: Any) -> str:
        if isinstance(value, (date, datetime)):
            return value.strftime(fmt)
        try:
            return datetime.strptime(str(value).strip(), fmt).strftime(fmt)
        except ValueError as exc:
            raise ValueError(f"Expected a value formatted as {fmt!r}, received {value!r}") from exc

    return convert


def _to_record_id(value: Any) -> Any:
    # Record editors accept ids or a name to search for.
    if isinstance(value, str) and not value.strip().isdigit():
        return value
    return _to_integer(value)


_CONVERTERS: Mapping[EditorKind, Callable[[Any], Any]] = MappingProxyType(
    {
        EditorKind.TEXT: _to_text,
        EditorKind.INTEGER: _to_integer,
        EditorKind.FLOAT: _to_float,
        EditorKind.BOOLEAN: _to_boolean,
        EditorKind.DATE: _to_temporal(DATE_FORMAT),
        EditorKind.DATETIME: _to_temporal(DATETIME_FORMAT),
        EditorKind.SELECTION: _to_text,
        EditorKind.RECORD: _to_record_id,
    }
)


@dataclass(frozen=True)
class EditorInfo:
    """
    Which value editor a leaf needs and how raw input is converted.
    """

    kind: EditorKind
    multiple: bool = False

    def parse_value(self, raw: Any) -> Any:
        if self.kind is EditorKind.NONE:
            return False
        convert = _CONVERTERS[self.kind]
        if self.multiple:
            items = raw if isinstance(raw, (list, tuple)) else [raw]
            return [convert(item) for item in items]
        return convert(raw)


# Field types ------------------------------------------------------------
@dataclass(frozen=True)
class FieldTypeInfo:
    operators: Tuple[str, ...]
    editor: EditorKind
    default: Callable[["FieldDef"], Any]


def _constant(value: Any) -> Callable[["FieldDef"], Any]:
    return lambda field_def: value


def _today(field_def: "FieldDef") -> str:
    return date.today().strftime(DATE_FORMAT)


def _now(field_def: "FieldDef") -> str:
    return datetime.now().strftime(DATETIME_FORMAT)


def _first_selection(field_def: "FieldDef") -> Any:
    if field_def.selection:
        return field_def.selection[0][0]
    return False


_TEXT_OPERATORS = ("=", "!=", "ilike", "not ilike", "in", "not in", "set", "not_set")
_NUMBER_OPERATORS = ("=", "!=", ">", ">=", "<", "<=", "in", "not in", "set", "not_set")
_TEMPORAL_OPERATORS = ("=", "!=", ">", ">=", "<", "<=", "set", "not_set")
_RELATIONAL_OPERATORS = ("in", "not in", "=", "!=", "ilike", "not ilike", "set", "not_set")

FIELD_TYPES: Mapping[str, FieldTypeInfo] = MappingProxyType(
    {
        "boolean": FieldTypeInfo(("=", "!="), EditorKind.BOOLEAN, _constant(True)),
        "char": FieldTypeInfo(_TEXT_OPERATORS, EditorKind.TEXT, _constant("")),
        "text": FieldTypeInfo(_TEXT_OPERATORS, EditorKind.TEXT, _constant("")),
        "html": FieldTypeInfo(_TEXT_OPERATORS, EditorKind.TEXT, _constant("")),
        "integer": FieldTypeInfo(_NUMBER_OPERATORS, EditorKind.INTEGER, _constant(1)),
        "float": FieldTypeInfo(_NUMBER_OPERATORS, EditorKind.FLOAT, _constant(1.0)),
        "monetary": FieldTypeInfo(_NUMBER_OPERATORS, EditorKind.FLOAT, _constant(1.0)),
        "date": FieldTypeInfo(_TEMPORAL_OPERATORS, EditorKind.DATE, _today),
        "datetime": FieldTypeInfo(_TEMPORAL_OPERATORS, EditorKind.DATETIME, _now),
        "selection": FieldTypeInfo(
            ("=", "!=", "in", "not in", "set", "not_set"), EditorKind.SELECTION, _first_selection
        ),
        "many2one": FieldTypeInfo(
            ("=", "!=", "ilike", "not ilike", "in", "not in", "child_of", "set", "not_set"),
            EditorKind.RECORD,
            _constant(1),
        ),
        "many2many": FieldTypeInfo(_RELATIONAL_OPERATORS, EditorKind.RECORD, _constant(1)),
        "one2many": FieldTypeInfo(_RELATIONAL_OPERATORS, EditorKind.RECORD, _constant(1)),
        "id": FieldTypeInfo(
            ("=", "!=", ">", ">=", "<", "<=", "in", "not in"), EditorKind.INTEGER, _constant(1)
        ),
    }
)

DEFAULT_FIELD_TYPE = FieldTypeInfo(("=", "!=", "set", "not_set"), EditorKind.TEXT, _constant(""))


def get_field_type_info(field_type: str | None) -> FieldTypeInfo:
    if field_type is None:
        return DEFAULT_FIELD_TYPE
    return FIELD_TYPES.get(field_type, DEFAULT_FIELD_TYPE)


def get_operators_info(field_type: str | None) -> List[Operator]:
    """
    Operators offered for ``field_type``, in display order.

    A new list is returned on each call so callers can append operators the
    type does not normally offer.
    """
    return [find_operator(key) for key in get_field_type_info(field_type).operators]


def get_default_operator(field_type: str | None) -> Operator:
    return get_operators_info(field_type)[0]


def get_editor_info(field_type: str | None, operator_key: str) -> EditorInfo:
    operator = find_operator(operator_key)
    if operator.value_mode is ValueMode.NONE:
        return EditorInfo(EditorKind.NONE)
    editor = get_field_type_info(field_type).editor
    return EditorInfo(editor, multiple=operator.value_mode is ValueMode.MULTIPLE)


def get_default_field_value(field_def: "FieldDef") -> Any:
    return get_field_type_info(field_def.type).default(field_def)


def get_default_value(operator: Operator, field_def: "FieldDef") -> Any:
    """
    Value a fresh leaf starts with for ``operator`` on ``field_def``.
    """
    if operator.value_mode is ValueMode.NONE:
        return False
    if operator.value_mode is ValueMode.MULTIPLE:
        return []
    return get_default_field_value(field_def)


def migrate_value(previous: Operator, operator: Operator, value: Any, field_def: "FieldDef") -> Any:
    """
    Reshape ``value`` when a leaf switches from ``previous`` to ``operator``.
    """
    if previous.value_mode is operator.value_mode:
        return value
    if previous.value_mode is ValueMode.NONE:
        return get_default_value(operator, field_def)
    if operator.value_mode is ValueMode.NONE:
        return False
    if operator.value_mode is ValueMode.MULTIPLE:
        return [value]
    if isinstance(value, (list, tuple)):
        return value[0] if value else get_default_field_value(field_def)
    return value
