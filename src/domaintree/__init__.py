"""
domaintree public package initialization.

Parse boolean filter domains into editable trees, edit them and serialize
them back.
"""

from .config import SelectorConfig  # noqa: F401
from .domain import Condition, Connective, Domain, format_domain, parse  # noqa: F401
from .errors import (  # noqa: F401
    ConfigurationError,
    DomainError,
    DomainParseError,
    UnknownOperatorError,
    UnresolvedFieldError,
    UnsupportedDomainError,
    UnsupportedOperatorError,
)
from .fields import FieldDef, SchemaFieldService, SchemaRegistry  # noqa: F401
from .registry import (  # noqa: F401
    Operator,
    ValueMode,
    find_operator,
    get_default_field_value,
    get_editor_info,
    get_operators_info,
)
from .selector import DomainSelector  # noqa: F401
from .tree import BranchNode, DomainTreeBuilder, LeafNode  # noqa: F401

__all__ = [
    "BranchNode",
    "Condition",
    "ConfigurationError",
    "Connective",
    "Domain",
    "DomainError",
    "DomainParseError",
    "DomainSelector",
    "DomainTreeBuilder",
    "FieldDef",
    "LeafNode",
    "Operator",
    "SchemaFieldService",
    "SchemaRegistry",
    "SelectorConfig",
    "UnknownOperatorError",
    "UnresolvedFieldError",
    "UnsupportedDomainError",
    "UnsupportedOperatorError",
    "ValueMode",
    "find_operator",
    "format_domain",
    "get_default_field_value",
    "get_editor_info",
    "get_operators_info",
    "parse",
]
