"""
Domain tokens, parsing and serialization.
"""

from .parser import FALSE_LEAF, TRUE_LEAF, parse
from .serializer import format_domain, format_value
from .tokens import Condition, Connective, Domain, Token

__all__ = [
    "Condition",
    "Connective",
    "Domain",
    "FALSE_LEAF",
    "TRUE_LEAF",
    "Token",
    "format_domain",
    "format_value",
    "parse",
]
