"""
Serialize :class:`Domain` token sequences back into domain text.
"""

from __future__ import annotations

import json
import math
from typing import Any

from .tokens import Condition, Connective, Domain


def format_domain(domain: Domain) -> str:
    """
    Render ``domain`` as a Python literal list readable by :func:`parse`.
    """
    parts = []
    for token in domain.tokens:
        if isinstance(token, Connective):
            parts.append(format_value(token.symbol))
        else:
            parts.append(format_condition(token))
    return f"[{', '.join(parts)}]"


def format_condition(condition: Condition) -> str:
    path, operator, value = condition.as_tuple()
    return f"({format_value(path)}, {format_value(operator)}, {format_value(value)})"


def format_value(value: Any) -> str:
    if value is None:
        return "None"
    if isinstance(value, bool):
        return "True" if value else "False"
    if isinstance(value, float) and not math.isfinite(value):
        raise ValueError(f"Cannot serialize non-finite number {value!r}")
    if isinstance(value, (int, float)):
        return repr(value)
    if isinstance(value, str):
        # ASCII JSON string literals are valid Python string literals, lone
        # surrogates included.
        return json.dumps(value)
    if isinstance(value, (list, tuple)):
        return f"[{', '.join(format_value(item) for item in value)}]"
    raise TypeError(f"Cannot serialize domain value {value!r}")
