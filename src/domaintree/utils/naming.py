"""
Naming utilities for domaintree.
"""

import re


_RELATION_SUFFIX_RE = re.compile(r"_ids?$")
_SEPARATOR_RE = re.compile(r"[_\s]+")


def humanize_field_name(name: str) -> str:
    """
    Turn a technical field name such as ``partner_id`` into ``Partner``.
    """
    stripped = _RELATION_SUFFIX_RE.sub("", name) or name
    words = _SEPARATOR_RE.sub(" ", stripped).strip()
    return words[:1].upper() + words[1:]
