"""
Field metadata lookups consumed by the selector.

The selector only depends on the :class:`FieldService` protocol; the schema
backed implementation serves tests, demos and embedders without a remote
metadata source.
"""

from __future__ import annotations

import asyncio
from typing import Any, Dict, Iterable, Optional, Protocol, Union

from ..utils.logging import get_logger
from .cache import FieldCache, NoOpFieldCache
from .definitions import FieldDef, pseudo_integer_field
from .schema import PathInfo, SchemaRegistry

logger = get_logger("fields")

FieldPath = Union[str, int]


class FieldService(Protocol):
    async def load_path(self, model: str, path: str) -> PathInfo:
        """
        Resolve ``path`` on ``model``. Unresolvable paths are reported through
        ``PathInfo.is_invalid`` rather than raised.
        """


class SchemaFieldService:
    """
    :class:`FieldService` answering from a :class:`SchemaRegistry`.
    """

    def __init__(self, registry: SchemaRegistry, *, cache: FieldCache | None = None) -> None:
        self.registry = registry
        self.cache = cache or NoOpFieldCache()
        self.lookups = 0

    async def load_path(self, model: str, path: str) -> PathInfo:
        cached = self.cache.get(model, path)
        if cached is not None:
            return cached
        self.lookups += 1
        info = self.registry.resolve_path(model, path)
        self.cache.set(model, path, info)
        return info


async def load_field_def(service: FieldService, model: str, path: Any) -> Optional[FieldDef]:
    """
    Load the definition of ``path`` on ``model``.

    The ``0``/``1`` shorthands resolve to a pseudo integer field. Anything
    that does not resolve yields ``None``.
    """
    if isinstance(path, bool):
        return None
    if str(path) in ("0", "1"):
        return pseudo_integer_field(int(path))
    if not isinstance(path, str) or not path:
        return None
    info = await service.load_path(model, path)
    if info.is_invalid:
        logger.debug("Field path %r on %s is invalid", path, model)
        return None
    return info.field_def


async def load_field_defs(
    service: FieldService, model: str, paths: Iterable[FieldPath]
) -> Dict[FieldPath, Optional[FieldDef]]:
    """
    Resolve every path concurrently and return once the whole batch is done.
    """
    unique = list(dict.fromkeys(paths))
    results = await asyncio.gather(*(load_field_def(service, model, path) for path in unique))
    return dict(zip(unique, results))
