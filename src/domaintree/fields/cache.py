"""Caches for resolved field paths."""

from __future__ import annotations

from typing import Dict, Optional, Protocol, Tuple

from .schema import PathInfo


class FieldCache(Protocol):
    def get(self, model: str, path: str) -> Optional[PathInfo]: ...

    def set(self, model: str, path: str, info: PathInfo) -> None: ...

    def delete(self, model: str, path: str) -> None: ...

    def clear(self) -> None: ...


class NoOpFieldCache:
    def get(self, model: str, path: str) -> Optional[PathInfo]:
        return None

    def set(self, model: str, path: str, info: PathInfo) -> None:
        return None

    def delete(self, model: str, path: str) -> None:
        return None

    def clear(self) -> None:
        return None


class InMemoryFieldCache:
    def __init__(self) -> None:
        self._store: Dict[Tuple[str, str], PathInfo] = {}

    def get(self, model: str, path: str) -> Optional[PathInfo]:
        return self._store.get((model, path))

    def set(self, model: str, path: str, info: PathInfo) -> None:
        self._store[(model, path)] = info

    def delete(self, model: str, path: str) -> None:
        self._store.pop((model, path), None)

    def clear(self) -> None:
        self._store.clear()

    def __len__(self) -> int:
        return len(self._store)
