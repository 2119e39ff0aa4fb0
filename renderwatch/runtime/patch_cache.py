"""Identity-keyed cache of patched component variants."""

from __future__ import annotations

from collections.abc import Callable
from typing import Any


class PatchCache:
    """Map each original component (by identity) to exactly one patched variant.

    Entries hold the original component so its ``id`` cannot be reused while
    the cache is alive. One cache lives for one activation.
    """

    def __init__(self) -> None:
        self._entries: dict[int, tuple[Any, Any]] = {}

    def __len__(self) -> int:
        return len(self._entries)

    def __contains__(self, component: object) -> bool:
        return self.get(component) is not None

    def get(self, component: Any) -> Any | None:
        entry = self._entries.get(id(component))
        if entry is None or entry[0] is not component:
            return None
        return entry[1]

    def get_or_create(self, component: Any, factory: Callable[[], Any]) -> Any:
        patched = self.get(component)
        if patched is not None:
            return patched
        patched = factory()
        self._entries[id(component)] = (component, patched)
        return patched

    def clear(self) -> None:
        self._entries.clear()
