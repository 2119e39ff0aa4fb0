"""Host framework extension-point contracts."""

from __future__ import annotations

from collections.abc import Callable
from typing import Any, Protocol

# Attribute names read from (or written onto) host objects and components.
MEMO_TAG_ATTR = "typeof"
STATEFUL_MARKER_ATTR = "is_stateful_component"
PURE_MARKER_ATTR = "is_pure_component"
TRACK_ATTR = "renderwatch"
ORIGINAL_ATTR = "__renderwatch_original__"
DISPLAY_NAME_ATTR = "display_name"
REVERT_ATTR = "__renderwatch_revert__"


class Ref(Protocol):
    """Persistent per-render-position storage cell."""

    current: Any


class MemoMarker(Protocol):
    """Host wrapper that skips re-rendering when props compare equal."""

    typeof: object
    type: Callable[..., Any]
    compare: Callable[[Any, Any], bool] | None


class RenderOwner(Protocol):
    """Element currently being rendered by the host."""

    type: Any


class HostInternals(Protocol):
    """Mutable render-time pointers owned by the host."""

    current_dispatcher: Any
    current_owner: RenderOwner | None


class HostFramework(Protocol):
    """Extension points a host framework exposes for instrumentation.

    Optional members, looked up with ``getattr``:

    * ``create_factory(component)`` returning a bound element factory.
    * ``is_strict_mode(instance)`` returning whether a stateful instance is
      rendered inside a double-invoking strict subtree.
    """

    MEMO_TYPE: object
    internals: HostInternals

    def create_element(self, component: Any, props: Any = None, *children: Any, **kwargs: Any) -> Any: ...

    def memo(self, component: Callable[..., Any], compare: Callable[[Any, Any], bool] | None = None) -> Any: ...

    def use_ref(self, initial: Any = None) -> Ref: ...
