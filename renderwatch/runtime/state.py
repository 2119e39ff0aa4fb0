"""Per-instance and per-position instrumentation storage."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any

from renderwatch.api.host import HostFramework

INSTANCE_STATE_ATTR = "_renderwatch"


@dataclass(slots=True)
class InstrumentationState:
    """Render bookkeeping stored on one stateful instance."""

    render_number: int = 0
    strict_mode: bool | None = None
    has_snapshot: bool = False
    prev_props: Any = None
    prev_state: Any = None


@dataclass(slots=True)
class TrackingSlot:
    """Previous observed value for one render position."""

    previous: Any = None
    observed: bool = False

    def observe(self, value: Any) -> tuple[bool, Any]:
        """Store ``value``; return whether a previous value existed and what it was."""
        had_previous, previous = self.observed, self.previous
        self.previous = value
        self.observed = True
        return had_previous, previous


def tracking_slot(host: HostFramework) -> TrackingSlot:
    """Return the slot held by the host's ref at the current render position."""
    ref = host.use_ref(None)
    slot = ref.current
    if not isinstance(slot, TrackingSlot):
        slot = TrackingSlot()
        ref.current = slot
    return slot
