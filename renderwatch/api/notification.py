"""Structured render notification payloads."""

from __future__ import annotations

from dataclasses import dataclass
from enum import StrEnum
from typing import Any


class DiffType(StrEnum):
    DIFFERENT = "different"
    DEEP_EQUALS = "deep_equals"
    FUNCTIONS_WITH_SAME_NAME = "functions_with_same_name"


class NotificationKind(StrEnum):
    RENDER = "render"
    PRIMITIVE = "primitive"


@dataclass(frozen=True, slots=True)
class Difference:
    """Single field-level difference between two snapshots."""

    path_string: str
    diff_type: DiffType
    prev_value: Any
    next_value: Any


Differences = tuple[Difference, ...]


@dataclass(frozen=True, slots=True)
class UpdateReason:
    """Why a component re-rendered.

    Each entry is ``None`` when the compared values were identical (nothing
    to attribute) and a possibly empty tuple otherwise.
    """

    props_differences: Differences | None = None
    state_differences: Differences | None = None
    primitive_differences: Differences | None = None

    @property
    def differences(self) -> Differences:
        out: list[Difference] = []
        for group in (self.props_differences, self.state_differences, self.primitive_differences):
            if group:
                out.extend(group)
        return tuple(out)

    @property
    def has_different_values(self) -> bool:
        return any(diff.diff_type is DiffType.DIFFERENT for diff in self.differences)


@dataclass(frozen=True, slots=True)
class Notification:
    """Payload delivered to the configured notifier."""

    component: Any
    display_name: str
    kind: NotificationKind
    reason: UpdateReason
    prev_props: Any = None
    next_props: Any = None
    prev_state: Any = None
    next_state: Any = None
    primitive_name: str | None = None
    prev_primitive: Any = None
    next_primitive: Any = None
