"""Detect and explain avoidable re-renders in declarative component frameworks."""

from renderwatch.api import (
    DiffType,
    Difference,
    EqualityPolicy,
    Notification,
    NotificationKind,
    PrimitiveRule,
    RenderWatchOptions,
    TrackOverrides,
    UpdateReason,
    activate,
    deactivate,
    is_active,
)

__all__ = [
    "DiffType",
    "Difference",
    "EqualityPolicy",
    "Notification",
    "NotificationKind",
    "PrimitiveRule",
    "RenderWatchOptions",
    "TrackOverrides",
    "UpdateReason",
    "activate",
    "deactivate",
    "is_active",
]
