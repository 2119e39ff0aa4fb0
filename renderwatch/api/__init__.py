"""Public renderwatch API contracts."""

from renderwatch.api.host import (
    HostFramework,
    HostInternals,
    MemoMarker,
    Ref,
    RenderOwner,
)
from renderwatch.api.logging import LoggingConfig
from renderwatch.api.notification import (
    Difference,
    DiffType,
    Notification,
    NotificationKind,
    UpdateReason,
)
from renderwatch.api.options import (
    DEFAULT_PRIMITIVE_RULES,
    EqualityPolicy,
    PrimitiveRule,
    RenderWatchOptions,
    TrackOverrides,
)
from renderwatch.api.session import activate, deactivate, is_active

__all__ = [
    "DEFAULT_PRIMITIVE_RULES",
    "DiffType",
    "Difference",
    "EqualityPolicy",
    "HostFramework",
    "HostInternals",
    "LoggingConfig",
    "MemoMarker",
    "Notification",
    "NotificationKind",
    "PrimitiveRule",
    "Ref",
    "RenderOwner",
    "RenderWatchOptions",
    "TrackOverrides",
    "UpdateReason",
    "activate",
    "deactivate",
    "is_active",
]
