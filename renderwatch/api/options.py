"""Public instrumentation options."""

from __future__ import annotations

import re
from collections.abc import Callable, Mapping
from dataclasses import dataclass, field
from enum import StrEnum
from types import MappingProxyType
from typing import Any

from renderwatch.api.host import TRACK_ATTR
from renderwatch.api.notification import Notification

Notifier = Callable[[Notification], None]
DiagnosticLog = Callable[[str, Mapping[str, Any]], None]
NameResolver = Callable[[Any], str]
FieldEquality = Callable[[Any, Any], bool]
PrimitivePath = tuple[str | int, ...]


class EqualityPolicy(StrEnum):
    SHALLOW = "shallow"
    DEEP = "deep"


@dataclass(frozen=True, slots=True)
class PrimitiveRule:
    """Sub-path of a primitive result compared between renders.

    An empty path compares the whole result.
    """

    path: PrimitivePath = ()


@dataclass(frozen=True, slots=True)
class TrackOverrides:
    """Per-component overrides attached as ``component.renderwatch``."""

    custom_name: str | None = None
    log_on_different_values: bool = False


DEFAULT_PRIMITIVE_RULES: Mapping[str, PrimitiveRule] = MappingProxyType(
    {
        "use_state": PrimitiveRule(path=(0,)),
        "use_reducer": PrimitiveRule(path=(0,)),
        "use_context": PrimitiveRule(),
        "use_memo": PrimitiveRule(),
    }
)


@dataclass(frozen=True, slots=True)
class RenderWatchOptions:
    """Immutable options resolved once per activation."""

    include: tuple[re.Pattern[str], ...] = ()
    exclude: tuple[re.Pattern[str], ...] = ()
    track_all_pure_components: bool = False
    track_primitives: bool = True
    primitive_rules: Mapping[str, PrimitiveRule] = field(
        default_factory=lambda: DEFAULT_PRIMITIVE_RULES
    )
    equality: EqualityPolicy = EqualityPolicy.SHALLOW
    field_equality: Mapping[str, FieldEquality] = field(
        default_factory=lambda: MappingProxyType({})
    )
    log_on_different_values: bool = False
    notifier: Notifier | None = None
    diagnostic_log: DiagnosticLog | None = None
    name_resolver: NameResolver | None = None


def track_overrides(component: Any) -> TrackOverrides | None:
    """Return the overrides attached to ``component``, if any."""
    value = getattr(component, TRACK_ATTR, None)
    if isinstance(value, TrackOverrides):
        return value
    return None
