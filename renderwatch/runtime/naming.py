"""Human-readable component names."""

from __future__ import annotations

from typing import Any

from renderwatch.api.host import DISPLAY_NAME_ATTR
from renderwatch.api.options import track_overrides


def get_display_name(component: Any) -> str:
    if isinstance(component, str):
        return component
    name = getattr(component, DISPLAY_NAME_ATTR, None) or getattr(component, "__name__", None)
    if name:
        return str(name)
    inner = getattr(component, "type", None)
    if inner is not None and inner is not component:
        return get_display_name(inner)
    return "Unknown"


def custom_display_name(component: Any) -> str | None:
    overrides = track_overrides(component)
    if overrides is None:
        return None
    return overrides.custom_name or None
