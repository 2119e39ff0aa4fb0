"""Option normalization and environment-sourced defaults."""

from __future__ import annotations

import os
import re
from collections.abc import Iterable, Mapping
from dataclasses import fields, replace
from types import MappingProxyType
from typing import Any

from renderwatch.api.options import (
    DEFAULT_PRIMITIVE_RULES,
    EqualityPolicy,
    PrimitivePath,
    PrimitiveRule,
    RenderWatchOptions,
)
from renderwatch.diagnostics.notifier import LoggingNotifier
from renderwatch.runtime.naming import get_display_name
from renderwatch.runtime.pipeline import log_diagnostic

_OPTION_FIELDS = frozenset(item.name for item in fields(RenderWatchOptions))


def _flag(name: str) -> bool | None:
    raw = os.getenv(name)
    if raw is None:
        return None
    return raw.strip().lower() in {"1", "true", "yes", "on"}


def _str(name: str) -> str | None:
    raw = os.getenv(name)
    if raw is None:
        return None
    value = raw.strip()
    return value if value else None


def _csv(name: str) -> tuple[str, ...]:
    raw = os.getenv(name)
    if raw is None:
        return ()
    values = [part.strip() for part in raw.split(",")]
    return tuple(value for value in values if value)


def resolve_log_level_name(default: str = "INFO") -> str:
    """Resolve log level with renderwatch-prefixed override."""
    value = os.getenv("RENDERWATCH_LOG_LEVEL")
    if value is None:
        value = os.getenv("LOG_LEVEL", default)
    return value.strip().upper()


def load_env_options() -> dict[str, Any]:
    """Return option overrides present in the environment."""
    out: dict[str, Any] = {}
    include = _csv("RENDERWATCH_INCLUDE")
    if include:
        out["include"] = include
    exclude = _csv("RENDERWATCH_EXCLUDE")
    if exclude:
        out["exclude"] = exclude
    track_primitives = _flag("RENDERWATCH_TRACK_PRIMITIVES")
    if track_primitives is not None:
        out["track_primitives"] = track_primitives
    track_all_pure = _flag("RENDERWATCH_TRACK_ALL_PURE")
    if track_all_pure is not None:
        out["track_all_pure_components"] = track_all_pure
    equality = _str("RENDERWATCH_EQUALITY")
    if equality is not None and equality.lower() in {policy.value for policy in EqualityPolicy}:
        out["equality"] = equality.lower()
    log_on_different_values = _flag("RENDERWATCH_LOG_ON_DIFFERENT_VALUES")
    if log_on_different_values is not None:
        out["log_on_different_values"] = log_on_different_values
    return out


def normalize_options(
    user_options: RenderWatchOptions | Mapping[str, Any] | None = None,
) -> RenderWatchOptions:
    """Resolve user options over environment defaults and fill collaborators."""
    if isinstance(user_options, RenderWatchOptions):
        return _with_collaborators(user_options)
    raw = load_env_options()
    raw.update(dict(user_options or {}))
    unknown = sorted(set(raw) - _OPTION_FIELDS)
    if unknown:
        raise ValueError(f"unknown renderwatch options: {', '.join(unknown)}")
    options = RenderWatchOptions(
        include=_patterns(raw.get("include", ())),
        exclude=_patterns(raw.get("exclude", ())),
        track_all_pure_components=bool(raw.get("track_all_pure_components", False)),
        track_primitives=bool(raw.get("track_primitives", True)),
        primitive_rules=_primitive_rules(raw.get("primitive_rules", DEFAULT_PRIMITIVE_RULES)),
        equality=EqualityPolicy(raw.get("equality", EqualityPolicy.SHALLOW)),
        field_equality=MappingProxyType(dict(raw.get("field_equality") or {})),
        log_on_different_values=bool(raw.get("log_on_different_values", False)),
        notifier=raw.get("notifier"),
        diagnostic_log=raw.get("diagnostic_log"),
        name_resolver=raw.get("name_resolver"),
    )
    return _with_collaborators(options)


def parse_primitive_path(value: Any) -> PrimitivePath:
    """Accept ``0``, ``"0"``, ``"value.items"`` or a sequence of segments."""
    if isinstance(value, int):
        return (value,)
    if isinstance(value, str):
        return tuple(int(part) if part.isdigit() else part for part in value.split(".") if part)
    return tuple(value)


def _with_collaborators(options: RenderWatchOptions) -> RenderWatchOptions:
    updates: dict[str, Any] = {}
    if options.notifier is None:
        updates["notifier"] = LoggingNotifier(
            log_on_different_values=options.log_on_different_values
        )
    if options.diagnostic_log is None:
        updates["diagnostic_log"] = log_diagnostic
    if options.name_resolver is None:
        updates["name_resolver"] = get_display_name
    if not updates:
        return options
    return replace(options, **updates)


def _patterns(values: str | re.Pattern[str] | Iterable[str | re.Pattern[str]]) -> tuple[re.Pattern[str], ...]:
    if isinstance(values, (str, re.Pattern)):
        values = (values,)
    return tuple(value if isinstance(value, re.Pattern) else re.compile(value) for value in values)


def _primitive_rules(raw: Mapping[str, Any]) -> Mapping[str, PrimitiveRule]:
    rules: dict[str, PrimitiveRule] = {}
    for name, value in dict(raw).items():
        if value is None or value is False:
            continue
        if value is True:
            rules[name] = PrimitiveRule()
        elif isinstance(value, PrimitiveRule):
            rules[name] = value
        else:
            rules[name] = PrimitiveRule(path=parse_primitive_path(value))
    return MappingProxyType(rules)
