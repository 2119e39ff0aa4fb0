"""Notification assembly and delivery."""

from __future__ import annotations

import logging
from collections.abc import Mapping
from typing import Any

from renderwatch.api.notification import Notification, NotificationKind, UpdateReason
from renderwatch.api.options import RenderWatchOptions
from renderwatch.runtime.diff import find_differences
from renderwatch.runtime.errors import RECOVERABLE_RUNTIME_ERRORS

_LOG = logging.getLogger("renderwatch.runtime")


def build_render_notification(
    *,
    component: Any,
    display_name: str,
    prev_props: Any,
    next_props: Any,
    options: RenderWatchOptions,
    with_state: bool = False,
    prev_state: Any = None,
    next_state: Any = None,
) -> Notification:
    state_differences = None
    if with_state:
        state_differences = find_differences(
            prev_state,
            next_state,
            equality=options.equality,
            field_equality=options.field_equality,
        )
    reason = UpdateReason(
        props_differences=find_differences(
            prev_props,
            next_props,
            equality=options.equality,
            field_equality=options.field_equality,
        ),
        state_differences=state_differences,
    )
    return Notification(
        component=component,
        display_name=display_name,
        kind=NotificationKind.RENDER,
        reason=reason,
        prev_props=prev_props,
        next_props=next_props,
        prev_state=prev_state,
        next_state=next_state,
    )


def build_primitive_notification(
    *,
    component: Any,
    display_name: str,
    primitive_name: str,
    prev_value: Any,
    next_value: Any,
    options: RenderWatchOptions,
) -> Notification:
    reason = UpdateReason(
        primitive_differences=find_differences(
            prev_value,
            next_value,
            shallow=False,
            equality=options.equality,
            field_equality=options.field_equality,
        )
    )
    return Notification(
        component=component,
        display_name=display_name,
        kind=NotificationKind.PRIMITIVE,
        reason=reason,
        primitive_name=primitive_name,
        prev_primitive=prev_value,
        next_primitive=next_value,
    )


def deliver(notification: Notification, options: RenderWatchOptions) -> None:
    """Hand ``notification`` to the configured notifier without disturbing the render."""
    notifier = options.notifier
    if notifier is None:
        return
    try:
        notifier(notification)
    except RECOVERABLE_RUNTIME_ERRORS:
        report_diagnostic(
            options,
            "renderwatch_notifier_failed",
            {"display_name": notification.display_name, "kind": str(notification.kind)},
        )


def log_diagnostic(message: str, context: Mapping[str, Any]) -> None:
    """Default diagnostic sink; called from ``except`` blocks so the traceback is kept."""
    _LOG.error("%s context=%r", message, dict(context), exc_info=True)


def report_diagnostic(options: RenderWatchOptions, message: str, context: dict[str, Any]) -> None:
    sink = options.diagnostic_log or log_diagnostic
    sink(message, context)
