"""Default notifier that reports avoidable re-renders through logging."""

from __future__ import annotations

import logging

from renderwatch.api.notification import Differences, Notification, NotificationKind
from renderwatch.api.options import track_overrides

_LOG = logging.getLogger("renderwatch.notifier")


class LoggingNotifier:
    """Log notifications whose differences are equal by value.

    Notifications that contain a truly different value are skipped unless
    ``log_on_different_values`` is set here or on the component's overrides.
    """

    def __init__(
        self,
        *,
        logger: logging.Logger | None = None,
        level: int = logging.WARNING,
        log_on_different_values: bool = False,
    ) -> None:
        self._logger = logger or _LOG
        self._level = level
        self._log_on_different_values = bool(log_on_different_values)

    def should_log(self, notification: Notification) -> bool:
        if self._log_on_different_values:
            return True
        overrides = track_overrides(notification.component)
        if overrides is not None and overrides.log_on_different_values:
            return True
        return not notification.reason.has_different_values

    def __call__(self, notification: Notification) -> None:
        if not self.should_log(notification) or not self._logger.isEnabledFor(self._level):
            return
        name = notification.display_name
        if notification.kind is NotificationKind.PRIMITIVE:
            self._logger.log(
                self._level,
                "avoidable_rerender component=%s primitive=%s",
                name,
                notification.primitive_name,
                extra={"display_name": name, "notification_kind": str(notification.kind)},
            )
        else:
            self._logger.log(
                self._level,
                "avoidable_rerender component=%s",
                name,
                extra={"display_name": name, "notification_kind": str(notification.kind)},
            )
        reason = notification.reason
        self._log_group(name, "props", reason.props_differences)
        self._log_group(name, "state", reason.state_differences)
        self._log_group(name, "primitive", reason.primitive_differences)

    def _log_group(self, name: str, source: str, differences: Differences | None) -> None:
        if differences is None:
            return
        if not differences:
            self._logger.log(
                self._level,
                "rerender_reason component=%s source=%s detail=equal_values_new_object",
                name,
                source,
            )
            return
        for diff in differences:
            self._logger.log(
                self._level,
                "rerender_reason component=%s source=%s path=%s type=%s prev=%r next=%r",
                name,
                source,
                diff.path_string or "<root>",
                diff.diff_type,
                diff.prev_value,
                diff.next_value,
            )
