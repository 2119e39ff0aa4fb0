"""Notification serialization and JSONL export."""

from __future__ import annotations

from collections.abc import Iterable, Mapping
from pathlib import Path
from typing import Any

from renderwatch.api.notification import Difference, Differences, Notification
from renderwatch.diagnostics.json_codec import dumps_text
from renderwatch.diagnostics.schema import NOTIFICATION_SCHEMA_VERSION

_MAX_DEPTH = 6


def notification_to_dict(notification: Notification) -> dict[str, Any]:
    reason = notification.reason
    payload: dict[str, Any] = {
        "schema_version": NOTIFICATION_SCHEMA_VERSION,
        "display_name": notification.display_name,
        "kind": str(notification.kind),
        "reason": {
            "props_differences": _differences(reason.props_differences),
            "state_differences": _differences(reason.state_differences),
            "primitive_differences": _differences(reason.primitive_differences),
        },
        "prev_props": _jsonable(notification.prev_props),
        "next_props": _jsonable(notification.next_props),
        "prev_state": _jsonable(notification.prev_state),
        "next_state": _jsonable(notification.next_state),
    }
    if notification.primitive_name is not None:
        payload["primitive_name"] = notification.primitive_name
        payload["prev_primitive"] = _jsonable(notification.prev_primitive)
        payload["next_primitive"] = _jsonable(notification.next_primitive)
    return payload


def export_jsonl(notifications: Iterable[Notification], *, path: Path) -> Path:
    path.parent.mkdir(parents=True, exist_ok=True)
    with path.open("a", encoding="utf-8") as out:
        for notification in notifications:
            out.write(dumps_text(notification_to_dict(notification)))
            out.write("\n")
    return path


def _differences(differences: Differences | None) -> list[dict[str, Any]] | None:
    if differences is None:
        return None
    return [_difference(diff) for diff in differences]


def _difference(diff: Difference) -> dict[str, Any]:
    return {
        "path": diff.path_string,
        "diff_type": str(diff.diff_type),
        "prev_value": _jsonable(diff.prev_value),
        "next_value": _jsonable(diff.next_value),
    }


def _jsonable(value: Any, depth: int = 0) -> Any:
    if value is None or isinstance(value, (bool, int, float, str)):
        return value
    if depth >= _MAX_DEPTH:
        return repr(value)
    if isinstance(value, Mapping):
        return {str(key): _jsonable(item, depth + 1) for key, item in value.items()}
    if isinstance(value, (list, tuple)):
        return [_jsonable(item, depth + 1) for item in value]
    return repr(value)
