"""Diagnostics schema version constants."""

from __future__ import annotations

NOTIFICATION_SCHEMA_VERSION = "renderwatch.notification.v1"
