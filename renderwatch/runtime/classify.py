"""Structural component classification."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from enum import StrEnum
from typing import Any

from renderwatch.api.host import (
    MEMO_TAG_ATTR,
    ORIGINAL_ATTR,
    PURE_MARKER_ATTR,
    STATEFUL_MARKER_ATTR,
)
from renderwatch.runtime.errors import RECOVERABLE_RUNTIME_ERRORS, log_recoverable

_LOG = logging.getLogger("renderwatch.runtime")


class ComponentKind(StrEnum):
    STATEFUL = "stateful"
    STATELESS = "stateless"
    MEMO = "memo"


@dataclass(frozen=True, slots=True)
class ComponentClassifier:
    """Classify components using the host's structural markers only."""

    memo_type: object

    def is_memo(self, component: Any) -> bool:
        return getattr(component, MEMO_TAG_ATTR, None) is self.memo_type

    def is_stateful(self, component: Any) -> bool:
        return isinstance(component, type) and bool(getattr(component, STATEFUL_MARKER_ATTR, False))

    def is_pure(self, component: Any) -> bool:
        return self.is_stateful(component) and bool(getattr(component, PURE_MARKER_ATTR, False))

    def is_trackable(self, component: Any) -> bool:
        """Whether ``component`` is a kind the creation interceptor may patch."""
        return callable(component) or self.is_memo(component)

    def is_patched(self, component: Any) -> bool:
        return getattr(component, ORIGINAL_ATTR, None) is not None

    def classify(self, component: Any) -> ComponentKind:
        try:
            if self.is_memo(component):
                return ComponentKind.MEMO
            if self.is_stateful(component):
                return ComponentKind.STATEFUL
        except RECOVERABLE_RUNTIME_ERRORS:
            log_recoverable(_LOG, "component_classification_failed")
        return ComponentKind.STATELESS
