"""Policy deciding which components are instrumented."""

from __future__ import annotations

import re
from collections.abc import Iterable
from typing import Any

from renderwatch.api.host import TRACK_ATTR
from renderwatch.api.options import RenderWatchOptions
from renderwatch.runtime.classify import ComponentClassifier


def should_track(
    component: Any,
    display_name: str,
    options: RenderWatchOptions,
    *,
    classifier: ComponentClassifier,
) -> bool:
    if _matches(options.exclude, display_name):
        return False
    if _has_track_flag(component, classifier):
        return True
    if options.track_all_pure_components and (
        classifier.is_pure(component) or classifier.is_memo(component)
    ):
        return True
    return _matches(options.include, display_name)


def _has_track_flag(component: Any, classifier: ComponentClassifier) -> bool:
    if getattr(component, TRACK_ATTR, None):
        return True
    if classifier.is_memo(component):
        return bool(getattr(component.type, TRACK_ATTR, None))
    return False


def _matches(patterns: Iterable[re.Pattern[str]], display_name: str) -> bool:
    return any(pattern.search(display_name) for pattern in patterns)
