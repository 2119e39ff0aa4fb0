"""Element-construction interception."""

from __future__ import annotations

import functools
import logging
from collections.abc import Callable
from typing import Any

from renderwatch.api.host import HostFramework
from renderwatch.api.options import RenderWatchOptions
from renderwatch.runtime.classify import ComponentClassifier
from renderwatch.runtime.naming import custom_display_name, get_display_name
from renderwatch.runtime.patch_cache import PatchCache
from renderwatch.runtime.patches import create_patched_component
from renderwatch.runtime.pipeline import report_diagnostic
from renderwatch.runtime.tracking import should_track

_LOG = logging.getLogger("renderwatch.runtime")


class CreationInterceptor:
    """Replacement for ``host.create_element`` that substitutes patched variants.

    Instrumentation errors are reported and the original component is used
    for that call; they never reach the caller.
    """

    def __init__(
        self,
        *,
        host: HostFramework,
        original_create_element: Callable[..., Any],
        cache: PatchCache,
        classifier: ComponentClassifier,
        options: RenderWatchOptions,
    ) -> None:
        self._host = host
        self._original = original_create_element
        self._cache = cache
        self._classifier = classifier
        self._options = options
        self._resolve_name = options.name_resolver or get_display_name

    @property
    def original(self) -> Callable[..., Any]:
        return self._original

    def __call__(self, component: Any, *args: Any, **kwargs: Any) -> Any:
        patched = self.resolve(component, args, kwargs)
        if patched is not None:
            return self._original(patched, *args, **kwargs)
        return self._original(component, *args, **kwargs)

    def resolve(self, component: Any, args: tuple[Any, ...], kwargs: dict[str, Any]) -> Any | None:
        """Return the patched variant to construct with, or None for pass-through."""
        eligible: bool | None = None
        display_name: str | None = None
        patched: Any = None
        # Every failure falls through to the original component.
        try:
            if not self._classifier.is_trackable(component) or self._classifier.is_patched(component):
                return None
            resolved_name = self._resolve_name(component)
            eligible = should_track(
                component,
                resolved_name,
                self._options,
                classifier=self._classifier,
            )
            if not eligible:
                return None
            display_name = custom_display_name(component) or resolved_name
            patched = self._cache.get_or_create(
                component,
                lambda: create_patched_component(
                    component,
                    display_name,
                    host=self._host,
                    options=self._options,
                    classifier=self._classifier,
                ),
            )
            return patched
        except Exception:  # noqa: BLE001
            report_diagnostic(
                self._options,
                "renderwatch_creation_failed",
                {
                    "component": component,
                    "args": args,
                    "kwargs": kwargs,
                    "options": self._options,
                    "eligible": eligible,
                    "display_name": display_name,
                    "patched": patched,
                },
            )
            return None


def make_factory(create_element: Callable[..., Any]) -> Callable[[Any], Any]:
    """Build a ``create_factory`` replacement bound to ``create_element``."""

    def create_factory(component: Any) -> Any:
        factory = functools.partial(create_element, component)
        factory.type = component  # type: ignore[attr-defined]
        return factory

    return create_factory
