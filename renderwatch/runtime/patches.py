"""Behavior-preserving component wrappers.

Each patched variant keeps the calling contract of the component it wraps and
records a back-reference to it under ``ORIGINAL_ATTR``. Prior inputs live in
host-owned storage: the stateful instance itself, or a ref at the render
position for function components.
"""

from __future__ import annotations

import functools
from collections.abc import Callable
from typing import Any

from renderwatch.api.host import DISPLAY_NAME_ATTR, ORIGINAL_ATTR, HostFramework
from renderwatch.api.options import RenderWatchOptions
from renderwatch.runtime.classify import ComponentClassifier, ComponentKind
from renderwatch.runtime.errors import RECOVERABLE_RUNTIME_ERRORS
from renderwatch.runtime.naming import get_display_name
from renderwatch.runtime.pipeline import build_render_notification, deliver, report_diagnostic
from renderwatch.runtime.state import INSTANCE_STATE_ATTR, InstrumentationState, tracking_slot

StrictModeProbe = Callable[[Any], bool]


def create_patched_component(
    component: Any,
    display_name: str,
    *,
    host: HostFramework,
    options: RenderWatchOptions,
    classifier: ComponentClassifier,
) -> Any:
    kind = classifier.classify(component)
    if kind is ComponentKind.MEMO:
        return patch_memo_component(component, display_name, host=host, options=options)
    if kind is ComponentKind.STATEFUL:
        return patch_stateful_component(
            component,
            display_name,
            options=options,
            strict_mode_probe=_strict_mode_probe(host),
        )
    return patch_stateless_component(component, display_name, host=host, options=options)


def patch_stateful_component(
    component: type,
    display_name: str,
    *,
    options: RenderWatchOptions,
    strict_mode_probe: StrictModeProbe,
) -> type:
    """Subclass ``component`` so every render is compared with the previous one."""

    class RenderWatchStatefulComponent(component):  # type: ignore[misc, valid-type]
        def __init__(self, *args: Any, **kwargs: Any) -> None:
            super().__init__(*args, **kwargs)
            setattr(self, INSTANCE_STATE_ATTR, InstrumentationState())
            bound_render = getattr(self, "__dict__", {}).get("render")
            # A re-bound copy of this class's own render is already observed.
            own_render = getattr(bound_render, "__func__", None) is RenderWatchStatefulComponent.render
            if bound_render is not None and not own_render:
                # render was bound on the instance and shadows the class method.
                def render() -> Any:
                    _observe_stateful_render(self)
                    return bound_render()

                self.render = render

        def render(self) -> Any:
            _observe_stateful_render(self)
            return super().render()

    def _observe_stateful_render(instance: Any) -> None:
        state: InstrumentationState = getattr(instance, INSTANCE_STATE_ATTR)
        state.render_number += 1
        if state.strict_mode is None:
            state.strict_mode = bool(strict_mode_probe(instance))
        # Strict subtrees render twice; only the second pass is compared.
        if state.strict_mode and state.render_number % 2 == 1:
            return
        next_props = getattr(instance, "props", None)
        next_state = getattr(instance, "state", None)
        if state.has_snapshot:
            try:
                notification = build_render_notification(
                    component=component,
                    display_name=display_name,
                    prev_props=state.prev_props,
                    next_props=next_props,
                    options=options,
                    with_state=True,
                    prev_state=state.prev_state,
                    next_state=next_state,
                )
                reason = notification.reason
                if reason.props_differences is not None or reason.state_differences is not None:
                    deliver(notification, options)
            except RECOVERABLE_RUNTIME_ERRORS:
                _report_diff_failure(options, display_name, ComponentKind.STATEFUL)
        state.prev_props = next_props
        state.prev_state = next_state
        state.has_snapshot = True

    RenderWatchStatefulComponent.__name__ = component.__name__
    RenderWatchStatefulComponent.__qualname__ = component.__qualname__
    RenderWatchStatefulComponent.__module__ = component.__module__
    RenderWatchStatefulComponent.__doc__ = component.__doc__
    setattr(RenderWatchStatefulComponent, DISPLAY_NAME_ATTR, display_name)
    setattr(RenderWatchStatefulComponent, ORIGINAL_ATTR, component)
    return RenderWatchStatefulComponent


def patch_stateless_component(
    component: Callable[..., Any],
    display_name: str,
    *,
    host: HostFramework,
    options: RenderWatchOptions,
) -> Callable[..., Any]:
    @functools.wraps(component)
    def tracked(*args: Any, **kwargs: Any) -> Any:
        next_props = args[0] if args else kwargs
        had_previous, prev_props = tracking_slot(host).observe(next_props)
        if had_previous:
            try:
                notification = build_render_notification(
                    component=component,
                    display_name=display_name,
                    prev_props=prev_props,
                    next_props=next_props,
                    options=options,
                )
                # No props change at all means the host re-ran the function for
                # another reason (state primitives), which is not attributable here.
                if notification.reason.props_differences is not None:
                    deliver(notification, options)
            except RECOVERABLE_RUNTIME_ERRORS:
                _report_diff_failure(options, display_name, ComponentKind.STATELESS)
        return component(*args, **kwargs)

    setattr(tracked, DISPLAY_NAME_ATTR, display_name)
    setattr(tracked, ORIGINAL_ATTR, component)
    return tracked


def patch_memo_component(
    marker: Any,
    display_name: str,
    *,
    host: HostFramework,
    options: RenderWatchOptions,
) -> Any:
    """Wrap the function inside ``marker`` and re-memoize it with the same comparator."""
    inner = marker.type
    resolve_name = options.name_resolver or get_display_name

    @functools.wraps(inner)
    def tracked(*args: Any, **kwargs: Any) -> Any:
        next_props = args[0] if args else kwargs
        had_previous, prev_props = tracking_slot(host).observe(next_props)
        if had_previous:
            try:
                notification = build_render_notification(
                    component=marker,
                    display_name=display_name,
                    prev_props=prev_props,
                    next_props=next_props,
                    options=options,
                )
                if notification.reason.props_differences:
                    deliver(notification, options)
            except RECOVERABLE_RUNTIME_ERRORS:
                _report_diff_failure(options, display_name, ComponentKind.MEMO)
        return inner(*args, **kwargs)

    setattr(tracked, DISPLAY_NAME_ATTR, resolve_name(inner))
    setattr(tracked, ORIGINAL_ATTR, marker)

    patched = host.memo(tracked, marker.compare)
    _copy_missing_attributes(patched, marker)
    setattr(patched, DISPLAY_NAME_ATTR, display_name)
    setattr(patched, ORIGINAL_ATTR, marker)
    return patched


def _copy_missing_attributes(target: Any, source: Any) -> None:
    source_attrs = getattr(source, "__dict__", None)
    target_attrs = getattr(target, "__dict__", None)
    if source_attrs is None or target_attrs is None:
        return
    for key, value in source_attrs.items():
        if key not in target_attrs:
            setattr(target, key, value)


def _report_diff_failure(options: RenderWatchOptions, display_name: str, kind: ComponentKind) -> None:
    report_diagnostic(
        options,
        "renderwatch_render_diff_failed",
        {"display_name": display_name, "kind": str(kind)},
    )


def _strict_mode_probe(host: HostFramework) -> StrictModeProbe:
    probe = getattr(host, "is_strict_mode", None)
    if probe is None:
        return _never_strict
    return probe


def _never_strict(instance: Any) -> bool:
    _ = instance
    return False
