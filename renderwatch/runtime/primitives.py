"""Interception of the host's render-time primitive dispatcher."""

from __future__ import annotations

import logging
from collections.abc import Callable, Mapping, Sequence
from typing import Any

from renderwatch.api.host import ORIGINAL_ATTR, HostFramework
from renderwatch.api.options import PrimitivePath, PrimitiveRule, RenderWatchOptions
from renderwatch.runtime.classify import ComponentClassifier
from renderwatch.runtime.errors import (
    RECOVERABLE_RUNTIME_ERRORS,
    PrimitiveDispatchUnavailableError,
)
from renderwatch.runtime.naming import custom_display_name, get_display_name
from renderwatch.runtime.pipeline import build_primitive_notification, deliver, report_diagnostic
from renderwatch.runtime.state import tracking_slot
from renderwatch.runtime.tracking import should_track

_LOG = logging.getLogger("renderwatch.primitives")

DISPATCHER_ATTR = "current_dispatcher"


class TrackedDispatcher:
    """Proxy over a real dispatcher that observes configured primitives."""

    __slots__ = ("wrapped", "_interceptor")

    def __init__(self, wrapped: Any, interceptor: PrimitiveInterceptor) -> None:
        self.wrapped = wrapped
        self._interceptor = interceptor

    def __getattr__(self, name: str) -> Any:
        target = getattr(self.wrapped, name)
        rule = self._interceptor.rule_for(name)
        if rule is None or not callable(target):
            return target
        return self._interceptor.wrap_primitive(name, rule, target)


class PrimitiveInterceptor:
    """Own the host's dispatcher pointer for the lifetime of one activation."""

    def __init__(
        self,
        *,
        host: HostFramework,
        options: RenderWatchOptions,
        classifier: ComponentClassifier,
    ) -> None:
        self._host = host
        self._options = options
        self._classifier = classifier
        self._resolve_name = options.name_resolver or get_display_name
        self._holder: Any = None
        self._holder_class: type | None = None
        self._real: Any = None
        self._proxy: TrackedDispatcher | None = None

    @property
    def installed(self) -> bool:
        return self._holder is not None

    @property
    def real_dispatcher(self) -> Any:
        return self._real

    def install(self) -> None:
        holder = locate_dispatch_holder(self._host)
        original_class = type(holder)
        real = _unwrap(getattr(holder, DISPATCHER_ATTR))
        try:
            tracked_class = _tracked_holder_class(original_class, self)
            holder.__class__ = tracked_class
        except TypeError as exc:
            raise PrimitiveDispatchUnavailableError(
                f"cannot intercept dispatcher holder of type {original_class.__qualname__}"
            ) from exc
        self._holder = holder
        self._holder_class = original_class
        self._real = real
        _LOG.debug("primitive_dispatcher_installed holder=%s", original_class.__qualname__)

    def uninstall(self) -> None:
        holder = self._holder
        if holder is None or self._holder_class is None:
            return
        holder.__class__ = self._holder_class
        setattr(holder, DISPATCHER_ATTR, self._real)
        self._holder = None
        self._holder_class = None
        self._proxy = None
        _LOG.debug("primitive_dispatcher_restored")

    def current(self) -> Any:
        real = self._real
        if real is None:
            return None
        if self._proxy is None or self._proxy.wrapped is not real:
            self._proxy = TrackedDispatcher(real, self)
        return self._proxy

    def set_real(self, value: Any) -> None:
        self._real = _unwrap(value)

    def rule_for(self, name: str) -> PrimitiveRule | None:
        return self._options.primitive_rules.get(name)

    def wrap_primitive(
        self,
        name: str,
        rule: PrimitiveRule,
        target: Callable[..., Any],
    ) -> Callable[..., Any]:
        def tracked_primitive(*args: Any, **kwargs: Any) -> Any:
            result = target(*args, **kwargs)
            try:
                self.observe(name, rule, result)
            except RECOVERABLE_RUNTIME_ERRORS:
                report_diagnostic(
                    self._options,
                    "renderwatch_primitive_tracking_failed",
                    {"primitive": name, "path": rule.path},
                )
            return result

        tracked_primitive.__name__ = name
        return tracked_primitive

    def observe(self, name: str, rule: PrimitiveRule, result: Any) -> None:
        owner = getattr(self._holder, "current_owner", None)
        owner_type = getattr(owner, "type", None)
        if owner_type is None:
            return
        component = getattr(owner_type, ORIGINAL_ATTR, None) or owner_type
        display_name = custom_display_name(component) or self._resolve_name(component)
        if not should_track(component, display_name, self._options, classifier=self._classifier):
            return
        next_value = resolve_path(result, rule.path)
        had_previous, prev_value = tracking_slot(self._host).observe(next_value)
        if not had_previous:
            return
        notification = build_primitive_notification(
            component=component,
            display_name=display_name,
            primitive_name=name,
            prev_value=prev_value,
            next_value=next_value,
            options=self._options,
        )
        if notification.reason.primitive_differences:
            deliver(notification, self._options)


def locate_dispatch_holder(host: HostFramework) -> Any:
    """Return the object carrying the dispatcher pointer or fail activation."""
    holder = getattr(host, "internals", None)
    if holder is None or not hasattr(holder, DISPATCHER_ATTR):
        raise PrimitiveDispatchUnavailableError(
            "primitive tracking requested but host.internals.current_dispatcher is unavailable"
        )
    return holder


def resolve_path(value: Any, path: PrimitivePath) -> Any:
    """Follow ``path`` through mappings, sequences and attributes; None when missing."""
    current = value
    for segment in path:
        if current is None:
            return None
        if isinstance(current, Mapping):
            current = current.get(segment)
        elif isinstance(segment, int) and isinstance(current, Sequence):
            current = current[segment] if -len(current) <= segment < len(current) else None
        else:
            current = getattr(current, str(segment), None)
    return current


def _unwrap(dispatcher: Any) -> Any:
    if isinstance(dispatcher, TrackedDispatcher):
        return dispatcher.wrapped
    return dispatcher


def _tracked_holder_class(original_class: type, interceptor: PrimitiveInterceptor) -> type:
    def _get(holder: Any) -> Any:
        _ = holder
        return interceptor.current()

    def _set(holder: Any, value: Any) -> None:
        _ = holder
        interceptor.set_real(value)

    return type(
        f"RenderWatch{original_class.__name__}",
        (original_class,),
        {
            "__slots__": (),
            "__module__": original_class.__module__,
            DISPATCHER_ATTR: property(_get, _set),
        },
    )
