"""Instrumentation session owning every interception point on one host."""

from __future__ import annotations

import logging
from collections.abc import Mapping
from enum import StrEnum
from typing import Any

from renderwatch.api.host import REVERT_ATTR, HostFramework
from renderwatch.api.options import RenderWatchOptions
from renderwatch.runtime.classify import ComponentClassifier
from renderwatch.runtime.config import normalize_options
from renderwatch.runtime.creation import CreationInterceptor, make_factory
from renderwatch.runtime.patch_cache import PatchCache
from renderwatch.runtime.primitives import PrimitiveInterceptor

_LOG = logging.getLogger("renderwatch.runtime")


class SessionState(StrEnum):
    INACTIVE = "inactive"
    ACTIVE = "active"


class InstrumentationSession:
    """Inactive -> Active -> Inactive lifecycle over one host framework.

    Only one session may own a host at a time; activating twice or
    deactivating an inactive session is not guarded.
    """

    def __init__(
        self,
        *,
        host: HostFramework,
        options: RenderWatchOptions | Mapping[str, Any] | None = None,
    ) -> None:
        self._host = host
        self._user_options = options
        self._state = SessionState.INACTIVE
        self._options: RenderWatchOptions | None = None
        self._cache: PatchCache | None = None
        self._creation: CreationInterceptor | None = None
        self._primitives: PrimitiveInterceptor | None = None
        self._original_create_factory: Any = None

    @property
    def state(self) -> SessionState:
        return self._state

    @property
    def active(self) -> bool:
        return self._state is SessionState.ACTIVE

    @property
    def options(self) -> RenderWatchOptions | None:
        return self._options

    @property
    def cache(self) -> PatchCache | None:
        return self._cache

    def activate(self) -> None:
        host = self._host
        options = normalize_options(self._user_options)
        classifier = ComponentClassifier(memo_type=host.MEMO_TYPE)

        primitives: PrimitiveInterceptor | None = None
        if options.track_primitives:
            primitives = PrimitiveInterceptor(host=host, options=options, classifier=classifier)
            # Raises before anything else on the host has been touched.
            primitives.install()

        cache = PatchCache()
        creation = CreationInterceptor(
            host=host,
            original_create_element=host.create_element,
            cache=cache,
            classifier=classifier,
            options=options,
        )
        host.create_element = creation  # type: ignore[method-assign]
        original_create_factory = getattr(host, "create_factory", None)
        if original_create_factory is not None:
            host.create_factory = make_factory(creation)  # type: ignore[attr-defined]

        self._options = options
        self._cache = cache
        self._creation = creation
        self._primitives = primitives
        self._original_create_factory = original_create_factory
        self._state = SessionState.ACTIVE
        setattr(host, REVERT_ATTR, self.deactivate)
        _LOG.info(
            "renderwatch_activated track_primitives=%s primitives=%s",
            options.track_primitives,
            ",".join(sorted(options.primitive_rules)),
        )

    def deactivate(self) -> None:
        host = self._host
        if self._creation is not None:
            host.create_element = self._creation.original  # type: ignore[method-assign]
        if self._original_create_factory is not None:
            host.create_factory = self._original_create_factory  # type: ignore[attr-defined]
        if self._primitives is not None:
            self._primitives.uninstall()
        if self._cache is not None:
            self._cache.clear()
        self._cache = None
        self._creation = None
        self._primitives = None
        self._original_create_factory = None
        self._state = SessionState.INACTIVE
        if getattr(host, REVERT_ATTR, None) is not None:
            delattr(host, REVERT_ATTR)
        _LOG.info("renderwatch_deactivated")
