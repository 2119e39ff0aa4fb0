"""Renderwatch runtime modules."""

from renderwatch.runtime.classify import ComponentClassifier, ComponentKind
from renderwatch.runtime.config import load_env_options, normalize_options
from renderwatch.runtime.creation import CreationInterceptor
from renderwatch.runtime.diff import deep_equals, find_differences, is_same
from renderwatch.runtime.errors import (
    RECOVERABLE_RUNTIME_ERRORS,
    PrimitiveDispatchUnavailableError,
    RenderWatchError,
)
from renderwatch.runtime.logging import setup_renderwatch_logging
from renderwatch.runtime.naming import get_display_name
from renderwatch.runtime.patch_cache import PatchCache
from renderwatch.runtime.primitives import PrimitiveInterceptor, TrackedDispatcher
from renderwatch.runtime.session import InstrumentationSession, SessionState
from renderwatch.runtime.state import InstrumentationState, TrackingSlot
from renderwatch.runtime.tracking import should_track

__all__ = [
    "ComponentClassifier",
    "ComponentKind",
    "CreationInterceptor",
    "InstrumentationSession",
    "InstrumentationState",
    "PatchCache",
    "PrimitiveDispatchUnavailableError",
    "PrimitiveInterceptor",
    "RECOVERABLE_RUNTIME_ERRORS",
    "RenderWatchError",
    "SessionState",
    "TrackedDispatcher",
    "TrackingSlot",
    "deep_equals",
    "find_differences",
    "get_display_name",
    "is_same",
    "load_env_options",
    "normalize_options",
    "setup_renderwatch_logging",
    "should_track",
]
