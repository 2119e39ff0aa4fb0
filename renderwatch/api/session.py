"""Public activation entry points."""

from __future__ import annotations

from collections.abc import Mapping
from typing import TYPE_CHECKING, Any

from renderwatch.api.host import REVERT_ATTR, HostFramework
from renderwatch.api.options import RenderWatchOptions

if TYPE_CHECKING:
    from renderwatch.runtime.session import InstrumentationSession


def activate(
    host: HostFramework,
    options: RenderWatchOptions | Mapping[str, Any] | None = None,
) -> InstrumentationSession:
    """Instrument ``host`` and return the live session."""
    from renderwatch.runtime.session import InstrumentationSession

    session = InstrumentationSession(host=host, options=options)
    session.activate()
    return session


def deactivate(host: HostFramework) -> None:
    """Revert instrumentation through the marker left on ``host``."""
    getattr(host, REVERT_ATTR)()


def is_active(host: HostFramework) -> bool:
    return callable(getattr(host, REVERT_ATTR, None))
