from __future__ import annotations

import re
from typing import Any

from renderwatch.api.host import ORIGINAL_ATTR
from renderwatch.api.options import RenderWatchOptions, TrackOverrides
from renderwatch.runtime.classify import ComponentClassifier, ComponentKind
from renderwatch.runtime.naming import custom_display_name, get_display_name
from renderwatch.runtime.tracking import should_track
from tests.renderwatch.conftest import Component, FakeHost, PureComponent

MEMO_TYPE = object()


def _classifier() -> ComponentClassifier:
    return ComponentClassifier(memo_type=MEMO_TYPE)


def _memo(component: Any) -> Any:
    return FakeHost().memo(component)


def test_classifier_distinguishes_component_kinds() -> None:
    host = FakeHost()
    classifier = ComponentClassifier(memo_type=host.MEMO_TYPE)

    def View(props: Any) -> None:
        _ = props

    assert classifier.classify(Component) is ComponentKind.STATEFUL
    assert classifier.classify(View) is ComponentKind.STATELESS
    assert classifier.classify(host.memo(View)) is ComponentKind.MEMO
    assert classifier.is_pure(PureComponent)
    assert not classifier.is_pure(Component)


def test_classifier_ignores_foreign_memo_markers() -> None:
    def View(props: Any) -> None:
        _ = props

    foreign = FakeHost().memo(View)
    classifier = _classifier()

    assert not classifier.is_memo(foreign)
    assert not classifier.is_trackable(foreign)
    assert not classifier.is_trackable("div")
    assert classifier.is_trackable(View)


def test_classifier_falls_back_to_stateless_when_markers_fail() -> None:
    class Exploding:
        def __getattr__(self, name: str) -> Any:
            raise RuntimeError(name)

    assert _classifier().classify(Exploding()) is ComponentKind.STATELESS


def test_classifier_recognizes_patched_variants() -> None:
    def View(props: Any) -> None:
        _ = props

    def patched(props: Any) -> None:
        _ = props

    setattr(patched, ORIGINAL_ATTR, View)

    assert _classifier().is_patched(patched)
    assert not _classifier().is_patched(View)


def test_display_name_resolution_order() -> None:
    def View(props: Any) -> None:
        _ = props

    class Named:
        display_name = "Custom"

    class Wrapper:
        def __init__(self, inner: Any) -> None:
            self.type = inner

    assert get_display_name(View) == "View"
    assert get_display_name(Named) == "Custom"
    assert get_display_name(Wrapper(View)) == "View"
    assert get_display_name("div") == "div"
    assert get_display_name(object()) == "Unknown"


def test_custom_display_name_reads_overrides() -> None:
    def View(props: Any) -> None:
        _ = props

    assert custom_display_name(View) is None
    View.renderwatch = TrackOverrides(custom_name="Fancy")  # type: ignore[attr-defined]
    assert custom_display_name(View) == "Fancy"
    View.renderwatch = TrackOverrides()  # type: ignore[attr-defined]
    assert custom_display_name(View) is None


def test_should_track_respects_exclude_flag_pure_and_include() -> None:
    classifier = _classifier()

    def Flagged(props: Any) -> None:
        _ = props

    Flagged.renderwatch = True  # type: ignore[attr-defined]

    def Listed(props: Any) -> None:
        _ = props

    options = RenderWatchOptions(
        include=(re.compile("List"),),
        exclude=(re.compile("^Hidden"),),
    )

    assert should_track(Flagged, "Flagged", options, classifier=classifier)
    assert should_track(Listed, "Listed", options, classifier=classifier)
    assert not should_track(Flagged, "HiddenFlagged", options, classifier=classifier)
    assert not should_track(PureComponent, "PureComponent", options, classifier=classifier)


def test_should_track_all_pure_components_includes_memo() -> None:
    classifier = _classifier()
    options = RenderWatchOptions(track_all_pure_components=True)

    def View(props: Any) -> None:
        _ = props

    marker = _memo(View)
    marker.typeof = MEMO_TYPE

    assert should_track(PureComponent, "PureComponent", options, classifier=classifier)
    assert should_track(marker, "View", options, classifier=classifier)
    assert not should_track(Component, "Component", options, classifier=classifier)
    assert not should_track(View, "View", options, classifier=classifier)


def test_false_track_flag_does_not_enable_tracking() -> None:
    def View(props: Any) -> None:
        _ = props

    View.renderwatch = False  # type: ignore[attr-defined]

    assert not should_track(View, "View", RenderWatchOptions(), classifier=_classifier())
