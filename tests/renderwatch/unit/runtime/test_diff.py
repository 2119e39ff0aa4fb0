from __future__ import annotations

from dataclasses import dataclass
from typing import Any

from renderwatch.api.notification import DiffType
from renderwatch.runtime.diff import deep_equals, find_differences, is_same


def _make_handler() -> Any:
    return lambda: None


@dataclass
class Point:
    x: int
    y: list[int]


class Unorderable:
    __slots__ = ()

    def __eq__(self, other: object) -> bool:
        raise TypeError("no equality")

    __hash__ = object.__hash__


def _by_path(differences: Any) -> dict[str, DiffType]:
    return {diff.path_string: diff.diff_type for diff in differences}


def test_is_same_uses_identity_and_scalar_equality() -> None:
    items = [1]
    assert is_same(items, items)
    assert is_same("a" * 3, "aaa")
    assert not is_same(1, True)
    assert not is_same([1], [1])


def test_identical_snapshots_have_no_differences() -> None:
    props = {"x": 1}
    assert find_differences(props, props) is None
    assert find_differences(None, None) is None


def test_new_object_with_identical_fields_yields_empty_tuple() -> None:
    assert find_differences({"x": 1, "label": "a"}, {"x": 1, "label": "a"}) == ()


def test_deep_policy_treats_value_equal_snapshots_as_unchanged() -> None:
    assert find_differences({"x": [1]}, {"x": [1]}, equality="deep") is None
    assert find_differences({"x": [1]}, {"x": [2]}, equality="deep") is not None


def test_shallow_comparison_reports_each_changed_key() -> None:
    differences = find_differences(
        {"same": 1, "nested": [1, 2], "changed": 1, "removed": 1},
        {"same": 1, "nested": [1, 2], "changed": 2, "added": 1},
    )

    assert _by_path(differences) == {
        "nested": DiffType.DEEP_EQUALS,
        "changed": DiffType.DIFFERENT,
        "removed": DiffType.DIFFERENT,
        "added": DiffType.DIFFERENT,
    }


def test_missing_keys_report_none_values() -> None:
    (difference,) = find_differences({"a": 1}, {}) or ()
    assert difference.path_string == "a"
    assert difference.prev_value == 1
    assert difference.next_value is None


def test_nested_details_are_reported_only_under_different_nodes() -> None:
    differences = find_differences(
        {"x": {"keep": [1], "change": [1]}},
        {"x": {"keep": [1], "change": [2]}},
    )

    assert _by_path(differences) == {
        "x.keep": DiffType.DEEP_EQUALS,
        "x.change[0]": DiffType.DIFFERENT,
        "x.change": DiffType.DIFFERENT,
        "x": DiffType.DIFFERENT,
    }


def test_deep_equal_subtree_is_not_expanded() -> None:
    differences = find_differences({"x": {"a": [1], "b": {"c": 2}}}, {"x": {"a": [1], "b": {"c": 2}}})
    assert _by_path(differences) == {"x": DiffType.DEEP_EQUALS}


def test_functions_with_same_name_are_classified() -> None:
    differences = find_differences({"on_click": _make_handler()}, {"on_click": _make_handler()})
    assert _by_path(differences) == {"on_click": DiffType.FUNCTIONS_WITH_SAME_NAME}


def test_functions_with_different_names_are_different() -> None:
    def first() -> None:
        pass

    def second() -> None:
        pass

    differences = find_differences({"cb": first}, {"cb": second})
    assert _by_path(differences) == {"cb": DiffType.DIFFERENT}


def test_sequences_of_different_length_are_different() -> None:
    differences = find_differences({"items": [1]}, {"items": [1, 2]})
    assert _by_path(differences) == {"items": DiffType.DIFFERENT}


def test_type_change_is_different() -> None:
    differences = find_differences({"v": (1,)}, {"v": [1]})
    assert _by_path(differences) == {"v": DiffType.DIFFERENT}


def test_sets_compare_by_value() -> None:
    differences = find_differences({"tags": {"a", "b"}, "other": {1}}, {"tags": {"b", "a"}, "other": {2}})
    assert _by_path(differences) == {"tags": DiffType.DEEP_EQUALS, "other": DiffType.DIFFERENT}


def test_dataclass_and_plain_objects_compare_by_fields() -> None:
    class Box:
        def __init__(self, value: Any) -> None:
            self.value = value

    differences = find_differences(
        {"point": Point(1, [2]), "box": Box([1])},
        {"point": Point(1, [3]), "box": Box([1])},
    )

    paths = _by_path(differences)
    assert paths["point.y[0]"] is DiffType.DIFFERENT
    assert paths["point"] is DiffType.DIFFERENT
    assert paths["box"] is DiffType.DEEP_EQUALS
    assert "point.x" not in paths


def test_cycles_are_treated_as_equal_on_revisit() -> None:
    prev: dict[str, Any] = {"name": "a"}
    prev["self"] = prev
    next_: dict[str, Any] = {"name": "a"}
    next_["self"] = next_

    differences = find_differences(prev, next_)

    assert _by_path(differences) == {"self": DiffType.DEEP_EQUALS}
    assert deep_equals(prev, next_)


def test_field_equality_overrides_comparison_for_path() -> None:
    differences = find_differences(
        {"rows": [1], "other": [1]},
        {"rows": [2], "other": [1]},
        field_equality={"rows": lambda prev, next_: len(prev) == len(next_)},
    )
    assert _by_path(differences) == {"other": DiffType.DEEP_EQUALS}


def test_failing_field_equality_marks_path_different() -> None:
    differences = find_differences(
        {"rows": [1]},
        {"rows": [1]},
        field_equality={"rows": lambda prev, next_: False},
    )
    assert _by_path(differences) == {"rows": DiffType.DIFFERENT}


def test_non_shallow_root_comparison_reports_root_path() -> None:
    differences = find_differences(0, 5, shallow=False)
    assert _by_path(differences) == {"": DiffType.DIFFERENT}

    differences = find_differences({"n": 1}, {"n": 1}, shallow=False)
    assert _by_path(differences) == {"": DiffType.DEEP_EQUALS}


def test_unsupported_equality_is_treated_as_different() -> None:
    differences = find_differences({"v": Unorderable()}, {"v": Unorderable()})
    assert _by_path(differences) == {"v": DiffType.DIFFERENT}


def test_none_to_value_is_different() -> None:
    differences = find_differences(None, {"x": 1})
    assert _by_path(differences) == {"": DiffType.DIFFERENT}
