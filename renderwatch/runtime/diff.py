"""Field-level snapshot comparison used to explain re-renders."""

from __future__ import annotations

import dataclasses
import logging
from collections.abc import Mapping
from types import BuiltinFunctionType, FunctionType, MethodType
from typing import Any

from renderwatch.api.notification import Difference, Differences, DiffType
from renderwatch.api.options import EqualityPolicy, FieldEquality
from renderwatch.runtime.errors import log_recoverable

_LOG = logging.getLogger("renderwatch.diff")

_SCALAR_TYPES: tuple[type, ...] = (int, float, complex, str, bytes, bool, type(None))
_FUNCTION_TYPES: tuple[type, ...] = (FunctionType, MethodType, BuiltinFunctionType)
_MISSING = object()


def is_same(prev: Any, next_: Any) -> bool:
    """Identity, or value equality for immutable scalars."""
    if prev is next_:
        return True
    return type(prev) is type(next_) and isinstance(prev, _SCALAR_TYPES) and prev == next_


def find_differences(
    prev: Any,
    next_: Any,
    *,
    shallow: bool = True,
    equality: EqualityPolicy | str = EqualityPolicy.SHALLOW,
    field_equality: Mapping[str, FieldEquality] | None = None,
) -> Differences | None:
    """Return the differences between two snapshots.

    ``None`` means there is nothing to compare (same object, or deep-equal
    under the deep policy). An empty tuple means the containers differ while
    every field is identical.
    """
    if is_same(prev, next_):
        return None
    comparer = _DeepComparer(field_equality)
    if equality == EqualityPolicy.DEEP and comparer.accumulate(prev, next_, [], ""):
        return None
    diffs: list[Difference] = []
    if not shallow or not (isinstance(prev, Mapping) and isinstance(next_, Mapping)):
        comparer.accumulate(prev, next_, diffs, "")
        return tuple(diffs)
    for key in _union_keys(prev, next_):
        comparer.accumulate(prev.get(key, _MISSING), next_.get(key, _MISSING), diffs, str(key))
    return tuple(diffs)


def deep_equals(prev: Any, next_: Any) -> bool:
    return _DeepComparer(None).accumulate(prev, next_, [], "")


class _DeepComparer:
    def __init__(self, field_equality: Mapping[str, FieldEquality] | None) -> None:
        self._field_equality = field_equality or {}
        self._active: set[tuple[int, int]] = set()

    def accumulate(self, prev: Any, next_: Any, out: list[Difference], path: str) -> bool:
        """Append differences found under ``path``; return True when equal by value."""
        if is_same(prev, next_):
            return True
        custom = self._field_equality.get(path)
        if custom is not None:
            if custom(_public(prev), _public(next_)):
                return True
            return _track(prev, next_, out, path, DiffType.DIFFERENT)
        if prev is None or next_ is None or prev is _MISSING or next_ is _MISSING:
            return _track(prev, next_, out, path, DiffType.DIFFERENT)
        # Cycles compare equal on revisit.
        pair = (id(prev), id(next_))
        if pair in self._active:
            return True
        self._active.add(pair)
        try:
            return self._compare(prev, next_, out, path)
        finally:
            self._active.discard(pair)

    def _compare(self, prev: Any, next_: Any, out: list[Difference], path: str) -> bool:
        if isinstance(prev, Mapping) and isinstance(next_, Mapping):
            children = [
                (_join_key(path, key), prev.get(key, _MISSING), next_.get(key, _MISSING))
                for key in _union_keys(prev, next_)
            ]
            return self._compare_children(prev, next_, out, path, children)
        if type(prev) is not type(next_):
            return _track(prev, next_, out, path, DiffType.DIFFERENT)
        if isinstance(prev, (list, tuple)):
            if len(prev) != len(next_):
                return _track(prev, next_, out, path, DiffType.DIFFERENT)
            children = [
                (f"{path}[{index}]", item, next_[index]) for index, item in enumerate(prev)
            ]
            return self._compare_children(prev, next_, out, path, children)
        if isinstance(prev, (set, frozenset)):
            diff_type = DiffType.DEEP_EQUALS if prev == next_ else DiffType.DIFFERENT
            return _track(prev, next_, out, path, diff_type)
        if isinstance(prev, _FUNCTION_TYPES):
            same_name = getattr(prev, "__qualname__", None) == getattr(next_, "__qualname__", None)
            diff_type = DiffType.FUNCTIONS_WITH_SAME_NAME if same_name else DiffType.DIFFERENT
            return _track(prev, next_, out, path, diff_type)
        if isinstance(prev, type):
            return _track(prev, next_, out, path, DiffType.DIFFERENT)
        if dataclasses.is_dataclass(prev):
            children = [
                (_join_attr(path, item.name), getattr(prev, item.name), getattr(next_, item.name))
                for item in dataclasses.fields(prev)
            ]
            return self._compare_children(prev, next_, out, path, children)
        attrs = getattr(prev, "__dict__", None)
        if attrs is not None:
            next_attrs = vars(next_)
            children = [
                (_join_attr(path, key), attrs.get(key, _MISSING), next_attrs.get(key, _MISSING))
                for key in _union_keys(attrs, next_attrs)
            ]
            return self._compare_children(prev, next_, out, path, children)
        diff_type = DiffType.DEEP_EQUALS if _values_equal(prev, next_) else DiffType.DIFFERENT
        return _track(prev, next_, out, path, diff_type)

    def _compare_children(
        self,
        prev: Any,
        next_: Any,
        out: list[Difference],
        path: str,
        children: list[tuple[str, Any, Any]],
    ) -> bool:
        child_diffs: list[Difference] = []
        equal_count = 0
        for child_path, prev_child, next_child in children:
            if self.accumulate(prev_child, next_child, child_diffs, child_path):
                equal_count += 1
        if equal_count == len(children):
            return _track(prev, next_, out, path, DiffType.DEEP_EQUALS)
        out.extend(child_diffs)
        return _track(prev, next_, out, path, DiffType.DIFFERENT)


def _track(prev: Any, next_: Any, out: list[Difference], path: str, diff_type: DiffType) -> bool:
    out.append(
        Difference(
            path_string=path,
            diff_type=diff_type,
            prev_value=_public(prev),
            next_value=_public(next_),
        )
    )
    return diff_type is not DiffType.DIFFERENT


def _values_equal(prev: Any, next_: Any) -> bool:
    try:
        return bool(prev == next_)
    except (TypeError, ValueError):
        log_recoverable(_LOG, "diff_value_equality_unsupported")
        return False


def _public(value: Any) -> Any:
    return None if value is _MISSING else value


def _union_keys(prev: Mapping[Any, Any], next_: Mapping[Any, Any]) -> list[Any]:
    return list(dict.fromkeys([*prev.keys(), *next_.keys()]))


def _join_key(path: str, key: Any) -> str:
    return f"{path}.{key}" if path else str(key)


def _join_attr(path: str, name: str) -> str:
    return f"{path}.{name}" if path else name
