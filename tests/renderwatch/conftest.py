from __future__ import annotations

from collections.abc import Callable, Iterator
from dataclasses import dataclass, field
from typing import Any

import pytest

from renderwatch.api.host import REVERT_ATTR
from renderwatch.diagnostics import NotificationRecorder


@dataclass(frozen=True, slots=True)
class Element:
    type: Any
    props: Any
    children: tuple[Any, ...] = ()


class Ref:
    def __init__(self, current: Any = None) -> None:
        self.current = current


@dataclass(frozen=True, slots=True)
class Owner:
    type: Any


class FakeInternals:
    def __init__(self) -> None:
        self.current_dispatcher: Any = None
        self.current_owner: Owner | None = None


class Memo:
    def __init__(self, typeof: object, component: Callable[..., Any], compare: Any) -> None:
        self.typeof = typeof
        self.type = component
        self.compare = compare


class Context:
    def __init__(self, value: Any) -> None:
        self.value = value


class Component:
    is_stateful_component = True

    def __init__(self, props: Any) -> None:
        self.props = props
        self.state: Any = None

    def set_state(self, update: dict[str, Any]) -> None:
        self.state = {**(self.state or {}), **update}

    def render(self) -> Any:
        return None


class PureComponent(Component):
    is_pure_component = True


class StateCell:
    def __init__(self, value: Any) -> None:
        self.value = value

    def set(self, value: Any) -> None:
        self.value = value


@dataclass(slots=True)
class MemoCell:
    value: Any = None
    deps: list[Any] | None = None


@dataclass(slots=True)
class Fiber:
    type: Any
    hooks: list[Any] = field(default_factory=list)
    hook_index: int = 0
    instance: Any = None
    props: Any = None
    output: Any = None
    rendered: bool = False


class FakeDispatcher:
    def __init__(self, fiber: Fiber) -> None:
        self._fiber = fiber

    def _hook(self, init: Callable[[], Any]) -> Any:
        fiber = self._fiber
        index = fiber.hook_index
        fiber.hook_index += 1
        if index == len(fiber.hooks):
            fiber.hooks.append(init())
        return fiber.hooks[index]

    def use_ref(self, initial: Any = None) -> Ref:
        return self._hook(lambda: Ref(initial))

    def use_state(self, initial: Any) -> list[Any]:
        cell = self._hook(lambda: StateCell(initial))
        return [cell.value, cell.set]

    def use_reducer(self, reducer: Callable[[Any, Any], Any], initial: Any) -> list[Any]:
        cell = self._hook(lambda: StateCell(initial))

        def dispatch(action: Any) -> None:
            cell.value = reducer(cell.value, action)

        return [cell.value, dispatch]

    def use_context(self, context: Context) -> Any:
        return context.value

    def use_memo(self, factory: Callable[[], Any], deps: list[Any]) -> Any:
        cell = self._hook(MemoCell)
        if cell.deps is None or cell.deps != list(deps):
            cell.value = factory()
            cell.deps = list(deps)
        return cell.value

    def use_effect(self, effect: Callable[[], Any]) -> None:
        _ = effect


def shallow_equal(prev: dict[str, Any], next_: dict[str, Any]) -> bool:
    if prev.keys() != next_.keys():
        return False
    return all(prev[key] is next_[key] for key in prev)


class FakeHost:
    """Minimal declarative host: one fiber per named position, hooks by call order."""

    def __init__(self, *, strict: bool = False) -> None:
        self.MEMO_TYPE = object()
        self.internals = FakeInternals()
        self.strict = strict
        self._fibers: dict[str, Fiber] = {}

    def create_element(self, component: Any, props: Any = None, *children: Any) -> Element:
        return Element(type=component, props={} if props is None else props, children=children)

    def create_factory(self, component: Any) -> Callable[..., Element]:
        def factory(props: Any = None, *children: Any) -> Element:
            return self.create_element(component, props, *children)

        return factory

    def memo(self, component: Callable[..., Any], compare: Any = None) -> Memo:
        return Memo(self.MEMO_TYPE, component, compare)

    def use_ref(self, initial: Any = None) -> Ref:
        return self.internals.current_dispatcher.use_ref(initial)

    def use_state(self, initial: Any) -> list[Any]:
        return self.internals.current_dispatcher.use_state(initial)

    def use_reducer(self, reducer: Callable[[Any, Any], Any], initial: Any) -> list[Any]:
        return self.internals.current_dispatcher.use_reducer(reducer, initial)

    def use_context(self, context: Context) -> Any:
        return self.internals.current_dispatcher.use_context(context)

    def use_memo(self, factory: Callable[[], Any], deps: list[Any]) -> Any:
        return self.internals.current_dispatcher.use_memo(factory, deps)

    def is_strict_mode(self, instance: Any) -> bool:
        _ = instance
        return self.strict

    def fiber(self, position: str = "root") -> Fiber:
        return self._fibers[position]

    def render(self, element: Element, *, position: str = "root") -> Any:
        fiber = self._fibers.get(position)
        if fiber is None or fiber.type is not element.type:
            fiber = Fiber(type=element.type)
            self._fibers[position] = fiber
        return self._render_fiber(fiber, element.props)

    def _render_fiber(self, fiber: Fiber, props: Any) -> Any:
        component = fiber.type
        if getattr(component, "typeof", None) is self.MEMO_TYPE:
            compare = component.compare or shallow_equal
            if fiber.rendered and compare(fiber.props, props):
                return fiber.output
            output = self._call_function(fiber, component.type, props)
        elif isinstance(component, type):
            if fiber.instance is None:
                fiber.instance = component(props)
            else:
                fiber.instance.props = props
            output = self._call_render(fiber)
            if self.strict:
                output = self._call_render(fiber)
        else:
            output = self._call_function(fiber, component, props)
        fiber.props = props
        fiber.output = output
        fiber.rendered = True
        return output

    def _call_render(self, fiber: Fiber) -> Any:
        previous_owner = self.internals.current_owner
        self.internals.current_owner = Owner(type=fiber.type)
        try:
            return fiber.instance.render()
        finally:
            self.internals.current_owner = previous_owner

    def _call_function(self, fiber: Fiber, function: Callable[..., Any], props: Any) -> Any:
        previous_dispatcher = self.internals.current_dispatcher
        previous_owner = self.internals.current_owner
        self.internals.current_dispatcher = FakeDispatcher(fiber)
        self.internals.current_owner = Owner(type=function)
        fiber.hook_index = 0
        try:
            return function(props)
        finally:
            self.internals.current_dispatcher = previous_dispatcher
            self.internals.current_owner = previous_owner


@pytest.fixture
def host() -> Iterator[FakeHost]:
    fake = FakeHost()
    yield fake
    revert = getattr(fake, REVERT_ATTR, None)
    if revert is not None:
        revert()


@pytest.fixture
def recorder() -> NotificationRecorder:
    return NotificationRecorder(capacity=100)
