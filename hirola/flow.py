"""Rendering of lists that update in place as they change."""

from __future__ import annotations

from typing import Any, Callable, Iterable

from .dom import Dom, render_into
from .nodes import SsrNode
from .signals import DiffKind, MutableVec, Subscription, VecDiff

__all__ = ["Indexed", "Mapped", "render_map"]


def _as_vec(iterable: MutableVec | Iterable[Any]) -> MutableVec:
    if isinstance(iterable, MutableVec):
        return iterable
    return MutableVec(iterable)


class _IndexedState:
    """Keeps one mounted Dom per item, placed before a marker in the parent node."""

    def __init__(
        self, element: SsrNode, marker: SsrNode, mount: Callable[[Any], Dom]
    ) -> None:
        self.element = element
        self.marker = marker
        self.mount = mount
        self.children: list[Dom] = []

    def clear(self) -> None:
        children, self.children = self.children, []
        for dom in children:
            self.element.remove_child(dom.node)
            dom.discard()

    def discard_all(self) -> None:
        for dom in self.children:
            dom.discard()

    def _insert_at(self, index: int, node: SsrNode) -> None:
        reference = (
            self.children[index].node if index < len(self.children) else self.marker
        )
        self.element.insert_child_before(node, reference)

    def _drop(self, dom: Dom) -> None:
        self.element.remove_child(dom.node)
        dom.discard()

    def process_change(self, change: VecDiff) -> None:
        match change.kind:
            case DiffKind.REPLACE:
                self.clear()
                self.children = [self.mount(value) for value in change.values]
                for dom in self.children:
                    self.element.insert_child_before(dom.node, self.marker)
            case DiffKind.INSERT_AT:
                dom = self.mount(change.value)
                self._insert_at(change.index, dom.node)
                self.children.insert(change.index, dom)
            case DiffKind.PUSH:
                dom = self.mount(change.value)
                self.element.insert_child_before(dom.node, self.marker)
                self.children.append(dom)
            case DiffKind.UPDATE_AT:
                dom = self.mount(change.value)
                old = self.children[change.index]
                self.element.replace_child(old.node, dom.node)
                self.children[change.index] = dom
                old.discard()
            case DiffKind.MOVE:
                dom = self.children.pop(change.old_index)
                self._insert_at(change.new_index, dom.node)
                self.children.insert(change.new_index, dom)
            case DiffKind.REMOVE_AT:
                self._drop(self.children.pop(change.index))
            case DiffKind.POP:
                self._drop(self.children.pop())
            case DiffKind.CLEAR:
                self.clear()


class Indexed:
    """Renders one template per item and updates only what each change touches."""

    def __init__(
        self, iterable: MutableVec | Iterable[Any], template: Callable[[Any], Any]
    ) -> None:
        self.iterable = _as_vec(iterable)
        self.template = template

    def _mount(self, item: Any) -> Dom:
        dom = Dom(SsrNode.fragment())
        render_into(self.template(item), dom)
        return dom

    def render_into(self, parent: Dom) -> None:
        """Place a marker in ``parent`` and keep the items rendered before it."""
        marker = SsrNode.marker()
        parent.append_child(Dom(marker))
        state = _IndexedState(parent.node, marker, self._mount)
        subscription = self.iterable.subscribe(state.process_change)

        def stop() -> None:
            subscription.cancel()
            state.discard_all()

        parent.effect(Subscription(stop))


class Mapped:
    """A list paired with the function that renders each of its items."""

    def __init__(
        self, iterable: MutableVec | Iterable[Any], callback: Callable[[Any], Any]
    ) -> None:
        self.iterable = _as_vec(iterable)
        self.callback = callback

    def render_into(self, parent: Dom) -> None:
        """Render as an Indexed list."""
        Indexed(self.iterable, self.callback).render_into(parent)


def render_map(
    iterable: MutableVec | Iterable[Any], callback: Callable[[Any], Any]
) -> Mapped:
    """Pair a MutableVec, or a fixed iterable, with a per-item render function."""
    return Mapped(iterable, callback)