"""The Dom wrapper around nodes, rendering of values into it, and string output."""

from __future__ import annotations

import inspect
from collections.abc import Iterator
from typing import Any, Callable

from .nodes import SsrNode
from .signals import Mutable, ReadOnlyMutable, Subscription, spawn

__all__ = ["RenderError", "Dom", "render_into", "render_to_string"]


class RenderError(Exception):
    """Raised when a value cannot be placed into a node tree."""


class Dom:
    """A node together with the rendered children, side effects and handlers it owns."""

    def __init__(self, node: SsrNode | None = None) -> None:
        self.node: SsrNode = node if node is not None else SsrNode.fragment()
        self.children: list[Dom] = []
        self.side_effects: list[Subscription] = []
        self._handlers: dict[str, list[Callable[[Any], Any]]] = {}

    @classmethod
    def element(cls, tag: str) -> Dom:
        """Create a Dom holding a new element node."""
        return cls(SsrNode.element(tag))

    @classmethod
    def text(cls, text: str) -> Dom:
        """Create a Dom holding a new text node."""
        return cls(SsrNode.text_node(text))

    def append_child(self, child: Dom) -> None:
        """Append ``child``'s node to this node and keep ``child`` as a child."""
        try:
            self.node.append_child(child.node)
        except (TypeError, ValueError) as exc:
            raise RenderError(str(exc)) from exc
        self.children.append(child)

    def attribute(self, name: str, value: str) -> None:
        """Set an attribute on this Dom's element node."""
        self.node.set_attribute(name, value)

    def effect(self, effect: Any) -> Subscription:
        """Attach a side effect: a running Subscription, or an awaitable to spawn."""
        if isinstance(effect, Subscription):
            handle = effect
        elif inspect.isawaitable(effect):
            handle = spawn(effect)
        else:
            raise TypeError(
                f"side effect must be a Subscription or awaitable, not {type(effect).__name__}"
            )
        self.side_effects.append(handle)
        return handle

    def event(self, name: str, handler: Callable[[Any], Any]) -> None:
        """Register ``handler`` for the event ``name``."""
        self._handlers.setdefault(name, []).append(handler)

    def dispatch(self, name: str, event: Any = None) -> int:
        """Call every handler registered for ``name`` and return how many ran."""
        handlers = list(self._handlers.get(name, ()))
        for handler in handlers:
            handler(event)
        return len(handlers)

    def append_render(self, value: Any) -> None:
        """Render ``value`` into this Dom."""
        render_into(value, self)

    def discard(self) -> None:
        """Cancel every side effect and drop every handler, here and in all children."""
        self._handlers.clear()
        effects, self.side_effects = self.side_effects, []
        for handle in effects:
            handle.cancel()
        for child in self.children:
            child.discard()

    def mount(self, node: SsrNode) -> Dom:
        """Render this Dom under ``node`` and return the Dom wrapping ``node``."""
        root = Dom(node)
        self.render_into(root)
        return root

    def inner_html(self) -> str:
        """Return the markup of this Dom's node."""
        return str(self.node)

    def render_into(self, parent: Dom) -> None:
        """Append this Dom to ``parent``."""
        parent.append_child(self)

    def __repr__(self) -> str:
        return f"Dom({self.node!r})"


def _render_reactive_text(source: Mutable | ReadOnlyMutable, parent: Dom) -> None:
    node = SsrNode.text_node(str(source.get()))
    subscription = source.subscribe(lambda value: node.update_inner_text(str(value)))
    parent.effect(subscription)
    parent.append_child(Dom(node))


def render_into(value: Any, parent: Dom) -> None:
    """Render ``value`` into ``parent``.

    Strings become text nodes, observable values become text that follows them,
    sequences render each item in order, None renders nothing, and objects with a
    ``render_into`` method render themselves.
    """
    if value is None:
        return
    if isinstance(value, str):
        parent.append_child(Dom.text(value))
    elif isinstance(value, (Mutable, ReadOnlyMutable)):
        _render_reactive_text(value, parent)
    elif callable(getattr(value, "render_into", None)):
        value.render_into(parent)
    elif isinstance(value, (list, tuple, Iterator)):
        for item in value:
            render_into(item, parent)
    else:
        raise TypeError(f"cannot render a value of type {type(value).__name__}")


def render_to_string(value: Any) -> str:
    """Render ``value`` into a fresh fragment and return its markup."""
    root = Dom(SsrNode.fragment())
    render_into(value, root)
    markup = str(root.node)
    root.discard()
    return markup