"""Rendering that swaps between two templates as a boolean signal changes."""

from __future__ import annotations

from typing import Any, Callable

from .dom import Dom, RenderError, render_into
from .nodes import SsrNode
from .signals import Subscription

__all__ = ["Switch"]


class _SwitchState:
    """Holds the currently shown content, placed before a marker."""

    def __init__(self, holder: SsrNode, marker: SsrNode) -> None:
        self.holder = holder
        self.marker = marker
        self.current: Dom | None = None

    def clear(self) -> None:
        current, self.current = self.current, None
        if current is not None:
            self.holder.remove_child(current.node)
            current.discard()

    def apply(self, content: Any) -> None:
        self.clear()
        dom = Dom(SsrNode.fragment())
        render_into(content, dom)
        self.holder.insert_child_before(dom.node, self.marker)
        self.current = dom


class Switch:
    """Shows ``renderer(value)`` for the latest value of a boolean signal."""

    def __init__(self, signal: Any, renderer: Callable[[bool], Any]) -> None:
        self.signal = signal
        self.renderer = renderer

    def render_into(self, parent: Dom) -> None:
        """Place a marker in ``parent`` and keep the rendered content before it."""
        marker = SsrNode.marker()
        try:
            parent.node.append_child(marker)
        except TypeError as exc:
            raise RenderError(str(exc)) from exc
        state = _SwitchState(parent.node, marker)
        subscription = self.signal.subscribe(
            lambda value: state.apply(self.renderer(value))
        )

        def stop() -> None:
            subscription.cancel()
            if state.current is not None:
                state.current.discard()

        parent.effect(Subscription(stop))