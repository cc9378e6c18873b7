"""Rendering of a placeholder until an awaitable completes."""

from __future__ import annotations

import asyncio
import inspect
from dataclasses import dataclass
from typing import Any, Awaitable, Callable, Generic, TypeVar

from .dom import Dom, render_into
from .nodes import SsrNode

T = TypeVar("T")

__all__ = ["Loading", "Ready", "Suspense", "suspend"]


@dataclass(frozen=True)
class Loading:
    """The result is not available yet."""


@dataclass(frozen=True)
class Ready(Generic[T]):
    """The result has arrived."""

    value: T


async def suspend(awaitable: Awaitable[T]) -> Ready[T]:
    """Await ``awaitable`` and wrap its result in Ready."""
    return Ready(await awaitable)


class _SuspenseState:
    def __init__(self, holder: SsrNode) -> None:
        self.holder = holder
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
        self.holder.append_child(dom.node)
        self.current = dom


class Suspense:
    """Renders ``template(Loading())`` now and ``template(result)`` once ``future`` is done."""

    def __init__(self, template: Callable[[Any], Any], future: Awaitable[Any]) -> None:
        self.template = template
        self.future = future

    def render_into(self, parent: Dom) -> None:
        """Show the loading content and, on a running loop, schedule the final one."""
        state = _SuspenseState(parent.node)
        state.apply(self.template(Loading()))
        future = self.future
        try:
            asyncio.get_running_loop()
        except RuntimeError:
            if inspect.iscoroutine(future):
                future.close()
            return

        async def resolve() -> None:
            state.apply(self.template(await future))

        parent.effect(resolve())