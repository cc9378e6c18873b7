"""The application object: state plus routing, rendered to strings."""

from __future__ import annotations

from typing import Any, Callable, Generic, TypeVar

from .nodes import SsrNode
from .router import Router

__all__ = ["App"]

S = TypeVar("S")


class App(Generic[S]):
    """Holds the application state and the router that picks a page for each path."""

    def __init__(self, state: S) -> None:
        self._state = state
        self._router = Router()

    @property
    def state(self) -> S:
        """The application state."""
        return self._state

    @property
    def router(self) -> Router:
        """The router that handles navigation in this application."""
        return self._router

    def route(self, path: str, page: Callable[[App[S]], Any]) -> None:
        """Register ``page`` for the route pattern ``path``.

        Raises RouteError when the pattern is malformed or conflicts with another route.
        """
        self._router.insert(path, page)

    def set_not_found(self, page: Callable[[App[S]], Any]) -> None:
        """Set the page shown when no route matches the current path."""
        self._router.set_not_found(page)

    def render_to_string(self, path: str) -> str:
        """Navigate to ``path`` and return the markup of the page shown for it."""
        fragment = SsrNode.fragment()
        self._router.push(path)
        dom = self._router.render(self, fragment)
        markup = str(fragment)
        dom.discard()
        return markup

    def __repr__(self) -> str:
        return f"App(state={self._state!r}, router={self._router!r})"