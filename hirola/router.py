"""Path routing: matching paths to pages and re-rendering as the current path changes."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import IntEnum
from typing import Any, Callable

from .dom import Dom, render_into
from .nodes import SsrNode
from .signals import Mutable, ReadOnlyMutable, Subscription

__all__ = ["RouteError", "RouteMatch", "Router"]

Page = Callable[[Any], Any]


class RouteError(Exception):
    """Raised for malformed or conflicting routes and for paths no route matches."""


class _Kind(IntEnum):
    STATIC = 0
    PARAM = 1
    CATCH_ALL = 2


@dataclass(frozen=True)
class _Segment:
    kind: _Kind
    text: str


def _parse_segment(raw: str) -> _Segment:
    if raw.startswith("{") and raw.endswith("}") and len(raw) >= 2:
        inner = raw[1:-1]
        if inner.startswith("*"):
            return _Segment(_Kind.CATCH_ALL, inner[1:])
        return _Segment(_Kind.PARAM, inner)
    if raw.startswith(":"):
        return _Segment(_Kind.PARAM, raw[1:])
    if raw.startswith("*"):
        return _Segment(_Kind.CATCH_ALL, raw[1:])
    return _Segment(_Kind.STATIC, raw)


def _parse_pattern(pattern: str) -> tuple[_Segment, ...]:
    segments = tuple(_parse_segment(raw) for raw in pattern.split("/"))
    for position, segment in enumerate(segments):
        if segment.kind is not _Kind.STATIC and not segment.text:
            raise RouteError(f"route {pattern!r} has a parameter without a name")
        if segment.kind is _Kind.CATCH_ALL and position != len(segments) - 1:
            raise RouteError(f"catch-all parameter must end the route {pattern!r}")
    return segments


@dataclass(frozen=True)
class _Route:
    pattern: str
    segments: tuple[_Segment, ...]
    page: Page

    @property
    def shape(self) -> tuple[tuple[_Kind, str], ...]:
        """The pattern with parameter names erased, used to detect conflicts."""
        return tuple(
            (s.kind, s.text if s.kind is _Kind.STATIC else "") for s in self.segments
        )

    @property
    def rank(self) -> tuple[_Kind, ...]:
        return tuple(s.kind for s in self.segments)

    def match(self, parts: list[str]) -> dict[str, str] | None:
        params: dict[str, str] = {}
        for position, segment in enumerate(self.segments):
            if segment.kind is _Kind.CATCH_ALL:
                rest = "/".join(parts[position:])
                if not rest:
                    return None
                params[segment.text] = rest
                return params
            if position >= len(parts):
                return None
            part = parts[position]
            if segment.kind is _Kind.STATIC:
                if part != segment.text:
                    return None
            elif not part:
                return None
            else:
                params[segment.text] = part
        return params if len(parts) == len(self.segments) else None


@dataclass(frozen=True)
class RouteMatch:
    """A page found for a path, with the parameters taken from the path."""

    value: Page
    params: dict[str, str] = field(default_factory=dict)


def _default_not_found(_app: Any) -> Dom:
    return Dom.text("Not Found")


def _mount(content: Any, node: SsrNode) -> Dom:
    root = Dom(node)
    render_into(content, root)
    return root


class Router:
    """Keeps the current path, the registered pages and the page shown when none matches."""

    def __init__(self) -> None:
        self._current: Mutable[str] = Mutable("/")
        self._routes: list[_Route] = []
        self._not_found: Page = _default_not_found

    def match(self, path: str) -> RouteMatch:
        """Return the page for ``path``; static segments win over parameters."""
        parts = path.split("/")
        best: tuple[tuple[_Kind, ...], RouteMatch] | None = None
        for route in self._routes:
            params = route.match(parts)
            if params is None:
                continue
            if best is None or route.rank < best[0]:
                best = (route.rank, RouteMatch(route.page, params))
        if best is None:
            raise RouteError(f"no route matches {path!r}")
        return best[1]

    def current_params(self) -> dict[str, str]:
        """Return the parameters of the current path, or an empty dict when nothing matches."""
        try:
            return dict(self.match(self._current.get()).params)
        except RouteError:
            return {}

    def push(self, path: str) -> None:
        """Make ``path`` the current path."""
        self._current.set(path)

    def link(self) -> Callable[[Dom], None]:
        """Return a mixin that navigates to the element's ``href`` when it is clicked."""

        def mixin(dom: Dom) -> None:
            def on_click(event: Any) -> None:
                prevent_default = getattr(event, "prevent_default", None)
                if callable(prevent_default):
                    prevent_default()
                href = dom.node.attributes.get("href")
                if href is None:
                    raise RouteError("link element has no href attribute")
                self.push(href)

            dom.event("click", on_click)

        return mixin

    def signal(self) -> ReadOnlyMutable[str]:
        """Return an observable view of the current path."""
        return self._current.read_only()

    def _page_for(self, path: str) -> Page:
        try:
            return self.match(path).value
        except RouteError:
            return self._not_found

    def render(self, app: Any, parent: SsrNode) -> Dom:
        """Render the current page under ``parent`` and replace it whenever the path changes."""
        dom = _mount(self._page_for(self._current.get())(app), parent)
        shown: list[Dom] = list(dom.children)
        first = True

        def on_route(path: str) -> None:
            nonlocal first, shown
            if first:
                first = False
                return
            page = _mount(self._page_for(path)(app), SsrNode.fragment())
            parent.replace_children_with(page.node)
            for old in shown:
                old.discard()
            shown = [page]

        subscription = self._current.subscribe(on_route)

        def stop() -> None:
            subscription.cancel()
            for old in shown:
                old.discard()

        dom.effect(Subscription(stop))
        return dom

    def insert(self, path: str, page: Page) -> None:
        """Register ``page`` for the route pattern ``path``.

        Parameters are written ``:name`` or ``{name}``; a final ``*name`` or
        ``{*name}`` takes the rest of the path.
        """
        if not callable(page):
            raise TypeError("page must be callable")
        route = _Route(path, _parse_pattern(path), page)
        for existing in self._routes:
            if existing.shape == route.shape:
                raise RouteError(
                    f"route {path!r} conflicts with existing route {existing.pattern!r}"
                )
        self._routes.append(route)

    def set_not_found(self, page: Page) -> None:
        """Set the page shown when no route matches."""
        if not callable(page):
            raise TypeError("page must be callable")
        self._not_found = page

    def __repr__(self) -> str:
        return f"Router(current={self._current.get()!r}, routes={len(self._routes)})"