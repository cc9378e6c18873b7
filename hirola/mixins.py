"""Reusable behaviours that can be applied to a rendered Dom."""

from __future__ import annotations

from typing import Any, Callable

from .dom import Dom
from .nodes import NodeKind, SsrNode

__all__ = ["apply_mixin", "raw_html", "raw_text", "text"]


class _RawHtml(SsrNode):
    """A node whose content is written out as markup without escaping."""

    def __init__(self, markup: str) -> None:
        super().__init__(NodeKind.TEXT, text=markup)

    def __str__(self) -> str:
        return self.text


def _replace_content(dom: Dom, node: SsrNode) -> None:
    for child in dom.children:
        child.discard()
    dom.children.clear()
    for child in dom.node.children:
        dom.node.remove_child(child)
    dom.node.append_child(node)


def _set_text_content(dom: Dom, content: str) -> None:
    if dom.node.kind is NodeKind.TEXT:
        dom.node.update_inner_text(content)
    else:
        _replace_content(dom, SsrNode.text_node(content))


def apply_mixin(dom: Dom, mixin: Any) -> None:
    """Apply ``mixin`` to ``dom``: call its ``mixin`` method, or call it directly."""
    method = getattr(mixin, "mixin", None)
    if callable(method):
        method(dom)
    else:
        mixin(dom)


def raw_html(text: str) -> Callable[[Dom], None]:
    """Mixin that replaces the content with unescaped markup.

    The markup is inserted as is; sanitise untrusted content first.
    """

    def mixin(dom: Dom) -> None:
        _replace_content(dom, _RawHtml(text))

    return mixin


def raw_text(text: str) -> Callable[[Dom], None]:
    """Mixin that replaces the content with fixed text."""

    def mixin(dom: Dom) -> None:
        _set_text_content(dom, text)

    return mixin


def text(signal: Any) -> Callable[[Dom], None]:
    """Mixin that keeps the content equal to the latest value of ``signal``."""

    def mixin(dom: Dom) -> None:
        dom.effect(signal.subscribe(lambda value: _set_text_content(dom, str(value))))

    return mixin