"""Reactive UI templating: signals, in-memory node trees, routing, forms and styles, rendered to HTML."""

__version__ = "0.1.0"

__all__ = [
    "app",
    "dom",
    "flow",
    "forms",
    "mixins",
    "noderef",
    "nodes",
    "router",
    "signals",
    "styled",
    "suspense",
    "switch",
]