"""References to nodes created while rendering."""

from __future__ import annotations

from .nodes import SsrNode

__all__ = ["NodeRef"]


class NodeRef:
    """A shared slot that is filled with a node once it has been rendered."""

    def __init__(self) -> None:
        self._node: SsrNode | None = None

    def get(self) -> SsrNode:
        """Return the stored node, raising LookupError if none is set yet."""
        node = self.try_get()
        if node is None:
            raise LookupError("NodeRef is not set")
        return node

    def try_get(self) -> SsrNode | None:
        """Return the stored node, or None if none is set yet."""
        return self._node

    def get_raw(self) -> SsrNode:
        """Return the stored node, raising LookupError if none is set yet."""
        return self.get()

    def try_get_raw(self) -> SsrNode | None:
        """Return the stored node, or None if none is set yet."""
        return self._node

    def set(self, node: SsrNode) -> None:
        """Store ``node``, replacing any node stored before."""
        self._node = node

    def __repr__(self) -> str:
        return f"NodeRef({self._node!r})"