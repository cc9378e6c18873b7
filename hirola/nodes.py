"""In-memory node tree used for rendering to strings."""

from __future__ import annotations

import weakref
from enum import Enum

__all__ = ["NodeKind", "SsrNode"]


class NodeKind(Enum):
    """The kinds of node a tree can hold."""

    ELEMENT = "element"
    COMMENT = "comment"
    TEXT = "text"
    FRAGMENT = "fragment"


def _escape_text(text: str) -> str:
    return text.replace("&", "&amp;").replace("<", "&lt;")


def _escape_attribute(value: str) -> str:
    return (
        value.replace("&", "&amp;")
        .replace("<", "&lt;")
        .replace(">", "&gt;")
        .replace('"', "&quot;")
    )


class SsrNode:
    """A node of an in-memory tree. Nodes compare equal only to themselves."""

    def __init__(self, kind: NodeKind, *, tag: str = "", text: str = "") -> None:
        self.kind = kind
        self._tag = tag
        self._text = text
        self._attributes: dict[str, str] = {}
        self._children: list[SsrNode] = []
        self._parent: weakref.ref[SsrNode] | None = None

    @classmethod
    def element(cls, tag: str) -> SsrNode:
        """Create an element node."""
        return cls(NodeKind.ELEMENT, tag=tag)

    @classmethod
    def text_node(cls, text: str) -> SsrNode:
        """Create a text node."""
        return cls(NodeKind.TEXT, text=text)

    @classmethod
    def fragment(cls) -> SsrNode:
        """Create a fragment: a list of nodes with no wrapping element."""
        return cls(NodeKind.FRAGMENT)

    @classmethod
    def marker(cls) -> SsrNode:
        """Create an empty comment used to remember a position."""
        return cls(NodeKind.COMMENT)

    @property
    def tag(self) -> str:
        """Tag name of an element."""
        return self._tag

    @property
    def text(self) -> str:
        """Content of a text or comment node."""
        return self._text

    @property
    def attributes(self) -> dict[str, str]:
        """A copy of an element's attributes."""
        return dict(self._attributes)

    @property
    def children(self) -> list[SsrNode]:
        """A copy of the child list of an element or fragment."""
        return list(self._children_list())

    def _children_list(self) -> list[SsrNode]:
        if self.kind not in (NodeKind.ELEMENT, NodeKind.FRAGMENT):
            raise TypeError("node type cannot have children")
        return self._children

    def _index_of(self, child: SsrNode) -> int | None:
        return next(
            (i for i, c in enumerate(self._children_list()) if c is child), None
        )

    def _set_parent(self, parent: SsrNode | None) -> None:
        old_parent = self.parent_node()
        if old_parent is not None:
            old_parent._try_remove_child(self)
        self._parent = weakref.ref(parent) if parent is not None else None

    def _try_remove_child(self, child: SsrNode) -> None:
        children = self._children_list()
        index = self._index_of(child)
        if index is not None:
            del children[index]
            return
        for c in children:
            if c.kind is NodeKind.FRAGMENT:
                c._try_remove_child(child)

    def set_attribute(self, name: str, value: str) -> None:
        """Set an attribute on an element."""
        if self.kind is not NodeKind.ELEMENT:
            raise TypeError("node is not an element")
        self._attributes[name] = value

    def append_child(self, child: SsrNode) -> None:
        """Append ``child``, detaching it from any previous parent."""
        self._children_list()
        child._set_parent(self)
        self._children.append(child)

    def insert_child_before(
        self, new_node: SsrNode, reference_node: SsrNode | None
    ) -> None:
        """Insert ``new_node`` before ``reference_node``, or at the end when it is None."""
        self._children_list()
        if reference_node is None:
            self.append_child(new_node)
            return
        if reference_node.parent_node() is not self:
            raise ValueError("reference node is not a child of this node")
        new_node._set_parent(self)
        index = self._index_of(reference_node)
        if index is None:
            raise ValueError("couldn't find reference node")
        self._children.insert(index, new_node)

    def remove_child(self, child: SsrNode) -> None:
        """Remove ``child`` from this node's children."""
        index = self._index_of(child)
        if index is None:
            raise ValueError("couldn't find child")
        del self._children[index]
        child._parent = None

    def replace_child(self, old: SsrNode, new: SsrNode) -> None:
        """Put ``new`` in the place of ``old``."""
        self._children_list()
        new._set_parent(self)
        index = self._index_of(old)
        if index is None:
            raise ValueError("couldn't find child")
        self._children[index] = new
        old._parent = None

    def insert_sibling_before(self, child: SsrNode) -> None:
        """Insert ``child`` just before this node in its parent."""
        parent = self.parent_node()
        if parent is None:
            raise ValueError("no parent for this node")
        parent.insert_child_before(child, self)

    def parent_node(self) -> SsrNode | None:
        """Return the parent, or None when detached."""
        return self._parent() if self._parent is not None else None

    def next_sibling(self) -> SsrNode | None:
        """Return the node after this one in its parent, or None."""
        parent = self.parent_node()
        if parent is None:
            return None
        index = parent._index_of(self)
        if index is None or index + 1 >= len(parent._children):
            return None
        return parent._children[index + 1]

    def remove_self(self) -> None:
        """Detach this node from its parent, if it has one."""
        parent = self.parent_node()
        if parent is not None:
            parent.remove_child(self)

    def update_inner_text(self, text: str) -> None:
        """Change the content of a text node."""
        if self.kind is not NodeKind.TEXT:
            raise TypeError("node is not a text node")
        self._text = text

    def replace_children_with(self, node: SsrNode) -> None:
        """Remove every child and append ``node`` in their place."""
        for child in self._children_list():
            child._parent = None
        self._children.clear()
        self.append_child(node)

    def __str__(self) -> str:
        if self.kind is NodeKind.ELEMENT:
            attributes = "".join(
                f' {name}="{_escape_attribute(value)}"'
                for name, value in self._attributes.items()
            )
            inner = "".join(str(child) for child in self._children)
            return f"<{self._tag}{attributes}>{inner}</{self._tag}>"
        if self.kind is NodeKind.COMMENT:
            return "<!--" + self._text.replace("-->", "--&gt;") + "-->"
        if self.kind is NodeKind.TEXT:
            return _escape_text(self._text)
        return "".join(str(child) for child in self._children)

    def __repr__(self) -> str:
        return f"SsrNode({self.kind.name}, {str(self)!r})"