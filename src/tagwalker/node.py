"""Document tree nodes.

Every node has a ``name``: the tag name for elements, otherwise one of
``#document``, ``#document-fragment``, ``#text``, ``#comment`` or ``!doctype``.
"""

from __future__ import annotations

from typing import Any


class Node:
    """A non-element node: document roots, comments and doctypes.

    - name: '#document', '#document-fragment', '#comment' or '!doctype'
    - data: comment text, or a tokens.Doctype for doctypes
    - children: list of child nodes (only roots have any)
    - parent: the owning node, or None for a root
    """

    __slots__ = ("children", "data", "name", "parent")

    def __init__(self, name: str, data: Any = None) -> None:
        # Empty names would serialize as "<>" and never match a policy.
        if not name:
            msg = "Empty name passed to Node constructor"
            raise ValueError(msg)
        self.name = name
        self.data = data
        self.parent: Node | None = None
        self.children: list[Node] = []

    @property
    def namespace(self) -> str | None:
        return None

    def append_child(self, child: Node) -> None:
        if self._would_create_circular_reference(child):
            msg = f"Adding {child.name} as child of {self.name} would create circular reference"
            raise ValueError(msg)
        if child.parent is not None:
            child.parent.remove_child(child)
        child.parent = self
        self.children.append(child)

    def insert_before(self, new_node: Node, reference_node: Node | None) -> None:
        """Insert new_node before reference_node; append when reference_node is None."""
        if reference_node is None:
            self.append_child(new_node)
            return
        if reference_node.parent is not self:
            msg = f"{reference_node!r} is not a child of {self!r}"
            raise ValueError(msg)
        if self._would_create_circular_reference(new_node):
            msg = f"Adding {new_node.name} as child of {self.name} would create circular reference"
            raise ValueError(msg)
        if new_node.parent is not None:
            new_node.parent.remove_child(new_node)
        idx = self._index_of(reference_node)
        new_node.parent = self
        self.children.insert(idx, new_node)

    def remove_child(self, child: Node) -> None:
        """Detach child; a node that is not a child is ignored."""
        if child.parent is not self:
            return
        del self.children[self._index_of(child)]
        child.parent = None

    def _index_of(self, child: Node) -> int:
        # Identity, not equality: two text nodes with equal data are distinct.
        for i, node in enumerate(self.children):
            if node is child:
                return i
        msg = f"{child!r} is not a child of {self!r}"
        raise ValueError(msg)

    def _would_create_circular_reference(self, child: Node) -> bool:
        """Check if self is child or one of its descendants."""
        current: Node | None = self
        while current is not None:
            if current is child:
                return True
            current = current.parent
        return False

    def has_child_nodes(self) -> bool:
        return bool(self.children)

    def iter_descendants(self):
        """Yield every descendant in document order (depth-first, pre-order)."""
        stack = list(reversed(self.children))
        while stack:
            node = stack.pop()
            yield node
            stack.extend(reversed(node.children))

    def __repr__(self) -> str:
        if self.name == "#comment":
            return f"Node(#comment={str(self.data)[:30]!r})"
        return f"Node({self.name}, children={len(self.children)})"


class ElementNode(Node):
    __slots__ = ("_namespace", "attrs")

    def __init__(self, name: str, attrs: dict[str, str] | None = None, namespace: str | None = None) -> None:
        super().__init__(name)
        # Keep first occurrence, insertion order is document order.
        kept: dict[str, str] = {}
        for key, value in (attrs or {}).items():
            if key not in kept:
                kept[key] = value
        self.attrs = kept
        self._namespace = namespace

    @property
    def namespace(self) -> str | None:
        """None for HTML elements, 'svg' or 'math' for foreign ones."""
        return self._namespace

    def __repr__(self) -> str:
        return f"ElementNode(<{self.name}>, children={len(self.children)})"


class TextNode(Node):
    __slots__ = ()

    def __init__(self, data: str) -> None:
        super().__init__("#text", data)

    def append_child(self, child: Node) -> None:
        msg = "Text nodes cannot have children"
        raise ValueError(msg)

    def insert_before(self, new_node: Node, reference_node: Node | None) -> None:
        msg = "Text nodes cannot have children"
        raise ValueError(msg)

    def __repr__(self) -> str:
        return f"TextNode({str(self.data)[:30]!r})"
