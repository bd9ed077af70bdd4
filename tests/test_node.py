import unittest

from tagwalker.node import ElementNode, Node, TextNode


class TestNodeTree(unittest.TestCase):
    def test_empty_name_is_rejected(self):
        """A node needs a non-empty name."""
        with self.assertRaises(ValueError):
            Node("")

    def test_append_child_sets_parent_and_order(self):
        """Appended children keep their order and point back at the parent."""
        root = Node("#document-fragment")
        a = ElementNode("a")
        b = ElementNode("b")
        root.append_child(a)
        root.append_child(b)
        assert root.children == [a, b]
        assert a.parent is root
        assert b.parent is root

    def test_append_child_moves_node_from_old_parent(self):
        """Appending an attached node detaches it from its old parent first."""
        first = ElementNode("div")
        second = ElementNode("div")
        child = TextNode("x")
        first.append_child(child)
        second.append_child(child)
        assert first.children == []
        assert second.children == [child]
        assert child.parent is second

    def test_append_child_rejects_cycles(self):
        """A node cannot become its own ancestor."""
        outer = ElementNode("div")
        inner = ElementNode("span")
        outer.append_child(inner)
        with self.assertRaises(ValueError):
            inner.append_child(outer)
        with self.assertRaises(ValueError):
            outer.append_child(outer)

    def test_insert_before(self):
        """insert_before places the node in front of the reference."""
        root = ElementNode("ul")
        first = ElementNode("li")
        last = ElementNode("li")
        root.append_child(last)
        root.insert_before(first, last)
        assert root.children == [first, last]
        assert first.parent is root

    def test_insert_before_none_appends(self):
        """A None reference means append."""
        root = ElementNode("ul")
        item = ElementNode("li")
        root.insert_before(item, None)
        assert root.children == [item]

    def test_insert_before_foreign_reference_raises(self):
        """The reference node must be a child."""
        root = ElementNode("ul")
        stranger = ElementNode("li")
        with self.assertRaises(ValueError):
            root.insert_before(ElementNode("li"), stranger)

    def test_remove_child_uses_identity(self):
        """Equal-looking text nodes are told apart by identity."""
        root = ElementNode("p")
        a = TextNode("same")
        b = TextNode("same")
        root.append_child(a)
        root.append_child(b)
        root.remove_child(b)
        assert root.children == [a]
        assert root.children[0] is a
        assert b.parent is None

    def test_remove_child_ignores_non_children(self):
        """Removing a stranger is a no-op."""
        root = ElementNode("p")
        root.remove_child(TextNode("x"))
        assert root.children == []

    def test_text_nodes_cannot_have_children(self):
        """Text nodes are leaves."""
        text = TextNode("x")
        with self.assertRaises(ValueError):
            text.append_child(TextNode("y"))

    def test_iter_descendants_is_document_order(self):
        """Descendants come out depth-first, pre-order."""
        root = Node("#document-fragment")
        div = ElementNode("div")
        p = ElementNode("p")
        span = ElementNode("span")
        root.append_child(div)
        div.append_child(p)
        p.append_child(TextNode("a"))
        div.append_child(span)
        names = [node.name for node in root.iter_descendants()]
        assert names == ["div", "p", "#text", "span"]

    def test_element_attrs_keep_insertion_order(self):
        """Attribute order is insertion order."""
        node = ElementNode("a", {"href": "x", "class": "c", "id": "i"})
        assert list(node.attrs) == ["href", "class", "id"]
        assert node.namespace is None

    def test_element_namespace(self):
        """Only foreign elements carry a namespace."""
        assert ElementNode("circle", namespace="svg").namespace == "svg"
        assert Node("#comment", "x").namespace is None

    def test_repr(self):
        """Reprs show the node kind and a short summary."""
        assert repr(ElementNode("div")) == "ElementNode(<div>, children=0)"
        assert repr(TextNode("hello")) == "TextNode('hello')"
        assert "#comment" in repr(Node("#comment", "note"))
