"""html5lib tree builder producing tagwalker nodes.

html5lib drives tree construction through adapter objects (the same way its
bundled ``etree`` builder wraps ElementTree elements). Each adapter wraps one
``tagwalker.node`` node; text is written straight into the wrapped tree and
never gets an adapter of its own. ``getDocument`` / ``getFragment`` hand back
the plain node tree.
"""

from __future__ import annotations

from html5lib.treebuilders import base

from .constants import HTML_NAMESPACE, NAMESPACE_PREFIXES
from .node import ElementNode, Node, TextNode
from .serialize import to_test_format
from .tokens import Doctype


def _attribute_name(key):
    # Adjusted foreign attributes arrive as (prefix, local, namespace) tuples.
    if isinstance(key, tuple):
        prefix, local, _namespace = key
        return f"{prefix}:{local}" if prefix else local
    return key


class _Adapter(base.Node):
    """Common html5lib node protocol over a wrapped tagwalker node."""

    def __init__(self, node):
        self._node = node
        super().__init__(node.name)

    def appendChild(self, node):
        self._detach(node)
        self._node.append_child(node._node)
        self.childNodes.append(node)
        node.parent = self

    def insertBefore(self, node, refNode):
        self._detach(node)
        self._node.insert_before(node._node, refNode._node)
        self.childNodes.insert(self._adapter_index(refNode), node)
        node.parent = self

    def removeChild(self, node):
        self._node.remove_child(node._node)
        self.childNodes = [child for child in self.childNodes if child is not node]
        node.parent = None

    def insertText(self, data, insertBefore=None):
        children = self._node.children
        if insertBefore is None:
            if children and children[-1].name == "#text":
                children[-1].data += data
            else:
                self._node.append_child(TextNode(data))
            return

        ref = insertBefore._node
        idx = next(i for i, child in enumerate(children) if child is ref)
        if idx > 0 and children[idx - 1].name == "#text":
            children[idx - 1].data += data
        else:
            self._node.insert_before(TextNode(data), ref)

    def reparentChildren(self, newParent):
        target = newParent._node
        for child in list(self._node.children):
            if child.name == "#text" and target.children and target.children[-1].name == "#text":
                target.children[-1].data += child.data
                self._node.remove_child(child)
            else:
                target.append_child(child)
        for adapter in self.childNodes:
            adapter.parent = newParent
        newParent.childNodes.extend(self.childNodes)
        self.childNodes = []

    def hasContent(self):
        return self._node.has_child_nodes()

    def _adapter_index(self, ref):
        for i, child in enumerate(self.childNodes):
            if child is ref:
                return i
        return len(self.childNodes)

    @staticmethod
    def _detach(node):
        if node.parent is not None:
            node.parent.childNodes = [child for child in node.parent.childNodes if child is not node]
            node.parent = None


class ElementAdapter(_Adapter):
    def __init__(self, name, namespace=None):
        # html5lib compares namespaces as URIs; the wrapped node gets the short form.
        self.namespace = namespace
        super().__init__(ElementNode(name, namespace=NAMESPACE_PREFIXES.get(namespace, namespace)))

    @property
    def nameTuple(self):
        return (self.namespace or HTML_NAMESPACE, self.name)

    @property
    def attributes(self):
        return self._node.attrs

    @attributes.setter
    def attributes(self, attributes):
        converted = {}
        for key, value in (attributes or {}).items():
            name = _attribute_name(key)
            if name not in converted:
                converted[name] = value
        self._node.attrs = converted

    def cloneNode(self):
        clone = ElementAdapter(self.name, self.namespace)
        clone.attributes = dict(self.attributes)
        return clone


class CommentAdapter(_Adapter):
    def __init__(self, data):
        super().__init__(Node("#comment", data))

    def cloneNode(self):
        return CommentAdapter(self._node.data)


class DoctypeAdapter(_Adapter):
    def __init__(self, name, publicId=None, systemId=None):
        super().__init__(Node("!doctype", Doctype(name, publicId, systemId)))

    def cloneNode(self):
        doctype = self._node.data
        return DoctypeAdapter(doctype.name, doctype.public_id, doctype.system_id)


class DocumentAdapter(_Adapter):
    def __init__(self):
        super().__init__(Node("#document"))


class FragmentAdapter(_Adapter):
    def __init__(self):
        super().__init__(Node("#document-fragment"))


class TagTreeBuilder(base.TreeBuilder):
    """Pass as ``html5lib.HTMLParser(tree=TagTreeBuilder)``."""

    documentClass = DocumentAdapter
    elementClass = ElementAdapter
    commentClass = CommentAdapter
    doctypeClass = DoctypeAdapter
    fragmentClass = FragmentAdapter

    def getDocument(self):
        return self.document._node

    def getFragment(self):
        fragment = self.fragmentClass()
        self.openElements[0].reparentChildren(fragment)
        return fragment._node

    def testSerializer(self, node):
        return to_test_format(getattr(node, "_node", node))
