import unittest

from tagwalker.node import ElementNode, Node, TextNode
from tagwalker.serialize import (
    escape_attr_value,
    escape_text,
    serialize_comment,
    serialize_doctype,
    serialize_end_tag,
    serialize_start_tag,
    to_test_format,
)
from tagwalker.tokens import Doctype


class TestEscaping(unittest.TestCase):
    def test_escape_text(self):
        """Text escapes &, < and > only."""
        assert escape_text("a < b && c > d") == "a &lt; b &amp;&amp; c &gt; d"
        assert escape_text('"quoted" \'single\'') == '"quoted" \'single\''
        assert escape_text("") == ""
        assert escape_text(None) == ""

    def test_escape_attr_value(self):
        """Attribute values escape & and double quotes."""
        assert escape_attr_value('say "hi" & bye') == "say &quot;hi&quot; &amp; bye"
        assert escape_attr_value("a<b>'c'") == "a<b>'c'"
        assert escape_attr_value(None) == ""


class TestTags(unittest.TestCase):
    def test_start_tag_without_attributes(self):
        """A bare start tag."""
        assert serialize_start_tag("div") == "<div>"

    def test_start_tag_with_attributes_in_given_order(self):
        """Attributes are written in the order given."""
        html = serialize_start_tag("a", [("title", "t"), ("href", "x&y")])
        assert html == '<a title="t" href="x&amp;y">'

    def test_empty_and_missing_values(self):
        """Empty and None values serialize as ""."""
        assert serialize_start_tag("input", [("disabled", ""), ("x", None)]) == '<input disabled="" x="">'

    def test_end_tag(self):
        """End tags."""
        assert serialize_end_tag("p") == "</p>"

    def test_comment(self):
        """Comments are written verbatim."""
        assert serialize_comment(" note ") == "<!-- note -->"
        assert serialize_comment(None) == "<!---->"


class TestDoctype(unittest.TestCase):
    def test_html5(self):
        """The HTML5 doctype."""
        assert serialize_doctype(Doctype("html")) == "<!DOCTYPE html>"

    def test_public_and_system(self):
        """PUBLIC with a system identifier."""
        doctype = Doctype("html", "-//W3C//DTD HTML 4.01//EN", "http://www.w3.org/TR/html4/strict.dtd")
        assert serialize_doctype(doctype) == (
            '<!DOCTYPE html PUBLIC "-//W3C//DTD HTML 4.01//EN" "http://www.w3.org/TR/html4/strict.dtd">'
        )

    def test_public_only(self):
        """PUBLIC without a system identifier."""
        assert serialize_doctype(Doctype("html", "-//X//EN")) == '<!DOCTYPE html PUBLIC "-//X//EN">'

    def test_system_only(self):
        """SYSTEM identifier alone."""
        assert serialize_doctype(Doctype("html", None, "about:legacy-compat")) == (
            '<!DOCTYPE html SYSTEM "about:legacy-compat">'
        )

    def test_empty_name(self):
        """A doctype without a name."""
        assert serialize_doctype(Doctype("")) == "<!DOCTYPE>"


class TestTestFormat(unittest.TestCase):
    def test_manual_tree(self):
        """Tree dump of a hand-built document."""
        root = Node("#document")
        root.append_child(Node("!doctype", Doctype("html")))
        html = ElementNode("html")
        root.append_child(html)
        p = ElementNode("p", {"id": "x", "class": "c"})
        html.append_child(p)
        p.append_child(TextNode("hi"))
        p.append_child(Node("#comment", "c"))
        svg = ElementNode("svg", namespace="svg")
        html.append_child(svg)

        assert to_test_format(root) == "\n".join(
            [
                "| <!DOCTYPE html>",
                "| <html>",
                "|   <p>",
                '|     class="c"',
                '|     id="x"',
                '|     "hi"',
                "|     <!-- c -->",
                "|   <svg svg>",
            ]
        )

    def test_doctype_with_identifiers(self):
        """Doctype identifiers show up in the tree dump."""
        node = Node("!doctype", Doctype("html", "pub", None))
        assert to_test_format(node) == '| <!DOCTYPE html "pub" "">'
