import unittest

from tagwalker.tag import Decision, Tag


class TestTagView(unittest.TestCase):
    def test_defaults(self):
        """A fresh Tag keeps the element and allows no attributes."""
        tag = Tag("a", {"href": "x"})
        assert tag.name == "a"
        assert dict(tag.attrs) == {"href": "x"}
        assert tag.namespace is None
        assert tag.decision is Decision.KEEP
        assert tag.replacement is None
        assert tag.allowed_attributes == set()

    def test_name_and_attrs_are_read_only(self):
        """name and attrs cannot be changed through the view."""
        tag = Tag("a", {"href": "x"})
        with self.assertRaises(AttributeError):
            tag.name = "b"
        with self.assertRaises(TypeError):
            tag.attrs["href"] = "y"

    def test_attrs_are_a_snapshot(self):
        """Later changes to the source dict are not visible."""
        original = {"href": "x"}
        tag = Tag("a", original)
        original["href"] = "changed"
        assert tag.attrs["href"] == "x"

    def test_allow_attribute_is_idempotent(self):
        """Allowing the same attribute twice is the same as once."""
        tag = Tag("a")
        tag.allow_attribute("href")
        tag.allow_attribute("href")
        assert tag.allowed_attributes == {"href"}

    def test_allow_attributes(self):
        """allow_attributes takes an iterable or a single name."""
        tag = Tag("a")
        tag.allow_attributes(["href", "title"])
        tag.allow_attributes("rel")
        assert tag.allowed_attributes == {"href", "title", "rel"}

    def test_decisions(self):
        """Each decision method sets its Decision."""
        tag = Tag("div")
        tag.ignore_self()
        assert tag.decision is Decision.DROP_SELF
        tag.ignore_self_and_contents()
        assert tag.decision is Decision.DROP_SUBTREE
        tag.rewrite_as("<b>x</b>")
        assert tag.decision is Decision.REWRITE
        assert tag.replacement == "<b>x</b>"

    def test_last_decision_wins(self):
        """The last decision call replaces earlier ones."""
        tag = Tag("img")
        tag.rewrite_as("<b>x</b>")
        tag.ignore_self_and_contents()
        assert tag.decision is Decision.DROP_SUBTREE
        assert tag.replacement is None

        tag = Tag("img")
        tag.ignore_self_and_contents()
        tag.rewrite_as("<b>x</b>")
        assert tag.decision is Decision.REWRITE

    def test_keep_undoes_earlier_decision(self):
        """keep() restores the default decision."""
        tag = Tag("div")
        tag.ignore_self()
        tag.keep()
        assert tag.decision is Decision.KEEP

    def test_allow_list_survives_decision_changes(self):
        """Changing the decision leaves the allow-list alone."""
        tag = Tag("a")
        tag.allow_attribute("href")
        tag.ignore_self()
        tag.keep()
        assert tag.allowed_attributes == {"href"}

    def test_repr(self):
        """Repr shows the tag name and decision."""
        tag = Tag("p")
        tag.ignore_self()
        assert repr(tag) == "Tag(<p>, decision=DROP_SELF)"
