"""The per-element view handed to a walk callback."""

from __future__ import annotations

import enum
from collections.abc import Iterable, Mapping
from types import MappingProxyType


class Decision(enum.Enum):
    KEEP = "keep"
    DROP_SELF = "drop_self"  # drop the tag, keep its children
    DROP_SUBTREE = "drop_subtree"  # drop the tag and everything below it
    REWRITE = "rewrite"  # replace the tag and its children with literal markup


class Tag:
    """Represents a single element during a walk.

    Read ``name``, ``attrs`` and ``namespace`` to decide what to do, then call
    one of the decision methods. By default the element is kept but every
    attribute is stripped; attributes are retained only when allowed with
    ``allow_attribute`` / ``allow_attributes``.

    Decision methods overwrite each other: the last one called before the
    callback returns wins.

    A Tag is only meaningful during the callback it was passed to. Changes made
    after the callback returns are never seen by the walk.
    """

    __slots__ = ("_attrs", "_name", "_namespace", "allowed_attributes", "decision", "replacement")

    def __init__(self, name: str, attrs: Mapping[str, str | None] | None = None, namespace: str | None = None):
        self._name = name
        self._attrs = MappingProxyType(dict(attrs or {}))
        self._namespace = namespace
        self.allowed_attributes: set[str] = set()
        self.decision = Decision.KEEP
        self.replacement: str | None = None

    @property
    def name(self) -> str:
        """The tag name as parsed, e.g. 'div' or 'img'."""
        return self._name

    @property
    def attrs(self) -> Mapping[str, str | None]:
        """The element's original attributes, read-only, in document order."""
        return self._attrs

    @property
    def namespace(self) -> str | None:
        """None for HTML elements, 'svg' or 'math' inside foreign content."""
        return self._namespace

    def allow_attribute(self, name: str) -> None:
        """Print attribute ``name`` when this element is kept.

        The attribute does not have to exist on the element.
        """
        self.allowed_attributes.add(name)

    def allow_attributes(self, names: Iterable[str]) -> None:
        if isinstance(names, str):
            names = (names,)
        self.allowed_attributes.update(names)

    def ignore_self(self) -> None:
        """Drop this tag from the output but still walk and print its children."""
        self.decision = Decision.DROP_SELF
        self.replacement = None

    def ignore_self_and_contents(self) -> None:
        """Drop this tag and all of its children and text content."""
        self.decision = Decision.DROP_SUBTREE
        self.replacement = None

    def rewrite_as(self, new_contents: str) -> None:
        """Replace this tag and all its children with ``new_contents``, printed verbatim."""
        self.decision = Decision.REWRITE
        self.replacement = str(new_contents)

    def keep(self) -> None:
        """Undo an earlier decision made in the same callback."""
        self.decision = Decision.KEEP
        self.replacement = None

    def __repr__(self) -> str:
        return f"Tag(<{self._name}>, decision={self.decision.name})"
