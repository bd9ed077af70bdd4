"""Traversal engine: walk a node tree, ask a callback about every element and
serialize what it decides to keep.

The walk is depth-first and pre-order. It runs on an explicit stack rather than
recursion so deeply nested documents cannot exhaust the interpreter's
recursion limit. Two kinds of stack entries exist: nodes still to visit, and
pending end tags of kept elements.
"""

from __future__ import annotations

import logging
from collections.abc import Callable, Collection, Mapping
from typing import Any

from .constants import RAW_TEXT_ELEMENTS, SCRIPTING_RAW_TEXT_ELEMENTS, VOID_ELEMENTS
from .serialize import escape_text, serialize_comment, serialize_doctype, serialize_end_tag, serialize_start_tag
from .tag import Decision, Tag

logger = logging.getLogger(__name__)

Callback = Callable[[Tag], Any]

_VISIT = 0
_CLOSE = 1


class WalkerOpts:
    __slots__ = (
        "collect_errors",
        "drop_comments",
        "drop_doctype",
        "encoding",
        "fragment_context",
        "omit_empty_head",
        "scripting",
        "strict",
        "strip_whitespace",
    )

    def __init__(
        self,
        fragment_context=None,
        drop_doctype=False,
        drop_comments=False,
        strip_whitespace=False,
        omit_empty_head=True,
        scripting=False,
        encoding="utf-8",
        collect_errors=False,
        strict=False,
    ):
        if fragment_context is not None and not isinstance(fragment_context, str):
            msg = f"fragment_context must be a tag name, got {type(fragment_context).__name__}"
            raise TypeError(msg)
        if encoding is not None and not isinstance(encoding, str):
            msg = f"encoding must be a string, got {type(encoding).__name__}"
            raise TypeError(msg)
        self.fragment_context = fragment_context
        self.drop_doctype = bool(drop_doctype)
        self.drop_comments = bool(drop_comments)
        self.strip_whitespace = bool(strip_whitespace)
        self.omit_empty_head = bool(omit_empty_head)
        self.scripting = bool(scripting)
        self.encoding = encoding
        self.collect_errors = bool(collect_errors)
        self.strict = bool(strict)


def filter_attributes(attrs: Mapping[str, str | None], allowed: Collection[str]) -> list[tuple[str, str | None]]:
    """Return the allowed subset of ``attrs``, in their original order."""
    return [(name, value) for name, value in attrs.items() if name in allowed]


def walk_tree(root: Any, callback: Callback, opts: WalkerOpts | None = None) -> str:
    """Walk ``root`` in document order and return the sanitized HTML."""
    opts = opts or WalkerOpts()
    raw_text_elements = SCRIPTING_RAW_TEXT_ELEMENTS if opts.scripting else RAW_TEXT_ELEMENTS
    parts: list[str] = []
    visited = 0

    # (_VISIT, node, raw_text) or (_CLOSE, name, start_index, omit_if_empty)
    stack: list[tuple[Any, ...]] = [(_VISIT, root, False)]
    while stack:
        entry = stack.pop()

        if entry[0] == _CLOSE:
            _, name, start_index, omit_if_empty = entry
            if omit_if_empty and len(parts) == start_index + 1:
                # Nothing was rendered inside: drop the start tag as well.
                parts.pop()
            else:
                parts.append(serialize_end_tag(name))
            continue

        _, node, raw_text = entry
        name = node.name

        if name == "#text":
            text = node.data or ""
            if opts.strip_whitespace:
                text = text.strip()
            if text:
                parts.append(text if raw_text else escape_text(text))
            continue

        if name == "#comment":
            if not opts.drop_comments:
                parts.append(serialize_comment(node.data))
            continue

        if name == "!doctype":
            if not opts.drop_doctype:
                parts.append(serialize_doctype(node.data))
            continue

        if name in {"#document", "#document-fragment"}:
            stack.extend((_VISIT, child, raw_text) for child in reversed(node.children))
            continue

        tag = Tag(name, node.attrs, node.namespace)
        callback(tag)
        visited += 1
        # Snapshot now: later changes to a leaked Tag must not leak into the output.
        decision = tag.decision
        replacement = tag.replacement
        allowed = frozenset(tag.allowed_attributes)

        if decision is Decision.DROP_SUBTREE:
            logger.debug("Dropping <%s> and its contents", name)
            continue

        if decision is Decision.REWRITE:
            logger.debug("Rewriting <%s> as %r", name, replacement)
            parts.append(replacement or "")
            continue

        if decision is Decision.DROP_SELF:
            # Children take this node's place, in the parent's context.
            stack.extend((_VISIT, child, raw_text) for child in reversed(node.children))
            continue

        attrs = filter_attributes(node.attrs, allowed)
        parts.append(serialize_start_tag(name, attrs))
        if name in VOID_ELEMENTS and node.namespace is None:
            continue

        omit_if_empty = opts.omit_empty_head and name == "head" and node.namespace is None and not attrs
        stack.append((_CLOSE, name, len(parts) - 1, omit_if_empty))
        child_raw = name in raw_text_elements and node.namespace is None
        stack.extend((_VISIT, child, child_raw) for child in reversed(node.children))

    logger.debug("Walk visited %d elements, produced %d chunks", visited, len(parts))
    return "".join(parts)
