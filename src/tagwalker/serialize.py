"""HTML serialization helpers for tagwalker nodes."""

from __future__ import annotations

from collections.abc import Iterable
from typing import Any


def escape_text(text: str | None) -> str:
    if not text:
        return ""
    return str(text).replace("&", "&amp;").replace("<", "&lt;").replace(">", "&gt;")


def escape_attr_value(value: str | None) -> str:
    if value is None:
        return ""
    # Values are always double-quoted, so '\'' and '>' need no escaping.
    return str(value).replace("&", "&amp;").replace('"', "&quot;")


def serialize_start_tag(name: str, attrs: Iterable[tuple[str, str | None]] = ()) -> str:
    parts: list[str] = ["<", name]
    for key, value in attrs:
        parts.extend([" ", key, '="', escape_attr_value(value), '"'])
    parts.append(">")
    return "".join(parts)


def serialize_end_tag(name: str) -> str:
    return f"</{name}>"


def serialize_comment(data: str | None) -> str:
    return f"<!--{data or ''}-->"


def serialize_doctype(doctype: Any) -> str:
    """Render a tokens.Doctype in its standard surface syntax."""
    parts = ["<!DOCTYPE"]
    if doctype.name:
        parts.append(f" {doctype.name}")
    if doctype.public_id:
        parts.append(f' PUBLIC "{doctype.public_id}"')
        if doctype.system_id:
            parts.append(f' "{doctype.system_id}"')
    elif doctype.system_id:
        parts.append(f' SYSTEM "{doctype.system_id}"')
    parts.append(">")
    return "".join(parts)


def to_test_format(node: Any, indent: int = 0) -> str:
    """Convert node to html5lib test format string.

    Uses '| ' prefixes and two-space indentation per level, attributes sorted
    by name. Handy for asserting tree shapes independently of serialization.
    """
    if node.name in {"#document", "#document-fragment"}:
        return "\n".join(_node_to_test_format(child, 0) for child in node.children)
    return _node_to_test_format(node, indent)


def _node_to_test_format(node: Any, indent: int) -> str:
    if node.name == "#comment":
        return f"| {' ' * indent}<!-- {node.data or ''} -->"

    if node.name == "!doctype":
        doctype = node.data
        line = f"| <!DOCTYPE {doctype.name or ''}"
        if doctype.public_id is not None or doctype.system_id is not None:
            line += f' "{doctype.public_id or ""}" "{doctype.system_id or ""}"'
        return line + ">"

    if node.name == "#text":
        return f'| {" " * indent}"{node.data or ""}"'

    display = f"{node.namespace} {node.name}" if node.namespace else node.name
    lines = [f"| {' ' * indent}<{display}>"]
    padding = " " * (indent + 2)
    for key, value in sorted(node.attrs.items()):
        lines.append(f'| {padding}{key}="{value or ""}"')
    lines.extend(_node_to_test_format(child, indent + 2) for child in node.children)
    return "\n".join(lines)
