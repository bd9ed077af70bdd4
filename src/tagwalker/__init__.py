from .node import ElementNode, Node, TextNode
from .parser import ReadError, StrictModeError, TagWalker, walk
from .serialize import to_test_format
from .tag import Decision, Tag
from .tokens import ParseError
from .walker import WalkerOpts, filter_attributes, walk_tree

__all__ = [
    "Decision",
    "ElementNode",
    "Node",
    "ParseError",
    "ReadError",
    "StrictModeError",
    "Tag",
    "TagWalker",
    "TextNode",
    "WalkerOpts",
    "filter_attributes",
    "to_test_format",
    "walk",
    "walk_tree",
]
