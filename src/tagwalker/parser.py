"""TagWalker entry point: read a source, parse it with html5lib, walk it."""

from __future__ import annotations

import logging

import html5lib

from .tokens import ParseError
from .treebuilder import TagTreeBuilder
from .walker import WalkerOpts, walk_tree

logger = logging.getLogger(__name__)

_OPTION_NAMES = frozenset(WalkerOpts.__slots__)


class ReadError(OSError):
    """Reading the input source failed; the original error is ``__cause__``."""


class StrictModeError(SyntaxError):
    """Raised when strict mode encounters a parse error.

    Inherits from SyntaxError to provide Python 3.11+ enhanced error display
    with source location highlighting.
    """

    def __init__(self, error):
        self.error = error
        super().__init__(str(error))
        self.lineno = error.line
        self.offset = error.column


def read_source(source):
    """Return the full contents of a str, bytes or readable object."""
    if isinstance(source, (str, bytes, bytearray)):
        return bytes(source) if isinstance(source, bytearray) else source
    read = getattr(source, "read", None)
    if read is None:
        msg = f"Expected str, bytes or a readable object, got {type(source).__name__}"
        raise TypeError(msg)
    try:
        data = read()
    except (OSError, UnicodeDecodeError) as exc:
        msg = f"Failed to read HTML input: {exc}"
        raise ReadError(msg) from exc
    if not isinstance(data, (str, bytes, bytearray)):
        msg = f"read() returned {type(data).__name__}, expected str or bytes"
        raise TypeError(msg)
    return bytes(data) if isinstance(data, bytearray) else data


class TagWalker:
    """Parse an HTML document once; walk it with any number of callbacks.

        walker = TagWalker(open("page.html", "rb"))
        html = walker.walk(policy)

    Options are given either as a ``WalkerOpts`` or as keyword arguments of the
    same names, not both.
    """

    __slots__ = ("errors", "opts", "root")

    def __init__(self, source, *, opts=None, **options):
        unknown = set(options) - _OPTION_NAMES
        if unknown:
            msg = f"Unknown option(s): {', '.join(sorted(unknown))}"
            raise TypeError(msg)
        if opts is not None and options:
            msg = "Pass either opts or keyword options, not both"
            raise TypeError(msg)
        self.opts = opts or WalkerOpts(**options)

        data = read_source(source)
        parser = html5lib.HTMLParser(tree=TagTreeBuilder, namespaceHTMLElements=False)
        kwargs = {"scripting": self.opts.scripting}
        if isinstance(data, bytes) and self.opts.encoding:
            kwargs["transport_encoding"] = self.opts.encoding

        if self.opts.fragment_context:
            self.root = parser.parseFragment(data, container=self.opts.fragment_context, **kwargs)
        else:
            self.root = parser.parse(data, **kwargs)

        self.errors = []
        if self.opts.collect_errors or self.opts.strict:
            self.errors = [ParseError.from_html5lib(entry) for entry in parser.errors]
        logger.debug("Parsed %s with %d parse error(s)", self.root.name, len(parser.errors))

        if self.opts.strict and self.errors:
            raise StrictModeError(self.errors[0])

    def walk(self, callback):
        """Call ``callback`` with a ``Tag`` for every element and return the resulting HTML."""
        return walk_tree(self.root, callback, self.opts)


def walk(source, callback, **options):
    """Parse ``source`` and walk it in one go; see ``TagWalker``."""
    return TagWalker(source, **options).walk(callback)
