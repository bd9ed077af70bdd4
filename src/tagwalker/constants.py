"""Static element sets used by the serializer.

    from tagwalker.constants import VOID_ELEMENTS, RAW_TEXT_ELEMENTS

References:
    - https://html.spec.whatwg.org/multipage/syntax.html#void-elements
    - https://html.spec.whatwg.org/multipage/parsing.html#serialising-html-fragments
"""

# Elements serialized as a bare start tag: no children, no end tag.
VOID_ELEMENTS = frozenset(
    {
        "area",
        "base",
        "basefont",
        "bgsound",
        "br",
        "col",
        "embed",
        "frame",
        "hr",
        "img",
        "input",
        "keygen",
        "link",
        "meta",
        "param",
        "source",
        "track",
        "wbr",
    }
)

# Elements whose text children are serialized without escaping.
RAW_TEXT_ELEMENTS = frozenset(
    {
        "iframe",
        "noembed",
        "noframes",
        "plaintext",
        "script",
        "style",
        "xmp",
    }
)

# Only raw text when the document was parsed with scripting enabled.
SCRIPTING_RAW_TEXT_ELEMENTS = RAW_TEXT_ELEMENTS | {"noscript"}

HTML_NAMESPACE = "http://www.w3.org/1999/xhtml"

# html5lib namespace URIs -> short names used on ElementNode.namespace
NAMESPACE_PREFIXES = {
    HTML_NAMESPACE: None,
    "http://www.w3.org/2000/svg": "svg",
    "http://www.w3.org/1998/Math/MathML": "math",
}
