"""Command line front-end: sanitize an HTML file with rules given as flags.

    python -m tagwalker page.html --unwrap html --unwrap body --drop script \\
        --allow a=href --allow '*=style' --rewrite 'img=<b>Images not allowed</b>'

Without any rule flag the demo policy is applied: unwrap html/body, drop
head/script/style, keep href on links, replace images with a link to their
source and keep style everywhere else.
"""

from __future__ import annotations

import argparse
import logging
import sys

from . import StrictModeError, TagWalker
from .serialize import escape_attr_value, escape_text

logger = logging.getLogger("tagwalker")


def demo_policy(tag):
    if tag.name in {"html", "body"}:
        tag.ignore_self()
    elif tag.name in {"head", "script", "style"}:
        tag.ignore_self_and_contents()
    elif tag.name == "a":
        tag.allow_attribute("href")
    elif tag.name == "img":
        url = tag.attrs.get("src")
        if url:
            label = url.rsplit("/", 1)[-1] if "/" in url else "Load image"
            # The literal is printed verbatim, so src must not break out of it.
            quoted = escape_attr_value(url)
            tag.rewrite_as(f'<a href="{quoted}" title="{quoted}">{escape_text(label)}</a>')
    else:
        tag.allow_attribute("style")


class RulePolicy:
    """Callback built from --drop/--unwrap/--rewrite/--allow rules.

    Drop beats unwrap beats rewrite for a tag named in several rules.
    """

    def __init__(self, drop=(), unwrap=(), rewrite=None, allow=None):
        self.drop = set(drop)
        self.unwrap = set(unwrap)
        self.rewrite = dict(rewrite or {})
        self.allow = {name: set(attrs) for name, attrs in (allow or {}).items()}

    def __call__(self, tag):
        if tag.name in self.drop:
            tag.ignore_self_and_contents()
        elif tag.name in self.unwrap:
            tag.ignore_self()
        elif tag.name in self.rewrite:
            tag.rewrite_as(self.rewrite[tag.name])
        else:
            tag.allow_attributes(self.allow.get("*", ()))
            tag.allow_attributes(self.allow.get(tag.name, ()))


def _split_pair(value, flag):
    name, sep, rest = value.partition("=")
    if not sep or not name:
        msg = f"{flag} expects TAG=VALUE, got {value!r}"
        raise argparse.ArgumentTypeError(msg)
    return name, rest


def _rewrite_rule(value):
    return _split_pair(value, "--rewrite")


def _allow_rule(value):
    name, attrs = _split_pair(value, "--allow")
    return name, [attr for attr in attrs.split(",") if attr]


def build_parser():
    parser = argparse.ArgumentParser(
        prog="tagwalker",
        description="Sanitize an HTML document tag by tag",
    )
    parser.add_argument("input", nargs="?", default="-", help="HTML file to read (default: stdin)")
    parser.add_argument("--drop", action="append", default=[], metavar="TAG", help="Remove TAG and its contents")
    parser.add_argument("--unwrap", action="append", default=[], metavar="TAG", help="Remove TAG but keep its contents")
    parser.add_argument(
        "--rewrite",
        action="append",
        default=[],
        type=_rewrite_rule,
        metavar="TAG=HTML",
        help="Replace TAG and its contents with HTML, verbatim",
    )
    parser.add_argument(
        "--allow",
        action="append",
        default=[],
        type=_allow_rule,
        metavar="TAG=ATTR[,ATTR]",
        help="Keep these attributes on TAG ('*' for every tag)",
    )
    parser.add_argument("--fragment", action="store_true", help="Parse as a fragment instead of a full document")
    parser.add_argument("--fragment-context", default="div", metavar="TAG", help="Container element for --fragment (default: div)")
    parser.add_argument("--drop-comments", action="store_true", help="Omit comments")
    parser.add_argument("--drop-doctype", action="store_true", help="Omit the doctype")
    parser.add_argument("--strip-whitespace", action="store_true", help="Trim text nodes")
    parser.add_argument("--encoding", default="utf-8", help="Encoding of the input bytes (default: utf-8)")
    parser.add_argument("--strict", action="store_true", help="Fail on the first parse error")
    parser.add_argument("--verbose", "-v", action="store_true", help="Verbose output")
    return parser


def policy_from_args(args):
    if not (args.drop or args.unwrap or args.rewrite or args.allow):
        return demo_policy
    allow = {}
    for name, attrs in args.allow:
        allow.setdefault(name, []).extend(attrs)
    return RulePolicy(drop=args.drop, unwrap=args.unwrap, rewrite=dict(args.rewrite), allow=allow)


def main(argv=None):
    parser = build_parser()
    args = parser.parse_args(argv)
    logging.basicConfig(level=logging.DEBUG if args.verbose else logging.WARNING, format="%(levelname)s %(name)s: %(message)s")

    options = {
        "fragment_context": args.fragment_context if args.fragment else None,
        "drop_comments": args.drop_comments,
        "drop_doctype": args.drop_doctype,
        "strip_whitespace": args.strip_whitespace,
        "encoding": args.encoding,
        "strict": args.strict,
    }
    try:
        if args.input == "-":
            walker = TagWalker(sys.stdin.buffer, **options)
        else:
            with open(args.input, "rb") as f:
                walker = TagWalker(f, **options)
    except StrictModeError as exc:
        logger.error("Parse error: %s", exc.error)
        return 2
    except OSError as exc:
        logger.error("Cannot read %s: %s", args.input, exc)
        return 1

    sys.stdout.write(walker.walk(policy_from_args(args)))
    sys.stdout.write("\n")
    return 0


if __name__ == "__main__":
    sys.exit(main())
