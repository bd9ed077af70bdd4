#!/usr/bin/env python3
"""
Random fuzzer for the tag walker.
Generates invalid/malformed HTML plus a random per-tag policy, walks it, and
checks that nothing crashes or hangs and that dropped tags never reappear.
"""

import argparse
import random
import string
import sys
import time
import traceback

from tagwalker import TagWalker

# Fuzzing strategies
TAGS = [
    "div", "span", "p", "a", "img", "table", "tr", "td", "th", "ul", "ol", "li",
    "form", "input", "button", "select", "option", "textarea", "script", "style",
    "head", "body", "html", "title", "meta", "link", "br", "hr", "h1", "h2", "h3",
    "iframe", "object", "embed", "video", "audio", "source", "canvas", "svg", "math",
    "template", "noscript", "pre", "code", "blockquote", "article", "section",
    "header", "footer", "nav", "aside", "main", "figure", "details", "summary",
    "plaintext", "xmp", "marquee", "b", "i", "em", "strong", "font", "nobr",
]

RAW_TEXT_TAGS = ["script", "style", "xmp", "iframe", "noembed", "noframes", "noscript"]
FORMATTING_TAGS = ["a", "b", "big", "code", "em", "font", "i", "nobr", "s", "small", "strike", "strong", "tt", "u"]

ATTRIBUTES = [
    "id", "class", "style", "href", "src", "alt", "title", "name", "value", "type",
    "onclick", "onload", "onerror", "data-x", "aria-label", "role", "tabindex",
]

ENTITIES = ["&amp;", "&lt;", "&gt;", "&quot;", "&nbsp;", "&", "&amp", "&#", "&#x1f;", "&unknown;"]

# Tags the parser synthesizes on its own; a drop check on them is meaningless.
IMPLIED_TAGS = {"html", "head", "body", "tbody", "tr", "colgroup"}

REPLACEMENTS = ["", "<b>[removed]</b>", "[x]", "&hellip;", "<span>&lt;gone&gt;</span>"]


def random_string(min_len=0, max_len=20):
    """Generate random ASCII string."""
    length = random.randint(min_len, max_len)
    return "".join(random.choices(string.ascii_letters + string.digits, k=length))


def fuzz_attribute():
    name = random.choice([random.choice(ATTRIBUTES), random_string(1, 8), "on" + random_string(2, 6)])
    value = random.choice(
        [
            random_string(0, 30),
            '"' + random_string() + '"',
            random.choice(ENTITIES),
            "javascript:alert(1)",
            "<script>alert(1)</script>",
        ]
    )
    quote = random.choice(['"', "'", ""])
    if quote == "" and any(c in value for c in " \"'<>=`"):
        quote = '"'
    return f"{name}={quote}{value}{quote}"


def fuzz_open_tag():
    tag = random.choice(TAGS)
    if random.random() < 0.1:
        tag = tag.upper()
    attrs = " ".join(fuzz_attribute() for _ in range(random.randint(0, 4)))
    closing = random.choice([">", ">", ">", "/>", ""])
    return f"<{tag} {attrs}{closing}" if attrs else f"<{tag}{closing}"


def fuzz_close_tag():
    return f"</{random.choice(TAGS)}{random.choice(['>', '>', ' >', ''])}"


def fuzz_comment():
    return random.choice(
        [
            f"<!--{random_string()}-->",
            f"<!-- {random_string()} --!>",
            "<!--->",
            f"<!--{random_string()}",
            f"<!{random_string()}>",
        ]
    )


def fuzz_doctype():
    return random.choice(["<!DOCTYPE html>", "<!doctype HTML>", "<!DOCTYPE>", f"<!DOCTYPE {random_string()}>"])


def fuzz_text():
    parts = [random_string(0, 20), random.choice(ENTITIES), random.choice([" ", "\n", "\t", ""])]
    random.shuffle(parts)
    return "".join(parts)


def fuzz_raw_text():
    tag = random.choice(RAW_TEXT_TAGS)
    content = random.choice([random_string(), "a < b && c > d", f"</{tag}", "<!--", f"<{tag}>"])
    return f"<{tag}>{content}</{tag}>"


def fuzz_adoption_agency():
    a, b = random.sample(FORMATTING_TAGS, 2)
    return f"<{a}>1<{b}>2</{a}>3</{b}>4"


def fuzz_foster_parenting():
    return f"<table>{fuzz_text()}<tr>{fuzz_open_tag()}<td>{fuzz_text()}</td></tr>{fuzz_text()}</table>"


def fuzz_svg_math():
    root = random.choice(["svg", "math"])
    inner = random.choice(["<circle r=1/>", "<foreignObject><p>x</p></foreignObject>", "<mi>x</mi>", "<a xlink:href='#x'>l</a>"])
    return f"<{root}>{inner}</{root}>"


def fuzz_nested_structure(depth=0, max_depth=8):
    if depth >= max_depth or random.random() < 0.3:
        return fuzz_text()
    tag = random.choice(TAGS)
    children = "".join(fuzz_nested_structure(depth + 1, max_depth) for _ in range(random.randint(0, 3)))
    return f"<{tag}>{children}</{tag}>" if random.random() < 0.8 else f"<{tag}>{children}"


def fuzz_deeply_nested():
    tag = random.choice(["div", "span", "b", "table"])
    depth = random.randint(100, 2000)
    return f"<{tag}>" * depth + "x" + f"</{tag}>" * random.randint(0, depth)


def generate_fuzzed_html():
    strategies = [
        fuzz_open_tag,
        fuzz_close_tag,
        fuzz_comment,
        fuzz_text,
        fuzz_raw_text,
        fuzz_adoption_agency,
        fuzz_foster_parenting,
        fuzz_svg_math,
        fuzz_nested_structure,
    ]
    parts = []
    if random.random() < 0.3:
        parts.append(fuzz_doctype())
    for _ in range(random.randint(1, 15)):
        parts.append(random.choice(strategies)())
    if random.random() < 0.05:
        parts.append(fuzz_deeply_nested())
    return "".join(parts)


class RandomPolicy:
    """A fixed random decision per tag name, so the same tag is always treated alike."""

    def __init__(self):
        self.decisions = {}
        self.dropped = set()

    def decide(self, name):
        if name not in self.decisions:
            choice = random.choices(["keep", "unwrap", "drop", "rewrite"], weights=[5, 2, 2, 1])[0]
            attrs = random.sample(ATTRIBUTES, random.randint(0, 3))
            self.decisions[name] = (choice, attrs, random.choice(REPLACEMENTS))
        return self.decisions[name]

    def __call__(self, tag):
        choice, attrs, replacement = self.decide(tag.name)
        if choice == "unwrap":
            tag.ignore_self()
        elif choice == "drop":
            self.dropped.add(tag.name)
            tag.ignore_self_and_contents()
        elif choice == "rewrite":
            tag.rewrite_as(replacement)
        else:
            tag.allow_attributes(attrs)


def find_leaked_tags(output, policy):
    """Names of dropped tags that show up again when the output is re-parsed."""
    root = TagWalker(output).root
    return {
        node.name
        for node in root.iter_descendants()
        if node.name in policy.dropped and node.name not in IMPLIED_TAGS
    }


def run_fuzzer(num_tests, seed=None, verbose=False, save_failures=False):
    if seed is not None:
        random.seed(seed)

    crashes = []
    hangs = []
    leaks = []
    successes = 0

    print(f"Fuzzing tagwalker with {num_tests} test cases...")
    start_time = time.time()

    for i in range(num_tests):
        html = generate_fuzzed_html()
        policy = RandomPolicy()

        if verbose and i % 100 == 0:
            print(f"  Test {i}/{num_tests}...")

        try:
            start = time.perf_counter()
            output = TagWalker(html).walk(policy)
            elapsed = time.perf_counter() - start

            if elapsed > 5.0:
                hangs.append({"test_num": i, "html": html, "time": elapsed})
                if verbose:
                    print(f"  HANG: Test {i} took {elapsed:.2f}s")
                continue

            rewritten = {name for name, (choice, _, _) in policy.decisions.items() if choice == "rewrite"}
            leaked = find_leaked_tags(output, policy) - rewritten
            if leaked:
                leaks.append({"test_num": i, "html": html, "output": output, "tags": sorted(leaked)})
                if verbose:
                    print(f"  LEAK: Test {i}: {sorted(leaked)}")
            else:
                successes += 1

        except Exception as e:
            crashes.append(
                {
                    "test_num": i,
                    "html": html,
                    "error": str(e),
                    "traceback": traceback.format_exc(),
                }
            )
            if verbose:
                print(f"  CRASH: Test {i}: {e}")

    elapsed_total = time.time() - start_time

    # Report results
    print(f"\n{'=' * 60}")
    print("FUZZING RESULTS: tagwalker")
    print(f"{'=' * 60}")
    print(f"Total tests:    {num_tests}")
    print(f"Successes:      {successes}")
    print(f"Crashes:        {len(crashes)}")
    print(f"Hangs (>5s):    {len(hangs)}")
    print(f"Leaked tags:    {len(leaks)}")
    print(f"Total time:     {elapsed_total:.2f}s")
    print(f"Tests/second:   {num_tests / elapsed_total:.1f}")

    if crashes:
        print(f"\n{'=' * 60}")
        print("CRASH DETAILS:")
        print(f"{'=' * 60}")
        for crash in crashes[:10]:
            print(f"\nTest #{crash['test_num']}:")
            print(f"  HTML: {crash['html'][:200]!r}...")
            print(f"  Error: {crash['error']}")
        if len(crashes) > 10:
            print(f"\n... and {len(crashes) - 10} more crashes")

    if leaks:
        print(f"\n{'=' * 60}")
        print("LEAK DETAILS:")
        print(f"{'=' * 60}")
        for leak in leaks[:5]:
            print(f"\nTest #{leak['test_num']}: {leak['tags']}")
            print(f"  HTML:   {leak['html'][:200]!r}...")
            print(f"  Output: {leak['output'][:200]!r}...")

    if hangs:
        print(f"\n{'=' * 60}")
        print("HANG DETAILS:")
        print(f"{'=' * 60}")
        for hang in hangs[:5]:
            print(f"\nTest #{hang['test_num']} ({hang['time']:.2f}s):")
            print(f"  HTML: {hang['html'][:200]!r}...")

    if save_failures and (crashes or hangs or leaks):
        filename = f"fuzz_failures_{int(time.time())}.txt"
        with open(filename, "w", encoding="utf-8") as f:
            f.write(f"Seed: {seed}\n\n")
            for crash in crashes:
                f.write(f"=== CRASH #{crash['test_num']} ===\n")
                f.write(f"HTML:\n{crash['html']}\n")
                f.write(f"Traceback:\n{crash['traceback']}\n\n")
            for leak in leaks:
                f.write(f"=== LEAK #{leak['test_num']} {leak['tags']} ===\n")
                f.write(f"HTML:\n{leak['html']}\nOutput:\n{leak['output']}\n\n")
            for hang in hangs:
                f.write(f"=== HANG #{hang['test_num']} ({hang['time']:.2f}s) ===\n")
                f.write(f"HTML:\n{hang['html']}\n\n")
        print(f"\nFailures saved to {filename}")

    return not (crashes or hangs or leaks)


def main():
    parser = argparse.ArgumentParser(description="Fuzz the tag walker with invalid input and random policies")
    parser.add_argument("--num-tests", "-n", type=int, default=1000, help="Number of test cases to generate (default: 1000)")
    parser.add_argument("--seed", "-s", type=int, default=None, help="Random seed for reproducibility")
    parser.add_argument("--verbose", "-v", action="store_true", help="Verbose output")
    parser.add_argument("--save-failures", action="store_true", help="Save failures to a file")
    parser.add_argument("--sample", type=int, metavar="N", help="Just print N sample fuzzed HTML documents (no walking)")

    args = parser.parse_args()

    if args.sample:
        if args.seed is not None:
            random.seed(args.seed)
        for i in range(args.sample):
            print(f"=== Sample {i + 1} ===")
            print(generate_fuzzed_html())
            print()
        return

    success = run_fuzzer(args.num_tests, seed=args.seed, verbose=args.verbose, save_failures=args.save_failures)
    sys.exit(0 if success else 1)


if __name__ == "__main__":
    main()
