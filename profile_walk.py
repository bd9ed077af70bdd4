#!/usr/bin/env python3
"""Profile TagWalker to find performance bottlenecks."""

import cProfile
import io
import pstats

from tagwalker import TagWalker

# Sample HTML
html = """
<!DOCTYPE html>
<html>
<head><title>Test</title><style>p { color: red }</style></head>
<body>
    <div class="container" onclick="go()">
        <p style="margin: 0">Paragraph 1 &amp; more</p>
        <p>Paragraph 2 <img src="/images/photo.png"></p>
        <table>
            <tr><td>Cell 1</td><td>Cell 2</td></tr>
            <tr><td>Cell 3</td><td>Cell 4</td></tr>
        </table>
        <script>track()</script>
    </div>
</body>
</html>
""" * 100  # Repeat for more meaningful results


def policy(tag):
    if tag.name in ("script", "style"):
        tag.ignore_self_and_contents()
    elif tag.name == "img":
        tag.rewrite_as("<b>Images not allowed</b>")
    elif tag.name in ("html", "body"):
        tag.ignore_self()
    else:
        tag.allow_attribute("style")


# Profile
pr = cProfile.Profile()
pr.enable()

for _ in range(10):
    walker = TagWalker(html)
    _ = walker.walk(policy)

pr.disable()

# Print stats
s = io.StringIO()
ps = pstats.Stats(pr, stream=s).sort_stats("cumulative")
ps.print_stats(50)  # Top 50 functions
print(s.getvalue())
