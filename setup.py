"""
Optional mypyc build for tagwalker. Project metadata lives in pyproject.toml.

    pip install .                          # pure Python
    TAGWALKER_USE_MYPYC=1 pip install .    # compile the walk loop and serializer
"""

import os
import sys

from setuptools import setup

# Compiled only on request. Modules that subclass html5lib classes (treebuilder)
# or that callbacks see directly (tag, node) stay interpreted.
COMPILED = ["src/tagwalker/walker.py", "src/tagwalker/serialize.py"]


def compiled_extensions():
    if os.environ.get("TAGWALKER_USE_MYPYC") != "1":
        return []
    try:
        from mypyc.build import mypycify
    except ImportError:
        sys.exit("TAGWALKER_USE_MYPYC=1 needs mypyc: pip install tagwalker[mypyc]")
    print(f"tagwalker: compiling {', '.join(COMPILED)} with mypyc")
    return mypycify(COMPILED, opt_level=os.environ.get("MYPYC_OPT_LEVEL", "3"))


if __name__ == "__main__":
    setup(ext_modules=compiled_extensions())
