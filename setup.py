"""Build hook for htmlindex. Metadata lives in pyproject.toml.

Set HTMLINDEX_USE_MYPYC=1 to compile the decode path with mypyc:

    HTMLINDEX_USE_MYPYC=1 pip install .[mypyc]
"""

import os

from setuptools import setup

# Modules touched once per entity during decode
COMPILED_MODULES = [
    "src/htmlindex/decoder.py",
    "src/htmlindex/entities.py",
    "src/htmlindex/units.py",
]


def compiled_extensions():
    if os.environ.get("HTMLINDEX_USE_MYPYC", "0") != "1":
        return []
    try:
        from mypyc.build import mypycify
    except ImportError as e:
        raise RuntimeError("HTMLINDEX_USE_MYPYC=1 needs mypy: pip install htmlindex[mypyc]") from e
    return mypycify(COMPILED_MODULES, opt_level=os.environ.get("MYPYC_OPT_LEVEL", "3"))


if __name__ == "__main__":
    setup(ext_modules=compiled_extensions())
