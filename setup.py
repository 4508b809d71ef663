"""
Build script for fraghtml with optional mypyc compilation.

Usage:
    # Pure Python build (default)
    pip install .

    # Compiled with mypyc
    FRAGHTML_USE_MYPYC=1 pip install .
"""

import os
import sys
from pathlib import Path

from setuptools import find_packages, setup

# Determine if we should use mypyc
USE_MYPYC = os.environ.get("FRAGHTML_USE_MYPYC", "0") == "1"

# Modules to compile with mypyc (the per-node hot paths).
# Note: fragment.py is excluded because it subclasses html5lib's tree builder.
MYPYC_MODULES = [
    "src/fraghtml/serialize.py",
    "src/fraghtml/coerce.py",
    "src/fraghtml/traverse.py",
]


def build_with_mypyc() -> list:
    """Build extension modules using mypyc."""
    try:
        from mypyc.build import mypycify
    except ImportError:
        print(
            "ERROR: mypyc is not installed. Install with: pip install mypy",
            file=sys.stderr,
        )
        print("Or install with mypyc support: pip install fraghtml[mypyc]", file=sys.stderr)
        sys.exit(1)

    # Verify all modules exist
    for module_path in MYPYC_MODULES:
        if not Path(module_path).exists():
            print(f"ERROR: Module not found: {module_path}", file=sys.stderr)
            sys.exit(1)

    print(f"Compiling {len(MYPYC_MODULES)} fraghtml modules with mypyc", file=sys.stderr)

    opt_level = os.environ.get("MYPYC_OPT_LEVEL", "3")
    return mypycify(MYPYC_MODULES, opt_level=opt_level, separate=False, multi_file=False)


ext_modules = build_with_mypyc() if USE_MYPYC else []

setup(
    name="fraghtml",
    version="0.1.0",
    description="Canonical HTML fragments from rich-text element trees",
    package_dir={"": "src"},
    packages=find_packages("src"),
    python_requires=">=3.10",
    install_requires=[
        "html5lib>=1.1",
    ],
    extras_require={
        "test": ["pytest"],
        "mypyc": ["mypy"],
    },
    entry_points={
        "console_scripts": [
            "fraghtml=fraghtml.cli:main",
        ],
    },
    ext_modules=ext_modules,
)
