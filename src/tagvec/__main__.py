"""Module entry-point.

This enables running the project as a module:

    python -m tagvec

The canonical CLI entry-point is the console script ``tagvec``.
When invoked without arguments, we default to printing the version and exiting
successfully.
"""

from __future__ import annotations

import sys

from tagvec.cli import main


def _run() -> int:
    argv = sys.argv[1:] or ["version"]
    return main(argv)


if __name__ == "__main__":
    sys.exit(_run())
