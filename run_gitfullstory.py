"""Convenience shim to run gitfullstory from a source checkout."""

from __future__ import annotations

import sys

from src.gitfullstory.runner import main


if __name__ == "__main__":
    main(sys.argv[1:])
