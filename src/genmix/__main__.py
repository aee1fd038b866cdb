"""Entrypoint module for the genmix summary script."""

import sys

from genmix.cli import main

if __name__ == "__main__":
    sys.exit(main())
