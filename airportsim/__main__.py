"""Entry point for running a simulation from the shell.

Usage:
    python -m airportsim --help
"""

import sys

from airportsim.cli import main

if __name__ == "__main__":
    sys.exit(main())
