"""
Entry point for running pagewright as a module.

Usage:
    python -m pagewright render notes.json --output notes.pdf
"""

import sys

from .cli import main

if __name__ == "__main__":
    sys.exit(main())
