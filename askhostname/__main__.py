"""
Entry point for running askhostname as a module.

This allows the package to be executed with: python -m askhostname
"""

import sys

from .main import main

if __name__ == "__main__":
    sys.exit(main())
