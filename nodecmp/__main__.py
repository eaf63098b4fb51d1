#!/usr/bin/env python3
"""
Node Compare CLI - Main entry point for module execution

This allows the package to be run with:
python -m nodecmp
"""

import sys

from nodecmp.cli import main

if __name__ == "__main__":
    sys.exit(main())
