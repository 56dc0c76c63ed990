#!/usr/bin/env python3
"""
Main entry point for Rainbridge.

This module serves as the primary entry point for both the development
environment and frozen executables.
"""

import sys
from rainbridge.cli import main


if __name__ == "__main__":
    sys.exit(main())
