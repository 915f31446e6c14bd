#!/usr/bin/env python3
"""
Test suite configuration and utilities.

All tests can be run with standard Python tools:

    # Run all tests
    uv run python -m pytest tests/ -v

    # Skip tests that need the antiword binary
    uv run python -m pytest tests/ -v -m "not antiword"

    # Using unittest
    uv run python -m unittest discover tests -v

Binary fixtures (docx, pdf) are generated inside the tests with python-docx,
pypdf and reportlab; nothing is read from disk.
"""

import os
import shutil

ANTIWORD_PATH = os.environ.get("ANTIWORD_PATH", "antiword")


def is_antiword_available() -> bool:
    """Check if the legacy .doc decoder is installed."""
    return shutil.which(ANTIWORD_PATH) is not None
