"""
Pytest configuration and fixtures.

This file provides pytest-specific configuration and fixtures.
For standard test utilities, see tests/__init__.py
"""

import pytest

from etl.resume.models import StructuredResume


def pytest_configure(config):
    """Configure pytest markers."""
    config.addinivalue_line(
        "markers", "antiword: marks tests that need the antiword binary (deselect with '-m \"not antiword\"')"
    )


@pytest.fixture
def empty_resume():
    """A StructuredResume with every section empty."""
    return StructuredResume()
