"""Shared fixtures for sortcontract tests."""

from __future__ import annotations

import os
import sys

import pytest

from sortcontract._term import force_color

DEMO_INPUT = [1, 3, 5, 7, 6, 4, 2, 0]


@pytest.fixture
def tmp_out(tmp_path):
    """Temporary output directory for JSON reports."""
    return str(tmp_path / ".sortcontract")


@pytest.fixture
def demo_input():
    return list(DEMO_INPUT)


@pytest.fixture(autouse=True)
def _plain_output():
    """Keep captured output free of ANSI codes."""
    force_color(False)
    yield
    force_color(None)


@pytest.fixture(autouse=True)
def _add_examples_to_path():
    """Ensure examples/ is importable."""
    examples_dir = os.path.join(os.path.dirname(__file__), "..", "examples")
    examples_dir = os.path.abspath(examples_dir)
    if examples_dir not in sys.path:
        sys.path.insert(0, examples_dir)
    yield
    if examples_dir in sys.path:
        sys.path.remove(examples_dir)
