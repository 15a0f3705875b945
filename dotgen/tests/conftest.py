"""Pytest configuration for the dotgen test suite."""

import sys
from pathlib import Path

import pytest

# Add dotgen directory to path for src imports
sys.path.insert(0, str(Path(__file__).parent.parent))

from src.csharp.context import GenerationContext  # noqa: E402

FIXTURE_CLASSES = ["Page", "Frame", "Browser", "Request", "Response", "Route"]


@pytest.fixture
def ctx() -> GenerationContext:
    """Fresh registries for every test."""
    return GenerationContext.create(FIXTURE_CLASSES)
