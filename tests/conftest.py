"""Shared test fixtures for the notemark test suite."""

from __future__ import annotations

import pytest

from notemark.config import CompilerConfig
from notemark.converter.compiler import MarkdownCompiler


@pytest.fixture
def config() -> CompilerConfig:
    """Default compiler configuration."""
    return CompilerConfig()


@pytest.fixture
def compiler(config: CompilerConfig) -> MarkdownCompiler:
    """Markdown compiler using the default test config."""
    return MarkdownCompiler(config)
