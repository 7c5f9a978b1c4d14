"""Shared test fixtures."""

from __future__ import annotations

from pathlib import Path
from unittest.mock import AsyncMock

import pytest

from cqtool.shared.cache import ResponseCache
from cqtool.shared.groq_client import GroqClient, ModelResponse


@pytest.fixture
def tmp_config(tmp_path: Path) -> Path:
    """Write a minimal valid config YAML and return its path."""
    cfg = tmp_path / "cqtool.yml"
    cfg.write_text(
        """\
cache_capacity: 3
max_retries: 1
retry_delay: 0
port: 9000
kinds:
  syntax:
    model: "llama-3.3-70b-versatile"
    temperature: 0.0
    max_tokens: 800
"""
    )
    return cfg


@pytest.fixture
def mock_groq_client() -> GroqClient:
    """Return a GroqClient with a mocked OpenAI SDK underneath."""
    client = GroqClient.__new__(GroqClient)
    client._client = AsyncMock()
    client.timeout = 5.0
    client.max_retries = 2
    client.retry_delay = 0
    return client


@pytest.fixture
def stub_client() -> AsyncMock:
    """A client double whose ``complete`` returns a ModelResponse."""
    client = AsyncMock()
    client.complete = AsyncMock(return_value=ModelResponse(text="{}", model="stub-model"))
    return client


@pytest.fixture
def cache() -> ResponseCache:
    return ResponseCache(capacity=50)
