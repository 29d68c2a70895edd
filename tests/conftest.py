"""Shared pytest fixtures for kong_reconciler tests."""

from __future__ import annotations

import os
import tempfile
from collections.abc import Generator
from pathlib import Path

import pytest


@pytest.fixture
def temp_dir() -> Generator[Path]:
    """Create a temporary directory for tests."""
    with tempfile.TemporaryDirectory() as tmpdir:
        yield Path(tmpdir)


@pytest.fixture
def temp_config_file(temp_dir: Path) -> Path:
    """Create a temporary reconciler config file."""
    config_path = temp_dir / "reconciler.yaml"
    config_path.write_text(
        """
connection:
  base_url: http://kong.test:8001/
  timeout: 10
auth:
  type: api_key
  api_key: file-key
"""
    )
    return config_path


@pytest.fixture(autouse=True)
def reset_environment(monkeypatch: pytest.MonkeyPatch) -> None:
    """Reset environment variables for each test."""
    for key in list(os.environ.keys()):
        if key.startswith("KONG_RECONCILER_"):
            monkeypatch.delenv(key, raising=False)
