"""Shared fixtures for cmdash tests."""

from __future__ import annotations

import json
from datetime import UTC, datetime
from pathlib import Path
from typing import Any

import pytest

from cmdash.config import Config

SAMPLE_METRICS_PATH = Path(__file__).parent / "data" / "metrics_sample.json"


@pytest.fixture
def fixed_now() -> datetime:
    """A Wednesday afternoon; Monday of that ISO week is 2024-01-15."""
    return datetime(2024, 1, 17, 15, 30, 12, tzinfo=UTC)


@pytest.fixture
def sample_metrics_path() -> Path:
    """JSON file holding both a metrics and a usage series."""
    return SAMPLE_METRICS_PATH


@pytest.fixture
def sample_metrics() -> list[dict[str, Any]]:
    """Two days of metrics in the remote API's nested shape."""
    return json.loads(SAMPLE_METRICS_PATH.read_text())["metrics"]


@pytest.fixture
def sample_usage() -> list[dict[str, Any]]:
    return json.loads(SAMPLE_METRICS_PATH.read_text())["usage"]


@pytest.fixture
def test_config() -> Config:
    return Config(github_token="t0ken", org="acme", api_url="https://api.test")
