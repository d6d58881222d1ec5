"""Tests for reading exported records from disk."""

from __future__ import annotations

import json
from pathlib import Path

import pytest

from cmdash.data.client import MetricsScope, MetricsSourceError
from cmdash.data.loader import FileMetricsSource, load_records


def test_load_records_plain_list(tmp_path: Path) -> None:
    path = tmp_path / "days.json"
    path.write_text(json.dumps([{"date": "2024-01-01"}]))
    assert load_records(path) == [{"date": "2024-01-01"}]


def test_load_records_keyed_object(sample_metrics_path: Path) -> None:
    assert len(load_records(sample_metrics_path, "metrics")) == 2
    assert load_records(sample_metrics_path, "usage")[0]["day"] == "2024-01-01"


def test_load_records_returns_unexpected_shape_unchanged(tmp_path: Path) -> None:
    path = tmp_path / "odd.json"
    path.write_text(json.dumps({"other": 1}))
    assert load_records(path) == {"other": 1}


@pytest.mark.asyncio
async def test_file_source_ignores_range(sample_metrics_path: Path) -> None:
    source = FileMetricsSource(sample_metrics_path)
    scope = MetricsScope.org("acme")
    assert len(await source.fetch_metrics(scope, "2030-01-01", "2030-01-02")) == 2
    assert len(await source.fetch_usage(scope, "", "")) == 2
    assert await source.list_organizations() == []
    await source.close()


def test_load_records_invalid_json_raises_source_error(tmp_path: Path) -> None:
    path = tmp_path / "broken.json"
    path.write_text("{not json")
    with pytest.raises(MetricsSourceError, match="Cannot read") as exc_info:
        load_records(path)
    assert exc_info.value.endpoint == str(path)


def test_load_records_missing_file_raises_source_error(tmp_path: Path) -> None:
    path = tmp_path / "missing.json"
    with pytest.raises(MetricsSourceError) as exc_info:
        load_records(path)
    assert exc_info.value.endpoint == str(path)
