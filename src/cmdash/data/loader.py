"""Read previously exported metrics records from disk."""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Any

from cmdash.data.client import MetricsScope, MetricsSourceError

logger = logging.getLogger(__name__)


def load_records(path: Path, key: str = "metrics") -> list[Any]:
    """Load a JSON list of daily records.

    The file may hold the list itself or an object with the list under
    ``key`` (``metrics`` or ``usage``). Anything else is returned as-is so the
    aggregator can reject it.

    Raises:
        MetricsSourceError: the file cannot be read or is not valid JSON.
    """
    try:
        data = json.loads(path.read_text(encoding="utf-8"))
    except (OSError, ValueError) as exc:
        logger.warning("Failed to load records from %s: %s", path, exc)
        raise MetricsSourceError(f"Cannot read {path}: {exc}", endpoint=str(path)) from exc
    if isinstance(data, dict) and key in data:
        data = data[key]
    if isinstance(data, list):
        logger.info("Loaded %d records from %s", len(data), path)
    return data


class FileMetricsSource:
    """Serves records from a JSON file in place of the remote API.

    The date range is ignored: the file is assumed to already cover it.
    """

    def __init__(self, path: Path) -> None:
        self._path = path

    async def fetch_metrics(self, scope: MetricsScope, since: str, until: str) -> list[Any]:
        return load_records(self._path, "metrics")

    async def fetch_usage(self, scope: MetricsScope, since: str, until: str) -> list[Any]:
        return load_records(self._path, "usage")

    async def list_organizations(self) -> list[Any]:
        return []

    async def close(self) -> None:
        return
