"""Configuration for cmdash."""

from __future__ import annotations

import logging
import os
from collections.abc import Mapping
from dataclasses import dataclass

from cmdash.data.client import DEFAULT_API_URL, DEFAULT_API_VERSION, MAX_PER_PAGE

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Config:
    """Application configuration."""

    github_token: str = ""
    org: str = ""
    enterprise: str = ""
    api_url: str = DEFAULT_API_URL
    api_version: str = DEFAULT_API_VERSION
    per_page: int = MAX_PER_PAGE
    window_days: int = 28
    top_languages: int = 6
    timeout: float = 30.0

    @classmethod
    def from_env(cls, environ: Mapping[str, str] | None = None) -> Config:
        """Build a config from environment variables, keeping defaults for unset ones."""
        env = os.environ if environ is None else environ
        return cls(
            github_token=env.get("GITHUB_TOKEN", ""),
            org=env.get("ORG_NAME") or env.get("ORG_NAME_1", ""),
            enterprise=env.get("ENTERPRISE_NAME", ""),
            api_url=env.get("GITHUB_API_URL") or DEFAULT_API_URL,
            per_page=_env_int(env, "CMDASH_PER_PAGE", MAX_PER_PAGE),
        )


def _env_int(env: Mapping[str, str], key: str, default: int) -> int:
    raw = env.get(key, "")
    if not raw:
        return default
    try:
        return int(raw)
    except ValueError:
        logger.warning("Ignoring non-integer %s=%r, using %d", key, raw, default)
        return default
