"""Allow running as ``python -m cmdash``."""

from cmdash.cli import app

app()
