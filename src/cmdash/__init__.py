"""Copilot metrics dashboard: time-range resolution and usage aggregation."""

__version__ = "0.1.0"
