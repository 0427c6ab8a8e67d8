"""Structured logging utilities."""

from .events import IndexEvent, JsonlEventLogger, sanitize_metadata, utc_timestamp

__all__ = ["IndexEvent", "JsonlEventLogger", "sanitize_metadata", "utc_timestamp"]
