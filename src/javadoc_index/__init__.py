"""Javadoc class-name index with versioned on-disk caching."""

__version__ = "0.1.0"
