"""Bundled cache snapshots for remote documentation sites."""
