"""Canonical root identities."""

from __future__ import annotations

import os


def canonicalize(ref: str) -> str:
    """Return the absolute, symlink-resolved form of ``ref`` ending in one separator."""
    resolved = os.path.realpath(os.path.expanduser(ref))
    if resolved.endswith(os.sep):
        return resolved
    return resolved + os.sep
