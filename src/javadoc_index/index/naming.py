"""Derive fully-qualified class names from Javadoc page paths."""

from __future__ import annotations

import os

from javadoc_index.index.models import ClassEntry

PAGE_SUFFIX = ".html"
_SEPARATORS = tuple(sep for sep in (os.sep, os.altsep) if sep)


def is_class_page(file_name: str) -> bool:
    """Return True for ``.html`` pages whose stem starts with an ASCII capital."""
    if not file_name.endswith(PAGE_SUFFIX):
        return False
    stem = file_name[: -len(PAGE_SUFFIX)]
    return bool(stem) and "A" <= stem[0] <= "Z"


def derive(file_path: str, root: str) -> ClassEntry | None:
    """Map a page under ``root`` to its dotted class name, or None for non-class pages."""
    if not file_path.startswith(root):
        raise ValueError(f"{file_path!r} is not under root {root!r}")
    if not is_class_page(os.path.basename(file_path)):
        return None
    relative = file_path[len(root) : -len(PAGE_SUFFIX)]
    for separator in _SEPARATORS:
        relative = relative.replace(separator, ".")
    return ClassEntry(qualified_name=relative.lstrip("."), location=file_path)
