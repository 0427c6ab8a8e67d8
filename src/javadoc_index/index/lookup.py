"""Read-only queries over a merged class index."""

from __future__ import annotations

from collections.abc import Callable, Sequence

from javadoc_index.index.manager import IndexManager

CORE_SENTINEL = "java.lang.Object"

Chooser = Callable[[Sequence[str]], str | None]


def completion_order(names: Sequence[str]) -> list[str]:
    """Sort shortest names first, ties in natural string order."""
    return sorted(names, key=lambda name: (len(name), name))


class LookupService:
    """Answers name queries against an IndexManager's current entries."""

    def __init__(self, manager: IndexManager, sentinel: str = CORE_SENTINEL) -> None:
        self._manager = manager
        self._sentinel = sentinel

    def is_core_indexed(self) -> bool:
        """Return True once the standard library documentation has been merged."""
        return self._sentinel in self._manager

    def list_class_names(self) -> list[str]:
        return completion_order(list(self._manager.entries()))

    def resolve(self, name: str) -> str | None:
        return self._manager.get(name)

    def select(self, chooser: Chooser) -> str | None:
        """Let ``chooser`` pick among all class names and resolve the pick."""
        choice = chooser(self.list_class_names())
        if choice is None:
            return None
        return self.resolve(choice)
