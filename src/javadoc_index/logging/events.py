"""Structured JSONL event log for index operations."""

from __future__ import annotations

import json
from collections import deque
from collections.abc import Collection, Iterator
from dataclasses import asdict, dataclass
from datetime import UTC, datetime
from pathlib import Path


@dataclass(slots=True, frozen=True)
class IndexEvent:
    """One load, failure or skip recorded by the index manager."""

    timestamp: str
    event: str
    root: str
    ok: bool
    error_code: str | None
    metadata: dict[str, object]


def utc_timestamp() -> str:
    """Return a UTC timestamp with microseconds, e.g. ``2024-05-01T12:00:00.000001Z``."""
    return datetime.now(tz=UTC).strftime("%Y-%m-%dT%H:%M:%S.%fZ")


def sanitize_metadata(metadata: dict[str, object]) -> dict[str, object]:
    """Keep scalar metadata as-is and summarize containers."""
    sanitized: dict[str, object] = {}
    for key in sorted(metadata.keys()):
        value = metadata[key]
        if isinstance(value, (str, int, float, bool)) or value is None:
            sanitized[key] = value
            continue
        if isinstance(value, (list, tuple)):
            sanitized[f"{key}_type"] = "list"
            sanitized[f"{key}_length"] = len(value)
            continue
        if isinstance(value, dict):
            sanitized[f"{key}_type"] = "dict"
            sanitized[f"{key}_length"] = len(value)
            continue
        sanitized[key] = str(value)
    return sanitized


class JsonlEventLogger:
    """Append-only JSONL event logger and bounded reader."""

    def __init__(self, path: Path) -> None:
        self._path = path

    @property
    def path(self) -> Path:
        """Return on-disk JSONL path."""
        return self._path

    def emit(
        self,
        event: str,
        root: str,
        ok: bool = True,
        error_code: str | None = None,
        **metadata: object,
    ) -> IndexEvent:
        """Build, append and return an event."""
        record = IndexEvent(
            timestamp=utc_timestamp(),
            event=event,
            root=root,
            ok=ok,
            error_code=error_code,
            metadata=sanitize_metadata(metadata),
        )
        self.append(record)
        return record

    def append(self, event: IndexEvent) -> None:
        """Append an event as one JSON object per line."""
        self._path.parent.mkdir(parents=True, exist_ok=True)
        with self._path.open("a", encoding="utf-8") as handle:
            handle.write(json.dumps(asdict(event), sort_keys=True))
            handle.write("\n")

    def read(
        self,
        since: str | None = None,
        limit: int = 50,
        events: Collection[str] | None = None,
    ) -> list[dict[str, object]]:
        """Return the newest ``limit`` records, oldest first.

        ``since`` is an inclusive timestamp lower bound and ``events`` keeps
        only the named event kinds. Blank and undecodable lines are ignored.
        """
        if limit < 1:
            return []
        newest: deque[dict[str, object]] = deque(maxlen=limit)
        for record in self._records():
            if events is not None and record.get("event") not in events:
                continue
            if since is not None and str(record.get("timestamp", "")) < since:
                continue
            newest.append(record)
        return list(newest)

    def _records(self) -> Iterator[dict[str, object]]:
        if not self._path.is_file():
            return
        with self._path.open("r", encoding="utf-8") as handle:
            for line in handle:
                if not line.strip():
                    continue
                try:
                    record = json.loads(line)
                except json.JSONDecodeError:
                    continue
                if isinstance(record, dict):
                    yield record
