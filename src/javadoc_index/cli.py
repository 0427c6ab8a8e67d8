"""Command-line entrypoint."""

from __future__ import annotations

import argparse
import json
import sys
from collections.abc import Sequence
from pathlib import Path
from typing import TextIO

from javadoc_index.config import CliOverrides, IndexConfig, load_effective_config
from javadoc_index.index import (
    CacheStore,
    IndexManager,
    JavadocIndexError,
    LookupService,
    exclude_dir_names,
)
from javadoc_index.logging import JsonlEventLogger

EVENT_LOG_NAME = "events.jsonl"


def build_arg_parser() -> argparse.ArgumentParser:
    """Build argument parser for global options and subcommands."""
    parser = argparse.ArgumentParser(prog="javadoc-index")
    parser.add_argument("--config-dir", required=False, default=".")
    parser.add_argument("--cache-dir", required=False, default=None)
    parser.add_argument(
        "--compress", action=argparse.BooleanOptionalAction, required=False, default=None
    )
    parser.add_argument("--root", action="append", default=[], dest="roots")
    parser.add_argument("--remote", action="append", default=[], dest="remote")
    commands = parser.add_subparsers(dest="command", required=True)

    commands.add_parser("status")
    list_parser = commands.add_parser("list")
    list_parser.add_argument("--prefix", required=False, default=None)
    resolve_parser = commands.add_parser("resolve")
    resolve_parser.add_argument("name")
    events_parser = commands.add_parser("events")
    events_parser.add_argument("--since", required=False, default=None)
    events_parser.add_argument("--limit", type=int, required=False, default=50)
    events_parser.add_argument("--event", action="append", default=None, dest="event_names")
    return parser


class DocIndex:
    """Wires configuration, cache store, index manager and lookup together."""

    def __init__(self, config: IndexConfig) -> None:
        self._config = config
        self._store = CacheStore(cache_dir=config.cache_dir, compress=config.compress)
        self._events = JsonlEventLogger(path=config.cache_dir / EVENT_LOG_NAME)
        self._manager = IndexManager(
            store=self._store,
            snapshot_dir=config.snapshot_dir,
            exclude=exclude_dir_names(config.exclude_dirs),
            logger=self._events,
        )
        self._lookup = LookupService(self._manager, sentinel=config.sentinel)

    @property
    def config(self) -> IndexConfig:
        return self._config

    @property
    def manager(self) -> IndexManager:
        return self._manager

    @property
    def lookup(self) -> LookupService:
        return self._lookup

    @property
    def events(self) -> JsonlEventLogger:
        return self._events

    def load(self) -> None:
        """Merge configured local roots, then bundled remote snapshots."""
        self._manager.add_roots(self._config.roots)
        self._manager.load_remote_snapshot(self._config.remote)

    def status(self) -> dict[str, object]:
        status = self._manager.status()
        return {
            "loaded_roots": list(status.loaded_roots),
            "entry_count": status.entry_count,
            "core_indexed": self._lookup.is_core_indexed(),
            "cache_files": self._store.entries(),
            "effective_config": self._config.to_public_dict(),
        }


def create_index(config_dir: str = ".", cli_overrides: CliOverrides | None = None) -> DocIndex:
    """Create a configured, not yet loaded, documentation index."""
    config = load_effective_config(config_dir=Path(config_dir), overrides=cli_overrides)
    return DocIndex(config=config)


def run(args: argparse.Namespace, out_stream: TextIO, err_stream: TextIO) -> int:
    """Execute a parsed command and return the process exit code."""
    overrides = CliOverrides(
        cache_dir=Path(args.cache_dir) if args.cache_dir is not None else None,
        compress=args.compress,
        roots=tuple(args.roots),
        remote=tuple(args.remote),
    )
    try:
        doc_index = create_index(config_dir=args.config_dir, cli_overrides=overrides)
    except ValueError as exc:
        err_stream.write(f"error: {exc}\n")
        return 2

    if args.command == "events":
        records = doc_index.events.read(
            since=args.since, limit=args.limit, events=args.event_names
        )
        for record in records:
            out_stream.write(f"{json.dumps(record, sort_keys=True)}\n")
        return 0

    try:
        doc_index.load()
    except JavadocIndexError as exc:
        err_stream.write(f"error: {exc}\n")
        return 2

    if args.command == "status":
        out_stream.write(f"{json.dumps(doc_index.status(), sort_keys=True, indent=2)}\n")
        return 0
    if args.command == "list":
        for name in doc_index.lookup.list_class_names():
            if args.prefix is None or name.startswith(args.prefix):
                out_stream.write(f"{name}\n")
        return 0
    if args.command == "resolve":
        location = doc_index.lookup.resolve(args.name)
        if location is None:
            return 1
        out_stream.write(f"{location}\n")
        return 0
    err_stream.write(f"error: unknown command {args.command}\n")
    return 2


def main(argv: Sequence[str] | None = None) -> int:
    """Entrypoint for the javadoc-index command."""
    parser = build_arg_parser()
    args = parser.parse_args(argv)
    return run(args, out_stream=sys.stdout, err_stream=sys.stderr)


if __name__ == "__main__":
    raise SystemExit(main())
