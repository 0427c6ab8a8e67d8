#!/usr/bin/env python3
"""Build a bundled cache snapshot for a remote Javadoc site from a local copy."""

from __future__ import annotations

import argparse
import os
import sys
from pathlib import Path

from javadoc_index.config import BUNDLED_SNAPSHOT_DIR
from javadoc_index.index import CacheStore, canonicalize, scan


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description=__doc__)
    parser.add_argument("url", help="Base URL the documentation is published under.")
    parser.add_argument("local_copy", help="Directory holding a copy of the same tree.")
    parser.add_argument(
        "--output-dir",
        default=str(BUNDLED_SNAPSHOT_DIR),
        help="Snapshot directory. Defaults to the package webcache directory.",
    )
    parser.add_argument(
        "--no-compress",
        action="store_true",
        help="Write an uncompressed snapshot.",
    )
    return parser.parse_args(argv)


def remote_entries(url: str, local_copy: str) -> dict[str, str]:
    """Scan ``local_copy`` and rewrite page locations under ``url``."""
    root = canonicalize(local_copy)
    base = url if url.endswith("/") else url + "/"
    output: dict[str, str] = {}
    for name, location in scan(root, root).items():
        relative = location[len(root) :].replace(os.sep, "/")
        output[name] = base + relative
    return output


def write_snapshot(url: str, local_copy: str, output_dir: Path, compress: bool = True) -> Path:
    """Write the snapshot for ``url`` and return its path."""
    store = CacheStore(cache_dir=output_dir, compress=compress)
    path = store.path_for(url)
    store.save(path, remote_entries(url, local_copy), root=url)
    return path


def main(argv: list[str] | None = None) -> int:
    args = parse_args(argv)
    path = write_snapshot(
        args.url,
        args.local_copy,
        output_dir=Path(args.output_dir),
        compress=not args.no_compress,
    )
    sys.stdout.write(f"{path}\n")
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
