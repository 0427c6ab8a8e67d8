"""Configuration loading and deterministic merge order."""

from __future__ import annotations

import tomllib
from dataclasses import dataclass
from pathlib import Path

from javadoc_index.index import CORE_SENTINEL, DEFAULT_EXCLUDED_DIRS

CONFIG_FILE_NAME = "javadoc_index.toml"
DEFAULT_CACHE_DIR = Path("~/.cache/javadoc-index")
BUNDLED_SNAPSHOT_DIR = Path(__file__).resolve().parent / "webcache"


@dataclass(slots=True, frozen=True)
class IndexConfig:
    """Fully merged indexing configuration."""

    cache_dir: Path
    compress: bool
    snapshot_dir: Path
    roots: tuple[str, ...]
    remote: tuple[str, ...]
    exclude_dirs: tuple[str, ...]
    sentinel: str

    def to_public_dict(self) -> dict[str, object]:
        """Return serializable config snapshot for status output."""
        return {
            "cache": {
                "dir": str(self.cache_dir),
                "compress": self.compress,
            },
            "index": {
                "roots": list(self.roots),
                "remote": list(self.remote),
                "exclude_dirs": list(self.exclude_dirs),
                "sentinel": self.sentinel,
                "snapshot_dir": str(self.snapshot_dir),
            },
        }


@dataclass(slots=True, frozen=True)
class CliOverrides:
    """Optional startup overrides applied at highest precedence."""

    cache_dir: Path | None = None
    compress: bool | None = None
    roots: tuple[str, ...] = ()
    remote: tuple[str, ...] = ()


def default_config() -> IndexConfig:
    """Build the default configuration."""
    return IndexConfig(
        cache_dir=DEFAULT_CACHE_DIR.expanduser().resolve(),
        compress=True,
        snapshot_dir=BUNDLED_SNAPSHOT_DIR,
        roots=(),
        remote=(),
        exclude_dirs=DEFAULT_EXCLUDED_DIRS,
        sentinel=CORE_SENTINEL,
    )


def load_config_file(config_dir: Path) -> dict[str, object]:
    """Load optional javadoc_index.toml from ``config_dir``."""
    config_path = config_dir / CONFIG_FILE_NAME
    if not config_path.exists():
        return {}
    with config_path.open("rb") as handle:
        payload = tomllib.load(handle)
    if not isinstance(payload, dict):
        raise ValueError(f"{CONFIG_FILE_NAME} must contain a top-level table.")
    return payload


def _section(payload: dict[str, object], name: str) -> dict[str, object]:
    section = payload.get(name, {})
    if not isinstance(section, dict):
        raise ValueError(
            f"Config section '{name}' must be a table, got {type(section).__name__}."
        )
    return section


def _string_list(value: object, field: str) -> tuple[str, ...]:
    if not isinstance(value, list):
        raise ValueError(f"Config field '{field}' must be a list of strings.")
    for position, item in enumerate(value):
        if not isinstance(item, str):
            raise ValueError(
                f"Config field '{field}' item {position} is {type(item).__name__}, not a string."
            )
    return tuple(value)


def _optional_string(value: object, section: str, field: str, default: str) -> str:
    if value is None:
        return default
    if not isinstance(value, str) or not value:
        raise ValueError(f"Config field '{section}.{field}' must be a non-empty string.")
    return value


def _resolve_dir(value: str, config_dir: Path) -> Path:
    path = Path(value).expanduser()
    if not path.is_absolute():
        path = config_dir / path
    return path.resolve()


def merge_config(
    base: IndexConfig,
    payload: dict[str, object],
    overrides: CliOverrides,
    config_dir: Path,
) -> IndexConfig:
    """Merge defaults, config file, then CLI/startup overrides."""
    cache_payload = _section(payload, "cache")
    index_payload = _section(payload, "index")

    cache_dir = base.cache_dir
    if "dir" in cache_payload:
        cache_dir = _resolve_dir(
            _optional_string(cache_payload["dir"], "cache", "dir", str(base.cache_dir)),
            config_dir,
        )

    compress = base.compress
    if "compress" in cache_payload:
        raw_compress = cache_payload["compress"]
        if not isinstance(raw_compress, bool):
            raise ValueError("Config field 'cache.compress' must be a boolean.")
        compress = raw_compress

    snapshot_dir = base.snapshot_dir
    if "snapshot_dir" in index_payload:
        snapshot_dir = _resolve_dir(
            _optional_string(
                index_payload["snapshot_dir"], "index", "snapshot_dir", str(base.snapshot_dir)
            ),
            config_dir,
        )

    roots = base.roots
    if "roots" in index_payload:
        roots = tuple(
            str(_resolve_dir(root, config_dir))
            for root in _string_list(index_payload["roots"], "index.roots")
        )
    remote = base.remote
    if "remote" in index_payload:
        remote = _string_list(index_payload["remote"], "index.remote")
    exclude_dirs = base.exclude_dirs
    if "exclude_dirs" in index_payload:
        exclude_dirs = _string_list(index_payload["exclude_dirs"], "index.exclude_dirs")
    sentinel = _optional_string(index_payload.get("sentinel"), "index", "sentinel", base.sentinel)

    merged = IndexConfig(
        cache_dir=cache_dir,
        compress=compress,
        snapshot_dir=snapshot_dir,
        roots=roots,
        remote=remote,
        exclude_dirs=exclude_dirs,
        sentinel=sentinel,
    )
    return apply_cli_overrides(merged, overrides)


def apply_cli_overrides(config: IndexConfig, overrides: CliOverrides) -> IndexConfig:
    """Apply startup overrides at highest precedence; roots and remotes are appended."""
    cache_dir = overrides.cache_dir.expanduser() if overrides.cache_dir else config.cache_dir
    return IndexConfig(
        cache_dir=cache_dir.resolve(),
        compress=overrides.compress if overrides.compress is not None else config.compress,
        snapshot_dir=config.snapshot_dir,
        roots=config.roots + overrides.roots,
        remote=config.remote + overrides.remote,
        exclude_dirs=config.exclude_dirs,
        sentinel=config.sentinel,
    )


def load_effective_config(config_dir: Path, overrides: CliOverrides | None = None) -> IndexConfig:
    """Load effective config using merge order defaults -> config file -> overrides."""
    resolved_dir = config_dir.resolve()
    base = default_config()
    payload = load_config_file(resolved_dir)
    return merge_config(base, payload, overrides or CliOverrides(), resolved_dir)
