from __future__ import annotations

import json
import os
from pathlib import Path

from javadoc_index.cli import create_index, main
from javadoc_index.config import CliOverrides
from javadoc_index.index import CacheStore


def _write(root: Path, relative: str) -> None:
    path = root / relative
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text("<html></html>\n", encoding="utf-8")


def _docs(tmp_path: Path) -> Path:
    docs = tmp_path / "docs"
    _write(docs, "java/lang/Object.html")
    _write(docs, "java/lang/String.html")
    _write(docs, "java/util/List.html")
    _write(docs, "java/util/class-use/List.html")
    _write(docs, "java/util/package-summary.html")
    return docs


def _base_args(tmp_path: Path, docs: Path) -> list[str]:
    return [
        "--config-dir",
        str(tmp_path),
        "--cache-dir",
        str(tmp_path / "cache"),
        "--root",
        str(docs),
    ]


def test_status_reports_loaded_root_and_core_flag(tmp_path: Path, capsys) -> None:
    docs = _docs(tmp_path)

    code = main([*_base_args(tmp_path, docs), "status"])

    assert code == 0
    status = json.loads(capsys.readouterr().out)
    assert status["entry_count"] == 3
    assert status["core_indexed"] is True
    assert status["loaded_roots"] == [str(docs.resolve()) + os.sep]
    assert len(status["cache_files"]) == 1
    assert status["effective_config"]["cache"]["compress"] is True


def test_list_orders_names_and_filters_by_prefix(tmp_path: Path, capsys) -> None:
    docs = _docs(tmp_path)

    assert main([*_base_args(tmp_path, docs), "list"]) == 0
    assert capsys.readouterr().out.splitlines() == [
        "java.util.List",
        "java.lang.Object",
        "java.lang.String",
    ]

    assert main([*_base_args(tmp_path, docs), "list", "--prefix", "java.lang."]) == 0
    assert capsys.readouterr().out.splitlines() == ["java.lang.Object", "java.lang.String"]


def test_resolve_prints_location_or_exits_quietly(tmp_path: Path, capsys) -> None:
    docs = _docs(tmp_path)

    assert main([*_base_args(tmp_path, docs), "resolve", "java.util.List"]) == 0
    out = capsys.readouterr().out.strip()
    assert out == str(docs.resolve() / "java" / "util" / "List.html")

    assert main([*_base_args(tmp_path, docs), "resolve", "NotThere"]) == 1
    captured = capsys.readouterr()
    assert captured.out == ""
    assert captured.err == ""


def test_failed_root_is_reported(tmp_path: Path, capsys) -> None:
    code = main([*_base_args(tmp_path, tmp_path / "missing"), "status"])

    assert code == 2
    assert capsys.readouterr().err.startswith("error: Cannot scan")


def test_unwritable_cache_dir_is_reported(tmp_path: Path, capsys) -> None:
    docs = _docs(tmp_path)
    blocker = tmp_path / "blocker"
    blocker.write_text("a file, not a directory", encoding="utf-8")
    args = ["--config-dir", str(tmp_path), "--cache-dir", str(blocker / "cache")]

    code = main([*args, "--root", str(docs), "status"])

    assert code == 2
    assert capsys.readouterr().err.startswith("error: Cannot write cache record")


def test_invalid_config_is_reported(tmp_path: Path, capsys) -> None:
    (tmp_path / "javadoc_index.toml").write_text('[cache]\ncompress = "no"\n', encoding="utf-8")

    code = main(["--config-dir", str(tmp_path), "status"])

    assert code == 2
    assert "cache.compress" in capsys.readouterr().err


def test_events_command_reads_event_log(tmp_path: Path, capsys) -> None:
    docs = _docs(tmp_path)
    main([*_base_args(tmp_path, docs), "status"])
    capsys.readouterr()

    assert main([*_base_args(tmp_path, docs), "events", "--limit", "5"]) == 0
    lines = capsys.readouterr().out.splitlines()
    assert [json.loads(line)["event"] for line in lines] == ["root_loaded"]


def test_events_command_filters_by_event_name(tmp_path: Path, capsys) -> None:
    docs = _docs(tmp_path)
    main([*_base_args(tmp_path, docs), "status"])
    main([*_base_args(tmp_path, tmp_path / "missing"), "status"])
    capsys.readouterr()

    assert main([*_base_args(tmp_path, docs), "events", "--event", "root_failed"]) == 0
    lines = capsys.readouterr().out.splitlines()
    assert [json.loads(line)["error_code"] for line in lines] == ["SCAN_FAILED"]


def test_remote_snapshots_come_from_configured_snapshot_dir(tmp_path: Path) -> None:
    url = "https://docs.example.org/api/"
    snapshots = CacheStore(cache_dir=tmp_path / "snapshots")
    snapshots.save(snapshots.path_for(url), {"java.lang.Object": url + "java/lang/Object.html"})
    (tmp_path / "javadoc_index.toml").write_text(
        "\n".join(
            [
                "[index]",
                'snapshot_dir = "snapshots"',
                f'remote = ["{url}"]',
            ]
        ),
        encoding="utf-8",
    )

    doc_index = create_index(
        config_dir=str(tmp_path), cli_overrides=CliOverrides(cache_dir=tmp_path / "cache")
    )
    doc_index.load()

    assert doc_index.lookup.is_core_indexed() is True
    assert doc_index.lookup.resolve("java.lang.Object") == url + "java/lang/Object.html"
    assert doc_index.status()["loaded_roots"] == [url]


def test_second_run_reuses_cache(tmp_path: Path, capsys) -> None:
    docs = _docs(tmp_path)
    main([*_base_args(tmp_path, docs), "status"])
    capsys.readouterr()
    (docs / "java" / "util" / "List.html").unlink()

    assert main([*_base_args(tmp_path, docs), "resolve", "java.util.List"]) == 0
    assert capsys.readouterr().out.strip().endswith("List.html")
