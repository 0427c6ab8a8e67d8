from __future__ import annotations

from pathlib import Path

from javadoc_index.index import CacheStore, IndexManager, LookupService
from scripts.build_snapshot import main, remote_entries, write_snapshot

URL = "https://docs.example.org/api"


def _write(root: Path, relative: str) -> None:
    path = root / relative
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text("<html></html>\n", encoding="utf-8")


def test_remote_entries_rewrite_locations_under_url(tmp_path: Path) -> None:
    _write(tmp_path, "java/lang/Object.html")
    _write(tmp_path, "java/lang/class-use/Object.html")
    _write(tmp_path, "index.html")

    assert remote_entries(URL, str(tmp_path)) == {
        "java.lang.Object": "https://docs.example.org/api/java/lang/Object.html",
    }


def test_written_snapshot_loads_through_manager(tmp_path: Path) -> None:
    local = tmp_path / "mirror"
    _write(local, "java/lang/Object.html")
    snapshot_dir = tmp_path / "webcache"

    path = write_snapshot(URL + "/", str(local), output_dir=snapshot_dir)

    assert path.parent == snapshot_dir
    store = CacheStore(cache_dir=tmp_path / "cache")
    manager = IndexManager(store=store, snapshot_dir=snapshot_dir)
    manager.load_remote_snapshot([URL + "/"])
    lookup = LookupService(manager)
    assert lookup.is_core_indexed() is True
    assert lookup.resolve("java.lang.Object") == URL + "/java/lang/Object.html"


def test_main_prints_snapshot_path(tmp_path: Path, capsys) -> None:
    _write(tmp_path / "mirror", "Foo.html")

    out_dir = tmp_path / "out"
    code = main([URL, str(tmp_path / "mirror"), "--output-dir", str(out_dir), "--no-compress"])

    assert code == 0
    printed = capsys.readouterr().out.strip()
    assert printed.endswith("-v1")
    assert Path(printed).exists()
