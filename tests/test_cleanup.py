# tests/test_cleanup.py

from pathlib import Path

import pytest
import numpy as np
from image_grouper.core.cleanup import report_groups
from image_grouper.core.grouping_store import GroupingStore
from image_grouper.core.thumbnail import Thumbnail


def solid(value):
    return Thumbnail(np.full((32, 32, 3), value, dtype=np.uint8))


@pytest.fixture
def populated_store(tmp_path):
    """Two duplicate groups and one singleton, backed by real files"""
    store = GroupingStore(threshold=5)
    files = {}
    for name, value in [("a1", 10), ("b1", 200), ("a2", 11), ("lonely", 100),
                        ("b2", 201), ("a3", 12)]:
        path = tmp_path / f"{name}.png"
        path.write_bytes(b"x" * 10)
        files[name] = str(path)
        store.submit(str(path), solid(value))
    return store, files


def test_report_output(populated_store, capsys):
    store, files = populated_store

    summary = report_groups(store, delete=False)

    assert capsys.readouterr().out.splitlines() == [
        "-----",
        f"0 {files['a1']}",
        f"1 {files['a2']}",
        f"2 {files['a3']}",
        "-----",
        f"0 {files['b1']}",
        f"1 {files['b2']}",
    ]
    assert summary.groups_reported == 2
    assert summary.files_deleted == 0
    assert all(Path(p).exists() for p in files.values())


def test_delete_keeps_primary(populated_store):
    store, files = populated_store

    summary = report_groups(store, delete=True)

    assert summary.files_deleted == 3
    assert summary.bytes_freed == 30
    for name in ("a1", "b1", "lonely"):
        assert Path(files[name]).exists()
    for name in ("a2", "a3", "b2"):
        assert not Path(files[name]).exists()


def test_singletons_not_reported(capsys):
    store = GroupingStore(threshold=5)
    store.submit("only.png", solid(0))
    store.submit("other.png", solid(255))

    summary = report_groups(store, delete=True)

    assert capsys.readouterr().out == ""
    assert summary.groups_reported == 0


def test_delete_failure_is_fatal(tmp_path):
    keep = tmp_path / "keep.png"
    keep.write_bytes(b"x")
    store = GroupingStore(threshold=5)
    store.submit(str(keep), solid(0))
    store.submit(str(tmp_path / "already_gone.png"), solid(0))

    with pytest.raises(FileNotFoundError):
        report_groups(store, delete=True)

    assert keep.exists()


def test_delete_failure_stops_later_groups(tmp_path):
    store = GroupingStore(threshold=5)
    store.submit(str(tmp_path / "a.png"), solid(0))
    store.submit(str(tmp_path / "missing.png"), solid(0))
    later_keep = tmp_path / "b.png"
    later_dup = tmp_path / "b_copy.png"
    for path in (later_keep, later_dup):
        path.write_bytes(b"x")
        store.submit(str(path), solid(255))

    with pytest.raises(OSError):
        report_groups(store, delete=True)

    assert later_dup.exists()
