from __future__ import annotations

import os
from pathlib import Path

from devreclaim.services.sizing import measure
from tests.fs_mock import MemoryFileSystem


def _write_file(path: Path, size: int) -> None:
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_bytes(b"x" * size)


def test_sums_nested_files(tmp_path: Path) -> None:
    _write_file(tmp_path / "a.bin", 128)
    _write_file(tmp_path / "sub" / "b.bin", 64)
    _write_file(tmp_path / "sub" / "deeper" / "c.bin", 32)
    (tmp_path / "empty").mkdir()

    result = measure(str(tmp_path))

    assert result.total_bytes == 224
    assert result.files == 3
    assert result.skipped == 0


def test_symlinks_are_not_followed(tmp_path: Path) -> None:
    outside = tmp_path / "outside"
    _write_file(outside / "big.bin", 1000)
    root = tmp_path / "root"
    _write_file(root / "small.bin", 10)
    os.symlink(outside / "big.bin", root / "link.bin")
    os.symlink(outside, root / "linkdir")

    result = measure(str(root))

    assert result.total_bytes == 10


def test_root_file_counts_itself(tmp_path: Path) -> None:
    _write_file(tmp_path / "single.bin", 77)
    assert measure(str(tmp_path / "single.bin")).total_bytes == 77


def test_missing_root_is_skipped_not_raised() -> None:
    fs = MemoryFileSystem()
    result = measure("/nope", fs)
    assert result.total_bytes == 0
    assert result.skipped == 1


def test_unreadable_directory_keeps_partial_sum() -> None:
    fs = MemoryFileSystem()
    fs.add_file("/data/ok/a.bin", size=100)
    fs.add_file("/data/locked/b.bin", size=500)
    fs.unreadable.add("/data/locked")

    result = measure("/data", fs)

    assert result.total_bytes == 100
    assert result.skipped == 1


def test_broken_entry_contributes_zero() -> None:
    fs = MemoryFileSystem()
    fs.add_file("/data/a.bin", size=100)
    fs.add_file("/data/b.bin", size=300)
    fs.broken.add("/data/b.bin")

    result = measure("/data", fs)

    assert result.total_bytes == 100
    assert result.files == 1
    assert result.skipped == 1


def test_everything_unreadable_is_distinguishable_from_empty() -> None:
    fs = MemoryFileSystem()
    fs.add_dir("/empty")
    fs.add_file("/denied/a.bin", size=10)
    fs.unreadable.add("/denied")

    empty = measure("/empty", fs)
    denied = measure("/denied", fs)

    assert empty.total_bytes == denied.total_bytes == 0
    assert empty.skipped == 0
    assert denied.skipped == 1
