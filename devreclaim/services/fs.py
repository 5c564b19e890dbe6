from __future__ import annotations

import os
import shutil
import stat as statmod
from dataclasses import dataclass
from typing import Protocol


@dataclass(slots=True, frozen=True)
class StatResult:
    size: int
    is_dir: bool
    is_file: bool


@dataclass(slots=True, frozen=True)
class DirEntry:
    path: str
    name: str
    # None when the entry could not be stat'd.
    stat: StatResult | None


class FileSystem(Protocol):
    def expanduser(self, path: str) -> str: ...

    def exists(self, path: str) -> bool: ...

    def absolute(self, path: str) -> str: ...

    def stat(self, path: str) -> StatResult: ...

    def scandir(self, path: str) -> list[DirEntry]: ...

    def read_text(self, path: str) -> str: ...

    def remove_tree(self, path: str) -> None: ...


def _to_stat(st: os.stat_result) -> StatResult:
    return StatResult(
        size=st.st_size,
        is_dir=statmod.S_ISDIR(st.st_mode),
        is_file=statmod.S_ISREG(st.st_mode),
    )


class OsFileSystem:
    """The real filesystem. Nothing here follows symlinks except ``exists``."""

    def expanduser(self, path: str) -> str:
        return os.path.expanduser(path)

    def exists(self, path: str) -> bool:
        return os.path.exists(path)

    def absolute(self, path: str) -> str:
        return os.path.abspath(path)

    def stat(self, path: str) -> StatResult:
        return _to_stat(os.stat(path, follow_symlinks=False))

    def scandir(self, path: str) -> list[DirEntry]:
        entries: list[DirEntry] = []
        with os.scandir(path) as it:
            for entry in it:
                try:
                    st: StatResult | None = _to_stat(entry.stat(follow_symlinks=False))
                except OSError:
                    st = None
                entries.append(DirEntry(path=entry.path, name=entry.name, stat=st))
        return entries

    def read_text(self, path: str) -> str:
        with open(path, encoding="utf-8") as fh:
            return fh.read()

    def remove_tree(self, path: str) -> None:
        # A path that is already gone counts as removed, like `rm -rf`.
        try:
            st = os.stat(path, follow_symlinks=False)
        except FileNotFoundError:
            return
        if statmod.S_ISDIR(st.st_mode):
            shutil.rmtree(path)
        else:
            os.remove(path)


DEFAULT_FS: FileSystem = OsFileSystem()
