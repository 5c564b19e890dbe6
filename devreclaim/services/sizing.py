from __future__ import annotations

from dataclasses import dataclass

from devreclaim.services.fs import DEFAULT_FS, FileSystem


@dataclass(slots=True, frozen=True)
class SizeResult:
    total_bytes: int
    files: int
    # Entries that could not be stat'd or listed; they count as zero bytes.
    skipped: int


def measure(path: str, fs: FileSystem = DEFAULT_FS) -> SizeResult:
    """Sum the sizes of every regular file under *path*.

    Errors never abort the walk: an unreadable entry is skipped and counted,
    so the total is a lower bound when ``skipped`` is non-zero. Symlinks are
    not followed and directories contribute nothing themselves.
    """
    try:
        root = fs.stat(path)
    except OSError:
        return SizeResult(total_bytes=0, files=0, skipped=1)
    if not root.is_dir:
        if root.is_file:
            return SizeResult(total_bytes=root.size, files=1, skipped=0)
        return SizeResult(total_bytes=0, files=0, skipped=0)

    total = 0
    files = 0
    skipped = 0
    stack: list[str] = [path]
    while stack:
        current = stack.pop()
        try:
            entries = fs.scandir(current)
        except OSError:
            skipped += 1
            continue
        for entry in entries:
            st = entry.stat
            if st is None:
                skipped += 1
                continue
            if st.is_dir:
                stack.append(entry.path)
            elif st.is_file:
                total += st.size
                files += 1
    return SizeResult(total_bytes=total, files=files, skipped=skipped)
