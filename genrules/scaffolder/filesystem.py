"""Filesystem primitives used by every build phase.

Directory creation is idempotent and copies are plain byte-for-byte
duplications.  Blocking I/O runs in a worker thread so the orchestrator can
stay async.  ``OSError`` is never caught here: a failed copy aborts the
current phase.
"""

from __future__ import annotations

import asyncio
import shutil
from pathlib import Path


async def ensure_dir(path: str | Path) -> Path:
    """Create *path* and any missing parents; no-op if it already exists."""
    dir_path = Path(path)
    await asyncio.to_thread(dir_path.mkdir, parents=True, exist_ok=True)
    return dir_path


async def create_folders(root: Path, folders: list[str]) -> list[Path]:
    """Create every folder in *folders* under *root*.

    Folders are independent of one another, so they are created
    concurrently.  Calling this twice yields the same tree.
    """
    paths = [root / folder for folder in folders]
    await asyncio.gather(*(ensure_dir(p) for p in paths))
    return paths


async def copy_file(src: Path, dest: Path) -> Path:
    """Copy one file, creating the destination's parent directory."""

    def _copy() -> None:
        dest.parent.mkdir(parents=True, exist_ok=True)
        shutil.copyfile(src, dest)

    await asyncio.to_thread(_copy)
    return dest


async def copy_tree(src: Path, dest: Path) -> list[Path]:
    """Recursively copy the contents of *src* into *dest*.

    Destination directories that already exist are reused and existing
    files are overwritten.  Entries are visited in sorted order.

    Returns:
        Every file written, in copy order.
    """
    await ensure_dir(dest)
    written: list[Path] = []
    for entry in sorted(src.iterdir()):
        target = dest / entry.name
        if entry.is_dir():
            written.extend(await copy_tree(entry, target))
        else:
            written.append(await copy_file(entry, target))
    return written


async def write_text(path: Path, content: str) -> Path:
    """Write *content* to *path*, creating parent directories."""

    def _write() -> None:
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(content, encoding="utf-8")

    await asyncio.to_thread(_write)
    return path
