"""Finalize phase collaborators.

Version-control initialisation and executable-bit fix-up for lifecycle
hooks.  The target directory is passed explicitly to every call; the
current working directory of the process is never changed.
"""

from __future__ import annotations

import asyncio
import os
import stat
from pathlib import Path

from genrules.utils import run_command

from .placement import HOOK_PREFIX, HOOKS_DIR


async def init_git_repo(target: Path) -> tuple[bool, str]:
    """Run ``git init`` inside *target*.

    Returns:
        ``(ok, message)``.  A missing ``git`` binary or a non-zero exit is
        reported through the tuple rather than raised.
    """
    try:
        returncode, stdout, stderr = await run_command(["git", "init"], cwd=target)
    except FileNotFoundError:
        return False, "git executable not found"
    if returncode != 0:
        return False, stderr or stdout or f"git init exited with {returncode}"
    return True, stdout


def _make_executable(path: Path) -> None:
    mode = path.stat().st_mode
    os.chmod(path, mode | stat.S_IXUSR | stat.S_IXGRP | stat.S_IXOTH)


async def make_hooks_executable(target: Path) -> list[Path]:
    """Set the executable bit on every ``.husky/pre-*`` hook present."""
    hooks_dir = target / HOOKS_DIR
    if not hooks_dir.is_dir():
        return []
    hooks = [
        p for p in sorted(hooks_dir.iterdir())
        if p.is_file() and p.name.startswith(HOOK_PREFIX)
    ]
    for hook in hooks:
        await asyncio.to_thread(_make_executable, hook)
    return hooks
