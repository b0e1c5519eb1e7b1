"""Shared utility functions for genrules.

Provides async command execution, JSON I/O, Rich-based progress reporting
and small formatting helpers.  Every public function is side-effect-free
where possible, with clear error messages when something goes wrong.
"""

from __future__ import annotations

import asyncio
import json
import os
from pathlib import Path
from typing import Any

from rich.console import Console
from rich.rule import Rule
from rich.table import Table

console = Console()

# ---------------------------------------------------------------------------
# Async command execution
# ---------------------------------------------------------------------------


async def run_command(
    cmd: list[str],
    cwd: str | Path | None = None,
    timeout: int = 60,
    env: dict[str, str] | None = None,
) -> tuple[int, str, str]:
    """Run a command asynchronously without a shell.

    Args:
        cmd: Program and arguments.
        cwd: Working directory for the child process.  Always passed
            explicitly; the current process never changes directory.
        timeout: Maximum wall-clock seconds before the process is killed.
        env: Optional extra environment variables merged on top of ``os.environ``.

    Returns:
        A ``(returncode, stdout, stderr)`` tuple.

    Raises:
        FileNotFoundError: If the program does not exist.
    """
    merged_env: dict[str, str] | None = None
    if env:
        merged_env = {**os.environ, **env}

    process = await asyncio.create_subprocess_exec(
        *cmd,
        stdout=asyncio.subprocess.PIPE,
        stderr=asyncio.subprocess.PIPE,
        cwd=str(cwd) if cwd else None,
        env=merged_env,
    )

    try:
        stdout_bytes, stderr_bytes = await asyncio.wait_for(
            process.communicate(), timeout=timeout
        )
    except asyncio.TimeoutError:
        process.kill()
        await process.wait()
        return (-1, "", f"Command timed out after {timeout}s: {' '.join(cmd)}")

    stdout_str = (stdout_bytes or b"").decode("utf-8", errors="replace").strip()
    stderr_str = (stderr_bytes or b"").decode("utf-8", errors="replace").strip()
    return (process.returncode or 0, stdout_str, stderr_str)


# ---------------------------------------------------------------------------
# JSON I/O
# ---------------------------------------------------------------------------


def load_json(path: str | Path) -> dict[str, Any]:
    """Load and parse a JSON file.

    Args:
        path: Path to the JSON file.

    Returns:
        Parsed dictionary.

    Raises:
        FileNotFoundError: If the file does not exist.
        json.JSONDecodeError: If the file is not valid JSON.
        ValueError: If the top-level value is not a JSON object.
    """
    raw = Path(path).read_text(encoding="utf-8")
    data = json.loads(raw)
    if not isinstance(data, dict):
        raise ValueError(f"{path}: expected a JSON object, got {type(data).__name__}")
    return data


def dump_json(data: dict[str, Any] | list[Any]) -> str:
    """Serialise *data* as 2-space indented JSON (no trailing newline)."""
    return json.dumps(data, indent=2, ensure_ascii=False)


async def save_json(data: dict[str, Any] | list[Any], path: str | Path) -> Path:
    """Save data as pretty-printed JSON.

    Parent directories are created automatically and the write runs in a
    worker thread so the event loop is never blocked.

    Returns:
        The written path.
    """
    file_path = Path(path)
    content = dump_json(data)

    def _write() -> None:
        file_path.parent.mkdir(parents=True, exist_ok=True)
        file_path.write_text(content, encoding="utf-8")

    await asyncio.to_thread(_write)
    return file_path


# ---------------------------------------------------------------------------
# Formatting helpers
# ---------------------------------------------------------------------------


def format_duration(seconds: float) -> str:
    """Format a duration in seconds to a human-readable string.

    Examples::

        format_duration(0.42)  -> "0.4s"
        format_duration(65.2)  -> "1m 5s"
    """
    if seconds < 0:
        return "0.0s"

    minutes = int(seconds // 60)
    secs = seconds % 60
    if minutes > 0:
        return f"{minutes}m {int(secs)}s"
    return f"{secs:.1f}s"


def parse_module_list(value: str, available: list[str]) -> list[str]:
    """Parse a comma-separated module selector.

    Unknown names are dropped silently and duplicates are removed while
    keeping the first occurrence, so selection order is preserved.

    Examples::

        parse_module_list("husky,nope,docker,husky", AVAILABLE_MODULES)
        -> ["husky", "docker"]
    """
    selected: list[str] = []
    for raw in value.split(","):
        name = raw.strip()
        if name and name in available and name not in selected:
            selected.append(name)
    return selected


# ---------------------------------------------------------------------------
# Rich output helpers
# ---------------------------------------------------------------------------


PHASE_NAMES: dict[int, str] = {
    1: "CONFIGURE",
    2: "SCAFFOLD",
    3: "BASE",
    4: "MODULES",
    5: "GENERATE",
    6: "FINALIZE",
}

PHASE_DESCRIPTIONS: dict[int, str] = {
    1: "Loading configurations...",
    2: "Creating directory structure...",
    3: "Copying base configuration files...",
    4: "Copying module files...",
    5: "Generating project files...",
    6: "Initializing project...",
}

PHASE_COLORS: dict[int, str] = {
    1: "bright_cyan",
    2: "bright_green",
    3: "bright_yellow",
    4: "bright_magenta",
    5: "bright_blue",
    6: "bright_white",
}


def print_phase_header(phase: int, total: int = len(PHASE_NAMES)) -> None:
    """Print a ``[n/total] description`` rule for a build phase."""
    color = PHASE_COLORS.get(phase, "white")
    description = PHASE_DESCRIPTIONS.get(phase, PHASE_NAMES.get(phase, ""))
    console.print(
        Rule(
            f"[bold {color}][{phase}/{total}] {description}[/bold {color}]",
            style=color,
            align="left",
        )
    )


def print_summary_table(data: dict[str, str], title: str = "Summary") -> None:
    """Print a two-column key/value summary table.

    Args:
        data: Mapping of label -> value.
        title: Table title.
    """
    table = Table(title=title, show_header=True, header_style="bold cyan")
    table.add_column("Item", style="dim", no_wrap=True)
    table.add_column("Value")

    for key, value in data.items():
        table.add_row(key, str(value))

    console.print(table)
    console.print()


def print_success(message: str) -> None:
    """Print a green success message."""
    console.print(f"[bold green]✓ {message}[/bold green]")


def print_error(message: str) -> None:
    """Print a red error message."""
    console.print(f"[bold red]✗ {message}[/bold red]")


def print_warning(message: str) -> None:
    """Print a yellow warning message."""
    console.print(f"[bold yellow]{message}[/bold yellow]")
