"""Placement resolver.

Decides where each top-level entry of a template tree lands inside the
generated project.  Decisions depend only on the entry's name, whether it
is a directory, the module it came from and the active project type; file
contents are never read.

Rules are plain data: an ordered tuple of :class:`PlacementRule` evaluated
top-down, first match wins.  The last rule of each chain always matches.
"""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Callable, Optional

from genrules.config import is_frontend_type

from .models import FileEntry, Placement

# ---------------------------------------------------------------------------
# Names and destinations
# ---------------------------------------------------------------------------

MODULE_CONFIG_NAME = "config.json"
SOURCE_SUFFIX = ".ts"
HOOK_PREFIX = "pre-"

SRC_DIR = Path("src")
MIDDLEWARE_DIR = SRC_DIR / "middleware"
LIB_DIR = SRC_DIR / "lib"
TEST_DIR = SRC_DIR / "test"
HOOKS_DIR = Path(".husky")

# ESLint ships in two mutually exclusive flavours; exactly one survives.
LINTER_CONFIG_NAME = "eslint.config.js"
FRONTEND_LINTER_VARIANT = "eslint.config.js"
BACKEND_LINTER_VARIANT = "eslint.config.api.js"

Predicate = Callable[[FileEntry, str], bool]
Destination = Callable[[FileEntry], Optional[Path]]


@dataclass(frozen=True)
class PlacementRule:
    """A named ``(predicate, destination)`` pair.

    ``predicate`` receives the entry and the active project type;
    ``destination`` returns a path relative to the project root, or
    ``None`` to exclude the entry.
    """

    name: str
    predicate: Predicate
    destination: Destination


def _excluded(entry: FileEntry) -> None:
    return None


def _at_root(entry: FileEntry) -> Path:
    return Path(entry.name)


def _under(directory: Path) -> Destination:
    def _destination(entry: FileEntry) -> Path:
        return directory / entry.name

    return _destination


def _renamed(name: str) -> Destination:
    def _destination(entry: FileEntry) -> Path:
        return Path(name)

    return _destination


def is_source_unit(entry: FileEntry) -> bool:
    """A behaviour-bearing source file that is not itself a config file."""
    return (
        not entry.is_dir
        and entry.name.endswith(SOURCE_SUFFIX)
        and "config" not in entry.name
    )


def _source_containing(*tokens: str) -> Predicate:
    def _predicate(entry: FileEntry, project_type: str) -> bool:
        return is_source_unit(entry) and any(t in entry.name for t in tokens)

    return _predicate


# ---------------------------------------------------------------------------
# Rule chains
# ---------------------------------------------------------------------------

MODULE_RULES: tuple[PlacementRule, ...] = (
    PlacementRule(
        "module-config",
        lambda e, t: not e.is_dir and e.name == MODULE_CONFIG_NAME,
        _excluded,
    ),
    PlacementRule("directory", lambda e, t: e.is_dir, _at_root),
    PlacementRule("middleware", _source_containing("middleware"), _under(MIDDLEWARE_DIR)),
    PlacementRule("auth", _source_containing("auth"), _under(LIB_DIR)),
    PlacementRule("test", _source_containing("setup", "test"), _under(TEST_DIR)),
    PlacementRule(
        "shadcn-utils",
        lambda e, t: is_source_unit(e) and e.name == "utils.ts" and e.context == "shadcn",
        _under(LIB_DIR),
    ),
    PlacementRule("source", lambda e, t: is_source_unit(e), _under(LIB_DIR)),
    PlacementRule(
        "hook",
        lambda e, t: not e.is_dir and e.name.startswith(HOOK_PREFIX),
        _under(HOOKS_DIR),
    ),
    PlacementRule("root", lambda e, t: True, _at_root),
)

BASE_RULES: tuple[PlacementRule, ...] = (
    PlacementRule(
        "frontend-linter-skipped",
        lambda e, t: e.name == FRONTEND_LINTER_VARIANT and not is_frontend_type(t),
        _excluded,
    ),
    PlacementRule(
        "backend-linter-skipped",
        lambda e, t: e.name == BACKEND_LINTER_VARIANT and is_frontend_type(t),
        _excluded,
    ),
    PlacementRule(
        "backend-linter",
        lambda e, t: e.name == BACKEND_LINTER_VARIANT,
        _renamed(LINTER_CONFIG_NAME),
    ),
    PlacementRule("verbatim", lambda e, t: True, _at_root),
)


# ---------------------------------------------------------------------------
# Resolution
# ---------------------------------------------------------------------------

def resolve(
    entry: FileEntry,
    project_type: str,
    rules: tuple[PlacementRule, ...],
) -> Placement:
    """Return the placement chosen by the first matching rule in *rules*."""
    for rule in rules:
        if rule.predicate(entry, project_type):
            return Placement(destination=rule.destination(entry), rule=rule.name)
    raise LookupError(f"No placement rule matched {entry.name!r}")


def resolve_module_entry(entry: FileEntry, project_type: str) -> Placement:
    """Place an entry of a module's template tree."""
    return resolve(entry, project_type, MODULE_RULES)


def resolve_base_entry(entry: FileEntry, project_type: str) -> Placement:
    """Place an entry of the base template tree."""
    return resolve(entry, project_type, BASE_RULES)


def scan_entries(directory: Path, context: str) -> list[FileEntry]:
    """List the top-level entries of *directory* as :class:`FileEntry` records.

    Entries are sorted by name so that literal-path collisions always
    resolve the same way.
    """
    return [
        FileEntry(source=path, is_dir=path.is_dir(), context=context)
        for path in sorted(directory.iterdir())
    ]
