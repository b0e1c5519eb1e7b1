"""Pydantic v2 models for the scaffolder.

Defines the declarative configuration objects read from the template store
(project types and modules), the merged ``package.json`` manifest, and the
transient records passed between the orchestrator and the placement
resolver.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Optional

from pydantic import BaseModel, ConfigDict, Field

# Module name used as the FileEntry context for the base template tree.
BASE_CONTEXT = "base"


# ---------------------------------------------------------------------------
# Configuration store models
# ---------------------------------------------------------------------------

class ProjectTypeConfig(BaseModel):
    """One project archetype, loaded from ``configs/<type>.json``."""

    model_config = ConfigDict(frozen=True, extra="ignore", populate_by_name=True)

    name: str = Field(..., description="Project type identifier, e.g. 'api'")
    description: str = Field(default="")
    folders: list[str] = Field(
        default_factory=list, description="Relative directories to pre-create"
    )
    dependencies: dict[str, str] = Field(default_factory=dict)
    dev_dependencies: dict[str, str] = Field(default_factory=dict, alias="devDependencies")
    scripts: dict[str, str] = Field(default_factory=dict)
    files: dict[str, bool] = Field(
        default_factory=dict,
        description="Generated-file name -> whether to emit it",
    )

    def wants_file(self, filename: str) -> bool:
        """Return ``True`` when the optional generated file is switched on."""
        return bool(self.files.get(filename, False))


class ModuleConfig(BaseModel):
    """One optional feature bundle, loaded from ``modules/<name>/config.json``.

    The three maps are optional: ``None`` means the module contributes
    nothing for that section.
    """

    model_config = ConfigDict(frozen=True, extra="ignore", populate_by_name=True)

    name: str
    description: str = Field(default="")
    dependencies: Optional[dict[str, str]] = None
    dev_dependencies: Optional[dict[str, str]] = Field(default=None, alias="devDependencies")
    scripts: Optional[dict[str, str]] = None
    files: list[str] = Field(
        default_factory=list,
        description="Informational list of template files shipped by the module",
    )


# ---------------------------------------------------------------------------
# Merge output
# ---------------------------------------------------------------------------

class Manifest(BaseModel):
    """The generated ``package.json``.

    Field order is the serialisation order.
    """

    model_config = ConfigDict(populate_by_name=True)

    name: str
    version: str = Field(default="0.1.0")
    type: str = Field(default="module")
    scripts: dict[str, str] = Field(default_factory=dict)
    dependencies: dict[str, str] = Field(default_factory=dict)
    dev_dependencies: dict[str, str] = Field(default_factory=dict, alias="devDependencies")

    def to_package_json(self) -> dict[str, Any]:
        """Return the manifest as a ``package.json`` dictionary."""
        return self.model_dump(by_alias=True)


# ---------------------------------------------------------------------------
# Transient records
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class FileEntry:
    """A top-level entry of a template tree awaiting a placement decision."""

    source: Path
    is_dir: bool
    context: str = BASE_CONTEXT

    @property
    def name(self) -> str:
        return self.source.name


@dataclass(frozen=True)
class Placement:
    """Where a :class:`FileEntry` goes, relative to the project root.

    ``destination`` is ``None`` when the entry is excluded.
    """

    destination: Optional[Path]
    rule: str

    @property
    def excluded(self) -> bool:
        return self.destination is None


@dataclass
class ScaffoldRequest:
    """Everything the orchestrator needs for one run."""

    target_path: Path
    project_type: str
    modules: list[str] = field(default_factory=list)
    project_name: str = ""

    def __post_init__(self) -> None:
        self.target_path = Path(self.target_path)
        deduped: list[str] = []
        for name in self.modules:
            if name not in deduped:
                deduped.append(name)
        self.modules = deduped
        if not self.project_name:
            self.project_name = self.target_path.name


@dataclass
class ScaffoldResult:
    """What a finished run produced."""

    target_path: Path
    project_type: str
    modules: list[str]
    manifest: Optional[Manifest] = None
    written: list[Path] = field(default_factory=list)
    durations: dict[int, float] = field(default_factory=dict)
