"""genrules configuration.

Typed settings for the scaffolder.  All settings use Pydantic v2 models so
they can be validated at construction time and overridden from environment
variables without boiler-plate.
"""

from __future__ import annotations

import os
from pathlib import Path
from typing import Any

from pydantic import BaseModel, Field

# ---------------------------------------------------------------------------
# Project types and modules
# ---------------------------------------------------------------------------

VALID_PROJECT_TYPES: list[str] = ["fullstack", "frontend", "api", "minimal"]

AVAILABLE_MODULES: list[str] = ["docker", "husky", "testing", "auth", "shadcn"]

PROJECT_TYPE_DESCRIPTIONS: dict[str, str] = {
    "fullstack": "SaaS, dashboard, full-stack web app",
    "frontend": "Portfolio, landing page, SPA",
    "api": "REST API, microservice, backend",
    "minimal": "CLI tool, library, script",
}

# Project types that ship a React front-end (and the browser ESLint variant).
FRONTEND_PROJECT_TYPES: frozenset[str] = frozenset({"fullstack", "frontend"})

# Project types that ship a Hono server and a database schema.
BACKEND_PROJECT_TYPES: frozenset[str] = frozenset({"fullstack", "api"})

_DEFAULT_TEMPLATES_DIR = Path(__file__).parent / "scaffolder" / "templates"


class Settings(BaseModel):
    """Global genrules settings.

    Instances are created once by the CLI entry point (usually through
    :meth:`from_env`) and passed to the repository and the generator.
    """

    templates_dir: Path = Field(default=_DEFAULT_TEMPLATES_DIR)
    initial_version: str = Field(default="0.1.0", description="Version written to package.json")
    package_type: str = Field(default="module", description="package.json ``type`` marker")
    default_project_type: str = Field(default="fullstack")
    init_git: bool = Field(default=True, description="Run ``git init`` in the finished project")

    # ------------------------------------------------------------------
    # Derived paths (read-only properties)
    # ------------------------------------------------------------------

    @property
    def configs_dir(self) -> Path:
        """Directory holding one ``<type>.json`` per project type."""
        return self.templates_dir / "configs"

    @property
    def base_dir(self) -> Path:
        """Template tree copied into every project."""
        return self.templates_dir / "base"

    @property
    def modules_dir(self) -> Path:
        """Parent directory of the per-module template trees."""
        return self.templates_dir / "modules"

    @property
    def readme_dir(self) -> Path:
        """Directory holding one ``<type>.md`` README template per project type."""
        return self.templates_dir / "readme"

    @property
    def generated_dir(self) -> Path:
        """Jinja2 templates for generated configuration and starter files."""
        return self.templates_dir / "generated"

    # ------------------------------------------------------------------
    # Construction helpers
    # ------------------------------------------------------------------

    @classmethod
    def from_env(cls) -> "Settings":
        """Build ``Settings`` from environment variables.

        Recognised variables (all optional):
            GENRULES_TEMPLATES_DIR, GENRULES_INITIAL_VERSION,
            GENRULES_DEFAULT_TYPE, GENRULES_NO_GIT.
        """
        kwargs: dict[str, Any] = {}
        if os.environ.get("GENRULES_TEMPLATES_DIR"):
            kwargs["templates_dir"] = Path(os.environ["GENRULES_TEMPLATES_DIR"])
        if os.environ.get("GENRULES_INITIAL_VERSION"):
            kwargs["initial_version"] = os.environ["GENRULES_INITIAL_VERSION"]
        if os.environ.get("GENRULES_DEFAULT_TYPE"):
            kwargs["default_project_type"] = os.environ["GENRULES_DEFAULT_TYPE"]
        if os.environ.get("GENRULES_NO_GIT", "").lower() in ("1", "true", "yes"):
            kwargs["init_git"] = False
        return cls(**kwargs)


def is_frontend_type(project_type: str) -> bool:
    """Return ``True`` when *project_type* ships a React front-end."""
    return project_type in FRONTEND_PROJECT_TYPES


def is_backend_type(project_type: str) -> bool:
    """Return ``True`` when *project_type* ships a server and database schema."""
    return project_type in BACKEND_PROJECT_TYPES
