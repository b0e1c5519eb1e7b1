"""Configuration repository.

Reads project-type and module configuration documents from the template
store.  Pure lookups: nothing is cached and nothing is merged here.
"""

from __future__ import annotations

from pathlib import Path
from typing import Optional

from genrules.config import Settings
from genrules.utils import load_json

from .errors import ConfigNotFoundError
from .models import ModuleConfig, ProjectTypeConfig

MODULE_CONFIG_FILENAME = "config.json"


class ConfigRepository:
    """Looks up :class:`ProjectTypeConfig` and :class:`ModuleConfig` by name.

    Project types live at ``<configs_dir>/<name>.json``; module configs sit
    next to the module's templates at ``<modules_dir>/<name>/config.json``.
    """

    def __init__(self, settings: Settings | None = None) -> None:
        self.settings = settings or Settings()

    # -- Project types -----------------------------------------------------

    def project_type_path(self, name: str) -> Path:
        return self.settings.configs_dir / f"{name}.json"

    def load_project_type(self, name: str) -> ProjectTypeConfig:
        """Load the configuration registered for project type *name*.

        Raises:
            ConfigNotFoundError: If no ``<name>.json`` exists.
        """
        path = self.project_type_path(name)
        if not path.is_file():
            raise ConfigNotFoundError(name, str(path))
        data = load_json(path)
        data.setdefault("name", name)
        return ProjectTypeConfig.model_validate(data)

    def list_project_types(self) -> list[str]:
        """Return the project types available in the store, sorted."""
        if not self.settings.configs_dir.is_dir():
            return []
        return sorted(p.stem for p in self.settings.configs_dir.glob("*.json"))

    # -- Modules -----------------------------------------------------------

    def module_dir(self, name: str) -> Path:
        """Return the template directory of module *name* (may not exist)."""
        return self.settings.modules_dir / name

    def load_module(self, name: str) -> Optional[ModuleConfig]:
        """Load the configuration of module *name*.

        Returns ``None`` when the module has no ``config.json``; such a
        module contributes nothing to the manifest but its templates are
        still placed.
        """
        path = self.module_dir(name) / MODULE_CONFIG_FILENAME
        if not path.is_file():
            return None
        data = load_json(path)
        data.setdefault("name", name)
        return ModuleConfig.model_validate(data)

    def list_modules(self) -> list[str]:
        """Return module template directories present in the store, sorted."""
        if not self.settings.modules_dir.is_dir():
            return []
        return sorted(p.name for p in self.settings.modules_dir.iterdir() if p.is_dir())
