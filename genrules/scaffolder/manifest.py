"""Manifest merger.

Folds the project type's dependency and script maps together with those of
every selected module into one ``package.json``.  On key collisions the
last writer wins: the project type is applied first, then modules in
selection order.  Nothing is reported on collision.
"""

from __future__ import annotations

from pathlib import Path
from typing import Optional, Sequence

from genrules.utils import save_json

from .models import Manifest, ModuleConfig, ProjectTypeConfig

MANIFEST_FILENAME = "package.json"


def _fold(target: dict[str, str], source: Optional[dict[str, str]]) -> None:
    if source:
        target.update(source)


def merge_manifest(
    name: str,
    base: ProjectTypeConfig,
    modules: Sequence[ModuleConfig],
    *,
    version: str = "0.1.0",
    package_type: str = "module",
) -> Manifest:
    """Merge *base* and *modules* into a :class:`Manifest`.

    Args:
        name: Project name written to the manifest.
        base: The project type configuration, applied first.
        modules: Module configurations in selection order.
        version: Initial version string.
        package_type: Value of the ``type`` marker.

    Returns:
        A new manifest; the inputs are not modified.
    """
    dependencies: dict[str, str] = {}
    dev_dependencies: dict[str, str] = {}
    scripts: dict[str, str] = {}

    _fold(dependencies, base.dependencies)
    _fold(dev_dependencies, base.dev_dependencies)
    _fold(scripts, base.scripts)

    for module in modules:
        _fold(dependencies, module.dependencies)
        _fold(dev_dependencies, module.dev_dependencies)
        _fold(scripts, module.scripts)

    return Manifest(
        name=name,
        version=version,
        type=package_type,
        scripts=scripts,
        dependencies=dependencies,
        dev_dependencies=dev_dependencies,
    )


async def write_manifest(target: Path, manifest: Manifest) -> Path:
    """Write *manifest* as pretty-printed JSON to ``<target>/package.json``."""
    return await save_json(manifest.to_package_json(), target / MANIFEST_FILENAME)
