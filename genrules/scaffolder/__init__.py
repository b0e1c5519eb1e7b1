"""genrules scaffolder -- composes new projects from templates.

Takes a project type and an ordered list of modules and writes a project
directory built from the base template tree, the module template trees,
a merged ``package.json`` and generated starter files.

Quick usage::

    from genrules.scaffolder import ProjectGenerator, ScaffoldRequest

    request = ScaffoldRequest(
        target_path=Path("~/projects/my-app").expanduser(),
        project_type="fullstack",
        modules=["docker", "husky"],
    )
    result = await ProjectGenerator().generate(request)
"""

from genrules.scaffolder.errors import ConfigNotFoundError, GenRulesError, ScaffoldError
from genrules.scaffolder.generator import ProjectGenerator
from genrules.scaffolder.manifest import merge_manifest
from genrules.scaffolder.models import (
    Manifest,
    ModuleConfig,
    ProjectTypeConfig,
    ScaffoldRequest,
    ScaffoldResult,
)
from genrules.scaffolder.repository import ConfigRepository

__all__ = [
    "ConfigNotFoundError",
    "ConfigRepository",
    "GenRulesError",
    "Manifest",
    "ModuleConfig",
    "ProjectGenerator",
    "ProjectTypeConfig",
    "ScaffoldError",
    "ScaffoldRequest",
    "ScaffoldResult",
    "merge_manifest",
]
