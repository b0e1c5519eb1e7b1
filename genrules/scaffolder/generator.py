"""Project assembly orchestrator.

Drives a scaffolding run through six strictly ordered phases:

Phase 1: CONFIGURE -- Load the project type and every selected module config.
Phase 2: SCAFFOLD  -- Create the target root and the declared folders.
Phase 3: BASE      -- Copy the base template tree (linter variant chosen here).
Phase 4: MODULES   -- Copy each module's template tree through the placement rules.
Phase 5: GENERATE  -- Write package.json, optional configs and starter files.
Phase 6: FINALIZE  -- git init and executable bits on lifecycle hooks.

A failing phase aborts the run; nothing is retried and nothing is rolled
back.  Only a phase 1 failure leaves the filesystem untouched.
"""

from __future__ import annotations

import time
from pathlib import Path
from typing import Awaitable, Optional, TypeVar

from jinja2 import TemplateError

from genrules.config import Settings
from genrules.utils import (
    console,
    format_duration,
    print_phase_header,
    print_success,
    print_warning,
)

from .errors import GenRulesError, ScaffoldError
from .filesystem import copy_file, copy_tree, create_folders, ensure_dir
from .finalize import init_git_repo, make_hooks_executable
from .manifest import merge_manifest, write_manifest
from .models import (
    BASE_CONTEXT,
    FileEntry,
    ModuleConfig,
    Placement,
    ProjectTypeConfig,
    ScaffoldRequest,
    ScaffoldResult,
)
from .placement import resolve_base_entry, resolve_module_entry, scan_entries
from .repository import ConfigRepository
from .starter import StarterGenerator
from .templates import TemplateRenderer

T = TypeVar("T")


class ProjectGenerator:
    """Composes a project from the base template, module templates and configs.

    One instance may serve several runs; per-run state lives in the
    :class:`ScaffoldResult` and the loaded configs passed between phases.
    """

    def __init__(
        self,
        settings: Settings | None = None,
        repository: ConfigRepository | None = None,
        renderer: TemplateRenderer | None = None,
    ) -> None:
        self.settings = settings or Settings()
        self.repository = repository or ConfigRepository(self.settings)
        self.renderer = renderer or TemplateRenderer(self.settings.generated_dir)
        self.starter = StarterGenerator(self.renderer, self.settings.readme_dir)

    # -- Public API --------------------------------------------------------

    async def generate(self, request: ScaffoldRequest) -> ScaffoldResult:
        """Run all six phases for *request*.

        Returns:
            The :class:`ScaffoldResult` describing what was written.

        Raises:
            ConfigNotFoundError: The project type is unknown (phase 1,
                before anything touches the disk).
            ScaffoldError: A later phase failed on I/O.
        """
        root = request.target_path
        result = ScaffoldResult(
            target_path=root,
            project_type=request.project_type,
            modules=list(request.modules),
        )

        project_config, module_configs = await self._run_phase(
            1, "Configurations loaded", result, self.configure(request)
        )
        await self._run_phase(
            2, "Directory structure created", result, self.scaffold(root, project_config)
        )
        await self._run_phase(
            3, "Base files copied", result, self.place_base(root, request.project_type, result)
        )
        await self._run_phase(
            4, "Module files copied", result, self.place_modules(root, request, result)
        )
        result.manifest = await self._run_phase(
            5,
            "Project files generated",
            result,
            self.generate_files(root, request, project_config, module_configs, result),
        )
        await self._run_phase(6, "Project initialized", result, self.finalize(root))
        return result

    # -- Phase runner ------------------------------------------------------

    async def _run_phase(
        self, phase: int, done_message: str, result: ScaffoldResult, step: Awaitable[T]
    ) -> T:
        print_phase_header(phase)
        started = time.monotonic()
        try:
            value = await step
        except GenRulesError:
            raise
        except OSError as exc:
            path = str(exc.filename) if exc.filename is not None else None
            reason = exc.strerror or str(exc)
            message = f"{reason}: {path}" if path else reason
            raise ScaffoldError(phase, message, path=path) from exc
        except ValueError as exc:
            # Malformed JSON, a non-object document or a failed validation.
            raise ScaffoldError(phase, str(exc)) from exc
        except TemplateError as exc:
            raise ScaffoldError(phase, f"template error: {exc}") from exc
        finally:
            result.durations[phase] = time.monotonic() - started
        print_success(f"{done_message} ({format_duration(result.durations[phase])})")
        return value

    # -- Phase 1: CONFIGURE ------------------------------------------------

    async def configure(
        self, request: ScaffoldRequest
    ) -> tuple[ProjectTypeConfig, list[ModuleConfig]]:
        """Load the project type config and the configs of selected modules.

        Modules without a ``config.json`` are skipped here; they may still
        contribute files in phase 4.
        """
        project_config = self.repository.load_project_type(request.project_type)
        module_configs: list[ModuleConfig] = []
        for name in request.modules:
            module_config = self.repository.load_module(name)
            if module_config is not None:
                module_configs.append(module_config)
        return project_config, module_configs

    # -- Phase 2: SCAFFOLD -------------------------------------------------

    async def scaffold(self, root: Path, project_config: ProjectTypeConfig) -> None:
        """Create the target root and every folder the project type declares."""
        await ensure_dir(root)
        await create_folders(root, project_config.folders)

    # -- Phase 3: BASE -----------------------------------------------------

    async def place_base(
        self, root: Path, project_type: str, result: ScaffoldResult
    ) -> None:
        """Copy the base tree, keeping only the linter variant for *project_type*."""
        base_dir = self.settings.base_dir
        if not base_dir.is_dir():
            print_warning(f"  Base template directory missing: {base_dir}")
            return
        for entry in scan_entries(base_dir, BASE_CONTEXT):
            placement = resolve_base_entry(entry, project_type)
            result.written.extend(await self._apply(root, entry, placement))

    # -- Phase 4: MODULES --------------------------------------------------

    async def place_modules(
        self, root: Path, request: ScaffoldRequest, result: ScaffoldResult
    ) -> None:
        """Copy every selected module's tree, in selection order.

        Later modules overwrite identically-pathed files of earlier ones.
        """
        for name in request.modules:
            module_dir = self.repository.module_dir(name)
            if not module_dir.is_dir():
                console.print(f"  [dim]Module {name!r} has no templates -- skipped[/dim]")
                continue
            for entry in scan_entries(module_dir, name):
                placement = resolve_module_entry(entry, request.project_type)
                result.written.extend(await self._apply(root, entry, placement))
            console.print(f"  [green]+[/green] Module [bold]{name}[/bold] added")

    async def _apply(self, root: Path, entry: FileEntry, placement: Placement) -> list[Path]:
        if placement.excluded:
            return []
        destination = root / placement.destination
        if entry.is_dir:
            return await copy_tree(entry.source, destination)
        return [await copy_file(entry.source, destination)]

    # -- Phase 5: GENERATE -------------------------------------------------

    async def generate_files(
        self,
        root: Path,
        request: ScaffoldRequest,
        project_config: ProjectTypeConfig,
        module_configs: list[ModuleConfig],
        result: ScaffoldResult,
    ):
        """Write ``package.json`` plus the generated config and starter files."""
        manifest = merge_manifest(
            request.project_name,
            project_config,
            module_configs,
            version=self.settings.initial_version,
            package_type=self.settings.package_type,
        )
        result.written.append(await write_manifest(root, manifest))

        context = self.starter.build_context(request.project_name, request.project_type)
        result.written.extend(
            await self.starter.generate_additional_files(root, project_config, context)
        )
        result.written.extend(await self.starter.generate_starter_files(root, context))
        return manifest

    # -- Phase 6: FINALIZE -------------------------------------------------

    async def finalize(self, root: Path) -> Optional[bool]:
        """Initialise git (when enabled) and make lifecycle hooks executable.

        Returns whether git was initialised, or ``None`` when disabled.
        """
        git_ok: Optional[bool] = None
        if self.settings.init_git:
            git_ok, message = await init_git_repo(root)
            if git_ok:
                console.print("  [green]+[/green] Git initialized")
            else:
                print_warning(f"  git init skipped: {message}")

        for hook in await make_hooks_executable(root):
            console.print(f"  [green]+[/green] {hook.relative_to(root).as_posix()} is executable")
        return git_ok
