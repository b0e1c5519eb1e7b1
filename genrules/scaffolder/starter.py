"""Generated configuration and starter files.

Everything the scaffolder writes itself (as opposed to copying from a
template tree): optional build-tool configs switched on by the project
type's ``files`` flags, entry points per project type, and the README.
"""

from __future__ import annotations

import re
from pathlib import Path
from typing import Any

from genrules.config import is_backend_type, is_frontend_type
from genrules.utils import save_json

from .filesystem import write_text
from .models import ProjectTypeConfig
from .templates import TemplateRenderer, slugify

# Optional generated file -> template name.  Emission order is fixed.
ADDITIONAL_FILES: dict[str, str] = {
    "vite.config.ts": "vite.config.ts.j2",
    "drizzle.config.ts": "drizzle.config.ts.j2",
    "tailwind.config.ts": "tailwind.config.ts.j2",
    "postcss.config.cjs": "postcss.config.cjs.j2",
    "index.html": "index.html.j2",
}

# ``{{ project_name }}`` or ``{{ project_name | slugify }}``; nothing else.
_README_PLACEHOLDER = re.compile(r"\{\{\s*project_name\s*(\|\s*slugify\s*)?\}\}")


class StarterGenerator:
    """Writes generated files into a project tree."""

    def __init__(self, renderer: TemplateRenderer, readme_dir: Path) -> None:
        self.renderer = renderer
        self.readme_dir = readme_dir

    # -- Context -----------------------------------------------------------

    @staticmethod
    def build_context(project_name: str, project_type: str) -> dict[str, Any]:
        """Build the template context shared by every generated file."""
        fullstack = project_type == "fullstack"
        return {
            "project_name": project_name,
            "project_type": project_type,
            "is_fullstack": fullstack,
            "main_path": "/src/client/main.tsx" if fullstack else "/src/main.tsx",
            "logger_import": "../lib/logger" if fullstack else "./lib/logger",
        }

    # -- Optional configs --------------------------------------------------

    async def generate_additional_files(
        self,
        root: Path,
        config: ProjectTypeConfig,
        context: dict[str, Any],
    ) -> list[Path]:
        """Emit each optional config file whose flag is set in *config*."""
        written: list[Path] = []
        for filename, template_name in ADDITIONAL_FILES.items():
            if config.wants_file(filename):
                written.append(
                    await self.renderer.render_to_file(template_name, root / filename, context)
                )
        return written

    # -- Entry points ------------------------------------------------------

    async def generate_starter_files(
        self, root: Path, context: dict[str, Any]
    ) -> list[Path]:
        """Emit the logger, the entry points for the project type, and the README."""
        project_type = context["project_type"]
        lib_dir = root / "src" / "lib"
        written = [
            await self.renderer.render_to_file("starter/logger.ts.j2", lib_dir / "logger.ts", context)
        ]

        if is_backend_type(project_type):
            written.extend(await self._backend_files(root, context))
        if is_frontend_type(project_type):
            written.extend(await self._frontend_files(root, lib_dir, context))
        if project_type == "minimal":
            written.append(
                await self.renderer.render_to_file(
                    "starter/main.ts.j2", root / "src" / "index.ts", context
                )
            )
        if is_backend_type(project_type):
            written.append(
                await self.renderer.render_to_file(
                    "starter/schema.ts.j2", root / "src" / "db" / "schema.ts", context
                )
            )

        readme = await self.generate_readme(root, context)
        if readme is not None:
            written.append(readme)
        return written

    async def _backend_files(self, root: Path, context: dict[str, Any]) -> list[Path]:
        app_dir = root / "src" / "app" if context["is_fullstack"] else root / "src"
        return [
            await self.renderer.render_to_file("starter/server.ts.j2", app_dir / "index.ts", context)
        ]

    async def _frontend_files(
        self, root: Path, lib_dir: Path, context: dict[str, Any]
    ) -> list[Path]:
        fullstack = context["is_fullstack"]
        client_dir = root / "src" / "client" if fullstack else root / "src"
        written: list[Path] = []
        for template_name, filename in (
            ("starter/main.tsx.j2", "main.tsx"),
            ("starter/App.tsx.j2", "App.tsx"),
            ("starter/index.css.j2", "index.css"),
        ):
            written.append(
                await self.renderer.render_to_file(template_name, client_dir / filename, context)
            )
        written.append(
            await self.renderer.render_to_file("starter/utils.ts.j2", lib_dir / "utils.ts", context)
        )
        written.append(
            await save_json(_components_json(fullstack), root / "components.json")
        )
        return written

    # -- README ------------------------------------------------------------

    async def generate_readme(self, root: Path, context: dict[str, Any]) -> Path | None:
        """Copy ``readme/<type>.md`` into ``README.md``; skipped if absent.

        The body is not a Jinja2 template: only the project-name
        placeholders are filled in, so code samples containing ``{{`` are
        written unchanged.
        """
        template_path = self.readme_dir / f"{context['project_type']}.md"
        if not template_path.is_file():
            return None
        template = template_path.read_text(encoding="utf-8")
        content = fill_readme_placeholders(template, context["project_name"])
        return await write_text(root / "README.md", content)


def _components_json(fullstack: bool) -> dict[str, Any]:
    """shadcn/ui ``components.json`` pointing at the right source folders."""
    return {
        "$schema": "https://ui.shadcn.com/schema.json",
        "style": "new-york",
        "rsc": False,
        "tsx": True,
        "tailwind": {
            "config": "tailwind.config.ts",
            "css": "src/client/index.css" if fullstack else "src/index.css",
            "baseColor": "zinc",
            "cssVariables": True,
            "prefix": "",
        },
        "aliases": {
            "components": "@/client/components" if fullstack else "@/components",
            "utils": "@/lib/utils",
            "ui": "@/client/components/ui" if fullstack else "@/components/ui",
            "lib": "@/lib",
            "hooks": "@/client/hooks" if fullstack else "@/hooks",
        },
        "iconLibrary": "lucide",
    }


def fill_readme_placeholders(text: str, project_name: str) -> str:
    """Substitute the project name into a README body."""

    def _replace(match: re.Match[str]) -> str:
        return slugify(project_name) if match.group(1) else project_name

    return _README_PLACEHOLDER.sub(_replace, text)
