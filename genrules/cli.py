"""Command-line entry point.

Usage::

    genrules create ~/projects/my-app --type fullstack --modules docker,husky -y
    genrules list
    python -m genrules create ./my-api --type api
"""

from __future__ import annotations

import argparse
import asyncio
import sys
from pathlib import Path

from rich.markup import escape
from rich.panel import Panel
from rich.table import Table

from genrules.config import (
    AVAILABLE_MODULES,
    PROJECT_TYPE_DESCRIPTIONS,
    VALID_PROJECT_TYPES,
    Settings,
    is_backend_type,
)
from genrules.prompts import confirm, multi_select, select
from genrules.scaffolder import (
    ConfigRepository,
    GenRulesError,
    ProjectGenerator,
    ScaffoldRequest,
)
from genrules.utils import (
    console,
    format_duration,
    parse_module_list,
    print_error,
    print_summary_table,
    print_warning,
)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="genrules",
        description="Scaffold a new project with predefined quality rules and configurations",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog=(
            "Examples:\n"
            "  genrules create ~/projects/my-app --type fullstack --modules docker,husky -y\n"
            "  genrules create ./my-api --type api\n"
            "  genrules list\n"
        ),
    )
    subparsers = parser.add_subparsers(dest="command")

    create = subparsers.add_parser("create", help="Create a new project")
    create.add_argument("path", help="Directory to create the project in")
    create.add_argument(
        "--type", "-t",
        dest="project_type",
        default=None,
        help=f"Project type: {', '.join(VALID_PROJECT_TYPES)}",
    )
    create.add_argument(
        "--modules", "-m",
        default=None,
        help=f"Comma-separated modules: {','.join(AVAILABLE_MODULES)}",
    )
    create.add_argument(
        "--yes", "-y",
        action="store_true",
        help="Skip confirmation prompts",
    )

    subparsers.add_parser("list", help="List project types and modules")
    return parser


# ---------------------------------------------------------------------------
# Selection
# ---------------------------------------------------------------------------


def resolve_project_type(requested: str | None, skip_confirm: bool, settings: Settings) -> str:
    """Return a valid project type for *requested*.

    Unknown or missing values fall back to an interactive choice, or to the
    configured default when prompts are skipped.
    """
    if requested in VALID_PROJECT_TYPES:
        return requested
    if requested:
        print_warning(f"Unknown project type {requested!r}.")
    if skip_confirm:
        return settings.default_project_type
    options = [f"{t} - {PROJECT_TYPE_DESCRIPTIONS[t]}" for t in VALID_PROJECT_TYPES]
    choice = select("Select project type:", options)
    return choice.split(" - ")[0]


def resolve_modules(requested: str | None, skip_confirm: bool) -> list[str]:
    """Return the module selection; unknown names are dropped silently."""
    if requested is not None:
        return parse_module_list(requested, AVAILABLE_MODULES)
    if skip_confirm:
        return []
    return multi_select("Select modules to include:", AVAILABLE_MODULES)


# ---------------------------------------------------------------------------
# Commands
# ---------------------------------------------------------------------------


def create_command(args: argparse.Namespace, settings: Settings) -> int:
    target = Path(args.path).expanduser().resolve()
    skip_confirm = bool(args.yes)

    if target.exists():
        if skip_confirm:
            print_warning("Directory exists. Overwriting (--yes flag).")
        elif not confirm(f'Directory "{target}" exists. Overwrite?', default=False):
            print_error("Aborted.")
            return 0

    project_type = resolve_project_type(args.project_type, skip_confirm, settings)
    modules = resolve_modules(args.modules, skip_confirm)

    print_summary_table(
        {
            "Project": target.name,
            "Location": str(target),
            "Type": project_type,
            "Modules": ", ".join(modules) if modules else "none",
        },
        title="Creating project",
    )

    if not skip_confirm and not confirm("Proceed?", default=True):
        print_error("Aborted.")
        return 0

    request = ScaffoldRequest(target_path=target, project_type=project_type, modules=modules)
    generator = ProjectGenerator(settings)
    try:
        result = asyncio.run(generator.generate(request))
    except GenRulesError as exc:
        print_error(str(exc))
        return 1

    total = sum(result.durations.values())
    _print_next_steps(target, project_type, total)
    return 0


def _print_next_steps(target: Path, project_type: str, elapsed: float) -> None:
    lines = [
        f"[bold green]Project created in {format_duration(elapsed)}[/bold green]",
        "",
        "[yellow]Next steps:[/yellow]",
        f"  1. cd {target}",
        "  2. bun install",
        "  3. bun run dev",
    ]
    if is_backend_type(project_type):
        lines.extend([
            "",
            "[yellow]Database setup:[/yellow]",
            "  1. Set DATABASE_URL in .env",
            "  2. bun run db:push",
        ])
    lines.extend(["", "[magenta]Read CLAUDE.md for coding standards[/magenta]"])
    console.print(Panel("\n".join(lines), title="[bold]Project Created![/bold]", border_style="green"))


def list_command(settings: Settings) -> int:
    repository = ConfigRepository(settings)

    types = Table(title="Project types", header_style="bold cyan")
    types.add_column("Type", no_wrap=True)
    types.add_column("Description")
    for name in repository.list_project_types():
        types.add_row(name, PROJECT_TYPE_DESCRIPTIONS.get(name, ""))
    console.print(types)

    modules = Table(title="Modules", header_style="bold cyan")
    modules.add_column("Module", no_wrap=True)
    modules.add_column("Description")
    for name in repository.list_modules():
        try:
            module_config = repository.load_module(name)
        except ValueError as exc:
            modules.add_row(name, f"[red]invalid config: {escape(str(exc))}[/red]")
            continue
        modules.add_row(name, module_config.description if module_config else "[dim]no config[/dim]")
    console.print(modules)
    return 0


def main(argv: list[str] | None = None) -> None:
    """CLI entry point for ``genrules`` and ``python -m genrules``."""
    parser = build_parser()
    args = parser.parse_args(argv)

    if args.command is None:
        parser.print_help()
        sys.exit(1)

    settings = Settings.from_env()
    if args.command == "list":
        sys.exit(list_command(settings))

    try:
        code = create_command(args, settings)
    except KeyboardInterrupt:
        print_error("Aborted.")
        code = 130
    sys.exit(code)


if __name__ == "__main__":
    main()
