"""Interactive prompts for the ``create`` command.

Thin wrappers around :mod:`rich.prompt`.  Invalid answers never raise:
``select`` falls back to the first option and ``multi_select`` ignores
indices that are out of range.
"""

from __future__ import annotations

from rich.prompt import Confirm, Prompt

from genrules.utils import console


def confirm(question: str, default: bool = False) -> bool:
    """Ask a yes/no question."""
    return Confirm.ask(f"[yellow]?[/yellow] {question}", default=default, console=console)


def _print_options(question: str, options: list[str]) -> None:
    console.print(f"\n[yellow]{question}[/yellow]")
    for index, option in enumerate(options, start=1):
        console.print(f"  {index}) {option}")


def select(question: str, options: list[str]) -> str:
    """Ask the user to pick one of *options* by number."""
    _print_options(question, options)
    answer = Prompt.ask(f"[yellow]?[/yellow] Select (1-{len(options)})", default="", console=console)
    try:
        index = int(answer.strip()) - 1
    except ValueError:
        return options[0]
    if 0 <= index < len(options):
        return options[index]
    return options[0]


def multi_select(question: str, options: list[str]) -> list[str]:
    """Ask for several options as comma-separated numbers, ``all`` or ``none``."""
    _print_options(f"{question} (comma-separated, e.g., 1,2,3 or 'all' or 'none')", options)
    answer = Prompt.ask("[yellow]?[/yellow] Select", default="", console=console).strip()

    if answer.lower() == "all":
        return list(options)
    if answer.lower() == "none" or not answer:
        return []

    selected: list[str] = []
    for raw in answer.split(","):
        try:
            index = int(raw.strip()) - 1
        except ValueError:
            continue
        if 0 <= index < len(options) and options[index] not in selected:
            selected.append(options[index])
    return selected
