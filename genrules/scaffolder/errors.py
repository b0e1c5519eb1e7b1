"""Exception types raised by the scaffolder."""

from __future__ import annotations

from genrules.utils import PHASE_NAMES


class GenRulesError(Exception):
    """Base class for every error genrules raises on purpose."""


class ConfigNotFoundError(GenRulesError):
    """Raised when no configuration is registered for a project type."""

    def __init__(self, project_type: str, path: str | None = None) -> None:
        self.project_type = project_type
        self.path = path
        super().__init__(f'Project type "{project_type}" not found')


class ScaffoldError(GenRulesError):
    """Raised when a build phase fails irrecoverably.

    The run is aborted; files already written stay on disk.
    """

    def __init__(self, phase: int, message: str, path: str | None = None) -> None:
        self.phase = phase
        self.path = path
        super().__init__(f"Phase {phase} ({PHASE_NAMES.get(phase, '?')}): {message}")
