"""Shared pytest fixtures for the genrules test suite.

Provides reusable fixtures for:
- A throwaway template store (configs, base tree, module trees)
- Settings and generator instances pointed at that store
- A target directory for generated projects
- Mock subprocess helpers
"""

from __future__ import annotations

import json
import shutil
from pathlib import Path
from typing import Any
from unittest.mock import AsyncMock, MagicMock

import pytest

from genrules.config import Settings
from genrules.scaffolder.generator import ProjectGenerator

PACKAGED_TEMPLATES = Path(__file__).resolve().parent.parent / "genrules" / "scaffolder" / "templates"


def _write(path: Path, content: str) -> None:
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(content, encoding="utf-8")


def _write_json(path: Path, data: dict[str, Any]) -> None:
    _write(path, json.dumps(data, indent=2))


# ---------------------------------------------------------------------------
# Template store
# ---------------------------------------------------------------------------

API_CONFIG: dict[str, Any] = {
    "name": "api",
    "description": "REST API",
    "folders": ["src/routes", "src/db", "src/lib"],
    "dependencies": {"hono": "^4.6.0", "zod": "^3.23.8"},
    "devDependencies": {"typescript": "^5.6.3"},
    "scripts": {"dev": "bun --watch src/index.ts", "lint": "eslint ."},
    "files": {"drizzle.config.ts": True, "vite.config.ts": False},
}

FULLSTACK_CONFIG: dict[str, Any] = {
    "name": "fullstack",
    "description": "Full-stack web app",
    "folders": ["src/app", "src/client", "src/db", "src/lib"],
    "dependencies": {"hono": "^4.6.0", "react": "^18.3.1"},
    "devDependencies": {"typescript": "^5.6.3", "vite": "^5.4.11"},
    "scripts": {"dev": "concurrently server client", "build": "vite build"},
    "files": {
        "vite.config.ts": True,
        "drizzle.config.ts": True,
        "tailwind.config.ts": True,
        "postcss.config.cjs": True,
        "index.html": True,
    },
}

DOCKER_CONFIG: dict[str, Any] = {
    "name": "docker",
    "description": "Containerisation",
    "dependencies": {"zod": "3.0.0-docker"},
    "scripts": {"dev": "docker compose up", "docker:up": "docker compose up -d"},
    "files": ["Dockerfile", "docker-compose.yml"],
}

HUSKY_CONFIG: dict[str, Any] = {
    "name": "husky",
    "description": "Git hooks",
    "devDependencies": {"husky": "^9.1.6"},
    "scripts": {"dev": "husky && bun run dev:server", "prepare": "husky"},
    "files": ["pre-commit", "pre-push"],
}

AUTH_CONFIG: dict[str, Any] = {
    "name": "auth",
    "description": "Session auth",
    "dependencies": {"lucia": "^3.2.2", "zod": "3.1.0-auth"},
    "files": ["auth.ts", "auth-middleware.ts"],
}


@pytest.fixture
def template_store(tmp_path: Path) -> Path:
    """A small but complete template store under ``tmp_path/store``.

    Generated-file templates and READMEs are copied from the packaged store;
    configs, base and module trees are purpose-built for the tests.
    """
    store = tmp_path / "store"

    _write_json(store / "configs" / "api.json", API_CONFIG)
    _write_json(store / "configs" / "fullstack.json", FULLSTACK_CONFIG)

    base = store / "base"
    _write(base / "eslint.config.js", "// frontend eslint\n")
    _write(base / "eslint.config.api.js", "// backend eslint\n")
    _write(base / ".prettierrc", "{}\n")
    _write(base / "CLAUDE.md", "# Standards\n")
    _write(base / ".vscode" / "settings.json", "{}\n")

    modules = store / "modules"
    _write_json(modules / "docker" / "config.json", DOCKER_CONFIG)
    _write(modules / "docker" / "Dockerfile", "FROM oven/bun:1\n")
    _write(modules / "docker" / "docker-compose.yml", "services: {}\n")

    _write_json(modules / "husky" / "config.json", HUSKY_CONFIG)
    _write(modules / "husky" / "pre-commit", "#!/usr/bin/env sh\nbunx lint-staged\n")
    _write(modules / "husky" / "pre-push", "#!/usr/bin/env sh\nbun run lint\n")
    _write(modules / "husky" / "lint-staged.config.js", "export default {};\n")

    _write_json(modules / "auth" / "config.json", AUTH_CONFIG)
    _write(modules / "auth" / "auth.ts", "export const lucia = {};\n")
    _write(modules / "auth" / "auth-middleware.ts", "export const authMiddleware = 1;\n")

    # A module with templates but no config.json.
    _write(modules / "extras" / "helpers.ts", "export const helper = 1;\n")
    _write(modules / "extras" / "workflows" / "ci.yml", "name: CI\n")

    shutil.copytree(PACKAGED_TEMPLATES / "generated", store / "generated")
    shutil.copytree(PACKAGED_TEMPLATES / "readme", store / "readme")
    return store


@pytest.fixture
def settings(template_store: Path) -> Settings:
    """Settings pointed at the test template store, with git disabled."""
    return Settings(templates_dir=template_store, init_git=False)


@pytest.fixture
def packaged_settings() -> Settings:
    """Settings pointed at the real packaged template store, with git disabled."""
    return Settings(init_git=False)


@pytest.fixture
def generator(settings: Settings) -> ProjectGenerator:
    return ProjectGenerator(settings)


@pytest.fixture
def target_dir(tmp_path: Path) -> Path:
    """Where a generated project goes (not created in advance)."""
    return tmp_path / "projects" / "my-app"


# ---------------------------------------------------------------------------
# Mock Subprocess (generic)
# ---------------------------------------------------------------------------

@pytest.fixture
def mock_subprocess():
    """Mock asyncio subprocess for testing command execution.

    Returns a factory that creates mock subprocess instances with configurable
    stdout, stderr, and return codes.

    Usage:
        def test_command(mock_subprocess):
            proc = mock_subprocess(stdout="output", returncode=0)
            with patch("asyncio.create_subprocess_exec", return_value=proc):
                ...
    """
    def factory(
        stdout: str = "",
        stderr: str = "",
        returncode: int = 0,
    ) -> AsyncMock:
        mock_proc = AsyncMock()
        mock_proc.communicate = AsyncMock(
            return_value=(stdout.encode("utf-8"), stderr.encode("utf-8"))
        )
        mock_proc.returncode = returncode
        mock_proc.pid = 99999
        mock_proc.kill = MagicMock()
        mock_proc.wait = AsyncMock(return_value=returncode)
        return mock_proc

    return factory
