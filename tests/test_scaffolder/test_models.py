"""Tests for scaffolder models."""

from __future__ import annotations

from pathlib import Path

import pytest
from pydantic import ValidationError

from genrules.scaffolder.models import (
    FileEntry,
    Manifest,
    ModuleConfig,
    Placement,
    ProjectTypeConfig,
    ScaffoldRequest,
)

from conftest import FULLSTACK_CONFIG

pytestmark = pytest.mark.unit


class TestProjectTypeConfig:
    def test_parses_camel_case_dev_dependencies(self):
        config = ProjectTypeConfig.model_validate(FULLSTACK_CONFIG)
        assert config.dev_dependencies["vite"] == "^5.4.11"
        assert config.folders[0] == "src/app"

    def test_defaults(self):
        config = ProjectTypeConfig(name="minimal")
        assert config.folders == []
        assert config.files == {}
        assert config.scripts == {}

    def test_wants_file(self):
        config = ProjectTypeConfig(
            name="api", files={"drizzle.config.ts": True, "vite.config.ts": False}
        )
        assert config.wants_file("drizzle.config.ts")
        assert not config.wants_file("vite.config.ts")
        assert not config.wants_file("index.html")

    def test_unknown_keys_ignored(self):
        config = ProjectTypeConfig.model_validate({"name": "api", "engines": {"bun": ">=1"}})
        assert config.name == "api"

    def test_frozen(self):
        config = ProjectTypeConfig(name="api")
        with pytest.raises(ValidationError):
            config.name = "other"

    def test_name_required(self):
        with pytest.raises(ValidationError):
            ProjectTypeConfig.model_validate({"folders": []})


class TestModuleConfig:
    def test_sections_default_to_none(self):
        module = ModuleConfig(name="docker")
        assert module.dependencies is None
        assert module.dev_dependencies is None
        assert module.scripts is None
        assert module.files == []

    def test_alias(self):
        module = ModuleConfig.model_validate({"name": "husky", "devDependencies": {"husky": "^9"}})
        assert module.dev_dependencies == {"husky": "^9"}


class TestManifest:
    def test_serialises_with_alias(self):
        manifest = Manifest(name="app", dev_dependencies={"typescript": "^5"})
        data = manifest.to_package_json()
        assert data["devDependencies"] == {"typescript": "^5"}
        assert "dev_dependencies" not in data


class TestRecords:
    def test_file_entry_name(self):
        entry = FileEntry(source=Path("/a/b/auth.ts"), is_dir=False, context="auth")
        assert entry.name == "auth.ts"

    def test_placement_excluded(self):
        assert Placement(destination=None, rule="module-config").excluded
        assert not Placement(destination=Path("x"), rule="root").excluded

    def test_request_defaults_project_name_to_basename(self, tmp_path: Path):
        request = ScaffoldRequest(target_path=tmp_path / "my-app", project_type="api")
        assert request.project_name == "my-app"
        assert request.modules == []

    def test_request_deduplicates_modules_in_order(self, tmp_path: Path):
        request = ScaffoldRequest(
            target_path=str(tmp_path / "x"),
            project_type="api",
            modules=["husky", "docker", "husky"],
        )
        assert request.modules == ["husky", "docker"]
        assert isinstance(request.target_path, Path)
