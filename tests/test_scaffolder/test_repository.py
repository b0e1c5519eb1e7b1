"""Tests for the configuration repository."""

from __future__ import annotations

from pathlib import Path

import pytest

from genrules.config import Settings
from genrules.scaffolder.errors import ConfigNotFoundError
from genrules.scaffolder.repository import ConfigRepository

pytestmark = pytest.mark.unit


@pytest.fixture
def repository(settings: Settings) -> ConfigRepository:
    return ConfigRepository(settings)


class TestProjectTypes:
    def test_load_known_type(self, repository: ConfigRepository):
        config = repository.load_project_type("api")
        assert config.name == "api"
        assert config.dependencies["hono"] == "^4.6.0"
        assert config.wants_file("drizzle.config.ts")

    def test_unknown_type_raises(self, repository: ConfigRepository):
        with pytest.raises(ConfigNotFoundError, match='Project type "desktop" not found') as exc_info:
            repository.load_project_type("desktop")
        assert exc_info.value.project_type == "desktop"
        assert exc_info.value.path.endswith("desktop.json")

    def test_name_defaults_to_file_stem(self, repository: ConfigRepository, template_store: Path):
        (template_store / "configs" / "bare.json").write_text("{}", encoding="utf-8")
        assert repository.load_project_type("bare").name == "bare"

    def test_non_object_document_rejected(self, repository: ConfigRepository, template_store: Path):
        (template_store / "configs" / "weird.json").write_text("[1, 2]", encoding="utf-8")
        with pytest.raises(ValueError, match="expected a JSON object"):
            repository.load_project_type("weird")

    def test_list_project_types(self, repository: ConfigRepository):
        assert repository.list_project_types() == ["api", "fullstack"]

    def test_list_without_configs_dir(self, tmp_path: Path):
        repository = ConfigRepository(Settings(templates_dir=tmp_path / "missing"))
        assert repository.list_project_types() == []
        assert repository.list_modules() == []


class TestModules:
    def test_load_module(self, repository: ConfigRepository):
        module = repository.load_module("husky")
        assert module is not None
        assert module.dev_dependencies == {"husky": "^9.1.6"}
        assert module.dependencies is None

    def test_module_without_config_returns_none(self, repository: ConfigRepository):
        assert repository.load_module("extras") is None

    def test_non_object_module_config_rejected(
        self, repository: ConfigRepository, template_store: Path
    ):
        (template_store / "modules" / "husky" / "config.json").write_text('"husky"', encoding="utf-8")
        with pytest.raises(ValueError, match="expected a JSON object"):
            repository.load_module("husky")

    def test_unregistered_module_returns_none(self, repository: ConfigRepository):
        assert repository.load_module("kubernetes") is None

    def test_module_dir(self, repository: ConfigRepository, template_store: Path):
        assert repository.module_dir("docker") == template_store / "modules" / "docker"

    def test_list_modules(self, repository: ConfigRepository):
        assert repository.list_modules() == ["auth", "docker", "extras", "husky"]


class TestPackagedStore:
    def test_every_valid_type_has_a_config(self, packaged_settings: Settings):
        repository = ConfigRepository(packaged_settings)
        assert repository.list_project_types() == ["api", "frontend", "fullstack", "minimal"]

    def test_every_available_module_has_a_config(self, packaged_settings: Settings):
        repository = ConfigRepository(packaged_settings)
        for name in repository.list_modules():
            assert repository.load_module(name) is not None
