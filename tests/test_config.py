"""Tests for generator configuration loading."""

import json

import pytest

from db2entity.codegen.core.config import (
    DEFAULT_OUTPUT_DIR,
    EXAMPLE_JAVA_CONFIG,
    ConfigError,
    ConfigManager,
    GeneratorConfig,
)


@pytest.fixture
def manager():
    return ConfigManager()


class TestGetConfig:
    """Merging defaults, files and overrides."""

    def test_java_defaults(self, manager):
        config = manager.get_config("java")

        assert config.output_dir == DEFAULT_OUTPUT_DIR
        assert config.package_name == "com.example.model"
        assert not config.package_dirs
        assert config.language_config["persistence_api"] == "jakarta"
        assert config.language_config["fetch_type"] == "LAZY"

    def test_unknown_language_uses_base_defaults(self, manager):
        assert manager.get_config("cobol") == GeneratorConfig()

    def test_alias_uses_primary_language_defaults(self, manager):
        assert manager.get_config("jpa") == manager.get_config("java")
        assert manager.get_config("JPA").language_config["persistence_api"] == "jakarta"

    def test_overrides(self, manager):
        config = manager.get_config(
            "java",
            custom_config={
                "package_name": "com.shop",
                "language_config": {"fetch_type": "EAGER"},
            },
        )

        assert config.package_name == "com.shop"
        assert config.language_config["fetch_type"] == "EAGER"
        # Other language settings survive the merge
        assert config.language_config["persistence_api"] == "jakarta"

    def test_defaults_are_not_mutated(self, manager):
        manager.get_config("java", custom_config={"language_config": {"fetch_type": "EAGER"}})
        assert manager.get_config("java").language_config["fetch_type"] == "LAZY"

    def test_unknown_keys_become_language_settings(self, manager):
        config = manager.get_config("java", custom_config=EXAMPLE_JAVA_CONFIG)

        assert config.package_name == "com.acme.persistence"
        assert config.package_dirs
        assert config.exclude_tables == ["flyway_*"]
        assert config.language_config["persistence_api"] == "javax"

    def test_single_pattern_string(self, manager):
        config = manager.get_config("java", custom_config={"include_tables": "app_*"})
        assert config.include_tables == ["app_*"]

    def test_config_file_then_overrides(self, manager, tmp_path):
        path = tmp_path / "db2entity.json"
        path.write_text(json.dumps({"package_name": "com.file", "output_dir": "out"}))

        config = manager.get_config(
            "java", custom_config={"package_name": "com.cli"}, config_file=path
        )

        assert config.package_name == "com.cli"
        assert config.output_dir == "out"


class TestConfigFiles:
    """File loading errors and saving."""

    def test_missing_file(self, manager, tmp_path):
        with pytest.raises(ConfigError, match="not found"):
            manager.get_config("java", config_file=tmp_path / "missing.json")

    def test_not_json_suffix(self, manager, tmp_path):
        path = tmp_path / "config.yaml"
        path.write_text("package_name: com.shop")

        with pytest.raises(ConfigError, match="must be JSON"):
            manager.get_config("java", config_file=path)

    def test_invalid_json(self, manager, tmp_path):
        path = tmp_path / "config.json"
        path.write_text("{not json")

        with pytest.raises(ConfigError, match="Invalid JSON"):
            manager.get_config("java", config_file=path)

    def test_non_object(self, manager, tmp_path):
        path = tmp_path / "config.json"
        path.write_text("[1, 2]")

        with pytest.raises(ConfigError, match="JSON object"):
            manager.get_config("java", config_file=path)

    def test_save_and_reload(self, manager, tmp_path):
        path = tmp_path / "saved.json"
        saved = manager.get_config("java", custom_config={"package_name": "com.saved"})

        manager.save_config(saved, path)

        assert manager.get_config("java", config_file=path) == saved


class TestValidateConfig:
    """Configuration warnings."""

    def test_valid(self, manager):
        assert manager.validate_config(manager.get_config("java"), "java") == []

    def test_invalid_values(self, manager):
        config = GeneratorConfig(
            output_dir="",
            language_config={"persistence_api": "hibernate", "fetch_type": "SOMETIMES"},
        )
        warnings = manager.validate_config(config, "java")

        assert warnings == [
            "output_dir must not be empty",
            "Invalid persistence_api: hibernate",
            "Invalid fetch_type: SOMETIMES",
        ]

    def test_alias_gets_language_checks(self, manager):
        config = GeneratorConfig(language_config={"persistence_api": "hibernate"})

        assert manager.validate_config(config, "jpa") == ["Invalid persistence_api: hibernate"]

    def test_list_languages(self, manager):
        assert manager.list_languages() == ["java"]
