"""
Generator settings.

Per-language defaults are merged with an optional JSON file and then with
command-line overrides into a GeneratorConfig.
"""

import json
from pathlib import Path
from typing import Dict, Any, List, Optional, Union
from dataclasses import asdict, dataclass, field, fields


class ConfigError(Exception):
    """Exception raised for configuration-related errors."""

    pass


DEFAULT_OUTPUT_DIR = "target/generated-sources/jpa"


@dataclass
class GeneratorConfig:
    """Base configuration for entity generators."""

    # Output settings
    output_dir: str = DEFAULT_OUTPUT_DIR
    package_name: str = "com.example.model"
    package_dirs: bool = False  # nest files under the package path

    # Code style settings
    line_ending: str = "\n"
    add_comments: bool = True

    # Schema selection
    schema: Optional[str] = None
    include_tables: List[str] = field(default_factory=list)
    exclude_tables: List[str] = field(default_factory=list)

    # Fail on inconsistent metadata instead of warning
    strict: bool = False

    # Language-specific settings
    language_config: Dict[str, Any] = field(default_factory=dict)


class ConfigManager:
    """Per-language defaults plus JSON file loading and override merging."""

    def __init__(self):
        self._configs: Dict[str, Dict[str, Any]] = {}
        self._load_defaults()

    def _load_defaults(self):
        """Register the defaults of each supported language."""
        self._configs["java"] = {
            "package_name": "com.example.model",
            "output_dir": DEFAULT_OUTPUT_DIR,
            "add_comments": True,
            "language_config": {
                "persistence_api": "jakarta",
                "fetch_type": "LAZY",
                "serializable": True,
                "key_equals_hash_code": True,
            },
        }

    def get_config(
        self,
        language: str = "java",
        custom_config: Optional[Dict[str, Any]] = None,
        config_file: Optional[Union[str, Path]] = None,
    ) -> GeneratorConfig:
        """
        Get complete configuration for a language.

        Args:
            language: Target language name
            custom_config: Custom configuration overrides
            config_file: Path to JSON configuration file

        Returns:
            Merged configuration for the language
        """
        base_config = self._copy_config(self._configs.get(_primary_language(language), {}))

        if config_file:
            self._merge(base_config, self._load_config_file(config_file))

        if custom_config:
            self._merge(base_config, custom_config)

        return self._dict_to_config(base_config)

    def _copy_config(self, config: Dict[str, Any]) -> Dict[str, Any]:
        copied = dict(config)
        copied["language_config"] = dict(config.get("language_config", {}))
        return copied

    def _merge(self, base: Dict[str, Any], overrides: Dict[str, Any]):
        """Merge overrides into base; language_config is merged key by key."""
        for key, value in overrides.items():
            if key == "language_config" and isinstance(value, dict):
                base.setdefault("language_config", {}).update(value)
            else:
                base[key] = value

    def _load_config_file(self, config_path: Union[str, Path]) -> Dict[str, Any]:
        """Load configuration from JSON file."""
        path = Path(config_path)

        if not path.exists():
            raise ConfigError(f"Configuration file not found: {path}")

        if not path.suffix.lower() == ".json":
            raise ConfigError(f"Configuration file must be JSON: {path}")

        try:
            with open(path, "r", encoding="utf-8") as f:
                config = json.load(f)
        except json.JSONDecodeError as e:
            raise ConfigError(f"Invalid JSON in configuration file {path}: {str(e)}") from e
        except OSError as e:
            raise ConfigError(f"Failed to load configuration file {path}: {str(e)}") from e

        if not isinstance(config, dict):
            raise ConfigError(f"Configuration file must contain a JSON object: {path}")

        return config

    def _dict_to_config(self, config_dict: Dict[str, Any]) -> GeneratorConfig:
        """Convert dictionary to GeneratorConfig instance."""
        # Extract known fields
        known_fields = {f.name for f in fields(GeneratorConfig)}

        config_args = {}
        language_args = {}

        for key, value in config_dict.items():
            if key in known_fields:
                config_args[key] = value
            else:
                language_args[key] = value

        # Unknown keys are language-specific settings
        if language_args:
            existing = dict(config_args.get("language_config", {}))
            existing.update(language_args)
            config_args["language_config"] = existing

        for key in ("include_tables", "exclude_tables"):
            if isinstance(config_args.get(key), str):
                config_args[key] = [config_args[key]]

        return GeneratorConfig(**config_args)

    def save_config(self, config: GeneratorConfig, output_path: Union[str, Path]):
        """Save configuration to JSON file."""
        path = Path(output_path)

        try:
            with open(path, "w", encoding="utf-8") as f:
                json.dump(asdict(config), f, indent=2, ensure_ascii=False)
        except OSError as e:
            raise ConfigError(f"Failed to save configuration to {path}: {str(e)}") from e

    def list_languages(self) -> List[str]:
        """Get list of languages with default configuration."""
        return list(self._configs.keys())

    def validate_config(self, config: GeneratorConfig, language: str) -> List[str]:
        """
        Validate configuration for a language.

        Returns:
            List of validation warnings/errors
        """
        warnings = []

        if not config.output_dir:
            warnings.append("output_dir must not be empty")

        if _primary_language(language) == "java":
            api = config.language_config.get("persistence_api", "jakarta")
            if api not in {"jakarta", "javax"}:
                warnings.append(f"Invalid persistence_api: {api}")

            fetch_type = config.language_config.get("fetch_type", "LAZY")
            if str(fetch_type).upper() not in {"LAZY", "EAGER"}:
                warnings.append(f"Invalid fetch_type: {fetch_type}")

        return warnings


def _primary_language(language: str) -> str:
    """Resolve a registered alias such as ``jpa`` to its primary language name."""
    from ..registry import get_registry

    registry = get_registry()
    if registry.is_supported(language):
        return registry.resolve(language)
    return language.lower()


# Shared manager used by load_config()
_config_manager = None


def get_config_manager() -> ConfigManager:
    """Get the global configuration manager instance."""
    global _config_manager
    if _config_manager is None:
        _config_manager = ConfigManager()
    return _config_manager


def load_config(
    language: str = "java",
    custom_config: Optional[Dict[str, Any]] = None,
    config_file: Optional[Union[str, Path]] = None,
) -> GeneratorConfig:
    """
    Convenience function to load configuration.

    Args:
        language: Target language name
        custom_config: Custom configuration overrides
        config_file: Path to JSON configuration file

    Returns:
        Merged configuration for the language
    """
    manager = get_config_manager()
    return manager.get_config(language, custom_config, config_file)


# Example configuration file for reference
EXAMPLE_JAVA_CONFIG = {
    "package_name": "com.acme.persistence",
    "output_dir": "src/main/generated",
    "package_dirs": True,
    "exclude_tables": ["flyway_*"],
    "persistence_api": "javax",
    "fetch_type": "LAZY",
}
