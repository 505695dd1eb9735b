"""
Registry of entity generators by target language.

Languages are looked up case-insensitively by primary name or alias;
``get_registry()`` returns the shared registry with the built-in
generators already registered.
"""

from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, List, Optional, Type, Union

from .core.config import ConfigError, GeneratorConfig, load_config
from .core.generator import CodeGenerator

ConfigSource = Union[GeneratorConfig, Dict[str, Any], str, Path, None]


class RegistryError(Exception):
    """Exception raised for registry-related errors."""

    pass


@dataclass
class _Registration:
    generator_class: Type[CodeGenerator]
    aliases: List[str] = field(default_factory=list)


class GeneratorRegistry:
    """Maps language names and aliases to generator classes."""

    def __init__(self):
        self._registrations: Dict[str, _Registration] = {}
        self._aliases: Dict[str, str] = {}

    def register(
        self,
        language: str,
        generator_class: Type[CodeGenerator],
        aliases: Optional[List[str]] = None,
        replace: bool = False,
    ):
        """
        Register a generator for a language.

        An existing registration is kept unless ``replace`` is set.

        Raises:
            RegistryError: If the class is not a CodeGenerator or an alias is taken
        """
        if not (isinstance(generator_class, type) and issubclass(generator_class, CodeGenerator)):
            raise RegistryError("Generator class must inherit from CodeGenerator")

        language_key = language.lower()
        if language_key in self._registrations and not replace:
            return

        alias_keys = sorted({a.lower() for a in aliases or []} - {language_key})
        if not replace:
            for alias_key in alias_keys:
                if alias_key in self._registrations:
                    raise RegistryError(
                        f"Alias '{alias_key}' conflicts with existing primary language"
                    )
                owner = self._aliases.get(alias_key)
                if owner is not None and owner != language_key:
                    raise RegistryError(f"Alias '{alias_key}' already points to '{owner}'")

        if replace:
            self.unregister(language_key)

        self._registrations[language_key] = _Registration(generator_class, alias_keys)
        for alias_key in alias_keys:
            self._aliases[alias_key] = language_key

    def unregister(self, language: str):
        """Remove a language and every alias pointing to it."""
        language_key = language.lower()
        self._registrations.pop(language_key, None)
        self._aliases = {
            alias: target for alias, target in self._aliases.items() if target != language_key
        }

    def resolve(self, language: str) -> str:
        """
        Resolve a language name or alias to its primary name.

        Raises:
            RegistryError: If language not found
        """
        language_key = language.lower()
        if language_key in self._registrations:
            return language_key
        if language_key in self._aliases:
            return self._aliases[language_key]

        raise RegistryError(
            f"No generator registered for language: {language}. "
            f"Available: {', '.join(self.list_languages())}"
        )

    def get_generator_class(self, language: str) -> Type[CodeGenerator]:
        return self._registrations[self.resolve(language)].generator_class

    def create_generator(self, language: str, config: ConfigSource = None) -> CodeGenerator:
        """
        Create a configured generator.

        Args:
            language: Language name or alias
            config: GeneratorConfig, override dict, JSON file path, or None
                for the language defaults

        Raises:
            RegistryError: If the language is unknown or the config is unusable
        """
        primary = self.resolve(language)
        generator_class = self.get_generator_class(primary)

        try:
            if isinstance(config, GeneratorConfig):
                final_config = config
            elif isinstance(config, (str, Path)):
                final_config = load_config(primary, config_file=config)
            elif isinstance(config, dict):
                final_config = load_config(primary, custom_config=config)
            elif config is None:
                final_config = load_config(primary)
            else:
                raise RegistryError(f"Invalid config type: {type(config)}")

            return generator_class(final_config)
        except (ConfigError, TypeError) as e:
            raise RegistryError(f"Failed to create {language} generator: {e}") from e

    def list_languages(self) -> List[str]:
        """Registered primary language names, sorted."""
        return sorted(self._registrations)

    def get_aliases_for_language(self, language: str) -> List[str]:
        registration = self._registrations.get(language.lower())
        return list(registration.aliases) if registration else []

    def is_supported(self, language: str) -> bool:
        language_key = language.lower()
        return language_key in self._registrations or language_key in self._aliases

    def get_language_info(self, language: str) -> Dict[str, Any]:
        """
        Describe a registered language.

        Returns:
            Dict with name, class, module, file_extension and aliases
        """
        primary = self.resolve(language)
        generator = self.create_generator(primary)

        return {
            "name": generator.language_name,
            "class": type(generator).__name__,
            "module": type(generator).__module__,
            "file_extension": generator.file_extension,
            "aliases": self.get_aliases_for_language(primary),
        }


_global_registry: Optional[GeneratorRegistry] = None


def get_registry() -> GeneratorRegistry:
    """Get the shared registry, registering built-in generators on first use."""
    global _global_registry
    if _global_registry is None:
        _global_registry = GeneratorRegistry()
        _register_builtin_generators(_global_registry)
    return _global_registry


def _register_builtin_generators(registry: GeneratorRegistry):
    from .languages.java import JavaGenerator

    registry.register("java", JavaGenerator, aliases=["jpa"])


def register_generator(
    language: str,
    generator_class: Type[CodeGenerator],
    aliases: Optional[List[str]] = None,
):
    """Register a generator in the shared registry."""
    get_registry().register(language, generator_class, aliases)


def get_generator(language: str, config: ConfigSource = None) -> CodeGenerator:
    """Create a configured generator from the shared registry."""
    return get_registry().create_generator(language, config)


def list_supported_languages() -> List[str]:
    return get_registry().list_languages()


def is_language_supported(language: str) -> bool:
    return get_registry().is_supported(language)


def get_language_info(language: str) -> Dict[str, Any]:
    return get_registry().get_language_info(language)


def list_all_language_info() -> Dict[str, Dict[str, Any]]:
    """Describe every registered language."""
    return {language: get_language_info(language) for language in list_supported_languages()}
