"""
db2entity Code Generation Module

Builds entity models from database schema metadata and renders them
as source code in the registered target languages.
"""

from .registry import (
    GeneratorRegistry,
    RegistryError,
    get_generator,
    get_language_info,
    list_all_language_info,
    list_supported_languages,
    is_language_supported,
)
from .core.generator import CodeGenerator, GeneratorError, GeneratedFile, GenerationResult
from .core.model import (
    ColumnInfo,
    PrimaryKeyInfo,
    ForeignKeyInfo,
    EntityModel,
    KeyModel,
    ScalarField,
    RelationField,
    EmbeddedKeyField,
)
from .core.builder import build_entity_model
from .core.types import ScalarType, map_type
from .core.naming import to_identifier
from .core.config import GeneratorConfig, ConfigManager, ConfigError, load_config


def render_entity(
    table_name, columns, pk, fks, language="java", config=None
):
    """
    Build and render the sources for a single table.

    Args:
        table_name: Table name
        columns: Sequence of ColumnInfo in scan order
        pk: PrimaryKeyInfo
        fks: Foreign key child column -> target table
        language: Target language name
        config: Generator configuration dict, path, or GeneratorConfig

    Returns:
        List of GeneratedFile, key class first
    """
    model, key_model = build_entity_model(table_name, columns, pk, fks)
    generator = get_generator(language, config)
    return generator.render_table(model, key_model)


# Export main interfaces
__all__ = [
    "GeneratorRegistry",
    "RegistryError",
    "CodeGenerator",
    "GeneratorError",
    "GeneratedFile",
    "GenerationResult",
    "ColumnInfo",
    "PrimaryKeyInfo",
    "ForeignKeyInfo",
    "EntityModel",
    "KeyModel",
    "ScalarField",
    "RelationField",
    "EmbeddedKeyField",
    "ScalarType",
    "GeneratorConfig",
    "ConfigManager",
    "ConfigError",
    "build_entity_model",
    "map_type",
    "to_identifier",
    "load_config",
    "render_entity",
    "get_generator",
    "get_language_info",
    "list_all_language_info",
    "list_supported_languages",
    "is_language_supported",
]
