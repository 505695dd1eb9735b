"""
Core code generation components.

Provides the entity model, its builder, and base classes used by all
language generators.
"""

from .generator import CodeGenerator, GeneratorError, GeneratedFile, GenerationResult
from .model import (
    ColumnInfo,
    PrimaryKeyInfo,
    ForeignKeyInfo,
    ScalarField,
    RelationField,
    EmbeddedKeyField,
    FieldModel,
    EntityModel,
    KeyModel,
)
from .builder import build_entity_model, find_metadata_issues
from .types import ScalarType, map_type
from .naming import NameSanitizer, NamingCase, to_identifier, accessor_suffix
from .config import GeneratorConfig, ConfigManager, ConfigError, load_config
from .templates import TemplateEngine, TemplateError, create_template_engine

__all__ = [
    # Base generator interface
    "CodeGenerator",
    "GeneratorError",
    "GeneratedFile",
    "GenerationResult",
    # Model - core data structures
    "ColumnInfo",
    "PrimaryKeyInfo",
    "ForeignKeyInfo",
    "ScalarField",
    "RelationField",
    "EmbeddedKeyField",
    "FieldModel",
    "EntityModel",
    "KeyModel",
    "build_entity_model",
    "find_metadata_issues",
    # Types and naming - language-agnostic
    "ScalarType",
    "map_type",
    "NameSanitizer",
    "NamingCase",
    "to_identifier",
    "accessor_suffix",
    # Configuration system
    "GeneratorConfig",
    "ConfigManager",
    "ConfigError",
    "load_config",
    # Template system - language-agnostic
    "TemplateEngine",
    "TemplateError",
    "create_template_engine",
]
