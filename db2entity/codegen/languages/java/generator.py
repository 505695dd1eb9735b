"""
Java code generator implementation.

Generates JPA entity classes and embeddable composite key classes using
templates.
"""

from pathlib import Path
from typing import Any, Dict, List, Optional

from ...core.config import GeneratorConfig
from ...core.generator import CodeGenerator
from ...core.model import (
    EmbeddedKeyField,
    EntityModel,
    FieldModel,
    KeyModel,
    RelationField,
    ScalarField,
)
from ...core.naming import NameSanitizer
from ...core.types import ScalarType, discards_timezone
from .config import JAVA_TYPE_MAP, JavaConfig
from .naming import create_java_sanitizer, validate_java_package_name


class JavaGenerator(CodeGenerator):
    """Code generator for JPA entities."""

    def __init__(self, config: GeneratorConfig):
        """Initialize Java generator with configuration."""
        super().__init__(config)
        self.java_config = JavaConfig(**self.config.language_config)

    @property
    def language_name(self) -> str:
        """Return the language name."""
        return "java"

    @property
    def file_extension(self) -> str:
        """Return Java file extension."""
        return ".java"

    def get_template_directory(self) -> Path:
        """Return the Java templates directory."""
        return Path(__file__).parent / "templates"

    def create_sanitizer(self) -> NameSanitizer:
        return create_java_sanitizer()

    def emit(self, model: EntityModel) -> str:
        """Render the entity class for one table."""
        context = {
            **self._common_context(),
            "table_name": model.table_name,
            "class_name": model.class_name,
            "description": self._describe(f"Entity for table {model.table_name}."),
            "serializable": self.java_config.serializable,
            "fetch_type": self.java_config.fetch_type.value,
            "fields": [self._field_data(field) for field in model.fields],
        }
        return self.format_code(self.render_template("entity.java.j2", context))

    def emit_key(self, model: KeyModel) -> str:
        """Render the embeddable composite key class."""
        fields = [self._field_data(field) for field in model.fields]
        context = {
            **self._common_context(),
            "class_name": model.class_name,
            "description": self._describe(
                f"Composite primary key of table {model.table_name}."
            ),
            "fields": fields,
            "equals_hash_code": self.java_config.key_equals_hash_code and bool(fields),
            "equality_checks": [
                f"Objects.equals({f['name']}, that.{f['name']})" for f in fields
            ],
        }
        return self.format_code(self.render_template("key.java.j2", context))

    def _common_context(self) -> Dict[str, Any]:
        return {
            "package_name": self.config.package_name,
            "persistence_package": self.java_config.persistence_package,
        }

    def _describe(self, text: str) -> Optional[str]:
        return text if self.config.add_comments else None

    def _field_data(self, field: FieldModel) -> Dict[str, Any]:
        """Generate field data for template."""
        field_data = {
            "name": field.field_name,
            "column": None,
            "is_id": False,
            "generated": False,
            "comment": None,
        }

        if isinstance(field, RelationField):
            field_data["kind"] = "relation"
            field_data["type"] = field.target_type_name
            field_data["column"] = field.fk_column_name

        elif isinstance(field, EmbeddedKeyField):
            field_data["kind"] = "embedded_key"
            field_data["type"] = field.key_type_name

        else:
            field_data["kind"] = "scalar"
            field_data["type"] = self.java_config.get_java_type(field.type)
            field_data["column"] = field.column_name
            field_data["is_id"] = field.is_primary_key
            field_data["generated"] = field.is_auto_generated
            if self.config.add_comments and self._zone_dropping_type(field):
                field_data["comment"] = (
                    f"{field.sql_type}: timezone offset is not preserved"
                )

        return field_data

    def _zone_dropping_type(self, field: ScalarField) -> Optional[str]:
        """Java type of a zoned column when it maps to the naive default, else None."""
        if not discards_timezone(field.sql_type):
            return None
        java_type = self.java_config.get_java_type(field.type)
        if java_type != JAVA_TYPE_MAP[ScalarType.DATETIME]:
            return None
        return java_type

    def validate_models(
        self, model: EntityModel, key_model: Optional[KeyModel] = None
    ) -> List[str]:
        """Validate a table's models for Java generation."""
        warnings = super().validate_models(model, key_model)

        problem = self.sanitizer.check_name(model.class_name)
        if problem:
            warnings.append(f"Class for table '{model.table_name}': {problem}")

        key_fields: List[ScalarField] = key_model.fields if key_model else []
        scalar_fields = model.scalar_fields + key_fields

        for field in list(model.fields) + key_fields:
            problem = self.sanitizer.check_name(field.field_name)
            if problem:
                warnings.append(f"Field {model.class_name}.{field.field_name}: {problem}")

        for field in scalar_fields:
            java_type = self._zone_dropping_type(field)
            if java_type:
                warnings.append(
                    f"Column {model.table_name}.{field.column_name} is {field.sql_type}; "
                    f"mapped to {java_type} without timezone"
                )

        return warnings

    def validate_config(self) -> List[str]:
        """Check generator settings before a run."""
        warnings = validate_java_package_name(self.config.package_name)
        overrides = self.config.language_config.get("type_overrides", {})
        for key in self.java_config.unknown_overrides(overrides):
            warnings.append(f"Unknown type override '{key}'")
        return warnings


# Factory functions
def create_java_generator(
    config: GeneratorConfig = None, persistence_api: str = "jakarta"
) -> JavaGenerator:
    """Create a Java generator for the given persistence API."""
    if config is None:
        config = GeneratorConfig(language_config={"persistence_api": persistence_api})

    return JavaGenerator(config)
