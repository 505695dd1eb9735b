"""
Core model representation for entity code generation.

Typed schema metadata read from the database, and the entity/key models
that generators render into source code.
"""

from dataclasses import dataclass, field
from typing import Dict, List, Optional, Tuple, Union

from .types import ScalarType


@dataclass(frozen=True)
class ColumnInfo:
    """A single table column as reported by the metadata provider."""

    name: str
    sql_type: str
    size: int = 0


@dataclass(frozen=True)
class PrimaryKeyInfo:
    """Ordered primary key columns of a table (empty when none is declared)."""

    columns: Tuple[str, ...] = ()

    @property
    def is_composite(self) -> bool:
        return len(self.columns) > 1

    @property
    def single_column(self) -> Optional[str]:
        """The primary key column for single-column keys, else None."""
        return self.columns[0] if len(self.columns) == 1 else None

    def __contains__(self, column_name: str) -> bool:
        return column_name in self.columns

    def __len__(self) -> int:
        return len(self.columns)


# Child column name -> target table name
ForeignKeyInfo = Dict[str, str]


@dataclass
class ScalarField:
    """Member backed directly by one column value."""

    column_name: str
    field_name: str
    type: ScalarType
    is_primary_key: bool = False
    is_auto_generated: bool = False
    sql_type: str = ""  # declared vendor type, kept for warnings/comments


@dataclass
class RelationField:
    """Many-to-one navigation member for a foreign key column."""

    fk_column_name: str
    target_table: str
    field_name: str
    target_type_name: str


@dataclass
class EmbeddedKeyField:
    """Member holding the composite primary key class."""

    field_name: str
    key_type_name: str


FieldModel = Union[ScalarField, RelationField, EmbeddedKeyField]


@dataclass
class EntityModel:
    """Everything needed to render the class generated for one table."""

    table_name: str
    class_name: str
    fields: List[FieldModel] = field(default_factory=list)
    has_composite_key: bool = False

    def add_field(self, field: FieldModel) -> None:
        """Add a field to this entity."""
        self.fields.append(field)

    def get_field(self, name: str) -> Optional[FieldModel]:
        """Get field by generated field name."""
        for field in self.fields:
            if field.field_name == name:
                return field
        return None

    @property
    def scalar_fields(self) -> List[ScalarField]:
        return [f for f in self.fields if isinstance(f, ScalarField)]

    @property
    def relation_fields(self) -> List[RelationField]:
        return [f for f in self.fields if isinstance(f, RelationField)]

    @property
    def embedded_key(self) -> Optional[EmbeddedKeyField]:
        for field in self.fields:
            if isinstance(field, EmbeddedKeyField):
                return field
        return None

    @property
    def primary_key_field(self) -> Optional[ScalarField]:
        for field in self.scalar_fields:
            if field.is_primary_key:
                return field
        return None


@dataclass
class KeyModel:
    """Embeddable key class for a table with a composite primary key."""

    table_name: str
    class_name: str
    fields: List[ScalarField] = field(default_factory=list)

    def add_field(self, field: ScalarField) -> None:
        """Add a key column field."""
        self.fields.append(field)
