"""
Entity model builder.

Combines the column, primary key and foreign key metadata of one table
into an EntityModel and, for composite primary keys, a KeyModel.
"""

from typing import Dict, List, Optional, Sequence, Tuple

from ...logging_config import get_logger
from .model import (
    ColumnInfo,
    EmbeddedKeyField,
    EntityModel,
    ForeignKeyInfo,
    KeyModel,
    PrimaryKeyInfo,
    RelationField,
    ScalarField,
)
from .naming import to_identifier
from .types import is_identity_type, map_type

logger = get_logger(__name__)

KEY_CLASS_SUFFIX = "Id"
EMBEDDED_KEY_FIELD_NAME = "id"
DISAMBIGUATION_PREFIX = "By"


def build_entity_model(
    table_name: str,
    columns: Sequence[ColumnInfo],
    pk: PrimaryKeyInfo,
    fks: ForeignKeyInfo,
) -> Tuple[EntityModel, Optional[KeyModel]]:
    """
    Build the entity model for one table.

    Fields follow the column scan order. Members of a composite primary key
    are represented only by the embedded key field, which comes first.

    Args:
        table_name: Table name as reported by the database
        columns: Columns in scan order
        pk: Primary key columns
        fks: Foreign key child column -> target table

    Returns:
        Tuple of (entity model, key model or None)
    """
    class_name = to_identifier(table_name, True)
    has_composite_key = pk.is_composite

    entity = EntityModel(
        table_name=table_name,
        class_name=class_name,
        has_composite_key=has_composite_key,
    )

    key_model = None
    if has_composite_key:
        key_model = _build_key_model(table_name, class_name, columns, pk)
        entity.add_field(
            EmbeddedKeyField(
                field_name=EMBEDDED_KEY_FIELD_NAME,
                key_type_name=key_model.class_name,
            )
        )

    seen_targets: Dict[str, int] = {}
    single_pk = pk.single_column

    for column in columns:
        if has_composite_key and column.name in pk:
            continue

        if column.name in fks:
            relation, seen_targets = _relation_field(
                column.name, fks[column.name], seen_targets
            )
            entity.add_field(relation)
            continue

        is_pk = not has_composite_key and column.name == single_pk
        entity.add_field(_scalar_field(column, is_primary_key=is_pk))

    logger.debug(
        "Built %s from %s: %d fields, composite key=%s",
        class_name,
        table_name,
        len(entity.fields),
        has_composite_key,
    )
    return entity, key_model


def _build_key_model(
    table_name: str,
    class_name: str,
    columns: Sequence[ColumnInfo],
    pk: PrimaryKeyInfo,
) -> KeyModel:
    # Column scan order, not the order the PK was reported in
    key_model = KeyModel(table_name=table_name, class_name=class_name + KEY_CLASS_SUFFIX)
    for column in columns:
        if column.name in pk:
            key_model.add_field(
                ScalarField(
                    column_name=column.name,
                    field_name=to_identifier(column.name, False),
                    type=map_type(column.sql_type, column.size),
                    sql_type=column.sql_type,
                )
            )
    return key_model


def _relation_field(
    column_name: str, target_table: str, seen_targets: Dict[str, int]
) -> Tuple[RelationField, Dict[str, int]]:
    """
    Name the navigation field for a foreign key column.

    The first foreign key to a target table takes the plain target name;
    later ones to the same table are qualified with their column name.

    Returns:
        Tuple of (relation field, updated per-target counter)
    """
    counter = dict(seen_targets)
    counter[target_table] = counter.get(target_table, 0) + 1

    field_name = to_identifier(target_table, False)
    if counter[target_table] > 1:
        field_name += DISAMBIGUATION_PREFIX + to_identifier(column_name, True)

    relation = RelationField(
        fk_column_name=column_name,
        target_table=target_table,
        field_name=field_name,
        target_type_name=to_identifier(target_table, True),
    )
    return relation, counter


def _scalar_field(column: ColumnInfo, is_primary_key: bool) -> ScalarField:
    return ScalarField(
        column_name=column.name,
        field_name=to_identifier(column.name, False),
        type=map_type(column.sql_type, column.size),
        is_primary_key=is_primary_key,
        is_auto_generated=is_primary_key and is_identity_type(column.sql_type),
        sql_type=column.sql_type,
    )


def find_metadata_issues(
    table_name: str,
    columns: Sequence[ColumnInfo],
    pk: PrimaryKeyInfo,
    fks: ForeignKeyInfo,
) -> List[str]:
    """
    Report metadata inconsistencies that leave a model silently incomplete.

    Returns:
        List of issue descriptions (empty if metadata is consistent)
    """
    issues = []
    column_names = {column.name for column in columns}

    for pk_column in pk.columns:
        if pk_column not in column_names:
            issues.append(
                f"Primary key column {table_name}.{pk_column} is not in the column list"
            )

    for fk_column, target in fks.items():
        if fk_column not in column_names:
            issues.append(
                f"Foreign key column {table_name}.{fk_column} -> {target} "
                "is not in the column list"
            )

    return issues
