"""Database schema reading.

A :class:`MetadataProvider` returns raw metadata (names, type strings and
sizes) for a live database; :class:`SchemaReader` validates that output into
the typed records the entity model builder consumes.
"""

import fnmatch
import re
from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Any, Dict, Iterable, List, Mapping, Optional, Tuple

from sqlalchemy import create_engine, inspect
from sqlalchemy.engine import Engine, make_url
from sqlalchemy.exc import CompileError

from .codegen.core.model import ColumnInfo, ForeignKeyInfo, PrimaryKeyInfo
from .codegen.core.types import is_identity_type
from .logging_config import get_logger
from .utils import normalize_database_url

logger = get_logger(__name__)

_SIZE_SUFFIX = re.compile(r"\s*\(.*\)\s*$")

IDENTITY_SUFFIX = " IDENTITY"
TIMESTAMPTZ = "TIMESTAMPTZ"


class SchemaReadError(Exception):
    """Raised when metadata returned by the provider is malformed."""

    pass


class MetadataProvider(ABC):
    """Source of raw schema metadata for one database."""

    @abstractmethod
    def list_tables(self) -> List[str]:
        """Names of the base tables to generate entities for."""

    @abstractmethod
    def list_columns(self, table_name: str) -> List[Dict[str, Any]]:
        """Columns in scan order, as dicts with ``name``, ``type_name`` and ``size``."""

    @abstractmethod
    def list_primary_key_columns(self, table_name: str) -> List[str]:
        """Primary key column names, in the order the engine reports them."""

    @abstractmethod
    def list_imported_foreign_keys(self, table_name: str) -> List[Tuple[str, str]]:
        """``(child column, target table)`` pairs for the table's foreign keys."""

    def close(self):
        """Release any connection resources."""


class SqlAlchemyMetadataProvider(MetadataProvider):
    """Metadata provider backed by a SQLAlchemy inspector."""

    def __init__(
        self,
        engine_or_url: Engine | str,
        schema: Optional[str] = None,
        username: Optional[str] = None,
        password: Optional[str] = None,
    ):
        """Initialize with an engine, or a URL plus optional credentials."""
        if isinstance(engine_or_url, Engine):
            self.engine = engine_or_url
            self._owns_engine = False
        else:
            url = make_url(normalize_database_url(engine_or_url))
            if username:
                url = url.set(username=username)
            if password:
                url = url.set(password=password)
            self.engine = create_engine(url)
            self._owns_engine = True

        self.schema = schema
        self._inspector = None

    @property
    def inspector(self):
        if self._inspector is None:
            logger.debug(
                "Inspecting %s", self.engine.url.render_as_string(hide_password=True)
            )
            self._inspector = inspect(self.engine)
        return self._inspector

    def list_tables(self) -> List[str]:
        return list(self.inspector.get_table_names(schema=self.schema))

    def list_columns(self, table_name: str) -> List[Dict[str, Any]]:
        columns = []
        for col in self.inspector.get_columns(table_name, schema=self.schema):
            type_name = self._type_name(col["type"])
            if self._is_identity_column(col) and not is_identity_type(type_name):
                type_name += IDENTITY_SUFFIX
            columns.append(
                {
                    "name": col["name"],
                    "type_name": type_name,
                    "size": self._type_size(col["type"]),
                }
            )
        return columns

    def list_primary_key_columns(self, table_name: str) -> List[str]:
        pk_constraint = self.inspector.get_pk_constraint(table_name, schema=self.schema)
        return list(pk_constraint.get("constrained_columns") or [])

    def list_imported_foreign_keys(self, table_name: str) -> List[Tuple[str, str]]:
        pairs = []
        for fk in self.inspector.get_foreign_keys(table_name, schema=self.schema):
            # Composite foreign keys are flattened to one pair per column
            target_table = fk["referred_table"]
            for column in fk["constrained_columns"]:
                pairs.append((column, target_table))
        return pairs

    def close(self):
        if self._owns_engine:
            self.engine.dispose()

    def _type_name(self, sql_type) -> str:
        """Bare type keyword as the dialect spells it, without size arguments."""
        if getattr(sql_type, "timezone", False) is True:
            return TIMESTAMPTZ
        try:
            compiled = sql_type.compile(dialect=self.engine.dialect)
        except CompileError:
            compiled = type(sql_type).__name__.upper()
        return _SIZE_SUFFIX.sub("", compiled)

    def _type_size(self, sql_type) -> int:
        for attr in ("length", "precision"):
            value = getattr(sql_type, attr, None)
            if isinstance(value, int):
                return value
        return 0

    def _is_identity_column(self, col: Mapping[str, Any]) -> bool:
        if col.get("identity"):
            return True
        default = col.get("default")
        if isinstance(default, str) and default.lower().startswith("nextval("):
            return True
        return col.get("autoincrement") is True


@dataclass(frozen=True)
class TableMetadata:
    """Validated metadata of one table."""

    name: str
    columns: Tuple[ColumnInfo, ...]
    primary_key: PrimaryKeyInfo
    foreign_keys: ForeignKeyInfo


class SchemaReader:
    """Validates provider output into typed schema records."""

    def __init__(
        self,
        provider: MetadataProvider,
        include: Optional[Iterable[str]] = None,
        exclude: Optional[Iterable[str]] = None,
    ):
        """
        Args:
            provider: Raw metadata source.
            include: Glob patterns; when given, only matching tables are read.
            exclude: Glob patterns of tables to skip.
        """
        self.provider = provider
        self.include = [p.lower() for p in include or []]
        self.exclude = [p.lower() for p in exclude or []]

    def list_tables(self) -> List[str]:
        """Selected table names, sorted."""
        names = [
            self._require_str(name, "table name")
            for name in self.provider.list_tables()
        ]
        selected = sorted(name for name in names if self._is_selected(name))
        skipped = len(names) - len(selected)
        if skipped:
            logger.info("Skipped %d of %d tables by pattern", skipped, len(names))
        return selected

    def read_columns(self, table_name: str) -> List[ColumnInfo]:
        columns = []
        for raw in self.provider.list_columns(table_name):
            if not isinstance(raw, Mapping):
                raise SchemaReadError(
                    f"Column metadata for {table_name} must be a mapping, got {type(raw).__name__}"
                )
            name = self._require_str(raw.get("name"), f"column name in {table_name}")
            type_name = self._require_str(
                raw.get("type_name"), f"type of {table_name}.{name}"
            )
            columns.append(
                ColumnInfo(
                    name=name,
                    sql_type=type_name,
                    size=self._require_size(raw.get("size"), f"{table_name}.{name}"),
                )
            )
        return columns

    def read_primary_key(self, table_name: str) -> PrimaryKeyInfo:
        names = [
            self._require_str(name, f"primary key column of {table_name}")
            for name in self.provider.list_primary_key_columns(table_name)
        ]
        return PrimaryKeyInfo(columns=tuple(dict.fromkeys(names)))

    def read_foreign_keys(self, table_name: str) -> ForeignKeyInfo:
        fks: ForeignKeyInfo = {}
        for pair in self.provider.list_imported_foreign_keys(table_name):
            try:
                child, target = pair
            except (TypeError, ValueError) as e:
                raise SchemaReadError(
                    f"Foreign key of {table_name} must be a (column, table) pair: {pair!r}"
                ) from e
            child = self._require_str(child, f"foreign key column of {table_name}")
            target = self._require_str(target, f"foreign key target of {table_name}.{child}")
            if child in fks and fks[child] != target:
                logger.debug(
                    "%s.%s references both %s and %s; keeping %s",
                    table_name,
                    child,
                    fks[child],
                    target,
                    target,
                )
            fks[child] = target
        return fks

    def read_table(self, table_name: str) -> TableMetadata:
        """Read and validate all metadata of one table."""
        return TableMetadata(
            name=table_name,
            columns=tuple(self.read_columns(table_name)),
            primary_key=self.read_primary_key(table_name),
            foreign_keys=self.read_foreign_keys(table_name),
        )

    def close(self):
        self.provider.close()

    def _is_selected(self, name: str) -> bool:
        lowered = name.lower()
        if self.include and not any(fnmatch.fnmatchcase(lowered, p) for p in self.include):
            return False
        return not any(fnmatch.fnmatchcase(lowered, p) for p in self.exclude)

    @staticmethod
    def _require_str(value: Any, what: str) -> str:
        if not isinstance(value, str) or not value:
            raise SchemaReadError(f"Expected a non-empty string for {what}, got {value!r}")
        return value

    @staticmethod
    def _require_size(value: Any, what: str) -> int:
        if value is None:
            return 0
        if isinstance(value, bool) or not isinstance(value, int):
            raise SchemaReadError(f"Expected an integer size for {what}, got {value!r}")
        return value
