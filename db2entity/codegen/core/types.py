"""
Language-neutral scalar types and the SQL type mapping.

Vendor SQL type names reported by database metadata are mapped onto a
small set of scalar categories; language generators translate those
categories into concrete target types.
"""

import re
from enum import Enum


class ScalarType(str, Enum):
    """Supported scalar column types across all target languages."""

    INT32 = "int32"
    INT64 = "int64"
    DECIMAL = "decimal"
    FLOAT32 = "float32"
    FLOAT64 = "float64"
    BOOLEAN = "boolean"
    DATE = "date"
    DATETIME = "datetime"  # timezone-naive
    STRING = "string"

    def __str__(self) -> str:
        return self.value


SQL_TYPE_MAP = {
    "INT": ScalarType.INT32,
    "INT4": ScalarType.INT32,
    "INTEGER": ScalarType.INT32,
    "BIGINT": ScalarType.INT64,
    "INT8": ScalarType.INT64,
    "DECIMAL": ScalarType.DECIMAL,
    "NUMERIC": ScalarType.DECIMAL,
    "FLOAT": ScalarType.FLOAT32,
    "FLOAT4": ScalarType.FLOAT32,
    "REAL": ScalarType.FLOAT32,
    "FLOAT8": ScalarType.FLOAT64,
    "DOUBLE": ScalarType.FLOAT64,
    "BOOLEAN": ScalarType.BOOLEAN,
    "BOOL": ScalarType.BOOLEAN,
    "DATE": ScalarType.DATE,
    "TIMESTAMP": ScalarType.DATETIME,
    # Timezone offset is dropped; see discards_timezone()
    "TIMESTAMPTZ": ScalarType.DATETIME,
    "CHAR": ScalarType.STRING,
    "VARCHAR": ScalarType.STRING,
    "TEXT": ScalarType.STRING,
}

DEFAULT_SCALAR_TYPE = ScalarType.STRING

IDENTITY_MARKERS = ("SERIAL", "IDENTITY")

TIMEZONE_AWARE_TYPES = frozenset({"TIMESTAMPTZ"})

_SIZE_SUFFIX = re.compile(r"\(.*?\)")

# ANSI spelling, e.g. "timestamp with time zone" or Oracle "WITH LOCAL TIME ZONE"
_ZONED_SUFFIX = re.compile(r"\bWITH\s+(LOCAL\s+)?TIME\s+ZONE\b", re.IGNORECASE)


def normalize_type_name(sql_type_name: str) -> str:
    """
    Reduce a vendor type name to its bare upper-case keyword.

    ``varchar(50)`` becomes ``VARCHAR`` and ``int identity`` becomes ``INT``.
    """
    bare = _SIZE_SUFFIX.sub(" ", sql_type_name or "").strip().upper()
    return bare.split()[0] if bare else ""


def map_type(sql_type_name: str, column_size: int = 0) -> ScalarType:
    """
    Map a vendor SQL type name to a scalar type.

    Args:
        sql_type_name: Type name as reported by the metadata provider
        column_size: Declared column size; currently not used for mapping

    Returns:
        ScalarType, falling back to STRING for unrecognized names
    """
    return SQL_TYPE_MAP.get(normalize_type_name(sql_type_name), DEFAULT_SCALAR_TYPE)


def is_identity_type(sql_type_name: str) -> bool:
    """Check whether a declared type marks a database-generated value."""
    upper = (sql_type_name or "").upper()
    return any(marker in upper for marker in IDENTITY_MARKERS)


def discards_timezone(sql_type_name: str) -> bool:
    """Check whether mapping this type loses timezone information."""
    if normalize_type_name(sql_type_name) in TIMEZONE_AWARE_TYPES:
        return True
    return map_type(sql_type_name) == ScalarType.DATETIME and bool(
        _ZONED_SUFFIX.search(sql_type_name or "")
    )
