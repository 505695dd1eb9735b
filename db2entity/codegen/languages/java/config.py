"""
Java-specific configuration and type mappings.

Provides the scalar type mapping and persistence API settings for
JPA entity generation.
"""

from enum import Enum
from typing import Dict, Optional

from ...core.types import ScalarType


class PersistenceApi(Enum):
    """Persistence annotation namespaces."""

    JAKARTA = "jakarta"
    JAVAX = "javax"

    @property
    def package(self) -> str:
        return f"{self.value}.persistence"


class FetchType(Enum):
    """JPA fetch strategies for many-to-one relations."""

    LAZY = "LAZY"
    EAGER = "EAGER"


# Java type mappings
JAVA_TYPE_MAP = {
    ScalarType.INT32: "Integer",
    ScalarType.INT64: "Long",
    ScalarType.DECIMAL: "java.math.BigDecimal",
    ScalarType.FLOAT32: "Float",
    ScalarType.FLOAT64: "Double",
    ScalarType.BOOLEAN: "Boolean",
    ScalarType.DATE: "java.time.LocalDate",
    ScalarType.DATETIME: "java.time.LocalDateTime",
    ScalarType.STRING: "String",
}


class JavaConfig:
    """Java-specific configuration."""

    def __init__(self, **kwargs):
        """Initialize Java configuration."""
        api = kwargs.get("persistence_api", "jakarta")
        if isinstance(api, PersistenceApi):
            self.persistence_api = api
        else:
            try:
                self.persistence_api = PersistenceApi(str(api).lower())
            except ValueError:
                self.persistence_api = PersistenceApi.JAKARTA

        fetch = kwargs.get("fetch_type", "LAZY")
        if isinstance(fetch, FetchType):
            self.fetch_type = fetch
        else:
            try:
                self.fetch_type = FetchType(str(fetch).upper())
            except ValueError:
                self.fetch_type = FetchType.LAZY

        self.serializable = kwargs.get("serializable", True)
        self.key_equals_hash_code = kwargs.get("key_equals_hash_code", True)

        # Build type map with configured overrides, keyed by scalar type name
        self.type_map: Dict[ScalarType, str] = JAVA_TYPE_MAP.copy()
        for scalar_name, java_type in kwargs.get("type_overrides", {}).items():
            try:
                self.type_map[ScalarType(scalar_name)] = java_type
            except ValueError:
                continue

    @property
    def persistence_package(self) -> str:
        return self.persistence_api.package

    def get_java_type(self, scalar_type: Optional[ScalarType]) -> str:
        """Get Java type string for a scalar type."""
        return self.type_map.get(scalar_type, self.type_map[ScalarType.STRING])

    def unknown_overrides(self, overrides: Dict[str, str]) -> list[str]:
        """Override keys that name no scalar type."""
        valid = {t.value for t in ScalarType}
        return [key for key in overrides if key not in valid]
