"""
Java code generator module.

Generates JPA entity classes with getters/setters and embeddable
composite key classes from database schema metadata.
"""

from .generator import JavaGenerator, create_java_generator
from .naming import create_java_sanitizer, validate_java_package_name
from .config import JavaConfig, PersistenceApi, FetchType, JAVA_TYPE_MAP

__all__ = [
    # Generator
    "JavaGenerator",
    "create_java_generator",
    # Naming
    "create_java_sanitizer",
    "validate_java_package_name",
    # Configuration
    "JavaConfig",
    "PersistenceApi",
    "FetchType",
    "JAVA_TYPE_MAP",
]
