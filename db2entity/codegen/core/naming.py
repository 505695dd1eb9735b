"""
Naming utilities for entity code generation.

Derives class, field and accessor identifiers from database schema names
and tracks conflicts with target language reserved words.
"""

from typing import Dict, Iterable, Optional, Set
from enum import Enum


class NamingCase(Enum):
    """Identifier case styles derived from schema names."""

    CAMEL_CASE = "camel"  # user_account -> userAccount
    PASCAL_CASE = "pascal"  # user_account -> UserAccount


def to_identifier(raw: str, capitalize_first: bool) -> str:
    """
    Convert an underscore separated schema name into an identifier.

    Every segment is lower-cased. The first segment is capitalized only when
    ``capitalize_first`` is set; all following segments are always
    capitalized, which yields camelCase or PascalCase.

    Args:
        raw: Table or column name as reported by the database
        capitalize_first: Capitalize the first segment (PascalCase)

    Returns:
        Identifier, or an empty string when ``raw`` has no usable segments
    """
    parts = [part.lower() for part in raw.split("_") if part]
    if not parts:
        return ""

    head = _upper_first(parts[0]) if capitalize_first else parts[0]
    return head + "".join(_upper_first(part) for part in parts[1:])


def convert_case(raw: str, target_case: NamingCase) -> str:
    """Convert a schema name to the requested case style."""
    return to_identifier(raw, target_case == NamingCase.PASCAL_CASE)


def accessor_suffix(field_name: str) -> str:
    """Return the bean accessor suffix for a field (``orderId`` -> ``OrderId``)."""
    return _upper_first(field_name)


def _upper_first(value: str) -> str:
    return value[:1].upper() + value[1:]


class NameSanitizer:
    """Checks generated identifiers against reserved words and duplicates."""

    def __init__(self, reserved_words: Set[str] = None, builtin_types: Set[str] = None):
        """
        Initialize name sanitizer.

        Args:
            reserved_words: Set of language reserved words
            builtin_types: Set of builtin type names that might conflict
        """
        self.reserved_words = reserved_words or set()
        self.builtin_types = builtin_types or set()
        self._used_names: Set[str] = set()

    def check_name(self, name: str) -> Optional[str]:
        """
        Describe why a name is unsafe in the target language.

        Returns:
            Reason string, or None if the name is usable as-is
        """
        if not name:
            return "empty identifier"
        if name in self.reserved_words:
            return f"'{name}' is a reserved word"
        if name in self.builtin_types:
            return f"'{name}' shadows a builtin type"
        if name[0].isdigit():
            return f"'{name}' starts with a digit"
        return None

    def register(self, name: str) -> bool:
        """Track a name within the current scope; False if it was already used."""
        if name in self._used_names:
            return False
        self._used_names.add(name)
        return True

    def find_duplicates(self, names: Iterable[str]) -> Dict[str, int]:
        """Return names that occur more than once, with their counts."""
        self.reset_used_names()
        counts: Dict[str, int] = {}
        for name in names:
            if not self.register(name):
                counts[name] = counts.get(name, 1) + 1
        return counts

    def reset_used_names(self):
        """Reset the tracking of used names."""
        self._used_names.clear()
