"""
Java-specific naming utilities.

Handles Java reserved words and java.lang names that generated
identifiers must not collide with.
"""

from ...core.naming import NameSanitizer


# Java keywords and literals
JAVA_RESERVED_WORDS = {
    "abstract",
    "assert",
    "boolean",
    "break",
    "byte",
    "case",
    "catch",
    "char",
    "class",
    "const",
    "continue",
    "default",
    "do",
    "double",
    "else",
    "enum",
    "extends",
    "false",
    "final",
    "finally",
    "float",
    "for",
    "goto",
    "if",
    "implements",
    "import",
    "instanceof",
    "int",
    "interface",
    "long",
    "native",
    "new",
    "null",
    "package",
    "private",
    "protected",
    "public",
    "return",
    "short",
    "static",
    "strictfp",
    "super",
    "switch",
    "synchronized",
    "this",
    "throw",
    "throws",
    "transient",
    "true",
    "try",
    "void",
    "volatile",
    "while",
    "_",
}

# Implicitly imported java.lang types that a generated class would shadow
JAVA_BUILTIN_TYPES = {
    "Boolean",
    "Byte",
    "Character",
    "Class",
    "Double",
    "Enum",
    "Float",
    "Integer",
    "Long",
    "Number",
    "Object",
    "Record",
    "Short",
    "String",
    "System",
    "Thread",
    "Void",
    # Types referenced by generated sources
    "Objects",
    "Serializable",
}


def create_java_sanitizer() -> NameSanitizer:
    """Create a name sanitizer configured for Java."""
    return NameSanitizer(JAVA_RESERVED_WORDS, JAVA_BUILTIN_TYPES)


def validate_java_package_name(name: str) -> list[str]:
    """
    Validate a dotted Java package name.

    Returns:
        List of validation errors (empty if valid)
    """
    errors = []

    if not name:
        errors.append("Package name cannot be empty")
        return errors

    for segment in name.split("."):
        if not segment.isidentifier():
            errors.append(f"'{segment}' is not a valid Java identifier")
        elif segment in JAVA_RESERVED_WORDS:
            errors.append(f"'{segment}' is a Java reserved word")

    if name != name.lower():
        errors.append("Package names should be lowercase")

    return errors
