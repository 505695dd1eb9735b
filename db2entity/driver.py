"""Generation driver.

Walks every selected table, builds its entity model, renders it with a
language generator and hands the sources to the file writer. The first
metadata or write failure aborts the run.
"""

from pathlib import Path
from typing import Callable, List, Optional

from sqlalchemy.exc import SQLAlchemyError

from .codegen.core.builder import build_entity_model, find_metadata_issues
from .codegen.core.config import GeneratorConfig
from .codegen.core.generator import (
    CodeGenerator,
    GeneratedFile,
    GenerationResult,
    GeneratorError,
)
from .codegen.core.templates import TemplateError
from .codegen.registry import get_generator
from .logging_config import get_logger
from .schema_reader import SchemaReadError, SchemaReader, SqlAlchemyMetadataProvider
from .utils import FileWriteError, write_file

logger = get_logger(__name__)

Writer = Callable[[Path, str], object]


class GenerationError(GeneratorError):
    """A table could not be read, rendered or written; the run is aborted."""

    def __init__(self, message: str, table_name: Optional[str] = None):
        super().__init__(message)
        self.table_name = table_name


def render_table(
    reader: SchemaReader, generator: CodeGenerator, table_name: str
) -> tuple[List[GeneratedFile], List[str]]:
    """
    Read one table and render its sources.

    Returns:
        Tuple of (generated files in write order, warnings)

    Raises:
        GenerationError: On metadata, template, or strict-mode failures
    """
    try:
        table = reader.read_table(table_name)
    except (SQLAlchemyError, SchemaReadError) as e:
        raise GenerationError(
            f"Failed to read metadata for table {table_name}: {e}", table_name
        ) from e

    warnings = find_metadata_issues(
        table.name, table.columns, table.primary_key, table.foreign_keys
    )
    if warnings and generator.config.strict:
        raise GenerationError("; ".join(warnings), table_name)

    model, key_model = build_entity_model(
        table.name, table.columns, table.primary_key, table.foreign_keys
    )
    warnings.extend(generator.validate_models(model, key_model))

    try:
        files = generator.render_table(model, key_model)
    except TemplateError as e:
        raise GenerationError(f"Failed to render table {table_name}: {e}", table_name) from e

    for warning in warnings:
        logger.warning(warning)

    return files, warnings


def generate_entities(
    reader: SchemaReader,
    generator: CodeGenerator,
    output_dir: Optional[str | Path] = None,
    writer: Optional[Writer] = write_file,
    on_table: Optional[Callable[[str], None]] = None,
) -> GenerationResult:
    """
    Generate sources for every selected table.

    Args:
        reader: Validated schema source
        generator: Language generator
        output_dir: Root directory for written files (defaults to config)
        writer: File writer; None renders without writing
        on_table: Called with each table name before it is processed

    Returns:
        GenerationResult with files, warnings and run metadata

    Raises:
        GenerationError: On the first failing table or write
    """
    output_root = Path(output_dir or generator.config.output_dir)
    warnings = list(generator.validate_config())
    files: List[GeneratedFile] = []

    try:
        tables = reader.list_tables()
    except (SQLAlchemyError, SchemaReadError) as e:
        raise GenerationError(f"Failed to list tables: {e}") from e

    logger.info("Generating %s sources for %d tables", generator.language_name, len(tables))

    for table_name in tables:
        if on_table:
            on_table(table_name)

        table_files, table_warnings = render_table(reader, generator, table_name)
        warnings.extend(table_warnings)

        for generated in table_files:
            if writer is not None:
                path = output_root / generated.relative_path
                try:
                    writer(path, generated.content)
                except (FileWriteError, OSError) as e:
                    raise GenerationError(str(e), table_name) from e
            files.append(generated)

        logger.info("Generated %s", ", ".join(f.class_name for f in table_files))

    metadata = {
        "language": generator.language_name,
        "file_extension": generator.file_extension,
        "table_count": len(tables),
        "entity_count": sum(1 for f in files if f.kind == "entity"),
        "key_class_count": sum(1 for f in files if f.kind == "key"),
        "output_dir": str(output_root) if writer is not None else None,
        "package_name": generator.config.package_name,
    }

    return GenerationResult(files, warnings, metadata)


def generate_from_database(
    url: str,
    language: str = "java",
    config: Optional[GeneratorConfig] = None,
    username: Optional[str] = None,
    password: Optional[str] = None,
    writer: Optional[Writer] = write_file,
    on_table: Optional[Callable[[str], None]] = None,
) -> GenerationResult:
    """
    Generate sources for a database given by URL.

    Args:
        url: SQLAlchemy (or ``jdbc:``-prefixed) database URL
        language: Target language name or alias
        config: Generator configuration (defaults for the language if omitted)
        username: Overrides the URL's user name
        password: Overrides the URL's password
        writer: File writer; None renders without writing
        on_table: Progress callback receiving each table name

    Returns:
        GenerationResult with files, warnings and run metadata
    """
    generator = get_generator(language, config)
    try:
        provider = SqlAlchemyMetadataProvider(
            url, schema=generator.config.schema, username=username, password=password
        )
    except SQLAlchemyError as e:
        raise GenerationError(f"Cannot connect to database: {e}") from e

    reader = SchemaReader(
        provider,
        include=generator.config.include_tables,
        exclude=generator.config.exclude_tables,
    )
    try:
        return generate_entities(reader, generator, writer=writer, on_table=on_table)
    finally:
        reader.close()
