"""
Base generator interface for all code generation targets.

Defines the contract that all language generators must implement.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Dict, List, Any, Optional
from pathlib import Path, PurePosixPath

from .config import GeneratorConfig
from .model import EntityModel, KeyModel
from .naming import NameSanitizer
from .templates import TemplateEngine, create_template_engine


class GeneratorError(Exception):
    """Base exception for code generation errors."""

    pass


@dataclass(frozen=True)
class GeneratedFile:
    """One rendered source artifact."""

    relative_path: str
    content: str
    class_name: str
    table_name: str
    kind: str  # "entity" or "key"


class CodeGenerator(ABC):
    """Abstract base class for all code generators."""

    def __init__(self, config: Optional[GeneratorConfig] = None):
        """Initialize generator with optional configuration."""
        self.config = config or GeneratorConfig()
        self.sanitizer = self.create_sanitizer()
        self._template_engine: Optional[TemplateEngine] = None

    @property
    @abstractmethod
    def language_name(self) -> str:
        """Return the name of the target language (e.g., 'java')."""
        pass

    @property
    @abstractmethod
    def file_extension(self) -> str:
        """Return the file extension for generated files (e.g., '.java')."""
        pass

    @abstractmethod
    def get_template_directory(self) -> Path:
        """Return the directory containing templates for this generator."""
        pass

    @property
    def template_engine(self) -> TemplateEngine:
        """Template engine for this generator, created on first use."""
        if self._template_engine is None:
            self._template_engine = create_template_engine(self.get_template_directory())
        return self._template_engine

    def create_sanitizer(self) -> NameSanitizer:
        """Name checker for this language; subclasses supply reserved words."""
        return NameSanitizer()

    @abstractmethod
    def emit(self, model: EntityModel) -> str:
        """
        Render the class for one table.

        Args:
            model: Entity model to render

        Returns:
            Generated source code
        """
        pass

    @abstractmethod
    def emit_key(self, model: KeyModel) -> str:
        """
        Render the embeddable composite key class.

        Args:
            model: Key model to render

        Returns:
            Generated source code
        """
        pass

    def render_table(
        self, model: EntityModel, key_model: Optional[KeyModel] = None
    ) -> List[GeneratedFile]:
        """
        Render all artifacts for one table; the key class comes first.

        Returns:
            Generated files in write order
        """
        files = []
        if key_model is not None:
            files.append(
                GeneratedFile(
                    relative_path=self.get_relative_path(key_model.class_name),
                    content=self.emit_key(key_model),
                    class_name=key_model.class_name,
                    table_name=key_model.table_name,
                    kind="key",
                )
            )
        files.append(
            GeneratedFile(
                relative_path=self.get_relative_path(model.class_name),
                content=self.emit(model),
                class_name=model.class_name,
                table_name=model.table_name,
                kind="entity",
            )
        )
        return files

    def get_relative_path(self, class_name: str) -> str:
        """File path of a generated class, relative to the output directory."""
        filename = f"{class_name}{self.file_extension}"
        if self.config.package_dirs and self.config.package_name:
            return str(PurePosixPath(*self.config.package_name.split("."), filename))
        return filename

    def validate_config(self) -> List[str]:
        """
        Check generator settings before a run.

        Returns:
            List of warning messages (empty if no issues)
        """
        return []

    def validate_models(
        self, model: EntityModel, key_model: Optional[KeyModel] = None
    ) -> List[str]:
        """
        Validate a table's models for basic structural issues.

        Language generators should override this to add language-specific validation.

        Returns:
            List of warning messages (empty if no issues)
        """
        warnings = []

        if not model.class_name:
            warnings.append(f"Table '{model.table_name}' yields an empty class name")

        if not model.fields:
            warnings.append(f"Table '{model.table_name}' has no columns")

        if not model.has_composite_key and model.primary_key_field is None:
            warnings.append(f"Table '{model.table_name}' has no primary key")

        duplicates = self.sanitizer.find_duplicates(f.field_name for f in model.fields)
        for name, count in duplicates.items():
            warnings.append(
                f"Field name '{name}' is generated {count} times in {model.class_name}"
            )

        if key_model is not None and not key_model.fields:
            warnings.append(
                f"Composite key of '{model.table_name}' matches no reported columns"
            )

        return warnings

    def format_code(self, code: str) -> str:
        """
        Apply language-specific formatting to generated code.

        Args:
            code: Raw generated code

        Returns:
            Formatted code
        """
        # Basic cleanup - remove excessive blank lines
        lines = code.split("\n")
        formatted_lines = []
        blank_count = 0

        for line in lines:
            stripped = line.rstrip()
            if not stripped:
                blank_count += 1
                if blank_count <= 1:  # Allow a single blank line between blocks
                    formatted_lines.append("")
            else:
                blank_count = 0
                formatted_lines.append(stripped)

        while formatted_lines and not formatted_lines[-1]:
            formatted_lines.pop()

        line_ending = self.config.line_ending
        return line_ending.join(formatted_lines) + line_ending

    # Template helper methods

    def render_template(self, template_name: str, context: Dict[str, Any]) -> str:
        """
        Render a template with context.

        Args:
            template_name: Template file name
            context: Template variables

        Returns:
            Rendered content
        """
        return self.template_engine.render_template(template_name, context)

    def template_exists(self, template_name: str) -> bool:
        """Check if a template exists."""
        return self.template_engine.template_exists(template_name)


class GenerationResult:
    """Container for generation results and metadata."""

    def __init__(
        self,
        files: List[GeneratedFile] = None,
        warnings: List[str] = None,
        metadata: Dict[str, Any] = None,
    ):
        """
        Initialize generation result.

        Args:
            files: Generated artifacts, in write order
            warnings: Any warnings from generation
            metadata: Additional metadata about generation
        """
        self.files = files or []
        self.warnings = warnings or []
        self.metadata = metadata or {}

    def get_file(self, class_name: str) -> Optional[GeneratedFile]:
        """Find a generated artifact by class name."""
        for generated in self.files:
            if generated.class_name == class_name:
                return generated
        return None
