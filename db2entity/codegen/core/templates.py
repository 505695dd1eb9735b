"""
Jinja2 environment for rendering generated sources.

Each language generator ships a directory of ``*.j2`` templates; the
engine loads from that directory and adds the filters entity templates
need.
"""

from pathlib import Path
from typing import Any, Dict, List

from jinja2 import Environment, FileSystemLoader, StrictUndefined
from jinja2 import TemplateError as JinjaTemplateError

from .naming import accessor_suffix


class TemplateError(Exception):
    """Exception raised for template-related errors."""

    pass


def comment_lines(value: str, style: str = "//") -> str:
    """Prefix every non-blank line with a line comment marker."""
    lines = str(value).split("\n")
    return "\n".join(f"{style} {line}" if line.strip() else line for line in lines)


class TemplateEngine:
    """Loads and renders the templates of one generator."""

    def __init__(self, template_dir: Path):
        """
        Initialize template engine.

        Args:
            template_dir: Directory containing template files

        Raises:
            TemplateError: If the directory does not exist
        """
        self.template_dir = Path(template_dir)
        if not self.template_dir.is_dir():
            raise TemplateError(f"Template directory not found: {self.template_dir}")

        # Plain-text output; every context key must be supplied
        self._env = Environment(
            loader=FileSystemLoader(str(self.template_dir)),
            autoescape=False,
            trim_blocks=True,
            lstrip_blocks=True,
            keep_trailing_newline=True,
            undefined=StrictUndefined,
        )
        self._env.filters["accessor"] = accessor_suffix
        self._env.filters["comment"] = comment_lines

    def render_template(self, template_name: str, context: Dict[str, Any]) -> str:
        """
        Render a template with the given context.

        Args:
            template_name: Name of template file
            context: Variables to pass to template

        Returns:
            Rendered template content
        """
        try:
            return self._env.get_template(template_name).render(**context)
        except JinjaTemplateError as e:
            raise TemplateError(f"Failed to render template {template_name}: {e}") from e

    def list_templates(self) -> List[str]:
        return self._env.list_templates(extensions=["j2"])

    def template_exists(self, template_name: str) -> bool:
        """Check if a template can be loaded."""
        return template_name in self.list_templates()


def create_template_engine(template_dir: Path) -> TemplateEngine:
    """Create a template engine backed by a template directory."""
    return TemplateEngine(template_dir)
