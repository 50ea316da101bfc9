"""
Base class for code generation backends.

Defines the interface that all language-specific backends must implement.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from pathlib import Path

import jinja2

from ..analyzer.ir_nodes import GenerationUnit, TypeRef
from ..config import CodeGeneratorConfig
from ..errors import UnitRenderError


class CodeBackend(ABC):
    """Abstract base class for code generation backends."""

    # Type mapping from schema primitive types to language types
    TYPE_MAP: dict[str, str] = {}

    # Template directory name
    TEMPLATE_LANG: str = ""

    # Template file extension
    FILE_EXTENSION: str = ""

    def __init__(self, config: CodeGeneratorConfig):
        """
        Initialize the backend.

        Args:
            config: Code generation configuration
        """
        self.config = config
        self._setup_templates()

    def _setup_templates(self) -> None:
        """Set up Jinja2 templates."""
        template_dir = Path(__file__).parent.parent.parent / "templates" / self.TEMPLATE_LANG
        self.jinja_env = jinja2.Environment(
            loader=jinja2.FileSystemLoader(str(template_dir)),
            lstrip_blocks=True,
            trim_blocks=True,
            keep_trailing_newline=True,
            undefined=jinja2.StrictUndefined,
        )
        self._register_filters()

    def _register_filters(self) -> None:
        """Hook for backends to add custom filters."""

    def get_template(self, name: str) -> jinja2.Template:
        return self.jinja_env.get_template(f"{name}.{self.FILE_EXTENSION}.jinja2")

    def render(self, unit: GenerationUnit) -> str:
        """
        Render one unit to source text.

        Rendering is pure: the same unit always gives the same text.

        Args:
            unit: The generation unit

        Returns:
            Complete source file content

        Raises:
            UnitRenderError: If the unit cannot be rendered
        """
        try:
            return self.render_unit(unit)
        except UnitRenderError:
            raise
        except jinja2.TemplateError as e:
            raise UnitRenderError(unit.class_name, f"template error: {e}") from e
        except (KeyError, TypeError, ValueError) as e:
            raise UnitRenderError(unit.class_name, f"malformed unit: {e}") from e

    @abstractmethod
    def render_unit(self, unit: GenerationUnit) -> str:
        """
        Render one unit to source text.

        Args:
            unit: The generation unit

        Returns:
            Complete source file content
        """

    @abstractmethod
    def translate_type(self, type_ref: TypeRef) -> str:
        """
        Translate an IR type to a language-specific type string.

        Args:
            type_ref: The type reference

        Returns:
            Language-specific type string
        """
