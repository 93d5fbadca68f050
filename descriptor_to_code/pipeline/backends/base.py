"""
Base class for descriptor holder backends.

Defines the interface that all language-specific backends must implement.
"""

from __future__ import annotations

import json
from abc import ABC, abstractmethod
from collections.abc import Callable, Iterable
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

import jinja2

from ..annotations import DEPENDENCY_FIELD_NUMBER, AnnotationOrigin
from ..chunker import ChunkInstruction, LiteralLine, PartBreak
from ..config import GenerationOptions, RuntimeVersion
from ..model import Dependency
from ..name_resolver import HolderNameResolver, package_to_directory


@dataclass
class BoundDependency:
    """A dependency as seen by the templates."""

    file_name: str
    identifier: str
    origin: AnnotationOrigin


@dataclass
class HolderContext:
    """Everything a holder template needs to render one schema file."""

    source_file: str
    package: str
    name: str
    qualified_name: str
    data_lines: list[str] = field(default_factory=list)
    dependencies: list[BoundDependency] = field(default_factory=list)
    eager: bool = True
    empty_payload: bool = False
    version: RuntimeVersion | None = None
    emit_version_string: bool = True
    annotation_file: str = ""
    package_origin: AnnotationOrigin | None = None
    name_origin: AnnotationOrigin | None = None


class HolderBackend(ABC):
    """Abstract base class for descriptor holder backends."""

    # Template directory name
    TEMPLATE_LANG: str = ""

    # File extension
    FILE_EXTENSION: str = ""

    # Appended to a literal line that is followed by another line of the same part
    LINE_JOINER: str = ""

    # Appended to the last line of a part that is followed by another part
    PART_SEPARATOR: str = ","

    # Appended to the very last literal line
    FINAL_SEPARATOR: str = ""

    # Runtime version generated against when the options do not name one
    DEFAULT_RUNTIME_VERSION: str = ""

    # Name resolver for this host language
    RESOLVER: type[HolderNameResolver]

    def __init__(self, options: GenerationOptions):
        """
        Initialize the backend.

        Args:
            options: Generation options
        """
        self.options = options
        self.resolver = self.RESOLVER()
        self._setup_templates()

    def _setup_templates(self) -> None:
        """Set up Jinja2 templates."""
        template_dir = Path(__file__).parent.parent.parent / "templates" / self.TEMPLATE_LANG
        self.jinja_env = jinja2.Environment(
            loader=jinja2.FileSystemLoader(str(template_dir)),
            lstrip_blocks=True,
            trim_blocks=True,
            keep_trailing_newline=True,
        )
        # Add custom filters
        self.jinja_env.filters["quote"] = self._quote

        self.holder_template = self.jinja_env.get_template(f"holder.{self.FILE_EXTENSION}.jinja2")

    @abstractmethod
    def format_literal(self, escaped: str) -> str:
        """
        Wrap an escaped payload line in the language's literal syntax.

        Args:
            escaped: C-escaped payload text

        Returns:
            Literal source text
        """

    @property
    def runtime_version(self) -> RuntimeVersion:
        return RuntimeVersion.parse(self.options.runtime_version or self.DEFAULT_RUNTIME_VERSION)

    def render_literal_lines(self, chunks: Iterable[ChunkInstruction]) -> list[str]:
        """
        Turn chunk instructions into the source lines of the literal array.

        Args:
            chunks: Instructions from the literal chunker

        Returns:
            One source line per literal line, without indentation
        """
        lines: list[str] = []
        part_started = True
        for instruction in chunks:
            if isinstance(instruction, PartBreak):
                lines[-1] += self.PART_SEPARATOR
                part_started = True
            elif isinstance(instruction, LiteralLine):
                if not part_started:
                    lines[-1] += self.LINE_JOINER
                lines.append(self.format_literal(instruction.escaped))
                part_started = False
        if lines:
            lines[-1] += self.FINAL_SEPARATOR
        return lines

    def bind(self, dependencies: list[Dependency], source_file: str) -> list[BoundDependency]:
        """Attach annotation origins (the import statements of source_file) to dependencies."""
        return [
            BoundDependency(
                file_name=dep.file_name,
                identifier=dep.identifier,
                origin=AnnotationOrigin(source_file, (DEPENDENCY_FIELD_NUMBER, dep.index)),
            )
            for dep in dependencies
        ]

    def output_path(self, package: str, name: str) -> str:
        """Path of the generated file for a holder, relative to the output root."""
        return f"{package_to_directory(package)}{name}.{self.FILE_EXTENSION}"

    def render(self, context: HolderContext, annotate: Callable[..., str]) -> str:
        """
        Render the holder source.

        Args:
            context: Template context for the schema file
            annotate: Marks annotated text (identity when annotations are off)

        Returns:
            Rendered source, possibly still containing annotation markers
        """
        return self.holder_template.render(self._template_variables(context), annotate=annotate)

    def _template_variables(self, context: HolderContext) -> dict[str, Any]:
        return vars(context)

    @staticmethod
    def _quote(text: str) -> str:
        """Double-quoted string literal, valid in both Java and Python."""
        return json.dumps(text)
