"""
Java descriptor holder backend.

Generates the outer class that embeds a file descriptor and rebuilds it
through ``Descriptors.FileDescriptor.internalBuildGeneratedFileFrom``.
"""

from __future__ import annotations

from ..name_resolver import JavaNameResolver
from .base import HolderBackend


class JavaBackend(HolderBackend):
    """Java descriptor holder backend."""

    TEMPLATE_LANG = "java"
    FILE_EXTENSION = "java"

    # Lines of one part are joined with '+' into a single constant
    LINE_JOINER = " +"
    PART_SEPARATOR = ","
    FINAL_SEPARATOR = ""

    DEFAULT_RUNTIME_VERSION = "4.28.2"

    RESOLVER = JavaNameResolver

    def format_literal(self, escaped: str) -> str:
        """Java string literal; the runtime reads each char back as one byte."""
        return f'"{escaped}"'
