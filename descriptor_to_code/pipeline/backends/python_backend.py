"""
Python descriptor holder backend.

Generates a module exposing ``descriptor()``, which builds the file
descriptor once, in a descriptor pool, from embedded bytes literals.
"""

from __future__ import annotations

from ..name_resolver import PythonNameResolver
from .base import HolderBackend


class PythonBackend(HolderBackend):
    """Python descriptor holder backend."""

    TEMPLATE_LANG = "python"
    FILE_EXTENSION = "py"

    # Adjacent bytes literals concatenate; parts are tuple elements, and the
    # trailing comma keeps a single part a tuple
    LINE_JOINER = ""
    PART_SEPARATOR = ","
    FINAL_SEPARATOR = ","

    DEFAULT_RUNTIME_VERSION = "5.28.2"

    RESOLVER = PythonNameResolver

    def format_literal(self, escaped: str) -> str:
        return f'b"{escaped}"'
