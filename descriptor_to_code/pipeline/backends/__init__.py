"""
Descriptor holder backends.

Contains language-specific holder generators.
"""

from __future__ import annotations

from .base import BoundDependency, HolderBackend, HolderContext
from .java_backend import JavaBackend
from .python_backend import PythonBackend

BACKENDS: dict[str, type[HolderBackend]] = {
    "java": JavaBackend,
    "python": PythonBackend,
}

__all__ = [
    "HolderBackend",
    "HolderContext",
    "BoundDependency",
    "JavaBackend",
    "PythonBackend",
    "BACKENDS",
]
