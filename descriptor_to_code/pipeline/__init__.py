"""
Pipeline - descriptor holder generator.

This module embeds a compiled schema file into generated source in
several phases:

1. Phase 1 (Serializer): Serialize the file description, optionally stripped
2. Phase 2 (Chunker): Split the payload into escaped literal lines and parts
3. Phase 3 (Binder): Resolve the holder identifiers of the dependencies
4. Phase 4 (Backend): Render the holder class or module
5. Phase 5 (Annotations): Optionally map emitted spans back to the schema
6. Phase 6 (Writer): Optional atomic write of the artifacts
"""

from __future__ import annotations

from .annotations import AnnotationCollector, AnnotationOrigin
from .atomic_writer import ArtifactExistsError, AtomicWriter, ValidationError, write_artifact
from .binder import bind_dependencies, qualify
from .chunker import LiteralChunks, LiteralLine, PartBreak, c_escape
from .config import ConfigError, GenerationOptions, OutputConfig, OutputMode, RuntimeFlavor
from .generator import DescriptorGenerator, generate
from .model import Dependency, EmittedArtifact, MissingDependencyError, SchemaFile
from .name_resolver import HolderNameResolver, JavaNameResolver, PythonNameResolver, package_to_directory
from .serializer import serialize_schema

__all__ = [
    "DescriptorGenerator",
    "generate",
    "GenerationOptions",
    "OutputConfig",
    "OutputMode",
    "RuntimeFlavor",
    "ConfigError",
    "SchemaFile",
    "Dependency",
    "EmittedArtifact",
    "MissingDependencyError",
    "serialize_schema",
    "LiteralChunks",
    "LiteralLine",
    "PartBreak",
    "c_escape",
    "bind_dependencies",
    "qualify",
    "HolderNameResolver",
    "JavaNameResolver",
    "PythonNameResolver",
    "package_to_directory",
    "AnnotationCollector",
    "AnnotationOrigin",
    "AtomicWriter",
    "ArtifactExistsError",
    "ValidationError",
    "write_artifact",
]
