"""Descriptor to Code Generator

A Python package for embedding compiled protocol buffer file descriptors
into generated Java and Python source. The generated holders rebuild the
descriptor at start-up from chunked string literals, with optional
dependency wiring, version checks and source-mapping annotations.
"""

__version__ = "1.0.1"
__author__ = "François Lagunas"

from .pipeline import (
    ArtifactExistsError,
    AtomicWriter,
    ConfigError,
    DescriptorGenerator,
    EmittedArtifact,
    GenerationOptions,
    OutputConfig,
    OutputMode,
    RuntimeFlavor,
    SchemaFile,
    ValidationError,
    generate,
)

__all__ = [
    "DescriptorGenerator",
    "generate",
    "GenerationOptions",
    "OutputConfig",
    "OutputMode",
    "RuntimeFlavor",
    "ConfigError",
    "SchemaFile",
    "EmittedArtifact",
    "AtomicWriter",
    "ArtifactExistsError",
    "ValidationError",
]
