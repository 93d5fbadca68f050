"""
Descriptor holder generator.

Runs the pipeline for one schema file:

1. Serialize the file description (serializer)
2. Split the payload into literal lines and parts (chunker)
3. Resolve dependency holders (binder)
4. Render the holder in the host language (backend)
5. Optionally collect source annotations (annotations)
"""

from __future__ import annotations

import logging

from .annotations import PACKAGE_FIELD_NUMBER, AnnotationCollector, AnnotationOrigin, no_annotation
from .backends import BACKENDS, HolderBackend, HolderContext
from .binder import bind_dependencies, qualify
from .chunker import LiteralChunks
from .config import GenerationOptions, RuntimeFlavor
from .model import EmittedArtifact, SchemaFile
from .name_resolver import HolderNameResolver
from .serializer import serialize_schema

logger = logging.getLogger(__name__)

ANNOTATION_SUFFIX = ".pb.meta"


class DescriptorGenerator:
    """Generates descriptor holders for schema files."""

    def __init__(self, options: GenerationOptions | None = None, resolver: HolderNameResolver | None = None):
        """
        Initialize the generator.

        Args:
            options: Generation options (defaults if omitted)
            resolver: Holder name resolver; the backend's own resolver if omitted
        """
        self.options = options or GenerationOptions()
        self.backend: HolderBackend = BACKENDS[self.options.language](self.options)
        self.resolver = resolver or self.backend.resolver

    def output_path(self, schema_file: SchemaFile) -> str:
        package, name = self.resolver.holder_identifier(schema_file)
        return self.backend.output_path(package, name)

    def generate(self, schema_file: SchemaFile) -> EmittedArtifact | None:
        """
        Generate the holder for a schema file.

        Args:
            schema_file: The schema file

        Returns:
            The generated artifact, or None when the file has no descriptor
            methods (lite runtime)
        """
        if not schema_file.has_descriptor_methods:
            logger.debug("Skipping %s: descriptor methods are disabled", schema_file.name)
            return None

        options = self.options
        package, name = self.resolver.holder_identifier(schema_file)
        path = self.backend.output_path(package, name)
        logger.debug("Generating %s for %s", path, schema_file.name)

        payload = serialize_schema(schema_file, options)
        chunks = LiteralChunks(payload, options.bytes_per_line, options.lines_per_part)
        dependencies = bind_dependencies(schema_file, self.resolver.holder_identifier, self.resolver.SEPARATOR)

        annotation_path = None
        if options.emit_annotations and options.annotation_side_file:
            annotation_path = path + ANNOTATION_SUFFIX

        context = HolderContext(
            source_file=schema_file.name,
            package=package,
            name=name,
            qualified_name=qualify(package, name, self.resolver.SEPARATOR),
            data_lines=self.backend.render_literal_lines(chunks),
            dependencies=self.backend.bind(dependencies, schema_file.name),
            eager=options.runtime_flavor == RuntimeFlavor.EAGER,
            empty_payload=not payload,
            version=self.backend.runtime_version,
            emit_version_string=options.emit_version_string,
            annotation_file=annotation_path.rsplit("/", 1)[-1] if annotation_path else "",
            package_origin=AnnotationOrigin(schema_file.name, (PACKAGE_FIELD_NUMBER,)),
            name_origin=AnnotationOrigin(schema_file.name),
        )

        if not options.emit_annotations:
            content = self.backend.render(context, no_annotation)
            return EmittedArtifact(path=path, content=content)

        collector = AnnotationCollector()
        content = collector.resolve(self.backend.render(context, collector.annotate))
        logger.debug("Recorded %d annotations for %s", len(collector.info.annotation), path)
        return EmittedArtifact(
            path=path,
            content=content,
            annotation_path=annotation_path,
            annotation_payload=collector.serialize(),
        )

    def generate_all(self, schema_files: list[SchemaFile]) -> list[EmittedArtifact]:
        """Generate holders for several schema files, skipping lite-runtime ones."""
        artifacts = []
        for schema_file in schema_files:
            artifact = self.generate(schema_file)
            if artifact is not None:
                artifacts.append(artifact)
        return artifacts


def generate(schema_file: SchemaFile, options: GenerationOptions | None = None) -> EmittedArtifact | None:
    """Generate the descriptor holder of one schema file."""
    return DescriptorGenerator(options).generate(schema_file)
