"""
Data model consumed and produced by the generator.

A SchemaFile is one compiled schema (a FileDescriptorProto) together with
the schema files it imports. The generator never mutates it.
"""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass, field

from google.protobuf import descriptor_pb2


class MissingDependencyError(LookupError):
    """Raised when a schema file imports a file that is not available."""

    pass


@dataclass(frozen=True, eq=False)
class SchemaFile:
    """A compiled schema file and its direct dependencies.

    Attributes:
        proto: The compiled description of the file
        dependencies: Imported schema files, in declaration order
    """

    proto: descriptor_pb2.FileDescriptorProto
    dependencies: tuple[SchemaFile, ...] = ()

    @property
    def name(self) -> str:
        return self.proto.name

    @property
    def package(self) -> str:
        return self.proto.package

    @property
    def type_names(self) -> list[str]:
        """Top-level message, enum and service names declared in the file."""
        names = [m.name for m in self.proto.message_type]
        names.extend(e.name for e in self.proto.enum_type)
        names.extend(s.name for s in self.proto.service)
        return names

    @property
    def has_descriptor_methods(self) -> bool:
        """Whether descriptor reflection is enabled (i.e. not a lite-runtime file)."""
        return self.proto.options.optimize_for != descriptor_pb2.FileOptions.LITE_RUNTIME

    @staticmethod
    def graph_from_protos(protos: Iterable[descriptor_pb2.FileDescriptorProto]) -> dict[str, SchemaFile]:
        """
        Build SchemaFiles for a set of protos, resolving imports by file name.

        Args:
            protos: Every file of the set, dependencies included

        Returns:
            Mapping from file name to SchemaFile

        Raises:
            MissingDependencyError: If an import is not part of the set
        """
        by_name = {proto.name: proto for proto in protos}
        built: dict[str, SchemaFile] = {}

        def build(name: str, importer: str | None) -> SchemaFile:
            if name in built:
                return built[name]
            proto = by_name.get(name)
            if proto is None:
                raise MissingDependencyError(f"{importer} imports {name}, which is not in the descriptor set")
            deps = tuple(build(dep, name) for dep in proto.dependency)
            built[name] = SchemaFile(proto, deps)
            return built[name]

        for name in by_name:
            build(name, None)
        return built

    @staticmethod
    def graph_from_descriptor_set(descriptor_set: descriptor_pb2.FileDescriptorSet) -> dict[str, SchemaFile]:
        """Build SchemaFiles for every file of a FileDescriptorSet."""
        return SchemaFile.graph_from_protos(descriptor_set.file)


@dataclass(frozen=True)
class Dependency:
    """A dependency resolved to its file name and holder identifier."""

    file_name: str
    identifier: str
    # Position in the importing file's dependency list
    index: int = 0


@dataclass(frozen=True)
class EmittedArtifact:
    """Generated output for one schema file.

    Attributes:
        path: Output path of the generated source, relative to the output root
        content: Generated source text
        annotation_path: Path of the annotation side artifact, if any
        annotation_payload: Serialized GeneratedCodeInfo, if any
    """

    path: str
    content: str
    annotation_path: str | None = None
    annotation_payload: bytes | None = field(default=None, repr=False)

    @property
    def generated_code_info(self) -> descriptor_pb2.GeneratedCodeInfo | None:
        """Parse the annotation payload back into a GeneratedCodeInfo."""
        if self.annotation_payload is None:
            return None
        return descriptor_pb2.GeneratedCodeInfo.FromString(self.annotation_payload)
