"""
Name resolver for descriptor holders.

Computes the (package, name) pair of the generated holder for a schema
file, and maps packages to output directories.
"""

from __future__ import annotations

from abc import ABC, abstractmethod

from google.protobuf import descriptor_pb2

from ..utils import file_stem, strip_proto, to_module_name, underscores_to_camel_case
from .model import SchemaFile


def package_to_directory(package: str) -> str:
    """Convert a dotted package name to a directory path ending in '/'.

    Examples:
        "com.example.foo" -> "com/example/foo/"
        "" -> ""
    """
    if not package:
        return ""
    return package.replace(".", "/") + "/"


def _declared_type_names(file_proto: descriptor_pb2.FileDescriptorProto) -> set[str]:
    """Names of every message, enum and service in the file, nested ones included."""
    names = {e.name for e in file_proto.enum_type}
    names.update(s.name for s in file_proto.service)
    pending = list(file_proto.message_type)
    while pending:
        msg = pending.pop()
        names.add(msg.name)
        names.update(e.name for e in msg.enum_type)
        pending.extend(msg.nested_type)
    return names


class HolderNameResolver(ABC):
    """Resolves the holder identifier of a schema file for one host language."""

    # Separator between package and name in a qualified identifier
    SEPARATOR: str = "."

    @abstractmethod
    def holder_package(self, schema_file: SchemaFile) -> str:
        """Package (namespace) the holder is generated in."""

    @abstractmethod
    def holder_name(self, schema_file: SchemaFile) -> str:
        """Unqualified name of the holder."""

    def holder_identifier(self, schema_file: SchemaFile) -> tuple[str, str]:
        """
        Resolve the holder of a schema file.

        Args:
            schema_file: The schema file

        Returns:
            (package, name) of the generated holder
        """
        return self.holder_package(schema_file), self.holder_name(schema_file)


class JavaNameResolver(HolderNameResolver):
    """Holder names as chosen by the Java generator.

    The package is ``java_package`` when set, otherwise the schema package.
    The class is ``java_outer_classname`` when set, otherwise the camel-cased
    file name, suffixed with ``OuterClass`` when it collides with a type
    declared in the file.
    """

    def holder_package(self, schema_file: SchemaFile) -> str:
        options = schema_file.proto.options
        if options.HasField("java_package"):
            return options.java_package
        return schema_file.package

    def holder_name(self, schema_file: SchemaFile) -> str:
        options = schema_file.proto.options
        if options.HasField("java_outer_classname"):
            return options.java_outer_classname
        name = underscores_to_camel_case(file_stem(schema_file.name))
        if name in _declared_type_names(schema_file.proto):
            name += "OuterClass"
        return name


class PythonNameResolver(HolderNameResolver):
    """Holder modules live next to the schema file: foo/bar.proto -> foo.bar_descriptor."""

    MODULE_SUFFIX = "_descriptor"

    def holder_package(self, schema_file: SchemaFile) -> str:
        path = strip_proto(schema_file.name)
        if "/" not in path:
            return ""
        return ".".join(to_module_name(segment) for segment in path.rsplit("/", 1)[0].split("/"))

    def holder_name(self, schema_file: SchemaFile) -> str:
        return to_module_name(file_stem(schema_file.name)) + self.MODULE_SUFFIX

