"""
Dependency binder.

Maps the direct dependencies of a schema file to the fully qualified
identifiers of their holders, preserving declaration order.
"""

from __future__ import annotations

from collections.abc import Callable

from .model import Dependency, SchemaFile


def qualify(package: str, name: str, separator: str = ".") -> str:
    """Join package and name, omitting an empty package."""
    if not package:
        return name
    return f"{package}{separator}{name}"


def bind_dependencies(
    schema_file: SchemaFile,
    holder_identifier: Callable[[SchemaFile], tuple[str, str]],
    separator: str = ".",
) -> list[Dependency]:
    """
    Resolve the holder identifier of each direct dependency.

    The result has exactly one entry per dependency, in the order the
    schema file declares them. Transitive dependencies are not visited.

    Args:
        schema_file: The importing schema file
        holder_identifier: Returns the (package, name) of a file's holder
        separator: Namespace separator of the host language

    Returns:
        The bound dependencies
    """
    declared = list(schema_file.proto.dependency)
    bound = []
    for position, dependency in enumerate(schema_file.dependencies):
        package, name = holder_identifier(dependency)
        index = declared.index(dependency.name) if dependency.name in declared else position
        bound.append(Dependency(dependency.name, qualify(package, name, separator), index))
    return bound
