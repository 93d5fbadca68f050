"""
Byte serializer for embedded file descriptors.

Produces the canonical wire form of a schema file, optionally stripped of
fields that differ between semantically equivalent encodings.
"""

from __future__ import annotations

from collections.abc import Iterator

from google.protobuf import descriptor_pb2, message

from .config import GenerationOptions
from .model import SchemaFile


def strip_nonfunctional_fields(file_proto: descriptor_pb2.FileDescriptorProto) -> None:
    """
    Clear syntax markers and feature overrides in place.

    Options messages that end up empty are removed so that an absent
    options field and an empty one serialize identically.

    Args:
        file_proto: The proto to strip (modified in place)
    """
    file_proto.ClearField("syntax")
    file_proto.ClearField("edition")
    for owner in _option_owners(file_proto):
        if not owner.HasField("options"):
            continue
        owner.options.ClearField("features")
        if owner.options.ByteSize() == 0:
            owner.ClearField("options")


def _option_owners(file_proto: descriptor_pb2.FileDescriptorProto) -> Iterator[message.Message]:
    """Yield every element of the file that can carry an options message."""
    yield file_proto
    for enum in file_proto.enum_type:
        yield from _enum_owners(enum)
    for msg in file_proto.message_type:
        yield from _message_owners(msg)
    yield from file_proto.extension
    for service in file_proto.service:
        yield service
        yield from service.method


def _message_owners(msg: descriptor_pb2.DescriptorProto) -> Iterator[message.Message]:
    yield msg
    yield from msg.field
    yield from msg.extension
    yield from msg.oneof_decl
    yield from msg.extension_range
    for enum in msg.enum_type:
        yield from _enum_owners(enum)
    for nested in msg.nested_type:
        yield from _message_owners(nested)


def _enum_owners(enum: descriptor_pb2.EnumDescriptorProto) -> Iterator[message.Message]:
    yield enum
    yield from enum.value


def serialize_schema(schema_file: SchemaFile, options: GenerationOptions) -> bytes:
    """
    Serialize a schema file for embedding.

    Source-retention data (source code info) is never embedded. With
    ``strip_nonfunctional_payload`` the non-functional fields are cleared
    first, and ``empty_payload`` replaces the payload with no bytes at all.

    Args:
        schema_file: The schema file to serialize
        options: Generation options

    Returns:
        The serialized FileDescriptorProto
    """
    if options.strip_nonfunctional_payload and options.empty_payload:
        return b""

    file_proto = descriptor_pb2.FileDescriptorProto()
    file_proto.CopyFrom(schema_file.proto)
    file_proto.ClearField("source_code_info")
    if options.strip_nonfunctional_payload:
        strip_nonfunctional_fields(file_proto)
    return file_proto.SerializeToString(deterministic=True)
