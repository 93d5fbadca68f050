"""
Tests for the byte serializer.
"""

from __future__ import annotations

from google.protobuf import descriptor_pb2

from descriptor_to_code.pipeline import GenerationOptions, SchemaFile, serialize_schema
from descriptor_to_code.pipeline.serializer import strip_nonfunctional_fields

STRIP = GenerationOptions(strip_nonfunctional_payload=True)


def test_full_payload_parses_back(make_schema):
    schema = make_schema("foo/bar.proto", package="foo", messages=("Bar", "Baz"))

    payload = serialize_schema(schema, GenerationOptions())

    parsed = descriptor_pb2.FileDescriptorProto.FromString(payload)
    assert parsed == schema.proto


def test_source_code_info_is_never_embedded(make_proto):
    proto = make_proto("foo.proto", messages=("Foo",))
    proto.source_code_info.location.add(path=[4, 0], span=[1, 0, 10])

    payload = serialize_schema(SchemaFile(proto), GenerationOptions())

    assert not descriptor_pb2.FileDescriptorProto.FromString(payload).HasField("source_code_info")
    assert proto.HasField("source_code_info")


def test_input_is_not_mutated(make_proto):
    proto = make_proto("foo.proto", messages=("Foo",), syntax="proto3")
    before = proto.SerializeToString(deterministic=True)

    serialize_schema(SchemaFile(proto), STRIP)

    assert proto.SerializeToString(deterministic=True) == before


def test_strip_makes_syntax_variants_identical(make_proto):
    proto2 = make_proto("foo.proto", package="foo", messages=("Foo",), syntax="proto2")
    legacy = make_proto("foo.proto", package="foo", messages=("Foo",), syntax="")

    assert serialize_schema(SchemaFile(proto2), GenerationOptions()) != serialize_schema(SchemaFile(legacy), GenerationOptions())
    assert serialize_schema(SchemaFile(proto2), STRIP) == serialize_schema(SchemaFile(legacy), STRIP)


def test_strip_removes_features_and_empty_options(make_proto):
    with_features = make_proto("foo.proto", messages=("Foo",), syntax="editions")
    with_features.edition = descriptor_pb2.EDITION_2023
    with_features.options.features.field_presence = descriptor_pb2.FeatureSet.IMPLICIT
    with_features.message_type[0].field[0].options.features.field_presence = descriptor_pb2.FeatureSet.EXPLICIT
    with_features.message_type[0].options.deprecated = True

    plain = make_proto("foo.proto", messages=("Foo",), syntax="")
    plain.message_type[0].options.deprecated = True

    assert serialize_schema(SchemaFile(with_features), STRIP) == serialize_schema(SchemaFile(plain), STRIP)


def test_strip_keeps_functional_options(make_proto):
    proto = make_proto("foo.proto", messages=("Foo",), java_package="com.example", java_multiple_files=True)
    strip_nonfunctional_fields(proto)

    assert proto.options.java_package == "com.example"
    assert proto.options.java_multiple_files
    assert not proto.HasField("syntax")


def test_strip_visits_nested_types_and_services(make_proto):
    proto = make_proto("foo.proto", messages=("Outer",))
    nested = proto.message_type[0].nested_type.add(name="Inner")
    nested.options.features.field_presence = descriptor_pb2.FeatureSet.EXPLICIT
    enum = nested.enum_type.add(name="Kind")
    enum.value.add(name="KIND_UNSPECIFIED", number=0).options.features.enum_type = descriptor_pb2.FeatureSet.OPEN
    service = proto.service.add(name="Svc")
    service.method.add(name="Call", input_type=".Outer", output_type=".Outer").options.features.field_presence = (
        descriptor_pb2.FeatureSet.IMPLICIT
    )

    extension_range = nested.extension_range.add(start=100, end=200)
    extension_range.options.features.field_presence = descriptor_pb2.FeatureSet.EXPLICIT

    strip_nonfunctional_fields(proto)

    assert not nested.HasField("options")
    assert not enum.value[0].HasField("options")
    assert not service.method[0].HasField("options")
    assert not extension_range.HasField("options")


def test_strip_ignores_extension_range_features(make_proto):
    overridden = make_proto("foo.proto", messages=("Foo",), syntax="editions")
    overridden.message_type[0].extension_range.add(start=100, end=200).options.features.field_presence = (
        descriptor_pb2.FeatureSet.EXPLICIT
    )
    plain = make_proto("foo.proto", messages=("Foo",), syntax="editions")
    plain.message_type[0].extension_range.add(start=100, end=200)

    assert serialize_schema(SchemaFile(overridden), STRIP) == serialize_schema(SchemaFile(plain), STRIP)


def test_empty_payload(make_schema):
    schema = make_schema("foo.proto", messages=("Foo",))
    options = GenerationOptions(strip_nonfunctional_payload=True, empty_payload=True)

    assert serialize_schema(schema, options) == b""


def test_serialization_is_deterministic(make_schema):
    schema = make_schema("foo.proto", messages=tuple(f"M{i}" for i in range(50)))

    assert serialize_schema(schema, GenerationOptions()) == serialize_schema(schema, GenerationOptions())
