from collections.abc import Callable

import pytest
from google.protobuf import descriptor_pb2

from descriptor_to_code.pipeline import SchemaFile

FieldDescriptorProto = descriptor_pb2.FieldDescriptorProto

BASE_FILE = "descdemo/common/base.proto"
TIME_FILE = "descdemo/common/time.proto"
ORDER_FILE = "descdemo/shop/order.proto"


@pytest.fixture
def make_proto() -> Callable[..., descriptor_pb2.FileDescriptorProto]:
    def _make_proto(
        name: str,
        package: str = "",
        messages: tuple[str, ...] = (),
        dependencies: tuple[str, ...] = (),
        syntax: str = "proto3",
        **file_options: object,
    ) -> descriptor_pb2.FileDescriptorProto:
        proto = descriptor_pb2.FileDescriptorProto(name=name, package=package)
        if syntax:
            proto.syntax = syntax
        proto.dependency.extend(dependencies)
        for message_name in messages:
            message = proto.message_type.add(name=message_name)
            message.field.add(
                name="id",
                number=1,
                type=FieldDescriptorProto.TYPE_INT64,
                label=FieldDescriptorProto.LABEL_OPTIONAL,
                json_name="id",
            )
        for key, value in file_options.items():
            setattr(proto.options, key, value)
        return proto

    return _make_proto


@pytest.fixture
def make_schema(make_proto) -> Callable[..., SchemaFile]:
    """Build a SchemaFile without dependencies."""

    def _make_schema(name: str = "simple.proto", **kwargs: object) -> SchemaFile:
        return SchemaFile(make_proto(name, **kwargs))

    return _make_schema


@pytest.fixture
def schema_graph(make_proto) -> dict[str, SchemaFile]:
    """Three files: order.proto imports base.proto and time.proto, in that order."""
    base = make_proto(BASE_FILE, package="descdemo.common", messages=("Base",))
    time = make_proto(TIME_FILE, package="descdemo.common", messages=("Stamp",))
    order = make_proto(
        ORDER_FILE,
        package="descdemo.shop",
        messages=("Order",),
        dependencies=(BASE_FILE, TIME_FILE),
        java_package="com.example.shop",
    )
    order.message_type[0].field.add(
        name="base",
        number=2,
        type=FieldDescriptorProto.TYPE_MESSAGE,
        type_name=".descdemo.common.Base",
        label=FieldDescriptorProto.LABEL_OPTIONAL,
        json_name="base",
    )
    order.message_type[0].field.add(
        name="created",
        number=3,
        type=FieldDescriptorProto.TYPE_MESSAGE,
        type_name=".descdemo.common.Stamp",
        label=FieldDescriptorProto.LABEL_OPTIONAL,
        json_name="created",
    )
    return SchemaFile.graph_from_protos([order, base, time])
