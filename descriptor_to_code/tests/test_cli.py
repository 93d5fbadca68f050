"""
Tests for the descriptor_to_code command.
"""

import json

import pytest
from click.testing import CliRunner
from conftest import ORDER_FILE
from google.protobuf import descriptor_pb2

from descriptor_to_code.descriptor_to_code import descriptor_to_code


@pytest.fixture
def descriptor_set_path(tmp_path, schema_graph):
    descriptor_set = descriptor_pb2.FileDescriptorSet()
    for schema in schema_graph.values():
        descriptor_set.file.add().CopyFrom(schema.proto)
    path = tmp_path / "demo.binpb"
    path.write_bytes(descriptor_set.SerializeToString())
    return path


def test_generates_every_file(tmp_path, descriptor_set_path):
    out = tmp_path / "out"
    result = CliRunner().invoke(descriptor_to_code, [str(descriptor_set_path), str(out)])

    assert result.exit_code == 0, result.output
    assert sorted(result.output.split()) == [
        "com/example/shop/OrderOuterClass.java",
        "descdemo/common/BaseOuterClass.java",
        "descdemo/common/Time.java",
    ]
    assert "descdemo.common.Time.getDescriptor()" in (out / "com/example/shop/OrderOuterClass.java").read_text()


def test_selected_file_python_with_annotations(tmp_path, descriptor_set_path):
    out = tmp_path / "out"
    args = ["-f", ORDER_FILE, "--language", "python", "--annotate", str(descriptor_set_path), str(out)]
    result = CliRunner().invoke(descriptor_to_code, args)

    assert result.exit_code == 0, result.output
    assert result.output.split() == [
        "descdemo/shop/order_descriptor.py",
        "descdemo/shop/order_descriptor.py.pb.meta",
    ]
    info = descriptor_pb2.GeneratedCodeInfo.FromString((out / "descdemo/shop/order_descriptor.py.pb.meta").read_bytes())
    assert len(info.annotation) == 4


def test_config_file_with_flag_override(tmp_path, descriptor_set_path):
    config = tmp_path / "config.json"
    config.write_text(json.dumps({"language": "python", "runtime_flavor": "lazy", "emit_version_string": False}))
    out = tmp_path / "out"

    args = ["--config", str(config), "--language", "java", "-f", ORDER_FILE, str(descriptor_set_path), str(out)]
    result = CliRunner().invoke(descriptor_to_code, args)

    assert result.exit_code == 0, result.output
    content = (out / "com/example/shop/OrderOuterClass.java").read_text()
    assert "new com.google.protobuf.Descriptors.FileDescriptor[] {});" in content
    assert "getDescriptor()," not in content
    assert "Protobuf Java Version" not in content


def test_existing_output_requires_mode(tmp_path, descriptor_set_path):
    out = tmp_path / "out"
    args = ["-f", ORDER_FILE, str(descriptor_set_path), str(out)]
    runner = CliRunner()
    assert runner.invoke(descriptor_to_code, args).exit_code == 0

    again = runner.invoke(descriptor_to_code, args)
    assert again.exit_code == 1
    assert "already exists" in again.output

    regenerated = runner.invoke(descriptor_to_code, ["--mode", "generated", *args])
    assert regenerated.exit_code == 0, regenerated.output


def test_unknown_file(tmp_path, descriptor_set_path):
    result = CliRunner().invoke(descriptor_to_code, ["-f", "nope.proto", str(descriptor_set_path), str(tmp_path / "out")])

    assert result.exit_code == 1
    assert "nope.proto" in result.output


def test_invalid_options(tmp_path, descriptor_set_path):
    result = CliRunner().invoke(descriptor_to_code, ["--empty-payload", str(descriptor_set_path), str(tmp_path / "out")])

    assert result.exit_code == 1
    assert "empty_payload requires strip_nonfunctional_payload" in result.output


def test_incomplete_descriptor_set(tmp_path, schema_graph):
    descriptor_set = descriptor_pb2.FileDescriptorSet()
    descriptor_set.file.add().CopyFrom(schema_graph[ORDER_FILE].proto)
    path = tmp_path / "partial.binpb"
    path.write_bytes(descriptor_set.SerializeToString())

    result = CliRunner().invoke(descriptor_to_code, [str(path), str(tmp_path / "out")])

    assert result.exit_code == 1
    assert "not in the descriptor set" in result.output


def test_invalid_mode_in_config_file(tmp_path, descriptor_set_path):
    config = tmp_path / "config.json"
    config.write_text(json.dumps({"output": {"mode": "sometimes"}}))

    result = CliRunner().invoke(descriptor_to_code, ["--config", str(config), str(descriptor_set_path), str(tmp_path / "out")])

    assert result.exit_code == 1
    assert "Invalid output.mode: 'sometimes'" in result.output
