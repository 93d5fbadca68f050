"""
protoc plugin entry point (protoc-gen-descriptor).

Usage:
    protoc --plugin=protoc-gen-descriptor --descriptor_out=lang=python,annotate_code:out foo.proto

Parameters are comma separated: ``lang=java|python``, ``annotate_code``,
``strip_nonfunctional_codegen``, ``empty_payload``, ``lazy_runtime``,
``no_version_string``, ``runtime_version=X.Y.Z``, ``bytes_per_line=N`` and
``lines_per_part=N``.
"""

from __future__ import annotations

import logging
import sys

from google.protobuf import descriptor_pb2
from google.protobuf.compiler import plugin_pb2

from .pipeline import ConfigError, DescriptorGenerator, GenerationOptions, MissingDependencyError, SchemaFile

logger = logging.getLogger(__name__)

# Parameters that are bare flags, mapped to the option they enable
_FLAG_PARAMETERS = {
    "annotate_code": ("emit_annotations", True),
    "strip_nonfunctional_codegen": ("strip_nonfunctional_payload", True),
    "empty_payload": ("empty_payload", True),
    "lazy_runtime": ("runtime_flavor", "lazy"),
    "no_version_string": ("emit_version_string", False),
}

# Parameters that take a value, mapped to the option they set
_VALUE_PARAMETERS = {
    "lang": ("language", str),
    "runtime_version": ("runtime_version", str),
    "bytes_per_line": ("bytes_per_line", int),
    "lines_per_part": ("lines_per_part", int),
}


def parse_parameter(parameter: str) -> GenerationOptions:
    """
    Parse the plugin parameter string into generation options.

    Args:
        parameter: The comma separated parameter passed by protoc

    Returns:
        Generation options

    Raises:
        ConfigError: If a parameter is unknown or malformed
    """
    # A response file cannot carry the binary .pb.meta payload, so annotations
    # only travel in-band
    settings: dict = {"annotation_side_file": False}
    for item in filter(None, (part.strip() for part in parameter.split(","))):
        key, has_value, value = item.partition("=")
        if not has_value and key in _FLAG_PARAMETERS:
            option, flag_value = _FLAG_PARAMETERS[key]
            settings[option] = flag_value
        elif has_value and key in _VALUE_PARAMETERS:
            option, convert = _VALUE_PARAMETERS[key]
            try:
                settings[option] = convert(value)
            except ValueError as e:
                raise ConfigError(f"Invalid value for {key}: {value!r}") from e
        else:
            raise ConfigError(f"Unknown parameter: {item}")
    return GenerationOptions.from_dict(settings)


def run(request: plugin_pb2.CodeGeneratorRequest) -> plugin_pb2.CodeGeneratorResponse:
    """
    Generate holders for every file protoc asks for.

    Errors are reported in the response, as the plugin protocol requires,
    and no files are returned in that case.

    Args:
        request: The request read from protoc

    Returns:
        The response to send back
    """
    response = plugin_pb2.CodeGeneratorResponse()
    response.supported_features = (
        plugin_pb2.CodeGeneratorResponse.FEATURE_PROTO3_OPTIONAL | plugin_pb2.CodeGeneratorResponse.FEATURE_SUPPORTS_EDITIONS
    )
    response.minimum_edition = descriptor_pb2.EDITION_PROTO2
    response.maximum_edition = descriptor_pb2.EDITION_2023

    try:
        options = parse_parameter(request.parameter)
        graph = SchemaFile.graph_from_protos(request.proto_file)
        generator = DescriptorGenerator(options)
        for name in request.file_to_generate:
            artifact = generator.generate(graph[name])
            if artifact is None:
                continue
            generated = response.file.add(name=artifact.path, content=artifact.content)
            if artifact.annotation_payload is not None:
                generated.generated_code_info.CopyFrom(artifact.generated_code_info)
    except (ConfigError, MissingDependencyError) as e:
        logger.debug("Generation failed: %s", e)
        del response.file[:]
        response.error = str(e)
    return response


def main() -> None:
    logging.basicConfig(level=logging.WARNING, stream=sys.stderr)
    request = plugin_pb2.CodeGeneratorRequest.FromString(sys.stdin.buffer.read())
    response = run(request)
    sys.stdout.buffer.write(response.SerializeToString())


if __name__ == "__main__":
    main()
