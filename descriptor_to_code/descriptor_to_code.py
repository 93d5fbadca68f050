import json
import logging
from pathlib import Path

import click
from google.protobuf import descriptor_pb2
from google.protobuf.message import DecodeError

from . import __version__
from .pipeline import (
    ArtifactExistsError,
    ConfigError,
    DescriptorGenerator,
    GenerationOptions,
    MissingDependencyError,
    SchemaFile,
    ValidationError,
    write_artifact,
)

logger = logging.getLogger(__name__)


def load_descriptor_set(path: Path) -> descriptor_pb2.FileDescriptorSet:
    """Read a serialized FileDescriptorSet (protoc --descriptor_set_out)."""
    descriptor_set = descriptor_pb2.FileDescriptorSet()
    descriptor_set.ParseFromString(path.read_bytes())
    return descriptor_set


@click.command()
@click.version_option(__version__)
@click.option("--file", "-f", "files", multiple=True, help="Schema file to generate (repeatable, default: all)")
@click.option("--config", "-c", default=None, type=click.Path(exists=True, resolve_path=True))
@click.option("--language", "-l", default=None, type=click.Choice(["java", "python"]))
@click.option("--annotate", is_flag=True, default=False, help="Emit .pb.meta annotation files")
@click.option("--strip", is_flag=True, default=False, help="Strip non-functional fields from the payload")
@click.option("--empty-payload", is_flag=True, default=False, help="With --strip, embed an empty payload")
@click.option("--runtime-flavor", default=None, type=click.Choice(["eager", "lazy"]))
@click.option("--no-version-string", is_flag=True, default=False, help="Omit the runtime version comment")
@click.option("--mode", "-m", default=None, type=click.Choice(["error", "force", "generated"]))
@click.option("--verbose", "-v", is_flag=True, default=False)
@click.argument("descriptor_set", type=click.Path(exists=True, dir_okay=False, resolve_path=True))
@click.argument("output", type=click.Path(file_okay=False, resolve_path=True))
def descriptor_to_code(
    files,
    config,
    language,
    annotate,
    strip,
    empty_payload,
    runtime_flavor,
    no_version_string,
    mode,
    verbose,
    descriptor_set,
    output,
):
    """Generate descriptor holders for the files of DESCRIPTOR_SET into OUTPUT."""
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )

    if config is not None:
        with open(config) as f:
            settings = json.load(f)
    else:
        settings = {}

    # CLI flags override the config file
    if language is not None:
        settings["language"] = language
    if annotate:
        settings["emit_annotations"] = True
    if strip:
        settings["strip_nonfunctional_payload"] = True
    if empty_payload:
        settings["empty_payload"] = True
    if runtime_flavor is not None:
        settings["runtime_flavor"] = runtime_flavor
    if no_version_string:
        settings["emit_version_string"] = False
    if mode is not None:
        settings.setdefault("output", {})["mode"] = mode

    try:
        options = GenerationOptions.from_dict(settings)
        graph = SchemaFile.graph_from_descriptor_set(load_descriptor_set(Path(descriptor_set)))
    except (ConfigError, MissingDependencyError, DecodeError) as e:
        raise click.ClickException(str(e)) from e

    names = list(files) or list(graph)
    missing = [name for name in names if name not in graph]
    if missing:
        raise click.ClickException(f"Not in the descriptor set: {', '.join(missing)}")

    generator = DescriptorGenerator(options)
    artifacts = generator.generate_all([graph[name] for name in names])

    output_dir = Path(output)
    try:
        for artifact in artifacts:
            for path in write_artifact(artifact, output_dir, options.output):
                click.echo(str(path.relative_to(output_dir)))
    except (ArtifactExistsError, ValidationError) as e:
        raise click.ClickException(str(e)) from e
    logger.debug("Generated %d of %d files", len(artifacts), len(names))
