"""
Configuration for the descriptor holder generator.

Options mirror the switches of the protocol buffer compiler's shared
descriptor generator, plus the limits used to split the embedded payload.
"""

from __future__ import annotations

import re
from dataclasses import dataclass, field
from enum import Enum

# MAJOR.MINOR.PATCH followed by an optional suffix such as "-rc1"
_VERSION_PATTERN = re.compile(r"^(\d+)\.(\d+)\.(\d+)(\S*)$")

SUPPORTED_LANGUAGES = ("java", "python")


class ConfigError(ValueError):
    """Raised when generation options are inconsistent or out of range."""

    pass


class RuntimeFlavor(str, Enum):
    """How the target runtime links a file descriptor to its dependencies."""

    EAGER = "eager"  # Explicit dependency array and version check
    LAZY = "lazy"  # Runtime resolves dependencies itself


class OutputMode(str, Enum):
    """Output mode for file generation.

    Controls behavior when the output file already exists.
    """

    ERROR_IF_EXISTS = "error"  # Default: raise error if file exists
    FORCE = "force"  # Overwrite unconditionally
    GENERATED_ONLY = "generated"  # Overwrite only files carrying the generated marker


def _to_enum(enum_type: type[Enum], value, name: str):
    """Convert a configuration value to an enum member, raising ConfigError if it is not one."""
    try:
        return enum_type(value)
    except ValueError as e:
        choices = ", ".join(member.value for member in enum_type)
        raise ConfigError(f"Invalid {name}: {value!r} (expected one of {choices})") from e


@dataclass
class OutputConfig:
    """Configuration for output file handling.

    Attributes:
        mode: How to handle existing output files
        validate_before_write: Whether to validate code before writing
        atomic_write: Whether to use atomic file writes
    """

    mode: OutputMode = OutputMode.ERROR_IF_EXISTS
    validate_before_write: bool = True
    atomic_write: bool = True


@dataclass(frozen=True)
class RuntimeVersion:
    """A parsed runtime version, as passed to the generated version check."""

    major: int
    minor: int
    patch: int
    suffix: str = ""

    @staticmethod
    def parse(text: str) -> RuntimeVersion:
        match = _VERSION_PATTERN.match(text)
        if match is None:
            raise ConfigError(f"Invalid runtime version: {text!r} (expected MAJOR.MINOR.PATCH)")
        major, minor, patch, suffix = match.groups()
        return RuntimeVersion(int(major), int(minor), int(patch), suffix)

    def __str__(self) -> str:
        return f"{self.major}.{self.minor}.{self.patch}{self.suffix}"


@dataclass
class GenerationOptions:
    """Configuration options for descriptor holder generation."""

    # Host language of the generated holder ("java" or "python")
    language: str = "java"

    # Drop fields that vary between equivalent encodings (syntax, edition, features)
    strip_nonfunctional_payload: bool = False

    # Together with stripping, embed a zero-length payload
    empty_payload: bool = False

    # Record source annotations and emit the .pb.meta side artifact
    emit_annotations: bool = False

    # Write annotations to a .pb.meta file referenced from the holder
    # (off: annotations are only returned in-band)
    annotation_side_file: bool = True

    # Whether dependencies are wired explicitly or resolved by the runtime
    runtime_flavor: RuntimeFlavor = RuntimeFlavor.EAGER

    # Add the runtime version comment to the header
    emit_version_string: bool = True

    # Runtime version to generate against (empty = backend default)
    runtime_version: str = ""

    # Maximum number of payload bytes per literal line
    bytes_per_line: int = 40

    # Maximum number of literal lines per part
    lines_per_part: int = 400

    # Output configuration
    output: OutputConfig = field(default_factory=OutputConfig)

    def __post_init__(self):
        if isinstance(self.runtime_flavor, str) and not isinstance(self.runtime_flavor, RuntimeFlavor):
            self.runtime_flavor = _to_enum(RuntimeFlavor, self.runtime_flavor, "runtime_flavor")
        self.validate()

    def validate(self) -> None:
        """
        Check option consistency.

        Raises:
            ConfigError: If an option is out of range or options conflict
        """
        if self.language not in SUPPORTED_LANGUAGES:
            raise ConfigError(f"Language not supported: {self.language}")
        for name in ("bytes_per_line", "lines_per_part"):
            value = getattr(self, name)
            if isinstance(value, bool) or not isinstance(value, int) or value <= 0:
                raise ConfigError(f"{name} must be a positive integer, got {value!r}")
        if self.empty_payload and not self.strip_nonfunctional_payload:
            raise ConfigError("empty_payload requires strip_nonfunctional_payload")
        if self.runtime_version:
            RuntimeVersion.parse(self.runtime_version)

    @property
    def bytes_per_part(self) -> int:
        return self.bytes_per_line * self.lines_per_part

    @staticmethod
    def from_dict(d: dict) -> GenerationOptions:
        """Create options from a dictionary."""
        kwargs = {}
        for k, v in d.items():
            if k == "output" and isinstance(v, dict):
                kwargs["output"] = OutputConfig(
                    mode=_to_enum(OutputMode, v.get("mode", OutputMode.ERROR_IF_EXISTS), "output.mode"),
                    validate_before_write=v.get("validate_before_write", True),
                    atomic_write=v.get("atomic_write", True),
                )
            elif k == "runtime_flavor":
                kwargs[k] = _to_enum(RuntimeFlavor, v, k)
            elif k in GenerationOptions.__dataclass_fields__:
                kwargs[k] = v
        return GenerationOptions(**kwargs)

    def to_dict(self) -> dict:
        """Convert options to a dictionary."""
        return {
            "language": self.language,
            "strip_nonfunctional_payload": self.strip_nonfunctional_payload,
            "empty_payload": self.empty_payload,
            "emit_annotations": self.emit_annotations,
            "annotation_side_file": self.annotation_side_file,
            "runtime_flavor": self.runtime_flavor.value,
            "emit_version_string": self.emit_version_string,
            "runtime_version": self.runtime_version,
            "bytes_per_line": self.bytes_per_line,
            "lines_per_part": self.lines_per_part,
            "output": {
                "mode": self.output.mode.value,
                "validate_before_write": self.output.validate_before_write,
                "atomic_write": self.output.atomic_write,
            },
        }
