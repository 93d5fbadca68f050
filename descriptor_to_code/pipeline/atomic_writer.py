"""
Atomic file writer for generated holders.

Ensures that file writes are atomic to prevent data corruption
from interrupted operations, and that hand-written files are never
overwritten by accident.
"""

from __future__ import annotations

import ast
import logging
import tempfile
from collections.abc import Callable
from pathlib import Path

from .config import OutputConfig, OutputMode
from .model import EmittedArtifact

logger = logging.getLogger(__name__)

# Marker carried by every generated holder header
GENERATED_MARKER = "DO NOT EDIT!"

# Number of bytes inspected when looking for the marker
_MARKER_SCAN_BYTES = 512


class ArtifactExistsError(FileExistsError):
    """Raised when an output file exists and the output mode forbids overwriting it."""

    pass


class ValidationError(ValueError):
    """Raised when generated content fails validation before being written."""

    pass


def is_generated_file(path: Path) -> bool:
    """Check whether an existing file carries the generated-code marker."""
    with open(path, "rb") as f:
        head = f.read(_MARKER_SCAN_BYTES)
    return GENERATED_MARKER.encode("ascii") in head


class AtomicWriter:
    """Handles atomic file writes with validation.

    Uses a two-phase commit approach:
    1. Validate the content
    2. Write to a temporary file in the same directory
    3. Atomically replace the target file

    This ensures that an interrupted write operation never leaves
    the target file in an incomplete state.
    """

    def __init__(
        self,
        validate_python: Callable[[str], None] | None = None,
        validate_java: Callable[[str], None] | None = None,
    ):
        """Initialize the atomic writer.

        Args:
            validate_python: Optional validation function for Python code
            validate_java: Optional validation function for Java code
        """
        self._validate_python = validate_python or self._default_validate_python
        self._validate_java = validate_java or self._default_validate_java

    def write(self, path: Path, content: str | bytes, validate: bool = True, atomic: bool = True) -> None:
        """Write content to file, atomically unless told otherwise.

        Args:
            path: Target file path
            content: Text, or bytes for binary side artifacts
            validate: Whether to validate text before finalizing
            atomic: Whether to go through a temporary file and rename

        Raises:
            ValidationError: If validation fails
            OSError: If file operations fail
        """
        # Ensure parent directory exists
        path.parent.mkdir(parents=True, exist_ok=True)

        if validate and isinstance(content, str):
            self._validate_content(content, path.suffix)

        if not atomic:
            if isinstance(content, bytes):
                path.write_bytes(content)
            else:
                path.write_text(content, encoding="utf-8", newline="")
            return

        # Same directory ensures atomic rename on the same filesystem
        temp_fd, temp_path_str = tempfile.mkstemp(
            dir=path.parent,
            prefix=f".{path.name}.",
            suffix=".tmp",
        )
        temp_path = Path(temp_path_str)

        try:
            if isinstance(content, bytes):
                with open(temp_fd, "wb") as f:
                    f.write(content)
            else:
                with open(temp_fd, "w", encoding="utf-8", newline="") as f:
                    f.write(content)
            temp_path.replace(path)
        except BaseException:
            temp_path.unlink(missing_ok=True)
            raise

    def check_overwrite(self, path: Path, mode: OutputMode, require_marker: bool = True) -> None:
        """
        Enforce the output mode for an existing target.

        Args:
            path: Target file path
            mode: Output mode
            require_marker: In generated mode, whether the existing file must
                carry the generated marker (binary side artifacts cannot)

        Raises:
            ArtifactExistsError: If the file exists and may not be replaced
        """
        if not path.exists() or mode == OutputMode.FORCE:
            return
        if mode == OutputMode.GENERATED_ONLY and (not require_marker or is_generated_file(path)):
            return
        raise ArtifactExistsError(
            f"Output file already exists: {path}. Use force mode to overwrite "
            "or generated mode to replace previously generated files."
        )

    def _validate_content(self, content: str, suffix: str) -> None:
        """Validate content based on the file extension."""
        if suffix == ".py":
            self._validate_python(content)
        elif suffix == ".java":
            self._validate_java(content)

    def _default_validate_python(self, content: str) -> None:
        """Default Python validation: the holder must parse."""
        try:
            ast.parse(content)
        except SyntaxError as e:
            raise ValidationError(f"Generated Python code is not valid: {e}") from e

    def _default_validate_java(self, content: str) -> None:
        """Default Java validation.

        Basic structural checks only. Braces inside string literals are ignored.
        """
        if "class " not in content:
            raise ValidationError("Generated Java code has no type declaration")

        depth = 0
        in_string = False
        escaped = False
        for ch in content:
            if in_string:
                if escaped:
                    escaped = False
                elif ch == "\\":
                    escaped = True
                elif ch == '"':
                    in_string = False
            elif ch == '"':
                in_string = True
            elif ch == "{":
                depth += 1
            elif ch == "}":
                depth -= 1
                if depth < 0:
                    break
        if depth != 0:
            raise ValidationError("Generated Java code has unbalanced braces")


def write_artifact(
    artifact: EmittedArtifact,
    output_dir: Path,
    output: OutputConfig | None = None,
    writer: AtomicWriter | None = None,
) -> list[Path]:
    """
    Write a generated holder and its annotation file under output_dir.

    Either every file is checked for overwrite permission before anything is
    written, or nothing is written.

    Args:
        artifact: The artifact to write
        output_dir: Output root directory
        output: Output configuration (defaults if omitted)
        writer: Writer to use (a default AtomicWriter if omitted)

    Returns:
        Paths written

    Raises:
        ArtifactExistsError: If an existing file may not be replaced
        ValidationError: If the generated source fails validation
    """
    output = output or OutputConfig()
    writer = writer or AtomicWriter()

    files: list[tuple[Path, str | bytes]] = [(output_dir / artifact.path, artifact.content)]
    if artifact.annotation_path is not None and artifact.annotation_payload is not None:
        files.append((output_dir / artifact.annotation_path, artifact.annotation_payload))

    for path, content in files:
        writer.check_overwrite(path, output.mode, require_marker=isinstance(content, str))

    written = []
    for path, content in files:
        writer.write(path, content, validate=output.validate_before_write, atomic=output.atomic_write)
        logger.info("Wrote %s", path)
        written.append(path)
    return written

