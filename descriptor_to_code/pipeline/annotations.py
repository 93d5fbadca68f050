"""
Annotation collector.

Records which spans of the generated source come from which element of the
schema file, in the GeneratedCodeInfo format that IDE tooling reads from
``.pb.meta`` files.

Templates mark annotated text with the ``annotate`` filter. The collector
wraps that text in sentinel characters, and ``resolve`` strips them from the
rendered output while recording byte offsets. When annotations are off the
filter is ``no_annotation`` and no collector exists at all.
"""

from __future__ import annotations

import re
from dataclasses import dataclass

from google.protobuf import descriptor_pb2

# Sentinels never survive escaping, so they cannot occur in rendered literals
_BEGIN = "\x02"
_SEPARATOR = "\x1f"
_END = "\x03"
_MARK_PATTERN = re.compile(f"{_BEGIN}(\\d+){_SEPARATOR}([^{_END}]*){_END}")

# FileDescriptorProto field numbers used in annotation paths
PACKAGE_FIELD_NUMBER = descriptor_pb2.FileDescriptorProto.PACKAGE_FIELD_NUMBER
DEPENDENCY_FIELD_NUMBER = descriptor_pb2.FileDescriptorProto.DEPENDENCY_FIELD_NUMBER


@dataclass(frozen=True)
class AnnotationOrigin:
    """Where an emitted identifier comes from in the schema."""

    source_file: str
    path: tuple[int, ...] = ()


def no_annotation(text: str, origin: AnnotationOrigin | None = None) -> str:
    """Template filter used when annotations are disabled."""
    return text


class AnnotationCollector:
    """Collects emitted-span to schema-location mappings."""

    def __init__(self):
        self.info = descriptor_pb2.GeneratedCodeInfo()
        self._origins: list[AnnotationOrigin] = []

    def annotate(self, text: str, origin: AnnotationOrigin) -> str:
        """Mark text for annotation; used as the ``annotate`` template filter."""
        self._origins.append(origin)
        return f"{_BEGIN}{len(self._origins) - 1}{_SEPARATOR}{text}{_END}"

    def resolve(self, rendered: str) -> str:
        """
        Remove the markers from rendered output and record the spans.

        Offsets are byte offsets into the UTF-8 encoded output.

        Args:
            rendered: Template output containing markers

        Returns:
            The output without markers
        """
        pieces: list[str] = []
        offset = 0
        last = 0
        for match in _MARK_PATTERN.finditer(rendered):
            before = rendered[last : match.start()]
            pieces.append(before)
            offset += len(before.encode("utf-8"))

            text = match.group(2)
            origin = self._origins[int(match.group(1))]
            end = offset + len(text.encode("utf-8"))
            self.info.annotation.add(
                path=list(origin.path),
                source_file=origin.source_file,
                begin=offset,
                end=end,
            )
            pieces.append(text)
            offset = end
            last = match.end()
        pieces.append(rendered[last:])
        return "".join(pieces)

    def serialize(self) -> bytes:
        return self.info.SerializeToString(deterministic=True)
