"""
Literal chunker.

Splits a byte payload into escaped string literal lines, grouped into parts.
Lines of one part are concatenated in the generated source; each part is a
separate array element, which keeps every compiled constant well below the
host platform's size limit (e.g. the 64k constant limit of the JVM).
"""

from __future__ import annotations

from collections.abc import Iterator
from dataclasses import dataclass

# Escapes for bytes that have a short form
_SHORT_ESCAPES = {
    ord("\n"): "\\n",
    ord("\r"): "\\r",
    ord("\t"): "\\t",
    ord('"'): '\\"',
    ord("'"): "\\'",
    ord("\\"): "\\\\",
}

_ESCAPE_TABLE = [_SHORT_ESCAPES.get(b, chr(b) if 0x20 <= b < 0x7F else f"\\{b:03o}") for b in range(256)]


def c_escape(data: bytes) -> str:
    """
    Escape bytes as the body of a C-style string literal.

    Printable ASCII is kept as is, quotes and backslashes are escaped,
    newline, carriage return and tab use their short forms and every other
    byte becomes a three-digit octal escape. The result is valid inside both
    Java string literals and Python bytes literals.

    Args:
        data: Raw bytes

    Returns:
        Escaped, pure ASCII text
    """
    return "".join(_ESCAPE_TABLE[b] for b in data)


@dataclass(frozen=True)
class LiteralLine:
    """Continue the current part with one literal line."""

    index: int
    part: int
    data: bytes

    @property
    def escaped(self) -> str:
        return c_escape(self.data)


@dataclass(frozen=True)
class PartBreak:
    """Start a new literal part."""

    part: int


ChunkInstruction = LiteralLine | PartBreak


class LiteralChunks:
    """A restartable sequence of chunk instructions for a payload.

    Every iteration walks the payload again, lazily, and yields the same
    instructions: a LiteralLine per ``bytes_per_line`` bytes (the last one
    may be shorter) and a PartBreak every ``lines_per_part`` lines. No
    PartBreak precedes the first line and an empty payload yields nothing.
    """

    def __init__(self, data: bytes, bytes_per_line: int, lines_per_part: int):
        if bytes_per_line <= 0 or lines_per_part <= 0:
            raise ValueError("bytes_per_line and lines_per_part must be positive")
        self.data = bytes(data)
        self.bytes_per_line = bytes_per_line
        self.lines_per_part = lines_per_part

    def __iter__(self) -> Iterator[ChunkInstruction]:
        for index, start in enumerate(range(0, len(self.data), self.bytes_per_line)):
            part, position = divmod(index, self.lines_per_part)
            if index > 0 and position == 0:
                yield PartBreak(part)
            yield LiteralLine(index, part, self.data[start : start + self.bytes_per_line])

    def __len__(self) -> int:
        """Number of literal lines."""
        return -(-len(self.data) // self.bytes_per_line)

    @property
    def part_count(self) -> int:
        return -(-len(self) // self.lines_per_part)

    def parts(self) -> list[bytes]:
        """Raw payload of every part, in order."""
        size = self.bytes_per_line * self.lines_per_part
        return [self.data[start : start + size] for start in range(0, len(self.data), size)]
