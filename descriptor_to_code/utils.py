"""
Utility functions for the descriptor holder generator.
"""

import re

# Characters that cannot appear in a Python module name
_NON_IDENTIFIER = re.compile(r"[^0-9A-Za-z_]")

_PROTO_SUFFIXES = (".protodevel", ".proto")


def strip_proto(file_name: str) -> str:
    """Remove the ``.proto`` (or ``.protodevel``) suffix from a file name."""
    for suffix in _PROTO_SUFFIXES:
        if file_name.endswith(suffix):
            return file_name[: -len(suffix)]
    return file_name


def file_stem(file_name: str) -> str:
    """Return the base name of a schema file without directories or suffix.

    Examples:
        "foo/bar_baz.proto" -> "bar_baz"
        "simple.protodevel" -> "simple"
    """
    return strip_proto(file_name).rsplit("/", 1)[-1]


def underscores_to_camel_case(text: str, cap_next_letter: bool = True) -> str:
    """Convert an underscore or dash separated name to CamelCase.

    Follows the protocol buffer compiler rules: any character that is not an
    ASCII letter or digit is dropped and capitalizes the next letter, and a
    digit also capitalizes the letter that follows it.

    Examples:
        "foo_bar" -> "FooBar"
        "foo-bar2baz" -> "FooBar2Baz"
        "HTTPRequest" -> "HTTPRequest"

    Args:
        text: The text to convert
        cap_next_letter: Whether the first letter is capitalized

    Returns:
        CamelCase string
    """
    result = []
    for i, ch in enumerate(text):
        if "a" <= ch <= "z":
            result.append(ch.upper() if cap_next_letter else ch)
            cap_next_letter = False
        elif "A" <= ch <= "Z":
            if i == 0 and not cap_next_letter:
                result.append(ch.lower())
            else:
                result.append(ch)
            cap_next_letter = False
        elif "0" <= ch <= "9":
            result.append(ch)
            cap_next_letter = True
        else:
            cap_next_letter = True
    return "".join(result)


def to_module_name(text: str) -> str:
    """Turn arbitrary text into a valid Python module name."""
    name = _NON_IDENTIFIER.sub("_", text)
    if not name or name[0].isdigit():
        name = f"_{name}"
    return name
