"""Loader for Java-style ``.properties`` files.

Supported syntax:

- ``#`` and ``!`` comment lines, blank lines.
- ``key=value``, ``key: value`` and ``key value`` separators.
- Line continuation with a trailing backslash.
- Escapes ``\\t``, ``\\n``, ``\\r``, ``\\f``, ``\\uXXXX`` and ``\\<char>``.
"""

from __future__ import annotations

from collections.abc import Iterator

from tbinstall.adapters.property_sources.map import MapPropertySource
from tbinstall.domain.errors import ConfigurationError
from tbinstall.interfaces.loader import PropertySourceLoader
from tbinstall.interfaces.resource import Resource

COMMENT_MARKERS = ("#", "!")
SEPARATORS = "=:"
WHITESPACE = " \t\f"
ESCAPES = {"t": "\t", "n": "\n", "r": "\r", "f": "\f"}


class PropertiesPropertySourceLoader(PropertySourceLoader):
    """Loads ``.properties`` resources into a `MapPropertySource`."""

    @property
    def file_extensions(self) -> tuple[str, ...]:
        return ("properties",)

    def load(
        self, name: str, resource: Resource, group: str | None = None
    ) -> MapPropertySource | None:
        try:
            properties = parse_properties(resource.read_text())
        except ValueError as e:
            raise ConfigurationError(
                f"Cannot parse properties file '{resource.location}': {e}"
            ) from e
        if not properties:
            return None
        return MapPropertySource(name, properties, group=group)


def parse_properties(text: str) -> dict[str, str]:
    """Parse ``.properties`` text; later duplicate keys override earlier ones."""
    properties: dict[str, str] = {}
    for line in _logical_lines(text):
        key, value = _split_key_value(line)
        properties[_unescape(key)] = _unescape(value)
    return properties


def _logical_lines(text: str) -> Iterator[str]:
    buffer = ""
    continuing = False
    for raw in text.splitlines():
        line = raw.lstrip(WHITESPACE)
        if not continuing and (not line or line.startswith(COMMENT_MARKERS)):
            continue
        if _ends_with_continuation(line):
            buffer += line[:-1]
            continuing = True
            continue
        yield buffer + line
        buffer = ""
        continuing = False
    if buffer:
        yield buffer


def _ends_with_continuation(line: str) -> bool:
    trailing = len(line) - len(line.rstrip("\\"))
    return trailing % 2 == 1


def _split_key_value(line: str) -> tuple[str, str]:
    index = 0
    while index < len(line):
        char = line[index]
        if char == "\\":
            index += 2
            continue
        if char in SEPARATORS or char in WHITESPACE:
            break
        index += 1
    key = line[:index]
    rest = line[index:].lstrip(WHITESPACE)
    if rest[:1] and rest[0] in SEPARATORS:
        rest = rest[1:].lstrip(WHITESPACE)
    return key, rest


def _unescape(text: str) -> str:
    if "\\" not in text:
        return text
    chars: list[str] = []
    index = 0
    while index < len(text):
        char = text[index]
        if char != "\\" or index + 1 >= len(text):
            chars.append(char)
            index += 1
            continue
        escaped = text[index + 1]
        if escaped == "u":
            code = text[index + 2 : index + 6]
            if len(code) != 4:
                raise ValueError(f"Malformed \\uxxxx encoding in '{text}'")
            chars.append(chr(int(code, 16)))
            index += 6
            continue
        chars.append(ESCAPES.get(escaped, escaped))
        index += 2
    return "".join(chars)
