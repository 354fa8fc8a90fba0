"""Unit tests for the .properties loader."""

import pytest

from tbinstall.adapters.loaders import PropertiesPropertySourceLoader
from tbinstall.adapters.loaders.properties_loader import parse_properties
from tbinstall.domain.errors import ConfigurationError

from tests.fixtures.config_files import StringResource


class TestParseProperties:
    """Syntax handled by parse_properties."""

    @staticmethod
    def test_separators() -> None:
        """'=', ':' and whitespace all separate key from value."""
        text = "a=1\nb: 2\nc 3\nd = 4\n"
        assert parse_properties(text) == {"a": "1", "b": "2", "c": "3", "d": "4"}

    @staticmethod
    def test_comments_and_blank_lines() -> None:
        """# and ! start comments; blank lines are skipped."""
        text = "# comment\n! other comment\n\n   \nkey=value\n"
        assert parse_properties(text) == {"key": "value"}

    @staticmethod
    def test_continuation_lines() -> None:
        """A trailing backslash joins the next line, minus its indentation."""
        text = "cassandra.url=db1:9042,\\\n    db2:9042\n"
        assert parse_properties(text) == {"cassandra.url": "db1:9042,db2:9042"}

    @staticmethod
    def test_escaped_backslash_is_not_a_continuation() -> None:
        """An even number of trailing backslashes ends the line."""
        text = "path=C:\\\\\nnext=1\n"
        assert parse_properties(text) == {"path": "C:\\", "next": "1"}

    @staticmethod
    def test_escapes() -> None:
        """Standard escapes and \\uXXXX are decoded in keys and values."""
        text = "tab=a\\tb\nunicode=\\u00e9t\\u00e9\nkey\\ with\\ spaces=x\n"
        assert parse_properties(text) == {
            "tab": "a\tb",
            "unicode": "été",
            "key with spaces": "x",
        }

    @staticmethod
    def test_key_without_value() -> None:
        """A key alone maps to an empty string."""
        assert parse_properties("cassandra.password\n") == {"cassandra.password": ""}

    @staticmethod
    def test_later_duplicates_win() -> None:
        """Repeated keys keep the last value."""
        assert parse_properties("a=1\na=2\n") == {"a": "2"}


class TestPropertiesLoader:
    """Tests for PropertiesPropertySourceLoader.load."""

    @staticmethod
    def test_load() -> None:
        """A properties resource becomes a named, grouped map source."""
        resource = StringResource("file:./thingsboard.properties", "cassandra.url=db:9042\n")
        source = PropertiesPropertySourceLoader().load("props", resource, group="g")
        assert source is not None
        assert source.name == "props"
        assert source.group == "g"
        assert source.get_property("cassandra.url") == "db:9042"

    @staticmethod
    def test_empty_file_yields_no_source() -> None:
        """A file with only comments produces no source."""
        resource = StringResource("file:./empty.properties", "# nothing\n")
        assert PropertiesPropertySourceLoader().load("empty", resource) is None

    @staticmethod
    def test_malformed_unicode_escape() -> None:
        """A truncated \\u escape raises ConfigurationError naming the file."""
        resource = StringResource("file:./bad.properties", "a=\\u12\n")
        with pytest.raises(ConfigurationError, match="bad.properties"):
            PropertiesPropertySourceLoader().load("bad", resource)
