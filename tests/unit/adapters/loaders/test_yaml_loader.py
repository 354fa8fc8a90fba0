"""Unit tests for the YAML loader."""

import pytest

from tbinstall.adapters.loaders import YamlPropertySourceLoader
from tbinstall.adapters.loaders.yaml_loader import flatten
from tbinstall.domain.errors import ConfigurationError

from tests.fixtures.config_files import StringResource


def load(text: str):
    """Load ``text`` as thingsboard.yml."""
    return YamlPropertySourceLoader().load(
        "yaml", StringResource("classpath:/thingsboard.yml", text)
    )


def test_extensions():
    """Both yml and yaml are handled."""
    assert YamlPropertySourceLoader().file_extensions == ("yml", "yaml")


def test_flatten_nested_mappings_and_lists():
    """Mappings become dotted keys and lists become indexed keys."""
    document = {
        "cassandra": {"url": "db:9042", "socket": {"read_timeout": 20000}},
        "hosts": ["a", {"name": "b"}],
        "empty": None,
    }
    assert flatten(document) == {
        "cassandra.url": "db:9042",
        "cassandra.socket.read_timeout": 20000,
        "hosts[0]": "a",
        "hosts[1].name": "b",
        "empty": "",
    }


def test_load_keeps_scalar_types():
    """YAML scalars keep their native types."""
    source = load(
        """
        cassandra:
          ssl: true
          init_timeout_ms: 1000
          url: "db:9042"
        """
    )
    assert source.get_property("cassandra.ssl") is True
    assert source.get_property("cassandra.init_timeout_ms") == 1000
    assert source.get_property("cassandra.url") == "db:9042"


def test_later_documents_override_earlier_ones():
    """Documents are merged in order."""
    source = load(
        """
        cassandra:
          url: "first:9042"
          keyspace_name: tb
        ---
        cassandra:
          url: "second:9042"
        """
    )
    assert source.get_property("cassandra.url") == "second:9042"
    assert source.get_property("cassandra.keyspace_name") == "tb"


def test_profile_documents_are_skipped():
    """A document restricted to a profile is ignored."""
    source = load(
        """
        cassandra:
          url: "default:9042"
        ---
        spring:
          profiles: docker
        cassandra:
          url: "docker:9042"
        """
    )
    assert source.get_property("cassandra.url") == "default:9042"


def test_empty_document_yields_no_source():
    """An empty file produces no source."""
    assert load("# only a comment\n") is None


@pytest.mark.parametrize(
    "text", ["cassandra: [unclosed\n", "- just\n- a list\n"], ids=["syntax", "not-a-mapping"]
)
def test_invalid_yaml(text):
    """Unparseable files and non-mapping documents raise ConfigurationError."""
    with pytest.raises(ConfigurationError, match="thingsboard.yml"):
        load(text)
