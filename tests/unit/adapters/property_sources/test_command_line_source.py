"""Unit tests for CommandLinePropertySource."""

from tbinstall.adapters.property_sources import CommandLinePropertySource
from tbinstall.adapters.property_sources.command_line import (
    NON_OPTION_ARGS_PROPERTY_NAME,
)
from tbinstall.domain.arguments import ApplicationArguments


def make_source(*tokens: str) -> CommandLinePropertySource:
    """Build a source over the given raw tokens."""
    return CommandLinePropertySource(ApplicationArguments.parse(tokens))


def test_default_name():
    """The source is called commandLineArgs."""
    assert make_source().name == "commandLineArgs"


def test_option_values():
    """--key=value options are exposed as properties."""
    source = make_source("--cassandra.url=db1:9042", "install")
    assert source.get_property("cassandra.url") == "db1:9042"
    assert source.contains_property("cassandra.url")
    assert source.property_names == ("cassandra.url",)


def test_repeated_options_are_comma_joined():
    """Repeated options join their values with commas."""
    source = make_source("--spring.config.name=a", "--spring.config.name=b")
    assert source.get_property("spring.config.name") == "a,b"


def test_option_without_value_is_empty_string():
    """An option given without a value is present with an empty value."""
    source = make_source("--cassandra.ssl")
    assert source.get_property("cassandra.ssl") == ""
    assert source.contains_property("cassandra.ssl")


def test_non_option_args():
    """Non-option tokens are available under nonOptionArgs."""
    source = make_source("upgrade", "--fromVersion=1.0", "now")
    assert source.get_property(NON_OPTION_ARGS_PROPERTY_NAME) == "upgrade,now"
    assert make_source("--a=1").get_property(NON_OPTION_ARGS_PROPERTY_NAME) is None
    assert not make_source("--a=1").contains_property(NON_OPTION_ARGS_PROPERTY_NAME)
