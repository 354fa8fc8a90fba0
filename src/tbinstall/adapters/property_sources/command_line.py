"""Property source over parsed command-line option arguments."""

from tbinstall.domain.arguments import ApplicationArguments
from tbinstall.interfaces.property_source import EnumerablePropertySource

COMMAND_LINE_PROPERTY_SOURCE_NAME = "commandLineArgs"
NON_OPTION_ARGS_PROPERTY_NAME = "nonOptionArgs"


class CommandLinePropertySource(EnumerablePropertySource):
    """Exposes ``--key=value`` arguments as properties.

    Repeated options are joined with commas. An option given without a value
    resolves to an empty string. The non-option arguments are available,
    comma-joined, under the ``nonOptionArgs`` key.
    """

    def __init__(
        self,
        args: ApplicationArguments,
        name: str = COMMAND_LINE_PROPERTY_SOURCE_NAME,
    ) -> None:
        super().__init__(name)
        self._args = args

    def get_property(self, key: str) -> str | None:
        if key == NON_OPTION_ARGS_PROPERTY_NAME:
            if not self._args.non_option_args:
                return None
            return ",".join(self._args.non_option_args)
        values = self._args.option_values(key)
        if values is None:
            return None
        return ",".join(values)

    @property
    def property_names(self) -> tuple[str, ...]:
        return self._args.option_names

    def contains_property(self, key: str) -> bool:
        if key == NON_OPTION_ARGS_PROPERTY_NAME:
            return bool(self._args.non_option_args)
        return self._args.contains_option(key)
