"""Command-line argument model.

Tokens of the form ``--name=value`` (or ``--name`` without a value) are
*option* arguments; every other token is a *non-option* argument. Option
names are case-sensitive and may be repeated, in which case all values are
kept in order.

Examples:
    ```py
    >>> args = ApplicationArguments.parse(["upgrade", "--fromVersion=1.2.3"])
    >>> args.non_option_args
    ('upgrade',)
    >>> args.option_values("fromVersion")
    ('1.2.3',)
    ```
"""

from __future__ import annotations

from collections.abc import Iterable, Mapping
from dataclasses import dataclass, field
from types import MappingProxyType

from .errors import UsageError

OPTION_PREFIX = "--"


@dataclass(frozen=True)
class ApplicationArguments:
    """Immutable, parsed view of the raw command-line tokens."""

    source_args: tuple[str, ...]
    non_option_args: tuple[str, ...]
    options: Mapping[str, tuple[str, ...]] = field(
        default_factory=lambda: MappingProxyType({})
    )

    @classmethod
    def parse(cls, args: Iterable[str]) -> ApplicationArguments:
        """Split raw tokens into option and non-option arguments.

        Args:
            args: Raw command-line tokens.

        Returns:
            The parsed arguments.

        Raises:
            UsageError: If a token starts with ``--`` but has no option name
                (``--`` or ``--=value``).
        """
        source_args = tuple(args)
        non_option_args: list[str] = []
        options: dict[str, list[str]] = {}
        for arg in source_args:
            if not arg.startswith(OPTION_PREFIX):
                non_option_args.append(arg)
                continue
            option_text = arg[len(OPTION_PREFIX) :]
            name, sep, value = option_text.partition("=")
            if not name:
                raise UsageError(f"Invalid argument syntax: {arg}")
            values = options.setdefault(name, [])
            if sep:
                values.append(value)
        return cls(
            source_args=source_args,
            non_option_args=tuple(non_option_args),
            options=MappingProxyType(
                {name: tuple(values) for name, values in options.items()}
            ),
        )

    def contains_option(self, name: str) -> bool:
        """Return True if ``--name`` was given, with or without a value."""
        return name in self.options

    def option_values(self, name: str) -> tuple[str, ...] | None:
        """Return the values given for ``--name``, or None if it was not given.

        An option given without ``=value`` yields an empty tuple.
        """
        return self.options.get(name)

    @property
    def option_names(self) -> tuple[str, ...]:
        """Names of all option arguments, in first-seen order."""
        return tuple(self.options)
