"""Property source that produces pseudo-random values on demand.

Recognised keys (all under the ``random.`` prefix):

- ``random.int`` / ``random.long``: a signed 32/64-bit integer.
- ``random.int(10)`` / ``random.long(10)``: an integer in ``[0, 10)``.
- ``random.int[5,10]`` / ``random.long[5,10]``: an integer in ``[5, 10)``.
- ``random.uuid``: a random UUID string.
- any other ``random.*`` key: 32 random hexadecimal characters.

Every lookup draws a new value, so reference a random key once (e.g. through
a ``${random.uuid}`` placeholder) and keep the resolved value.
"""

from __future__ import annotations

import logging
import random
import re
import uuid

from tbinstall.domain.errors import ConfigurationError
from tbinstall.interfaces.property_source import PropertySource

logger = logging.getLogger(__name__)

RANDOM_PROPERTY_SOURCE_NAME = "random"
PREFIX = "random."

INT_BITS = 32
LONG_BITS = 64
RANGE_PATTERN = re.compile(r"^(?:\((?P<max>[^)]*)\)|\[(?P<range>[^\]]*)\])$")


class RandomValuePropertySource(PropertySource):
    """Non-enumerable source answering every ``random.*`` key."""

    def __init__(
        self,
        name: str = RANDOM_PROPERTY_SOURCE_NAME,
        rng: random.Random | None = None,
    ) -> None:
        super().__init__(name)
        self._rng = rng or random.Random()

    def get_property(self, key: str) -> int | str | None:
        if not key.startswith(PREFIX):
            return None
        logger.debug("Generating random property for '%s'", key)
        return self._random_value(key[len(PREFIX) :])

    def _random_value(self, kind: str) -> int | str:
        if kind.startswith("int"):
            return self._random_number(kind[len("int") :], INT_BITS)
        if kind.startswith("long"):
            return self._random_number(kind[len("long") :], LONG_BITS)
        if kind == "uuid":
            return str(uuid.UUID(int=self._rng.getrandbits(128), version=4))
        return f"{self._rng.getrandbits(128):032x}"

    def _random_number(self, range_expr: str, bits: int) -> int:
        if not range_expr:
            return self._rng.getrandbits(bits) - (1 << (bits - 1))
        match = RANGE_PATTERN.match(range_expr)
        if match is None:
            raise ConfigurationError(f"Invalid random range '{range_expr}'")
        try:
            if match.group("max") is not None:
                lower, upper = 0, int(match.group("max").strip())
            else:
                lower_text, _, upper_text = match.group("range").partition(",")
                lower, upper = int(lower_text.strip()), int(upper_text.strip())
        except ValueError as e:
            raise ConfigurationError(f"Invalid random range '{range_expr}'") from e
        if upper <= lower:
            raise ConfigurationError(
                f"Invalid random range '{range_expr}': upper bound must exceed lower bound"
            )
        return self._rng.randrange(lower, upper)
