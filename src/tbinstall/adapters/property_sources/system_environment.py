"""Property source over the process environment with relaxed key matching.

A key such as ``cassandra.url`` is looked up as ``cassandra.url``,
``cassandra_url``, ``CASSANDRA.URL`` and ``CASSANDRA_URL``, in that order,
so operators can override any property with a conventional environment
variable.
"""

import os
from collections.abc import Mapping

from tbinstall.interfaces.property_source import EnumerablePropertySource

SYSTEM_ENVIRONMENT_PROPERTY_SOURCE_NAME = "systemEnvironment"


class SystemEnvironmentPropertySource(EnumerablePropertySource):
    """Enumerable source over a snapshot of the environment variables."""

    def __init__(
        self,
        environ: Mapping[str, str] | None = None,
        name: str = SYSTEM_ENVIRONMENT_PROPERTY_SOURCE_NAME,
    ) -> None:
        super().__init__(name)
        self._environ = dict(os.environ if environ is None else environ)

    def get_property(self, key: str) -> str | None:
        actual = self._resolve_name(key)
        return None if actual is None else self._environ[actual]

    def contains_property(self, key: str) -> bool:
        return self._resolve_name(key) is not None

    @property
    def property_names(self) -> tuple[str, ...]:
        return tuple(self._environ)

    def _resolve_name(self, key: str) -> str | None:
        for candidate in _candidates(key):
            if candidate in self._environ:
                return candidate
        upper = key.upper()
        if upper != key:
            for candidate in _candidates(upper):
                if candidate in self._environ:
                    return candidate
        return None


def _candidates(key: str) -> tuple[str, ...]:
    no_dot = key.replace(".", "_")
    no_hyphen = key.replace("-", "_")
    both = no_dot.replace("-", "_")
    return tuple(dict.fromkeys((key, no_dot, no_hyphen, both)))
