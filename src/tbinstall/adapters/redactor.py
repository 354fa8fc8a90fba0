"""Regex-based redactor for sanitizing secret configuration values.

This module provides a Redactor implementation that masks the values of
properties whose last key segment names a secret (password, token, key,
etc.). In strict mode usernames are masked too.
"""

import re
from typing import Any

from tbinstall.interfaces import redactor
from tbinstall.interfaces.redactor import RedactorMode

# pylint: disable=too-few-public-methods

PLACEHOLDER = "***"
SECRET_KEYWORDS = [
    "password",
    "passwd",
    "pwd",
    "secret",
    "token",
    "api_key",
    "apikey",
    "access_token",
    "refresh_token",
    "credentials_key",
    "keystore_password",
    "truststore_password",
]
STRICT_MODE_ADDITIONAL_KEYWORDS = ["user", "username", "uid"]
STRICT_MODE_SECRET_KEYWORDS = SECRET_KEYWORDS + STRICT_MODE_ADDITIONAL_KEYWORDS
SECRET_KEYWORDS_PATTERN = "|".join(kw.replace("_", "[-_]?") for kw in (SECRET_KEYWORDS))
STRICT_MODE_SECRET_KEYWORDS_PATTERN = "|".join(
    kw.replace("_", "[-_]?") for kw in (STRICT_MODE_SECRET_KEYWORDS)
)
# Matches the last segment of a dot-separated key, e.g. "cassandra.password".
SECRET_KEY_PATTERN = re.compile(
    rf"(?:^|\.)(?:{SECRET_KEYWORDS_PATTERN})$", re.IGNORECASE
)
STRICT_MODE_SECRET_KEY_PATTERN = re.compile(
    rf"(?:^|\.)(?:{STRICT_MODE_SECRET_KEYWORDS_PATTERN})$", re.IGNORECASE
)


class Redactor(redactor.Redactor):
    """Redactor implementation using key-name matching."""

    def __init__(self, mode: RedactorMode = RedactorMode.LENIENT) -> None:
        self._mode = mode

    def sanitize_property(self, key: str, value: Any) -> Any:
        if value is None:
            return None
        pattern = (
            STRICT_MODE_SECRET_KEY_PATTERN
            if self._mode == RedactorMode.STRICT
            else SECRET_KEY_PATTERN
        )
        if pattern.search(key):
            return PLACEHOLDER
        return value
