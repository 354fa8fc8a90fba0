"""Terminal hyperlinks for the tb-install help text.

Renders documentation and issue-tracker URLs as OSC-8 links when the terminal
is known to understand them, otherwise as plain text.
"""

import os
import sys
from typing import TextIO

# TERM_PROGRAM values of terminals that render OSC-8 links
OSC8_TERMINAL_PROGRAMS = frozenset(
    {"apple_terminal", "vscode", "iterm.app", "wezterm", "kitty", "ghostty"}
)
OSC8_TERM_PREFIXES = ("alacritty", "konsole", "xterm-kitty")


def supports_osc8(stream: TextIO | None = None) -> bool:
    """Guess whether *stream* renders OSC-8 hyperlinks.

    Piped or redirected output never gets escape sequences. For a TTY the
    decision is based on environment variables set by the common terminals
    (``TERM_PROGRAM``, ``WT_SESSION`` for Windows Terminal, ``VTE_VERSION``
    for VTE-based terminals, and a few ``TERM`` prefixes).
    """
    stream = stream or sys.stdout
    if not getattr(stream, "isatty", lambda: False)():
        return False
    if (os.getenv("TERM_PROGRAM") or "").lower() in OSC8_TERMINAL_PROGRAMS:
        return True
    if os.getenv("WT_SESSION") or os.getenv("VTE_VERSION"):
        return True
    return os.getenv("TERM", "").startswith(OSC8_TERM_PREFIXES)


def hyperlink(url: str, label: str | None = None, stream: TextIO | None = None) -> str:
    """Return *url* as a clickable link, or as plain text when unsupported.

    Args:
        url: Link target.
        label: Text shown for the link; defaults to the URL itself. Ignored
            in the plain-text fallback so the URL stays visible.
        stream: Stream the text will be written to; defaults to stdout.
    """
    if not supports_osc8(stream):
        return url
    # BEL terminator is understood more widely than ST
    return f"\x1b]8;;{url}\x07{label or url}\x1b]8;;\x07"
