"""Terminal message helpers for the tb-install CLI.

One-line status messages with emoji→ASCII fallbacks. Everything goes to
stderr; the install tool writes nothing to stdout.
"""

import click

CAUTION = ("⚠️", "[!]")
SUCCESS = ("✅", "[OK]")
FAILURE = ("❌", "[X]")


def _supports_character(character: str) -> bool:
    """Return True if *character* can be encoded on the current stderr.

    The stream is looked up on every call because tests and ``CliRunner``
    swap it out.
    """
    stream = click.get_text_stream("stderr")  # pragma: no mutate
    encoding = getattr(stream, "encoding", None) or "ascii"
    try:
        character.encode(encoding)
    except UnicodeEncodeError:
        return False
    return True


def _glyph(choices: tuple[str, str]) -> str:
    emoji, fallback = choices
    return emoji if _supports_character(emoji) else fallback


def caution_glyph() -> str:
    """Return "⚠️" when stderr can encode it, otherwise "[!]"."""
    return _glyph(CAUTION)


def success_glyph() -> str:
    """Return "✅" when stderr can encode it, otherwise "[OK]"."""
    return _glyph(SUCCESS)


def error_glyph() -> str:
    """Return "❌" when stderr can encode it, otherwise "[X]"."""
    return _glyph(FAILURE)


def warn(msg: str) -> None:
    """Emit a yellow, bold warning line to **stderr**.

    Example:
        ``⚠️  Install interrupted, cluster bootstrap cancelled.``
    """
    click.secho(f"{caution_glyph()}  {msg}", fg="yellow", bold=True, err=True)


def success(msg: str) -> None:
    """Emit a green, bold success line to **stderr**.

    Example:
        ``✅  Installation finished successfully!``
    """
    click.secho(f"{success_glyph()}  {msg}", fg="green", bold=True, err=True)


def error(msg: str) -> None:
    """Emit a red, bold error line to **stderr**."""
    click.secho(f"{error_glyph()}  {msg}", fg="red", bold=True, err=True)
