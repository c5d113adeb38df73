"""Percent-encoding of depot URI paths.

Remote paths keep structural and common punctuation characters as
written; only characters outside the allow-list are encoded.
"""

from typing import FrozenSet


# Printable ASCII minus the characters FTP servers and URI parsers choke on
UNSAFE_CHARACTERS = ' %^{}|"<>\\'

SAFE_CHARACTERS: FrozenSet[str] = frozenset(
    chr(code) for code in range(0x21, 0x7F)
) - frozenset(UNSAFE_CHARACTERS)


def escape_character(char: str) -> str:
    """Return ``char`` unchanged if allowed, else its %XX encoding."""
    if char in SAFE_CHARACTERS:
        return char
    return "".join(f"%{byte:02X}" for byte in char.encode("utf-8"))


def escape_path(path: str) -> str:
    """
    Percent-encode every character of ``path`` outside the allow-list.

    Args:
        path: Raw URI path, e.g. ``/path/abc 123.csv``

    Returns:
        Encoded path, e.g. ``/path/abc%20123.csv``
    """
    return "".join(escape_character(char) for char in path)
