"""Backslash-escape aware splitting used by the markup parser and link detection."""
from __future__ import annotations

ESCAPE = "\\"


def split_unescaped(text: str, delimiter: str, maxsplit: int = -1) -> list[str]:
    """Split ``text`` at every ``delimiter`` not directly preceded by a backslash.

    Escape pairs are left in the segments; see :func:`unescape`. With a
    non-negative ``maxsplit`` at most that many splits are made, the remainder
    is kept in the last segment.
    """

    segments: list[str] = []
    start = 0
    escaped = False
    for index, char in enumerate(text):
        if char == delimiter and not escaped:
            if 0 <= maxsplit <= len(segments):
                break
            segments.append(text[start:index])
            start = index + 1
        escaped = char == ESCAPE
    segments.append(text[start:])
    return segments


def unescape(text: str, delimiter: str) -> str:
    """Turn every ``\\<delimiter>`` pair into ``<delimiter>``.

    Other backslashes are kept literally, and the replacement is applied once.
    """

    return text.replace(ESCAPE + delimiter, delimiter)


def split_and_unescape(text: str, delimiter: str) -> list[str]:
    return [unescape(segment, delimiter) for segment in split_unescaped(text, delimiter)]


__all__ = ["ESCAPE", "split_and_unescape", "split_unescaped", "unescape"]
