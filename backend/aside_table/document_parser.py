"""Parser for the aside markup.

The markup is line oriented::

    !https://example.com/image.png|Optional caption
    #Group name
    -Key:Value
    -Key:Value 1;Value 2;Value 3
    -Key:[[Note name|Label]]

``\\|``, ``\\:`` and ``\\;`` keep the delimiter as literal text. Lines that do
not fit any shape are dropped; parsing never fails.
"""
from __future__ import annotations

import logging

from .document_models import AsideDocument, Group, SkippedLine, TableEntry, Thumbnail
from .escaping import split_and_unescape, split_unescaped, unescape
from .links import IdentityResolver, LinkResolver

logger = logging.getLogger(__name__)

THUMBNAIL_MARKER = "!"
HEADER_MARKER = "#"
ENTRY_MARKER = "-"
DESCRIPTION_SEPARATOR = "|"
KEY_SEPARATOR = ":"
VALUE_SEPARATOR = ";"


def source_lines(source: str) -> list[str]:
    """Split on ``\\n`` only, dropping one trailing ``\\r`` per line."""

    return [line[:-1] if line.endswith("\r") else line for line in source.split("\n")]


def scan_thumbnails(source: str, image_resolver: LinkResolver | None = None) -> tuple[Thumbnail, ...]:
    """Collect every ``!`` line of ``source`` as a :class:`Thumbnail`."""

    resolver = image_resolver or IdentityResolver()
    thumbnails: list[Thumbnail] = []
    for line in source_lines(source):
        if not line.startswith(THUMBNAIL_MARKER):
            continue
        parts = split_unescaped(line[1:], DESCRIPTION_SEPARATOR, maxsplit=1)
        url = unescape(parts[0], DESCRIPTION_SEPARATOR)
        description = parts[1] if len(parts) > 1 else None
        thumbnails.append(Thumbnail(url=resolver.resolve(url), description=description))
    return tuple(thumbnails)


def decode_entry(line: str) -> TableEntry | None:
    """Decode a ``-key:value`` line, or return ``None`` if it has no such shape."""

    if not line.startswith(ENTRY_MARKER):
        return None
    parts = split_unescaped(line[1:], KEY_SEPARATOR, maxsplit=1)
    if len(parts) < 2:
        return None
    raw_key, raw_value = parts
    values = split_and_unescape(raw_value, VALUE_SEPARATOR)
    value = values[0] if len(values) == 1 else tuple(values)
    return TableEntry(key=unescape(raw_key, KEY_SEPARATOR), value=value)


def _skip(diagnostics: list[SkippedLine] | None, line_number: int, line: str, reason: str) -> None:
    logger.debug("Skipping line %s (%s): %r", line_number, reason, line)
    if diagnostics is not None:
        diagnostics.append(SkippedLine(line_number=line_number, text=line, reason=reason))


def split_groups(source: str, diagnostics: list[SkippedLine] | None = None) -> tuple[Group, ...]:
    """Partition ``source`` into groups, one per ``#`` header line.

    Every header owns the lines up to the next header. Only ``-`` lines inside
    a group become entries; blank and thumbnail lines are ignored quietly, any
    other dropped line is reported to ``diagnostics`` when a list is given.
    """

    groups: list[Group] = []
    name: str | None = None
    entries: list[TableEntry] = []

    for line_number, line in enumerate(source_lines(source), start=1):
        if line.startswith(HEADER_MARKER):
            if name is not None:
                groups.append(Group(name=name, entries=tuple(entries)))
            name = line[1:]
            entries = []
            continue
        if not line.strip() or line.startswith(THUMBNAIL_MARKER):
            continue
        if name is None:
            _skip(diagnostics, line_number, line, "outside of a group")
            continue
        if not line.startswith(ENTRY_MARKER):
            _skip(diagnostics, line_number, line, "not an entry")
            continue
        entry = decode_entry(line)
        if entry is None:
            _skip(diagnostics, line_number, line, "missing key separator")
            continue
        entries.append(entry)

    if name is not None:
        groups.append(Group(name=name, entries=tuple(entries)))
    return tuple(groups)


def parse_aside(
    source: str,
    *,
    image_resolver: LinkResolver | None = None,
    diagnostics: list[SkippedLine] | None = None,
) -> AsideDocument:
    """Parse an aside block into an :class:`AsideDocument`.

    Pass a list as ``diagnostics`` to receive a :class:`SkippedLine` for every
    dropped line; the result itself does not depend on it.
    """

    return AsideDocument(
        thumbnails=scan_thumbnails(source, image_resolver),
        groups=split_groups(source, diagnostics),
    )


__all__ = ["decode_entry", "parse_aside", "scan_thumbnails", "source_lines", "split_groups"]
