"""Document model produced by the aside markup parser."""
from __future__ import annotations

from dataclasses import dataclass

EntryValue = str | tuple[str, ...]


@dataclass(frozen=True, slots=True)
class Thumbnail:
    """An image declared with a ``!url|description`` line.

    Parameters
    ----------
    url:
        Image reference after passing through the image resolver.
    description:
        Caption after the first unescaped ``|``. ``None`` when the line has no
        separator at all, an empty string when the separator ends the line.
    """

    url: str
    description: str | None = None


@dataclass(frozen=True, slots=True)
class TableEntry:
    """A ``-key:value`` row. List values always hold two or more items."""

    key: str
    value: EntryValue

    @property
    def is_list(self) -> bool:
        return isinstance(self.value, tuple)


@dataclass(frozen=True, slots=True)
class Group:
    """A ``#name`` section with the entries listed below it."""

    name: str
    entries: tuple[TableEntry, ...] = ()


@dataclass(frozen=True, slots=True)
class AsideDocument:
    """Parsed aside block."""

    thumbnails: tuple[Thumbnail, ...] = ()
    groups: tuple[Group, ...] = ()

    @property
    def is_empty(self) -> bool:
        return not self.thumbnails and not self.groups


@dataclass(frozen=True, slots=True)
class SkippedLine:
    """A source line dropped by the parser."""

    line_number: int
    text: str
    reason: str = ""


__all__ = ["AsideDocument", "EntryValue", "Group", "SkippedLine", "TableEntry", "Thumbnail"]
