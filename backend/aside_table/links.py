"""Link shapes and the resolvers that map display names to link targets."""
from __future__ import annotations

import logging
import time
from dataclasses import dataclass
from pathlib import Path, PurePosixPath
from typing import Literal, Protocol
from urllib.parse import quote

from .escaping import split_unescaped, unescape

logger = logging.getLogger(__name__)

LINK_OPEN = "[["
LINK_CLOSE = "]]"
LABEL_SEPARATOR = "|"

ResolverKind = Literal["note", "image"]


class LinkResolver(Protocol):
    """Maps a display name to a canonical reference, echoing unknown names."""

    def resolve(self, reference: str) -> str: ...


class IdentityResolver:
    """Resolver used when no vault is configured."""

    def resolve(self, reference: str) -> str:
        return reference


@dataclass(frozen=True, slots=True)
class LinkShape:
    """The parts of a ``[[target|label]]`` value."""

    target: str
    label: str | None = None


def parse_link(value: str) -> LinkShape | None:
    """Return the link parts of ``value`` or ``None`` when it is plain text."""

    if len(value) < len(LINK_OPEN) + len(LINK_CLOSE):
        return None
    if not (value.startswith(LINK_OPEN) and value.endswith(LINK_CLOSE)):
        return None
    parts = split_unescaped(value[len(LINK_OPEN) : -len(LINK_CLOSE)], LABEL_SEPARATOR, maxsplit=1)
    target = unescape(parts[0], LABEL_SEPARATOR)
    label = unescape(parts[1], LABEL_SEPARATOR) if len(parts) > 1 else None
    return LinkShape(target=target, label=label)


class VaultResolver:
    """Resolve note and image names against a directory of markdown notes.

    Lookup is case-insensitive. A reference matches a file whose vault-relative
    path equals it or ends with ``/<reference>``; the shortest such path wins.
    Note references are tried as given first, then with ``.md`` appended.

    Notes resolve to their link text: the bare name when no other file in the
    vault shares it, the relative path otherwise (both without ``.md``). Images
    resolve to ``<image_base_url>/<relative path>``.

    A lookup that finds nothing rebuilds the file index when it is older than
    ``refresh_interval`` seconds, so files added to the vault are picked up.
    """

    def __init__(
        self,
        root: Path | str,
        kind: ResolverKind = "note",
        *,
        image_base_url: str = "/vault",
        refresh_interval: float = 5.0,
    ) -> None:
        self.root = Path(root)
        self.kind = kind
        self.image_base_url = image_base_url.rstrip("/")
        self.refresh_interval = refresh_interval
        self._files: list[str] | None = None
        self._indexed_at = 0.0

    def refresh(self) -> None:
        """Rebuild the file index from disk."""

        self._indexed_at = time.monotonic()
        if not self.root.is_dir():
            logger.warning("Vault root '%s' is not a directory; links will not be resolved", self.root)
            self._files = []
            return
        self._files = sorted(
            path.relative_to(self.root).as_posix() for path in self.root.rglob("*") if path.is_file()
        )
        logger.debug("Indexed %s files under '%s'", len(self._files), self.root)

    def _index(self) -> list[str]:
        if self._files is None:
            self.refresh()
        return self._files or []

    def _is_stale(self) -> bool:
        return time.monotonic() - self._indexed_at >= self.refresh_interval

    def _candidates(self, name: str) -> list[str]:
        candidates = [name]
        if self.kind == "note" and not name.casefold().endswith(".md"):
            candidates.append(f"{name}.md")
        return candidates

    def _match(self, candidates: list[str]) -> str | None:
        files = self._index()
        for candidate in candidates:
            wanted = candidate.casefold()
            matches = [
                path
                for path in files
                if path.casefold() == wanted or path.casefold().endswith("/" + wanted)
            ]
            if matches:
                return min(matches, key=lambda path: (len(path), path))
        return None

    def find(self, reference: str) -> str | None:
        """Return the vault-relative path ``reference`` points to, if any."""

        name = reference.strip().lstrip("/")
        if not name:
            return None
        candidates = self._candidates(name)
        path = self._match(candidates)
        if path is None and self._is_stale():
            logger.debug("No match for '%s', re-indexing '%s'", name, self.root)
            self.refresh()
            path = self._match(candidates)
        return path

    def _link_text(self, path: str) -> str:
        stem_path = path[:-3] if path.endswith(".md") else path
        name = PurePosixPath(path).name.casefold()
        namesakes = [other for other in self._index() if PurePosixPath(other).name.casefold() == name]
        if len(namesakes) <= 1:
            return PurePosixPath(stem_path).name
        return stem_path

    def resolve(self, reference: str) -> str:
        path = self.find(reference)
        if path is None:
            return reference
        if self.kind == "image":
            return f"{self.image_base_url}/{quote(path)}"
        return self._link_text(path)


__all__ = [
    "IdentityResolver",
    "LinkResolver",
    "LinkShape",
    "ResolverKind",
    "VaultResolver",
    "parse_link",
]
