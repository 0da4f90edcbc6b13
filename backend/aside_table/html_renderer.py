"""HTML rendering of parsed aside documents."""
from __future__ import annotations

from html import escape

from .document_models import AsideDocument, Group, TableEntry, Thumbnail
from .links import IdentityResolver, LinkResolver, parse_link

CONTAINER_CLASS = "aside-table-container"


def _attrs(values: dict[str, str]) -> str:
    return "".join(f' {name}="{escape(value, quote=True)}"' for name, value in values.items())


def _render_thumbnail(thumbnail: Thumbnail) -> str:
    img_attrs = {"src": thumbnail.url}
    if thumbnail.description:
        img_attrs["title"] = thumbnail.description
    return f'<div class="aside-table-thumbnail"><img{_attrs(img_attrs)}></div>'


def _render_value(value: str | tuple[str, ...], note_resolver: LinkResolver) -> str:
    if isinstance(value, tuple):
        items = "".join(f"<li>{escape(item)}</li>" for item in value)
        return f'<ul class="aside-table-entry-value aside-table-entry-list">{items}</ul>'

    link = parse_link(value)
    if link is None:
        return f'<span class="aside-table-entry-value">{escape(value)}</span>'

    note = note_resolver.resolve(link.target)
    text = link.label if link.label is not None else note
    link_attrs = {
        "class": "internal-link aside-table-entry-value",
        "href": note,
        "data-href": note,
        "target": "_blank",
        "rel": "noopener",
    }
    return f"<a{_attrs(link_attrs)}>{escape(text)}</a>"


def _render_entry(entry: TableEntry, note_resolver: LinkResolver) -> str:
    key = f'<strong class="aside-table-entry-key">{escape(entry.key)}</strong>'
    return f'<div class="aside-table-entry">{key}{_render_value(entry.value, note_resolver)}</div>'


def _render_group(group: Group, header_color: str, note_resolver: LinkResolver) -> list[str]:
    header_attrs = {
        "class": "aside-table-group-header",
        "style": f"background-color: {header_color}",
    }
    parts = [f"<div{_attrs(header_attrs)}>{escape(group.name)}</div>"]
    parts.extend(_render_entry(entry, note_resolver) for entry in group.entries)
    return parts


def render_html(
    document: AsideDocument,
    *,
    header_color: str,
    note_resolver: LinkResolver | None = None,
) -> str:
    """Render ``document`` as an HTML fragment.

    Thumbnails come first, then every group header followed by its entry rows.
    Link values are resolved through ``note_resolver`` when rendered.
    """

    resolver = note_resolver or IdentityResolver()
    thumbnails = "".join(_render_thumbnail(thumbnail) for thumbnail in document.thumbnails)
    parts = [f'<span class="{CONTAINER_CLASS}">', f'<div class="aside-table-thumbnails">{thumbnails}</div>']
    for group in document.groups:
        parts.extend(_render_group(group, header_color, resolver))
    parts.append("</span>")
    return "".join(parts)


__all__ = ["CONTAINER_CLASS", "render_html"]
