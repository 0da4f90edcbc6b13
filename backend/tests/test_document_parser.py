"""Unit tests for the aside markup parser."""

from __future__ import annotations

import pytest

from aside_table.document_models import AsideDocument, Group, SkippedLine, TableEntry, Thumbnail
from aside_table.document_parser import decode_entry, parse_aside, scan_thumbnails, split_groups


class RecordingResolver:
    """Resolver stub that prefixes known names and remembers every lookup."""

    def __init__(self) -> None:
        self.calls: list[str] = []

    def resolve(self, reference: str) -> str:
        self.calls.append(reference)
        return f"resolved://{reference}"


SAMPLE = "\n".join(
    [
        "!https://x/y.png|desc",
        "!portrait.png",
        "#Stats",
        "-HP:10",
        "-MP:20",
        "#Details",
        "-Tags:Red;Blue;Green",
        "-Owner:[[John Doe|Johnny]]",
    ]
)


def test_thumbnail_with_and_without_description() -> None:
    resolver = RecordingResolver()

    thumbnails = scan_thumbnails("!https://x/y.png|desc\n!https://x/y.png", resolver)

    assert thumbnails == (
        Thumbnail(url="resolved://https://x/y.png", description="desc"),
        Thumbnail(url="resolved://https://x/y.png", description=None),
    )
    assert resolver.calls == ["https://x/y.png", "https://x/y.png"]


def test_thumbnail_escaped_separator_belongs_to_url() -> None:
    (thumbnail,) = scan_thumbnails(r"!a\|b|desc")

    assert thumbnail.url == "a|b"
    assert thumbnail.description == "desc"


def test_thumbnail_description_keeps_later_separators() -> None:
    (thumbnail,) = scan_thumbnails("!img.png|one|two")

    assert thumbnail.description == "one|two"


def test_thumbnail_empty_description_is_not_absent() -> None:
    (thumbnail,) = scan_thumbnails("!img.png|")

    assert thumbnail.description == ""


def test_stats_group() -> None:
    groups = split_groups("#Stats\n-HP:10\n-MP:20")

    assert groups == (
        Group(name="Stats", entries=(TableEntry("HP", "10"), TableEntry("MP", "20"))),
    )


def test_group_name_is_taken_verbatim() -> None:
    (group,) = split_groups("# Spaced name  \n-a:b")

    assert group.name == " Spaced name  "


def test_empty_header_name_and_empty_group() -> None:
    groups = split_groups("#\n#EmptySection\n")

    assert groups == (Group(name="", entries=()), Group(name="EmptySection", entries=()))


def test_multi_value_entries() -> None:
    assert decode_entry("-Tags:Red;Blue;Green") == TableEntry("Tags", ("Red", "Blue", "Green"))
    assert decode_entry(r"-Tags:Red\;White;Blue") == TableEntry("Tags", ("Red;White", "Blue"))


def test_single_value_collapses_to_string() -> None:
    entry = decode_entry(r"-Note:one\;two")

    assert entry == TableEntry("Note", "one;two")
    assert entry is not None and not entry.is_list


def test_trailing_separator_gives_a_list() -> None:
    assert decode_entry("-Tags:Red;") == TableEntry("Tags", ("Red", ""))


def test_escaped_colon_in_key() -> None:
    assert decode_entry(r"-Time\::Noon") == TableEntry("Time:", "Noon")


def test_value_keeps_later_colons() -> None:
    assert decode_entry("-Time:12:30") == TableEntry("Time", "12:30")


def test_other_backslashes_pass_through() -> None:
    assert decode_entry(r"-Path:C\\dir\n") == TableEntry("Path", r"C\\dir\n")


def test_empty_key_and_value_are_accepted() -> None:
    assert decode_entry("-:") == TableEntry("", "")
    assert decode_entry("-Key:") == TableEntry("Key", "")


@pytest.mark.parametrize("line", ["-NoColon", r"-Escaped\:only", "Key:Value", ""])
def test_lines_without_entry_shape_are_rejected(line: str) -> None:
    assert decode_entry(line) is None


def test_link_values_are_stored_verbatim() -> None:
    assert decode_entry("-Owner:[[John Doe]]") == TableEntry("Owner", "[[John Doe]]")
    assert decode_entry(r"-Owner:[[John Doe\|Jr|Johnny]]") == TableEntry("Owner", r"[[John Doe\|Jr|Johnny]]")


def test_full_document() -> None:
    document = parse_aside(SAMPLE)

    assert document == AsideDocument(
        thumbnails=(
            Thumbnail(url="https://x/y.png", description="desc"),
            Thumbnail(url="portrait.png"),
        ),
        groups=(
            Group(name="Stats", entries=(TableEntry("HP", "10"), TableEntry("MP", "20"))),
            Group(
                name="Details",
                entries=(
                    TableEntry("Tags", ("Red", "Blue", "Green")),
                    TableEntry("Owner", "[[John Doe|Johnny]]"),
                ),
            ),
        ),
    )


def test_malformed_lines_are_skipped_silently() -> None:
    document = parse_aside("stray text\n#Group\n-NoColon\n\nnot an entry\n-Key:Value")

    assert document.groups == (Group(name="Group", entries=(TableEntry("Key", "Value"),)),)


def test_diagnostics_report_skipped_lines() -> None:
    skipped: list[SkippedLine] = []

    parse_aside("stray text\n!img.png\n#Group\n-NoColon\n\nnot an entry\n-Key:Value", diagnostics=skipped)

    assert skipped == [
        SkippedLine(line_number=1, text="stray text", reason="outside of a group"),
        SkippedLine(line_number=4, text="-NoColon", reason="missing key separator"),
        SkippedLine(line_number=6, text="not an entry", reason="not an entry"),
    ]


def test_crlf_line_endings() -> None:
    document = parse_aside("!img.png|cap\r\n#Stats\r\n-HP:10\r\n")

    assert document.thumbnails == (Thumbnail(url="img.png", description="cap"),)
    assert document.groups == (Group(name="Stats", entries=(TableEntry("HP", "10"),)),)


def test_empty_source() -> None:
    document = parse_aside("")

    assert document == AsideDocument()
    assert document.is_empty


def test_parsing_is_deterministic() -> None:
    assert parse_aside(SAMPLE) == parse_aside(SAMPLE)


@pytest.mark.parametrize(
    "source",
    ["#", "-", "!", ":", "\\", "!|", "-\\", "#\n-\\:", "[[", "\n\n\n", "#a\n!b\n-c;d:e;f\\"],
)
def test_parser_never_raises(source: str) -> None:
    assert isinstance(parse_aside(source), AsideDocument)
