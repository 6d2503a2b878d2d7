import pytest

from manscan.errors import SectionNotFound
from manscan.manpage.roff import (
    MacroKind,
    extract_section,
    find_section,
    get_section,
    iter_macros,
    macro_after,
    next_macro,
    strip_macros,
)


def test_next_macro_finds_first_macro_at_line_start() -> None:
    doc = "text .B not a macro\n.B bold\n"
    macro = next_macro(doc, 0)

    assert macro is not None
    assert macro.kind is MacroKind.BOLD
    assert doc[macro.start:macro.end] == ".B "
    assert macro.name == "B"


def test_next_macro_returns_none_without_macros() -> None:
    assert next_macro("plain text\nmore text\n", 0) is None
    assert next_macro("", 0) is None


def test_next_macro_requires_trailing_space() -> None:
    doc = ".TP\n.IP -v\n"
    macro = next_macro(doc, 0)

    assert macro.kind is MacroKind.INDENTED_PARAGRAPH
    assert macro.start == 4


@pytest.mark.parametrize(
    "line, kind",
    [
        (".B x", MacroKind.BOLD),
        (".IP x", MacroKind.INDENTED_PARAGRAPH),
        (".PP x", MacroKind.PARAGRAPH),
        (".SH x", MacroKind.SECTION_HEADING),
        (".TP 8", MacroKind.TAGGED_PARAGRAPH),
        (".BR x", MacroKind.OTHER),
        (".TH x", MacroKind.OTHER),
    ],
)
def test_macro_kinds(line: str, kind: MacroKind) -> None:
    assert next_macro(line + "\n", 0).kind is kind


def test_unrecognized_macro_matches_no_named_kind() -> None:
    macro = next_macro(".XYZ arg\n", 0)

    assert macro.kind is MacroKind.OTHER
    assert macro.name is None
    assert all(macro.kind != kind for kind in MacroKind if kind is not MacroKind.OTHER)


def test_next_macro_starts_at_offset() -> None:
    doc = ".SH NAME\nfoo\n.SH DESCRIPTION\nbar\n"
    first = next_macro(doc, 0)
    second = next_macro(doc, first.end)

    assert doc[second.start:].startswith(".SH DESCRIPTION")


def test_macro_iteration_is_strictly_increasing(sample_page: str) -> None:
    macros = list(iter_macros(sample_page, 0))

    assert len(macros) > 3
    for previous, current in zip(macros, macros[1:]):
        assert current.start >= previous.end
        assert current.start > previous.start


def test_macro_after_matches_next_macro_from_end(sample_page: str) -> None:
    macro = next_macro(sample_page, 0)
    while macro is not None:
        following = macro_after(sample_page, macro)
        assert following == next_macro(sample_page, macro.end)
        macro = following


def test_iter_macros_is_restartable(sample_page: str) -> None:
    macros = list(iter_macros(sample_page, 0))
    restarted = list(iter_macros(sample_page, macros[2].start))

    assert restarted == macros[2:]


def test_find_section_returns_offset_after_heading(sample_page: str) -> None:
    offset = find_section(sample_page, "NAME")

    assert sample_page[:offset].endswith(".SH NAME")


def test_find_section_accepts_pattern() -> None:
    doc = ".SH NAME\nfoo\n.SH SWITCHES\n.B -a\nall\n"
    offset = find_section(doc, "(OPTIONS|SWITCHES)")

    assert doc[:offset].endswith(".SH SWITCHES")


def test_find_section_is_line_anchored() -> None:
    with pytest.raises(SectionNotFound):
        find_section("see .SH OPTIONS for details\n", "OPTIONS")


def test_find_section_missing_raises_lookup_error() -> None:
    with pytest.raises(LookupError):
        find_section(".SH NAME\nfoo\n", "OPTIONS")


def test_extract_section_stops_at_next_heading(sample_page: str) -> None:
    body = extract_section(sample_page, find_section(sample_page, "DESCRIPTION"))

    assert body == "This is just a sample..."


def test_extract_section_runs_to_end_of_document() -> None:
    doc = ".SH NAME\nfoo\n.SH BUGS\nLots of them.\n\n"

    assert extract_section(doc, find_section(doc, "BUGS")) == "Lots of them."


def test_extract_section_removes_whole_macro_lines() -> None:
    doc = ".SH SYNOPSIS\n.B foo\n[options]\n.TP\nfile\n.SH DESCRIPTION\n"

    assert extract_section(doc, find_section(doc, "SYNOPSIS")) == "[options]\nfile"


def test_strip_macros_keeps_text_lines() -> None:
    assert strip_macros("a\n.PP\nb\n.B bold words\nc") == "a\nb\nc"


def test_get_section_sentinel_only_when_heading_missing() -> None:
    doc = ".SH NAME\n.SH DESCRIPTION\nbody\n"

    assert get_section(doc, "NAME") == ""
    assert get_section(doc, "DESCRIPTION") == "body"
    assert get_section(doc, "OPTIONS") == "N/A"
