"""Tests for single-line classification."""

from __future__ import annotations

import pytest

from hls_playlist.parser.lines import Line, LineKind, classify, normalize_line


@pytest.mark.parametrize(
    ("text", "expected"),
    [
        ("", Line(LineKind.BLANK)),
        ("#EXTM3U", Line(LineKind.HEADER, "#EXTM3U")),
        ("# a note", Line(LineKind.COMMENT, value="# a note")),
        ("#EXT-X-VERSION:3", Line(LineKind.TAG, "#EXT-X-VERSION", "3")),
        ("#EXT-X-ENDLIST", Line(LineKind.TAG, "#EXT-X-ENDLIST", "")),
        ("#EXTINF:9.009,", Line(LineKind.TAG, "#EXTINF", "9.009,")),
        ("segment.ts", Line(LineKind.CONTENT, value="segment.ts")),
    ],
)
def test_classify(text: str, expected: Line) -> None:
    assert classify(text) == expected


def test_tag_value_keeps_later_colons() -> None:
    line = classify('#EXT-X-KEY:METHOD=AES-128,URI="https://example.com/k"')
    assert line.name == "#EXT-X-KEY"
    assert line.value == 'METHOD=AES-128,URI="https://example.com/k"'


def test_unknown_ext_tag_is_still_a_tag() -> None:
    assert classify("#EXT-X-DISCONTINUITY").kind is LineKind.TAG


def test_header_must_match_exactly() -> None:
    assert classify("#EXTM3U ").kind is LineKind.TAG


def test_normalize_line_strips_terminators_and_decodes() -> None:
    assert normalize_line("a.ts\r\n") == "a.ts"
    assert normalize_line(b"#EXTM3U\n") == "#EXTM3U"
    assert normalize_line("  keep spaces  \n") == "  keep spaces  "
