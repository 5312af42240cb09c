"""End-to-end tests for the playlist parser."""

from __future__ import annotations

import io

import pytest
from pydantic import ValidationError

from hls_playlist import PlaylistError, PlaylistType, parse, parse_text
from hls_playlist.models import ByteRange, Key, Segment
from hls_playlist.parser import DiagnosticsCollector


def test_media_playlist(testdata_path) -> None:
    with open(testdata_path("media.m3u8"), "r", encoding="utf-8") as handle:
        playlist = parse(handle)

    assert playlist.version == 3
    assert playlist.target_duration == 10
    assert playlist.variants == ()
    assert playlist.is_media and not playlist.is_master
    assert list(playlist.segments) == [
        Segment(url="http://media.example.com/first.ts", duration=9.009),
        Segment(url="http://media.example.com/second.ts", duration=9.009),
        Segment(url="http://media.example.com/third.ts", duration=3.003),
    ]
    assert playlist.end_of_list is False


def test_master_playlist(testdata_path) -> None:
    collector = DiagnosticsCollector()
    with open(testdata_path("master.m3u8"), "rb") as handle:
        playlist = parse(handle, collector)

    assert playlist.version == 4
    assert playlist.segments == ()
    assert playlist.is_master
    assert [variant.url for variant in playlist.variants] == [
        "http://example.com/low.m3u8",
        "http://example.com/mid.m3u8",
        "hi/index.m3u8",
        "audio-only.m3u8",
    ]

    low = playlist.variants[0]
    assert low.bandwidth == 1280000
    assert low.average_bandwidth == 1000000
    assert low.codecs == "avc1.4d401e,mp4a.40.2"
    assert low.resolution == "640x360"
    assert low.frame_rate == pytest.approx(29.97)
    assert low.audio == "aac"
    assert low.subtitles == "subs"
    assert low.closed_captions == "NONE"
    assert playlist.variants[3].average_bandwidth == 0
    assert playlist.variants[3].resolution == ""

    assert [(m.kind, m.language) for m in playlist.media] == [
        ("AUDIO", "en"),
        ("AUDIO", "de"),
        ("SUBTITLES", "en"),
    ]
    english = playlist.media[0]
    assert english.group_id == "aac"
    assert english.name == "English"
    assert english.is_default and english.auto_select and not english.is_forced
    assert english.url == "audio/en/prog_index.m3u8"
    assert not playlist.media[1].is_default

    # #EXT-X-INDEPENDENT-SEGMENTS is not interpreted
    assert [(d.line_number, d.message) for d in collector] == [
        (3, "unrecognized tag #EXT-X-INDEPENDENT-SEGMENTS")
    ]


def test_keys_maps_and_byte_ranges(testdata_path) -> None:
    with open(testdata_path("encrypted.m3u8"), "r", encoding="utf-8") as handle:
        playlist = parse(handle)

    assert playlist.media_sequence == 2680
    assert playlist.list_type is PlaylistType.VOD
    assert playlist.end_of_list is True

    seg0, seg1, seg2, seg3 = playlist.segments
    assert seg0.title == "intro"
    assert seg0.encryption_key is None
    assert seg0.init_map is None
    assert seg0.byte_range is None

    assert seg1.encryption_key == Key(
        method="AES-128",
        url="https://priv.example.com/key.php?r=52",
        iv="0x9c7db8778570d05c3177c349fd9236aa",
    )
    assert seg1.byte_range == ByteRange(length=75232, offset=720)
    assert seg1.init_map.url == "init.mp4"
    assert seg1.init_map.byte_range == ByteRange(length=720, offset=0)
    assert seg1.bitrate is None

    # byte range is one-shot, key and map persist
    assert seg2.byte_range is None
    assert seg2.encryption_key is seg1.encryption_key
    assert seg2.init_map is seg1.init_map
    assert seg2.bitrate == 1500

    assert seg3.encryption_key is not seg2.encryption_key
    assert seg3.encryption_key.url == "https://priv.example.com/key.php?r=53"
    assert seg3.encryption_key.iv is None
    assert seg3.init_map is seg1.init_map
    assert seg3.bitrate == 1500
    assert playlist.total_duration == pytest.approx(23.5)


def test_empty_input_is_a_structural_error() -> None:
    with pytest.raises(PlaylistError):
        parse([])
    with pytest.raises(PlaylistError):
        parse_text("\n\n")


def test_missing_header_is_a_structural_error() -> None:
    with pytest.raises(PlaylistError, match="#EXTM3U"):
        parse_text("#EXT-X-VERSION:3\n#EXTINF:1,\na.ts\n")


def test_header_check_stops_reading() -> None:
    consumed = []

    def source():
        for line in ["not a playlist", "#EXTM3U", "a.ts"]:
            consumed.append(line)
            yield line

    with pytest.raises(PlaylistError):
        parse(source())
    assert consumed == ["not a playlist"]


def test_leading_blank_lines_and_bom_are_skipped() -> None:
    playlist = parse_text("\ufeff#EXTM3U\r\n#EXT-X-VERSION:6\r\n")
    assert playlist.version == 6
    assert parse(["", "#EXTM3U", "#EXT-X-VERSION:2"]).version == 2


def test_read_failure_is_a_structural_error() -> None:
    def source():
        yield "#EXTM3U"
        yield "#EXTINF:4,"
        raise OSError("connection reset")

    with pytest.raises(PlaylistError) as excinfo:
        parse(source())
    assert isinstance(excinfo.value.__cause__, OSError)


def test_undecodable_bytes_are_a_structural_error() -> None:
    with pytest.raises(PlaylistError):
        parse(io.BytesIO(b"#EXTM3U\n\xff\xfe.ts\n"))


def test_tolerated_anomalies_are_reported_with_line_numbers() -> None:
    collector = DiagnosticsCollector()
    playlist = parse_text(
        "\n".join(
            [
                "#EXTM3U",
                "#EXT-X-VERSION:three",
                "#EXT-X-TARGETDURATION:10",
                "#EXT-X-PLAYLIST-TYPE:LIVE",
                "orphan.ts",
                "#EXT-X-CUSTOM:1",
                "#EXTINF:bad,title",
                "a.ts",
                "#EXTM3U",
            ]
        ),
        collector,
    )

    assert playlist.version == 0
    assert playlist.target_duration == 10
    assert playlist.list_type is None
    assert len(playlist.segments) == 1
    assert playlist.segments[0].duration == 0.0
    assert playlist.segments[0].title == "title"
    assert [d.line_number for d in collector] == [2, 4, 5, 6, 7, 9]


def test_bad_attribute_does_not_abort_the_parse() -> None:
    collector = DiagnosticsCollector()
    playlist = parse_text(
        '#EXTM3U\n#EXT-X-STREAM-INF:BANDWIDTH=high,oops,RESOLUTION=1x1\nv.m3u8\n',
        collector,
    )
    assert playlist.variants[0].bandwidth == 0
    assert playlist.variants[0].resolution == "1x1"
    assert playlist.variants[0].url == "v.m3u8"
    assert len(collector) == 2
    assert all(d.line_number == 2 for d in collector)


def test_scalar_tags_are_last_write_wins() -> None:
    playlist = parse_text("#EXTM3U\n#EXT-X-VERSION:3\n#EXT-X-VERSION:5\n#EXT-X-PLAYLIST-TYPE:EVENT\n")
    assert playlist.version == 5
    assert playlist.list_type is PlaylistType.EVENT


def test_unrecognized_tags_do_not_fail_parsing() -> None:
    collector = DiagnosticsCollector()
    playlist = parse_text(
        "#EXTM3U\n#EXT-X-DISCONTINUITY\n#EXT-X-PROGRAM-DATE-TIME:2025-01-01T00:00:00Z\n#EXTINF:2,\nx.ts\n",
        collector,
    )
    assert [segment.url for segment in playlist.segments] == ["x.ts"]
    assert len(collector) == 2


def test_extinf_without_uri_is_replaced() -> None:
    collector = DiagnosticsCollector()
    playlist = parse_text("#EXTM3U\n#EXTINF:1,first\n#EXTINF:2,second\nb.ts\n", collector)
    assert [(s.duration, s.title) for s in playlist.segments] == [(2.0, "second")]
    assert len(collector) == 1


def test_segments_before_first_key_have_no_key() -> None:
    lines = ["#EXTM3U"]
    for name in ("a0.ts", "a1.ts"):
        lines += ["#EXTINF:1,", name]
    lines.append('#EXT-X-KEY:METHOD=AES-128,URI="k1"')
    for name in ("b0.ts", "b1.ts", "b2.ts"):
        lines += ["#EXTINF:1,", name]
    lines += ["#EXT-X-KEY:METHOD=NONE", "#EXTINF:1,", "c.ts"]
    playlist = parse_text("\n".join(lines))
    keys = [segment.encryption_key for segment in playlist.segments]
    assert keys[0] is None and keys[1] is None
    assert keys[2] is keys[3] is keys[4]
    assert keys[2].url == "k1"
    assert keys[5].method == "NONE"
    assert keys[5].url is None


def test_media_without_uri() -> None:
    playlist = parse_text('#EXTM3U\n#EXT-X-MEDIA:TYPE=CLOSED-CAPTIONS,GROUP-ID="cc",NAME="CC1",INSTREAM-ID="CC1"\n')
    assert playlist.media[0].url is None
    assert playlist.media[0].kind == "CLOSED-CAPTIONS"


def test_reparsing_is_idempotent(read_testdata) -> None:
    text = read_testdata("encrypted.m3u8")
    assert parse_text(text) == parse_text(text)


def test_playlist_is_immutable() -> None:
    playlist = parse_text("#EXTM3U\n#EXTINF:1,\na.ts\n")
    with pytest.raises(ValidationError):
        playlist.version = 9
    with pytest.raises(ValidationError):
        playlist.segments[0].url = "b.ts"


def test_default_diagnostics_are_logged(caplog) -> None:
    with caplog.at_level("WARNING"):
        parse_text("#EXTM3U\nstray.ts\n")
    assert "Playlist line 2" in caplog.text
    assert "stray.ts" in caplog.text


def test_non_numeric_byte_ranges_are_reported() -> None:
    collector = DiagnosticsCollector()
    playlist = parse_text(
        "\n".join(
            [
                "#EXTM3U",
                "#EXT-X-BYTERANGE:abc@xyz",
                "#EXTINF:1,",
                "a.ts",
                '#EXT-X-MAP:URI="i.mp4",BYTERANGE="zz"',
                "#EXT-X-BYTERANGE:100@20",
                "#EXTINF:1,",
                "b.ts",
            ]
        ),
        collector,
    )

    first, second = playlist.segments
    assert first.byte_range == ByteRange(length=0, offset=0)
    assert second.init_map.byte_range == ByteRange(length=0, offset=0)
    assert second.byte_range == ByteRange(length=100, offset=20)
    assert [d.line_number for d in collector] == [2, 2, 5]
    assert "length" in collector.diagnostics[0].message
    assert "offset" in collector.diagnostics[1].message
