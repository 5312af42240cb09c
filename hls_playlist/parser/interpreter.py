"""Tag-driven scanner that turns playlist lines into a :class:`Playlist`."""

from __future__ import annotations

import io
from typing import Any, Callable, Dict, Iterable, Iterator, Optional, Tuple, Union

from ..models import ByteRange, Key, Map, Media, Playlist, PlaylistType, Segment, Variant
from .attributes import parse_attributes, parse_byte_range, parse_ext_inf, parse_float, parse_int
from .builder import PlaylistBuilder
from .diagnostics import DiagnosticsSink, log_diagnostic
from .errors import PlaylistError
from .lines import BOM, HEADER, Line, LineKind, classify, normalize_line

LineSource = Iterable[Union[str, bytes]]

EXT_X_VERSION = "#EXT-X-VERSION"
EXT_X_PLAYLIST_TYPE = "#EXT-X-PLAYLIST-TYPE"
EXT_X_MEDIA_SEQUENCE = "#EXT-X-MEDIA-SEQUENCE"
EXT_X_TARGETDURATION = "#EXT-X-TARGETDURATION"
EXT_X_ENDLIST = "#EXT-X-ENDLIST"
EXT_X_BYTERANGE = "#EXT-X-BYTERANGE"
EXT_X_BITRATE = "#EXT-X-BITRATE"
EXT_X_KEY = "#EXT-X-KEY"
EXT_X_MAP = "#EXT-X-MAP"
EXT_X_MEDIA = "#EXT-X-MEDIA"
EXT_X_STREAM_INF = "#EXT-X-STREAM-INF"
EXTINF = "#EXTINF"


class ParserState:
    """Cross-line state.

    ``pending_*`` values belong to the next URI line and are cleared when it is
    consumed. ``current_*`` values apply to every following segment until the
    same tag appears again.
    """

    def __init__(self) -> None:
        self.pending_duration = 0.0
        self.pending_title = ""
        self.pending_byte_range: Optional[ByteRange] = None
        self.pending_variant: Optional[Variant] = None
        self.current_key: Optional[Key] = None
        self.current_map: Optional[Map] = None
        self.current_bitrate: Optional[int] = None
        self.awaiting_segment_uri = False
        self.awaiting_variant_uri = False


class PlaylistInterpreter:
    """Runs one parse over a line source. Instances are single-use."""

    def __init__(self, diagnostics: Optional[DiagnosticsSink] = None) -> None:
        self._diagnostics = diagnostics if diagnostics is not None else log_diagnostic
        self._builder = PlaylistBuilder()
        self._state = ParserState()
        self._line_number = 0
        self._handlers: Dict[str, Callable[[str], None]] = {
            EXT_X_VERSION: self._on_version,
            EXT_X_PLAYLIST_TYPE: self._on_playlist_type,
            EXT_X_MEDIA_SEQUENCE: self._on_media_sequence,
            EXT_X_TARGETDURATION: self._on_target_duration,
            EXT_X_ENDLIST: self._on_end_list,
            EXT_X_BYTERANGE: self._on_byte_range,
            EXT_X_BITRATE: self._on_bitrate,
            EXT_X_KEY: self._on_key,
            EXT_X_MAP: self._on_map,
            EXT_X_MEDIA: self._on_media,
            EXT_X_STREAM_INF: self._on_stream_inf,
            EXTINF: self._on_ext_inf,
        }

    def run(self, source: LineSource) -> Playlist:
        lines = _numbered_lines(source)
        self._read_header(lines)
        for number, text in lines:
            self._line_number = number
            self._consume(classify(text))
        return self._builder.build()

    def _read_header(self, lines: Iterator[Tuple[int, str]]) -> None:
        for number, text in lines:
            if number == 1 and text.startswith(BOM):
                text = text[len(BOM):]
            line = classify(text)
            if line.kind is LineKind.BLANK:
                continue
            if line.kind is LineKind.HEADER:
                return
            raise PlaylistError(f"Playlist must start with {HEADER}, found {text!r} on line {number}")
        raise PlaylistError(f"Playlist is empty; expected {HEADER}")

    def _consume(self, line: Line) -> None:
        if line.kind in (LineKind.BLANK, LineKind.COMMENT):
            return
        if line.kind is LineKind.HEADER:
            self._report(f"repeated {HEADER} ignored")
        elif line.kind is LineKind.CONTENT:
            self._on_uri(line.value)
        else:
            handler = self._handlers.get(line.name)
            if handler is None:
                self._report(f"unrecognized tag {line.name}")
                return
            handler(line.value)

    def _report(self, message: str) -> None:
        self._diagnostics(self._line_number, message)

    def _attributes(self, value: str) -> Dict[str, str]:
        return parse_attributes(value, report=self._report)

    def _int_value(self, tag: str, value: str) -> Optional[int]:
        number = parse_int(value)
        if number is None:
            self._report(f"non-numeric {tag} value {value!r}")
        return number

    def _on_version(self, value: str) -> None:
        version = self._int_value(EXT_X_VERSION, value)
        if version is not None:
            self._builder.version = version

    def _on_playlist_type(self, value: str) -> None:
        try:
            self._builder.list_type = PlaylistType(value.strip())
        except ValueError:
            self._report(f"unknown playlist type {value!r}")

    def _on_media_sequence(self, value: str) -> None:
        sequence = self._int_value(EXT_X_MEDIA_SEQUENCE, value)
        if sequence is not None:
            self._builder.media_sequence = sequence

    def _on_target_duration(self, value: str) -> None:
        duration = self._int_value(EXT_X_TARGETDURATION, value)
        if duration is not None:
            self._builder.target_duration = duration

    def _on_end_list(self, value: str) -> None:
        self._builder.end_of_list = True

    def _on_byte_range(self, value: str) -> None:
        self._state.pending_byte_range = parse_byte_range(value, report=self._report)

    def _on_bitrate(self, value: str) -> None:
        bitrate = self._int_value(EXT_X_BITRATE, value)
        if bitrate is not None:
            self._state.current_bitrate = bitrate

    def _on_key(self, value: str) -> None:
        attrs = self._attributes(value)
        self._state.current_key = Key(
            method=attrs.get("METHOD", ""),
            url=attrs.get("URI"),
            iv=attrs.get("IV"),
        )

    def _on_map(self, value: str) -> None:
        attrs = self._attributes(value)
        byte_range = attrs.get("BYTERANGE")
        self._state.current_map = Map(
            url=attrs.get("URI", ""),
            byte_range=parse_byte_range(byte_range, report=self._report) if byte_range is not None else None,
        )

    def _on_media(self, value: str) -> None:
        attrs = self._attributes(value)
        self._builder.add_media(
            Media(
                kind=attrs.get("TYPE", ""),
                url=attrs.get("URI"),
                group_id=attrs.get("GROUP-ID", ""),
                language=attrs.get("LANGUAGE", ""),
                name=attrs.get("NAME", ""),
                is_default=attrs.get("DEFAULT") == "YES",
                is_forced=attrs.get("FORCED") == "YES",
                auto_select=attrs.get("AUTOSELECT") == "YES",
            )
        )

    def _on_stream_inf(self, value: str) -> None:
        if self._state.awaiting_variant_uri:
            self._report(f"{EXT_X_STREAM_INF} without a URI line was dropped")
        attrs = self._attributes(value)
        fields: Dict[str, Any] = {
            "codecs": attrs.get("CODECS", ""),
            "resolution": attrs.get("RESOLUTION", ""),
            "audio": attrs.get("AUDIO", ""),
            "video": attrs.get("VIDEO", ""),
            "subtitles": attrs.get("SUBTITLES", ""),
            "closed_captions": attrs.get("CLOSED-CAPTIONS", ""),
        }
        for name, field in (("BANDWIDTH", "bandwidth"), ("AVERAGE-BANDWIDTH", "average_bandwidth")):
            if name in attrs:
                number = self._int_value(name, attrs[name])
                if number is not None:
                    fields[field] = number
        if "FRAME-RATE" in attrs:
            frame_rate = parse_float(attrs["FRAME-RATE"])
            if frame_rate is None:
                self._report(f"non-numeric FRAME-RATE value {attrs['FRAME-RATE']!r}")
            else:
                fields["frame_rate"] = frame_rate
        self._state.pending_variant = Variant(**fields)
        self._state.awaiting_variant_uri = True

    def _on_ext_inf(self, value: str) -> None:
        if self._state.awaiting_segment_uri:
            self._report(f"{EXTINF} without a URI line was dropped")
        duration, title = parse_ext_inf(value)
        if duration is None:
            self._report(f"invalid {EXTINF} duration in {value!r}")
            duration = 0.0
        self._state.pending_duration = duration
        self._state.pending_title = title
        self._state.awaiting_segment_uri = True

    def _on_uri(self, text: str) -> None:
        state = self._state
        if state.awaiting_segment_uri:
            self._builder.add_segment(
                Segment(
                    duration=state.pending_duration,
                    url=text,
                    title=state.pending_title,
                    byte_range=state.pending_byte_range,
                    bitrate=state.current_bitrate,
                    encryption_key=state.current_key,
                    init_map=state.current_map,
                )
            )
            state.pending_duration = 0.0
            state.pending_title = ""
            state.pending_byte_range = None
            state.awaiting_segment_uri = False
        elif state.awaiting_variant_uri and state.pending_variant is not None:
            self._builder.add_variant(state.pending_variant.model_copy(update={"url": text}))
            state.pending_variant = None
            state.awaiting_variant_uri = False
        else:
            self._report(f"unexpected URI line {text!r} with no preceding {EXTINF} or {EXT_X_STREAM_INF}")


def _numbered_lines(source: LineSource) -> Iterator[Tuple[int, str]]:
    iterator = iter(source)
    number = 0
    while True:
        try:
            raw = next(iterator)
            text = normalize_line(raw)
        except StopIteration:
            return
        except (OSError, UnicodeDecodeError) as exc:
            raise PlaylistError(f"Failed to read playlist at line {number + 1}: {exc}") from exc
        number += 1
        yield number, text


def parse(source: LineSource, diagnostics: Optional[DiagnosticsSink] = None) -> Playlist:
    """Parses a playlist from any iterable of lines (file object, list, HTTP line stream).

    Raises :class:`PlaylistError` when the input is empty, does not start with
    ``#EXTM3U``, or cannot be read. Every other problem is passed to
    ``diagnostics`` (``(line_number, message)``; logged by default) and parsing
    continues.
    """

    return PlaylistInterpreter(diagnostics).run(source)


def parse_text(text: str, diagnostics: Optional[DiagnosticsSink] = None) -> Playlist:
    return parse(io.StringIO(text, newline=None), diagnostics)
