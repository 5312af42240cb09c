"""Line classifier, attribute-list parser, and tag interpreter for m3u8 playlists."""

from .attributes import parse_attributes, parse_byte_range
from .diagnostics import DiagnosticsCollector, DiagnosticsSink, log_diagnostic
from .errors import PlaylistError
from .interpreter import PlaylistInterpreter, parse, parse_text
from .lines import Line, LineKind, classify

__all__ = [
    "parse",
    "parse_text",
    "parse_attributes",
    "parse_byte_range",
    "classify",
    "Line",
    "LineKind",
    "PlaylistError",
    "PlaylistInterpreter",
    "DiagnosticsCollector",
    "DiagnosticsSink",
    "log_diagnostic",
]
