"""Parser for HLS (m3u8) master and media playlists."""

from .models import Key, Map, Media, Playlist, PlaylistType, Segment, Variant
from .parser import PlaylistError, parse, parse_text

__all__ = [
    "parse",
    "parse_text",
    "PlaylistError",
    "Playlist",
    "PlaylistType",
    "Segment",
    "Variant",
    "Media",
    "Key",
    "Map",
]
