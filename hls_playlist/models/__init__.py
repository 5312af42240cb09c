"""Data models for parsed playlists, fetched documents, and diagnostics."""

from .diagnostic_models import Diagnostic
from .document_models import PlaylistDocument
from .playlist_models import ByteRange, Key, Map, Media, Playlist, PlaylistType, Segment, Variant

__all__ = [
    "ByteRange",
    "Key",
    "Map",
    "Media",
    "Segment",
    "Variant",
    "Playlist",
    "PlaylistType",
    "PlaylistDocument",
    "Diagnostic",
]
