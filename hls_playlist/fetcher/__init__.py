"""Fetch playlists over HTTP and parse them."""

from .m3u8_parser import M3U8Parser

__all__ = ["M3U8Parser"]
