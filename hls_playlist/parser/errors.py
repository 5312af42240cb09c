"""Errors raised by the playlist parser."""


class PlaylistError(Exception):
    """Raised when the input cannot be parsed as a playlist at all."""
