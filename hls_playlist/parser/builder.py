"""Accumulator for the playlist being parsed."""

from __future__ import annotations

from typing import List, Optional

from ..models import Media, Playlist, PlaylistType, Segment, Variant


class PlaylistBuilder:
    """Append-only collections plus last-write-wins scalar fields."""

    def __init__(self) -> None:
        self.end_of_list = False
        self.version = 0
        self.target_duration = 0
        self.list_type: Optional[PlaylistType] = None
        self.media_sequence = 0
        self._segments: List[Segment] = []
        self._variants: List[Variant] = []
        self._media: List[Media] = []

    def add_segment(self, segment: Segment) -> None:
        self._segments.append(segment)

    def add_variant(self, variant: Variant) -> None:
        self._variants.append(variant)

    def add_media(self, media: Media) -> None:
        self._media.append(media)

    def build(self) -> Playlist:
        return Playlist(
            end_of_list=self.end_of_list,
            version=self.version,
            target_duration=self.target_duration,
            list_type=self.list_type,
            media_sequence=self.media_sequence,
            segments=tuple(self._segments),
            variants=tuple(self._variants),
            media=tuple(self._media),
        )
