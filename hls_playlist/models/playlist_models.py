"""Pydantic models that describe master and media playlists."""

from __future__ import annotations

from enum import Enum
from typing import Optional, Tuple

from pydantic import BaseModel, ConfigDict


class PlaylistType(str, Enum):
    """Values allowed by #EXT-X-PLAYLIST-TYPE."""

    EVENT = "EVENT"
    VOD = "VOD"


class ByteRange(BaseModel):
    """A ``length@offset`` sub-range of a resource."""

    model_config = ConfigDict(frozen=True)

    length: int = 0
    offset: int = 0


class Key(BaseModel):
    """Encryption descriptor from #EXT-X-KEY."""

    model_config = ConfigDict(frozen=True)

    method: str = ""
    url: Optional[str] = None
    iv: Optional[str] = None


class Map(BaseModel):
    """Initialization segment from #EXT-X-MAP."""

    model_config = ConfigDict(frozen=True)

    url: str = ""
    byte_range: Optional[ByteRange] = None


class Segment(BaseModel):
    """One media chunk of a media playlist, in playback order."""

    model_config = ConfigDict(frozen=True)

    duration: float = 0.0
    url: str
    title: str = ""
    byte_range: Optional[ByteRange] = None
    bitrate: Optional[int] = None
    encryption_key: Optional[Key] = None
    init_map: Optional[Map] = None


class Variant(BaseModel):
    """A bitrate variant listed by a master playlist."""

    model_config = ConfigDict(frozen=True)

    bandwidth: int = 0
    average_bandwidth: int = 0
    url: str = ""
    codecs: str = ""
    resolution: str = ""
    audio: str = ""
    video: str = ""
    subtitles: str = ""
    closed_captions: str = ""
    frame_rate: float = 0.0


class Media(BaseModel):
    """An alternate rendition declared by #EXT-X-MEDIA."""

    model_config = ConfigDict(frozen=True)

    kind: str = ""
    url: Optional[str] = None
    group_id: str = ""
    language: str = ""
    name: str = ""
    is_default: bool = False
    is_forced: bool = False
    auto_select: bool = False


class Playlist(BaseModel):
    """Root of a parsed playlist.

    A master playlist carries ``variants`` and no ``segments``; a media playlist
    is the other way round. The parser does not enforce this, so callers that
    care should check :attr:`is_master` / :attr:`is_media`.
    """

    model_config = ConfigDict(frozen=True)

    end_of_list: bool = False
    version: int = 0
    target_duration: int = 0
    list_type: Optional[PlaylistType] = None
    media_sequence: int = 0
    segments: Tuple[Segment, ...] = ()
    variants: Tuple[Variant, ...] = ()
    media: Tuple[Media, ...] = ()

    @property
    def is_master(self) -> bool:
        return len(self.variants) > 0

    @property
    def is_media(self) -> bool:
        return len(self.segments) > 0 and not self.variants

    @property
    def total_duration(self) -> float:
        return sum(segment.duration for segment in self.segments)
