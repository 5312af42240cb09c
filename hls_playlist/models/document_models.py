"""A parsed playlist together with the URL it was fetched from."""

from __future__ import annotations

from typing import List

from pydantic import BaseModel, ConfigDict

from ..utils.urls import base_url_of, resolve_url
from .playlist_models import Playlist


class PlaylistDocument(BaseModel):
    """Resolves the verbatim URLs of ``playlist`` against ``url``."""

    model_config = ConfigDict(frozen=True)

    url: str
    playlist: Playlist

    @property
    def base_url(self) -> str:
        return base_url_of(self.url)

    @property
    def segment_urls(self) -> List[str]:
        return [resolve_url(self.url, segment.url) for segment in self.playlist.segments]

    @property
    def variant_urls(self) -> List[str]:
        return [resolve_url(self.url, variant.url) for variant in self.playlist.variants]

    @property
    def media_urls(self) -> List[str]:
        return [resolve_url(self.url, media.url) for media in self.playlist.media if media.url]

    @property
    def key_urls(self) -> List[str]:
        """Distinct key URIs in first-use order."""

        urls: List[str] = []
        for segment in self.playlist.segments:
            key = segment.encryption_key
            if key and key.url:
                resolved = resolve_url(self.url, key.url)
                if resolved not in urls:
                    urls.append(resolved)
        return urls

    @property
    def map_urls(self) -> List[str]:
        urls: List[str] = []
        for segment in self.playlist.segments:
            init_map = segment.init_map
            if init_map and init_map.url:
                resolved = resolve_url(self.url, init_map.url)
                if resolved not in urls:
                    urls.append(resolved)
        return urls
