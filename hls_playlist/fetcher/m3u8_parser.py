"""Fetches m3u8 playlists and parses them into documents."""

from __future__ import annotations

import asyncio
import logging
from typing import List, Optional, Sequence

from ..models import PlaylistDocument
from ..parser import DiagnosticsSink, parse, parse_text
from ..utils.http_client import HttpClient


class M3U8Parser:
    """Pairs an :class:`HttpClient` with the playlist parser."""

    def __init__(self, http_client: HttpClient, diagnostics: Optional[DiagnosticsSink] = None) -> None:
        self._http_client = http_client
        self._diagnostics = diagnostics

    def parse(self, m3u8_url: str) -> PlaylistDocument:
        playlist = parse(self._http_client.iter_lines(m3u8_url), self._diagnostics)
        if not playlist.segments and not playlist.variants:
            logging.warning("m3u8 at %s did not contain segments or variants", m3u8_url)
        return PlaylistDocument(url=m3u8_url, playlist=playlist)

    def parse_many(self, urls: Sequence[str], workers: int = 4) -> List[PlaylistDocument]:
        """Fetch and parse several playlists concurrently, keeping input order."""

        if not urls:
            return []
        return asyncio.run(self._parse_many(urls, workers))

    async def _parse_many(self, urls: Sequence[str], workers: int) -> List[PlaylistDocument]:
        sem = asyncio.Semaphore(max(1, workers))
        try:
            tasks = [self._parse_single(sem, url) for url in urls]
            return list(await asyncio.gather(*tasks))
        finally:
            await self._http_client.aclose()

    async def _parse_single(self, sem: asyncio.Semaphore, url: str) -> PlaylistDocument:
        async with sem:
            text = await self._http_client.fetch_text_async(url)
        logging.debug("Fetched %s (%s bytes)", url, len(text))
        return PlaylistDocument(url=url, playlist=parse_text(text, self._diagnostics))
