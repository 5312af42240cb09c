"""HTTP helpers for fetching playlists."""

from __future__ import annotations

import asyncio
import logging
from typing import Dict, Iterator, Optional

import aiohttp
import requests

USER_AGENT = "hls-playlist/0.1 (+https://pypi.org/project/hls-playlist/)"

DEFAULT_HEADERS: Dict[str, str] = {
    "user-agent": USER_AGENT,
    "accept": "application/vnd.apple.mpegurl, application/x-mpegurl, audio/mpegurl, */*",
}

PLAYLIST_ENCODING = "utf-8"


class HttpClient:
    """Fetches playlists with shared sessions and a request timeout."""

    def __init__(self, timeout: int = 10, headers: Optional[Dict[str, str]] = None) -> None:
        self.timeout = timeout
        self._headers = DEFAULT_HEADERS.copy()
        if headers:
            self._headers.update(headers)
        self._session = requests.Session()
        self._session.headers.update(self._headers)

        self._async_session: Optional[aiohttp.ClientSession] = None
        self._loop: Optional[asyncio.AbstractEventLoop] = None

    def fetch_text(self, url: str) -> str:
        """Fetch a whole playlist as text."""

        try:
            response = self._session.get(url, timeout=self.timeout)
            response.raise_for_status()
            response.encoding = PLAYLIST_ENCODING
            return response.text
        except requests.RequestException as exc:
            logging.error("Playlist download from %s failed: %s", url, exc)
            raise

    def iter_lines(self, url: str) -> Iterator[str]:
        """Stream a playlist line by line.

        Errors raised while the body is being read surface from the iterator.
        """

        try:
            response = self._session.get(url, stream=True, timeout=self.timeout)
            response.raise_for_status()
        except requests.RequestException as exc:
            logging.error("Playlist download from %s failed: %s", url, exc)
            raise
        with response:
            response.encoding = PLAYLIST_ENCODING
            yield from response.iter_lines(decode_unicode=True)

    async def fetch_text_async(self, url: str) -> str:
        """Asynchronously fetch a whole playlist as text."""

        session = await self._get_async_session()
        try:
            async with session.get(url) as resp:
                resp.raise_for_status()
                return await resp.text(encoding=PLAYLIST_ENCODING)
        except aiohttp.ClientError as exc:
            logging.error("Playlist download from %s failed: %s", url, exc)
            raise

    async def _get_async_session(self) -> aiohttp.ClientSession:
        """Returns a session bound to the running loop, replacing one left over from another loop."""

        current_loop = asyncio.get_running_loop()
        if self._async_session is not None and (self._async_session.closed or self._loop is not current_loop):
            # a session from a finished loop cannot be closed from this one
            self._async_session = None
        if self._async_session is None:
            self._async_session = aiohttp.ClientSession(
                timeout=aiohttp.ClientTimeout(total=self.timeout),
                headers=self._headers.copy(),
            )
            self._loop = current_loop
        return self._async_session

    async def aclose(self) -> None:
        """Close the async session; must run on the loop that created it."""

        if self._async_session is not None and not self._async_session.closed:
            await self._async_session.close()
        self._async_session = None
        self._loop = None

    def close(self) -> None:
        self._session.close()

        if self._async_session is not None and not self._async_session.closed:
            logging.warning("Async HTTP session was not closed with aclose(); dropping it")
        self._async_session = None
        self._loop = None

    def __enter__(self) -> "HttpClient":
        return self

    def __exit__(self, exc_type, exc_value, traceback) -> None:
        self.close()
