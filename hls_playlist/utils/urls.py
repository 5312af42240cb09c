"""Helpers for turning playlist references into absolute URLs."""

from __future__ import annotations

from urllib.parse import urljoin


def resolve_url(base: str, reference: str) -> str:
    """Resolves ``reference`` against the URL of the playlist that contains it."""

    return urljoin(base, reference)


def base_url_of(url: str) -> str:
    if "/" not in url:
        return ""
    return url.rsplit("/", 1)[0] + "/"
