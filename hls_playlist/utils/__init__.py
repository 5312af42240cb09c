"""Utility helpers for HTTP and URL handling."""

from .http_client import HttpClient
from .urls import base_url_of, resolve_url

__all__ = ["HttpClient", "resolve_url", "base_url_of"]
