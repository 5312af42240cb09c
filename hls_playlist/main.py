from __future__ import annotations

import argparse
import logging
import os
import sys

import requests
from dotenv import load_dotenv

from .fetcher.m3u8_parser import M3U8Parser
from .models import Playlist, PlaylistDocument
from .parser import DiagnosticsCollector, PlaylistError, log_diagnostic, parse
from .utils.http_client import HttpClient

load_dotenv()


def _env_str(name: str) -> str | None:
    value = os.getenv(name)
    if value is None or value == "":
        return None
    return value


def _env_int(name: str) -> int | None:
    value = _env_str(name)
    if value is None:
        return None
    try:
        return int(value)
    except ValueError:
        return None


def _env_bool(name: str) -> bool:
    value = _env_str(name)
    if value is None:
        return False
    return value.strip().lower() in {"1", "true", "yes", "on"}


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Parse an HLS playlist and list its segment and variant URLs.")
    parser.add_argument("url", nargs="?", default=_env_str("PLAYLIST_URL"), help="Playlist URL to fetch")
    parser.add_argument("--file", help="Parse a local playlist file instead of fetching a URL")
    parser.add_argument("--json", action="store_true", default=_env_bool("JSON_OUTPUT"), help="Print the parsed playlist as JSON")
    parser.add_argument(
        "--variants",
        action="store_true",
        default=_env_bool("FETCH_VARIANTS"),
        help="Fetch every variant of a master playlist and summarize it",
    )
    parser.add_argument(
        "--strict",
        action="store_true",
        default=_env_bool("STRICT"),
        help="Exit with status 1 if the playlist produced any diagnostics",
    )
    parser.add_argument("--timeout", type=int, default=_env_int("HTTP_TIMEOUT") or 10, help="HTTP timeout in seconds")
    parser.add_argument("--workers", type=int, default=_env_int("WORKERS") or 4, help="Concurrent variant downloads")
    parser.add_argument("--log-level", default=_env_str("LOG_LEVEL") or "INFO", help="Logging level (DEBUG, INFO, ...)")
    args = parser.parse_args(argv)
    if not args.url and not args.file:
        parser.error("a playlist URL or --file is required")
    return args


def configure_logging(level: str = "INFO") -> None:
    logging.basicConfig(
        level=getattr(logging, level.upper(), logging.INFO),
        format="%(asctime)s [%(levelname)s] %(message)s",
    )


def load_playlist(args: argparse.Namespace, http_client: HttpClient, diagnostics: DiagnosticsCollector) -> PlaylistDocument:
    if args.file:
        with open(args.file, "r", encoding="utf-8", newline=None) as handle:
            playlist = parse(handle, diagnostics)
        return PlaylistDocument(url=args.url or os.path.abspath(args.file), playlist=playlist)
    return M3U8Parser(http_client, diagnostics).parse(args.url)


def print_urls(document: PlaylistDocument) -> None:
    for segment in document.playlist.segments:
        print(segment.url)
    for url in document.variant_urls:
        print(url)


def print_summary(playlist: Playlist) -> None:
    if playlist.is_master:
        logging.info("Master playlist: %s variants, %s renditions", len(playlist.variants), len(playlist.media))
        for variant in playlist.variants:
            logging.info(
                "  %-10s | %-12s | %s",
                variant.bandwidth,
                variant.resolution or "-",
                variant.codecs or "-",
            )
    else:
        logging.info(
            "Media playlist: %s segments, %.3fs total, target duration %ss%s",
            len(playlist.segments),
            playlist.total_duration,
            playlist.target_duration,
            ", ended" if playlist.end_of_list else "",
        )


def summarize_variants(document: PlaylistDocument, m3u8_parser: M3U8Parser, workers: int) -> None:
    if not document.playlist.is_master:
        logging.warning("--variants only applies to master playlists")
        return
    urls = document.variant_urls
    logging.info("Fetching %s variant playlists ...", len(urls))
    try:
        variants = m3u8_parser.parse_many(urls, workers=workers)
    except Exception as exc:
        logging.error("Variant download failed: %s", exc)
        return
    for variant, fetched in zip(document.playlist.variants, variants):
        logging.info(
            "  %-10s | %4s segments | %9.3fs | %s",
            variant.bandwidth,
            len(fetched.playlist.segments),
            fetched.playlist.total_duration,
            fetched.url,
        )


def main(argv: list[str] | None = None) -> int:
    args = parse_args(argv)
    configure_logging(args.log_level)

    diagnostics = DiagnosticsCollector(forward=log_diagnostic)
    with HttpClient(timeout=args.timeout) as http_client:
        try:
            document = load_playlist(args, http_client, diagnostics)
        except PlaylistError as exc:
            logging.error("Invalid playlist: %s", exc)
            return 1
        except (OSError, requests.RequestException) as exc:
            logging.error("Unable to load playlist: %s", exc)
            return 1

        if args.json:
            print(document.playlist.model_dump_json(indent=2))
        else:
            print_urls(document)
        print_summary(document.playlist)

        if args.variants:
            summarize_variants(document, M3U8Parser(http_client, diagnostics), args.workers)

    if diagnostics:
        logging.info("%s diagnostics reported", len(diagnostics))
    if args.strict and diagnostics:
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
