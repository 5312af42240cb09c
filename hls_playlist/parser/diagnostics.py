"""Sinks for tolerated anomalies found while parsing.

A sink is any callable taking ``(line_number, message)``.
"""

from __future__ import annotations

import logging
from typing import Callable, Iterator, List, Optional

from ..models import Diagnostic

DiagnosticsSink = Callable[[int, str], None]


def log_diagnostic(line_number: int, message: str) -> None:
    logging.warning("Playlist line %s: %s", line_number, message)


class DiagnosticsCollector:
    """Records diagnostics so callers can inspect them after a parse."""

    def __init__(self, forward: Optional[DiagnosticsSink] = None) -> None:
        self._forward = forward
        self._items: List[Diagnostic] = []

    def __call__(self, line_number: int, message: str) -> None:
        self._items.append(Diagnostic(line_number=line_number, message=message))
        if self._forward is not None:
            self._forward(line_number, message)

    @property
    def diagnostics(self) -> List[Diagnostic]:
        return list(self._items)

    def __iter__(self) -> Iterator[Diagnostic]:
        return iter(self._items)

    def __len__(self) -> int:
        return len(self._items)
