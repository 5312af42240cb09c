"""Classification of single playlist lines."""

from __future__ import annotations

from enum import Enum
from typing import NamedTuple, Union

HEADER = "#EXTM3U"
TAG_PREFIX = "#EXT"
BOM = "\ufeff"


class LineKind(Enum):
    BLANK = "blank"
    COMMENT = "comment"
    HEADER = "header"
    TAG = "tag"
    CONTENT = "content"


class Line(NamedTuple):
    """A classified line. ``name`` is set for tags; ``value`` holds the tag value or content text."""

    kind: LineKind
    name: str = ""
    value: str = ""


def classify(line: str) -> Line:
    if line == "":
        return Line(LineKind.BLANK)
    if line == HEADER:
        return Line(LineKind.HEADER, HEADER)
    if line.startswith(TAG_PREFIX):
        name, _, value = line.partition(":")
        return Line(LineKind.TAG, name, value)
    if line.startswith("#"):
        return Line(LineKind.COMMENT, value=line)
    return Line(LineKind.CONTENT, value=line)


def normalize_line(raw: Union[str, bytes]) -> str:
    """Decodes ``raw`` and strips its line terminator."""

    if isinstance(raw, bytes):
        raw = raw.decode("utf-8")
    return raw.rstrip("\r\n")
