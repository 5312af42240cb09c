"""Attribute lists and scalar tag values."""

from __future__ import annotations

import re
from typing import Callable, Dict, List, Optional, Tuple

from ..models import ByteRange

ATTRIBUTE_NAME = re.compile(r"[A-Z0-9-]+")
INTEGER = re.compile(r"[+-]?\d+")
DECIMAL = re.compile(r"[+-]?(\d+(\.\d*)?|\.\d+)([eE][+-]?\d+)?")

Reporter = Callable[[str], None]


def split_attributes(value: str) -> List[str]:
    """Splits on commas that are not inside double quotes.

    Quotes only toggle the quoted state; there is no escaping, and an unmatched
    quote keeps the rest of the string in one token.
    """

    tokens: List[str] = []
    current: List[str] = []
    quoted = False
    for char in value:
        if char == '"':
            quoted = not quoted
        elif char == "," and not quoted:
            tokens.append("".join(current))
            current = []
            continue
        current.append(char)
    tokens.append("".join(current))
    return tokens


def parse_attributes(value: str, report: Optional[Reporter] = None) -> Dict[str, str]:
    """Parses ``NAME=VALUE,NAME="VALUE"`` into a dict; later duplicates win."""

    attrs: Dict[str, str] = {}
    if not value:
        return attrs
    for token in split_attributes(value):
        if not token.strip():
            continue
        name, sep, raw = token.partition("=")
        name = name.strip()
        if not sep:
            if report:
                report(f"ignoring attribute without a value: {token.strip()!r}")
            continue
        if not ATTRIBUTE_NAME.fullmatch(name):
            if report:
                report(f"ignoring malformed attribute name: {name!r}")
            continue
        attrs[name] = unquote(raw)
    return attrs


def unquote(raw: str) -> str:
    """Removes one pair of enclosing quotes; an unclosed opening quote runs to the end."""

    raw = raw.strip()
    if raw.startswith('"'):
        raw = raw[1:-1] if len(raw) > 1 and raw.endswith('"') else raw[1:]
    return raw.strip()


def parse_int(value: str) -> Optional[int]:
    value = value.strip()
    if not INTEGER.fullmatch(value):
        return None
    return int(value)


def parse_float(value: str) -> Optional[float]:
    value = value.strip()
    if not DECIMAL.fullmatch(value):
        return None
    return float(value)


def parse_byte_range(value: str, report: Optional[Reporter] = None) -> ByteRange:
    """Parses ``<length>[@<offset>]``; missing or non-numeric parts are 0."""

    if not value:
        return ByteRange()
    length, sep, offset = value.partition("@")
    parsed_length = parse_int(length)
    parsed_offset = parse_int(offset) if sep else 0
    if report:
        if parsed_length is None:
            report(f"non-numeric byte range length in {value!r}")
        if parsed_offset is None:
            report(f"non-numeric byte range offset in {value!r}")
    return ByteRange(length=parsed_length or 0, offset=parsed_offset or 0)


def parse_ext_inf(value: str) -> Tuple[Optional[float], str]:
    """Splits ``<duration>,<title>`` at the first comma.

    The duration is ``None`` when it is not a number.
    """

    duration, _, title = value.partition(",")
    return parse_float(duration), title
