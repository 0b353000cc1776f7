"""
Encoded polyline decoding (Google's signed-delta format).

Each coordinate is two variable-length integers (lat delta, lng delta). Every
character carries 5 payload bits plus a continuation bit (0x20), offset by 63
so the encoded text stays printable. The integer is zig-zag encoded: odd values
are negative (invert), and the magnitude is scaled by 10**precision.
"""
from __future__ import annotations
from typing import Iterator, Tuple

from core.exceptions import MalformedPolylineError
from models.waypoints import Coordinate

_OFFSET = 63
_MAX_CHAR = 126
_CONTINUATION = 0x20
_PAYLOAD = 0x1F


def _read_varint(encoded: str, index: int) -> Tuple[int, int]:
    """Decode one signed component starting at `index`; return (value, next_index)."""
    result = 0
    shift = 0
    length = len(encoded)
    while True:
        if index >= length:
            raise MalformedPolylineError(
                "string ends inside a component (continuation bit set)", index
            )
        code = ord(encoded[index])
        if code < _OFFSET or code > _MAX_CHAR:
            raise MalformedPolylineError(
                f"character {encoded[index]!r} is outside the encoding range", index
            )
        chunk = code - _OFFSET
        index += 1
        result |= (chunk & _PAYLOAD) << shift
        shift += 5
        if not chunk & _CONTINUATION:
            break
    value = ~(result >> 1) if result & 1 else result >> 1
    return value, index


def iter_polyline(encoded: str, precision: int = 5) -> Iterator[Coordinate]:
    """
    Lazily yield coordinates. Errors surface when the bad offset is reached,
    after earlier points were already yielded; use decode_polyline() when a
    partial path must never escape.
    """
    factor = 10**precision
    index = 0
    lat = 0
    lng = 0
    length = len(encoded)
    while index < length:
        d_lat, index = _read_varint(encoded, index)
        if index >= length:
            raise MalformedPolylineError(
                "string ends after a latitude without its longitude", index
            )
        d_lng, index = _read_varint(encoded, index)
        lat += d_lat
        lng += d_lng
        yield Coordinate(lat=lat / factor, lng=lng / factor)


def decode_polyline(encoded: str, precision: int = 5) -> Tuple[Coordinate, ...]:
    """Decode the whole string, or raise MalformedPolylineError without a partial result."""
    if not isinstance(encoded, str):
        raise MalformedPolylineError(
            f"expected str, got {type(encoded).__name__}", 0
        )
    return tuple(iter_polyline(encoded, precision))
