"""
Fixed-size compressed point encoding.

Layout (33 bytes)::

    byte 0      0x02 | (y & 1)
    bytes 1..32 x, big-endian, zero-padded

The point at infinity is encoded as 33 zero bytes; every finite encoding
has bit 1 of the prefix set, so the two never collide.
"""

from __future__ import annotations

from typing import Union

from .curve import (
    COMPRESSED_BYTES,
    DEFAULT_ENGINE,
    INFINITY,
    SCALAR_BYTES,
    CurveEngine,
    Point,
)
from .errors import InvalidEncoding, NotOnCurve

_PREFIX = 0x02
_INFINITY_BYTES = bytes(COMPRESSED_BYTES)


def compress(point: Point, engine: CurveEngine = DEFAULT_ENGINE) -> bytes:
    """Encode a valid point as 33 bytes."""
    if not engine.is_on_curve(point):
        raise NotOnCurve(f"cannot compress {point!r}")
    if point.is_infinity():
        return _INFINITY_BYTES
    return bytes([_PREFIX | (point.y & 1)]) + point.x.to_bytes(SCALAR_BYTES, "big")


def decompress(
    data: Union[bytes, bytearray, str],
    engine: CurveEngine = DEFAULT_ENGINE,
) -> Point:
    """
    Decode 33 bytes (or their hex string) back into a point.

    Raises ``InvalidEncoding`` for a wrong length, an unknown prefix, an
    x-coordinate outside the field or without a square root, or a set sign
    bit on a point whose y is zero.
    """
    if isinstance(data, str):
        try:
            data = bytes.fromhex(data)
        except ValueError as exc:
            raise InvalidEncoding(f"not a hex string: {exc}") from exc
    data = bytes(data)

    if len(data) != COMPRESSED_BYTES:
        raise InvalidEncoding(f"need {COMPRESSED_BYTES} bytes, got {len(data)}")
    if data == _INFINITY_BYTES:
        return INFINITY

    prefix = data[0]
    if prefix & ~0x01 != _PREFIX:
        raise InvalidEncoding(f"unknown prefix byte 0x{prefix:02x}")
    sign = prefix & 0x01

    p = engine.params.P
    x = int.from_bytes(data[1:], "big")
    if x >= p:
        raise InvalidEncoding("x-coordinate is not a field element")

    y = engine.compute_y(x)
    if y & 1 != sign:
        y = (p - y) % p
        if y & 1 != sign:
            # y == 0 has no odd twin
            raise InvalidEncoding("sign bit set on a point with y = 0")

    point = Point(x, y)
    if not engine.is_on_curve(point):
        raise InvalidEncoding("decoded point is not on the curve")
    return point
