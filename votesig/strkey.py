"""
StrKey: printable base32 form of seeds and account ids.

    base32( version_byte ‖ payload )

The version byte selects the leading character: ``6 << 3`` encodes to
``G…`` (account id), ``18 << 3`` to ``S…`` (seed).
"""

from __future__ import annotations

import base64
import binascii
from enum import IntEnum

from .errors import InvalidVersionByte

MAX_PAYLOAD_SIZE = 100


class VersionByte(IntEnum):
    ACCOUNT_ID = 6 << 3
    SEED = 18 << 3


def _check_version(version: int) -> VersionByte:
    try:
        return VersionByte(version)
    except ValueError:
        raise InvalidVersionByte(f"unknown version byte {version}") from None


def encode(version: int, payload: bytes) -> str:
    """Encode *payload* under *version*."""
    version = _check_version(version)
    if len(payload) > MAX_PAYLOAD_SIZE:
        raise ValueError("data exceeds maximum payload size for strkey")
    raw = bytes([version]) + bytes(payload)
    return base64.b32encode(raw).decode("ascii")


def decode(expected: int, src: str) -> bytes:
    """
    Decode *src* and return its payload.

    Raises ``InvalidVersionByte`` if the encoded version differs from
    *expected*, ``ValueError`` if *src* is not valid base32 or is too short.
    """
    expected = _check_version(expected)
    try:
        raw = base64.b32decode(src)
    except (binascii.Error, ValueError) as exc:
        raise ValueError(f"invalid strkey: {exc}") from exc

    if len(raw) < 3:
        raise ValueError("decoded string is too short")
    if raw[0] != expected:
        raise InvalidVersionByte(
            f"expected version {expected.name}, got byte {raw[0]}"
        )
    return raw[1:]
