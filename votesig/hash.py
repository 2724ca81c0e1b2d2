"""
Message hashing shared by both signature schemes.

One digest, SHA-256, is used everywhere a message is hashed: the
single-signature ``e = H(m)`` and the ring challenge
``c = H(m ‖ L₀…L_{n−1} ‖ R₀…R_{n−1})``.  Points enter the ring challenge
in their 33-byte compressed form, so signer and verifier always hash
identical bytes.
"""

from __future__ import annotations

import hashlib
from typing import Sequence, Union

from .codec import compress
from .curve import DEFAULT_ENGINE, CurveEngine, Point

Message = Union[str, bytes, bytearray]


def message_bytes(message: Message) -> bytes:
    """Canonical byte form of a message: UTF-8 for ``str``."""
    if isinstance(message, str):
        return message.encode("utf-8")
    if isinstance(message, (bytes, bytearray)):
        return bytes(message)
    raise TypeError(f"message must be str or bytes, not {type(message).__name__}")


def digest(data: bytes) -> bytes:
    return hashlib.sha256(data).digest()


def hash_message(message: Message) -> int:
    """``e = SHA-256(m)`` as a big-endian integer (not reduced)."""
    return int.from_bytes(digest(message_bytes(message)), "big")


def hash_ring(
    message: Message,
    l_points: Sequence[Point],
    r_points: Sequence[Point],
    engine: CurveEngine = DEFAULT_ENGINE,
) -> int:
    r"""
    Fiat-Shamir challenge for the ring signature.

    .. math::
        c = H(m \,\|\, L_0 \dots L_{n-1} \,\|\, R_0 \dots R_{n-1})

    Returned unreduced; callers reduce modulo the group order.
    """
    h = hashlib.sha256()
    h.update(message_bytes(message))
    for point in l_points:
        h.update(compress(point, engine))
    for point in r_points:
        h.update(compress(point, engine))
    return int.from_bytes(h.digest(), "big")
