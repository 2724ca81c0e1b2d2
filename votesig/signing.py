"""
Single-key signatures over Curve25519 (ECDSA-shaped).

**Sign** with private scalar *d*:

    k ←$ [1, N−1]
    r = (k·G).x  mod N           (retry if r = 0)
    e = H(m)
    s = k⁻¹ · (e + d·r)  mod N   (retry if s = 0)

**Verify** against public point *Y = d·G*:

    w  = s⁻¹ mod N
    X  = (e·w)·G + (r·w)·Y
    accept  ⇔  X.x mod N == r

Signing is randomised: the same message signed twice gives two different,
equally valid signatures.  Verification is pure and never raises for a
signature that is merely wrong.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Callable, Optional

from .config import DEFAULT_CONFIG, SchemeConfig
from .curve import DEFAULT_ENGINE, SCALAR_BYTES, CurveEngine, Point
from .errors import OutOfRangeComponent, RandomnessFailure
from .field import in_range, mod_inverse, random_scalar
from .hash import Message, hash_message
from .keys import KeyPair, public_key_from_bytes

logger = logging.getLogger(__name__)

SIGNATURE_BYTES = 1 + 2 * SCALAR_BYTES

NonceSource = Callable[[int], int]


# ── data structures ─────────────────────────────────────────────────────

@dataclass(frozen=True)
class SingleSignature:
    """
    Signature  (r, s); both in [1, N−1] when valid.

    Wire form: 65 bytes = version byte ‖ r (32, big-endian) ‖ s (32).
    """

    r: int
    s: int

    def check_range(self, order: int) -> None:
        """Raise ``OutOfRangeComponent`` unless  1 ≤ r, s ≤ N−1."""
        if not in_range(self.r, 1, order - 1):
            raise OutOfRangeComponent("r outside [1, N-1]")
        if not in_range(self.s, 1, order - 1):
            raise OutOfRangeComponent("s outside [1, N-1]")

    def to_bytes(self, config: SchemeConfig = DEFAULT_CONFIG.scheme) -> bytes:
        return (
            bytes([config.version_byte])
            + self.r.to_bytes(SCALAR_BYTES, "big")
            + self.s.to_bytes(SCALAR_BYTES, "big")
        )

    @classmethod
    def from_bytes(cls, data: bytes) -> SingleSignature:
        """Parse 65 bytes; the version byte is not interpreted."""
        if len(data) != SIGNATURE_BYTES:
            raise ValueError(f"expected {SIGNATURE_BYTES} bytes, got {len(data)}")
        r = int.from_bytes(data[1:1 + SCALAR_BYTES], "big")
        s = int.from_bytes(data[1 + SCALAR_BYTES:], "big")
        return cls(r=r, s=s)


# ── signing ─────────────────────────────────────────────────────────────

def sign(
    message: Message,
    private_key: int,
    *,
    engine: CurveEngine = DEFAULT_ENGINE,
    config: SchemeConfig = DEFAULT_CONFIG.scheme,
    nonce: Optional[NonceSource] = None,
) -> SingleSignature:
    """
    Sign *message* with the private scalar *private_key*.

    Parameters
    ----------
    message : str | bytes
        Message to sign; ``str`` is hashed as UTF-8.
    private_key : int
        Private scalar *d*.
    engine : CurveEngine
        Curve to sign on.
    config : SchemeConfig
        Bounds the number of nonce redraws.
    nonce : callable, optional
        ``nonce(N) -> k``.  Defaults to the OS CSPRNG; only tests should
        pass a deterministic source.

    Raises
    ------
    RandomnessFailure
        If ``config.max_sign_attempts`` nonces in a row gave r = 0 or s = 0.
    """
    n = engine.order
    draw = nonce or random_scalar
    d = private_key % n
    e = hash_message(message)

    for attempt in range(config.max_sign_attempts):
        k = draw(n) % n
        if k == 0:
            logger.debug(f"zero nonce drawn, retrying (attempt {attempt + 1})")
            continue

        R = engine.base_mul(k)
        r = R.x % n
        if r == 0:
            logger.debug(f"r = 0, retrying (attempt {attempt + 1})")
            continue

        s = (mod_inverse(k, n) * (e + d * r)) % n
        if s == 0:
            logger.debug(f"s = 0, retrying (attempt {attempt + 1})")
            continue

        return SingleSignature(r=r, s=s)

    raise RandomnessFailure(
        f"no usable nonce after {config.max_sign_attempts} attempts"
    )


# ── verification ────────────────────────────────────────────────────────

def verify(
    message: Message,
    public_key: Point,
    signature: SingleSignature,
    *,
    engine: CurveEngine = DEFAULT_ENGINE,
) -> bool:
    """
    Check *signature* on *message* against *public_key*.

    Returns ``False`` for out-of-range components, a public key outside
    the prime-order subgroup (the identity included) or a failed equation.
    """
    n = engine.order
    if not engine.in_subgroup(public_key):
        logger.debug("Signature rejected: public key outside the subgroup")
        return False
    try:
        signature.check_range(n)
    except OutOfRangeComponent as exc:
        logger.debug(f"Signature rejected: {exc}")
        return False

    e = hash_message(message)
    w = mod_inverse(signature.s, n)
    u1 = (e * w) % n
    u2 = (signature.r * w) % n

    X = engine.add(engine.base_mul(u1), engine.scalar_mul(u2, public_key))

    if not engine.is_on_curve(X) or X.is_infinity():
        logger.debug("Signature rejected: combined point is degenerate")
        return False

    return X.x % n == signature.r


# ── raw-byte helpers ────────────────────────────────────────────────────

def sign_bytes(
    message: Message,
    private_key: bytes,
    *,
    engine: CurveEngine = DEFAULT_ENGINE,
    config: SchemeConfig = DEFAULT_CONFIG.scheme,
) -> bytes:
    """Sign with a 32-byte private key; returns the 65-byte signature."""
    key_pair = KeyPair.from_private_key(private_key, engine)
    return sign(message, key_pair.private, engine=engine, config=config).to_bytes(config)


def verify_bytes(
    message: Message,
    public_key: bytes,
    signature: bytes,
    *,
    engine: CurveEngine = DEFAULT_ENGINE,
) -> bool:
    """
    Verify a 65-byte signature against a 33-byte compressed public key.

    Malformed key bytes raise ``InvalidEncoding``; a wrong signature
    returns ``False``.
    """
    return verify(
        message,
        public_key_from_bytes(public_key, engine),
        SingleSignature.from_bytes(signature),
        engine=engine,
    )
