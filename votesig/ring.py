"""
Linkable ring signatures (CryptoNote construction).

A signer holding  x_s  with  Y_s = x_s·G  proves knowledge of the private
key behind *one* of the ring's public keys  Y_0 … Y_{n−1}  without
revealing which.  The key image

    I = x_s · H_p(Y_s)

depends only on the signer's key, so two signatures by the same key are
linkable (double-vote detection) while the signer stays anonymous.

**Sign** (message m, signer index s):

    c_i, r_i ←$ Z_N                              for all i
    L_i = r_i·G + c_i·Y_i,   R_i = r_i·H_p(Y_i) + c_i·I     (i ≠ s)
    L_s = r_s·G,             R_s = r_s·H_p(Y_s)
    c   = H(m ‖ L_0…L_{n−1} ‖ R_0…R_{n−1})
    c_s = c − Σ_{i≠s} c_i        (mod N)
    r_s = r_s − c_s·x_s          (mod N)

**Verify**: recompute every  L_i, R_i  from  (c_i, r_i)  and accept iff

    Σ c_i  ≡  H(m ‖ L ‖ R)   (mod N).

References
----------
- van Saberhagen (2013). "CryptoNote v2.0", §4.4.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import List, Sequence, Tuple

from .codec import compress, decompress
from .config import DEFAULT_CONFIG, SchemeConfig
from .curve import (
    COMPRESSED_BYTES,
    DEFAULT_ENGINE,
    SCALAR_BYTES,
    CurveEngine,
    Point,
)
from .errors import InvalidSignerIndex, OutOfRangeComponent
from .field import RandomScalar, in_range, random_scalar
from .hash import Message, hash_ring
from .keys import KeyPair, public_key_from_bytes

logger = logging.getLogger(__name__)

ENTRY_BYTES = 1 + 2 * SCALAR_BYTES


# ── data structures ─────────────────────────────────────────────────────

@dataclass(frozen=True)
class RingSignature:
    """
    Ring signature  (I, c_0…c_{n−1}, r_0…r_{n−1}).

    ``c_list`` / ``r_list`` are aligned with the ring's public-key order;
    verifying against a reordered ring fails.
    """

    key_image: Point
    c_list: Tuple[int, ...]
    r_list: Tuple[int, ...]

    def __post_init__(self) -> None:
        object.__setattr__(self, "c_list", tuple(self.c_list))
        object.__setattr__(self, "r_list", tuple(self.r_list))

    @property
    def ring_size(self) -> int:
        return len(self.c_list)

    def check_range(self, order: int) -> None:
        """Raise ``OutOfRangeComponent`` unless every c_i, r_i is in [0, N)."""
        for i, (c, r) in enumerate(zip(self.c_list, self.r_list)):
            if not in_range(c, 0, order - 1):
                raise OutOfRangeComponent(f"c[{i}] outside [0, N-1]")
            if not in_range(r, 0, order - 1):
                raise OutOfRangeComponent(f"r[{i}] outside [0, N-1]")

    def to_bytes(
        self,
        engine: CurveEngine = DEFAULT_ENGINE,
        config: SchemeConfig = DEFAULT_CONFIG.scheme,
    ) -> Tuple[List[bytes], bytes]:
        """
        Serialise to ``(entries, key_image)``: one 65-byte entry
        (version ‖ c_i ‖ r_i) per ring member and the 33-byte key image.
        """
        version = bytes([config.version_byte])
        entries = [
            version + c.to_bytes(SCALAR_BYTES, "big") + r.to_bytes(SCALAR_BYTES, "big")
            for c, r in zip(self.c_list, self.r_list)
        ]
        return entries, compress(self.key_image, engine)

    @classmethod
    def from_bytes(
        cls,
        entries: Sequence[bytes],
        key_image: bytes,
        engine: CurveEngine = DEFAULT_ENGINE,
    ) -> RingSignature:
        c_list: List[int] = []
        r_list: List[int] = []
        for i, entry in enumerate(entries):
            if len(entry) != ENTRY_BYTES:
                raise ValueError(
                    f"entry {i}: expected {ENTRY_BYTES} bytes, got {len(entry)}"
                )
            c_list.append(int.from_bytes(entry[1:1 + SCALAR_BYTES], "big"))
            r_list.append(int.from_bytes(entry[1 + SCALAR_BYTES:], "big"))
        if len(key_image) != COMPRESSED_BYTES:
            raise ValueError(
                f"key image: expected {COMPRESSED_BYTES} bytes, got {len(key_image)}"
            )
        return cls(
            key_image=decompress(key_image, engine),
            c_list=tuple(c_list),
            r_list=tuple(r_list),
        )


# ── signing ─────────────────────────────────────────────────────────────

def sign_ring(
    message: Message,
    key_pair: KeyPair,
    public_keys: Sequence[Point],
    signer_index: int,
    *,
    engine: CurveEngine = DEFAULT_ENGINE,
    rng: RandomScalar = random_scalar,
) -> RingSignature:
    """
    Produce a ring signature on *message* for the ring *public_keys*.

    Parameters
    ----------
    message : str | bytes
        Message to sign.
    key_pair : KeyPair
        Signer's keys; ``key_pair.public`` is expected at *signer_index*.
    public_keys : sequence of Point
        The ring, in the order the verifier will use.
    signer_index : int
        Position of the signer in the ring.
    engine : CurveEngine
        Curve to sign on; must match the key pair's.
    rng : callable
        ``rng(N) -> int`` secret scalar source; must be a CSPRNG.

    Raises
    ------
    InvalidSignerIndex
        If ``signer_index`` is outside ``[0, len(public_keys))`` or the key
        there is not ``key_pair.public``.
    """
    n_keys = len(public_keys)
    if not 0 <= signer_index < n_keys:
        raise InvalidSignerIndex(
            f"signer index {signer_index} outside ring of size {n_keys}"
        )
    if public_keys[signer_index] != key_pair.public:
        raise InvalidSignerIndex(
            f"ring member {signer_index} is not the signer's public key"
        )

    order = engine.order
    c_list = [rng(order) % order for _ in range(n_keys)]
    r_list = [rng(order) % order for _ in range(n_keys)]

    key_image = engine.scalar_mul(
        key_pair.private, engine.deterministic_hash(key_pair.public),
    )

    l_points: List[Point] = []
    r_points: List[Point] = []
    for i, Y in enumerate(public_keys):
        rG = engine.base_mul(r_list[i])
        rH = engine.scalar_mul(r_list[i], engine.deterministic_hash(Y))
        if i == signer_index:
            l_points.append(rG)
            r_points.append(rH)
            continue
        l_points.append(engine.add(rG, engine.scalar_mul(c_list[i], Y)))
        r_points.append(engine.add(rH, engine.scalar_mul(c_list[i], key_image)))

    c = hash_ring(message, l_points, r_points, engine)

    others = sum(ci for i, ci in enumerate(c_list) if i != signer_index)
    c_s = (c - others) % order
    c_list[signer_index] = c_s
    r_list[signer_index] = (r_list[signer_index] - c_s * key_pair.private) % order

    return RingSignature(
        key_image=key_image,
        c_list=tuple(c_list),
        r_list=tuple(r_list),
    )


# ── verification ────────────────────────────────────────────────────────

def verify_ring(
    message: Message,
    public_keys: Sequence[Point],
    signature: RingSignature,
    *,
    engine: CurveEngine = DEFAULT_ENGINE,
) -> bool:
    """
    Check *signature* on *message* against the ring *public_keys*.

    Returns ``False`` for a ring-size mismatch, out-of-range components, a
    key image or ring member outside the prime-order subgroup, or a failed
    ring equation.
    """
    n_keys = len(public_keys)
    if n_keys == 0:
        logger.debug("Ring signature rejected: empty ring")
        return False
    if len(signature.c_list) != n_keys or len(signature.r_list) != n_keys:
        logger.debug(
            f"Ring signature rejected: {len(signature.c_list)}/"
            f"{len(signature.r_list)} components for ring of {n_keys}"
        )
        return False

    order = engine.order
    try:
        signature.check_range(order)
    except OutOfRangeComponent as exc:
        logger.debug(f"Ring signature rejected: {exc}")
        return False

    if not engine.in_subgroup(signature.key_image):
        logger.debug("Ring signature rejected: key image outside the subgroup")
        return False
    if not all(engine.in_subgroup(Y) for Y in public_keys):
        logger.debug("Ring signature rejected: ring member outside the subgroup")
        return False

    l_points: List[Point] = []
    r_points: List[Point] = []
    c_sum = 0
    for Y, c_i, r_i in zip(public_keys, signature.c_list, signature.r_list):
        l_points.append(engine.add(
            engine.base_mul(r_i),
            engine.scalar_mul(c_i, Y),
        ))
        r_points.append(engine.add(
            engine.scalar_mul(r_i, engine.deterministic_hash(Y)),
            engine.scalar_mul(c_i, signature.key_image),
        ))
        c_sum = (c_sum + c_i) % order

    c_real = hash_ring(message, l_points, r_points, engine) % order
    return c_real == c_sum


def linked(a: RingSignature, b: RingSignature) -> bool:
    """True if both signatures were made with the same private key."""
    return a.key_image == b.key_image


# ── raw-byte helpers ────────────────────────────────────────────────────

def sign_ring_bytes(
    message: Message,
    private_key: bytes,
    public_keys: Sequence[bytes],
    signer_index: int,
    *,
    engine: CurveEngine = DEFAULT_ENGINE,
    config: SchemeConfig = DEFAULT_CONFIG.scheme,
) -> Tuple[List[bytes], bytes]:
    """Ring-sign with a 32-byte private key over 33-byte public keys."""
    key_pair = KeyPair.from_private_key(private_key, engine)
    ring = [public_key_from_bytes(pk, engine) for pk in public_keys]
    return sign_ring(message, key_pair, ring, signer_index, engine=engine).to_bytes(
        engine, config,
    )


def verify_ring_bytes(
    message: Message,
    public_keys: Sequence[bytes],
    entries: Sequence[bytes],
    key_image: bytes,
    *,
    engine: CurveEngine = DEFAULT_ENGINE,
) -> bool:
    """Verify the byte form produced by ``RingSignature.to_bytes``."""
    ring = [public_key_from_bytes(pk, engine) for pk in public_keys]
    signature = RingSignature.from_bytes(entries, key_image, engine)
    return verify_ring(message, ring, signature, engine=engine)
