"""
Key pairs: a private scalar and its public point  Y = x·G.

The public point is always derived from the private scalar inside the
constructor; there is no way to set one without the other.
"""

from __future__ import annotations

import secrets
from dataclasses import dataclass, field
from typing import Optional, Union

from . import strkey
from .codec import compress, decompress
from .curve import DEFAULT_ENGINE, SCALAR_BYTES, CurveEngine, Point
from .errors import InvalidEncoding, InvalidVersionByte

PRIVATE_KEY_BYTES = SCALAR_BYTES
SEED_BYTES = 32


@dataclass(frozen=True)
class KeyPair:
    """
    Private scalar *x* in [1, N−1] and public point *x·G*.

    Build with ``random``, ``from_raw_seed``, ``from_seed``,
    ``from_private_key`` or ``from_private_scalar``; direct construction
    takes the private scalar and derives everything else.
    """

    private: int
    engine: CurveEngine = field(default=DEFAULT_ENGINE, repr=False, compare=False)
    seed: Optional[str] = field(default=None, repr=False, compare=False)
    public: Point = field(init=False)

    def __post_init__(self) -> None:
        d = self.private % self.engine.order
        if d == 0:
            raise ValueError("private scalar must be non-zero modulo the group order")
        object.__setattr__(self, "private", d)
        object.__setattr__(self, "public", self.engine.base_mul(d))

    # constructors -----------------------------------------------------------
    @classmethod
    def random(cls, engine: CurveEngine = DEFAULT_ENGINE) -> KeyPair:
        """Fresh key pair from 32 bytes of OS entropy."""
        return cls.from_raw_seed(secrets.token_bytes(SEED_BYTES), engine)

    @classmethod
    def from_raw_seed(
        cls,
        raw_seed: bytes,
        engine: CurveEngine = DEFAULT_ENGINE,
    ) -> KeyPair:
        """Private scalar = big-endian integer of the 32-byte seed, mod N."""
        if len(raw_seed) != SEED_BYTES:
            raise ValueError(f"need {SEED_BYTES} seed bytes, got {len(raw_seed)}")
        seed = strkey.encode(strkey.VersionByte.SEED, raw_seed)
        return cls(int.from_bytes(raw_seed, "big"), engine=engine, seed=seed)

    @classmethod
    def from_seed(cls, seed: str, engine: CurveEngine = DEFAULT_ENGINE) -> KeyPair:
        """Key pair from an ``S…`` StrKey seed."""
        raw = strkey.decode(strkey.VersionByte.SEED, seed)
        return cls.from_raw_seed(raw, engine)

    @classmethod
    def from_private_key(
        cls,
        private_key: bytes,
        engine: CurveEngine = DEFAULT_ENGINE,
    ) -> KeyPair:
        """Key pair from the 32-byte big-endian private scalar."""
        if len(private_key) != PRIVATE_KEY_BYTES:
            raise ValueError(
                f"need {PRIVATE_KEY_BYTES} bytes, got {len(private_key)}"
            )
        return cls(int.from_bytes(private_key, "big"), engine=engine)

    @classmethod
    def from_private_scalar(
        cls,
        private: int,
        engine: CurveEngine = DEFAULT_ENGINE,
    ) -> KeyPair:
        return cls(private, engine=engine)

    # serialisation ----------------------------------------------------------
    def private_bytes(self) -> bytes:
        return self.private.to_bytes(PRIVATE_KEY_BYTES, "big")

    def public_bytes(self) -> bytes:
        """33-byte compressed public key."""
        return compress(self.public, self.engine)

    @property
    def address(self) -> str:
        """``G…`` StrKey of the compressed public key."""
        return strkey.encode(strkey.VersionByte.ACCOUNT_ID, self.public_bytes())

    def hint(self) -> bytes:
        """Last four bytes of the compressed public key."""
        return self.public_bytes()[-4:]

    # key image --------------------------------------------------------------
    def key_image(self) -> Point:
        """
        ``I = x · H(Y)``  where *H* is the engine's deterministic hash.

        Identical across every ring signature this key ever produces.
        """
        return self.engine.scalar_mul(
            self.private, self.engine.deterministic_hash(self.public),
        )


def public_key_from_bytes(
    data: bytes,
    engine: CurveEngine = DEFAULT_ENGINE,
) -> Point:
    """
    Decode a 33-byte compressed public key.

    Raises ``InvalidEncoding`` for malformed bytes, for the point at
    infinity and for points outside the prime-order subgroup.
    """
    point = decompress(data, engine)
    if not engine.in_subgroup(point):
        raise InvalidEncoding("not a public key of the prime-order subgroup")
    return point


def public_key_from_address(
    address: str,
    engine: CurveEngine = DEFAULT_ENGINE,
) -> Point:
    """Public point behind a ``G…`` address."""
    raw = strkey.decode(strkey.VersionByte.ACCOUNT_ID, address)
    return public_key_from_bytes(raw, engine)


def parse(
    address_or_seed: str,
    engine: CurveEngine = DEFAULT_ENGINE,
) -> Union[KeyPair, Point]:
    """
    Parse either StrKey form.

    A ``G…`` address gives its public point (verify only); an ``S…`` seed
    gives a full ``KeyPair``.  Any other version byte raises
    ``InvalidVersionByte``.
    """
    try:
        return public_key_from_address(address_or_seed, engine)
    except InvalidVersionByte:
        return KeyPair.from_seed(address_or_seed, engine)
