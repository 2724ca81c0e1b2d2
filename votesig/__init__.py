"""
votesig: signature core of a permissioned blockchain voting platform.

- **Curve engine** for Curve25519 in Montgomery form
  (``B·y² = x³ + A·x² + x``), with compressed 33-byte point encoding
- **Single signatures** (ECDSA-shaped) for validators and registered voters
- **Linkable ring signatures** (CryptoNote) for anonymous ballots, whose
  key images expose double votes without revealing the voter

Quick start
-----------
::

    from votesig import KeyPair, sign, verify, sign_ring, verify_ring

    voter = KeyPair.random()
    sig = sign("ballot #7", voter.private)
    assert verify("ballot #7", voter.public, sig)

    ring = [KeyPair.random().public for _ in range(4)]
    ring.insert(2, voter.public)
    rsig = sign_ring("yes", voter, ring, 2)
    assert verify_ring("yes", ring, rsig)
    assert rsig.key_image == voter.key_image()
"""

__version__ = "0.1.0"

# ── curve ───────────────────────────────────────────────────────────────
from .curve import (
    CURVE25519,
    DEFAULT_ENGINE,
    G,
    INFINITY,
    ORDER,
    CurveEngine,
    CurveParameters,
    MontgomeryCurve,
    Point,
)
from .codec import compress, decompress

# ── keys ────────────────────────────────────────────────────────────────
from .keys import KeyPair, parse, public_key_from_address, public_key_from_bytes

# ── signatures ──────────────────────────────────────────────────────────
from .signing import (
    SingleSignature,
    sign,
    sign_bytes,
    verify,
    verify_bytes,
)
from .ring import (
    RingSignature,
    linked,
    sign_ring,
    sign_ring_bytes,
    verify_ring,
    verify_ring_bytes,
)

# ── configuration & errors ──────────────────────────────────────────────
from .config import (
    DEFAULT_CONFIG,
    LogConfig,
    SchemeConfig,
    VotesigConfig,
    setup_logging,
)
from .errors import (
    InvalidEncoding,
    InvalidSignerIndex,
    InvalidVersionByte,
    NotInvertible,
    NotOnCurve,
    OutOfRangeComponent,
    RandomnessFailure,
    SignatureError,
)

__all__ = [
    # version
    "__version__",
    # curve
    "CURVE25519", "DEFAULT_ENGINE", "G", "INFINITY", "ORDER",
    "CurveEngine", "CurveParameters", "MontgomeryCurve", "Point",
    "compress", "decompress",
    # keys
    "KeyPair", "parse", "public_key_from_address", "public_key_from_bytes",
    # single signature
    "SingleSignature", "sign", "sign_bytes", "verify", "verify_bytes",
    # ring signature
    "RingSignature", "linked", "sign_ring", "sign_ring_bytes",
    "verify_ring", "verify_ring_bytes",
    # config
    "DEFAULT_CONFIG", "LogConfig", "SchemeConfig", "VotesigConfig",
    "setup_logging",
    # errors
    "SignatureError", "NotOnCurve", "NotInvertible", "InvalidEncoding",
    "InvalidSignerIndex", "OutOfRangeComponent", "RandomnessFailure",
    "InvalidVersionByte",
]
