"""
Exception taxonomy for the signature core.

Structural errors (malformed points, encodings, indices) are raised to the
immediate caller.  A signature that simply fails to verify is *not* an
error: ``verify`` / ``verify_ring`` return ``False``.

Each class also derives from the builtin that best describes it, so callers
that only know about ``ValueError`` and friends keep working.
"""

from __future__ import annotations


class SignatureError(Exception):
    """Base class for every error raised by :mod:`votesig`."""


class NotOnCurve(SignatureError, ValueError):
    """A point failed the curve equation before an operation that needs it."""


class NotInvertible(SignatureError, ZeroDivisionError):
    """Modular inverse does not exist (includes doubling at y = 0)."""


class InvalidEncoding(SignatureError, ValueError):
    """Compressed bytes do not describe a point on the curve."""


class InvalidSignerIndex(SignatureError, IndexError):
    """Ring-signing index outside ``[0, len(ring))``."""


class OutOfRangeComponent(SignatureError, ValueError):
    """Signature scalar outside its permitted interval."""


class RandomnessFailure(SignatureError, RuntimeError):
    """Signing kept drawing degenerate nonces; the RNG is broken."""


class InvalidVersionByte(SignatureError, ValueError):
    """StrKey version byte is unknown or not the one expected."""
