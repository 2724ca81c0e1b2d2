"""
Elliptic curve arithmetic on Curve25519 in Montgomery form.

    B·y² = x³ + A·x² + x   (mod P)

Points are plain coordinate pairs.  They carry no reference to a curve;
every group operation goes through a ``CurveEngine`` that owns the
parameters.  ``MontgomeryCurve`` is the only engine, and ``CURVE25519`` /
``DEFAULT_ENGINE`` are built once at import time and never mutated.

Affine double-and-add in pure Python is slow (a few ms per scalar
multiplication), but it is exact and has no native dependency.

References
----------
- Bernstein (2006). "Curve25519: new Diffie-Hellman speed records."
- Costello, Smith (2017). "Montgomery curves and their arithmetic."
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Optional

from .errors import NotInvertible, NotOnCurve
from .field import mod_inverse, mod_sqrt

SCALAR_BYTES = 32
COMPRESSED_BYTES = 33


# ── domain parameters ───────────────────────────────────────────────────
@dataclass(frozen=True)
class CurveParameters:
    """
    Immutable domain parameters of a Montgomery curve.

    Attributes:
        name: Human-readable curve name
        A, B: Curve coefficients
        P: Prime field modulus
        N: Prime order of the subgroup generated by G
        GX, GY: Generator coordinates
    """

    name: str
    A: int
    B: int
    P: int
    N: int
    GX: int
    GY: int

    def __post_init__(self) -> None:
        if not self._validate_parameters():
            raise ValueError(f"invalid curve parameters for {self.name}")

    def _validate_parameters(self) -> bool:
        p = self.P
        return (
            p > 3
            and self.N > 1
            and self.B % p != 0
            and (self.A * self.A - 4) % p != 0
            and 0 <= self.GX < p
            and 0 <= self.GY < p
            and (self.B * self.GY * self.GY) % p
            == (self.GX ** 3 + self.A * self.GX * self.GX + self.GX) % p
        )


CURVE25519 = CurveParameters(
    name="Curve25519",
    A=486662,
    B=1,
    P=2 ** 255 - 19,
    N=0x1000000000000000000000000000000014DEF9DEA2F79CD65812631A5CF5D3ED,
    GX=9,
    GY=0x20AE19A1B8A086B4E01EDD2C7748D14C923D4D7E6D7C61B229E9C5A27ECED3D9,
)


# ── Point ───────────────────────────────────────────────────────────────
@dataclass(frozen=True)
class Point:
    """
    Affine point  (x, y), or the point at infinity when both are ``None``.

    Validity is always relative to a ``CurveEngine``; use
    ``engine.is_on_curve(point)``.
    """

    x: Optional[int] = None
    y: Optional[int] = None

    def __post_init__(self) -> None:
        if (self.x is None) != (self.y is None):
            raise ValueError("both coordinates must be set, or neither")

    @classmethod
    def infinity(cls) -> Point:
        return INFINITY

    def is_infinity(self) -> bool:
        return self.x is None

    def __repr__(self) -> str:
        if self.is_infinity():
            return "Point(∞)"
        return f"Point(x=0x{self.x:064x}, y=0x{self.y:064x})"


INFINITY = Point()


# ── engine interface ────────────────────────────────────────────────────
class CurveEngine(ABC):
    """
    Group law for one curve family.

    Concrete engines implement the curve-specific primitives
    (``_contains``, ``_add``, ``_double``, ``compute_y``); validation and
    scalar multiplication are shared.
    """

    def __init__(self, params: CurveParameters) -> None:
        self._params = params
        self._g = Point(params.GX, params.GY)

    @property
    def params(self) -> CurveParameters:
        return self._params

    @property
    def generator(self) -> Point:
        return self._g

    @property
    def order(self) -> int:
        return self._params.N

    @property
    def infinity(self) -> Point:
        return INFINITY

    # curve-specific primitives ----------------------------------------------
    @abstractmethod
    def _contains(self, P: Point) -> bool:
        """Curve equation for a finite point with reduced coordinates."""

    @abstractmethod
    def _add(self, P: Point, Q: Point) -> Point:
        """Chord addition for finite points with distinct x."""

    @abstractmethod
    def _double(self, P: Point) -> Point:
        """Tangent doubling for a finite point with y ≠ 0."""

    @abstractmethod
    def compute_y(self, x: int) -> int:
        """One square root y for the given x (sign fixed by the caller)."""

    # validation -------------------------------------------------------------
    def is_on_curve(self, P: Point) -> bool:
        if P.is_infinity():
            return True
        p = self._params.P
        if not (0 <= P.x < p and 0 <= P.y < p):
            return False
        return self._contains(P)

    def _require(self, *points: Point) -> None:
        for P in points:
            if not self.is_on_curve(P):
                raise NotOnCurve(f"{P!r} is not on {self._params.name}")

    # group operations -------------------------------------------------------
    def negate(self, P: Point) -> Point:
        """(x, −y mod P)."""
        self._require(P)
        if P.is_infinity():
            return INFINITY
        return Point(P.x, (-P.y) % self._params.P)

    def in_subgroup(self, P: Point) -> bool:
        """
        True for a finite curve point with  N·P = ∞.

        Curve25519 has cofactor 8, so on-curve points of order 2, 4 and 8
        (and their sums with subgroup points) decode fine but fail here.
        """
        if P.is_infinity() or not self.is_on_curve(P):
            return False
        return self.scalar_mul(self._params.N, P).is_infinity()

    def add(self, P: Point, Q: Point) -> Point:
        self._require(P, Q)
        return self._combine(P, Q)

    def _combine(self, P: Point, Q: Point) -> Point:
        # both operands already validated
        if P.is_infinity():
            return Q
        if Q.is_infinity():
            return P
        if P.x == Q.x:
            # same x: either Q = −P or Q = P
            if (P.y + Q.y) % self._params.P == 0:
                return INFINITY
            return self._double(P)
        return self._add(P, Q)

    def double(self, P: Point) -> Point:
        self._require(P)
        if P.is_infinity():
            return INFINITY
        if P.y == 0:
            raise NotInvertible("tangent is vertical at y = 0")
        return self._double(P)

    def scalar_mul(self, d: int, P: Point) -> Point:
        """
        ``d · P`` by right-to-left binary double-and-add.

        ``d`` is any integer; negative scalars multiply by ``|d|`` and
        negate.  Cost is O(log |d|) group operations.
        """
        self._require(P)
        if d == 0 or P.is_infinity():
            return INFINITY

        negative = d < 0
        k = -d if negative else d

        result = INFINITY
        addend = P
        while k:
            if k & 1:
                result = self._combine(result, addend)
            k >>= 1
            if k:
                addend = self._combine(addend, addend)

        if negative and not result.is_infinity():
            result = Point(result.x, (-result.y) % self._params.P)
        return result

    def base_mul(self, d: int) -> Point:
        """``d · G``."""
        return self.scalar_mul(d, self._g)

    def deterministic_hash(self, P: Point) -> Point:
        """
        Public, reproducible map from a point to a point:
        ``((x + y) mod P) · G``.

        Used as the per-key secondary generator for key images.  The
        point at infinity maps to itself.
        """
        self._require(P)
        if P.is_infinity():
            return INFINITY
        return self.base_mul((P.x + P.y) % self._params.P)

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self._params.name})"


# ── Montgomery form ─────────────────────────────────────────────────────
class MontgomeryCurve(CurveEngine):
    """
    Affine arithmetic on  B·y² = x³ + A·x² + x.

    Addition,  s = (y_Q − y_P) / (x_Q − x_P):
        x_R = B·s² − A − x_P − x_Q
        y_R = s·(x_P − x_R) − y_P

    Doubling,  s = (3x² + 2A·x + 1) / (2B·y):
        x_R = B·s² − A − 2x
        y_R = s·(x − x_R) − y
    """

    def _contains(self, P: Point) -> bool:
        c = self._params
        left = (c.B * P.y * P.y) % c.P
        right = (P.x * P.x * P.x + c.A * P.x * P.x + P.x) % c.P
        return left == right

    def _add(self, P: Point, Q: Point) -> Point:
        c = self._params
        s = ((Q.y - P.y) * mod_inverse(Q.x - P.x, c.P)) % c.P
        x = (c.B * s * s - c.A - P.x - Q.x) % c.P
        y = (s * (P.x - x) - P.y) % c.P
        return Point(x, y)

    def _double(self, P: Point) -> Point:
        c = self._params
        up = 3 * P.x * P.x + 2 * c.A * P.x + 1
        s = (up * mod_inverse(2 * c.B * P.y, c.P)) % c.P
        x = (c.B * s * s - c.A - 2 * P.x) % c.P
        y = (s * (P.x - x) - P.y) % c.P
        return Point(x, y)

    def compute_y(self, x: int) -> int:
        """
        Solve  y² = (x³ + A·x² + x) · B⁻¹  (mod P).

        Raises ``InvalidEncoding`` when the right-hand side is a
        non-residue, i.e. *x* lies on the quadratic twist.
        """
        c = self._params
        rhs = (x * x * x + c.A * x * x + x) % c.P
        rhs = (rhs * mod_inverse(c.B, c.P)) % c.P
        return mod_sqrt(rhs, c.P)


# ── process-wide defaults ───────────────────────────────────────────────
DEFAULT_ENGINE: CurveEngine = MontgomeryCurve(CURVE25519)
G = DEFAULT_ENGINE.generator
ORDER = CURVE25519.N
