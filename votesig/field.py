"""
Modular arithmetic over a prime modulus.

Plain ``int`` helpers shared by the curve engine (field  F_p) and the
signature schemes (scalar group  Z_n).  Both moduli are prime, so inverses
use Fermat's little theorem.
"""

from __future__ import annotations

import secrets
from typing import Callable

from .errors import InvalidEncoding, NotInvertible


# ── inverses ────────────────────────────────────────────────────────────
def mod_inverse(value: int, modulus: int) -> int:
    """
    Multiplicative inverse of *value* modulo a prime *modulus*.

    Raises ``NotInvertible`` when ``value ≡ 0``.
    """
    v = value % modulus
    if v == 0:
        raise NotInvertible(f"0 has no inverse modulo {modulus:#x}")
    return pow(v, modulus - 2, modulus)


# ── square roots ────────────────────────────────────────────────────────
def is_square(value: int, modulus: int) -> bool:
    """Euler's criterion.  Zero counts as a square."""
    v = value % modulus
    if v == 0:
        return True
    return pow(v, (modulus - 1) // 2, modulus) == 1


def mod_sqrt(value: int, modulus: int) -> int:
    """
    One square root of *value* modulo an odd prime.

    Picks the cheapest method the modulus allows:

    * p ≡ 3 (mod 4):  v^((p+1)/4)
    * p ≡ 5 (mod 8):  v^((p+3)/8), corrected by √−1 = 2^((p−1)/4)
    * otherwise:      Tonelli–Shanks

    Which of the two roots comes back is unspecified; callers fix the sign.

    Raises ``InvalidEncoding`` if *value* is a non-residue.
    """
    p = modulus
    v = value % p
    if v == 0:
        return 0
    if not is_square(v, p):
        raise InvalidEncoding("value has no square root modulo p")

    if p % 4 == 3:
        return pow(v, (p + 1) // 4, p)

    if p % 8 == 5:
        r = pow(v, (p + 3) // 8, p)
        if (r * r) % p != v:
            r = (r * pow(2, (p - 1) // 4, p)) % p
        return r

    return _tonelli_shanks(v, p)


def _tonelli_shanks(v: int, p: int) -> int:
    # p - 1 = q · 2^s  with q odd
    q, s = p - 1, 0
    while q % 2 == 0:
        q //= 2
        s += 1

    z = 2
    while is_square(z, p):
        z += 1

    m = s
    c = pow(z, q, p)
    t = pow(v, q, p)
    r = pow(v, (q + 1) // 2, p)

    while t != 1:
        i, temp = 0, t
        while temp != 1:
            temp = (temp * temp) % p
            i += 1
            if i == m:
                raise InvalidEncoding("value has no square root modulo p")
        b = pow(c, 1 << (m - i - 1), p)
        m = i
        c = (b * b) % p
        t = (t * c) % p
        r = (r * b) % p
    return r


# ── randomness ──────────────────────────────────────────────────────────
RandomScalar = Callable[[int], int]


def random_scalar(order: int) -> int:
    """Uniform in [1, order-1] from the OS CSPRNG."""
    return secrets.randbelow(order - 1) + 1


def in_range(value: int, low: int, high: int) -> bool:
    """``low <= value <= high`` for ints only."""
    return isinstance(value, int) and low <= value <= high
