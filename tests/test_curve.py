"""
Curve engine tests
"""

import pytest

from votesig import (
    CURVE25519,
    INFINITY,
    CurveParameters,
    MontgomeryCurve,
    NotInvertible,
    NotOnCurve,
    Point,
    compress,
)
from votesig.field import is_square, mod_inverse, mod_sqrt


# Order-2 point:  B·0² = 0³ + A·0² + 0
TORSION_2 = Point(0, 0)


class TestCurveParameters:
    """Tests for curve parameter validation."""

    def test_curve25519_constants(self):
        """Test canonical Curve25519 constants."""
        assert CURVE25519.A == 486662
        assert CURVE25519.B == 1
        assert CURVE25519.P == 2 ** 255 - 19
        assert CURVE25519.GX == 9

    def test_parameters_are_immutable(self):
        """Test parameters cannot be mutated."""
        with pytest.raises(Exception):
            CURVE25519.A = 1

    def test_rejects_generator_off_curve(self):
        """Test construction fails when G is not on the curve."""
        with pytest.raises(ValueError):
            CurveParameters(
                name="broken",
                A=CURVE25519.A,
                B=CURVE25519.B,
                P=CURVE25519.P,
                N=CURVE25519.N,
                GX=CURVE25519.GX,
                GY=CURVE25519.GY + 1,
            )


class TestPoint:
    """Tests for the Point value type."""

    def test_infinity_sentinel(self):
        """Test point at infinity has no coordinates."""
        assert INFINITY.is_infinity()
        assert Point.infinity() == INFINITY
        assert INFINITY.x is None and INFINITY.y is None

    def test_half_infinity_rejected(self):
        """Test a point with only one coordinate is rejected."""
        with pytest.raises(ValueError):
            Point(1, None)

    def test_value_equality(self):
        """Test points compare by coordinates."""
        assert Point(9, 5) == Point(9, 5)
        assert hash(Point(9, 5)) == hash(Point(9, 5))
        assert Point(9, 5) != Point(9, 6)


class TestIsOnCurve:
    """Tests for curve membership."""

    def test_generator_on_curve(self, engine):
        assert engine.is_on_curve(engine.generator)

    def test_infinity_on_curve(self, engine):
        assert engine.is_on_curve(INFINITY)

    def test_torsion_point_on_curve(self, engine):
        assert engine.is_on_curve(TORSION_2)

    def test_perturbed_point_off_curve(self, engine):
        G = engine.generator
        assert not engine.is_on_curve(Point(G.x, G.y + 1))

    def test_unreduced_coordinates_off_curve(self, engine):
        G = engine.generator
        assert not engine.is_on_curve(Point(G.x + CURVE25519.P, G.y))


class TestGroupLaw:
    """Tests for addition, doubling and negation."""

    def test_identity(self, engine):
        G = engine.generator
        assert engine.add(INFINITY, G) == G
        assert engine.add(G, INFINITY) == G
        assert engine.add(INFINITY, INFINITY) == INFINITY

    def test_inverse(self, engine):
        G = engine.generator
        assert engine.add(G, engine.negate(G)) == INFINITY

    def test_negate(self, engine):
        G = engine.generator
        neg = engine.negate(G)
        assert neg.x == G.x
        assert neg.y == CURVE25519.P - G.y
        assert engine.negate(INFINITY) == INFINITY

    def test_add_equal_points_doubles(self, engine):
        G = engine.generator
        assert engine.add(G, G) == engine.double(G)

    def test_known_multiples(self, engine):
        """Test 2G and 3G against pinned encodings."""
        G = engine.generator
        two = engine.double(G)
        three = engine.add(two, G)
        assert compress(two).hex() == (
            "0320d342d51873f1b7d9750c687d1571148f3f5ced1e350b5c5cae469cdd684efb"
        )
        assert compress(three).hex() == (
            "031c12bc1a6d57abe645534d91c21bba64f8824e67621c0859c00a03affb713c12"
        )

    def test_commutative(self, engine):
        G = engine.generator
        two = engine.double(G)
        assert engine.add(G, two) == engine.add(two, G)

    def test_associative(self, engine):
        G = engine.generator
        P = engine.scalar_mul(5, G)
        Q = engine.scalar_mul(11, G)
        assert engine.add(engine.add(G, P), Q) == engine.add(G, engine.add(P, Q))

    def test_results_on_curve(self, engine):
        G = engine.generator
        assert engine.is_on_curve(engine.add(G, engine.double(G)))

    def test_double_at_y_zero_fails(self, engine):
        with pytest.raises(NotInvertible):
            engine.double(TORSION_2)

    def test_add_order_two_point_to_itself(self, engine):
        assert engine.add(TORSION_2, TORSION_2) == INFINITY

    def test_off_curve_input_fails(self, engine):
        G = engine.generator
        bad = Point(G.x, G.y + 1)
        with pytest.raises(NotOnCurve):
            engine.add(G, bad)
        with pytest.raises(NotOnCurve):
            engine.add(bad, G)
        with pytest.raises(NotOnCurve):
            engine.double(bad)
        with pytest.raises(NotOnCurve):
            engine.negate(bad)
        with pytest.raises(NotOnCurve):
            engine.scalar_mul(3, bad)


class TestScalarMul:
    """Tests for double-and-add scalar multiplication."""

    def test_zero(self, engine):
        assert engine.scalar_mul(0, engine.generator) == INFINITY

    def test_one(self, engine):
        assert engine.scalar_mul(1, engine.generator) == engine.generator

    def test_infinity(self, engine):
        assert engine.scalar_mul(12345, INFINITY) == INFINITY

    def test_order(self, engine):
        assert engine.scalar_mul(CURVE25519.N, engine.generator) == INFINITY

    def test_order_plus_one(self, engine):
        G = engine.generator
        assert engine.scalar_mul(CURVE25519.N + 1, G) == G

    def test_negative_scalar(self, engine):
        G = engine.generator
        assert engine.scalar_mul(-7, G) == engine.negate(engine.scalar_mul(7, G))

    def test_repeated_addition(self, engine):
        G = engine.generator
        acc = INFINITY
        for _ in range(6):
            acc = engine.add(acc, G)
        assert engine.scalar_mul(6, G) == acc

    @pytest.mark.parametrize("a,b", [
        (1, 1),
        (3, 10),
        (2 ** 200 + 17, 2 ** 130 + 5),
        (CURVE25519.N - 1, 2),
    ])
    def test_distributive(self, engine, a, b):
        G = engine.generator
        lhs = engine.scalar_mul(a + b, G)
        rhs = engine.add(engine.scalar_mul(a, G), engine.scalar_mul(b, G))
        assert lhs == rhs

    def test_base_mul(self, engine):
        assert engine.base_mul(9) == engine.scalar_mul(9, engine.generator)

    def test_torsion_point(self, engine):
        assert engine.scalar_mul(2, TORSION_2) == INFINITY
        assert engine.scalar_mul(3, TORSION_2) == TORSION_2
        assert engine.scalar_mul(-1, TORSION_2) == TORSION_2

    def test_input_validated_once(self):
        """Test the curve equation is checked on entry only."""
        engine = MontgomeryCurve(CURVE25519)
        checked = []
        contains = engine._contains
        engine._contains = lambda P: checked.append(P) or contains(P)

        result = engine.scalar_mul(2 ** 200 + 12345, engine.generator)

        assert checked == [engine.generator]
        assert result == MontgomeryCurve(CURVE25519).scalar_mul(
            2 ** 200 + 12345, engine.generator,
        )


class TestSubgroup:
    """Tests for prime-order subgroup membership."""

    def test_generator(self, engine):
        assert engine.in_subgroup(engine.generator)

    def test_multiple_of_generator(self, engine):
        assert engine.in_subgroup(engine.base_mul(0xDEADBEEF))

    def test_infinity(self, engine):
        assert not engine.in_subgroup(INFINITY)

    def test_order_two_point(self, engine):
        assert not engine.in_subgroup(TORSION_2)

    def test_generator_plus_torsion(self, engine):
        shifted = engine.add(engine.generator, TORSION_2)
        assert engine.is_on_curve(shifted)
        assert not engine.in_subgroup(shifted)

    def test_off_curve(self, engine):
        G = engine.generator
        assert not engine.in_subgroup(Point(G.x, G.y + 1))


class TestComputeY:
    """Tests for y-recovery."""

    def test_generator_y(self, engine):
        y = engine.compute_y(CURVE25519.GX)
        assert y in (CURVE25519.GY, CURVE25519.P - CURVE25519.GY)

    def test_zero(self, engine):
        assert engine.compute_y(0) == 0


class TestDeterministicHash:
    """Tests for the point-to-point hash."""

    def test_pinned_value(self, engine):
        hashed = engine.deterministic_hash(engine.generator)
        assert compress(hashed).hex() == (
            "02774094e1bb782e5b4e217bfb5445389f67c5771505b9eb3fb57ca2858c7b329b"
        )

    def test_reproducible(self, engine):
        P = engine.scalar_mul(42, engine.generator)
        assert engine.deterministic_hash(P) == engine.deterministic_hash(P)

    def test_definition(self, engine):
        P = engine.scalar_mul(42, engine.generator)
        expected = engine.base_mul((P.x + P.y) % CURVE25519.P)
        assert engine.deterministic_hash(P) == expected

    def test_infinity(self, engine):
        assert engine.deterministic_hash(INFINITY) == INFINITY


class TestEngineIsolation:
    """Tests that engines share no mutable state."""

    def test_fresh_engine_agrees(self, engine):
        other = MontgomeryCurve(CURVE25519)
        assert other.scalar_mul(77, other.generator) == engine.scalar_mul(
            77, engine.generator,
        )


class TestField:
    """Tests for modular helpers."""

    def test_mod_inverse(self):
        assert (mod_inverse(3, 7) * 3) % 7 == 1
        assert (mod_inverse(-3, 7) * -3) % 7 == 1

    def test_mod_inverse_zero(self):
        with pytest.raises(NotInvertible):
            mod_inverse(14, 7)

    @pytest.mark.parametrize("p", [7, 13, 17, 41, 97, 2 ** 255 - 19])
    def test_mod_sqrt(self, p):
        """Test each square-root branch (3 mod 4, 5 mod 8, 1 mod 8)."""
        for v in (2, 3, 5, 10, 11):
            if is_square(v, p):
                r = mod_sqrt(v, p)
                assert (r * r) % p == v % p

    def test_non_residue(self):
        from votesig import InvalidEncoding
        with pytest.raises(InvalidEncoding):
            mod_sqrt(3, 7)
