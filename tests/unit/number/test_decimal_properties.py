"""Property-based tests for Decimal invariants.

These check that the arithmetic, ordering and marshaling properties hold
for any finite input, not only for hand-picked cases.
"""

import decimal

from hypothesis import given, settings
from hypothesis import strategies as st

from bigdecimal import ONE, QUOTED, UNQUOTED, Decimal, NaN

BOUND = decimal.Decimal("1e30")


@st.composite
def finite_decimals(draw, min_value=-BOUND, max_value=BOUND, places=10):
    """Generate finite Decimals well inside engine precision."""
    raw = draw(
        st.decimals(
            min_value=min_value,
            max_value=max_value,
            places=places,
            allow_nan=False,
            allow_infinity=False,
        )
    )
    return Decimal.from_decimal(raw)


@st.composite
def wide_decimals(draw):
    """Generate exact Decimals with more digits than engine precision."""
    coefficient = draw(st.integers(min_value=10**100, max_value=10**200))
    exponent = draw(st.integers(min_value=-150, max_value=150))
    sign = draw(st.sampled_from((0, 1)))
    digits = tuple(int(c) for c in str(coefficient))
    return Decimal.from_decimal(decimal.Decimal((sign, digits, exponent)))


any_decimals = st.one_of(finite_decimals(), st.just(NaN))
marshalable_decimals = st.one_of(finite_decimals(), wide_decimals())


class TestArithmeticProperties:
    @given(a=finite_decimals(), b=finite_decimals())
    @settings(max_examples=300)
    def test_add_then_sub_is_identity(self, a: Decimal, b: Decimal):
        """a + b - b == a."""
        assert a.add(b).sub(b).eq(a)

    @given(a=finite_decimals(), b=finite_decimals())
    def test_add_is_commutative(self, a: Decimal, b: Decimal):
        assert a.add(b).eq(b.add(a))

    @given(x=any_decimals)
    def test_nan_absorbs_every_operation(self, x: Decimal):
        """NaN on either side of add/sub/mul/div yields NaN."""
        for op in ("add", "sub", "mul", "div"):
            assert getattr(NaN, op)(x).is_nan()
            assert getattr(x, op)(NaN).is_nan()

    @given(a=finite_decimals())
    def test_zero_power_is_one(self, a: Decimal):
        assert a.pow(0).eq(ONE)

    @given(a=finite_decimals())
    def test_abs_is_non_negative(self, a: Decimal):
        assert a.abs().gte(Decimal())

    @given(a=finite_decimals(min_value=0, max_value=10**20, places=6))
    def test_sqrt_squares_back(self, a: Decimal):
        root = a.sqrt()
        assert abs(root.mul(root).sub(a).to_decimal()) <= decimal.Decimal("1e-40")


class TestOrderingProperties:
    @given(a=finite_decimals(), b=finite_decimals())
    def test_matches_stdlib_ordering(self, a: Decimal, b: Decimal):
        raw_a, raw_b = a.to_decimal(), b.to_decimal()
        assert a.lt(b) == (raw_a < raw_b)
        assert a.gte(b) == (raw_a >= raw_b)
        assert a.eq(b) == (raw_a == raw_b)

    @given(a=finite_decimals(), b=finite_decimals())
    def test_cmp_is_antisymmetric(self, a: Decimal, b: Decimal):
        assert a.cmp(b) == -b.cmp(a)

    @given(x=any_decimals)
    def test_nan_never_ordered(self, x: Decimal):
        assert not NaN.eq(x)
        assert not NaN.lt(x)
        assert not x.gt(NaN)


class TestMarshalingProperties:
    @given(a=marshalable_decimals)
    def test_text_round_trip(self, a: Decimal):
        assert Decimal.from_string(a.to_string()).eq(a)

    @given(a=marshalable_decimals)
    def test_json_round_trip_both_modes(self, a: Decimal):
        assert Decimal.from_json(a.to_json(QUOTED)).eq(a)
        assert Decimal.from_json(a.to_json(UNQUOTED)).eq(a)

    @given(a=marshalable_decimals)
    def test_driver_round_trip(self, a: Decimal):
        assert Decimal.from_driver_value(a.to_driver_value()).eq(a)

    @given(x=st.floats(allow_nan=False, allow_infinity=False))
    def test_float_round_trip(self, x: float):
        assert Decimal.from_float(x).to_float() == x
