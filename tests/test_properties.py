"""
Property-based tests for BigInt arithmetic

Python's own int is the oracle: every BigInt result must agree with the
equivalent int computation (with truncating division semantics).
"""

from hypothesis import given, settings, strategies as st

from bigint import BigInt, ZERO, ONE


LIMIT = 2**256

ints = st.integers(min_value=-LIMIT, max_value=LIMIT)
nonzero_ints = ints.filter(lambda n: n != 0)
big_ints = ints.map(BigInt.value_of)
small_exponents = st.integers(min_value=0, max_value=24)


def truncated_divmod(a, b):
    quotient = abs(a) // abs(b)
    if (a < 0) != (b < 0):
        quotient = -quotient
    return quotient, a - b * quotient


class TestAlgebraicLaws:
    """Test identities, commutativity, associativity and inverses"""

    @given(big_ints)
    def test_identities(self, a):
        """Test additive and multiplicative identity"""
        assert a + ZERO == a
        assert a * ONE == a

    @given(big_ints, big_ints)
    def test_commutativity(self, a, b):
        """Test commutativity"""
        assert a + b == b + a
        assert a * b == b * a

    @given(big_ints, big_ints, big_ints)
    def test_associativity(self, a, b, c):
        """Test associativity"""
        assert (a + b) + c == a + (b + c)
        assert (a * b) * c == a * (b * c)

    @given(big_ints, big_ints)
    def test_additive_inverse(self, a, b):
        """Test additive inverse"""
        assert a + (-a) == ZERO
        assert (a + (-a)).sign == 0
        assert a - b == a + (-b)


class TestAgainstIntOracle:
    """Test that results match Python int arithmetic exactly"""

    @given(ints, ints)
    def test_add_subtract_multiply(self, a, b):
        """Test add, subtract and multiply against int"""
        x, y = BigInt.value_of(a), BigInt.value_of(b)
        assert int(x + y) == a + b
        assert int(x - y) == a - b
        assert int(x * y) == a * b

    @given(ints, nonzero_ints)
    def test_truncating_division(self, a, b):
        """Test truncating division"""
        quotient, remainder = BigInt.value_of(a).divide_and_remainder(BigInt.value_of(b))
        assert (int(quotient), int(remainder)) == truncated_divmod(a, b)

    @given(ints, ints)
    def test_compare_to_matches_difference_sign(self, a, b):
        """Test compare_to agrees with the sign of a - b"""
        x, y = BigInt.value_of(a), BigInt.value_of(b)
        difference = x - y
        assert x.compare_to(y) == difference.sign
        assert (x < y) == (a < b)

    @given(ints)
    def test_to_string_matches_int(self, a):
        """Test to_string agrees with str(int)"""
        assert BigInt.value_of(a).to_string() == str(a)

    @given(ints)
    def test_most_significant_bit(self, a):
        """Test most_significant_bit agrees with int.bit_length"""
        expected = abs(a).bit_length() - 1 if a else 0
        assert BigInt.value_of(a).most_significant_bit() == expected


class TestDivisionLaw:
    """Test a == b * (a / b) + (a % b) with a bounded, dividend-signed remainder"""

    @given(big_ints, nonzero_ints.map(BigInt.value_of))
    def test_division_law(self, a, b):
        """Test a == b * q + r with |r| < |b|"""
        quotient, remainder = a.divide_and_remainder(b)
        assert b * quotient + remainder == a
        assert remainder.abs() < b.abs()
        assert remainder.sign in (0, a.sign)


class TestRoundTrip:
    """Test parse(to_string(x)) == x"""

    @given(big_ints)
    def test_round_trip(self, a):
        """Test parse(to_string(x)) == x"""
        assert BigInt.parse(a.to_string()) == a

    @given(st.integers(min_value=0, max_value=10**60), st.integers(min_value=0, max_value=5))
    def test_leading_zeros_and_plus_sign(self, n, zeros):
        """Test leading zeros and plus sign"""
        text = "+" + "0" * zeros + str(n)
        assert BigInt.parse(text) == BigInt.value_of(n)


class TestExponentiation:
    """Test pow(0), pow(1) and pow(m + n) == pow(m) * pow(n)"""

    @settings(max_examples=50)
    @given(st.integers(min_value=-2**64, max_value=2**64), small_exponents, small_exponents)
    def test_pow_laws(self, base, m, n):
        """Test pow(0), pow(1) and pow(m + n) == pow(m) * pow(n)"""
        x = BigInt.value_of(base)
        assert x.pow(0) == ONE
        assert x.pow(1) == x
        assert x.pow(m + n) == x.pow(m) * x.pow(n)
        assert int(x.pow(m)) == base ** m
