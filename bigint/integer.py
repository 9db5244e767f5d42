"""
Arbitrary-Precision Signed Integer

Immutable integer value of unbounded magnitude, used wherever a quantity can
grow multiplicatively without bound (e.g. an in-game currency balance) and
must never overflow or lose precision.

A value is a (sign, magnitude) pair: sign is -1, 0 or +1 and magnitude is a
tuple of base-2**32 words, least significant first. Zero is unique: sign 0
with an empty magnitude. Division truncates toward zero and the remainder
takes the dividend's sign.
"""

import logging
from dataclasses import dataclass
from typing import Any, Tuple, Union

from pydantic_core import core_schema

from . import magnitude as mag
from .config import get_config
from .errors import DivisionByZero, FormatError, InvalidArgument, NarrowingOverflow
from .logging_config import log_operation


logger = logging.getLogger("bigint.integer")

DIGITS = "0123456789"

LONG_BITS = 64
INT_BITS = 32


def _wrap_signed(value: int, bits: int) -> int:
    """Two's-complement wraparound of value into a signed bits-wide range"""
    value &= (1 << bits) - 1
    if value >= 1 << (bits - 1):
        value -= 1 << bits
    return value


@dataclass(frozen=True, eq=False)
class BigInt:
    """
    Immutable arbitrary-precision signed integer.

    Prefer BigInt.value_of() and BigInt.parse() over the raw constructor;
    the constructor validates and canonicalizes its arguments either way.
    """
    sign: int
    magnitude: Tuple[int, ...] = ()

    def __post_init__(self):
        # Defensive copy into an immutable, canonical word tuple
        words = mag.strip(tuple(self.magnitude))
        for word in words:
            if not isinstance(word, int) or not 0 <= word <= mag.WORD_MASK:
                raise ValueError(f"Magnitude word out of range: {word!r}")

        if isinstance(self.sign, bool) or not isinstance(self.sign, int) \
                or self.sign not in (-1, 0, 1):
            raise ValueError(f"Sign must be -1, 0 or 1, got {self.sign!r}")
        if self.sign == 0 and words:
            raise ValueError("Sign 0 requires an empty magnitude")

        object.__setattr__(self, 'magnitude', words)
        if not words:
            object.__setattr__(self, 'sign', 0)

    # ------------------------------------------------------------------
    # Construction
    # ------------------------------------------------------------------

    @classmethod
    def value_of(cls, value: int) -> 'BigInt':
        """Exact conversion from a Python int"""
        if isinstance(value, bool) or not isinstance(value, int):
            raise TypeError(f"Expected int, got {type(value).__name__}")

        if value == 0:
            return ZERO
        if value == 1:
            return ONE
        if value == 10:
            return TEN
        if value < 0:
            return cls(-1, mag.from_int(-value))
        return cls(1, mag.from_int(value))

    @classmethod
    def parse(cls, text: str) -> 'BigInt':
        """
        Parse decimal text with an optional leading '+' or '-'.

        Leading zero digits are skipped and any all-zero input (including
        "-0") yields ZERO.

        Raises:
            FormatError: If text is empty, sign-only, contains a character
                outside 0-9, or has more digits than BIGINT_MAX_PARSE_DIGITS
        """
        if not isinstance(text, str):
            raise FormatError(f"Expected str, got {type(text).__name__}")
        if not text:
            _reject_text(text, "Zero length BigInt")

        cursor = 0
        sign = 1
        if text[0] == '-':
            sign = -1
            cursor = 1
        elif text[0] == '+':
            cursor = 1

        if cursor == len(text):
            _reject_text(text, "Sign only BigInt")

        limit = get_config().max_parse_digits
        if limit and len(text) - cursor > limit:
            _reject_text(text, f"BigInt text exceeds {limit} digits")

        words = mag.EMPTY
        for char in text[cursor:]:
            digit = DIGITS.find(char)
            if digit < 0:
                _reject_text(text, f"Invalid character in BigInt: {char!r}")
            if digit == 0 and not words:
                continue  # leading zero
            words = mag.add(mag.multiply_by_word(words, 10), (digit,))

        if not words:
            return ZERO
        return cls(sign, words)

    @classmethod
    def _create(cls, sign: int, words: Tuple[int, ...]) -> 'BigInt':
        if sign == 0 or not words:
            return ZERO
        return cls(sign, words)

    # ------------------------------------------------------------------
    # Arithmetic
    # ------------------------------------------------------------------

    def add(self, other: 'BigInt') -> 'BigInt':
        if self.sign == 0:
            return other
        if other.sign == 0:
            return self
        if self.sign == other.sign:
            return BigInt._create(self.sign, mag.add(self.magnitude, other.magnitude))
        return self._combine_opposite(other.sign, other.magnitude)

    def subtract(self, other: 'BigInt') -> 'BigInt':
        if other.sign == 0:
            return self
        if self.sign == 0:
            return other.negate()
        if self.sign != other.sign:
            # a - (-b) = a + b, (-a) - b = -(a + b)
            return BigInt._create(self.sign, mag.add(self.magnitude, other.magnitude))
        return self._combine_opposite(-other.sign, other.magnitude)

    def _combine_opposite(self, other_sign: int, other_words: Tuple[int, ...]) -> 'BigInt':
        # self and the other operand have opposite signs: the larger magnitude wins
        order = mag.compare(self.magnitude, other_words)
        if order > 0:
            return BigInt._create(self.sign, mag.subtract(self.magnitude, other_words))
        if order < 0:
            return BigInt._create(other_sign, mag.subtract(other_words, self.magnitude))
        return ZERO

    def multiply(self, other: 'BigInt') -> 'BigInt':
        if self.sign == 0 or other.sign == 0:
            return ZERO
        return BigInt._create(self.sign * other.sign,
                              mag.multiply(self.magnitude, other.magnitude))

    def divide_and_remainder(self, divisor: 'BigInt') -> Tuple['BigInt', 'BigInt']:
        """
        Truncating division.

        Returns:
            (quotient, remainder) with the quotient rounded toward zero and the
            remainder carrying the dividend's sign

        Raises:
            DivisionByZero: If divisor is zero
        """
        if divisor.sign == 0:
            log_operation(logger, "debug", "Rejected division by zero",
                          operation="divide", operand_bits=self.bit_length())
            raise DivisionByZero("BigInt division by zero")
        if self.sign == 0:
            return ZERO, ZERO

        quotient_words, remainder_words = mag.divide_with_remainder(
            self.magnitude, divisor.magnitude)
        quotient = BigInt._create(self.sign * divisor.sign, quotient_words)
        remainder = BigInt._create(self.sign, remainder_words)
        return quotient, remainder

    def divide(self, divisor: 'BigInt') -> 'BigInt':
        return self.divide_and_remainder(divisor)[0]

    def remainder(self, divisor: 'BigInt') -> 'BigInt':
        return self.divide_and_remainder(divisor)[1]

    def pow(self, exponent: Union[int, 'BigInt']) -> 'BigInt':
        """
        Exponentiation by squaring. Any value to the power 0 is ONE.

        Raises:
            InvalidArgument: If exponent is negative
        """
        if isinstance(exponent, BigInt):
            exponent = int(exponent)
        elif isinstance(exponent, bool) or not isinstance(exponent, int):
            raise TypeError(f"Exponent must be int or BigInt, got {type(exponent).__name__}")

        if exponent < 0:
            log_operation(logger, "debug", "Rejected negative exponent",
                          operation="pow", extra={"exponent": exponent})
            raise InvalidArgument(f"Negative exponent not supported: {exponent}")

        result = ONE
        base = self
        while exponent > 0:
            if exponent & 1:
                result = result.multiply(base)
            exponent >>= 1
            if exponent:
                base = base.multiply(base)
        return result

    def negate(self) -> 'BigInt':
        if self.sign == 0:
            return ZERO
        return BigInt(-self.sign, self.magnitude)

    def abs(self) -> 'BigInt':
        if self.sign >= 0:
            return self
        return BigInt(1, self.magnitude)

    # ------------------------------------------------------------------
    # Comparison and inspection
    # ------------------------------------------------------------------

    def compare_to(self, other: 'BigInt') -> int:
        """Return -1, 0 or 1 as self is less than, equal to or greater than other"""
        if self.sign != other.sign:
            return 1 if self.sign > other.sign else -1
        if self.sign == 0:
            return 0
        order = mag.compare(self.magnitude, other.magnitude)
        return order if self.sign > 0 else -order

    def is_zero(self) -> bool:
        return self.sign == 0

    def is_positive(self) -> bool:
        return self.sign > 0

    def is_negative(self) -> bool:
        return self.sign < 0

    def bit_length(self) -> int:
        """Number of bits in the magnitude; 0 for zero"""
        if self.sign == 0:
            return 0
        return mag.most_significant_bit(self.magnitude) + 1

    def most_significant_bit(self) -> int:
        """Index of the highest set bit of |self|, i.e. floor(log2(|self|)); 0 for zero"""
        return mag.most_significant_bit(self.magnitude)

    # ------------------------------------------------------------------
    # Conversion
    # ------------------------------------------------------------------

    def to_string(self) -> str:
        """Canonical decimal text: no leading zeros, '-' prefix iff negative"""
        if self.sign == 0:
            return "0"

        digits = []
        words = self.magnitude
        while words:
            words, digit = mag.divide_with_remainder(words, (10,))
            digits.append(DIGITS[digit[0] if digit else 0])

        text = ''.join(reversed(digits))
        return '-' + text if self.sign < 0 else text

    def to_long(self) -> int:
        """
        Low 64 bits of the magnitude, signed, wrapped into [-2**63, 2**63).

        Raises:
            NarrowingOverflow: If BIGINT_STRICT_NARROWING is set and the value
                does not fit a signed 64-bit integer
        """
        return self._narrow(LONG_BITS, "to_long")

    def to_int(self) -> int:
        """
        Low 32 bits of the magnitude, signed, wrapped into [-2**31, 2**31).

        Raises:
            NarrowingOverflow: If BIGINT_STRICT_NARROWING is set and the value
                does not fit a signed 32-bit integer
        """
        return self._narrow(INT_BITS, "to_int")

    def to_int_abs(self) -> int:
        """Lowest magnitude word, unsigned"""
        return self.magnitude[0] if self.magnitude else 0

    def _narrow(self, bits: int, operation: str) -> int:
        low = mag.to_int(self.magnitude[:bits // mag.WORD_BITS])
        narrowed = _wrap_signed(self.sign * low, bits)

        exact = int(self)
        if narrowed != exact:
            if get_config().strict_narrowing:
                raise NarrowingOverflow(f"BigInt does not fit in {bits} bits")
            log_operation(logger, "debug", f"Truncated BigInt to {bits} bits",
                          operation=operation, operand_bits=self.bit_length())
        return narrowed

    # ------------------------------------------------------------------
    # Python protocol
    # ------------------------------------------------------------------

    def __int__(self) -> int:
        return self.sign * mag.to_int(self.magnitude)

    def __bool__(self) -> bool:
        return self.sign != 0

    def __str__(self) -> str:
        return self.to_string()

    def __repr__(self) -> str:
        return f"BigInt('{self.to_string()}')"

    def __hash__(self) -> int:
        return hash(int(self))

    def __eq__(self, other) -> bool:
        other = _coerce(other)
        if other is NotImplemented:
            return NotImplemented
        return self.sign == other.sign and self.magnitude == other.magnitude

    def __lt__(self, other) -> bool:
        other = _coerce(other)
        if other is NotImplemented:
            return NotImplemented
        return self.compare_to(other) < 0

    def __le__(self, other) -> bool:
        other = _coerce(other)
        if other is NotImplemented:
            return NotImplemented
        return self.compare_to(other) <= 0

    def __gt__(self, other) -> bool:
        other = _coerce(other)
        if other is NotImplemented:
            return NotImplemented
        return self.compare_to(other) > 0

    def __ge__(self, other) -> bool:
        other = _coerce(other)
        if other is NotImplemented:
            return NotImplemented
        return self.compare_to(other) >= 0

    def __add__(self, other) -> 'BigInt':
        other = _coerce(other)
        if other is NotImplemented:
            return NotImplemented
        return self.add(other)

    def __radd__(self, other) -> 'BigInt':
        return self.__add__(other)

    def __sub__(self, other) -> 'BigInt':
        other = _coerce(other)
        if other is NotImplemented:
            return NotImplemented
        return self.subtract(other)

    def __rsub__(self, other) -> 'BigInt':
        other = _coerce(other)
        if other is NotImplemented:
            return NotImplemented
        return other.subtract(self)

    def __mul__(self, other) -> 'BigInt':
        other = _coerce(other)
        if other is NotImplemented:
            return NotImplemented
        return self.multiply(other)

    def __rmul__(self, other) -> 'BigInt':
        return self.__mul__(other)

    # '/' and '%' truncate toward zero, unlike int's floor semantics
    def __truediv__(self, other) -> 'BigInt':
        other = _coerce(other)
        if other is NotImplemented:
            return NotImplemented
        return self.divide(other)

    def __rtruediv__(self, other) -> 'BigInt':
        other = _coerce(other)
        if other is NotImplemented:
            return NotImplemented
        return other.divide(self)

    def __mod__(self, other) -> 'BigInt':
        other = _coerce(other)
        if other is NotImplemented:
            return NotImplemented
        return self.remainder(other)

    def __rmod__(self, other) -> 'BigInt':
        other = _coerce(other)
        if other is NotImplemented:
            return NotImplemented
        return other.remainder(self)

    def __divmod__(self, other) -> Tuple['BigInt', 'BigInt']:
        other = _coerce(other)
        if other is NotImplemented:
            return NotImplemented
        return self.divide_and_remainder(other)

    def __rdivmod__(self, other) -> Tuple['BigInt', 'BigInt']:
        other = _coerce(other)
        if other is NotImplemented:
            return NotImplemented
        return other.divide_and_remainder(self)

    def __pow__(self, exponent) -> 'BigInt':
        if not isinstance(exponent, (int, BigInt)) or isinstance(exponent, bool):
            return NotImplemented
        return self.pow(exponent)

    def __neg__(self) -> 'BigInt':
        return self.negate()

    def __pos__(self) -> 'BigInt':
        return self

    def __abs__(self) -> 'BigInt':
        return self.abs()

    # ------------------------------------------------------------------
    # pydantic integration
    # ------------------------------------------------------------------

    @classmethod
    def __get_pydantic_core_schema__(cls, source_type: Any, handler: Any):
        return core_schema.no_info_plain_validator_function(
            _validate_field,
            serialization=core_schema.plain_serializer_function_ser_schema(
                _serialize_field, info_arg=True, when_used='always'
            ),
        )

    @classmethod
    def __get_pydantic_json_schema__(cls, schema: Any, handler: Any):
        return {"type": "string", "pattern": r"^[+-]?[0-9]+$"}


def _coerce(value: Any) -> Any:
    if isinstance(value, BigInt):
        return value
    if isinstance(value, int) and not isinstance(value, bool):
        return BigInt.value_of(value)
    return NotImplemented


def _reject_text(text: str, reason: str) -> None:
    log_operation(logger, "debug", reason, operation="parse",
                  extra={"length": len(text)})
    raise FormatError(reason)


def _serialize_field(value: BigInt, info: Any) -> Any:
    # Python mode keeps the value itself so model_dump() re-validates
    if info.mode_is_json():
        return value.to_string()
    return value


def _validate_field(value: Any) -> BigInt:
    if isinstance(value, BigInt):
        return value
    if isinstance(value, int) and not isinstance(value, bool):
        return BigInt.value_of(value)
    if isinstance(value, str):
        return BigInt.parse(value.strip())
    raise ValueError(f"Cannot convert {type(value).__name__} to BigInt")


ZERO = BigInt(0, ())
ONE = BigInt(1, (1,))
TEN = BigInt(1, (10,))
