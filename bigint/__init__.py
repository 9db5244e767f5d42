"""
Arbitrary-Precision Integers

Immutable signed integers of unbounded magnitude built on base-2**32 word
arithmetic, for balances that must never overflow or lose precision.
"""

from .errors import BigIntError, DivisionByZero, FormatError, InvalidArgument, NarrowingOverflow
from .integer import BigInt, ONE, TEN, ZERO

__version__ = "1.0.0"

__all__ = [
    "BigInt",
    "BigIntError",
    "DivisionByZero",
    "FormatError",
    "InvalidArgument",
    "NarrowingOverflow",
    "ONE",
    "TEN",
    "ZERO",
]
