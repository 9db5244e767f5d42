"""
Arithmetic Error Types

Every condition signalled by the library derives from BigIntError and from
the builtin exception a Python caller would expect for the same mistake, so
``except ZeroDivisionError`` and ``except DivisionByZero`` both work.
"""


class BigIntError(Exception):
    """Base class for all arbitrary-precision arithmetic errors"""


class DivisionByZero(BigIntError, ZeroDivisionError):
    """Divisor of divide, remainder or divide_and_remainder is zero"""


class InvalidArgument(BigIntError, ValueError):
    """Operand outside the domain of the operation (e.g. negative exponent)"""


class FormatError(BigIntError, ValueError):
    """Decimal text could not be parsed"""


class NarrowingOverflow(BigIntError, OverflowError):
    """Value does not fit the requested fixed-width integer (strict mode only)"""
