"""
Magnitude Primitives

Unsigned arithmetic on magnitudes: ordered sequences of base-2**32 words,
least-significant word first, with no high-order zero words. The empty
sequence is zero. Every function accepts any sequence of ints and returns a
new tuple, so a caller's words are never aliased or mutated.

None of these functions knows about signs; the signed layer in
``bigint.integer`` dispatches on sign and delegates the magnitude work here.
"""

from typing import Sequence, Tuple

from .errors import DivisionByZero


WORD_BITS = 32
WORD_BASE = 1 << WORD_BITS
WORD_MASK = WORD_BASE - 1

Magnitude = Tuple[int, ...]

EMPTY: Magnitude = ()


def strip(words: Sequence[int]) -> Magnitude:
    """Drop high-order zero words"""
    keep = len(words)
    while keep > 0 and words[keep - 1] == 0:
        keep -= 1
    return tuple(words[:keep])


def from_int(value: int) -> Magnitude:
    """
    Split a non-negative Python int into words.

    Raises:
        ValueError: If value is negative
    """
    if value < 0:
        raise ValueError(f"Magnitude cannot be negative: {value}")
    words = []
    while value:
        words.append(value & WORD_MASK)
        value >>= WORD_BITS
    return tuple(words)


def to_int(words: Sequence[int]) -> int:
    """Reassemble words into a Python int"""
    value = 0
    for word in reversed(words):
        value = (value << WORD_BITS) | word
    return value


def compare(a: Sequence[int], b: Sequence[int]) -> int:
    """
    Compare two magnitudes.

    Returns:
        -1 if a < b, 0 if a == b, 1 if a > b
    """
    a = strip(a)
    b = strip(b)
    if len(a) != len(b):
        return 1 if len(a) > len(b) else -1

    # Most significant word decides
    for i in range(len(a) - 1, -1, -1):
        if a[i] != b[i]:
            return 1 if a[i] > b[i] else -1
    return 0


def add(a: Sequence[int], b: Sequence[int]) -> Magnitude:
    """Add two magnitudes, carrying through a wide accumulator"""
    a = strip(a)
    b = strip(b)
    if len(a) < len(b):
        a, b = b, a

    result = []
    carry = 0
    for i in range(len(a)):
        total = a[i] + (b[i] if i < len(b) else 0) + carry
        result.append(total & WORD_MASK)
        carry = total >> WORD_BITS

    if carry:
        result.append(carry)
    return tuple(result)


def subtract(a: Sequence[int], b: Sequence[int]) -> Magnitude:
    """
    Subtract b from a with borrow propagation.

    Raises:
        ValueError: If b is greater than a
    """
    if compare(a, b) < 0:
        raise ValueError("Subtrahend magnitude exceeds minuend")

    result = []
    borrow = 0
    for i in range(len(a)):
        diff = a[i] - (b[i] if i < len(b) else 0) - borrow
        if diff < 0:
            diff += WORD_BASE
            borrow = 1
        else:
            borrow = 0
        result.append(diff)

    return strip(result)


def multiply_by_word(a: Sequence[int], word: int) -> Magnitude:
    """Multiply a magnitude by a single word; the result may grow by one word"""
    a = strip(a)
    if word == 0 or not a:
        return EMPTY
    if word == 1:
        return tuple(a)

    result = []
    carry = 0
    for digit in a:
        product = digit * word + carry
        result.append(product & WORD_MASK)
        carry = product >> WORD_BITS

    if carry:
        result.append(carry)
    return tuple(result)


def multiply(a: Sequence[int], b: Sequence[int]) -> Magnitude:
    """
    Schoolbook multiplication.

    One partial product per word of the shorter operand, shifted left by the
    word's position and accumulated with add(). O(len(a) * len(b)).
    """
    a = strip(a)
    b = strip(b)
    if not a or not b:
        return EMPTY
    if len(a) < len(b):
        a, b = b, a

    total = EMPTY
    for i, word in enumerate(b):
        if word == 0:
            continue
        partial = multiply_by_word(a, word)
        total = add(total, (0,) * i + partial)
    return total


def _divide_by_word(a: Sequence[int], divisor: int) -> Tuple[Magnitude, Magnitude]:
    quotient = [0] * len(a)
    rem = 0
    for i in range(len(a) - 1, -1, -1):
        current = (rem << WORD_BITS) | a[i]
        quotient[i] = current // divisor
        rem = current - quotient[i] * divisor
    return strip(quotient), strip((rem,))


def _quotient_word(partial: Magnitude, b: Sequence[int]) -> int:
    # Largest q in [0, 2**32) with q * b <= partial, by binary search.
    # The caller guarantees partial < b * 2**32.
    if compare(partial, b) < 0:
        return 0

    low, high = 1, WORD_BASE
    while high - low > 1:
        mid = (low + high) // 2
        if compare(multiply_by_word(b, mid), partial) <= 0:
            low = mid
        else:
            high = mid
    return low


def divide_with_remainder(a: Sequence[int], b: Sequence[int]) -> Tuple[Magnitude, Magnitude]:
    """
    Long division of magnitudes.

    Produces the quotient one word at a time from the most significant
    position down. At each position the next dividend word is shifted in
    below the running remainder, the quotient word is found by binary search
    and its multiple of b subtracted out.

    Returns:
        (quotient, remainder), both stripped

    Raises:
        DivisionByZero: If b is empty
    """
    a = strip(a)
    b = strip(b)
    if not b:
        raise DivisionByZero("Magnitude division by zero")
    if compare(a, b) < 0:
        return EMPTY, a
    if len(b) == 1:
        return _divide_by_word(a, b[0])

    quotient = [0] * len(a)
    remainder = EMPTY
    for i in range(len(a) - 1, -1, -1):
        partial = strip((a[i],) + remainder)
        word = _quotient_word(partial, b)
        if word:
            remainder = subtract(partial, multiply_by_word(b, word))
        else:
            remainder = partial
        quotient[i] = word

    return strip(quotient), strip(remainder)


def most_significant_bit(words: Sequence[int]) -> int:
    """Zero-based index of the highest set bit; 0 for an empty magnitude"""
    words = strip(words)
    if not words:
        return 0
    top = len(words) - 1
    return top * WORD_BITS + words[top].bit_length() - 1
