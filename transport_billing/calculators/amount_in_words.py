"""Render rupee amounts in English words using Indian number grouping.

Groups are read as crore (10^7), lakh (10^5), thousand and hundred, so
150000 reads "One Lakh Fifty Thousand" rather than "One Hundred Fifty
Thousand". No currency suffix is added; the memo and invoice layouts print
their own label next to the words.
"""

from decimal import ROUND_HALF_UP, Decimal
from typing import List

_ONES = [
    "",
    "One",
    "Two",
    "Three",
    "Four",
    "Five",
    "Six",
    "Seven",
    "Eight",
    "Nine",
    "Ten",
    "Eleven",
    "Twelve",
    "Thirteen",
    "Fourteen",
    "Fifteen",
    "Sixteen",
    "Seventeen",
    "Eighteen",
    "Nineteen",
]

_TENS = [
    "",
    "",
    "Twenty",
    "Thirty",
    "Forty",
    "Fifty",
    "Sixty",
    "Seventy",
    "Eighty",
    "Ninety",
]

CRORE = 10_000_000
LAKH = 100_000


def _below_hundred(n: int) -> List[str]:
    if n < 20:
        return [_ONES[n]] if n else []
    tens, ones = divmod(n, 10)
    return [_TENS[tens]] + ([_ONES[ones]] if ones else [])


def _words(n: int) -> List[str]:
    words: List[str] = []

    crore, n = divmod(n, CRORE)
    if crore:
        words += _words(crore) + ["Crore"]

    lakh, n = divmod(n, LAKH)
    if lakh:
        words += _below_hundred(lakh) + ["Lakh"]

    thousand, n = divmod(n, 1000)
    if thousand:
        words += _below_hundred(thousand) + ["Thousand"]

    hundred, n = divmod(n, 100)
    if hundred:
        words += [_ONES[hundred], "Hundred"]

    words += _below_hundred(n)
    return words


def amount_in_words(amount: int) -> str:
    """Convert a non-negative whole rupee amount into words.

    Args:
        amount: Whole amount (fraction already discarded upstream)

    Returns:
        Title-case words, "Zero" for 0

    Raises:
        ValueError: If amount is negative

    Example:
        >>> amount_in_words(1030)
        'One Thousand Thirty'
        >>> amount_in_words(100000)
        'One Lakh'
        >>> amount_in_words(25050075)
        'Two Crore Fifty Lakh Fifty Thousand Seventy Five'
    """
    if amount < 0:
        raise ValueError(f"Amount must be non-negative, got {amount}")
    if amount == 0:
        return "Zero"
    return " ".join(_words(amount))


def rupees_in_words(value: Decimal) -> str:
    """Words for a computed total, which may carry paise or be negative.

    The value is rounded half-up to whole rupees. A negative total (possible
    when an odometer reading was mistyped) is prefixed with "Minus".

    Example:
        >>> rupees_in_words(Decimal("1529.50"))
        'One Thousand Five Hundred Thirty'
        >>> rupees_in_words(Decimal("-200"))
        'Minus Two Hundred'
    """
    whole = int(value.quantize(Decimal("1"), rounding=ROUND_HALF_UP))
    if whole < 0:
        return f"Minus {amount_in_words(-whole)}"
    return amount_in_words(whole)
