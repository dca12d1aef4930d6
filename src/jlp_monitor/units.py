from __future__ import annotations


def shift_decimals(value: int, exponent: int) -> int:
    """Multiply ``value`` by ``10**exponent`` using integer arithmetic only.

    Args:
        value: Non-negative fixed-point integer.
        exponent: Power of ten to apply; may be negative.

    Returns:
        ``value * 10**exponent`` when ``exponent`` >= 0, otherwise
        ``value // 10**-exponent`` (floor division).

    Raises:
        ValueError: If ``value`` is negative.
    """
    if value < 0:
        raise ValueError(f"Fixed-point value must be non-negative, got {value}")
    if exponent >= 0:
        return value * (10**exponent)
    return value // (10 ** (-exponent))


def rescale(value: int, decimals: int, target_decimals: int) -> int:
    """Rescale an integer amount from ``decimals`` to ``target_decimals``.

    Notes:
        - Scaling up is exact.
        - Scaling down truncates (floor) the extra digits.
    """
    if decimals == target_decimals:
        return value
    return shift_decimals(value, target_decimals - decimals)
