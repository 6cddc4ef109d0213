"""
Arithmetic helpers shared by the stock, sector and portfolio roll-ups.

Every percentage with a zero denominator is reported as 0.0 so that
NaN/Infinity never reaches a snapshot.
"""

import math


def safe_percentage(numerator: float, denominator: float) -> float:
    """
    Return numerator / denominator * 100, or 0.0 when undefined.

    Args:
        numerator: Part (e.g., gain/loss, holding investment)
        denominator: Whole (e.g., investment, total investment)

    Returns:
        Percentage, 0.0 for a zero or non-finite denominator

    Examples:
        >>> safe_percentage(20, 100)
        20.0
        >>> safe_percentage(5, 0)
        0.0
    """
    if denominator == 0 or not math.isfinite(denominator):
        return 0.0
    result = (numerator / denominator) * 100
    return result if math.isfinite(result) else 0.0