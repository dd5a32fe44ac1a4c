from __future__ import annotations


def percent(numerator: int, denominator: int) -> int:
    """round(100 * numerator / denominator), halves rounded up; 0 when denominator <= 0."""
    if denominator <= 0:
        return 0
    return (200 * int(numerator) + int(denominator)) // (2 * int(denominator))
