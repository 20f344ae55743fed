"""Numeric helpers shared by the calculators"""

import math


def safe_ratio(numerator: float, denominator: float, default: float = 0.0) -> float:
    """Return numerator / denominator, or default when the denominator is zero"""
    if denominator == 0:
        return default
    return numerator / denominator


def round_half_up(value: float) -> int:
    """Round to the nearest integer, halves away from zero (browser currency rounding)"""
    if value < 0:
        return -math.floor(-value + 0.5)
    return math.floor(value + 0.5)
