"""Parallax to distance conversion.

Parallax is the only permitted distance source for a fused profile; no
catalog's own distance column is ever used.
"""

from __future__ import annotations

import math

from tess_hub.domain.profile import NOT_AVAILABLE, NotAvailable

LY_PER_PARSEC = 3.26156


def parallax_to_distance_ly(parallax_mas: float | None) -> float | NotAvailable:
    """Convert a parallax in milliarcseconds to a distance in light-years.

    Args:
        parallax_mas: Parallax in milliarcseconds. May be None.

    Returns:
        Distance in light-years rounded to 2 decimals, or ``NOT_AVAILABLE``
        when the parallax is missing, non-finite, or non-positive.

    Example:
        >>> parallax_to_distance_ly(768.52)
        4.24
    """
    if parallax_mas is None:
        return NOT_AVAILABLE
    try:
        parallax = float(parallax_mas)
    except (TypeError, ValueError):
        return NOT_AVAILABLE
    if not math.isfinite(parallax) or parallax <= 0:
        return NOT_AVAILABLE
    distance_pc = 1.0 / (parallax / 1000.0)
    return round(distance_pc * LY_PER_PARSEC, 2)


__all__ = ["LY_PER_PARSEC", "parallax_to_distance_ly"]
