"""Rolling-median detrending for light curves."""

from __future__ import annotations

import logging

import numpy as np
from scipy.ndimage import median_filter

from tess_hub.domain.transit import LightCurveSeries

logger = logging.getLogger(__name__)

_NEAR_ZERO = 1e-10


def median_detrend(series: LightCurveSeries, window: int = 101) -> LightCurveSeries:
    """Divide a rolling median baseline out of the brightness.

    Removes slow stellar variability or instrumental drift while keeping
    transits shorter than the window. An even window is widened by one so the
    median stays centered.

    Args:
        series: Light curve to detrend.
        window: Window size in samples.

    Returns:
        New series with the same times and brightness / baseline.

    Raises:
        ValueError: If window is not positive.
    """
    if window < 1:
        raise ValueError(f"window must be positive, got {window}")
    if window % 2 == 0:
        window += 1
    if len(series) == 0:
        return series

    baseline = median_filter(np.asarray(series.brightness, dtype=np.float64), size=window, mode="reflect")
    near_zero = np.abs(baseline) < _NEAR_ZERO
    if np.any(near_zero):
        logger.warning(
            "Found %d baseline values near zero (|baseline| < %g), setting to NaN",
            int(np.sum(near_zero)),
            _NEAR_ZERO,
        )
    baseline = np.where(near_zero, np.nan, baseline)
    return LightCurveSeries(time=series.time, brightness=series.brightness / baseline)


__all__ = ["median_detrend"]
