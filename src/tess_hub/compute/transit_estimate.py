"""Direct transit parameter estimates from a light curve at a known period.

A quick, model-free measurement used to seed the optimizer when only a
period is known:
- epoch: time of the faintest sample, reduced modulo the period
- depth: out-of-transit median minus the faintest near-transit sample
- duration: phase span of samples below the half-depth threshold

Curves with no sample below the noise band (``NOISE_BAND_SIGMA`` robust
standard deviations under the median) carry no measurable transit.
"""

from __future__ import annotations

import logging

import numpy as np

from tess_hub.compute.fold import fold_phase
from tess_hub.domain.transit import HOURS_PER_DAY, LightCurveSeries, TransitParameters

logger = logging.getLogger(__name__)

MIN_SAMPLES = 20
OUT_OF_TRANSIT_PHASE = 0.1
NEAR_TRANSIT_PHASE = 0.05
NOISE_BAND_SIGMA = 3.0


def _no_transit(period_days: float) -> TransitParameters:
    return TransitParameters(period_days=period_days, depth=0.0, duration_hours=0.0, epoch_hours=0.0)


def estimate_transit_parameters(series: LightCurveSeries, period_days: float) -> TransitParameters:
    """Measure depth, duration and epoch for a light curve folded on ``period_days``.

    Series with fewer than ``MIN_SAMPLES`` points, a non-positive period, or
    no sample below the noise band give zero depth, duration and epoch.
    """
    if len(series) < MIN_SAMPLES or period_days <= 0:
        logger.debug("Too little data to estimate transit (n=%d, period=%s)", len(series), period_days)
        return _no_transit(period_days)

    period_hours = period_days * HOURS_PER_DAY
    t_min = float(series.time[int(np.argmin(series.brightness))])
    epoch = float(np.mod(t_min, period_hours))

    phase = fold_phase(series.time, period_days, epoch)
    brightness = series.brightness

    # Whole-series statistics: transits are a small fraction of the samples.
    median = float(np.median(brightness))
    sigma = float(np.median(np.abs(brightness - median))) * 1.4826
    if not np.any(brightness < median - NOISE_BAND_SIGMA * sigma):
        logger.debug("No samples below the noise band (sigma=%.3g)", sigma)
        return _no_transit(period_days)

    out_of_transit = brightness[np.abs(phase) > OUT_OF_TRANSIT_PHASE]
    baseline = float(np.median(out_of_transit)) if out_of_transit.size else median

    near_transit = brightness[np.abs(phase) < NEAR_TRANSIT_PHASE]
    floor = float(np.min(near_transit)) if near_transit.size else baseline
    depth = max(0.0, baseline - floor)

    duration = 0.0
    below = phase[brightness < baseline - depth * 0.5]
    if below.size > 1:
        duration = float((np.max(below) - np.min(below)) * period_hours)

    return TransitParameters(
        period_days=period_days,
        depth=depth,
        duration_hours=duration,
        epoch_hours=epoch,
    )


__all__ = ["NOISE_BAND_SIGMA", "estimate_transit_parameters"]
