"""Box-model transit scoring.

The score is the inverse sum of squared residuals between an observed light
curve, folded on the candidate ephemeris, and a flat-bottomed box transit.
Higher is better.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

import numpy as np

from tess_hub.compute.fold import fold_phase
from tess_hub.domain.transit import LightCurveSeries, TransitParameters

if TYPE_CHECKING:
    from numpy.typing import NDArray

logger = logging.getLogger(__name__)

# Returned when residuals vanish; keeps the score finite.
SCORE_CEILING = 1e9
_NEGLIGIBLE_RESIDUAL = 1e-9


def box_model(
    phase: NDArray[np.float64],
    depth: float,
    duration_phase: float,
) -> NDArray[np.float64]:
    """Box transit brightness at each phase.

    Args:
        phase: Orbital phase in [-0.5, 0.5), transit centered on 0.
        depth: Fractional brightness loss inside the transit.
        duration_phase: Full transit duration as a fraction of the period.

    Returns:
        ``1 - depth`` where ``|phase| < duration_phase / 2``, else 1.0.
    """
    phase = np.asarray(phase, dtype=np.float64)
    in_transit = np.abs(phase) < (duration_phase / 2.0)
    return np.where(in_transit, 1.0 - depth, 1.0)


def residual_sum_of_squares(params: TransitParameters, series: LightCurveSeries) -> float:
    phase = fold_phase(series.time, params.period_days, params.epoch_hours)
    model = box_model(phase, params.depth, params.duration_phase)
    return float(np.sum((series.brightness - model) ** 2))


def is_scorable(params: TransitParameters, series: LightCurveSeries) -> bool:
    return (
        params.period_days > 0
        and params.duration_hours > 0
        and params.depth > 0
        and len(series) > 0
    )


def transit_fit_score(params: TransitParameters, series: LightCurveSeries) -> float:
    """Goodness of fit of a box transit to an observed light curve.

    Degenerate inputs (non-positive period, duration or depth, or an empty
    series) score exactly 0.0.
    """
    if not is_scorable(params, series):
        logger.debug("Degenerate scoring input: %s, n=%d", params.to_dict(), len(series))
        return 0.0
    sse = residual_sum_of_squares(params, series)
    if sse < _NEGLIGIBLE_RESIDUAL:
        return SCORE_CEILING
    return 1.0 / sse


__all__ = [
    "SCORE_CEILING",
    "box_model",
    "is_scorable",
    "residual_sum_of_squares",
    "transit_fit_score",
]
