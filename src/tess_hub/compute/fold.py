"""Phase folding onto a [-0.5, 0.5) orbital cycle."""

from __future__ import annotations

from typing import TYPE_CHECKING

import numpy as np

from tess_hub.domain.transit import HOURS_PER_DAY, LightCurveSeries, PhaseSeries

if TYPE_CHECKING:
    from numpy.typing import NDArray


def fold_phase(
    time_hours: NDArray[np.float64],
    period_days: float,
    epoch_hours: float,
) -> NDArray[np.float64]:
    """Map absolute times (hours) to orbital phase in [-0.5, 0.5).

    Phase 0 is a transit center. Negative ``time - epoch`` offsets are
    handled by a positive-remainder modulo, so times before the epoch wrap
    onto the same cycle as times after it.

    Raises:
        ValueError: If ``period_days`` is not positive.
    """
    if period_days <= 0:
        raise ValueError(f"Period must be positive: {period_days}")
    period_hours = float(period_days) * HOURS_PER_DAY
    t = np.asarray(time_hours, dtype=np.float64)
    fraction = np.mod(t - float(epoch_hours), period_hours) / period_hours
    # np.mod can round up to exactly period_hours for tiny negative offsets
    fraction = np.where(fraction >= 1.0, 0.0, fraction)
    return np.where(fraction >= 0.5, fraction - 1.0, fraction)


def phase_fold(series: LightCurveSeries, period_days: float, epoch_hours: float) -> PhaseSeries:
    """Fold a light curve on ``period_days`` around ``epoch_hours``.

    Output keeps input order; call ``PhaseSeries.sorted()`` for plotting.
    A non-positive period yields an empty series.

    Example:
        >>> lc = LightCurveSeries(time=[0.0, 12.0, 36.0], brightness=[0.99, 1.0, 1.0])
        >>> phase_fold(lc, period_days=1.0, epoch_hours=0.0).phase
        array([ 0. , -0.5, -0.5])
    """
    if period_days <= 0 or len(series) == 0:
        return PhaseSeries.empty()
    phase = fold_phase(series.time, period_days, epoch_hours)
    return PhaseSeries(phase=phase, brightness=series.brightness)


__all__ = ["fold_phase", "phase_fold"]
