"""Tests for rolling-median detrending."""

from __future__ import annotations

import numpy as np
import pytest
from numpy.testing import assert_allclose, assert_array_equal

from tess_hub.compute.detrend import median_detrend
from tess_hub.domain.transit import LightCurveSeries


@pytest.fixture
def scaled_transit() -> LightCurveSeries:
    time = np.arange(1000, dtype=np.float64) * 0.25
    brightness = np.full_like(time, 2.0)
    brightness[500:510] = 1.98
    return LightCurveSeries(time=time, brightness=brightness)


class TestMedianDetrend:
    def test_divides_out_baseline(self, scaled_transit: LightCurveSeries) -> None:
        detrended = median_detrend(scaled_transit, window=101)
        out_of_transit = np.ones(len(detrended), dtype=bool)
        out_of_transit[500:510] = False
        assert_allclose(detrended.brightness[out_of_transit], 1.0)
        assert_allclose(detrended.brightness[500:510], 0.99)
        assert_array_equal(detrended.time, scaled_transit.time)

    def test_even_window_accepted(self, scaled_transit: LightCurveSeries) -> None:
        detrended = median_detrend(scaled_transit, window=100)
        assert len(detrended) == len(scaled_transit)

    def test_window_longer_than_series(self) -> None:
        lc = LightCurveSeries(time=[0.0, 1.0, 2.0], brightness=[3.0, 3.0, 3.0])
        assert_allclose(median_detrend(lc, window=101).brightness, 1.0)

    def test_invalid_window(self, scaled_transit: LightCurveSeries) -> None:
        with pytest.raises(ValueError, match="window must be positive"):
            median_detrend(scaled_transit, window=0)

    def test_empty_series(self) -> None:
        assert len(median_detrend(LightCurveSeries.empty())) == 0

    def test_zero_baseline_becomes_nan(self) -> None:
        lc = LightCurveSeries(time=np.arange(5.0), brightness=np.zeros(5))
        assert np.all(np.isnan(median_detrend(lc, window=3).brightness))
