"""Tests for phase folding."""

from __future__ import annotations

import numpy as np
import pytest
from numpy.testing import assert_allclose, assert_array_equal

from tess_hub.compute.fold import fold_phase, phase_fold
from tess_hub.domain.transit import LightCurveSeries


class TestFoldPhase:
    def test_epoch_maps_to_zero(self) -> None:
        phase = fold_phase(np.array([10.0]), period_days=1.0, epoch_hours=10.0)
        assert_allclose(phase, [0.0])

    def test_range_is_half_open(self) -> None:
        time = np.linspace(-1000.0, 1000.0, 5001)
        phase = fold_phase(time, period_days=2.7, epoch_hours=13.3)
        assert np.all(phase >= -0.5)
        assert np.all(phase < 0.5)

    def test_half_period_maps_to_minus_half(self) -> None:
        phase = fold_phase(np.array([12.0]), period_days=1.0, epoch_hours=0.0)
        assert_allclose(phase, [-0.5])

    def test_times_before_epoch_wrap(self) -> None:
        phase = fold_phase(np.array([-6.0, 18.0]), period_days=1.0, epoch_hours=0.0)
        assert_allclose(phase, [-0.25, -0.25])

    def test_one_period_later_same_phase(self) -> None:
        phase = fold_phase(np.array([5.0, 5.0 + 72.0]), period_days=3.0, epoch_hours=1.0)
        assert_allclose(phase[0], phase[1], atol=1e-12)

    @pytest.mark.parametrize("period", [0.0, -1.0])
    def test_non_positive_period_raises(self, period: float) -> None:
        with pytest.raises(ValueError, match="Period must be positive"):
            fold_phase(np.array([1.0]), period_days=period, epoch_hours=0.0)


class TestPhaseFold:
    def test_keeps_input_order_and_brightness(self) -> None:
        lc = LightCurveSeries(time=[0.0, 12.0, 36.0, 6.0], brightness=[0.99, 1.0, 1.01, 1.02])
        folded = phase_fold(lc, period_days=1.0, epoch_hours=0.0)
        assert_allclose(folded.phase, [0.0, -0.5, -0.5, 0.25])
        assert_array_equal(folded.brightness, lc.brightness)

    def test_non_positive_period_is_empty(self) -> None:
        lc = LightCurveSeries(time=[0.0, 1.0], brightness=[1.0, 1.0])
        assert len(phase_fold(lc, period_days=0.0, epoch_hours=0.0)) == 0

    def test_empty_input_is_empty(self) -> None:
        assert len(phase_fold(LightCurveSeries.empty(), period_days=1.0, epoch_hours=0.0)) == 0

    def test_sorted_is_ascending(self) -> None:
        lc = LightCurveSeries(time=np.arange(100.0), brightness=np.ones(100))
        folded = phase_fold(lc, period_days=0.7, epoch_hours=3.0).sorted()
        assert np.all(np.diff(folded.phase) >= 0)


class TestDeterminism:
    def test_folding_twice_is_identical(self) -> None:
        time = np.linspace(0.0, 500.0, 2000)
        first = fold_phase(time, period_days=6.1, epoch_hours=33.0)
        second = fold_phase(time, period_days=6.1, epoch_hours=33.0)
        assert_array_equal(first, second)
