"""Tests for model-free transit parameter estimates."""

from __future__ import annotations

import numpy as np
import pytest

from tess_hub.compute.fold import fold_phase
from tess_hub.compute.scoring import box_model
from tess_hub.compute.transit_estimate import MIN_SAMPLES, estimate_transit_parameters
from tess_hub.domain.transit import LightCurveSeries, TransitParameters


@pytest.fixture
def params() -> TransitParameters:
    return TransitParameters(period_days=3.0, depth=0.01, duration_hours=3.0, epoch_hours=10.0)


@pytest.fixture
def dense_curve(params: TransitParameters) -> LightCurveSeries:
    time = np.arange(20000, dtype=np.float64) * 0.025
    phase = fold_phase(time, params.period_days, params.epoch_hours)
    return LightCurveSeries(time=time, brightness=box_model(phase, params.depth, params.duration_phase))


class TestEstimateTransitParameters:
    def test_recovers_depth_and_duration(
        self, params: TransitParameters, dense_curve: LightCurveSeries
    ) -> None:
        estimate = estimate_transit_parameters(dense_curve, params.period_days)
        assert estimate.period_days == params.period_days
        assert estimate.depth == pytest.approx(0.01)
        assert estimate.duration_hours == pytest.approx(3.0, abs=0.1)

    def test_epoch_is_first_minimum_modulo_period(
        self, params: TransitParameters, dense_curve: LightCurveSeries
    ) -> None:
        estimate = estimate_transit_parameters(dense_curve, params.period_days)
        assert estimate.epoch_hours == pytest.approx(8.5, abs=0.05)
        assert 0.0 <= estimate.epoch_hours < params.period_hours

    def test_too_few_samples(self) -> None:
        lc = LightCurveSeries(time=np.arange(MIN_SAMPLES - 1.0), brightness=np.ones(MIN_SAMPLES - 1))
        estimate = estimate_transit_parameters(lc, 3.0)
        assert (estimate.depth, estimate.duration_hours, estimate.epoch_hours) == (0.0, 0.0, 0.0)

    def test_non_positive_period(self, dense_curve: LightCurveSeries) -> None:
        estimate = estimate_transit_parameters(dense_curve, 0.0)
        assert estimate.depth == 0.0

    def test_flat_curve_has_no_depth(self) -> None:
        lc = LightCurveSeries(time=np.arange(200.0), brightness=np.ones(200))
        estimate = estimate_transit_parameters(lc, 2.0)
        assert estimate.depth == 0.0
        assert estimate.duration_hours == 0.0

    def test_noise_only_curve_has_no_transit(self) -> None:
        rng = np.random.default_rng(4)
        time = np.arange(2000, dtype=np.float64) * 0.25
        brightness = 1.0 + rng.uniform(-2.5e-4, 2.5e-4, size=time.size)
        estimate = estimate_transit_parameters(LightCurveSeries(time=time, brightness=brightness), 129.94)
        assert estimate.period_days == 129.94
        assert (estimate.depth, estimate.duration_hours, estimate.epoch_hours) == (0.0, 0.0, 0.0)

    def test_single_transit_in_long_period_curve(self) -> None:
        params = TransitParameters(period_days=129.94, depth=0.002, duration_hours=3.0, epoch_hours=200.0)
        time = np.arange(2000, dtype=np.float64) * 0.25
        rng = np.random.default_rng(9)
        phase = fold_phase(time, params.period_days, params.epoch_hours)
        brightness = box_model(phase, params.depth, params.duration_phase) + rng.uniform(
            -2.5e-4, 2.5e-4, size=time.size
        )
        estimate = estimate_transit_parameters(
            LightCurveSeries(time=time, brightness=brightness), params.period_days
        )
        assert estimate.depth == pytest.approx(0.002, abs=3e-4)
        assert estimate.duration_hours == pytest.approx(3.0, abs=0.6)
        assert estimate.epoch_hours == pytest.approx(200.0, abs=2.0)
