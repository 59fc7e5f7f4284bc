"""Tests for box-model transit scoring."""

from __future__ import annotations

import numpy as np
import pytest
from numpy.testing import assert_array_equal

from tess_hub.compute.fold import fold_phase
from tess_hub.compute.scoring import SCORE_CEILING, box_model, transit_fit_score
from tess_hub.domain.transit import LightCurveSeries, TransitParameters


@pytest.fixture
def params() -> TransitParameters:
    return TransitParameters(period_days=3.0, depth=0.01, duration_hours=3.0, epoch_hours=10.0)


@pytest.fixture
def noise_free_curve(params: TransitParameters) -> LightCurveSeries:
    time = np.linspace(0.0, 500.0, 2000)
    phase = fold_phase(time, params.period_days, params.epoch_hours)
    return LightCurveSeries(time=time, brightness=box_model(phase, params.depth, params.duration_phase))


@pytest.fixture
def noisy_curve(noise_free_curve: LightCurveSeries) -> LightCurveSeries:
    rng = np.random.default_rng(42)
    noise = rng.normal(0.0, 5e-4, len(noise_free_curve))
    return LightCurveSeries(time=noise_free_curve.time, brightness=noise_free_curve.brightness + noise)


class TestBoxModel:
    def test_in_and_out_of_transit(self) -> None:
        phase = np.array([-0.3, -0.01, 0.0, 0.01, 0.3])
        assert_array_equal(box_model(phase, depth=0.02, duration_phase=0.05), [1.0, 0.98, 0.98, 0.98, 1.0])

    def test_edge_is_out_of_transit(self) -> None:
        assert box_model(np.array([0.025]), depth=0.02, duration_phase=0.05)[0] == 1.0


class TestTransitFitScore:
    def test_noise_free_hits_ceiling(
        self, params: TransitParameters, noise_free_curve: LightCurveSeries
    ) -> None:
        assert transit_fit_score(params, noise_free_curve) == SCORE_CEILING

    def test_true_parameters_beat_doubled_period(
        self, params: TransitParameters, noisy_curve: LightCurveSeries
    ) -> None:
        doubled = params.model_copy(update={"period_days": params.period_days * 2})
        assert transit_fit_score(params, noisy_curve) > transit_fit_score(doubled, noisy_curve)

    def test_true_parameters_beat_shallow_depth(
        self, params: TransitParameters, noisy_curve: LightCurveSeries
    ) -> None:
        shallow = params.model_copy(update={"depth": params.depth / 4})
        assert transit_fit_score(params, noisy_curve) > transit_fit_score(shallow, noisy_curve)

    def test_score_is_inverse_sse(self, params: TransitParameters) -> None:
        lc = LightCurveSeries(time=[100.0, 101.0], brightness=[1.1, 1.1])
        assert transit_fit_score(params, lc) == pytest.approx(1.0 / 0.02)

    @pytest.mark.parametrize(
        "update",
        [{"period_days": 0.0}, {"period_days": -1.0}, {"duration_hours": 0.0}, {"depth": 0.0}, {"depth": -0.1}],
    )
    def test_degenerate_parameters_score_zero(
        self, params: TransitParameters, noisy_curve: LightCurveSeries, update: dict[str, float]
    ) -> None:
        assert transit_fit_score(params.model_copy(update=update), noisy_curve) == 0.0

    def test_empty_series_scores_zero(self, params: TransitParameters) -> None:
        assert transit_fit_score(params, LightCurveSeries.empty()) == 0.0

    def test_score_is_finite_and_non_negative(
        self, params: TransitParameters, noisy_curve: LightCurveSeries
    ) -> None:
        score = transit_fit_score(params, noisy_curve)
        assert np.isfinite(score)
        assert 0.0 < score <= SCORE_CEILING
