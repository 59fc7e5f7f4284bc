"""Procedural transit signals for display when no instrument time series exists.

Given scalar transit parameters and an identifier-seeded random stream, this
module synthesizes:
- a brightness-versus-time light curve with periodic box transits
- a period-power spectrum with a single dominant peak at the true period
- a noisy phase-folded curve and the matching noise-free box model
- a sinusoidal radial-velocity curve

The transit dip in the light curve is placed with the same fold/box routines
that the scorer uses, so scoring a noise-free curve with its generating
parameters hits the score ceiling exactly.

All functions are pure compute: the only state is the random stream the
caller passes in, consumed in a fixed order.
"""

from __future__ import annotations

import logging
import math
from dataclasses import dataclass
from typing import Any

import numpy as np

from tess_hub.compute.fold import fold_phase
from tess_hub.compute.random_stream import SeededRandomStream
from tess_hub.compute.scoring import box_model
from tess_hub.domain.profile import VerifiedProfile
from tess_hub.domain.transit import (
    LightCurveSeries,
    PeriodPowerSeries,
    PhaseSeries,
    RadialVelocitySeries,
    TransitParameters,
)

logger = logging.getLogger(__name__)

# R_sun / R_earth, rounded the way the display layer has always used it.
EARTH_RADII_PER_SOLAR_RADIUS = 109.0
_DEPTH_SCALE = 0.95
_DEFAULT_PLANET_RADIUS_REARTH = 1.5
_DEFAULT_STAR_RADIUS_RSUN = 1.0


@dataclass(frozen=True)
class GeneratorConfig:
    """Sampling and noise settings for synthetic signals.

    The defaults keep the dominant periodogram sample within ``peak_width_days``
    of the true period: the peak height exceeds the noise-floor spread by a
    wide margin and the period grid spacing is well under the peak width.
    """

    light_curve_samples: int = 2000
    window_hours: float = 500.0
    noise_amplitude: float = 5e-4

    spectrum_samples: int = 200
    period_range_days: tuple[float, float] = (1.0, 20.0)
    min_search_period_days: float = 0.5
    search_half_span_days: float = 10.0
    peak_width_days: float = 0.5
    peak_height: float = 25.0
    noise_floor: tuple[float, float] = (5.0, 10.0)

    folded_samples: int = 300
    folded_noise_amplitude: float = 1e-3
    depth_jitter: float = 0.1

    model_phase_step: float = 0.01

    def __post_init__(self) -> None:
        if self.light_curve_samples < 0 or self.spectrum_samples < 0 or self.folded_samples < 0:
            raise ValueError("sample counts must be non-negative")
        if self.window_hours <= 0:
            raise ValueError(f"window_hours must be positive, got {self.window_hours}")
        if self.peak_width_days <= 0:
            raise ValueError(f"peak_width_days must be positive, got {self.peak_width_days}")
        if not 0 < self.model_phase_step <= 1:
            raise ValueError(f"model_phase_step must be in (0, 1], got {self.model_phase_step}")
        low, high = self.period_range_days
        if not 0 < low < high:
            raise ValueError(f"period_range_days must satisfy 0 < low < high, got {self.period_range_days}")
        floor_low, floor_high = self.noise_floor
        if not 0 <= floor_low <= floor_high:
            raise ValueError(f"noise_floor must satisfy 0 <= low <= high, got {self.noise_floor}")


@dataclass(frozen=True)
class SyntheticSignals:
    """The display-ready series generated for one parameter set."""

    parameters: TransitParameters
    light_curve: LightCurveSeries
    power_spectrum: PeriodPowerSeries
    phase_folded: PhaseSeries
    transit_model: PhaseSeries

    @classmethod
    def empty(cls, parameters: TransitParameters) -> SyntheticSignals:
        return cls(
            parameters=parameters,
            light_curve=LightCurveSeries.empty(),
            power_spectrum=PeriodPowerSeries.empty(),
            phase_folded=PhaseSeries.empty(),
            transit_model=PhaseSeries.empty(),
        )

    @property
    def is_empty(self) -> bool:
        return len(self.light_curve) == 0

    def to_dict(self) -> dict[str, Any]:
        return {
            "parameters": self.parameters.to_dict(),
            "detected_period_days": self.power_spectrum.best_period,
            "light_curve": self.light_curve.points(),
            "power_spectrum": self.power_spectrum.points(),
            "phase_folded": self.phase_folded.points(),
            "transit_model": self.transit_model.points(),
        }


class SyntheticSignalGenerator:
    """Builds synthetic series from transit parameters.

    Example:
        >>> stream = SeededRandomStream.for_identifier("429375484")
        >>> params = TransitParameters(period_days=11.18, depth=0.005, duration_hours=3.0)
        >>> signals = SyntheticSignalGenerator().generate(params, stream)
        >>> round(signals.power_spectrum.best_period)
        11
    """

    def __init__(self, config: GeneratorConfig | None = None) -> None:
        self.config = config or GeneratorConfig()

    def generate(self, params: TransitParameters, stream: SeededRandomStream) -> SyntheticSignals:
        """Generate all four series, drawing from ``stream`` in a fixed order.

        Parameters that violate the physical invariants produce empty series
        rather than an error.
        """
        if not params.is_physical:
            logger.warning("Skipping signal generation for degenerate parameters %s", params.to_dict())
            return SyntheticSignals.empty(params)

        light_curve = self.light_curve(params, stream)
        power_spectrum = self.power_spectrum(params.period_days, stream)
        phase_folded = self.phase_folded(params, stream)
        transit_model = self.transit_model(params)
        logger.debug(
            "Generated signals: %d lc, %d spectrum, %d folded, %d model samples",
            len(light_curve),
            len(power_spectrum),
            len(phase_folded),
            len(transit_model),
        )
        return SyntheticSignals(
            parameters=params,
            light_curve=light_curve,
            power_spectrum=power_spectrum,
            phase_folded=phase_folded,
            transit_model=transit_model,
        )

    def light_curve(self, params: TransitParameters, stream: SeededRandomStream) -> LightCurveSeries:
        cfg = self.config
        n = cfg.light_curve_samples
        if n == 0:
            return LightCurveSeries.empty()
        if n == 1:
            time = np.zeros(1)
        else:
            time = np.arange(n, dtype=np.float64) / (n - 1) * cfg.window_hours
        noise = np.array([stream.next_centered(cfg.noise_amplitude) for _ in range(n)])
        phase = fold_phase(time, params.period_days, params.epoch_hours)
        brightness = box_model(phase, params.depth, params.duration_phase) + noise
        return LightCurveSeries(time=time, brightness=brightness)

    def period_grid(self, period_days: float) -> np.ndarray:
        """Evenly spaced search periods, widened around ``period_days`` when needed."""
        cfg = self.config
        low, high = cfg.period_range_days
        if not low <= period_days <= high:
            low = max(cfg.min_search_period_days, period_days - cfg.search_half_span_days)
            high = period_days + cfg.search_half_span_days
        return np.linspace(low, high, cfg.spectrum_samples)

    def power_spectrum(self, period_days: float, stream: SeededRandomStream) -> PeriodPowerSeries:
        cfg = self.config
        if cfg.spectrum_samples == 0:
            return PeriodPowerSeries.empty()
        periods = self.period_grid(period_days)
        floor_low, floor_high = cfg.noise_floor
        width = cfg.peak_width_days
        power = np.empty_like(periods)
        for i, p in enumerate(periods):
            value = stream.next_range(floor_low, floor_high)
            offset = float(p) - period_days
            if abs(offset) < 3.0 * width:
                value += cfg.peak_height * math.exp(-(offset**2) / (2.0 * width**2))
            power[i] = value
        return PeriodPowerSeries(period=periods, power=power)

    def phase_folded(self, params: TransitParameters, stream: SeededRandomStream) -> PhaseSeries:
        cfg = self.config
        half_width = params.duration_phase / 2.0
        phases: list[float] = []
        values: list[float] = []
        for _ in range(cfg.folded_samples):
            phase = stream.next() - 0.5
            brightness = 1.0 + stream.next_centered(cfg.folded_noise_amplitude)
            if abs(phase) < half_width:
                brightness -= params.depth * (1.0 + stream.next_centered(cfg.depth_jitter))
            phases.append(phase)
            values.append(brightness)
        return PhaseSeries(phase=phases, brightness=values).sorted()

    def transit_model(self, params: TransitParameters) -> PhaseSeries:
        step = self.config.model_phase_step
        n = int(round(1.0 / step))
        phase = np.arange(n, dtype=np.float64) * step - 0.5
        return PhaseSeries(phase=phase, brightness=box_model(phase, params.depth, params.duration_phase))


def generate_synthetic_signals(
    identifier: str,
    params: TransitParameters,
    config: GeneratorConfig | None = None,
) -> SyntheticSignals:
    """Generate signals with a fresh stream seeded from ``identifier``."""
    stream = SeededRandomStream.for_identifier(identifier)
    return SyntheticSignalGenerator(config).generate(params, stream)


def transit_depth_from_radii(planet_radius_rearth: float, star_radius_rsun: float) -> float:
    """Approximate box depth from the planet-to-star radius ratio."""
    if planet_radius_rearth <= 0 or star_radius_rsun <= 0:
        return 0.0
    ratio = planet_radius_rearth / (star_radius_rsun * EARTH_RADII_PER_SOLAR_RADIUS)
    return ratio**2 * _DEPTH_SCALE


def transit_parameters_from_profile(
    profile: VerifiedProfile,
    stream: SeededRandomStream,
    window_hours: float | None = None,
) -> TransitParameters:
    """Derive display transit parameters from a fused profile.

    Catalog values are used where the profile has them; everything else is
    drawn from ``stream`` in the order period, duration, epoch. The epoch is
    drawn inside the first orbit, clipped to the observing window
    (``window_hours``, default ``GeneratorConfig().window_hours``), so
    long-period systems still show one transit in the light curve.
    """
    if window_hours is None:
        window_hours = GeneratorConfig().window_hours
    period = profile.numeric("planet", "orbital_period_days")
    if period is None or period <= 0:
        period = stream.next_range(3.0, 10.0)
    planet_radius = profile.numeric("planet", "radius_rearth")
    if planet_radius is None:
        planet_radius = _DEFAULT_PLANET_RADIUS_REARTH
    star_radius = profile.numeric("star", "radius_rsun")
    if star_radius is None:
        star_radius = _DEFAULT_STAR_RADIUS_RSUN
    duration_hours = stream.next_range(2.0, 4.0)
    epoch_hours = stream.next_range(0.0, min(period * 24.0, window_hours))
    return TransitParameters(
        period_days=period,
        depth=transit_depth_from_radii(planet_radius, star_radius),
        duration_hours=duration_hours,
        epoch_hours=epoch_hours,
    )


def generate_radial_velocity_curve(
    period_days: float,
    planet_mass_mearth: float | None,
    samples: int = 100,
) -> RadialVelocitySeries:
    """Sinusoidal reflex velocity over two orbits.

    The semi-amplitude is a display proxy (0.5 m/s per Earth mass, capped at
    20 m/s), not a dynamical estimate. Missing or non-positive inputs give an
    empty series.
    """
    if not period_days or period_days <= 0 or not planet_mass_mearth or planet_mass_mearth <= 0:
        return RadialVelocitySeries.empty()
    if samples < 2:
        return RadialVelocitySeries.empty()
    amplitude = min(20.0, planet_mass_mearth * 0.5)
    time = np.linspace(0.0, 2.0 * period_days, samples)
    velocity = amplitude * np.sin(2.0 * np.pi * time / period_days)
    return RadialVelocitySeries(time=time, velocity=velocity)


__all__ = [
    "GeneratorConfig",
    "SyntheticSignalGenerator",
    "SyntheticSignals",
    "generate_radial_velocity_curve",
    "generate_synthetic_signals",
    "transit_depth_from_radii",
    "transit_parameters_from_profile",
]
