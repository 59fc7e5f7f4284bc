"""Transit parameter and time-series domain models.

This module provides:
- TransitParameters: Scalar box-transit ephemeris (period, depth, duration, epoch)
- LightCurveSeries: Brightness versus time (hours)
- PeriodPowerSeries: Period-search power spectrum
- PhaseSeries: Brightness versus orbital phase in [-0.5, 0.5)
- RadialVelocitySeries: Stellar reflex velocity versus time (days)

Series are frozen dataclasses over read-only float64 arrays. They are the
working representation for compute code; ``points()`` produces the list of
row dicts consumed by chart and table collaborators.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING, Any

import numpy as np
from pydantic import BaseModel, ConfigDict, Field

if TYPE_CHECKING:
    from numpy.typing import NDArray

HOURS_PER_DAY = 24.0


class FrozenModel(BaseModel):
    model_config = ConfigDict(frozen=True, extra="forbid", allow_inf_nan=False)


class TransitParameters(FrozenModel):
    """Box-transit parameters.

    Values are not range-checked at construction: interactive tuning and
    optimizer proposals routinely produce out-of-range candidates, and those
    score zero instead of raising. Use ``is_physical`` to test the physical
    invariants.
    """

    period_days: float = Field(description="Orbital period, in days")
    depth: float = Field(description="Fractional brightness loss during transit")
    duration_hours: float = Field(description="Transit duration, in hours")
    epoch_hours: float = Field(default=0.0, description="Transit center reference time, in hours")

    @property
    def period_hours(self) -> float:
        return self.period_days * HOURS_PER_DAY

    @property
    def duration_phase(self) -> float:
        """Full transit duration as a fraction of the orbit."""
        if self.period_days <= 0:
            return 0.0
        return self.duration_hours / self.period_hours

    @property
    def is_physical(self) -> bool:
        """period > 0, 0 < depth < 1, 0 < duration < period (same unit)."""
        return (
            self.period_days > 0
            and 0.0 < self.depth < 1.0
            and 0.0 < self.duration_hours < self.period_hours
        )

    def to_dict(self) -> dict[str, float]:
        return {
            "period_days": float(self.period_days),
            "depth": float(self.depth),
            "duration_hours": float(self.duration_hours),
            "epoch_hours": float(self.epoch_hours),
        }


def _frozen_float_array(name: str, values: Any) -> NDArray[np.float64]:
    arr = np.array(values, dtype=np.float64)
    if arr.ndim != 1:
        raise ValueError(f"{name} must be one-dimensional, got shape {arr.shape}")
    arr.setflags(write=False)
    return arr


def _check_lengths(x_name: str, x: np.ndarray, y_name: str, y: np.ndarray) -> None:
    if len(x) != len(y):
        raise ValueError(f"{x_name} and {y_name} must have same length: {len(x)} vs {len(y)}")


@dataclass(frozen=True, eq=False)
class LightCurveSeries:
    """Brightness samples; ``time`` is in hours and non-decreasing when generated."""

    time: NDArray[np.float64]
    brightness: NDArray[np.float64]

    def __post_init__(self) -> None:
        object.__setattr__(self, "time", _frozen_float_array("time", self.time))
        object.__setattr__(self, "brightness", _frozen_float_array("brightness", self.brightness))
        _check_lengths("time", self.time, "brightness", self.brightness)

    @classmethod
    def empty(cls) -> LightCurveSeries:
        return cls(time=np.empty(0), brightness=np.empty(0))

    @classmethod
    def from_points(cls, points: list[dict[str, Any]]) -> LightCurveSeries:
        return cls(
            time=[float(p["time"]) for p in points],
            brightness=[float(p["brightness"]) for p in points],
        )

    def __len__(self) -> int:
        return len(self.time)

    def points(self) -> list[dict[str, float]]:
        return [
            {"time": float(t), "brightness": float(b)}
            for t, b in zip(self.time, self.brightness)
        ]


@dataclass(frozen=True, eq=False)
class PeriodPowerSeries:
    period: NDArray[np.float64]
    power: NDArray[np.float64]

    def __post_init__(self) -> None:
        object.__setattr__(self, "period", _frozen_float_array("period", self.period))
        object.__setattr__(self, "power", _frozen_float_array("power", self.power))
        _check_lengths("period", self.period, "power", self.power)

    @classmethod
    def empty(cls) -> PeriodPowerSeries:
        return cls(period=np.empty(0), power=np.empty(0))

    def __len__(self) -> int:
        return len(self.period)

    @property
    def best_period(self) -> float | None:
        """Period of the maximum-power sample."""
        if len(self.power) == 0:
            return None
        return float(self.period[int(np.argmax(self.power))])

    def points(self) -> list[dict[str, float]]:
        return [{"period": float(p), "power": float(w)} for p, w in zip(self.period, self.power)]


@dataclass(frozen=True, eq=False)
class PhaseSeries:
    phase: NDArray[np.float64]
    brightness: NDArray[np.float64]

    def __post_init__(self) -> None:
        object.__setattr__(self, "phase", _frozen_float_array("phase", self.phase))
        object.__setattr__(self, "brightness", _frozen_float_array("brightness", self.brightness))
        _check_lengths("phase", self.phase, "brightness", self.brightness)

    @classmethod
    def empty(cls) -> PhaseSeries:
        return cls(phase=np.empty(0), brightness=np.empty(0))

    def __len__(self) -> int:
        return len(self.phase)

    def sorted(self) -> PhaseSeries:
        order = np.argsort(self.phase, kind="stable")
        return PhaseSeries(phase=self.phase[order], brightness=self.brightness[order])

    def points(self) -> list[dict[str, float]]:
        return [
            {"phase": float(p), "brightness": float(b)}
            for p, b in zip(self.phase, self.brightness)
        ]


@dataclass(frozen=True, eq=False)
class RadialVelocitySeries:
    """Reflex velocity (m/s) versus time (days)."""

    time: NDArray[np.float64]
    velocity: NDArray[np.float64]

    def __post_init__(self) -> None:
        object.__setattr__(self, "time", _frozen_float_array("time", self.time))
        object.__setattr__(self, "velocity", _frozen_float_array("velocity", self.velocity))
        _check_lengths("time", self.time, "velocity", self.velocity)

    @classmethod
    def empty(cls) -> RadialVelocitySeries:
        return cls(time=np.empty(0), velocity=np.empty(0))

    def __len__(self) -> int:
        return len(self.time)

    def points(self) -> list[dict[str, float]]:
        return [{"time": float(t), "velocity": float(v)} for t, v in zip(self.time, self.velocity)]


__all__ = [
    "HOURS_PER_DAY",
    "LightCurveSeries",
    "PeriodPowerSeries",
    "PhaseSeries",
    "RadialVelocitySeries",
    "TransitParameters",
]
