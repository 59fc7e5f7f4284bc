"""Weighted habitability score for a fused system profile.

Four terms, each on a 0-10 scale, combined as
0.4 * temperature + 0.2 * radius + 0.2 * period + 0.2 * stellar type:
- temperature: Gaussian around 288 K (Earth) with a 60 K width
- radius: full marks for 0.8-1.8 Earth radii, linear ramps to 0 at 0.5 and 3.0
- period: full marks for 20-400 days, linear ramps to 0 at 10 and 800
- stellar type: G 10, K 8, F 7, M 6, anything else (or unknown) 3
"""

from __future__ import annotations

import logging
import math
from dataclasses import dataclass
from enum import Enum
from typing import Any

from tess_hub.domain.profile import VerifiedProfile

logger = logging.getLogger(__name__)

OPTIMAL_TEMPERATURE_K = 288.0
TEMPERATURE_WIDTH_K = 60.0
HABITABLE_ZONE_K = (250.0, 370.0)

TEMPERATURE_WEIGHT = 0.4
RADIUS_WEIGHT = 0.2
PERIOD_WEIGHT = 0.2
STELLAR_TYPE_WEIGHT = 0.2

DEFAULT_STELLAR_TYPE_SCORE = 3.0
_STELLAR_TYPE_SCORES = {"G": 10.0, "K": 8.0, "F": 7.0, "M": 6.0}

# (lower Teff bound in K, class letter), hottest first
_SPECTRAL_CLASS_BOUNDS: tuple[tuple[float, str], ...] = (
    (30000.0, "O"),
    (10000.0, "B"),
    (7500.0, "A"),
    (6000.0, "F"),
    (5200.0, "G"),
    (3700.0, "K"),
    (0.0, "M"),
)


class HabitabilityClass(str, Enum):
    POTENTIALLY_HABITABLE = "Potentially Habitable"
    MARGINAL = "Marginal"
    UNLIKELY_HABITABLE = "Unlikely Habitable"


@dataclass(frozen=True)
class HabitabilityAssessment:
    """Term scores, weighted total and classification for one planet."""

    temperature_score: float
    radius_score: float
    period_score: float
    stellar_type_score: float
    spectral_class: str | None
    in_habitable_zone: bool
    reasons: tuple[str, ...] = ()

    @property
    def score(self) -> float:
        return (
            self.temperature_score * TEMPERATURE_WEIGHT
            + self.radius_score * RADIUS_WEIGHT
            + self.period_score * PERIOD_WEIGHT
            + self.stellar_type_score * STELLAR_TYPE_WEIGHT
        )

    @property
    def classification(self) -> HabitabilityClass:
        score = self.score
        if score > 7.0:
            return HabitabilityClass.POTENTIALLY_HABITABLE
        if score >= 4.0:
            return HabitabilityClass.MARGINAL
        return HabitabilityClass.UNLIKELY_HABITABLE

    @property
    def reasoning(self) -> str:
        return (
            f"The '{self.classification.value}' rating is based on several factors. "
            f"A key contributor is {' Furthermore, '.join(self.reasons)}"
        )

    def to_dict(self) -> dict[str, Any]:
        return {
            "score": float(self.score),
            "classification": self.classification.value,
            "in_habitable_zone": bool(self.in_habitable_zone),
            "spectral_class": self.spectral_class,
            "terms": {
                "temperature": float(self.temperature_score),
                "radius": float(self.radius_score),
                "period": float(self.period_score),
                "stellar_type": float(self.stellar_type_score),
            },
            "reasoning": self.reasoning,
        }


def temperature_score(equilibrium_temperature_k: float) -> float:
    offset = equilibrium_temperature_k - OPTIMAL_TEMPERATURE_K
    return 10.0 * math.exp(-(offset**2) / (2.0 * TEMPERATURE_WIDTH_K**2))


def radius_score(radius_rearth: float | None) -> float:
    if radius_rearth is None:
        return 0.0
    r = radius_rearth
    if 0.8 <= r <= 1.8:
        return 10.0
    if 0.5 <= r < 0.8:
        return 10.0 * (r - 0.5) / 0.3
    if 1.8 < r <= 3.0:
        return 10.0 * (1.0 - (r - 1.8) / 1.2)
    return 0.0


def period_score(period_days: float | None) -> float:
    if period_days is None:
        return 0.0
    p = period_days
    if 20.0 <= p <= 400.0:
        return 10.0
    if 10.0 <= p < 20.0:
        return 10.0 * (p - 10.0) / 10.0
    if 400.0 < p <= 800.0:
        return 10.0 * (1.0 - (p - 400.0) / 400.0)
    return 0.0


def spectral_class_from_temperature(temperature_k: float | None) -> str | None:
    """Main-sequence spectral class letter for an effective temperature."""
    if temperature_k is None or not math.isfinite(temperature_k) or temperature_k <= 0:
        return None
    for lower, letter in _SPECTRAL_CLASS_BOUNDS:
        if temperature_k >= lower:
            return letter
    return None


def stellar_type_score(spectral_class: str | None) -> float:
    if not spectral_class:
        return DEFAULT_STELLAR_TYPE_SCORE
    return _STELLAR_TYPE_SCORES.get(spectral_class[0].upper(), DEFAULT_STELLAR_TYPE_SCORE)


def _reasons(
    temperature_k: float,
    temp_score: float,
    rad_score: float,
    type_score: float,
) -> tuple[str, ...]:
    reasons: list[str] = []
    if temp_score > 8:
        reasons.append("its estimated temperature is ideal for liquid water.")
    elif temp_score < 4 and temperature_k > OPTIMAL_TEMPERATURE_K:
        reasons.append("it is likely too hot.")
    elif temp_score < 4 and temperature_k < OPTIMAL_TEMPERATURE_K:
        reasons.append("it is likely too cold.")
    else:
        reasons.append("its temperature is suboptimal.")

    if rad_score > 8:
        reasons.append("Its size suggests it is a rocky world, similar to Earth.")
    elif rad_score < 4:
        reasons.append(
            "Its size suggests it may be a gas giant or too small to retain an atmosphere."
        )

    if type_score > 8:
        reasons.append("It orbits a stable, Sun-like star.")
    elif type_score < 7:
        reasons.append(
            "its host star may be prone to flaring or have a short lifespan, "
            "impacting long-term habitability."
        )
    return tuple(reasons)


def assess_habitability(
    equilibrium_temperature_k: float,
    radius_rearth: float | None,
    period_days: float | None,
    spectral_class: str | None = None,
) -> HabitabilityAssessment:
    """Score one planet.

    Missing radius or period scores 0 for that term; a missing spectral
    class scores ``DEFAULT_STELLAR_TYPE_SCORE``.
    """
    temp = temperature_score(equilibrium_temperature_k)
    rad = radius_score(radius_rearth)
    per = period_score(period_days)
    star = stellar_type_score(spectral_class)
    low, high = HABITABLE_ZONE_K
    return HabitabilityAssessment(
        temperature_score=temp,
        radius_score=rad,
        period_score=per,
        stellar_type_score=star,
        spectral_class=spectral_class,
        in_habitable_zone=low < equilibrium_temperature_k < high,
        reasons=_reasons(equilibrium_temperature_k, temp, rad, star),
    )


def assess_profile_habitability(profile: VerifiedProfile) -> HabitabilityAssessment | None:
    """Assess the profile's planet; None without an equilibrium temperature."""
    if profile.is_invalid:
        return None
    temperature = profile.numeric("planet", "equilibrium_temperature_k")
    if temperature is None:
        logger.debug("No equilibrium temperature for %s; skipping habitability", profile.identifier)
        return None
    return assess_habitability(
        temperature,
        profile.numeric("planet", "radius_rearth"),
        profile.numeric("planet", "orbital_period_days"),
        spectral_class_from_temperature(profile.numeric("star", "temperature_k")),
    )


__all__ = [
    "HABITABLE_ZONE_K",
    "HabitabilityAssessment",
    "HabitabilityClass",
    "assess_habitability",
    "assess_profile_habitability",
    "period_score",
    "radius_score",
    "spectral_class_from_temperature",
    "stellar_type_score",
    "temperature_score",
]
