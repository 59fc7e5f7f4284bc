"""Verified system profile models.

This module provides:
- NotAvailable / NOT_AVAILABLE: Sentinel for fields no source supplied
- CatalogSource: The catalog sources that feed profile fusion
- ProfileField: One fused value plus the source that supplied it
- StarProfile / PlanetProfile: Field groups of a fused profile
- VerifiedProfile: Immutable fused record for one catalog identifier
"""

from __future__ import annotations

from dataclasses import dataclass, fields
from enum import Enum
from typing import Any, Union


class NotAvailable(Enum):
    """Sentinel for a profile field that no source supplied.

    Deliberately not a ``str`` enum so it can never be mistaken for a real
    textual value such as a star name.
    """

    NOT_AVAILABLE = "Not Available"

    def __str__(self) -> str:
        return self.value

    def __bool__(self) -> bool:
        return False


NOT_AVAILABLE = NotAvailable.NOT_AVAILABLE

INVALID_IDENTIFIER_NAME = "INVALID TIC ID"


class CatalogSource(str, Enum):
    """Catalog sources that contribute to a fused profile."""

    GAIA_DR3 = "Gaia DR3"  # parallax source
    MAST_TIC = "MAST TIC"  # astrometry / photometry source
    EXOFOP_TESS = "ExoFOP-TESS"  # stellar parameter source
    NASA_EXOPLANET_ARCHIVE = "NASA Exoplanet Archive"  # confirmed planet source
    DERIVED = "Derived"  # computed from other fused fields or the identifier


FieldValue = Union[float, str, NotAvailable]
FieldSource = Union[CatalogSource, NotAvailable]


def is_available(value: Any) -> bool:
    return value is not NOT_AVAILABLE


@dataclass(frozen=True)
class ProfileField:
    """A single fused value and its provenance."""

    value: FieldValue = NOT_AVAILABLE
    source: FieldSource = NOT_AVAILABLE

    def __post_init__(self) -> None:
        if self.value is NOT_AVAILABLE and self.source is not NOT_AVAILABLE:
            raise ValueError(f"field without a value cannot record source {self.source.value!r}")
        if self.value is not NOT_AVAILABLE and self.source is NOT_AVAILABLE:
            raise ValueError("field with a value must record its source")

    @property
    def available(self) -> bool:
        return self.value is not NOT_AVAILABLE

    def to_dict(self) -> dict[str, Any]:
        return {"value": _jsonable(self.value), "source": _jsonable(self.source)}


MISSING = ProfileField()


def _jsonable(value: Any) -> Any:
    if isinstance(value, NotAvailable):
        return value.value
    if isinstance(value, CatalogSource):
        return value.value
    return value


@dataclass(frozen=True)
class StarProfile:
    name: ProfileField = MISSING
    distance_ly: ProfileField = MISSING
    apparent_magnitude: ProfileField = MISSING
    temperature_k: ProfileField = MISSING
    radius_rsun: ProfileField = MISSING
    mass_msun: ProfileField = MISSING
    luminosity_lsun: ProfileField = MISSING
    surface_gravity_logg: ProfileField = MISSING
    metallicity_feh: ProfileField = MISSING
    ra_deg: ProfileField = MISSING
    dec_deg: ProfileField = MISSING

    def to_dict(self) -> dict[str, Any]:
        return {f.name: getattr(self, f.name).to_dict() for f in fields(self)}


@dataclass(frozen=True)
class PlanetProfile:
    name: ProfileField = MISSING
    orbital_period_days: ProfileField = MISSING
    radius_rearth: ProfileField = MISSING
    mass_mearth: ProfileField = MISSING
    equilibrium_temperature_k: ProfileField = MISSING

    def to_dict(self) -> dict[str, Any]:
        return {f.name: getattr(self, f.name).to_dict() for f in fields(self)}


@dataclass(frozen=True)
class VerifiedProfile:
    """Fused, read-only view of one star/planet system.

    Every field is always present; fields that no source supplied hold
    ``NOT_AVAILABLE`` for both value and source.
    """

    identifier: str
    star: StarProfile = StarProfile()
    planet: PlanetProfile = PlanetProfile()

    @property
    def is_invalid(self) -> bool:
        return self.star.name.value == INVALID_IDENTIFIER_NAME

    def numeric(self, group: str, name: str) -> float | None:
        """Return a numeric field as float, or None when unavailable or textual."""
        value = getattr(getattr(self, group), name).value
        if value is NOT_AVAILABLE or isinstance(value, str):
            return None
        return float(value)

    def to_dict(self) -> dict[str, Any]:
        return {
            "identifier": self.identifier,
            "star": self.star.to_dict(),
            "planet": self.planet.to_dict(),
        }


__all__ = [
    "CatalogSource",
    "FieldSource",
    "FieldValue",
    "INVALID_IDENTIFIER_NAME",
    "MISSING",
    "NOT_AVAILABLE",
    "NotAvailable",
    "PlanetProfile",
    "ProfileField",
    "StarProfile",
    "VerifiedProfile",
    "is_available",
]
