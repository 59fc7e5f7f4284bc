"""Per-source catalog records.

A RawSourceRecord is one source's sparse view of a system, keyed by the
canonical field names below. Fetchers (live or offline) translate their
native column names into these keys before handing records to fusion.
"""

from __future__ import annotations

import math
import re
from typing import Any, ClassVar, Protocol

from pydantic import BaseModel, ConfigDict, Field, field_validator

from tess_hub.domain.profile import CatalogSource

# Parallax source
PARALLAX_MAS = "parallax_mas"

# Astrometry source
RA_DEG = "ra_deg"
DEC_DEG = "dec_deg"
APPARENT_MAGNITUDE = "apparent_magnitude"

# Stellar parameter source
STAR_NAME = "star_name"
TEMPERATURE_K = "temperature_k"
RADIUS_RSUN = "radius_rsun"
MASS_MSUN = "mass_msun"
LUMINOSITY_LSUN = "luminosity_lsun"
SURFACE_GRAVITY_LOGG = "surface_gravity_logg"
METALLICITY_FEH = "metallicity_feh"

# Planet parameters (confirmed-planet source, optionally stellar source)
PLANET_NAME = "planet_name"
ORBITAL_PERIOD_DAYS = "orbital_period_days"
PLANET_RADIUS_REARTH = "planet_radius_rearth"
PLANET_MASS_MEARTH = "planet_mass_mearth"
EQUILIBRIUM_TEMPERATURE_K = "equilibrium_temperature_k"

# Present in some catalogs but never used for fusion.
IGNORED_DISTANCE_KEYS = frozenset({"distance_ly", "distance_pc", "distance"})

_NUMERIC_KEYS = frozenset(
    {
        PARALLAX_MAS,
        RA_DEG,
        DEC_DEG,
        APPARENT_MAGNITUDE,
        TEMPERATURE_K,
        RADIUS_RSUN,
        MASS_MSUN,
        LUMINOSITY_LSUN,
        SURFACE_GRAVITY_LOGG,
        METALLICITY_FEH,
        ORBITAL_PERIOD_DAYS,
        PLANET_RADIUS_REARTH,
        PLANET_MASS_MEARTH,
        EQUILIBRIUM_TEMPERATURE_K,
    }
)

_TIC_PREFIX_RE = re.compile(r"^\s*tic[\s_-]*", re.IGNORECASE)


def normalize_identifier(identifier: str | int) -> str:
    """Canonical identifier text: ``"TIC 429375484"`` -> ``"429375484"``."""
    text = str(identifier).strip()
    return _TIC_PREFIX_RE.sub("", text).strip()


class RawSourceRecord(BaseModel):
    """One source's partial record for an identifier.

    Attributes:
        source: Which catalog produced the record.
        values: Sparse canonical-key -> value mapping.
        invalid_identifier: The source reported the identifier as unknown.
    """

    model_config: ClassVar[ConfigDict] = ConfigDict(frozen=True, extra="forbid")

    source: CatalogSource
    values: dict[str, float | str] = Field(default_factory=dict)
    invalid_identifier: bool = False

    @field_validator("source")
    @classmethod
    def _not_derived(cls, v: CatalogSource) -> CatalogSource:
        if v is CatalogSource.DERIVED:
            raise ValueError("records must come from a catalog source, not 'Derived'")
        return v

    @field_validator("values")
    @classmethod
    def _normalize_values(cls, v: dict[str, float | str]) -> dict[str, float | str]:
        out: dict[str, float | str] = {}
        for key, val in v.items():
            key = str(key)
            if isinstance(val, str):
                val = val.strip()
                # Catalog exports often quote numbers; blanks stay blank (absent).
                if val and key in _NUMERIC_KEYS:
                    try:
                        val = float(val)
                    except ValueError:
                        raise ValueError(f"{key} must be numeric, got {val!r}") from None
            out[key] = val
        return out

    @classmethod
    def empty(cls, source: CatalogSource) -> RawSourceRecord:
        return cls(source=source)

    def get(self, key: str) -> float | str | None:
        """Return a usable value for ``key``; None for absent, NaN or blank."""
        value = self.values.get(key)
        if value is None:
            return None
        if isinstance(value, str):
            return value or None
        if not math.isfinite(value):
            return None
        return value

    def to_dict(self) -> dict[str, Any]:
        return {
            "source": self.source.value,
            "values": dict(self.values),
            "invalid_identifier": bool(self.invalid_identifier),
        }


class SourceLookup(Protocol):
    """Anything that returns per-source records for an identifier."""

    def __call__(self, identifier: str) -> list[RawSourceRecord]: ...


__all__ = [
    "APPARENT_MAGNITUDE",
    "DEC_DEG",
    "EQUILIBRIUM_TEMPERATURE_K",
    "IGNORED_DISTANCE_KEYS",
    "LUMINOSITY_LSUN",
    "MASS_MSUN",
    "METALLICITY_FEH",
    "ORBITAL_PERIOD_DAYS",
    "PARALLAX_MAS",
    "PLANET_MASS_MEARTH",
    "PLANET_NAME",
    "PLANET_RADIUS_REARTH",
    "RADIUS_RSUN",
    "RA_DEG",
    "RawSourceRecord",
    "STAR_NAME",
    "SURFACE_GRAVITY_LOGG",
    "SourceLookup",
    "TEMPERATURE_K",
    "normalize_identifier",
]
