"""Domain models for tess-hub.

Value types only: no I/O, no catalog access, no numeric algorithms.
"""

from tess_hub.domain.profile import (
    INVALID_IDENTIFIER_NAME,
    NOT_AVAILABLE,
    CatalogSource,
    NotAvailable,
    PlanetProfile,
    ProfileField,
    StarProfile,
    VerifiedProfile,
)
from tess_hub.domain.transit import (
    LightCurveSeries,
    PeriodPowerSeries,
    PhaseSeries,
    RadialVelocitySeries,
    TransitParameters,
)

__all__ = [
    "CatalogSource",
    "INVALID_IDENTIFIER_NAME",
    "LightCurveSeries",
    "NOT_AVAILABLE",
    "NotAvailable",
    "PeriodPowerSeries",
    "PhaseSeries",
    "PlanetProfile",
    "ProfileField",
    "RadialVelocitySeries",
    "StarProfile",
    "TransitParameters",
    "VerifiedProfile",
]
