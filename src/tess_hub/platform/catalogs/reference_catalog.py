"""Offline per-source lookups for a few well-characterized systems.

Stands in for live Gaia / MAST / ExoFOP / NASA Exoplanet Archive queries when
running without network access. Every lookup returns exactly one record per
source. Identifiers the stellar-parameter source does not know are flagged
invalid, mirroring ExoFOP's "not found in the TIC" page.
"""

from __future__ import annotations

import logging
from collections.abc import Mapping
from typing import Any

from tess_hub.domain.profile import CatalogSource
from tess_hub.platform.catalogs import records as keys
from tess_hub.platform.catalogs.records import RawSourceRecord, normalize_identifier

logger = logging.getLogger(__name__)

PROXIMA_CEN = "429375484"
KEPLER_186 = "233544353"
TRAPPIST_1 = "200164267"

_GAIA: dict[str, dict[str, Any]] = {
    PROXIMA_CEN: {keys.PARALLAX_MAS: 768.52},
    KEPLER_186: {keys.PARALLAX_MAS: 6.54},
    TRAPPIST_1: {keys.PARALLAX_MAS: 81.3},
}

_MAST: dict[str, dict[str, Any]] = {
    PROXIMA_CEN: {keys.RA_DEG: 217.42895, keys.DEC_DEG: -62.67949, keys.APPARENT_MAGNITUDE: 11.13},
    KEPLER_186: {keys.RA_DEG: 299.8588, keys.DEC_DEG: 48.232, keys.APPARENT_MAGNITUDE: 14.9},
    TRAPPIST_1: {keys.RA_DEG: 346.626, keys.DEC_DEG: -5.041, keys.APPARENT_MAGNITUDE: 11.35},
}

_EXOFOP: dict[str, dict[str, Any]] = {
    PROXIMA_CEN: {
        keys.STAR_NAME: "Proxima Centauri",
        keys.TEMPERATURE_K: 3042.0,
        keys.RADIUS_RSUN: 0.154,
        keys.MASS_MSUN: 0.122,
        keys.LUMINOSITY_LSUN: 0.0017,
        keys.SURFACE_GRAVITY_LOGG: 5.2,
        keys.METALLICITY_FEH: 0.21,
    },
    KEPLER_186: {
        keys.STAR_NAME: "Kepler-186",
        keys.TEMPERATURE_K: 3755.0,
        keys.RADIUS_RSUN: 0.523,
        keys.MASS_MSUN: 0.544,
        keys.LUMINOSITY_LSUN: 0.055,
        keys.SURFACE_GRAVITY_LOGG: 4.73,
        keys.METALLICITY_FEH: -0.26,
    },
    TRAPPIST_1: {
        keys.STAR_NAME: "TRAPPIST-1",
        keys.TEMPERATURE_K: 2566.0,
        keys.RADIUS_RSUN: 0.119,
        keys.MASS_MSUN: 0.0898,
        keys.LUMINOSITY_LSUN: 0.000553,
        keys.SURFACE_GRAVITY_LOGG: 5.24,
        keys.METALLICITY_FEH: 0.04,
    },
}

_NASA: dict[str, dict[str, Any]] = {
    PROXIMA_CEN: {
        keys.PLANET_NAME: "Proxima Cen b",
        keys.ORBITAL_PERIOD_DAYS: 11.18,
        keys.PLANET_RADIUS_REARTH: 1.07,
        keys.PLANET_MASS_MEARTH: 1.27,
        keys.EQUILIBRIUM_TEMPERATURE_K: 234.0,
    },
    KEPLER_186: {
        keys.PLANET_NAME: "Kepler-186 f",
        keys.ORBITAL_PERIOD_DAYS: 129.94,
        keys.PLANET_RADIUS_REARTH: 1.17,
        keys.PLANET_MASS_MEARTH: 1.4,
        keys.EQUILIBRIUM_TEMPERATURE_K: 188.0,
    },
    TRAPPIST_1: {
        keys.PLANET_NAME: "TRAPPIST-1 e",
        keys.ORBITAL_PERIOD_DAYS: 6.10,
        keys.PLANET_RADIUS_REARTH: 0.92,
        keys.PLANET_MASS_MEARTH: 0.69,
        keys.EQUILIBRIUM_TEMPERATURE_K: 251.0,
    },
}


class ReferenceCatalog:
    """In-memory catalog keyed by source then identifier.

    Callable, so it satisfies ``SourceLookup``.
    """

    def __init__(
        self,
        tables: Mapping[CatalogSource, Mapping[str, Mapping[str, Any]]] | None = None,
    ) -> None:
        self._tables: dict[CatalogSource, dict[str, dict[str, Any]]] = {
            source: {ident: dict(values) for ident, values in table.items()}
            for source, table in (tables or _default_tables()).items()
        }

    @property
    def identifiers(self) -> list[str]:
        known: set[str] = set()
        for table in self._tables.values():
            known.update(table)
        return sorted(known)

    def lookup(self, identifier: str) -> list[RawSourceRecord]:
        ident = normalize_identifier(identifier)
        out: list[RawSourceRecord] = []
        for source in (
            CatalogSource.GAIA_DR3,
            CatalogSource.MAST_TIC,
            CatalogSource.EXOFOP_TESS,
            CatalogSource.NASA_EXOPLANET_ARCHIVE,
        ):
            table = self._tables.get(source, {})
            values = table.get(ident)
            if source is CatalogSource.EXOFOP_TESS and values is None:
                logger.info("Identifier %s not found in %s", ident, source.value)
                out.append(RawSourceRecord(source=source, invalid_identifier=True))
                continue
            out.append(RawSourceRecord(source=source, values=dict(values or {})))
        return out

    def __call__(self, identifier: str) -> list[RawSourceRecord]:
        return self.lookup(identifier)


def _default_tables() -> dict[CatalogSource, dict[str, dict[str, Any]]]:
    return {
        CatalogSource.GAIA_DR3: _GAIA,
        CatalogSource.MAST_TIC: _MAST,
        CatalogSource.EXOFOP_TESS: _EXOFOP,
        CatalogSource.NASA_EXOPLANET_ARCHIVE: _NASA,
    }


__all__ = ["KEPLER_186", "PROXIMA_CEN", "ReferenceCatalog", "TRAPPIST_1"]
