"""Source-priority fusion of catalog records into a VerifiedProfile.

Each output field is governed by an ordered list of (source, key, precedence)
rules, evaluated once per field: the lowest-precedence rule whose source
supplied a usable value wins, and the winner's source is recorded alongside
the value. The table is fixed:

- distance: Gaia parallax only, converted through ``parallax_to_distance_ly``;
  distance columns from any other catalog are ignored
- coordinates and apparent magnitude: MAST TIC
- stellar physical parameters and star name: ExoFOP-TESS
- planet parameters: NASA Exoplanet Archive, falling back to ExoFOP-TESS

When no star name was supplied, it is derived from the planet name by
stripping a trailing `` b``..`` z`` designator, else synthesized from the
identifier.
"""

from __future__ import annotations

import logging
import re
from collections.abc import Callable, Iterable
from dataclasses import dataclass, fields, replace
from typing import Any

from tess_hub.compute.distance import parallax_to_distance_ly
from tess_hub.domain.profile import (
    INVALID_IDENTIFIER_NAME,
    CatalogSource,
    NotAvailable,
    PlanetProfile,
    ProfileField,
    StarProfile,
    VerifiedProfile,
)
from tess_hub.platform.catalogs import records as keys
from tess_hub.platform.catalogs.records import RawSourceRecord, normalize_identifier

logger = logging.getLogger(__name__)

GAIA = CatalogSource.GAIA_DR3
MAST = CatalogSource.MAST_TIC
EXOFOP = CatalogSource.EXOFOP_TESS
NASA = CatalogSource.NASA_EXOPLANET_ARCHIVE

_PLANET_DESIGNATOR_RE = re.compile(r" [b-z]$")


@dataclass(frozen=True)
class FusionRule:
    group: str  # "star" or "planet"
    field: str
    source: CatalogSource
    key: str
    precedence: int = 0
    transform: Callable[[Any], Any] | None = None

    @property
    def target(self) -> str:
        return f"{self.group}.{self.field}"


FUSION_RULES: tuple[FusionRule, ...] = (
    FusionRule("star", "distance_ly", GAIA, keys.PARALLAX_MAS, transform=parallax_to_distance_ly),
    FusionRule("star", "ra_deg", MAST, keys.RA_DEG),
    FusionRule("star", "dec_deg", MAST, keys.DEC_DEG),
    FusionRule("star", "apparent_magnitude", MAST, keys.APPARENT_MAGNITUDE),
    FusionRule("star", "name", EXOFOP, keys.STAR_NAME),
    FusionRule("star", "temperature_k", EXOFOP, keys.TEMPERATURE_K),
    FusionRule("star", "radius_rsun", EXOFOP, keys.RADIUS_RSUN),
    FusionRule("star", "mass_msun", EXOFOP, keys.MASS_MSUN),
    FusionRule("star", "luminosity_lsun", EXOFOP, keys.LUMINOSITY_LSUN),
    FusionRule("star", "surface_gravity_logg", EXOFOP, keys.SURFACE_GRAVITY_LOGG),
    FusionRule("star", "metallicity_feh", EXOFOP, keys.METALLICITY_FEH),
    FusionRule("planet", "name", NASA, keys.PLANET_NAME, 0),
    FusionRule("planet", "name", EXOFOP, keys.PLANET_NAME, 1),
    FusionRule("planet", "orbital_period_days", NASA, keys.ORBITAL_PERIOD_DAYS, 0),
    FusionRule("planet", "orbital_period_days", EXOFOP, keys.ORBITAL_PERIOD_DAYS, 1),
    FusionRule("planet", "radius_rearth", NASA, keys.PLANET_RADIUS_REARTH, 0),
    FusionRule("planet", "radius_rearth", EXOFOP, keys.PLANET_RADIUS_REARTH, 1),
    FusionRule("planet", "mass_mearth", NASA, keys.PLANET_MASS_MEARTH, 0),
    FusionRule("planet", "mass_mearth", EXOFOP, keys.PLANET_MASS_MEARTH, 1),
    FusionRule("planet", "equilibrium_temperature_k", NASA, keys.EQUILIBRIUM_TEMPERATURE_K, 0),
    FusionRule("planet", "equilibrium_temperature_k", EXOFOP, keys.EQUILIBRIUM_TEMPERATURE_K, 1),
)


def _rules_by_target(rules: Iterable[FusionRule]) -> dict[str, list[FusionRule]]:
    table: dict[str, list[FusionRule]] = {}
    for rule in rules:
        table.setdefault(rule.target, []).append(rule)
    for target_rules in table.values():
        target_rules.sort(key=lambda r: r.precedence)
    return table


def derive_star_name(planet_name: str) -> str:
    """``"Kepler-186 f"`` -> ``"Kepler-186"``; other names pass through."""
    return _PLANET_DESIGNATOR_RE.sub("", planet_name)


def missing_fields(profile: VerifiedProfile) -> list[str]:
    """Dotted names of every field that holds NOT_AVAILABLE."""
    out: list[str] = []
    for group_name in ("star", "planet"):
        group = getattr(profile, group_name)
        for f in fields(group):
            if not getattr(group, f.name).available:
                out.append(f"{group_name}.{f.name}")
    return out


def invalid_profile(identifier: str, source: CatalogSource) -> VerifiedProfile:
    """Profile for an identifier the lookup source does not know."""
    return VerifiedProfile(
        identifier=identifier,
        star=StarProfile(name=ProfileField(INVALID_IDENTIFIER_NAME, source)),
    )


class SourceFusionResolver:
    """Merges per-source records into one VerifiedProfile.

    Example:
        >>> resolver = SourceFusionResolver()
        >>> profile = resolver.resolve("429375484", records)
        >>> profile.star.distance_ly.source
        <CatalogSource.GAIA_DR3: 'Gaia DR3'>
    """

    def __init__(self, rules: Iterable[FusionRule] = FUSION_RULES) -> None:
        self._rules = _rules_by_target(rules)

    def resolve(self, identifier: str, records: Iterable[RawSourceRecord]) -> VerifiedProfile:
        ident = normalize_identifier(identifier)
        by_source: dict[CatalogSource, RawSourceRecord] = {}
        for record in records:
            if record.source in by_source:
                raise ValueError(f"duplicate record for source {record.source.value!r}")
            by_source[record.source] = record

        for record in by_source.values():
            if record.invalid_identifier:
                logger.warning("%s reports identifier %s as invalid", record.source.value, ident)
                return invalid_profile(ident, record.source)

        for record in by_source.values():
            ignored = keys.IGNORED_DISTANCE_KEYS.intersection(record.values)
            if ignored:
                logger.debug(
                    "Ignoring distance columns %s from %s; distance comes from parallax only",
                    sorted(ignored),
                    record.source.value,
                )

        star = StarProfile(**self._resolve_group("star", StarProfile, by_source))
        planet = PlanetProfile(**self._resolve_group("planet", PlanetProfile, by_source))

        if not star.name.available:
            star = replace(star, name=self._fallback_star_name(ident, planet))

        return VerifiedProfile(identifier=ident, star=star, planet=planet)

    def _resolve_group(
        self,
        group: str,
        group_type: type,
        by_source: dict[CatalogSource, RawSourceRecord],
    ) -> dict[str, ProfileField]:
        resolved: dict[str, ProfileField] = {}
        for f in fields(group_type):
            resolved[f.name] = self._resolve_field(f"{group}.{f.name}", by_source)
        return resolved

    def _resolve_field(
        self,
        target: str,
        by_source: dict[CatalogSource, RawSourceRecord],
    ) -> ProfileField:
        for rule in self._rules.get(target, []):
            record = by_source.get(rule.source)
            if record is None:
                continue
            value = record.get(rule.key)
            if value is None:
                continue
            if rule.transform is not None:
                value = rule.transform(value)
            if isinstance(value, NotAvailable):
                continue
            return ProfileField(value=value, source=rule.source)
        return ProfileField()

    @staticmethod
    def _fallback_star_name(identifier: str, planet: PlanetProfile) -> ProfileField:
        planet_name = planet.name.value
        if isinstance(planet_name, str):
            return ProfileField(derive_star_name(planet_name), CatalogSource.DERIVED)
        return ProfileField(f"TIC {identifier}", CatalogSource.DERIVED)


def resolve_profile(identifier: str, records: Iterable[RawSourceRecord]) -> VerifiedProfile:
    return SourceFusionResolver().resolve(identifier, records)


__all__ = [
    "FUSION_RULES",
    "FusionRule",
    "SourceFusionResolver",
    "derive_star_name",
    "invalid_profile",
    "missing_fields",
    "resolve_profile",
]
