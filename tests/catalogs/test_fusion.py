"""Tests for source-priority catalog fusion."""

from __future__ import annotations

import logging
from dataclasses import fields

import pytest

from tess_hub.domain.profile import (
    INVALID_IDENTIFIER_NAME,
    NOT_AVAILABLE,
    CatalogSource,
    PlanetProfile,
    StarProfile,
)
from tess_hub.platform.catalogs import records as keys
from tess_hub.platform.catalogs.fusion import (
    FUSION_RULES,
    SourceFusionResolver,
    derive_star_name,
    missing_fields,
    resolve_profile,
)
from tess_hub.platform.catalogs.records import RawSourceRecord

GAIA = CatalogSource.GAIA_DR3
MAST = CatalogSource.MAST_TIC
EXOFOP = CatalogSource.EXOFOP_TESS
NASA = CatalogSource.NASA_EXOPLANET_ARCHIVE


@pytest.fixture
def proxima_records() -> list[RawSourceRecord]:
    return [
        RawSourceRecord(source=GAIA, values={keys.PARALLAX_MAS: 768.52}),
        RawSourceRecord(
            source=MAST,
            values={keys.RA_DEG: 217.42895, keys.DEC_DEG: -62.67949, keys.APPARENT_MAGNITUDE: 11.13},
        ),
        RawSourceRecord(
            source=EXOFOP,
            values={
                keys.STAR_NAME: "Proxima Centauri",
                keys.TEMPERATURE_K: 3042.0,
                keys.RADIUS_RSUN: 0.154,
                keys.MASS_MSUN: 0.122,
                keys.LUMINOSITY_LSUN: 0.0017,
                keys.SURFACE_GRAVITY_LOGG: 5.2,
                keys.METALLICITY_FEH: 0.21,
                keys.ORBITAL_PERIOD_DAYS: 11.2,
            },
        ),
        RawSourceRecord(
            source=NASA,
            values={
                keys.PLANET_NAME: "Proxima Cen b",
                keys.ORBITAL_PERIOD_DAYS: 11.18,
                keys.PLANET_RADIUS_REARTH: 1.07,
                keys.PLANET_MASS_MEARTH: 1.27,
                keys.EQUILIBRIUM_TEMPERATURE_K: 234.0,
            },
        ),
    ]


class TestDeriveStarName:
    @pytest.mark.parametrize(
        "planet,star",
        [
            ("Kepler-186 f", "Kepler-186"),
            ("TRAPPIST-1 e", "TRAPPIST-1"),
            ("Proxima Cen b", "Proxima Cen"),
            ("HD 209458", "HD 209458"),
            ("Kepler-186 a", "Kepler-186 a"),
            ("Kepler-186f", "Kepler-186f"),
        ],
    )
    def test_strips_trailing_designator(self, planet: str, star: str) -> None:
        assert derive_star_name(planet) == star


class TestRuleTable:
    def test_distance_only_from_parallax(self) -> None:
        rules = [r for r in FUSION_RULES if r.field == "distance_ly"]
        assert len(rules) == 1
        assert rules[0].source is GAIA
        assert rules[0].key == keys.PARALLAX_MAS

    def test_planet_fields_prefer_nasa(self) -> None:
        planet_rules = [r for r in FUSION_RULES if r.group == "planet"]
        for target in {r.target for r in planet_rules}:
            ordered = sorted((r for r in planet_rules if r.target == target), key=lambda r: r.precedence)
            assert [r.source for r in ordered] == [NASA, EXOFOP]


class TestSourceFusionResolver:
    def test_full_profile(self, proxima_records: list[RawSourceRecord]) -> None:
        profile = SourceFusionResolver().resolve("TIC 429375484", proxima_records)
        assert profile.identifier == "429375484"
        assert profile.star.distance_ly.value == 4.24
        assert profile.star.distance_ly.source is GAIA
        assert profile.star.ra_deg.source is MAST
        assert profile.star.apparent_magnitude.value == 11.13
        assert profile.star.name.value == "Proxima Centauri"
        assert profile.star.temperature_k.source is EXOFOP
        assert profile.planet.name.value == "Proxima Cen b"
        assert missing_fields(profile) == []

    def test_nasa_overrides_exofop_planet_values(self, proxima_records: list[RawSourceRecord]) -> None:
        profile = resolve_profile("429375484", proxima_records)
        assert profile.planet.orbital_period_days.value == 11.18
        assert profile.planet.orbital_period_days.source is NASA

    def test_exofop_fills_planet_when_nasa_silent(self) -> None:
        records = [
            RawSourceRecord(source=EXOFOP, values={keys.ORBITAL_PERIOD_DAYS: 3.3}),
            RawSourceRecord(source=NASA, values={keys.ORBITAL_PERIOD_DAYS: float("nan")}),
        ]
        profile = resolve_profile("1", records)
        assert profile.planet.orbital_period_days.value == 3.3
        assert profile.planet.orbital_period_days.source is EXOFOP

    def test_catalog_distance_columns_ignored(self, caplog: pytest.LogCaptureFixture) -> None:
        records = [
            RawSourceRecord(source=MAST, values={"distance_ly": 4.0, keys.RA_DEG: 1.0}),
            RawSourceRecord(source=EXOFOP, values={"distance_pc": 1.3}),
        ]
        with caplog.at_level(logging.DEBUG, logger="tess_hub.platform.catalogs.fusion"):
            profile = resolve_profile("1", records)
        assert profile.star.distance_ly.value is NOT_AVAILABLE
        assert profile.star.distance_ly.source is NOT_AVAILABLE
        assert "Ignoring distance columns" in caplog.text

    def test_non_positive_parallax_not_available(self) -> None:
        profile = resolve_profile("1", [RawSourceRecord(source=GAIA, values={keys.PARALLAX_MAS: -1.0})])
        assert profile.star.distance_ly.value is NOT_AVAILABLE

    def test_invalid_identifier_short_circuits(self, proxima_records: list[RawSourceRecord]) -> None:
        records = [r for r in proxima_records if r.source is not EXOFOP]
        records.append(RawSourceRecord(source=EXOFOP, invalid_identifier=True))
        profile = resolve_profile("999", records)
        assert profile.is_invalid
        assert profile.star.name.value == INVALID_IDENTIFIER_NAME
        assert profile.star.distance_ly.value is NOT_AVAILABLE
        assert profile.planet.name.value is NOT_AVAILABLE
        every_field = [f"star.{f.name}" for f in fields(StarProfile)] + [
            f"planet.{f.name}" for f in fields(PlanetProfile)
        ]
        assert missing_fields(profile) == [name for name in every_field if name != "star.name"]
        assert profile.star.name.source is EXOFOP

    def test_star_name_derived_from_planet(self) -> None:
        records = [RawSourceRecord(source=NASA, values={keys.PLANET_NAME: "Kepler-186 f"})]
        profile = resolve_profile("233544353", records)
        assert profile.star.name.value == "Kepler-186"
        assert profile.star.name.source is CatalogSource.DERIVED

    def test_star_name_synthesized_from_identifier(self) -> None:
        profile = resolve_profile("233544353", [])
        assert profile.star.name.value == "TIC 233544353"
        assert profile.star.name.source is CatalogSource.DERIVED
        assert "star.name" not in missing_fields(profile)

    def test_missing_fields_listed(self) -> None:
        profile = resolve_profile("5", [RawSourceRecord(source=GAIA, values={keys.PARALLAX_MAS: 10.0})])
        missing = missing_fields(profile)
        assert "star.distance_ly" not in missing
        assert "star.temperature_k" in missing
        assert "planet.orbital_period_days" in missing

    def test_duplicate_sources_rejected(self) -> None:
        records = [RawSourceRecord(source=GAIA), RawSourceRecord(source=GAIA)]
        with pytest.raises(ValueError, match="duplicate record"):
            resolve_profile("1", records)

    def test_resolution_is_order_independent(self, proxima_records: list[RawSourceRecord]) -> None:
        forward = resolve_profile("429375484", proxima_records)
        backward = resolve_profile("429375484", list(reversed(proxima_records)))
        assert forward == backward
