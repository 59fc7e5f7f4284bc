"""Tests for per-source record models."""

from __future__ import annotations

import math

import pytest
from pydantic import ValidationError

from tess_hub.domain.profile import CatalogSource
from tess_hub.platform.catalogs.records import RawSourceRecord, normalize_identifier


class TestNormalizeIdentifier:
    @pytest.mark.parametrize(
        "raw,expected",
        [("TIC 429375484", "429375484"), ("tic-123", "123"), (" 42 ", "42"), (7, "7"), ("TIC_9", "9")],
    )
    def test_strips_prefix(self, raw: str | int, expected: str) -> None:
        assert normalize_identifier(raw) == expected


class TestRawSourceRecord:
    def test_get_filters_unusable_values(self) -> None:
        record = RawSourceRecord(
            source=CatalogSource.MAST_TIC,
            values={"a": 1.5, "b": math.nan, "c": "  ", "d": " x ", "e": 0.0},
        )
        assert record.get("a") == 1.5
        assert record.get("b") is None
        assert record.get("c") is None
        assert record.get("d") == "x"
        assert record.get("e") == 0.0
        assert record.get("missing") is None

    def test_derived_source_rejected(self) -> None:
        with pytest.raises(ValidationError):
            RawSourceRecord(source=CatalogSource.DERIVED)

    def test_source_parsed_from_value(self) -> None:
        record = RawSourceRecord.model_validate({"source": "Gaia DR3", "values": {"parallax_mas": 1.0}})
        assert record.source is CatalogSource.GAIA_DR3

    def test_unknown_fields_rejected(self) -> None:
        with pytest.raises(ValidationError):
            RawSourceRecord.model_validate({"source": "Gaia DR3", "extra": 1})

    def test_to_dict(self) -> None:
        record = RawSourceRecord(source=CatalogSource.EXOFOP_TESS, invalid_identifier=True)
        assert record.to_dict() == {"source": "ExoFOP-TESS", "values": {}, "invalid_identifier": True}

    def test_quoted_numbers_coerced_for_numeric_keys(self) -> None:
        record = RawSourceRecord.model_validate(
            {
                "source": "NASA Exoplanet Archive",
                "values": {"orbital_period_days": " 11.18 ", "planet_name": "42", "planet_mass_mearth": ""},
            }
        )
        assert record.get("orbital_period_days") == 11.18
        assert isinstance(record.values["orbital_period_days"], float)
        assert record.get("planet_name") == "42"
        assert record.get("planet_mass_mearth") is None

    def test_unparseable_numeric_text_rejected(self) -> None:
        with pytest.raises(ValidationError, match="radius_rsun must be numeric"):
            RawSourceRecord.model_validate({"source": "ExoFOP-TESS", "values": {"radius_rsun": "big"}})
