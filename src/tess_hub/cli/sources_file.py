"""Loader for `--sources-file` JSON (schema ``source_records.v1``)."""

from __future__ import annotations

from pathlib import Path

from pydantic import ValidationError

from tess_hub.cli.common_cli import HubCliError, load_json_file
from tess_hub.platform.catalogs.records import RawSourceRecord, SourceLookup
from tess_hub.platform.catalogs.reference_catalog import ReferenceCatalog

SOURCES_SCHEMA_VERSION = "source_records.v1"


def load_source_records(path: Path) -> list[RawSourceRecord]:
    payload = load_json_file(path, label="sources file")
    version = payload.get("schema_version")
    if version != SOURCES_SCHEMA_VERSION:
        raise HubCliError(
            f"sources file schema_version must be {SOURCES_SCHEMA_VERSION!r}, got {version!r}"
        )
    rows = payload.get("records")
    if not isinstance(rows, list):
        raise HubCliError("sources file must contain a 'records' list")

    records: list[RawSourceRecord] = []
    for index, row in enumerate(rows):
        try:
            records.append(RawSourceRecord.model_validate(row))
        except ValidationError as exc:
            raise HubCliError(f"Invalid record at index {index}: {exc}") from exc
    return records


def resolve_source_lookup(sources_file: Path | None) -> SourceLookup:
    """File-backed lookup when a sources file is given, else the offline catalog."""
    if sources_file is None:
        return ReferenceCatalog()
    records = load_source_records(sources_file)
    return lambda _identifier: list(records)


__all__ = ["SOURCES_SCHEMA_VERSION", "load_source_records", "resolve_source_lookup"]
