"""Catalog records and source-priority fusion."""

from tess_hub.platform.catalogs.exofop_target_page import parse_exofop_target_page
from tess_hub.platform.catalogs.fusion import (
    FUSION_RULES,
    FusionRule,
    SourceFusionResolver,
    derive_star_name,
    missing_fields,
    resolve_profile,
)
from tess_hub.platform.catalogs.records import RawSourceRecord, SourceLookup, normalize_identifier
from tess_hub.platform.catalogs.reference_catalog import ReferenceCatalog

__all__ = [
    "FUSION_RULES",
    "FusionRule",
    "RawSourceRecord",
    "ReferenceCatalog",
    "SourceFusionResolver",
    "SourceLookup",
    "derive_star_name",
    "missing_fields",
    "normalize_identifier",
    "parse_exofop_target_page",
    "resolve_profile",
]
