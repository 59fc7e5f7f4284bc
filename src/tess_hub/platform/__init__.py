"""Catalog-facing platform layer (record models, fusion, offline lookups)."""
