"""Command-line interface for tess-hub."""
