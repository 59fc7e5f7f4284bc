"""tess-hub: catalog fusion and synthetic transit signals for TESS targets."""

from __future__ import annotations

__version__ = "0.3.0"

__all__ = ["__version__"]
