"""Per-system and batch analysis orchestration."""

from tess_hub.pipeline.analysis import (
    SystemAnalysis,
    analyze_batch,
    analyze_identifier,
    analyze_system,
)

__all__ = ["SystemAnalysis", "analyze_batch", "analyze_identifier", "analyze_system"]
