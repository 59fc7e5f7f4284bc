"""Environment-backed runtime settings.

Algorithm defaults live in the frozen config dataclasses next to the code they
configure (``GeneratorConfig``, ``OptimizerConfig``). ``HubSettings`` only
collects the handful of knobs that operators override through the
environment.
"""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass

logger = logging.getLogger(__name__)

ENV_LIGHT_CURVE_SAMPLES = "TESS_HUB_LIGHT_CURVE_SAMPLES"
ENV_OPTIMIZER_ITERATIONS = "TESS_HUB_OPTIMIZER_ITERATIONS"
ENV_OPTIMIZER_SEED = "TESS_HUB_OPTIMIZER_SEED"
ENV_BATCH_WORKERS = "TESS_HUB_BATCH_WORKERS"
ENV_LOG_LEVEL = "TESS_HUB_LOG_LEVEL"

_DEFAULT_LIGHT_CURVE_SAMPLES = 2000
_DEFAULT_OPTIMIZER_ITERATIONS = 30
_DEFAULT_BATCH_WORKERS = 4
_DEFAULT_LOG_LEVEL = "WARNING"
_LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")


def _positive_int_from_env(name: str, default: int) -> int:
    raw = os.getenv(name)
    if raw is None or not raw.strip():
        return default
    try:
        value = int(raw)
    except ValueError:
        logger.warning("Ignoring %s=%r: not an integer", name, raw)
        return default
    if value <= 0:
        logger.warning("Ignoring %s=%r: must be positive", name, raw)
        return default
    return value


def _optional_int_from_env(name: str) -> int | None:
    raw = os.getenv(name)
    if raw is None or not raw.strip():
        return None
    try:
        return int(raw)
    except ValueError:
        logger.warning("Ignoring %s=%r: not an integer", name, raw)
        return None


def _log_level_from_env(name: str, default: str) -> str:
    raw = (os.getenv(name) or "").strip().upper()
    if not raw:
        return default
    if raw not in _LOG_LEVELS:
        logger.warning("Ignoring %s=%r: expected one of %s", name, raw, ", ".join(_LOG_LEVELS))
        return default
    return raw


@dataclass(frozen=True)
class HubSettings:
    """Operator-level settings.

    Attributes:
        light_curve_samples: Number of samples in generated brightness series.
        optimizer_iterations: Iteration budget for parameter optimization.
        optimizer_seed: Seed for the optimizer's random proposals; None draws
            fresh entropy on every run.
        batch_workers: Thread pool size for batch analysis.
        log_level: Root log level applied by the CLI.
    """

    light_curve_samples: int = _DEFAULT_LIGHT_CURVE_SAMPLES
    optimizer_iterations: int = _DEFAULT_OPTIMIZER_ITERATIONS
    optimizer_seed: int | None = None
    batch_workers: int = _DEFAULT_BATCH_WORKERS
    log_level: str = _DEFAULT_LOG_LEVEL

    @classmethod
    def from_env(cls) -> HubSettings:
        return cls(
            light_curve_samples=_positive_int_from_env(
                ENV_LIGHT_CURVE_SAMPLES, _DEFAULT_LIGHT_CURVE_SAMPLES
            ),
            optimizer_iterations=_positive_int_from_env(
                ENV_OPTIMIZER_ITERATIONS, _DEFAULT_OPTIMIZER_ITERATIONS
            ),
            optimizer_seed=_optional_int_from_env(ENV_OPTIMIZER_SEED),
            batch_workers=_positive_int_from_env(ENV_BATCH_WORKERS, _DEFAULT_BATCH_WORKERS),
            log_level=_log_level_from_env(ENV_LOG_LEVEL, _DEFAULT_LOG_LEVEL),
        )


__all__ = [
    "ENV_BATCH_WORKERS",
    "ENV_LIGHT_CURVE_SAMPLES",
    "ENV_LOG_LEVEL",
    "ENV_OPTIMIZER_ITERATIONS",
    "ENV_OPTIMIZER_SEED",
    "HubSettings",
]
