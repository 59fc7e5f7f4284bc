"""Explore-then-exploit local search over box-transit parameters.

This is a bounded stochastic sampler, not a surrogate-model Bayesian
optimizer:

1. Every parameter is confined to a fixed fractional window around its
   initial value (period +/-5%, duration and depth +/-30% by default).
2. The first ``explore_iterations`` trials draw each parameter uniformly from
   its window.
3. Later trials perturb the best-known value by a symmetric offset of at most
   half the window width times ``max(min_factor, 1 - i / iterations)``, then
   clamp back into the window.
4. A trial replaces the incumbent only when its score is strictly higher.

The epoch is held at its initial value; only period, duration and depth are
searched.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from enum import Enum
from typing import Any

import numpy as np

from tess_hub.compute.scoring import transit_fit_score
from tess_hub.domain.transit import LightCurveSeries, TransitParameters

logger = logging.getLogger(__name__)

_SEARCHED = ("period_days", "duration_hours", "depth")


class SearchPhase(str, Enum):
    EXPLORING = "exploring"
    EXPLOITING = "exploiting"


@dataclass(frozen=True)
class OptimizerConfig:
    iterations: int = 30
    explore_iterations: int = 5
    period_window: float = 0.05
    duration_window: float = 0.30
    depth_window: float = 0.30
    min_exploitation_factor: float = 0.05
    random_seed: int | None = None

    def __post_init__(self) -> None:
        if self.iterations < 0:
            raise ValueError(f"iterations must be >= 0, got {self.iterations}")
        if self.explore_iterations < 0:
            raise ValueError(f"explore_iterations must be >= 0, got {self.explore_iterations}")
        for name in ("period_window", "duration_window", "depth_window"):
            value = getattr(self, name)
            if not 0 <= value < 1:
                raise ValueError(f"{name} must be in [0, 1), got {value}")
        if not 0 < self.min_exploitation_factor <= 1:
            raise ValueError(
                f"min_exploitation_factor must be in (0, 1], got {self.min_exploitation_factor}"
            )


@dataclass(frozen=True)
class SearchWindow:
    """Closed interval a single parameter is confined to."""

    low: float
    high: float

    @classmethod
    def around(cls, value: float, fraction: float) -> SearchWindow:
        a = value * (1.0 - fraction)
        b = value * (1.0 + fraction)
        return cls(low=min(a, b), high=max(a, b))

    @property
    def width(self) -> float:
        return self.high - self.low

    def clamp(self, value: float) -> float:
        return float(min(self.high, max(self.low, value)))

    def to_dict(self) -> dict[str, float]:
        return {"low": float(self.low), "high": float(self.high)}


@dataclass(frozen=True)
class OptimizationTrial:
    """One optimizer iteration; immutable once recorded."""

    iteration: int
    phase: SearchPhase
    parameters: TransitParameters
    score: float
    best_score: float

    def to_dict(self) -> dict[str, Any]:
        return {
            "iteration": int(self.iteration),
            "phase": self.phase.value,
            "parameters": self.parameters.to_dict(),
            "score": float(self.score),
            "best_score": float(self.best_score),
        }


@dataclass(frozen=True)
class OptimizationResult:
    initial_parameters: TransitParameters
    initial_score: float
    best_parameters: TransitParameters
    best_score: float
    history: tuple[OptimizationTrial, ...]
    windows: dict[str, SearchWindow]

    @property
    def improvement_percent(self) -> float:
        """(best / initial - 1) * 100; 0 when the initial score is 0."""
        if self.initial_score <= 0:
            return 0.0
        return (self.best_score / self.initial_score - 1.0) * 100.0

    def to_dict(self) -> dict[str, Any]:
        return {
            "initial_parameters": self.initial_parameters.to_dict(),
            "initial_score": float(self.initial_score),
            "best_parameters": self.best_parameters.to_dict(),
            "best_score": float(self.best_score),
            "improvement_percent": float(self.improvement_percent),
            "search_windows": {k: w.to_dict() for k, w in self.windows.items()},
            "history": [trial.to_dict() for trial in self.history],
        }


class StochasticParameterOptimizer:
    """Bounded explore/exploit search against an observed light curve.

    Example:
        >>> optimizer = StochasticParameterOptimizer(OptimizerConfig(random_seed=7))
        >>> result = optimizer.run(observed, initial)
        >>> [t.best_score for t in result.history] == sorted(t.best_score for t in result.history)
        True
    """

    def __init__(self, config: OptimizerConfig | None = None) -> None:
        self.config = config or OptimizerConfig()

    def search_windows(self, initial: TransitParameters) -> dict[str, SearchWindow]:
        cfg = self.config
        return {
            "period_days": SearchWindow.around(initial.period_days, cfg.period_window),
            "duration_hours": SearchWindow.around(initial.duration_hours, cfg.duration_window),
            "depth": SearchWindow.around(initial.depth, cfg.depth_window),
        }

    def phase_for(self, iteration: int) -> SearchPhase:
        if iteration <= self.config.explore_iterations:
            return SearchPhase.EXPLORING
        return SearchPhase.EXPLOITING

    def exploitation_factor(self, iteration: int) -> float:
        cfg = self.config
        if cfg.iterations == 0:
            return 1.0
        return max(cfg.min_exploitation_factor, 1.0 - iteration / cfg.iterations)

    def propose(
        self,
        iteration: int,
        best: TransitParameters,
        windows: dict[str, SearchWindow],
        rng: np.random.Generator,
    ) -> TransitParameters:
        """Draw the candidate for ``iteration`` (1-based)."""
        update: dict[str, float] = {}
        if self.phase_for(iteration) is SearchPhase.EXPLORING:
            for name in _SEARCHED:
                window = windows[name]
                update[name] = window.clamp(window.low + rng.random() * window.width)
        else:
            factor = self.exploitation_factor(iteration)
            for name in _SEARCHED:
                window = windows[name]
                offset = (rng.random() - 0.5) * window.width * factor
                update[name] = window.clamp(getattr(best, name) + offset)
        return best.model_copy(update=update)

    def run(
        self,
        observed: LightCurveSeries,
        initial: TransitParameters,
        *,
        rng: np.random.Generator | None = None,
    ) -> OptimizationResult:
        """Search for parameters that better fit ``observed``.

        Args:
            observed: Light curve to score candidates against.
            initial: Starting parameters; also the center of every window.
            rng: Optional generator; defaults to one seeded from the config.

        Returns:
            OptimizationResult with one trial per iteration, in order.
        """
        cfg = self.config
        generator = rng if rng is not None else np.random.default_rng(cfg.random_seed)
        windows = self.search_windows(initial)

        initial_score = transit_fit_score(initial, observed)
        best = initial.model_copy()
        best_score = initial_score
        history: list[OptimizationTrial] = []

        for i in range(1, cfg.iterations + 1):
            phase = self.phase_for(i)
            candidate = self.propose(i, best, windows, generator)
            score = transit_fit_score(candidate, observed)
            if score > best_score:
                best, best_score = candidate, score
            history.append(
                OptimizationTrial(
                    iteration=i,
                    phase=phase,
                    parameters=candidate,
                    score=score,
                    best_score=best_score,
                )
            )
            logger.debug("iteration=%d phase=%s score=%.6g best=%.6g", i, phase.value, score, best_score)

        if initial_score == 0.0 and best_score == 0.0:
            logger.info("Optimization scored zero throughout (n=%d observed points)", len(observed))

        return OptimizationResult(
            initial_parameters=initial,
            initial_score=initial_score,
            best_parameters=best,
            best_score=best_score,
            history=tuple(history),
            windows=windows,
        )


__all__ = [
    "OptimizationResult",
    "OptimizationTrial",
    "OptimizerConfig",
    "SearchPhase",
    "SearchWindow",
    "StochasticParameterOptimizer",
]
