"""End-to-end analysis of one system: fuse, synthesize, measure, optionally optimize.

Expected problems (unknown identifier, missing catalog fields, degenerate
transit parameters) never raise here. They are attached to the result as
``ErrorEnvelope`` entries so callers can render a message and still export
whatever was produced.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable, Mapping, Sequence
from concurrent.futures import ThreadPoolExecutor, as_completed
from dataclasses import dataclass, field
from typing import Any

from tess_hub.compute.detrend import median_detrend
from tess_hub.compute.habitability import HabitabilityAssessment, assess_profile_habitability
from tess_hub.compute.optimizer import (
    OptimizationResult,
    OptimizerConfig,
    StochasticParameterOptimizer,
)
from tess_hub.compute.random_stream import SeededRandomStream
from tess_hub.compute.synthetic import (
    GeneratorConfig,
    SyntheticSignalGenerator,
    SyntheticSignals,
    generate_radial_velocity_curve,
    transit_parameters_from_profile,
)
from tess_hub.compute.transit_estimate import estimate_transit_parameters
from tess_hub.config import HubSettings
from tess_hub.domain.profile import VerifiedProfile
from tess_hub.domain.transit import RadialVelocitySeries, TransitParameters
from tess_hub.errors import ErrorEnvelope, ErrorType, make_error
from tess_hub.platform.catalogs.fusion import SourceFusionResolver, missing_fields
from tess_hub.platform.catalogs.records import (
    RawSourceRecord,
    SourceLookup,
    normalize_identifier,
)

logger = logging.getLogger(__name__)

DETREND_WINDOW = 101


@dataclass(frozen=True)
class SystemAnalysis:
    """Everything derived for one identifier.

    Attributes:
        profile: Fused catalog profile.
        parameters: Transit parameters the signals were generated from; None
            for invalid identifiers.
        signals: Synthetic series; None for invalid identifiers, empty series
            for degenerate parameters.
        radial_velocity: Reflex-velocity curve (empty without period and mass).
        estimated_parameters: Parameters measured back from the detrended
            light curve at the known period.
        optimization: Optimizer result when requested.
        habitability: Weighted habitability assessment; None without an
            equilibrium temperature.
        errors: Expected problems encountered along the way.
    """

    profile: VerifiedProfile
    parameters: TransitParameters | None = None
    signals: SyntheticSignals | None = None
    radial_velocity: RadialVelocitySeries = field(default_factory=RadialVelocitySeries.empty)
    estimated_parameters: TransitParameters | None = None
    optimization: OptimizationResult | None = None
    habitability: HabitabilityAssessment | None = None
    errors: tuple[ErrorEnvelope, ...] = ()

    @property
    def identifier(self) -> str:
        return self.profile.identifier

    @property
    def ok(self) -> bool:
        return not self.errors

    def to_dict(self) -> dict[str, Any]:
        return {
            "schema_version": "system_analysis.v1",
            "identifier": self.identifier,
            "profile": self.profile.to_dict(),
            "parameters": self.parameters.to_dict() if self.parameters is not None else None,
            "signals": self.signals.to_dict() if self.signals is not None else None,
            "radial_velocity": self.radial_velocity.points(),
            "estimated_parameters": (
                self.estimated_parameters.to_dict() if self.estimated_parameters is not None else None
            ),
            "optimization": self.optimization.to_dict() if self.optimization is not None else None,
            "habitability": (
                self.habitability.to_dict() if self.habitability is not None else None
            ),
            "errors": [e.model_dump(mode="json") for e in self.errors],
        }


def _generator_config(settings: HubSettings) -> GeneratorConfig:
    return GeneratorConfig(light_curve_samples=settings.light_curve_samples)


def _optimizer_config(settings: HubSettings) -> OptimizerConfig:
    return OptimizerConfig(
        iterations=settings.optimizer_iterations,
        random_seed=settings.optimizer_seed,
    )


def analyze_system(
    identifier: str,
    records: Iterable[RawSourceRecord],
    *,
    settings: HubSettings | None = None,
    initial_parameters: TransitParameters | None = None,
    parameter_overrides: Mapping[str, float] | None = None,
    optimize: bool = False,
    optimizer_config: OptimizerConfig | None = None,
) -> SystemAnalysis:
    """Analyze one system from its per-source catalog records.

    Args:
        identifier: Target identifier; ``"TIC "`` prefixes are accepted.
        records: At most one record per catalog source.
        settings: Runtime settings; defaults to ``HubSettings()``.
        initial_parameters: Replaces the parameters derived from the profile.
            The random stream is still consumed for the derived ones, so the
            noise in the generated series does not depend on the override.
        parameter_overrides: Individual fields patched onto the derived
            parameters; ignored when ``initial_parameters`` is given.
        optimize: Run the explore/exploit optimizer against the generated
            light curve, starting from the generating parameters.
        optimizer_config: Optimizer settings; defaults to the iteration
            budget and seed from ``settings``.

    Returns:
        SystemAnalysis with any expected problems listed in ``errors``.
    """
    cfg = settings or HubSettings()
    ident = normalize_identifier(identifier)
    profile = SourceFusionResolver().resolve(ident, records)

    if profile.is_invalid:
        logger.info("Skipping analysis for invalid identifier %s", ident)
        return SystemAnalysis(
            profile=profile,
            errors=(
                make_error(
                    ErrorType.INVALID_IDENTIFIER,
                    f"Identifier {ident} was not found in the catalogs",
                    identifier=ident,
                ),
            ),
        )

    habitability = assess_profile_habitability(profile)
    errors: list[ErrorEnvelope] = []
    missing = missing_fields(profile)
    if missing:
        errors.append(
            make_error(
                ErrorType.MISSING_FIELD,
                f"{len(missing)} field(s) not available from any source",
                identifier=ident,
                fields=missing,
            )
        )

    generator_config = _generator_config(cfg)
    stream = SeededRandomStream.for_identifier(ident)
    derived = transit_parameters_from_profile(
        profile, stream, window_hours=generator_config.window_hours
    )
    if initial_parameters is not None:
        parameters = initial_parameters
    elif parameter_overrides:
        parameters = derived.model_copy(update=dict(parameter_overrides))
    else:
        parameters = derived

    signals = SyntheticSignalGenerator(generator_config).generate(parameters, stream)
    radial_velocity = generate_radial_velocity_curve(
        parameters.period_days, profile.numeric("planet", "mass_mearth")
    )

    if signals.is_empty:
        errors.append(
            make_error(
                ErrorType.DEGENERATE_PARAMETERS,
                "Transit parameters are not physical; no signals generated",
                identifier=ident,
                parameters=parameters.to_dict(),
            )
        )
        return SystemAnalysis(
            profile=profile,
            parameters=parameters,
            signals=signals,
            radial_velocity=radial_velocity,
            habitability=habitability,
            errors=tuple(errors),
        )

    detrended = median_detrend(signals.light_curve, window=DETREND_WINDOW)
    estimated = estimate_transit_parameters(detrended, parameters.period_days)

    optimization: OptimizationResult | None = None
    if optimize:
        optimizer = StochasticParameterOptimizer(optimizer_config or _optimizer_config(cfg))
        optimization = optimizer.run(signals.light_curve, parameters)
        logger.info(
            "Optimized %s: score %.6g -> %.6g (%+.2f%%)",
            ident,
            optimization.initial_score,
            optimization.best_score,
            optimization.improvement_percent,
        )

    return SystemAnalysis(
        profile=profile,
        parameters=parameters,
        signals=signals,
        radial_velocity=radial_velocity,
        estimated_parameters=estimated,
        optimization=optimization,
        habitability=habitability,
        errors=tuple(errors),
    )


def analyze_identifier(
    identifier: str,
    lookup: SourceLookup,
    *,
    settings: HubSettings | None = None,
    optimize: bool = False,
) -> SystemAnalysis:
    """Look up per-source records for ``identifier`` and analyze them."""
    return analyze_system(identifier, lookup(identifier), settings=settings, optimize=optimize)


def analyze_batch(
    identifiers: Sequence[str],
    lookup: SourceLookup,
    *,
    settings: HubSettings | None = None,
    max_workers: int | None = None,
    optimize: bool = False,
) -> list[SystemAnalysis]:
    """Analyze independent identifiers concurrently.

    Results are returned in the order of ``identifiers``. Each identifier
    gets its own random stream, so the output does not depend on scheduling.
    """
    cfg = settings or HubSettings()
    if not identifiers:
        return []
    workers = max(1, int(max_workers if max_workers is not None else cfg.batch_workers))
    results: list[SystemAnalysis | None] = [None] * len(identifiers)
    with ThreadPoolExecutor(max_workers=workers) as pool:
        future_map = {
            pool.submit(
                analyze_identifier,
                identifier,
                lookup,
                settings=cfg,
                optimize=optimize,
            ): index
            for index, identifier in enumerate(identifiers)
        }
        for fut in as_completed(future_map):
            results[future_map[fut]] = fut.result()
    logger.info("Analyzed %d identifier(s) with %d worker(s)", len(identifiers), workers)
    return [r for r in results if r is not None]


__all__ = ["SystemAnalysis", "analyze_batch", "analyze_identifier", "analyze_system"]
