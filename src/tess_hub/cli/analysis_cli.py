"""`tess-hub profile|synthesize|optimize` commands."""

from __future__ import annotations

from dataclasses import replace
from pathlib import Path
from typing import Any

import click

from tess_hub.cli.common_cli import (
    EXIT_DATA_UNAVAILABLE,
    EXIT_RUNTIME_ERROR,
    HubCliError,
    dump_json_output,
    output_option,
    resolve_optional_output_path,
    settings_from_context,
)
from tess_hub.cli.sources_file import resolve_source_lookup
from tess_hub.compute.optimizer import OptimizerConfig
from tess_hub.errors import ErrorType
from tess_hub.pipeline.analysis import SystemAnalysis, analyze_system
from tess_hub.platform.catalogs.fusion import missing_fields
from tess_hub.platform.catalogs.records import normalize_identifier

_sources_file_option = click.option(
    "--sources-file",
    type=click.Path(dir_okay=False, path_type=Path),
    default=None,
    help="JSON file of per-source records (schema source_records.v1). "
    "Defaults to the bundled offline catalog.",
)


def _run_analysis(identifier: str, sources_file: Path | None, **kwargs: Any) -> SystemAnalysis:
    ident = normalize_identifier(identifier)
    if not ident:
        raise HubCliError("--tic-id must not be empty")
    lookup = resolve_source_lookup(sources_file)
    try:
        return analyze_system(ident, lookup(ident), **kwargs)
    except ValueError as exc:
        raise HubCliError(str(exc)) from exc
    except Exception as exc:
        raise HubCliError(str(exc), exit_code=EXIT_RUNTIME_ERROR) from exc


def _emit(payload: dict[str, Any], analysis: SystemAnalysis, output_path_arg: str) -> None:
    dump_json_output(payload, resolve_optional_output_path(output_path_arg))
    if any(e.type is ErrorType.INVALID_IDENTIFIER for e in analysis.errors):
        raise HubCliError(
            f"Identifier {analysis.identifier} is not known to any catalog",
            exit_code=EXIT_DATA_UNAVAILABLE,
        )


@click.command("profile")
@click.option("--tic-id", type=str, required=True, help="TIC identifier.")
@_sources_file_option
@output_option
@click.pass_context
def profile_command(
    ctx: click.Context,
    tic_id: str,
    sources_file: Path | None,
    output_path_arg: str,
) -> None:
    """Fuse catalog records into a verified profile."""
    analysis = _run_analysis(tic_id, sources_file, settings=settings_from_context(ctx))
    payload = {
        "schema_version": "cli.profile.v1",
        "profile": analysis.profile.to_dict(),
        "missing_fields": [] if analysis.profile.is_invalid else missing_fields(analysis.profile),
        "errors": [e.model_dump(mode="json") for e in analysis.errors],
    }
    _emit(payload, analysis, output_path_arg)


@click.command("synthesize")
@click.option("--tic-id", type=str, required=True, help="TIC identifier.")
@_sources_file_option
@click.option("--period-days", type=float, default=None, help="Override orbital period (days).")
@click.option("--depth", type=float, default=None, help="Override fractional transit depth.")
@click.option("--duration-hours", type=float, default=None, help="Override transit duration (hours).")
@click.option("--epoch-hours", type=float, default=None, help="Override transit epoch (hours).")
@click.option("--samples", type=click.IntRange(min=1), default=None, help="Light-curve sample count.")
@output_option
@click.pass_context
def synthesize_command(
    ctx: click.Context,
    tic_id: str,
    sources_file: Path | None,
    period_days: float | None,
    depth: float | None,
    duration_hours: float | None,
    epoch_hours: float | None,
    samples: int | None,
    output_path_arg: str,
) -> None:
    """Generate synthetic light curve, periodogram and folded curves."""
    settings = settings_from_context(ctx)
    if samples is not None:
        settings = replace(settings, light_curve_samples=int(samples))
    overrides = {
        name: float(value)
        for name, value in (
            ("period_days", period_days),
            ("depth", depth),
            ("duration_hours", duration_hours),
            ("epoch_hours", epoch_hours),
        )
        if value is not None
    }
    analysis = _run_analysis(
        tic_id,
        sources_file,
        settings=settings,
        parameter_overrides=overrides or None,
    )
    payload = {"schema_version": "cli.synthesize.v1", **analysis.to_dict()}
    _emit(payload, analysis, output_path_arg)


@click.command("optimize")
@click.option("--tic-id", type=str, required=True, help="TIC identifier.")
@_sources_file_option
@click.option("--iterations", type=click.IntRange(min=0), default=None, help="Iteration budget.")
@click.option(
    "--explore-iterations",
    type=click.IntRange(min=0),
    default=5,
    show_default=True,
    help="Leading iterations that sample the whole search window.",
)
@click.option("--seed", type=int, default=None, help="Random seed for reproducible proposals.")
@output_option
@click.pass_context
def optimize_command(
    ctx: click.Context,
    tic_id: str,
    sources_file: Path | None,
    iterations: int | None,
    explore_iterations: int,
    seed: int | None,
    output_path_arg: str,
) -> None:
    """Search for transit parameters that better fit the generated light curve."""
    settings = settings_from_context(ctx)
    config = OptimizerConfig(
        iterations=int(iterations if iterations is not None else settings.optimizer_iterations),
        explore_iterations=int(explore_iterations),
        random_seed=seed if seed is not None else settings.optimizer_seed,
    )
    analysis = _run_analysis(
        tic_id,
        sources_file,
        settings=settings,
        optimize=True,
        optimizer_config=config,
    )
    payload = {
        "schema_version": "cli.optimize.v1",
        "identifier": analysis.identifier,
        "optimization": analysis.optimization.to_dict() if analysis.optimization is not None else None,
        "errors": [e.model_dump(mode="json") for e in analysis.errors],
    }
    _emit(payload, analysis, output_path_arg)


__all__ = ["optimize_command", "profile_command", "synthesize_command"]
