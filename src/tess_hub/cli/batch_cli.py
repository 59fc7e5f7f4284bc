"""`tess-hub batch` command."""

from __future__ import annotations

from pathlib import Path

import click

from tess_hub.cli.common_cli import (
    EXIT_RUNTIME_ERROR,
    HubCliError,
    dump_json_output,
    output_option,
    resolve_optional_output_path,
    settings_from_context,
)
from tess_hub.cli.sources_file import resolve_source_lookup
from tess_hub.pipeline.analysis import analyze_batch


@click.command("batch")
@click.option("--tic-id", "tic_ids", multiple=True, required=True, help="TIC identifier (repeatable).")
@click.option(
    "--sources-file",
    type=click.Path(dir_okay=False, path_type=Path),
    default=None,
    help="JSON file of per-source records applied to every identifier.",
)
@click.option("--max-workers", type=click.IntRange(min=1), default=None, help="Thread pool size.")
@click.option("--optimize/--no-optimize", default=False, show_default=True)
@output_option
@click.pass_context
def batch_command(
    ctx: click.Context,
    tic_ids: tuple[str, ...],
    sources_file: Path | None,
    max_workers: int | None,
    optimize: bool,
    output_path_arg: str,
) -> None:
    """Analyze several identifiers concurrently; results keep input order."""
    settings = settings_from_context(ctx)
    lookup = resolve_source_lookup(sources_file)
    try:
        results = analyze_batch(
            list(tic_ids),
            lookup,
            settings=settings,
            max_workers=max_workers,
            optimize=optimize,
        )
    except ValueError as exc:
        raise HubCliError(str(exc)) from exc
    except Exception as exc:
        raise HubCliError(str(exc), exit_code=EXIT_RUNTIME_ERROR) from exc

    payload = {
        "schema_version": "cli.batch.v1",
        "counts": {
            "n_identifiers": len(results),
            "n_ok": sum(1 for r in results if r.ok),
            "n_with_errors": sum(1 for r in results if not r.ok),
        },
        "results": [
            {
                "identifier": r.identifier,
                "star_name": str(r.profile.star.name.value),
                "parameters": r.parameters.to_dict() if r.parameters is not None else None,
                "detected_period_days": (
                    r.signals.power_spectrum.best_period if r.signals is not None else None
                ),
                "best_score": r.optimization.best_score if r.optimization is not None else None,
                "habitability": (
                    r.habitability.classification.value if r.habitability is not None else None
                ),
                "errors": [e.model_dump(mode="json") for e in r.errors],
            }
            for r in results
        ],
    }
    dump_json_output(payload, resolve_optional_output_path(output_path_arg))


__all__ = ["batch_command"]
