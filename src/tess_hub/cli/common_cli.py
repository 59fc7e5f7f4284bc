"""Shared helpers for click-based `tess-hub` commands."""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any

import click

from tess_hub.config import HubSettings

EXIT_OK = 0
EXIT_INPUT_ERROR = 1
EXIT_RUNTIME_ERROR = 2
EXIT_DATA_UNAVAILABLE = 4


class HubCliError(click.ClickException):
    """Click exception with explicit exit-code control."""

    def __init__(self, message: str, *, exit_code: int = EXIT_INPUT_ERROR) -> None:
        super().__init__(message)
        self.exit_code = int(exit_code)


def dump_json_output(payload: dict[str, Any], out_path: Path | None) -> None:
    """Write JSON payload to file or stdout."""
    text = json.dumps(payload, sort_keys=True, indent=2)
    if out_path is None:
        click.echo(text)
        return
    out_path.parent.mkdir(parents=True, exist_ok=True)
    out_path.write_text(text + "\n", encoding="utf-8")


def load_json_file(path: Path, *, label: str) -> dict[str, Any]:
    """Load an object JSON file with user-facing errors."""
    try:
        text = path.read_text(encoding="utf-8")
    except FileNotFoundError as exc:
        raise HubCliError(f"{label} not found: {path}") from exc
    except OSError as exc:
        raise HubCliError(f"Cannot read {label}: {exc}") from exc

    try:
        payload = json.loads(text)
    except json.JSONDecodeError as exc:
        raise HubCliError(f"Malformed JSON in {label}: {exc}") from exc

    if not isinstance(payload, dict):
        raise HubCliError(f"{label} must be a JSON object")
    return payload


def resolve_optional_output_path(output_arg: str | None) -> Path | None:
    """Map '-', empty, or None to stdout; otherwise return filesystem path."""
    if output_arg is None:
        return None
    value = str(output_arg).strip()
    if value in {"", "-"}:
        return None
    return Path(value)


def settings_from_context(ctx: click.Context) -> HubSettings:
    """Settings stored by the command group, or fresh ones from the environment."""
    obj = ctx.find_object(dict) or {}
    settings = obj.get("settings")
    return settings if isinstance(settings, HubSettings) else HubSettings.from_env()


def output_option(func: Any) -> Any:
    return click.option(
        "-o",
        "--out",
        "output_path_arg",
        type=str,
        default="-",
        show_default=True,
        help="JSON output path; '-' writes to stdout.",
    )(func)


__all__ = [
    "EXIT_DATA_UNAVAILABLE",
    "EXIT_INPUT_ERROR",
    "EXIT_OK",
    "EXIT_RUNTIME_ERROR",
    "HubCliError",
    "dump_json_output",
    "load_json_file",
    "output_option",
    "resolve_optional_output_path",
    "settings_from_context",
]
