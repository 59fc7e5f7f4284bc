"""Local error taxonomy for tess-hub.

The numeric core never raises for expected conditions (unknown identifiers,
missing catalog fields, degenerate transit parameters). Those are reported as
envelopes attached to analysis results so that presentation layers can show a
clear message without special-casing failure paths.
"""

from __future__ import annotations

from enum import Enum
from typing import Any

from pydantic import BaseModel, ConfigDict, Field


class ErrorType(str, Enum):
    INVALID_IDENTIFIER = "INVALID_IDENTIFIER"
    MISSING_FIELD = "MISSING_FIELD"
    DEGENERATE_PARAMETERS = "DEGENERATE_PARAMETERS"


class ErrorEnvelope(BaseModel):
    model_config = ConfigDict(frozen=True, extra="forbid")

    type: ErrorType
    message: str
    context: dict[str, Any] = Field(default_factory=dict)


def make_error(error_type: ErrorType, message: str, **context: Any) -> ErrorEnvelope:
    return ErrorEnvelope(type=error_type, message=message, context=dict(context))


__all__ = ["ErrorEnvelope", "ErrorType", "make_error"]
