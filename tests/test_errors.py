"""Tests for the error envelope taxonomy."""

from __future__ import annotations

import pytest
from pydantic import ValidationError

from tess_hub.errors import ErrorEnvelope, ErrorType, make_error


class TestMakeError:
    def test_builds_envelope_with_context(self) -> None:
        envelope = make_error(ErrorType.MISSING_FIELD, "2 field(s) missing", fields=["a", "b"])
        assert envelope.type is ErrorType.MISSING_FIELD
        assert envelope.message == "2 field(s) missing"
        assert envelope.context == {"fields": ["a", "b"]}

    def test_json_dump_uses_string_type(self) -> None:
        envelope = make_error(ErrorType.INVALID_IDENTIFIER, "unknown", identifier="1")
        assert envelope.model_dump(mode="json") == {
            "type": "INVALID_IDENTIFIER",
            "message": "unknown",
            "context": {"identifier": "1"},
        }

    def test_envelope_is_frozen(self) -> None:
        envelope = make_error(ErrorType.DEGENERATE_PARAMETERS, "bad")
        with pytest.raises(ValidationError):
            envelope.message = "changed"  # type: ignore[misc]

    def test_unknown_type_rejected(self) -> None:
        with pytest.raises(ValidationError):
            ErrorEnvelope(type="NOPE", message="x")  # type: ignore[arg-type]
