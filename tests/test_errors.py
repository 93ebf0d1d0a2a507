"""Tests for error taxonomy and configuration helpers."""

import pytest

from calorie_tracker.config import parse_allowed_origins
from calorie_tracker.errors import ErrorKind, TrackerError


@pytest.mark.parametrize(
    ("kind", "status", "fault"),
    [
        (ErrorKind.MISSING_FIELD, 400, "client"),
        (ErrorKind.NEGATIVE_VALUE, 400, "client"),
        (ErrorKind.UNAUTHENTICATED, 401, "client"),
        (ErrorKind.EMAIL_NOT_VERIFIED, 403, "client"),
        (ErrorKind.NOT_FOUND, 404, "client"),
        (ErrorKind.PERSISTENCE_FAILURE, 500, "server"),
        (ErrorKind.UPSTREAM_SERVICE_FAILURE, 502, "server"),
    ],
)
def test_error_kind_status_and_fault(kind: ErrorKind, status: int, fault: str) -> None:
    error = TrackerError(kind, "boom")

    assert kind.http_status == status
    assert error.to_dict() == {"error": "boom", "kind": kind.value, "fault": fault}


def test_parse_allowed_origins() -> None:
    assert parse_allowed_origins(None) == ["*"]
    assert parse_allowed_origins(" * ") == ["*"]
    assert parse_allowed_origins("https://a.example/, https://b.example") == [
        "https://a.example",
        "https://b.example",
    ]
