"""Error taxonomy shared by services and the HTTP layer."""

from enum import StrEnum


class ErrorKind(StrEnum):
    """Classification of a rejected operation."""

    MISSING_FIELD = "missing_field"
    NEGATIVE_VALUE = "negative_value"
    INVALID_INPUT = "invalid_input"
    INVALID_TOKEN = "invalid_token"
    CONFLICT = "conflict"
    UNAUTHENTICATED = "unauthenticated"
    INVALID_CREDENTIALS = "invalid_credentials"
    EMAIL_NOT_VERIFIED = "email_not_verified"
    NOT_FOUND = "not_found"
    UPSTREAM_SERVICE_FAILURE = "upstream_service_failure"
    PERSISTENCE_FAILURE = "persistence_failure"

    @property
    def is_client_fault(self) -> bool:
        """Return True when the caller's input caused the failure."""
        return self not in _SERVER_FAULTS

    @property
    def http_status(self) -> int:
        """Return the HTTP status code used for this kind."""
        return _HTTP_STATUS[self]


_SERVER_FAULTS = {ErrorKind.UPSTREAM_SERVICE_FAILURE, ErrorKind.PERSISTENCE_FAILURE}

_HTTP_STATUS = {
    ErrorKind.MISSING_FIELD: 400,
    ErrorKind.NEGATIVE_VALUE: 400,
    ErrorKind.INVALID_INPUT: 400,
    ErrorKind.INVALID_TOKEN: 400,
    ErrorKind.CONFLICT: 400,
    ErrorKind.UNAUTHENTICATED: 401,
    ErrorKind.INVALID_CREDENTIALS: 401,
    ErrorKind.EMAIL_NOT_VERIFIED: 403,
    ErrorKind.NOT_FOUND: 404,
    ErrorKind.UPSTREAM_SERVICE_FAILURE: 502,
    ErrorKind.PERSISTENCE_FAILURE: 500,
}


class TrackerError(Exception):
    """Raised when an operation is rejected.

    Ownership mismatches and missing records share ``ErrorKind.NOT_FOUND``;
    there is intentionally no separate "forbidden" kind.
    """

    def __init__(self, kind: ErrorKind, message: str) -> None:
        super().__init__(message)
        self.kind = kind
        self.message = message

    @property
    def is_client_fault(self) -> bool:
        """Return True when the caller's input caused the failure."""
        return self.kind.is_client_fault

    def to_dict(self) -> dict[str, str]:
        """Return the JSON body for an error response."""
        return {
            "error": self.message,
            "kind": self.kind.value,
            "fault": "client" if self.is_client_fault else "server",
        }


def unauthenticated() -> TrackerError:
    """Return the error raised when no caller identity is attached."""
    return TrackerError(ErrorKind.UNAUTHENTICATED, "User not authenticated")


def meal_log_not_found() -> TrackerError:
    """Return the error raised for a missing or foreign meal log."""
    return TrackerError(ErrorKind.NOT_FOUND, "Meal log not found")
