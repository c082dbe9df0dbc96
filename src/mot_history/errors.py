"""Error taxonomy for MOT history lookups.

Every failure of a lookup surfaces as a single ``MotApiError``. The ``kind``
field tells callers which branch failed; ``status_code`` mirrors an HTTP
status and ``error_code`` carries the upstream code when one was supplied.
"""

from __future__ import annotations

from enum import Enum
from typing import Any


class ErrorKind(str, Enum):
    INVALID_INPUT = "InvalidInput"
    UNAUTHORIZED = "Unauthorized"
    NETWORK = "Network"
    DESERIALIZATION = "Deserialization"
    NOT_FOUND = "NotFound"
    UPSTREAM_ERROR = "UpstreamError"
    UPSTREAM_UNAVAILABLE = "UpstreamUnavailable"
    UNEXPECTED = "Unexpected"


INVALID_REGISTRATION_MESSAGE = "Please enter a valid UK registration number."
MISSING_API_KEY_MESSAGE = "API key is missing. Please check the configuration."
UNAUTHORIZED_MESSAGE = "Unauthorized access to MOT API."
UPSTREAM_UNAVAILABLE_MESSAGE = "MOT API is experiencing issues. Please try again later."
UPSTREAM_FAILURE_MESSAGE = "Failed to retrieve MOT data. Please try again later."
NETWORK_MESSAGE = "Failed to connect to the MOT API. Please check your network connection."
DESERIALIZATION_MESSAGE = "Invalid data received from the MOT API."
VEHICLE_NOT_FOUND_MESSAGE = "Vehicle not found."
NO_MOT_TESTS_MESSAGE = "No MOT tests found for this vehicle."
UNEXPECTED_MESSAGE = "An unexpected error occurred. Please try again later."


class MotApiError(Exception):
    """Uniform failure raised by the MOT lookup client."""

    def __init__(
        self,
        message: str,
        status_code: int,
        error_code: str | None = None,
        kind: ErrorKind = ErrorKind.UNEXPECTED,
    ) -> None:
        super().__init__(message)
        self.message = message
        self.status_code = status_code
        self.error_code = error_code
        self.kind = kind

    def __repr__(self) -> str:
        return (
            f"MotApiError(kind={self.kind.value!r}, status_code={self.status_code}, "
            f"error_code={self.error_code!r}, message={self.message!r})"
        )

    def to_dict(self) -> dict[str, Any]:
        return {
            "kind": self.kind.value,
            "status_code": self.status_code,
            "error_code": self.error_code,
            "message": self.message,
        }

    @classmethod
    def invalid_input(cls) -> MotApiError:
        return cls(INVALID_REGISTRATION_MESSAGE, 400, kind=ErrorKind.INVALID_INPUT)

    @classmethod
    def missing_api_key(cls) -> MotApiError:
        return cls(MISSING_API_KEY_MESSAGE, 401, kind=ErrorKind.UNAUTHORIZED)

    @classmethod
    def network(cls) -> MotApiError:
        return cls(NETWORK_MESSAGE, 500, kind=ErrorKind.NETWORK)

    @classmethod
    def deserialization(cls) -> MotApiError:
        return cls(DESERIALIZATION_MESSAGE, 500, kind=ErrorKind.DESERIALIZATION)

    @classmethod
    def vehicle_not_found(cls) -> MotApiError:
        return cls(VEHICLE_NOT_FOUND_MESSAGE, 404, kind=ErrorKind.NOT_FOUND)

    @classmethod
    def no_mot_tests(cls) -> MotApiError:
        return cls(NO_MOT_TESTS_MESSAGE, 404, kind=ErrorKind.NOT_FOUND)

    @classmethod
    def unexpected(cls) -> MotApiError:
        return cls(UNEXPECTED_MESSAGE, 500, kind=ErrorKind.UNEXPECTED)


def classify_status(status_code: int) -> MotApiError:
    """Error for a non-success response that carried no error body."""
    if status_code == 401:
        return MotApiError(UNAUTHORIZED_MESSAGE, status_code, kind=ErrorKind.UNAUTHORIZED)
    if status_code == 500:
        return MotApiError(UPSTREAM_UNAVAILABLE_MESSAGE, status_code, kind=ErrorKind.UPSTREAM_UNAVAILABLE)
    return MotApiError(UPSTREAM_FAILURE_MESSAGE, status_code, kind=ErrorKind.UPSTREAM_ERROR)
