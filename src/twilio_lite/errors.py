from __future__ import annotations

from collections.abc import Mapping
from typing import Any, Final

from pydantic import ValidationError

from .models import ErrorResponse

# Twilio's code for "unknown error"; used when the body carries no code.
UNKNOWN_ERROR_CODE: Final[int] = 410


class TwilioLiteError(Exception):
    """Base class for every error raised by this package."""


class MissingConfiguration(TwilioLiteError, RuntimeError):
    def __init__(self, variable: str) -> None:
        super().__init__(f"Missing environment variable {variable}.")
        self.variable = variable


class InvalidPhoneNumber(TwilioLiteError, ValueError):
    pass


class MessageTooLong(TwilioLiteError, ValueError):
    pass


class InvalidCredentialFormat(TwilioLiteError, ValueError):
    pass


class DecodeError(TwilioLiteError, ValueError):
    pass


class ApiError(TwilioLiteError):
    """
    A failed call to the Twilio REST API.

    Either the response body was not JSON (message is "Failed JSON.parse") or
    the HTTP status was outside 2xx, in which case the fields come from the
    provider's error body.

    See https://www.twilio.com/docs/api/errors
    """

    def __init__(
        self,
        message: str,
        http_status: int,
        code: int = UNKNOWN_ERROR_CODE,
        more_info: str | None = None,
        details: Any = None,
    ) -> None:
        super().__init__(message)
        self.message = message
        self.http_status = http_status
        self.code = code
        self.more_info = more_info
        self.details = details

    def __str__(self) -> str:
        return f"{self.message} (status={self.http_status}, code={self.code})"

    @classmethod
    def from_response(cls, payload: Any, http_status: int) -> ApiError:
        """
        Build an error from a decoded error body.

        Fields missing from the body fall back to the real HTTP status and the
        unknown-error code.
        """
        if not isinstance(payload, Mapping):
            return cls("Unexpected error response", http_status)

        try:
            err = ErrorResponse.model_validate(payload)
        except ValidationError:
            return cls("Unexpected error response", http_status)

        return cls(
            message=err.message or "Unknown error",
            http_status=err.status or http_status,
            code=err.code or UNKNOWN_ERROR_CODE,
            more_info=err.more_info,
            details=err.details,
        )
