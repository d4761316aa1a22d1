from __future__ import annotations

import json
import logging
import re
from collections.abc import Mapping
from datetime import UTC, date, datetime
from typing import Any, Final, Literal
from urllib.parse import quote

import httpx

from . import jsondates
from .auth import encode_basic_auth
from .config import API_BASE_URL, API_VERSION, TwilioCredentials, get_credentials
from .errors import ApiError, InvalidPhoneNumber, MessageTooLong
from .models import MessageResponse

logger = logging.getLogger(__name__)

HttpMethod = Literal["GET", "POST", "PUT", "DELETE"]
ParamValue = str | int | float | bool | date | datetime

HTTP_METHODS: Final[frozenset[str]] = frozenset({"GET", "POST", "PUT", "DELETE"})

# Phone number format supported by Twilio
PHONE_NUMBER_E164_RE: Final[re.Pattern[str]] = re.compile(r"\+[1-9][0-9]{10,14}")

MAX_BODY_CHARS: Final[int] = 1600
DEFAULT_TIMEOUT: Final[float] = 30.0
MAX_LOGGED_BODY_BYTES: Final[int] = 5 * 1024

# Same character set `encodeURIComponent` leaves alone.
_URI_COMPONENT_SAFE: Final[str] = "-_.!~*'()"


def quote_component(value: str) -> str:
    return quote(value, safe=_URI_COMPONENT_SAFE)


def format_param(value: ParamValue) -> str:
    """
    Stringify a form value.

    Datetimes become ISO-8601 UTC with milliseconds and a `Z` suffix; naive
    datetimes are taken as UTC.
    """
    if isinstance(value, datetime):
        if value.tzinfo is None:
            value = value.replace(tzinfo=UTC)
        return value.astimezone(UTC).isoformat(timespec="milliseconds").replace("+00:00", "Z")
    if isinstance(value, date):
        return value.isoformat()
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    return str(value)


def encode_form(params: Mapping[str, ParamValue]) -> str:
    return "&".join(
        f"{quote_component(key)}={quote_component(format_param(value))}"
        for key, value in params.items()
    )


def validate_phone_number(to: str) -> None:
    if not PHONE_NUMBER_E164_RE.fullmatch(to):
        raise InvalidPhoneNumber("Invalid phone number, not E.164 format.")


def message_length(body: str) -> int:
    # Twilio counts UTF-16 code units, so astral characters count twice.
    return len(body.encode("utf-16-le")) // 2


def validate_body(body: str) -> None:
    length = message_length(body)
    if length > MAX_BODY_CHARS:
        raise MessageTooLong(
            f"Message is too big ({length} characters, max {MAX_BODY_CHARS})."
        )


class TwilioClient:
    """
    Thin async client for the Twilio REST API.

    Each call is a single request/response round trip; nothing is retried and
    nothing is cached between calls. Pass `http_client` to reuse an existing
    httpx.AsyncClient (its own timeout then applies).
    """

    def __init__(
        self,
        credentials: TwilioCredentials,
        *,
        timeout: float | None = DEFAULT_TIMEOUT,
        http_client: httpx.AsyncClient | None = None,
    ) -> None:
        self.credentials = credentials
        self.timeout = timeout
        self._http_client = http_client

    def url_for(self, path: str) -> str:
        sid = quote_component(self.credentials.account_sid)
        return f"{API_BASE_URL}/{API_VERSION}/Accounts/{sid}/{quote_component(path)}"

    def headers(self) -> dict[str, str]:
        return {
            "Authorization": encode_basic_auth(
                self.credentials.account_sid, self.credentials.auth_token
            ),
            "Content-Type": "application/x-www-form-urlencoded",
        }

    async def _send(self, method: str, url: str, body: str | None) -> httpx.Response:
        if self._http_client is not None:
            return await self._http_client.request(
                method, url, headers=self.headers(), content=body
            )
        async with httpx.AsyncClient(timeout=self.timeout) as http:
            return await http.request(method, url, headers=self.headers(), content=body)

    async def request(
        self,
        path: str,
        method: HttpMethod = "GET",
        params: Mapping[str, ParamValue] | None = None,
    ) -> Any:
        """
        Call the Twilio API and return the decoded JSON body.

        When `params` are given they are form-encoded and sent as the body,
        whatever the method.

        Raises ApiError when the body is not JSON or the status is not 2xx.
        """
        if method not in HTTP_METHODS:
            raise ValueError(f"Unsupported HTTP method: {method}")

        # TODO: confirm whether Twilio accepts a body on GET; list endpoints may
        # need params moved to the query string instead.
        body = encode_form(params) if params is not None else None

        logger.debug("Twilio %s %s", method, path)
        response = await self._send(method, self.url_for(path), body)
        status = response.status_code

        try:
            data = jsondates.loads(response.text)
        except json.JSONDecodeError as exc:
            raw = response.content[:MAX_LOGGED_BODY_BYTES].decode("utf-8", errors="replace")
            logger.error("TwilioError (status=%s): %s %s", status, exc, raw)
            raise ApiError("Failed JSON.parse", status) from exc

        if status < 200 or status >= 300:
            raise ApiError.from_response(data, status)

        return data

    async def send_sms(self, to: str, body: str) -> MessageResponse:
        """
        Send a text message from the configured Twilio number.

        The recipient and body are checked before anything goes on the wire.
        """
        validate_phone_number(to)
        validate_body(body)

        result = await self.request(
            "Messages.json",
            "POST",
            {
                "From": self.credentials.phone_number,
                "To": to,
                "Body": body,
            },
        )
        return MessageResponse.from_payload(result)


def get_client(timeout: float | None = DEFAULT_TIMEOUT) -> TwilioClient:
    return TwilioClient(get_credentials(), timeout=timeout)


async def call_api(
    path: str,
    method: HttpMethod = "GET",
    params: Mapping[str, ParamValue] | None = None,
) -> Any:
    return await get_client().request(path, method, params)


async def send_sms(to: str, message: str) -> MessageResponse:
    """Send an SMS using the credentials from the environment."""
    return await get_client().send_sms(to, message)
