from __future__ import annotations

from collections.abc import AsyncIterator, Callable, Iterator

import httpx
import pytest

from twilio_lite.client import TwilioClient
from twilio_lite.config import TwilioCredentials, get_credentials

Handler = Callable[[httpx.Request], httpx.Response]


@pytest.fixture
def anyio_backend() -> str:
    return "asyncio"


@pytest.fixture
def credentials() -> TwilioCredentials:
    return TwilioCredentials(
        account_sid="AC123",
        auth_token="secret-token",
        phone_number="+15550000000",
    )


@pytest.fixture(autouse=True)
def _clear_credentials_cache() -> Iterator[None]:
    get_credentials.cache_clear()
    yield
    get_credentials.cache_clear()


class RecordingTransport:
    """Wraps a handler and remembers every request it served."""

    def __init__(self, handler: Handler) -> None:
        self.handler = handler
        self.requests: list[httpx.Request] = []

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        return self.handler(request)


@pytest.fixture
async def make_client(
    anyio_backend: str, credentials: TwilioCredentials
) -> AsyncIterator[Callable[[Handler], tuple[TwilioClient, RecordingTransport]]]:
    opened: list[httpx.AsyncClient] = []

    def _make(handler: Handler) -> tuple[TwilioClient, RecordingTransport]:
        recorder = RecordingTransport(handler)
        http = httpx.AsyncClient(transport=httpx.MockTransport(recorder))
        opened.append(http)
        return TwilioClient(credentials, http_client=http), recorder

    yield _make

    for http in opened:
        await http.aclose()
