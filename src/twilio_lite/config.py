from __future__ import annotations

import os
from collections.abc import Mapping
from functools import lru_cache
from typing import Final

from pydantic import BaseModel, ConfigDict

from .errors import MissingConfiguration

API_BASE_URL: Final[str] = "https://api.twilio.com"
API_VERSION: Final[str] = "2010-04-01"

# Checked in this order; the first missing one is reported.
ENV_SID: Final[str] = "TWILIO_SID"
ENV_AUTH_TOKEN: Final[str] = "TWILIO_AUTH_TOKEN"
ENV_PHONE_NUMBER: Final[str] = "TWILIO_PHONE_NUMBER"


class TwilioCredentials(BaseModel):
    model_config = ConfigDict(frozen=True)

    account_sid: str
    auth_token: str
    # Sender number (E.164) used as `From` on outgoing messages
    phone_number: str

    def __repr__(self) -> str:
        return f"TwilioCredentials(account_sid={self.account_sid!r}, phone_number={self.phone_number!r})"

    __str__ = __repr__


def load_credentials(environ: Mapping[str, str] | None = None) -> TwilioCredentials:
    """
    Read the Twilio credentials from the environment.

    Raises MissingConfiguration naming the first variable that is absent or empty.
    """
    env = os.environ if environ is None else environ

    for name in (ENV_SID, ENV_AUTH_TOKEN, ENV_PHONE_NUMBER):
        if not env.get(name):
            raise MissingConfiguration(name)

    return TwilioCredentials(
        account_sid=env[ENV_SID],
        auth_token=env[ENV_AUTH_TOKEN],
        phone_number=env[ENV_PHONE_NUMBER],
    )


@lru_cache
def _load_once() -> TwilioCredentials | MissingConfiguration:
    # A failed load is cached too, so a missing variable stays fatal.
    try:
        return load_credentials()
    except MissingConfiguration as exc:
        return exc


def get_credentials() -> TwilioCredentials:
    """
    Credentials loaded from the environment the first time they are needed.

    The environment is never re-read, whether the first load succeeded or not.
    """
    result = _load_once()
    if isinstance(result, MissingConfiguration):
        raise result
    return result


get_credentials.cache_clear = _load_once.cache_clear  # type: ignore[attr-defined]
