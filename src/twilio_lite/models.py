from __future__ import annotations

from collections.abc import Mapping
from datetime import datetime
from typing import Any, Literal

from pydantic import AliasChoices, BaseModel, ConfigDict, Field

# `read` is for WhatsApp only.
# https://www.twilio.com/docs/sms/api/message-resource#message-status-values
MessageStatus = Literal[
    "accepted",
    "queued",
    "sending",
    "sent",
    "failed",
    "delivered",
    "undelivered",
    "receiving",
    "received",
    "read",
]


class MessageResponse(BaseModel):
    """
    Twilio's Message resource, as returned when a message is created.

    Date fields arrive already revived by the JSON decoder.
    """

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    status: MessageStatus | None = None
    sid: str | None = None
    # None when no Messaging Service was used
    messaging_service_sid: str | None = None
    date_created: datetime | None = None
    date_sent: datetime | None = None
    # Set only when the status is failed or undelivered
    error_code: int | None = None
    error_message: str | None = None
    from_: str | None = Field(default=None, alias="from")
    to: str | None = None
    # Up to 1600 characters
    body: str | None = None

    @classmethod
    def from_payload(cls, payload: Mapping[str, Any]) -> MessageResponse:
        # The provider's shape is trusted; no validation here.
        data = dict(payload)
        if "from" in data:
            data["from_"] = data.pop("from")
        return cls.model_construct(**data)


class ErrorResponse(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    status: int | None = None
    message: str | None = None
    code: int | None = None
    # Twilio sends `more_info`; older clients documented `moreInfo`
    more_info: str | None = Field(
        default=None, validation_alias=AliasChoices("moreInfo", "more_info")
    )
    details: Any = None
