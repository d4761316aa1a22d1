"""
Minimal Twilio SMS client.

Credentials come from TWILIO_SID, TWILIO_AUTH_TOKEN and TWILIO_PHONE_NUMBER;
a `.env` file in the working directory is loaded into the environment first.
"""

from dotenv import load_dotenv

load_dotenv()

from .auth import encode_basic_auth  # noqa: E402
from .client import (  # noqa: E402
    PHONE_NUMBER_E164_RE,
    TwilioClient,
    call_api,
    send_sms,
)
from .config import TwilioCredentials, get_credentials, load_credentials  # noqa: E402
from .encoding import from_base64, to_base64  # noqa: E402
from .errors import (  # noqa: E402
    ApiError,
    DecodeError,
    InvalidCredentialFormat,
    InvalidPhoneNumber,
    MessageTooLong,
    MissingConfiguration,
    TwilioLiteError,
)
from .models import MessageResponse  # noqa: E402

__all__ = [
    "ApiError",
    "DecodeError",
    "InvalidCredentialFormat",
    "InvalidPhoneNumber",
    "MessageResponse",
    "MessageTooLong",
    "MissingConfiguration",
    "PHONE_NUMBER_E164_RE",
    "TwilioClient",
    "TwilioCredentials",
    "TwilioLiteError",
    "call_api",
    "encode_basic_auth",
    "from_base64",
    "get_credentials",
    "load_credentials",
    "send_sms",
    "to_base64",
]

__version__ = "0.1.0"
