from __future__ import annotations

import argparse
import asyncio
import json
import logging
import sys

from .client import DEFAULT_TIMEOUT, TwilioClient
from .config import get_credentials
from .errors import MissingConfiguration, TwilioLiteError


def configure_logging(verbose: bool) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.INFO,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    # httpx logs full request URLs, which include the account SID
    logging.getLogger("httpx").setLevel(logging.WARNING)
    logging.getLogger("httpcore").setLevel(logging.WARNING)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="twilio-lite-send",
        description="Send an SMS through the Twilio REST API.",
    )
    parser.add_argument("to", type=str, help="recipient in E.164 format, e.g. +15551234567")
    parser.add_argument("message", type=str)
    parser.add_argument("--timeout", type=float, default=DEFAULT_TIMEOUT)
    parser.add_argument("-v", "--verbose", action="store_true")
    return parser


def main(argv: list[str] | None = None) -> int:
    args = build_parser().parse_args(argv)
    configure_logging(args.verbose)

    # Credentials are required before anything else happens.
    try:
        credentials = get_credentials()
    except MissingConfiguration as exc:
        print(f"Error: {exc}", file=sys.stderr)
        return 2

    client = TwilioClient(credentials, timeout=args.timeout)
    try:
        result = asyncio.run(client.send_sms(args.to, args.message))
    except TwilioLiteError as exc:
        print(f"Error: {exc}", file=sys.stderr)
        return 1

    if args.verbose:
        print(json.dumps(result.model_dump(mode="json", by_alias=True), indent=2))
    else:
        print(f"Sent {result.sid} ({result.status})")
    return 0


if __name__ == "__main__":
    sys.exit(main())
