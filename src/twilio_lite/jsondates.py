from __future__ import annotations

import json
import logging
import re
from datetime import UTC, datetime
from email.utils import parsedate_to_datetime
from typing import Any, Final

logger = logging.getLogger(__name__)

# Keys such as `date_created`, `created_at` or `createdAt`
DATE_KEY_RE: Final[re.Pattern[str]] = re.compile(r"(^date_)|(_at\Z)|([a-z]At\Z)")


def is_date_key(key: str) -> bool:
    return DATE_KEY_RE.search(key) is not None


def parse_datetime(text: str) -> datetime | None:
    """
    Parse an RFC 2822 or ISO-8601 timestamp.

    Twilio sends `date_created` and friends as RFC 2822
    ("Wed, 18 Aug 2010 20:01:40 +0000"); other endpoints use ISO-8601.
    Naive values are taken as UTC. Returns None if neither format matches.
    """
    value = text.strip()
    parsed: datetime | None = None

    try:
        parsed = parsedate_to_datetime(value)
    except (TypeError, ValueError, IndexError):
        try:
            parsed = datetime.fromisoformat(value)
        except ValueError:
            logger.warning("Could not parse date value %r", text)
            return None

    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=UTC)
    return parsed


def revive_dates(node: Any) -> Any:
    """
    Walk a decoded JSON tree and turn date-like string fields into datetimes.

    Only keys are matched; string values that merely look like date keys are
    left alone. Returns a new tree.
    """
    if isinstance(node, dict):
        out: dict[str, Any] = {}
        for key, value in node.items():
            if isinstance(value, str) and is_date_key(key):
                out[key] = parse_datetime(value)
            else:
                out[key] = revive_dates(value)
        return out
    if isinstance(node, list):
        return [revive_dates(item) for item in node]
    return node


def loads(text: str | bytes) -> Any:
    """
    Decode JSON and revive date fields.

    Raises json.JSONDecodeError on malformed input.
    """
    return revive_dates(json.loads(text))
