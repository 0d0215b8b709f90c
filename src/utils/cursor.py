"""Opaque pagination cursors for newest-first message listing.

A cursor is the position of the last item a client has already seen,
``(created_at, id)``, serialized as ``"<ISO-8601 timestamp>|<id>"`` and
wrapped in URL-safe base64. Nothing outside this module should build or
parse the token format.
"""

import base64
import binascii
import re
from dataclasses import dataclass
from datetime import datetime, timezone

DELIMITER = "|"
MAX_TOKEN_LENGTH = 512

# Conservative ASCII token: uuid, cuid, hex and short test ids all fit.
# Ids end up inside PostgREST filter strings, so nothing outside this set
# may pass.
_ID_RE = re.compile(r"[A-Za-z0-9][A-Za-z0-9_-]{1,63}")
_TOKEN_RE = re.compile(r"[A-Za-z0-9_-]+={0,2}")


class InvalidCursorError(ValueError):
    """Raised when a cursor token fails encoding, structural or semantic checks."""


@dataclass(frozen=True)
class Cursor:
    created_at: datetime
    id: str


def format_timestamp(value: datetime) -> str:
    """Render an aware datetime as UTC ISO-8601 with microseconds."""
    if value.tzinfo is None:
        raise ValueError("cursor timestamps must be timezone-aware")
    return value.astimezone(timezone.utc).isoformat(timespec="microseconds")


def encode_cursor(created_at: datetime, message_id: str) -> str:
    payload = f"{format_timestamp(created_at)}{DELIMITER}{message_id}"
    return base64.urlsafe_b64encode(payload.encode("utf-8")).decode("ascii")


def decode_cursor(token: str) -> Cursor:
    """Decode a token produced by :func:`encode_cursor`.

    Raises:
        InvalidCursorError: if the token is too long or not base64, does
            not hold exactly ``timestamp|id``, the timestamp is not an aware
            ISO-8601 instant representable in UTC, or the id falls outside
            the allowed charset/length.
    """
    if not isinstance(token, str) or not token.strip():
        raise InvalidCursorError("Invalid cursor")

    token = token.strip()
    if len(token) > MAX_TOKEN_LENGTH or not _TOKEN_RE.fullmatch(token):
        raise InvalidCursorError("Invalid cursor")

    try:
        payload = base64.urlsafe_b64decode(token).decode("utf-8")
    except (binascii.Error, UnicodeDecodeError):
        raise InvalidCursorError("Invalid cursor") from None

    parts = payload.split(DELIMITER)
    if len(parts) != 2:
        raise InvalidCursorError("Invalid cursor")
    iso, message_id = parts

    try:
        created_at = datetime.fromisoformat(iso)
        if created_at.tzinfo is None:
            raise InvalidCursorError("Invalid cursor")
        # Offsets at the calendar edges overflow when shifted to UTC
        created_at = created_at.astimezone(timezone.utc)
    except (ValueError, OverflowError):
        raise InvalidCursorError("Invalid cursor") from None

    if not _ID_RE.fullmatch(message_id):
        raise InvalidCursorError("Invalid cursor")

    return Cursor(created_at=created_at, id=message_id)
