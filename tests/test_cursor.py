"""Tests for the pagination cursor codec."""

import base64
from datetime import datetime, timedelta, timezone

import pytest

from src.utils.cursor import MAX_TOKEN_LENGTH, Cursor, InvalidCursorError, decode_cursor, encode_cursor

NOW = datetime(2025, 9, 6, 12, 0, 0, tzinfo=timezone.utc)


def _b64(text: str) -> str:
    return base64.urlsafe_b64encode(text.encode()).decode()


@pytest.mark.parametrize(
    "created_at, message_id",
    [
        (NOW, "cuid_abc123XYZ"),
        (NOW.replace(microsecond=123456), "m1"),
        (datetime(1999, 12, 31, 23, 59, 59, 999999, tzinfo=timezone.utc), "3f1c2a9e-0d4b-4c55-9a57-0f2d1d6e7b80"),
        (NOW.astimezone(timezone(timedelta(hours=8))), "a" * 64),
    ],
)
def test_round_trip(created_at, message_id):
    decoded = decode_cursor(encode_cursor(created_at, message_id))
    assert decoded == Cursor(created_at=created_at, id=message_id)
    assert decoded.created_at.utcoffset() == timedelta(0)


def test_token_is_url_safe():
    token = encode_cursor(NOW, "id-with_dash-and-underscore")
    assert set(token) <= set("ABCDEFGHIJKLMNOPQRSTUVWXYZabcdefghijklmnopqrstuvwxyz0123456789-_=")


def test_encode_rejects_naive_timestamps():
    with pytest.raises(ValueError):
        encode_cursor(datetime(2025, 9, 6, 12, 0, 0), "m1")


@pytest.mark.parametrize("token", ["", "   ", "???", "not-base64!!", "abc", "@@@@"])
def test_rejects_malformed_base64(token):
    with pytest.raises(InvalidCursorError):
        decode_cursor(token)


def test_rejects_non_utf8_payload():
    token = base64.urlsafe_b64encode(b"\xff\xfe\xfd|m1").decode()
    with pytest.raises(InvalidCursorError):
        decode_cursor(token)


@pytest.mark.parametrize("payload", ["only-one-part", f"{NOW.isoformat()}|m1|extra", "a|b|c|d"])
def test_rejects_wrong_part_count(payload):
    with pytest.raises(InvalidCursorError):
        decode_cursor(_b64(payload))


@pytest.mark.parametrize(
    "timestamp",
    [
        "not-a-date",
        "2025-13-01T00:00:00+00:00",
        "2025-09-06T12:00:00",
        "0001-01-01T00:00:00+05:00",
        "9999-12-31T23:59:59-05:00",
    ],
)
def test_rejects_invalid_or_naive_timestamp(timestamp):
    with pytest.raises(InvalidCursorError):
        decode_cursor(_b64(f"{timestamp}|cuid_abc123XYZ"))


@pytest.mark.parametrize("bad_id", ["a", "a" * 65, "_leading", "-leading", "has space", "semi;colon", "x,y", ""])
def test_rejects_id_outside_allow_list(bad_id):
    with pytest.raises(InvalidCursorError):
        decode_cursor(_b64(f"{NOW.isoformat()}|{bad_id}"))


def test_invalid_cursor_is_a_value_error():
    assert issubclass(InvalidCursorError, ValueError)


def test_rejects_overlong_token():
    token = encode_cursor(NOW, "m1")
    padded = token.rstrip("=") + "A" * (MAX_TOKEN_LENGTH - len(token.rstrip("=")) + 4)
    with pytest.raises(InvalidCursorError):
        decode_cursor(padded)


def test_accepts_calendar_edge_in_utc():
    edge = datetime(9999, 12, 31, 23, 59, 59, tzinfo=timezone.utc)
    assert decode_cursor(encode_cursor(edge, "m1")).created_at == edge
