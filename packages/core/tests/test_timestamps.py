from __future__ import annotations

from datetime import datetime, timedelta, timezone
from zoneinfo import ZoneInfo

import pytest

from expiry_hooks.primitives import FrozenClock, coerce_entity_id, parse_end_timestamp


@pytest.mark.parametrize(
    ("raw", "expected"),
    [
        ("2025-03-01T18:30:00Z", datetime(2025, 3, 1, 18, 30, tzinfo=timezone.utc)),
        ("2025-03-01 18:30:00", datetime(2025, 3, 1, 18, 30, tzinfo=timezone.utc)),
        (
            "2025-03-01T18:30:00+02:00",
            datetime(2025, 3, 1, 16, 30, tzinfo=timezone.utc),
        ),
        ("2025-03-01", datetime(2025, 3, 1, tzinfo=timezone.utc)),
        ("@0", datetime(1970, 1, 1, tzinfo=timezone.utc)),
        (
            "  2025-03-01T18:30:00.750Z ",
            datetime(2025, 3, 1, 18, 30, tzinfo=timezone.utc),
        ),
    ],
)
def test_parse_end_timestamp_valid(raw: str, expected: datetime) -> None:
    assert parse_end_timestamp(raw) == expected


@pytest.mark.parametrize(
    "raw",
    [None, "", "   ", "not-a-date", "2025-13-40", 1735689600, b"2025-01-01"],
)
def test_parse_end_timestamp_invalid_returns_none(raw: object) -> None:
    assert parse_end_timestamp(raw) is None


def test_parse_end_timestamp_naive_uses_default_tz() -> None:
    parsed = parse_end_timestamp(
        "2025-07-01 12:00:00", default_tz=ZoneInfo("Europe/Berlin")
    )
    assert parsed == datetime(2025, 7, 1, 10, 0, tzinfo=timezone.utc)
    assert parsed.tzinfo is timezone.utc


@pytest.mark.parametrize(
    ("value", "expected"),
    [(42, 42), ("42", 42), (b"42", 42), (" 7 ", 7), (0, None), (-3, None),
     ("-3", None), (True, None), ("abc", None), (None, None), (4.0, 4)],
)
def test_coerce_entity_id(value: object, expected: int | None) -> None:
    assert coerce_entity_id(value) == expected


def test_frozen_clock_advance_and_set() -> None:
    clock = FrozenClock(datetime(2025, 1, 1))
    assert clock().tzinfo is timezone.utc

    clock.advance(seconds=301)
    assert clock() == datetime(2025, 1, 1, 0, 5, 1, tzinfo=timezone.utc)

    clock.advance(timedelta(days=1))
    assert clock().day == 2

    clock.set(datetime(2030, 1, 1, tzinfo=timezone.utc))
    assert clock().year == 2030
