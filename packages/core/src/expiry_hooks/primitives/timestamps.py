"""Parsing of raw end-timestamp metadata and tracked-set entries."""

from __future__ import annotations

import re
from datetime import datetime, timezone, tzinfo
from typing import Any

_EPOCH_RE = re.compile(r"^@(-?\d+)$")


def parse_end_timestamp(
    raw: Any, *, default_tz: tzinfo = timezone.utc
) -> datetime | None:
    """Convert an end-timestamp metadata value into an aware UTC datetime.

    Accepts ISO-8601 strings (``T`` or space separator, optional ``Z`` or
    numeric offset, date-only) and ``@<unix-epoch>``. Naive values are read
    in ``default_tz``. Anything else yields ``None``; this never raises.

    The result is truncated to whole seconds.
    """
    if not isinstance(raw, str):
        return None
    value = raw.strip()
    if not value:
        return None

    epoch = _EPOCH_RE.match(value)
    if epoch:
        try:
            return datetime.fromtimestamp(int(epoch.group(1)), tz=timezone.utc)
        except (OverflowError, OSError, ValueError):
            return None

    if value.endswith(("Z", "z")):
        value = value[:-1] + "+00:00"

    try:
        parsed = datetime.fromisoformat(value)
    except ValueError:
        return None

    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=default_tz)
    return parsed.astimezone(timezone.utc).replace(microsecond=0)


def coerce_entity_id(value: Any) -> int | None:
    """Coerce a raw tracked-set entry to a positive entity id.

    Durable stores hand back whatever was written (ints, numeric strings,
    bytes from Redis). Booleans, non-numeric values and ids ``<= 0`` are
    rejected.
    """
    if isinstance(value, bool):
        return None
    if isinstance(value, bytes):
        value = value.decode("utf-8", errors="ignore")
    if isinstance(value, str):
        value = value.strip()
        if not value.lstrip("-").isdigit():
            return None
    try:
        entity_id = int(value)
    except (TypeError, ValueError):
        return None
    return entity_id if entity_id > 0 else None
