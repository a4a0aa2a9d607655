"""ExpiryHooksConfig — settings fixed at startup."""

from __future__ import annotations

from datetime import timedelta, timezone, tzinfo
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

from pydantic import BaseModel, ConfigDict, Field, field_validator


class ExpiryHooksConfig(BaseModel):
    """Configuration for the scheduler, cleanup chain and redundancy tracker.

    Read once when the toolkit is bootstrapped; changing it later has no
    effect on hooks that are already registered.
    """

    model_config = ConfigDict(frozen=True)

    # Only entities of this kind are scheduled, validated or tracked.
    entity_kind: str = "gatherpress_event"

    # Timer-queue hook names.
    timer_hook: str = "expiry_hooks_entity_ended_timer"
    sweep_hook: str = "expiry_hooks_validate_entities_ended"

    # Cleanup chain: "<cache_prefix>_<id>", "<cache_prefix>_upcoming", ...
    cache_prefix: str = "gatherpress"
    cache_namespace: str = "gatherpress"

    # Redundancy tracker.
    tracker_enabled: bool = False
    track_unschedulable: bool = False
    sweep_interval: timedelta = Field(default=timedelta(days=1))

    # Interpretation of end timestamps stored without an offset.
    default_timezone: str = "UTC"

    @field_validator("entity_kind", "timer_hook", "sweep_hook", "cache_prefix")
    @classmethod
    def _not_blank(cls, value: str) -> str:
        if not value.strip():
            raise ValueError("must not be blank")
        return value

    @field_validator("sweep_interval")
    @classmethod
    def _positive_interval(cls, value: timedelta) -> timedelta:
        if value <= timedelta(0):
            raise ValueError("sweep_interval must be positive")
        return value

    @field_validator("default_timezone")
    @classmethod
    def _known_timezone(cls, value: str) -> str:
        if value.upper() == "UTC":
            return "UTC"
        try:
            ZoneInfo(value)
        except (ZoneInfoNotFoundError, ValueError) as exc:
            raise ValueError(f"unknown timezone {value!r}") from exc
        return value

    @property
    def tz(self) -> tzinfo:
        if self.default_timezone == "UTC":
            return timezone.utc
        return ZoneInfo(self.default_timezone)
