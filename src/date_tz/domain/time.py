from __future__ import annotations

from datetime import datetime, timedelta, timezone

from pydantic import BaseModel, ConfigDict, Field, model_validator

MS_PER_MINUTE = 60_000

EPOCH = datetime(1970, 1, 1, tzinfo=timezone.utc)


def strip_seconds(milliseconds: int) -> int:
    """Truncates epoch milliseconds to the start of their minute."""
    return milliseconds - milliseconds % MS_PER_MINUTE


def to_utc_datetime(milliseconds: int) -> datetime:
    return EPOCH + timedelta(milliseconds=milliseconds)


def to_milliseconds(moment: datetime) -> int:
    if moment.tzinfo is None:
        moment = moment.replace(tzinfo=timezone.utc)
    return (moment - EPOCH) // timedelta(milliseconds=1)


class Instant(BaseModel):
    """Represents a minute-aligned point in time as epoch milliseconds (UTC)."""

    value: int = Field(alias="ms")
    model_config = ConfigDict(populate_by_name=True, frozen=True)

    @model_validator(mode="after")
    def _truncate_to_minute(self) -> "Instant":
        object.__setattr__(self, "value", strip_seconds(self.value))
        return self

    @classmethod
    def utc_now(cls) -> "Instant":
        return cls(ms=to_milliseconds(datetime.now(timezone.utc)))

    @classmethod
    def from_datetime(cls, moment: datetime) -> "Instant":
        return cls(ms=to_milliseconds(moment))

    def to_datetime(self) -> datetime:
        return to_utc_datetime(self.value)
