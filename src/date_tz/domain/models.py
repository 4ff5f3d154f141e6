from __future__ import annotations

from enum import Enum
from typing import Optional, Union

from pydantic import BaseModel, ConfigDict, Field, StrictFloat, StrictInt


class TimeUnit(str, Enum):
    MINUTE = "minute"
    HOUR = "hour"
    DAY = "day"
    MONTH = "month"
    YEAR = "year"


class OffsetRecord(BaseModel):
    """Standard and daylight UTC offsets of a zone, in seconds."""

    standard_offset_seconds: int = Field(alias="sdt")
    daylight_offset_seconds: int = Field(alias="dst")
    model_config = ConfigDict(populate_by_name=True, frozen=True)

    @property
    def observes_dst(self) -> bool:
        return self.standard_offset_seconds != self.daylight_offset_seconds

    @property
    def dst_delta_seconds(self) -> int:
        return self.daylight_offset_seconds - self.standard_offset_seconds


class ResolvedOffset(BaseModel):
    """The offset in force for a zone at one specific instant."""

    offset_seconds: int
    is_dst: bool = False
    model_config = ConfigDict(frozen=True)


class WallClockFields(BaseModel):
    """Local calendar fields as read from a string, before zone resolution."""

    year: int
    month: int = 1
    day: int = 1
    hour: int = 0
    minute: int = 0
    second: int = 0
    model_config = ConfigDict(frozen=True)


class DateTzFields(BaseModel):
    """Field bag accepted by ``DateTz.from_fields``."""

    timestamp: Union[StrictInt, StrictFloat]
    timezone: Optional[str] = None
