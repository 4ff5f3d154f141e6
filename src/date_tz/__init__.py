from .domain.date_tz import DateTz
from .domain.errors import DateFormatError, InvalidArgumentError
from .domain.models import DateTzFields, OffsetRecord, ResolvedOffset, TimeUnit, WallClockFields
from .application.resolver import OffsetResolver
from .adapters.tzdb.database import ZoneInfoDatabase
from .adapters.tzdb.unavailable import UnavailableZoneDatabase
from .infrastructure.offsets.static import StaticOffsetTable
from .infrastructure.locale.in_memory import InMemoryMonthNames
from .config import DateTzSettings, configure, get_default_resolver, set_default_resolver

__all__ = [
    "DateTz",
    "DateFormatError",
    "InvalidArgumentError",
    "DateTzFields",
    "OffsetRecord",
    "ResolvedOffset",
    "TimeUnit",
    "WallClockFields",
    "OffsetResolver",
    "ZoneInfoDatabase",
    "UnavailableZoneDatabase",
    "StaticOffsetTable",
    "InMemoryMonthNames",
    "DateTzSettings",
    "configure",
    "get_default_resolver",
    "set_default_resolver",
]
