from __future__ import annotations

import math
from datetime import datetime, timedelta, timezone as dt_timezone
from functools import total_ordering
from typing import TYPE_CHECKING, ClassVar, Mapping, Optional, Union

from pydantic import ValidationError

from date_tz.domain.arithmetic import add_months, add_years, normalized_datetime
from date_tz.domain.errors import DateFormatError, InvalidArgumentError
from date_tz.domain.formatting import DEFAULT_FORMAT, render
from date_tz.domain.models import DateTzFields, OffsetRecord, ResolvedOffset, TimeUnit
from date_tz.domain.parsing import parse_fields
from date_tz.domain.time import Instant, strip_seconds, to_milliseconds, to_utc_datetime

if TYPE_CHECKING:
    from date_tz.application.resolver import OffsetResolver

UnitLike = Union[TimeUnit, str]


def _coerce_timezone(zone: Optional[str]) -> str:
    return zone if zone is not None else "UTC"


def _coerce_unit(unit: UnitLike) -> TimeUnit:
    try:
        return TimeUnit(unit)
    except ValueError:
        raise InvalidArgumentError(f"Unsupported unit: {unit}") from None


def _default_resolver() -> "OffsetResolver":
    from date_tz.config import get_default_resolver

    return get_default_resolver()


@total_ordering
class DateTz:
    """A minute-precision instant bound to a named timezone.

    The instant is stored as UTC epoch milliseconds with seconds stripped.
    Calendar arithmetic and ``set`` work on the UTC fields; formatting and
    the component accessors work on the local view of the zone. ``add``,
    ``set`` and ``convert_to_timezone`` mutate in place and return ``self``.
    """

    default_format: ClassVar[str] = DEFAULT_FORMAT

    def __init__(
        self,
        timestamp: Union[int, float],
        timezone: Optional[str] = None,
        *,
        resolver: Optional["OffsetResolver"] = None,
    ) -> None:
        if isinstance(timestamp, bool) or not isinstance(timestamp, (int, float)):
            raise InvalidArgumentError(f"Unsupported value type {type(timestamp).__name__}")
        if not math.isfinite(timestamp):
            raise InvalidArgumentError(f"Timestamp must be finite, got {timestamp}")
        self._resolver = resolver or _default_resolver()
        self._timezone = self._resolver.validate(_coerce_timezone(timezone))
        self._timestamp = Instant(ms=int(timestamp)).value
        self._offset_cache: Optional[ResolvedOffset] = None
        self._offset_cache_timestamp: Optional[int] = None

    # Construction variants ---------------------------------------------------

    @classmethod
    def from_value(
        cls,
        other: "DateTz",
        timezone: Optional[str] = None,
        *,
        resolver: Optional["OffsetResolver"] = None,
    ) -> "DateTz":
        if not isinstance(other, DateTz):
            raise InvalidArgumentError(f"Unsupported value type {type(other).__name__}")
        zone = timezone if timezone is not None else other.timezone
        return cls(other.timestamp, zone, resolver=resolver or other._resolver)

    @classmethod
    def from_fields(
        cls,
        fields: Union[DateTzFields, Mapping[str, object]],
        timezone: Optional[str] = None,
        *,
        resolver: Optional["OffsetResolver"] = None,
    ) -> "DateTz":
        if not isinstance(fields, DateTzFields):
            try:
                fields = DateTzFields.model_validate(dict(fields))
            except (ValidationError, TypeError, ValueError) as e:
                raise InvalidArgumentError("Map value must contain a numeric timestamp") from e
        zone = timezone if timezone is not None else fields.timezone
        return cls(fields.timestamp, zone, resolver=resolver)

    @classmethod
    def now(cls, timezone: Optional[str] = None, *, resolver: Optional["OffsetResolver"] = None) -> "DateTz":
        return cls(Instant.utc_now().value, timezone, resolver=resolver)

    @classmethod
    def parse(
        cls,
        value: str,
        pattern: Optional[str] = None,
        timezone: Optional[str] = None,
        *,
        resolver: Optional["OffsetResolver"] = None,
    ) -> "DateTz":
        """Builds a value from ``value`` written in ``pattern`` as local time in ``timezone``.

        Raises ``DateFormatError`` when the input does not match the pattern
        and ``InvalidArgumentError`` for an unknown zone.
        """
        resolver = resolver or _default_resolver()
        zone = resolver.validate(_coerce_timezone(timezone))
        fields = parse_fields(value, pattern if pattern is not None else cls.default_format)
        try:
            instant = resolver.resolve_instant(zone, fields)
        except InvalidArgumentError:
            raise
        except (ValueError, OverflowError) as e:
            raise DateFormatError(f"Date out of range: {value}") from e
        return cls(instant, zone, resolver=resolver)

    @classmethod
    def initialize_timezones(cls, raise_on_failure: bool = False, force: bool = True) -> bool:
        return _default_resolver().database.initialize(raise_on_failure=raise_on_failure, force=force)

    @classmethod
    def timezones_initialized(cls) -> bool:
        return _default_resolver().database.is_initialized

    # State --------------------------------------------------------------------

    @property
    def timestamp(self) -> int:
        return self._timestamp

    @property
    def timezone(self) -> str:
        return self._timezone

    @property
    def timezone_offset(self) -> OffsetRecord:
        return self._resolver.offset_record(self._timezone)

    def _store(self, moment: datetime) -> "DateTz":
        self._timestamp = strip_seconds(to_milliseconds(moment))
        self._invalidate_offset_cache()
        return self

    def _invalidate_offset_cache(self) -> None:
        self._offset_cache = None
        self._offset_cache_timestamp = None

    def _offset(self) -> ResolvedOffset:
        if self._offset_cache is not None and self._offset_cache_timestamp == self._timestamp:
            return self._offset_cache
        resolved = self._resolver.resolve(self._timezone, self._timestamp)
        self._offset_cache = resolved
        self._offset_cache_timestamp = self._timestamp
        return resolved

    def _local_datetime(self) -> datetime:
        return to_utc_datetime(self._timestamp) + timedelta(seconds=self._offset().offset_seconds)

    # Comparison ---------------------------------------------------------------

    def is_comparable(self, other: "DateTz") -> bool:
        if not isinstance(other, DateTz):
            return False
        return self._timezone == _coerce_timezone(other.timezone)

    def compare(self, other: "DateTz") -> int:
        if not self.is_comparable(other):
            raise InvalidArgumentError("Cannot compare dates with different timezones")
        return self._timestamp - other.timestamp

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, DateTz):
            return NotImplemented
        return self._timestamp == other.timestamp and self._timezone == other.timezone

    def __lt__(self, other: "DateTz") -> bool:
        if not isinstance(other, DateTz):
            return NotImplemented
        return self.compare(other) < 0

    __hash__ = None  # type: ignore[assignment]

    # Formatting ---------------------------------------------------------------

    def format(self, pattern: Optional[str] = None, locale: Optional[str] = None) -> str:
        return render(
            self._local_datetime(),
            self._timezone,
            pattern if pattern is not None else self.default_format,
            locale,
            self._resolver.month_names,
        )

    def __str__(self) -> str:
        return self.format()

    def __repr__(self) -> str:
        return f"DateTz({self._timestamp}, {self._timezone!r})"

    def to_datetime(self) -> datetime:
        """Aware datetime carrying the fixed offset in force at this instant."""
        offset = timedelta(seconds=self._offset().offset_seconds)
        return to_utc_datetime(self._timestamp).astimezone(dt_timezone(offset))

    # Mutation -----------------------------------------------------------------

    def add(self, amount: int, unit: UnitLike) -> "DateTz":
        unit = _coerce_unit(unit)
        utc = to_utc_datetime(self._timestamp)
        try:
            if unit is TimeUnit.MINUTE:
                result = utc + timedelta(minutes=amount)
            elif unit is TimeUnit.HOUR:
                result = utc + timedelta(hours=amount)
            elif unit is TimeUnit.DAY:
                result = utc + timedelta(days=amount)
            elif unit is TimeUnit.MONTH:
                result = add_months(utc, amount)
            else:
                result = add_years(utc, amount)
        except (ValueError, OverflowError) as e:
            raise InvalidArgumentError(f"Date out of range after adding {amount} {unit.value}") from e
        return self._store(result)

    def set(self, value: int, unit: UnitLike) -> "DateTz":
        unit = _coerce_unit(unit)
        utc = to_utc_datetime(self._timestamp)
        fields = {
            TimeUnit.YEAR: utc.year,
            TimeUnit.MONTH: utc.month,
            TimeUnit.DAY: utc.day,
            TimeUnit.HOUR: utc.hour,
            TimeUnit.MINUTE: utc.minute,
        }
        fields[unit] = value
        try:
            result = normalized_datetime(
                fields[TimeUnit.YEAR],
                fields[TimeUnit.MONTH],
                fields[TimeUnit.DAY],
                fields[TimeUnit.HOUR],
                fields[TimeUnit.MINUTE],
            )
        except (ValueError, OverflowError) as e:
            raise InvalidArgumentError(f"Date out of range after setting {unit.value} to {value}") from e
        return self._store(result)

    def convert_to_timezone(self, timezone: str) -> "DateTz":
        self._timezone = self._resolver.validate(_coerce_timezone(timezone))
        self._invalidate_offset_cache()
        return self

    def clone_to_timezone(self, timezone: str) -> "DateTz":
        return DateTz(self._timestamp, _coerce_timezone(timezone), resolver=self._resolver)

    # Local components ---------------------------------------------------------

    @property
    def is_dst(self) -> bool:
        return self._offset().is_dst

    @property
    def year(self) -> int:
        return self._local_datetime().year

    @property
    def month(self) -> int:
        """Zero-based month (January is 0)."""
        return self._local_datetime().month - 1

    @property
    def day(self) -> int:
        return self._local_datetime().day

    @property
    def hour(self) -> int:
        return self._local_datetime().hour

    @property
    def minute(self) -> int:
        return self._local_datetime().minute

    @property
    def day_of_week(self) -> int:
        """Zero-based day of week, Sunday is 0."""
        return self._local_datetime().isoweekday() % 7
