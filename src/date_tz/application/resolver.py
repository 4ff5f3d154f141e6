from __future__ import annotations

import logging
from typing import Optional

from date_tz.domain.arithmetic import normalized_datetime
from date_tz.domain.errors import InvalidArgumentError
from date_tz.domain.models import OffsetRecord, ResolvedOffset, WallClockFields
from date_tz.domain.time import to_milliseconds
from date_tz.ports.locale import MonthNamePort
from date_tz.ports.offsets import OffsetTablePort
from date_tz.ports.zone_database import ZoneDatabasePort


class OffsetResolver:
    """Resolves zone offsets, preferring the zone database over the static table."""

    def __init__(
        self,
        table: OffsetTablePort,
        database: ZoneDatabasePort,
        month_names: Optional[MonthNamePort] = None,
    ) -> None:
        self.table = table
        self.database = database
        self.month_names = month_names
        self.logger = logging.getLogger(__name__)

    def offset_record(self, zone: str) -> OffsetRecord:
        record = self.table.get(zone)
        if record is None:
            raise InvalidArgumentError(f"Invalid timezone: {zone}")
        return record

    def validate(self, zone: str) -> str:
        self.offset_record(zone)
        return zone

    def _lookup_offset(self, zone: str, instant_ms: int) -> Optional[ResolvedOffset]:
        try:
            return self.database.offset_at(zone, instant_ms)
        except Exception as e:
            self.logger.debug(f"Zone database offset lookup failed for {zone}: {e}")
            return None

    def _lookup_instant(self, zone: str, fields: WallClockFields) -> Optional[int]:
        try:
            return self.database.instant_for(zone, fields)
        except Exception as e:
            self.logger.debug(f"Zone database instant lookup failed for {zone}: {e}")
            return None

    def resolve(self, zone: str, instant_ms: int) -> ResolvedOffset:
        record = self.offset_record(zone)
        if not record.observes_dst:
            return ResolvedOffset(offset_seconds=record.standard_offset_seconds, is_dst=False)

        resolved = self._lookup_offset(zone, instant_ms)
        if resolved is not None:
            return resolved

        self.logger.debug("Zone database could not resolve %s at %d; using standard offset", zone, instant_ms)
        return ResolvedOffset(offset_seconds=record.standard_offset_seconds, is_dst=False)

    def resolve_instant(self, zone: str, fields: WallClockFields) -> int:
        """Converts local wall-clock fields in ``zone`` to epoch milliseconds.

        Without the zone database the instant is computed with the standard
        offset and shifted by the DST delta when that candidate instant turns
        out to be in DST. Near a transition this guess can be off by the delta.
        """
        record = self.offset_record(zone)

        instant = self._lookup_instant(zone, fields)
        if instant is not None:
            return instant

        utc = normalized_datetime(fields.year, fields.month, fields.day, fields.hour, fields.minute, fields.second)
        candidate = to_milliseconds(utc) - record.standard_offset_seconds * 1000
        if record.observes_dst and self.resolve(zone, candidate).is_dst:
            self.logger.debug("Applying DST correction of %ds for %s", record.dst_delta_seconds, zone)
            return candidate - record.dst_delta_seconds * 1000
        return candidate
