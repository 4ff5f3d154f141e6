from __future__ import annotations

import logging
from datetime import timedelta
from typing import Dict, Optional
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

from date_tz.domain.arithmetic import normalized_datetime
from date_tz.domain.models import ResolvedOffset, WallClockFields
from date_tz.domain.time import to_milliseconds, to_utc_datetime
from date_tz.ports.zone_database import ZoneDatabasePort

logger = logging.getLogger(__name__)

LOOKUP_ERRORS = (ZoneInfoNotFoundError, ValueError, OverflowError, OSError)


class ZoneInfoDatabase(ZoneDatabasePort):
    """Zone database backed by ``zoneinfo`` and the ``tzdata`` package.

    Loading happens once, either eagerly through ``initialize`` or lazily on
    the first lookup. A failed load is remembered: later lookups return
    ``None`` straight away until ``initialize(force=True)`` is called.
    """

    def __init__(self, reference_zone: str = "Europe/London") -> None:
        self.reference_zone = reference_zone
        self._initialized = False
        self._attempted = False
        self._zones: Dict[str, ZoneInfo] = {}

    @property
    def is_initialized(self) -> bool:
        return self._initialized

    @property
    def attempted(self) -> bool:
        return self._attempted

    def initialize(self, raise_on_failure: bool = False, force: bool = False) -> bool:
        if self._attempted and not force:
            return self._initialized
        try:
            self._zones = {self.reference_zone: ZoneInfo(self.reference_zone)}
            self._initialized = True
            logger.info(f"Loaded timezone database (reference zone {self.reference_zone})")
        except LOOKUP_ERRORS as e:
            self._initialized = False
            logger.warning(f"Timezone database unavailable, falling back to static offsets: {e}")
            if raise_on_failure:
                raise RuntimeError(f"Failed to initialise timezone database: {e}") from e
        finally:
            self._attempted = True
        return self._initialized

    def _ensure_initialized(self) -> bool:
        if not self._attempted:
            self.initialize()
        return self._initialized

    def _zone(self, zone: str) -> ZoneInfo:
        info = self._zones.get(zone)
        if info is None:
            info = ZoneInfo(zone)
            self._zones[zone] = info
        return info

    def offset_at(self, zone: str, instant_ms: int) -> Optional[ResolvedOffset]:
        if not self._ensure_initialized():
            return None
        try:
            local = to_utc_datetime(instant_ms).astimezone(self._zone(zone))
            offset = local.utcoffset() or timedelta(0)
            dst = local.dst() or timedelta(0)
        except LOOKUP_ERRORS as e:
            logger.debug(f"Offset lookup failed for {zone} at {instant_ms}: {e}")
            return None
        return ResolvedOffset(offset_seconds=int(offset.total_seconds()), is_dst=dst != timedelta(0))

    def instant_for(self, zone: str, fields: WallClockFields) -> Optional[int]:
        """Epoch milliseconds of local ``fields`` in ``zone``.

        Skipped local times use the offset in force before the transition and
        repeated local times resolve to their first occurrence (``fold=0``).
        """
        if not self._ensure_initialized():
            return None
        try:
            local = normalized_datetime(
                fields.year, fields.month, fields.day, fields.hour, fields.minute, fields.second
            ).replace(tzinfo=self._zone(zone), fold=0)
            return to_milliseconds(local)
        except LOOKUP_ERRORS as e:
            logger.debug(f"Instant lookup failed for {zone} {fields}: {e}")
            return None
