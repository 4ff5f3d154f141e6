from typing import Optional

from date_tz.domain.models import ResolvedOffset, WallClockFields
from date_tz.ports.zone_database import ZoneDatabasePort


class UnavailableZoneDatabase(ZoneDatabasePort):
    """Zone database that never loads; forces static-table resolution."""

    def __init__(self) -> None:
        self.attempts = 0

    @property
    def is_initialized(self) -> bool:
        return False

    def initialize(self, raise_on_failure: bool = False, force: bool = False) -> bool:
        self.attempts += 1
        if raise_on_failure:
            raise RuntimeError("Failed to initialise timezone database: database disabled")
        return False

    def offset_at(self, zone: str, instant_ms: int) -> Optional[ResolvedOffset]:
        return None

    def instant_for(self, zone: str, fields: WallClockFields) -> Optional[int]:
        return None
