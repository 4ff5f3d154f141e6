from typing import Optional

from date_tz.domain.models import ResolvedOffset, WallClockFields


class ZoneDatabasePort:
    """Authoritative timezone database that may or may not be loadable.

    Lookups never raise: a ``None`` result tells the caller to fall back to
    the static offset table.
    """

    @property
    def is_initialized(self) -> bool:
        raise NotImplementedError

    def initialize(self, raise_on_failure: bool = False, force: bool = False) -> bool:
        raise NotImplementedError

    def offset_at(self, zone: str, instant_ms: int) -> Optional[ResolvedOffset]:
        raise NotImplementedError

    def instant_for(self, zone: str, fields: WallClockFields) -> Optional[int]:
        raise NotImplementedError
