from typing import Iterable, Optional

from date_tz.domain.models import OffsetRecord


class OffsetTablePort:
    """Read-only mapping from zone identifier to its standard and daylight offsets."""

    def get(self, zone: str) -> Optional[OffsetRecord]:
        raise NotImplementedError

    def zones(self) -> Iterable[str]:
        raise NotImplementedError

    def __contains__(self, zone: object) -> bool:
        return isinstance(zone, str) and self.get(zone) is not None
