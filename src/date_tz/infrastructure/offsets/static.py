from __future__ import annotations

from typing import Dict, Iterable, Mapping, Optional, Tuple

from date_tz.domain.models import OffsetRecord
from date_tz.ports.offsets import OffsetTablePort


class StaticOffsetTable(OffsetTablePort):
    def __init__(self, records: Mapping[str, OffsetRecord]) -> None:
        self._records: Dict[str, OffsetRecord] = dict(records)

    @classmethod
    def from_offsets(cls, offsets: Mapping[str, Tuple[int, int]]) -> "StaticOffsetTable":
        return cls({zone: OffsetRecord(sdt=sdt, dst=dst) for zone, (sdt, dst) in offsets.items()})

    @classmethod
    def bundled(cls) -> "StaticOffsetTable":
        """Table built from the generated offsets shipped with the package."""
        from date_tz.infrastructure.offsets.data import OFFSETS

        return cls.from_offsets(OFFSETS)

    def get(self, zone: str) -> Optional[OffsetRecord]:
        return self._records.get(zone)

    def zones(self) -> Iterable[str]:
        return list(self._records)

    def __len__(self) -> int:
        return len(self._records)
