from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Any, Dict, Iterable, Optional

from pydantic import ValidationError

from date_tz.domain.models import OffsetRecord
from date_tz.infrastructure.offsets.static import StaticOffsetTable
from date_tz.ports.offsets import OffsetTablePort

logger = logging.getLogger(__name__)


def records_from_json(data: Any) -> Dict[str, OffsetRecord]:
    """Builds offset records from a decoded ``{"Zone/Id": {"sdt": .., "dst": ..}}`` document.

    Entries that do not validate are skipped with a warning.
    """
    if not isinstance(data, dict):
        raise ValueError("Offset table must be a JSON object keyed by zone identifier")
    records: Dict[str, OffsetRecord] = {}
    for zone, entry in data.items():
        try:
            records[zone] = OffsetRecord.model_validate(entry)
        except ValidationError as e:
            logger.warning(f"Skipping offset table entry for {zone}: {e.error_count()} validation error(s)")
            continue
    return records


class FileOffsetTable(OffsetTablePort):
    """Offset table loaded from a generated JSON file on disk.

    The file is read once at construction; the table is read-only afterwards.
    """

    def __init__(self, storage_path: str | Path) -> None:
        self.storage_path = Path(storage_path)
        self._table = StaticOffsetTable(self._load_from_disk())

    def _load_from_disk(self) -> Dict[str, OffsetRecord]:
        try:
            with open(self.storage_path, "r") as f:
                data = json.load(f)
        except (OSError, json.JSONDecodeError) as e:
            logger.error(f"Could not load offset table from {self.storage_path}: {e}")
            raise ValueError(f"Could not load offset table from {self.storage_path}: {e}") from e
        records = records_from_json(data)
        logger.info(f"Loaded {len(records)} zones from {self.storage_path}")
        return records

    def get(self, zone: str) -> Optional[OffsetRecord]:
        return self._table.get(zone)

    def zones(self) -> Iterable[str]:
        return self._table.zones()

    def __len__(self) -> int:
        return len(self._table)
