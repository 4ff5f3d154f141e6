from __future__ import annotations

import logging
import os
from typing import Literal, Mapping, Optional

from pydantic import BaseModel, Field

from date_tz.adapters.http.offset_table import HttpOffsetTableClient
from date_tz.adapters.tzdb.database import ZoneInfoDatabase
from date_tz.adapters.tzdb.unavailable import UnavailableZoneDatabase
from date_tz.application.resolver import OffsetResolver
from date_tz.domain.formatting import DEFAULT_FORMAT
from date_tz.infrastructure.locale.in_memory import InMemoryMonthNames
from date_tz.infrastructure.offsets.file import FileOffsetTable
from date_tz.infrastructure.offsets.static import StaticOffsetTable
from date_tz.ports.offsets import OffsetTablePort
from date_tz.ports.zone_database import ZoneDatabasePort

logger = logging.getLogger(__name__)

ENV_PREFIX = "DATE_TZ_"

TRUTHY = {"1", "true", "yes", "on"}


class DateTzSettings(BaseModel):
    """
    Process-wide configuration.

    Environment variables:
    - DATE_TZ_DEFAULT_FORMAT      (default: YYYY-MM-DD HH:mm:ss)
    - DATE_TZ_OFFSET_TABLE        JSON offset table on disk (default: bundled table)
    - DATE_TZ_OFFSET_TABLE_URL    JSON offset table over HTTP, used when no file is set
    - DATE_TZ_ZONE_DATABASE       "zoneinfo" or "none" (default: zoneinfo)
    - DATE_TZ_EAGER_INIT          load the zone database at configuration time
    """

    default_format: str = DEFAULT_FORMAT
    offset_table_path: Optional[str] = None
    offset_table_url: Optional[str] = None
    zone_database: Literal["zoneinfo", "none"] = "zoneinfo"
    eager_initialization: bool = False
    http_timeout: float = Field(default=10.0, gt=0)

    @classmethod
    def from_env(cls, environ: Optional[Mapping[str, str]] = None) -> "DateTzSettings":
        env = os.environ if environ is None else environ
        values = {
            "default_format": env.get(f"{ENV_PREFIX}DEFAULT_FORMAT"),
            "offset_table_path": env.get(f"{ENV_PREFIX}OFFSET_TABLE"),
            "offset_table_url": env.get(f"{ENV_PREFIX}OFFSET_TABLE_URL"),
            "zone_database": env.get(f"{ENV_PREFIX}ZONE_DATABASE", "").strip().lower() or None,
            "http_timeout": env.get(f"{ENV_PREFIX}HTTP_TIMEOUT"),
        }
        eager = env.get(f"{ENV_PREFIX}EAGER_INIT")
        if eager is not None:
            values["eager_initialization"] = eager.strip().lower() in TRUTHY
        return cls(**{key: value for key, value in values.items() if value is not None})


def build_offset_table(settings: DateTzSettings) -> OffsetTablePort:
    if settings.offset_table_path:
        return FileOffsetTable(settings.offset_table_path)
    if settings.offset_table_url:
        client = HttpOffsetTableClient(settings.offset_table_url, timeout=settings.http_timeout)
        try:
            return client.fetch()
        finally:
            client.close()
    return StaticOffsetTable.bundled()


def build_zone_database(settings: DateTzSettings) -> ZoneDatabasePort:
    if settings.zone_database == "none":
        return UnavailableZoneDatabase()
    return ZoneInfoDatabase()


def build_resolver(settings: Optional[DateTzSettings] = None) -> OffsetResolver:
    settings = settings or DateTzSettings()
    database = build_zone_database(settings)
    if settings.eager_initialization:
        database.initialize()
    return OffsetResolver(
        table=build_offset_table(settings),
        database=database,
        month_names=InMemoryMonthNames(),
    )


_default_resolver: Optional[OffsetResolver] = None


def get_default_resolver() -> OffsetResolver:
    global _default_resolver
    if _default_resolver is None:
        _default_resolver = build_resolver(DateTzSettings.from_env())
    return _default_resolver


def set_default_resolver(resolver: Optional[OffsetResolver]) -> None:
    """Installs ``resolver`` as the process default; ``None`` resets to a lazily built one."""
    global _default_resolver
    _default_resolver = resolver


def configure(settings: Optional[DateTzSettings] = None) -> OffsetResolver:
    from date_tz.domain.date_tz import DateTz

    settings = settings or DateTzSettings.from_env()
    resolver = build_resolver(settings)
    set_default_resolver(resolver)
    DateTz.default_format = settings.default_format
    logger.info("Configured date-tz (zone database: %s)", settings.zone_database)
    return resolver
