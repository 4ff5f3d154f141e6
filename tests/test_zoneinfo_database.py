import pytest

from date_tz import DateTz, OffsetResolver, StaticOffsetTable, UnavailableZoneDatabase, ZoneInfoDatabase
from date_tz.domain.models import ResolvedOffset, WallClockFields

# 2021-03-28 00:30 UTC, 01:30 in Rome, half an hour before the spring-forward gap.
BEFORE_SPRING_FORWARD = 1616891400000
# 2021-07-01 00:00 UTC
SUMMER_MS = 1625097600000


@pytest.fixture
def database() -> ZoneInfoDatabase:
    return ZoneInfoDatabase()


@pytest.fixture
def resolver(database) -> OffsetResolver:
    return OffsetResolver(table=StaticOffsetTable.bundled(), database=database)


def test_lazy_initialization_happens_on_first_lookup(database):
    assert database.attempted is False

    database.offset_at("Europe/Rome", SUMMER_MS)

    assert database.attempted is True
    assert database.is_initialized is True


def test_eager_and_lazy_initialization_agree():
    eager = ZoneInfoDatabase()
    eager.initialize()
    lazy = ZoneInfoDatabase()

    assert eager.offset_at("Europe/Rome", SUMMER_MS) == lazy.offset_at("Europe/Rome", SUMMER_MS)


def test_offset_at_reports_dst(database):
    assert database.offset_at("Europe/Rome", SUMMER_MS) == ResolvedOffset(offset_seconds=7200, is_dst=True)
    assert database.offset_at("Europe/Rome", 1609459200000) == ResolvedOffset(offset_seconds=3600, is_dst=False)


def test_unknown_zone_lookup_returns_none(database):
    assert database.offset_at("Nowhere/Land", SUMMER_MS) is None
    assert database.instant_for("Nowhere/Land", WallClockFields(year=2021)) is None


def test_failed_initialization_is_remembered():
    database = ZoneInfoDatabase(reference_zone="Nowhere/Land")

    assert database.initialize() is False
    assert database.attempted is True
    # No retry on lookups after a failed load.
    assert database.offset_at("Europe/Rome", SUMMER_MS) is None

    database.reference_zone = "Europe/Rome"
    assert database.offset_at("Europe/Rome", SUMMER_MS) is None
    assert database.initialize(force=True) is True
    assert database.offset_at("Europe/Rome", SUMMER_MS) is not None


def test_failed_initialization_can_raise():
    database = ZoneInfoDatabase(reference_zone="Nowhere/Land")
    with pytest.raises(RuntimeError, match="Failed to initialise timezone database"):
        database.initialize(raise_on_failure=True)


def test_instant_for_summer_wall_clock(database):
    assert database.instant_for("Europe/Rome", WallClockFields(year=2021, month=7, day=1, hour=2)) == SUMMER_MS


def test_instant_for_skipped_hour_uses_offset_before_transition(database):
    # 02:30 does not exist in Rome on 2021-03-28; it resolves as 02:30 CET.
    fields = WallClockFields(year=2021, month=3, day=28, hour=2, minute=30)
    assert database.instant_for("Europe/Rome", fields) == BEFORE_SPRING_FORWARD + 3600000


def test_instant_for_repeated_hour_picks_first_occurrence(database):
    # 02:30 happens twice in Rome on 2021-10-31; the first is 00:30 UTC.
    fields = WallClockFields(year=2021, month=10, day=31, hour=2, minute=30)
    assert database.instant_for("Europe/Rome", fields) == 1635640200000


def test_dst_skip_advances_wall_clock_by_two_hours(resolver):
    value = DateTz(BEFORE_SPRING_FORWARD, "Europe/Rome", resolver=resolver)
    assert value.format("HH:mm") == "01:30"

    value.add(1, "hour")

    assert value.format("HH:mm") == "03:30"
    assert value.is_dst is True


def test_round_trip_through_database_in_summer(resolver):
    value = DateTz(SUMMER_MS + 754 * 60000, "America/New_York", resolver=resolver)
    text = value.format("YYYY-MM-DD hh:mm AA")
    assert DateTz.parse(text, "YYYY-MM-DD hh:mm AA", "America/New_York", resolver=resolver).timestamp == value.timestamp


def test_unavailable_database_counts_attempts():
    database = UnavailableZoneDatabase()
    assert database.initialize() is False
    with pytest.raises(RuntimeError):
        database.initialize(raise_on_failure=True)
    assert database.attempts == 2
    assert database.offset_at("Europe/Rome", SUMMER_MS) is None
