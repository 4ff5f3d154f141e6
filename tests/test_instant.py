from datetime import datetime, timedelta, timezone

from date_tz.domain.time import Instant, strip_seconds


def test_instant_truncates_to_minute():
    instant = Instant(ms=1609459245123)
    assert instant.value == 1609459200000
    assert instant.value % 60000 == 0


def test_instant_truncates_negative_values_toward_earlier_minute():
    assert strip_seconds(-1) == -60000
    assert Instant(ms=-60000).value == -60000


def test_instant_normalizes_aware_datetime_to_utc():
    aware = datetime(2025, 1, 1, 13, 30, 45, tzinfo=timezone(timedelta(hours=1)))
    instant = Instant.from_datetime(aware)
    assert instant.to_datetime().tzinfo == timezone.utc
    assert instant.to_datetime() == datetime(2025, 1, 1, 12, 30, tzinfo=timezone.utc)


def test_instant_treats_naive_datetime_as_utc():
    naive = datetime(2025, 1, 1, 12, 0, 0)
    instant = Instant.from_datetime(naive)
    assert instant.to_datetime().hour == 12


def test_utc_now_is_minute_aligned():
    assert Instant.utc_now().value % 60000 == 0
