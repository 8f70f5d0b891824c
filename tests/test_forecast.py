import pytest

from abilities.forecast import (
    aggregate_daily,
    format_day,
    format_local_time,
    local_date_key,
    local_hour,
)
from models import ForecastSample

from conftest import DAY, HOUR, MONDAY


def sample(ts, lo, hi=None, icon="01d", description=""):
    return ForecastSample(ts, lo, lo if hi is None else hi, icon, description)


# ── Local time ──────────────────────────────────────────────────

def test_format_local_time_applies_offset():
    assert format_local_time(MONDAY, 3600) == "Monday 01:00"


def test_format_local_time_missing_offset_is_utc():
    assert format_local_time(MONDAY, None) == "Monday 00:00"


def test_format_local_time_negative_offset_crosses_day():
    # 2024-01-01 00:00Z at UTC-5 is Sunday evening
    assert format_local_time(MONDAY, -5 * HOUR) == "Sunday 19:00"


def test_format_local_time_pads_minutes():
    assert format_local_time(MONDAY + 9 * HOUR + 5 * 60, 0) == "Monday 09:05"


def test_format_day_short_name():
    assert format_day(MONDAY + DAY, 0) == "Tue"


def test_local_date_key_and_hour():
    assert local_date_key(MONDAY + 23 * HOUR, 2 * HOUR) == "2024-01-02"
    assert local_hour(MONDAY + 23 * HOUR, 2 * HOUR) == 1


# ── Aggregation ─────────────────────────────────────────────────

def test_worked_example_drops_today():
    samples = [
        sample(MONDAY, 10),
        sample(MONDAY + 12 * HOUR, 18),
        sample(MONDAY + 21 * HOUR, 12),
        sample(MONDAY + DAY + 12 * HOUR, 20, icon="10d", description="rain"),
    ]
    days = aggregate_daily(samples, 0)

    assert len(days) == 1
    tuesday = days[0]
    assert tuesday.date_key == "2024-01-02"
    assert tuesday.temp_min == 20
    assert tuesday.temp_max == 20
    assert tuesday.timestamp == MONDAY + DAY + 12 * HOUR
    assert tuesday.icon == "10d"
    assert tuesday.description == "rain"


@pytest.mark.parametrize("distinct_days", range(1, 9))
def test_result_length_is_days_minus_one_capped(distinct_days):
    samples = [
        sample(MONDAY + d * DAY + h * HOUR, 10 + d)
        for d in range(distinct_days)
        for h in range(0, 24, 3)
    ]
    days = aggregate_daily(samples, 0)

    assert len(days) == min(distinct_days - 1, 5)
    assert [d.date_key for d in days] == sorted(d.date_key for d in days)
    if days:
        assert days[0].date_key == "2024-01-02"


def test_empty_input():
    assert aggregate_daily([], 0) == []


def test_true_daily_extrema():
    samples = [
        sample(MONDAY, 5),
        sample(MONDAY + DAY + 3 * HOUR, 8, 9),
        sample(MONDAY + DAY + 12 * HOUR, 12, 16),
        sample(MONDAY + DAY + 18 * HOUR, 6, 11),
    ]
    (tuesday,) = aggregate_daily(samples, 0)
    assert tuesday.temp_min == 6
    assert tuesday.temp_max == 16
    assert tuesday.temp_min <= tuesday.temp_max


def test_representative_closest_to_noon():
    samples = [
        sample(MONDAY, 5),
        sample(MONDAY + DAY + 14 * HOUR, 10, icon="10d"),
        sample(MONDAY + DAY + 11 * HOUR, 10, icon="01d"),
    ]
    (tuesday,) = aggregate_daily(samples, 0)
    assert tuesday.icon == "01d"


def test_representative_tie_keeps_first():
    samples = [
        sample(MONDAY, 5),
        sample(MONDAY + DAY + 9 * HOUR, 10, icon="03d"),
        sample(MONDAY + DAY + 15 * HOUR, 10, icon="11d"),
    ]
    (tuesday,) = aggregate_daily(samples, 0)
    assert tuesday.icon == "03d"


def test_grouping_uses_local_date():
    # 23:00Z Monday is already Tuesday at UTC+2, so everything is one day
    samples = [sample(MONDAY + 23 * HOUR, 5), sample(MONDAY + 26 * HOUR, 6)]
    assert aggregate_daily(samples, 2 * HOUR) == []
    assert len(aggregate_daily(samples, 0)) == 1


def test_days_limit():
    samples = [sample(MONDAY + d * DAY + 12 * HOUR, d) for d in range(6)]
    days = aggregate_daily(samples, 0, days=2)
    assert [d.date_key for d in days] == ["2024-01-02", "2024-01-03"]
