"""
Forecast aggregation — collapse 3-hour forecast samples into one record per
local calendar day, plus location-local time formatting.

Local time is always computed as UTC fields of `timestamp + offset`, so the
host machine's timezone never leaks into the output.
"""

from datetime import datetime, timezone
from typing import Iterable, Optional

from models import DailyForecast, ForecastSample

DAY_NAMES = ["Monday", "Tuesday", "Wednesday", "Thursday", "Friday", "Saturday", "Sunday"]
NOON = 12


def _local(timestamp: int, offset: Optional[int]) -> datetime:
    return datetime.fromtimestamp(timestamp + (offset or 0), tz=timezone.utc)


def format_local_time(timestamp: int, offset: Optional[int] = 0) -> str:
    """'Monday 01:00': full weekday plus 24-hour HH:MM at the location."""
    local = _local(timestamp, offset)
    return f"{DAY_NAMES[local.weekday()]} {local.hour:02d}:{local.minute:02d}"


def format_day(timestamp: int, offset: Optional[int] = 0) -> str:
    """Short weekday name ('Mon') at the location."""
    return DAY_NAMES[_local(timestamp, offset).weekday()][:3]


def local_date_key(timestamp: int, offset: Optional[int] = 0) -> str:
    return _local(timestamp, offset).strftime("%Y-%m-%d")


def local_hour(timestamp: int, offset: Optional[int] = 0) -> int:
    return _local(timestamp, offset).hour


class _DayGroup:
    """Running extrema plus the sample closest to noon for one local day."""

    def __init__(self, sample: ForecastSample, hour: int):
        self.temp_min = sample.temp_min
        self.temp_max = sample.temp_max
        self.representative = sample
        self.score = abs(hour - NOON)

    def add(self, sample: ForecastSample, hour: int):
        self.temp_min = min(self.temp_min, sample.temp_min)
        self.temp_max = max(self.temp_max, sample.temp_max)
        score = abs(hour - NOON)
        # Strictly closer only: on a tie the earlier sample wins.
        if score < self.score:
            self.score = score
            self.representative = sample

    def to_daily(self, date_key: str) -> DailyForecast:
        rep = self.representative
        return DailyForecast(
            date_key=date_key,
            timestamp=rep.timestamp,
            temp_min=min(self.temp_min, self.temp_max),
            temp_max=max(self.temp_min, self.temp_max),
            icon=rep.icon,
            description=rep.description,
        )


def aggregate_daily(
    samples: Iterable[ForecastSample],
    offset: Optional[int] = 0,
    days: int = 5,
) -> list[DailyForecast]:
    """
    Group samples by local date and summarise each day.

    The earliest day is treated as "today" (covered by current conditions)
    and dropped; at most `days` following days are returned, oldest first.
    Fewer distinct days simply yields a shorter list.
    """
    groups: dict[str, _DayGroup] = {}
    for sample in samples:
        key = local_date_key(sample.timestamp, offset)
        hour = local_hour(sample.timestamp, offset)
        group = groups.get(key)
        if group is None:
            groups[key] = _DayGroup(sample, hour)
        else:
            group.add(sample, hour)

    keys = sorted(groups)[1:1 + max(days, 0)]
    return [groups[k].to_daily(k) for k in keys]
