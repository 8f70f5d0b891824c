"""
Data models for forecast samples, daily summaries, queries and current conditions.

All temperatures are stored in Celsius; conversion happens at render time.
"""

from __future__ import annotations
from dataclasses import dataclass, field, asdict
from enum import Enum
from typing import Optional


class DisplayUnit(str, Enum):
    CELSIUS = "celsius"
    FAHRENHEIT = "fahrenheit"

    @classmethod
    def parse(cls, value: str) -> DisplayUnit:
        """Accepts 'celsius'/'fahrenheit' (or 'c'/'f'), case-insensitive."""
        v = (value or "").strip().lower()
        if v in ("c", "celsius"):
            return cls.CELSIUS
        if v in ("f", "fahrenheit"):
            return cls.FAHRENHEIT
        raise ValueError(f"Unknown display unit: {value!r}")


@dataclass(frozen=True)
class ForecastSample:
    timestamp: int  # UTC seconds
    temp_min: float
    temp_max: float
    icon: Optional[str] = None  # OpenWeatherMap condition code, e.g. "10d"
    description: str = ""


@dataclass(frozen=True)
class DailyForecast:
    date_key: str  # YYYY-MM-DD, local to the queried location
    timestamp: int  # representative sample's UTC timestamp
    temp_min: float
    temp_max: float
    icon: Optional[str] = None
    description: str = ""

    def to_dict(self) -> dict:
        return asdict(self)


@dataclass(frozen=True)
class LocationQuery:
    """Either a city name or a lat/lon pair, never both."""
    city: Optional[str] = None
    lat: Optional[float] = None
    lon: Optional[float] = None

    def __post_init__(self):
        has_city = bool(self.city and self.city.strip())
        has_coords = self.lat is not None and self.lon is not None
        if has_city == has_coords:
            raise ValueError("LocationQuery needs either a city or a lat/lon pair")
        if has_coords and not (-90 <= self.lat <= 90 and -180 <= self.lon <= 180):
            raise ValueError(f"Coordinates out of range: lat={self.lat}, lon={self.lon}")

    @classmethod
    def for_city(cls, city: str) -> LocationQuery:
        return cls(city=city.strip())

    @classmethod
    def for_coords(cls, lat: float, lon: float) -> LocationQuery:
        return cls(lat=float(lat), lon=float(lon))

    def to_dict(self) -> dict:
        return asdict(self)

    def to_params(self) -> dict:
        if self.city:
            return {"q": self.city}
        return {"lat": self.lat, "lon": self.lon}

    @property
    def label(self) -> str:
        if self.city:
            return self.city
        return f"{self.lat:.4f},{self.lon:.4f}"


@dataclass(frozen=True)
class CurrentConditions:
    city: Optional[str] = None
    country: Optional[str] = None
    timestamp: Optional[int] = None
    timezone_offset: int = 0
    temperature: Optional[float] = None
    feels_like: Optional[float] = None
    humidity: Optional[float] = None
    wind: Optional[float] = None
    description: Optional[str] = None
    icon: Optional[str] = None
    lat: Optional[float] = None
    lon: Optional[float] = None

    def to_dict(self) -> dict:
        return asdict(self)


@dataclass(frozen=True)
class ForecastResult:
    timezone_offset: int = 0
    days: tuple[DailyForecast, ...] = field(default_factory=tuple)

    def to_dict(self) -> dict:
        return {
            "timezone_offset": self.timezone_offset,
            "days": [d.to_dict() for d in self.days],
        }
