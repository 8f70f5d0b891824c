"""
Weather ability — current conditions and 5-day/3-hour forecast.

Uses the OpenWeatherMap 2.5 REST API (metric units). Parsing is lenient:
a missing or mistyped field becomes None instead of failing the whole payload.
"""

import logging
import math
from typing import Any, Optional

import requests

import config
from abilities.forecast import aggregate_daily
from models import CurrentConditions, ForecastResult, ForecastSample, LocationQuery

log = logging.getLogger(__name__)

MAX_OFFSET = 24 * 3600
# Shifted by any accepted offset, timestamps stay inside datetime's range
MAX_TIMESTAMP = 253402214400 - MAX_OFFSET  # 9999-12-30


class WeatherError(Exception):
    """Base class for weather lookup failures."""


class ConfigurationError(WeatherError):
    pass


class WeatherFetchError(WeatherError):
    """Request failed, timed out, or returned an unusable response."""

    def __init__(self, message: str, status: Optional[int] = None):
        super().__init__(message)
        self.status = status


def _dig(data: Any, *path, default=None):
    """Walk nested dicts/lists; return `default` on any missing step."""
    for step in path:
        try:
            data = data[step]
        except (KeyError, IndexError, TypeError):
            return default
    return default if data is None else data


def _number(value) -> Optional[float]:
    """Finite float or None. Booleans and NaN/inf count as missing."""
    if isinstance(value, bool):
        return None
    try:
        number = float(value)
    except (TypeError, ValueError):
        return None
    return number if math.isfinite(number) else None


def _int(value, default: Optional[int] = None) -> Optional[int]:
    number = _number(value)
    return default if number is None else int(number)


def _timestamp(value) -> Optional[int]:
    ts = _int(value)
    if ts is None or not MAX_OFFSET <= ts <= MAX_TIMESTAMP:
        return None
    return ts


def _offset(value) -> int:
    offset = _int(value, 0)
    return offset if abs(offset) <= MAX_OFFSET else 0


def _str(value, default: Optional[str] = None) -> Optional[str]:
    return value if isinstance(value, str) and value else default


def _get(endpoint: str, query: LocationQuery, api_key: Optional[str] = None,
         base_url: Optional[str] = None, timeout: Optional[float] = None) -> dict:
    api_key = api_key if api_key is not None else config.OPENWEATHER_API_KEY
    if not api_key:
        raise ConfigurationError("OPENWEATHER_API_KEY is not set")

    url = f"{(base_url or config.OPENWEATHER_BASE_URL).rstrip('/')}/{endpoint}"
    params = {**query.to_params(), "appid": api_key, "units": "metric"}
    try:
        resp = requests.get(url, params=params, timeout=timeout or config.HTTP_TIMEOUT)
    except requests.Timeout as e:
        raise WeatherFetchError(f"{endpoint}: request timed out") from e
    except requests.RequestException as e:
        raise WeatherFetchError(f"{endpoint}: request failed ({e.__class__.__name__})") from e

    try:
        data = resp.json()
    except ValueError:
        data = None

    if not resp.ok:
        message = _dig(data, "message", default=resp.reason or "error")
        raise WeatherFetchError(f"{endpoint}: {message}", status=resp.status_code)
    if not isinstance(data, dict):
        raise WeatherFetchError(f"{endpoint}: response was not a JSON object",
                                status=resp.status_code)
    return data


# ── Parsing ─────────────────────────────────────────────────────

def parse_current(data: dict) -> CurrentConditions:
    return CurrentConditions(
        city=_str(_dig(data, "name")),
        country=_str(_dig(data, "sys", "country")),
        timestamp=_timestamp(_dig(data, "dt")),
        timezone_offset=_offset(_dig(data, "timezone")),
        temperature=_number(_dig(data, "main", "temp")),
        feels_like=_number(_dig(data, "main", "feels_like")),
        humidity=_number(_dig(data, "main", "humidity")),
        wind=_number(_dig(data, "wind", "speed")),
        description=_str(_dig(data, "weather", 0, "description")),
        icon=_str(_dig(data, "weather", 0, "icon")),
        lat=_number(_dig(data, "coord", "lat")),
        lon=_number(_dig(data, "coord", "lon")),
    )


def parse_sample(item: dict) -> Optional[ForecastSample]:
    """One forecast list entry → sample. None if it has no time or temperature."""
    timestamp = _timestamp(_dig(item, "dt"))
    temp_min = _number(_dig(item, "main", "temp_min"))
    temp_max = _number(_dig(item, "main", "temp_max"))
    if temp_min is None:
        temp_min = temp_max
    if temp_max is None:
        temp_max = temp_min
    if timestamp is None or temp_min is None:
        return None
    return ForecastSample(
        timestamp=timestamp,
        temp_min=temp_min,
        temp_max=temp_max,
        icon=_str(_dig(item, "weather", 0, "icon")),
        description=_str(_dig(item, "weather", 0, "description"), ""),
    )


def parse_forecast(data: dict, days: Optional[int] = None) -> ForecastResult:
    offset = _offset(_dig(data, "city", "timezone"))
    items = _dig(data, "list", default=[])
    if not isinstance(items, list):
        items = []
    samples = [s for s in (parse_sample(i) for i in items) if s is not None]
    if len(samples) < len(items):
        log.warning(f"Skipped {len(items) - len(samples)} malformed forecast samples")
    daily = aggregate_daily(samples, offset,
                            days=config.FORECAST_DAYS if days is None else days)
    return ForecastResult(timezone_offset=offset, days=tuple(daily))


# ── Fetching ────────────────────────────────────────────────────

def fetch_current(query: LocationQuery, **kwargs) -> CurrentConditions:
    """Current conditions for a city or lat/lon."""
    data = _get("weather", query, **kwargs)
    log.info(f"Current conditions received for {query.label}")
    return parse_current(data)


def fetch_forecast(query: LocationQuery, days: Optional[int] = None, **kwargs) -> ForecastResult:
    """Daily forecast (today excluded) for a city or lat/lon."""
    data = _get("forecast", query, **kwargs)
    log.info(f"Forecast received for {query.label}")
    return parse_forecast(data, days)
