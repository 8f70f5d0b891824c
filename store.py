"""
UI state — one explicit state object, updated only through `reduce`.

Every fetch is tagged with the query id that started it; responses and
failures for anything but the latest query are dropped, so a slow answer to
an old search can never overwrite a newer one.
"""

from __future__ import annotations
import logging
import threading
from dataclasses import dataclass, replace
from typing import Optional, Union

from models import CurrentConditions, DisplayUnit, ForecastResult, LocationQuery

log = logging.getLogger(__name__)

CURRENT = "current"
FORECAST = "forecast"


@dataclass(frozen=True)
class WeatherState:
    city: str = ""
    unit: DisplayUnit = DisplayUnit.CELSIUS
    dark_mode: bool = False
    query_id: int = 0
    query: Optional[LocationQuery] = None
    loading_current: bool = False
    loading_forecast: bool = False
    current: Optional[CurrentConditions] = None
    forecast: Optional[ForecastResult] = None
    error: str = ""
    notice: str = ""

    @property
    def ready(self) -> bool:
        return self.current is not None

    @property
    def loading(self) -> bool:
        return self.loading_current or self.loading_forecast

    def to_dict(self) -> dict:
        """Stored values as-is (Celsius, raw condition codes)."""
        return {
            "city": self.city,
            "unit": self.unit.value,
            "dark_mode": self.dark_mode,
            "query_id": self.query_id,
            "query": self.query.to_dict() if self.query else None,
            "loading": self.loading,
            "current": self.current.to_dict() if self.current else None,
            "forecast": self.forecast.to_dict() if self.forecast else None,
            "error": self.error,
            "notice": self.notice,
        }


# ── Actions ─────────────────────────────────────────────────────

@dataclass(frozen=True)
class SearchStarted:
    query_id: int
    query: LocationQuery


@dataclass(frozen=True)
class CurrentLoaded:
    query_id: int
    current: CurrentConditions


@dataclass(frozen=True)
class ForecastLoaded:
    query_id: int
    forecast: ForecastResult


@dataclass(frozen=True)
class FetchFailed:
    query_id: int
    part: str  # CURRENT or FORECAST
    message: str


@dataclass(frozen=True)
class UnitSelected:
    unit: DisplayUnit


@dataclass(frozen=True)
class ThemeToggled:
    pass


@dataclass(frozen=True)
class GeolocationFailed:
    message: str


Action = Union[SearchStarted, CurrentLoaded, ForecastLoaded, FetchFailed,
               UnitSelected, ThemeToggled, GeolocationFailed]


def _is_stale(state: WeatherState, action) -> bool:
    if action.query_id != state.query_id:
        log.info(f"Dropping {type(action).__name__} for stale query #{action.query_id} "
                 f"(latest is #{state.query_id})")
        return True
    return False


def reduce(state: WeatherState, action: Action) -> WeatherState:
    """Pure state transition. Unknown actions leave the state untouched."""
    if isinstance(action, SearchStarted):
        if action.query_id < state.query_id:
            return state
        return replace(
            state,
            query_id=action.query_id,
            query=action.query,
            city=action.query.city or state.city,
            loading_current=True,
            loading_forecast=True,
            error="",
            notice="",
        )

    if isinstance(action, CurrentLoaded):
        if _is_stale(state, action):
            return state
        return replace(
            state,
            current=action.current,
            city=action.current.city or state.city,
            loading_current=False,
        )

    if isinstance(action, ForecastLoaded):
        if _is_stale(state, action):
            return state
        return replace(state, forecast=action.forecast, loading_forecast=False)

    if isinstance(action, FetchFailed):
        if _is_stale(state, action):
            return state
        label = "current conditions" if action.part == CURRENT else "forecast"
        changes = {"error": f"Could not load {label}: {action.message}"}
        if action.part == CURRENT:
            changes["loading_current"] = False
        else:
            changes["loading_forecast"] = False
        return replace(state, **changes)

    if isinstance(action, UnitSelected):
        return replace(state, unit=action.unit)

    if isinstance(action, ThemeToggled):
        return replace(state, dark_mode=not state.dark_mode)

    if isinstance(action, GeolocationFailed):
        return replace(state, notice=action.message)

    return state


class WeatherStore:
    """Holds the latest state. Dispatches are serialised (Flask serves on threads)."""

    def __init__(self, initial: Optional[WeatherState] = None):
        self._state = initial or WeatherState()
        self._lock = threading.Lock()
        self._last_query_id = self._state.query_id

    @property
    def state(self) -> WeatherState:
        return self._state

    def next_query_id(self) -> int:
        with self._lock:
            self._last_query_id += 1
            return self._last_query_id

    def dispatch(self, action: Action) -> WeatherState:
        with self._lock:
            self._state = reduce(self._state, action)
            return self._state
