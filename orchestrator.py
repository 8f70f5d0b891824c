"""
Orchestrator — runs fetch cycles and feeds their results into the store.

A query fires two independent requests (current conditions and forecast)
concurrently. Each one dispatches its own action when it finishes, so a
forecast is applied even if the current-conditions call is slower or fails.
The store's query-id check drops answers to superseded queries.
"""

from __future__ import annotations
import asyncio
import logging
from typing import Callable, Optional

import config
from abilities import weather
from models import CurrentConditions, DisplayUnit, ForecastResult, LocationQuery
from store import (
    CURRENT,
    FORECAST,
    CurrentLoaded,
    FetchFailed,
    ForecastLoaded,
    GeolocationFailed,
    SearchStarted,
    ThemeToggled,
    UnitSelected,
    WeatherState,
    WeatherStore,
)

log = logging.getLogger(__name__)

GEOLOCATION_UNAVAILABLE = "Unable to get your location."


class Orchestrator:
    def __init__(
        self,
        store: Optional[WeatherStore] = None,
        fetch_current: Callable[[LocationQuery], CurrentConditions] = weather.fetch_current,
        fetch_forecast: Callable[[LocationQuery], ForecastResult] = weather.fetch_forecast,
        default_city: str = config.DEFAULT_CITY,
    ):
        self.store = store or WeatherStore(WeatherState(city=default_city))
        self._fetch_current = fetch_current
        self._fetch_forecast = fetch_forecast
        self.default_city = default_city

    @property
    def state(self) -> WeatherState:
        return self.store.state

    # ── Queries ─────────────────────────────────────────────────

    async def search(self, query: LocationQuery) -> WeatherState:
        """Start a new query and wait for both halves to land."""
        query_id = self.store.next_query_id()
        self.store.dispatch(SearchStarted(query_id, query))
        log.info(f"Query #{query_id}: {query.label}")

        await asyncio.gather(
            self._run(query_id, CURRENT, self._fetch_current, query, CurrentLoaded),
            self._run(query_id, FORECAST, self._fetch_forecast, query, ForecastLoaded),
        )
        return self.state

    async def search_city(self, city: str = "") -> WeatherState:
        """Search by name. Blank input re-runs the last city (or the default)."""
        city = (city or "").strip() or self.state.city or self.default_city
        return await self.search(LocationQuery.for_city(city))

    async def search_coords(self, lat, lon) -> WeatherState:
        try:
            query = LocationQuery.for_coords(float(lat), float(lon))
        except (TypeError, ValueError) as e:
            log.warning(f"Rejected coordinates lat={lat!r} lon={lon!r}: {e}")
            return self.geolocation_failed(GEOLOCATION_UNAVAILABLE)
        return await self.search(query)

    async def ensure_loaded(self) -> WeatherState:
        """First page load: fetch the current city once if nothing is shown yet."""
        if not self.state.ready and not self.state.loading and not self.state.error:
            return await self.search_city()
        return self.state

    async def _run(self, query_id: int, part: str, fetch, query: LocationQuery, loaded):
        try:
            result = await asyncio.to_thread(fetch, query)
        except weather.WeatherError as e:
            log.warning(f"Query #{query_id} {part} failed: {e}")
            self.store.dispatch(FetchFailed(query_id, part, str(e)))
            return
        except Exception as e:
            log.exception(f"Query #{query_id} {part} crashed")
            self.store.dispatch(FetchFailed(query_id, part, f"unexpected error ({e.__class__.__name__})"))
            return
        self.store.dispatch(loaded(query_id, result))

    # ── Presentation state ──────────────────────────────────────

    def select_unit(self, unit) -> WeatherState:
        if not isinstance(unit, DisplayUnit):
            unit = DisplayUnit.parse(unit)
        return self.store.dispatch(UnitSelected(unit))

    def toggle_theme(self) -> WeatherState:
        return self.store.dispatch(ThemeToggled())

    def geolocation_failed(self, reason: str = "") -> WeatherState:
        message = reason.strip() or GEOLOCATION_UNAVAILABLE
        log.info(f"Geolocation unavailable: {message}")
        return self.store.dispatch(GeolocationFailed(message))
