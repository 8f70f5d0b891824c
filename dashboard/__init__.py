"""
Weather Dashboard — Flask web UI for looking up weather.

Provides:
  - Current conditions card and 5-day forecast
  - Search box, preset cities, browser geolocation
  - °C / °F toggle and light/dark theme
  - JSON API for programmatic access

All state lives in the orchestrator's store; routes only dispatch actions
and render whatever the store holds afterwards.
"""

import asyncio
from typing import Optional

from flask import Flask, render_template, request, jsonify, redirect, url_for

import config
from abilities.forecast import format_day, format_local_time
from abilities.icons import condition_icon, country_flag, icon_url
from abilities.units import convert, round_half_away, unit_label
from models import DisplayUnit
from orchestrator import Orchestrator
from store import WeatherState

PLACEHOLDER = "--"
MS_TO_KMH = 3.6  # API reports wind in m/s with units=metric

_orchestrator: Optional[Orchestrator] = None  # set via create_app()


def _run(coro):
    loop = asyncio.new_event_loop()
    try:
        return loop.run_until_complete(coro)
    finally:
        loop.close()


def _show(value, suffix: str = "") -> str:
    return PLACEHOLDER if value is None else f"{value}{suffix}"


def build_view(state: WeatherState) -> dict:
    """Everything the page needs, converted to the selected unit."""
    unit = state.unit
    view = {
        "city": state.city,
        "unit": unit.value,
        "unit_label": unit_label(unit),
        "dark_mode": state.dark_mode,
        "loading": state.loading,
        "ready": state.ready,
        "error": state.error,
        "notice": state.notice,
        "current": None,
        "forecast": [],
    }

    cur = state.current
    if cur is not None:
        view["current"] = {
            "city": cur.city or state.city or PLACEHOLDER,
            "country": cur.country or "",
            "flag": country_flag(cur.country),
            "date": (format_local_time(cur.timestamp, cur.timezone_offset)
                     if cur.timestamp is not None else PLACEHOLDER),
            "description": cur.description or PLACEHOLDER,
            "temperature": _show(convert(cur.temperature, unit)),
            "feels_like": _show(convert(cur.feels_like, unit), unit_label(unit)),
            "humidity": _show(None if cur.humidity is None else round_half_away(cur.humidity), "%"),
            "wind": _show(None if cur.wind is None else round_half_away(cur.wind * MS_TO_KMH), " km/h"),
            "icon": condition_icon(cur.icon),
            "icon_url": icon_url(cur.icon),
        }

    if state.forecast is not None:
        offset = state.forecast.timezone_offset
        view["forecast"] = [
            {
                "date": day.date_key,
                "day": format_day(day.timestamp, offset),
                "temp_min": convert(day.temp_min, unit),
                "temp_max": convert(day.temp_max, unit),
                "description": day.description,
                "icon": condition_icon(day.icon),
                "icon_url": icon_url(day.icon),
            }
            for day in state.forecast.days
        ]
    return view


def create_app(orchestrator: Optional[Orchestrator] = None):
    global _orchestrator
    _orchestrator = orchestrator or Orchestrator()

    app = Flask(__name__)
    app.secret_key = config.DASHBOARD_SECRET

    # ── Pages ───────────────────────────────────────────────

    @app.route("/")
    def index():
        state = _run(_orchestrator.ensure_loaded())
        return render_template(
            "weather.html",
            view=build_view(state),
            presets=config.PRESET_CITIES,
        )

    # ── API endpoints ───────────────────────────────────────

    @app.route("/api/weather", methods=["GET"])
    def api_weather():
        unit = request.args.get("unit")
        if unit:
            try:
                unit = DisplayUnit.parse(unit)
            except ValueError:
                return jsonify({"error": f"unknown unit: {unit}"}), 400

        city = request.args.get("city", "").strip()
        lat, lon = request.args.get("lat"), request.args.get("lon")
        if city:
            state = _run(_orchestrator.search_city(city))
        elif lat is not None or lon is not None:
            try:
                lat, lon = float(lat), float(lon)
            except (TypeError, ValueError):
                return jsonify({"error": "lat and lon must both be numbers"}), 400
            if not (-90 <= lat <= 90 and -180 <= lon <= 180):
                return jsonify({"error": "coordinates out of range"}), 400
            state = _run(_orchestrator.search_coords(lat, lon))
        else:
            state = _orchestrator.state

        if unit:
            state = _orchestrator.select_unit(unit)
        return jsonify({**build_view(state), "data": state.to_dict()})

    # ── Form actions (from the page) ────────────────────────

    @app.route("/action/search", methods=["POST"])
    def action_search():
        _run(_orchestrator.search_city(request.form.get("city", "")))
        return redirect(url_for("index"))

    @app.route("/action/preset/<city>", methods=["POST"])
    def action_preset(city):
        _run(_orchestrator.search_city(city))
        return redirect(url_for("index"))

    @app.route("/action/locate", methods=["POST"])
    def action_locate():
        error = request.form.get("error", "").strip()
        lat, lon = request.form.get("lat"), request.form.get("lon")
        if error or not lat or not lon:
            _orchestrator.geolocation_failed(error)
        else:
            _run(_orchestrator.search_coords(lat, lon))
        return redirect(url_for("index"))

    @app.route("/action/unit/<unit>", methods=["POST"])
    def action_unit(unit):
        try:
            _orchestrator.select_unit(DisplayUnit.parse(unit))
        except ValueError:
            return "Unknown unit", 404
        return redirect(url_for("index"))

    @app.route("/action/theme", methods=["POST"])
    def action_theme():
        _orchestrator.toggle_theme()
        return redirect(url_for("index"))

    return app
