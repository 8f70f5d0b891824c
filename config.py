"""
Configuration — loads from .env, provides defaults.
"""

import os
from dotenv import load_dotenv

load_dotenv()

# OpenWeatherMap
OPENWEATHER_API_KEY = os.getenv("OPENWEATHER_API_KEY", "")
OPENWEATHER_BASE_URL = os.getenv(
    "OPENWEATHER_BASE_URL", "https://api.openweathermap.org/data/2.5"
).rstrip("/")
HTTP_TIMEOUT = float(os.getenv("HTTP_TIMEOUT", "10"))  # seconds

# Lookup defaults
DEFAULT_CITY = os.getenv("DEFAULT_CITY", "New York")
PRESET_CITIES = [
    c.strip()
    for c in os.getenv("PRESET_CITIES", "Lisbon,Paris,Sydney,San Francisco").split(",")
    if c.strip()
]
FORECAST_DAYS = int(os.getenv("FORECAST_DAYS", "5"))

# Dashboard
DASHBOARD_HOST = os.getenv("DASHBOARD_HOST", "127.0.0.1")
DASHBOARD_PORT = int(os.getenv("DASHBOARD_PORT", "8080"))
DASHBOARD_SECRET = os.getenv("DASHBOARD_SECRET", "change-me-in-production")

LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO")
