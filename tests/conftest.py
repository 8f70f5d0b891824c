import pytest

from models import CurrentConditions, DailyForecast, ForecastResult

MONDAY = 1704067200  # 2024-01-01T00:00:00Z
HOUR = 3600
DAY = 24 * HOUR


def forecast_item(ts, temp_min, temp_max, icon="01d", description="clear sky"):
    return {
        "dt": ts,
        "main": {"temp": (temp_min + temp_max) / 2, "temp_min": temp_min, "temp_max": temp_max},
        "weather": [{"icon": icon, "description": description}],
    }


@pytest.fixture
def current_payload():
    return {
        "name": "Lisbon",
        "sys": {"country": "PT"},
        "dt": MONDAY,
        "timezone": 3600,
        "main": {"temp": 18.4, "feels_like": 17.6, "humidity": 72},
        "wind": {"speed": 4.2},
        "weather": [{"icon": "02d", "description": "few clouds"}],
        "coord": {"lat": 38.72, "lon": -9.14},
    }


@pytest.fixture
def forecast_payload():
    items = [
        forecast_item(MONDAY + 21 * HOUR, 12, 13),
        forecast_item(MONDAY + DAY + 9 * HOUR, 14, 15, "10d", "light rain"),
        forecast_item(MONDAY + DAY + 12 * HOUR, 17, 19, "04d", "broken clouds"),
        forecast_item(MONDAY + DAY + 15 * HOUR, 18, 21, "10d", "light rain"),
        forecast_item(MONDAY + 2 * DAY + 12 * HOUR, 9, 11, "13d", "snow"),
    ]
    return {"city": {"name": "Lisbon", "timezone": 0}, "list": items}


@pytest.fixture
def sample_current():
    return CurrentConditions(
        city="Lisbon", country="PT", timestamp=MONDAY, timezone_offset=3600,
        temperature=18.4, feels_like=17.6, humidity=72, wind=4.2,
        description="few clouds", icon="02d", lat=38.72, lon=-9.14,
    )


@pytest.fixture
def sample_forecast():
    return ForecastResult(
        timezone_offset=0,
        days=(
            DailyForecast("2024-01-02", MONDAY + DAY + 12 * HOUR, 14.0, 21.0, "04d", "broken clouds"),
            DailyForecast("2024-01-03", MONDAY + 2 * DAY + 12 * HOUR, 9.0, 11.0, "13d", "snow"),
        ),
    )
