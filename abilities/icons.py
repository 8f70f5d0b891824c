"""
Condition-icon lookup for OpenWeatherMap codes ("01d", "10n", ...).

Pure lookups, no I/O. Unknown or missing codes map to FALLBACK_ICON.
"""

from typing import Optional

FALLBACK_ICON = "unknown"

# Two-character prefix → icon identifier
PREFIX_ICONS = {
    "01": "clear-day",
    "02": "partly-cloudy",
    "03": "cloudy",
    "04": "cloudy",
    "09": "rain",
    "10": "rain",
    "11": "thunderstorm",
    "13": "snow",
    "50": "fog",
}

ICON_URLS = {
    "clear-day": "https://img.icons8.com/emoji/96/sun-emoji.png",
    "clear-night": "https://img.icons8.com/emoji/96/crescent-moon-emoji.png",
    "partly-cloudy": "https://img.icons8.com/emoji/96/sun-behind-small-cloud.png",
    "cloudy": "https://img.icons8.com/emoji/96/cloud-emoji.png",
    "rain": "https://img.icons8.com/emoji/96/cloud-with-rain-emoji.png",
    "thunderstorm": "https://img.icons8.com/emoji/96/cloud-with-lightning-and-rain.png",
    "snow": "https://img.icons8.com/emoji/96/cloud-with-snow-emoji.png",
    "fog": "https://img.icons8.com/emoji/96/fog-emoji.png",
    FALLBACK_ICON: "https://img.icons8.com/emoji/96/sun-behind-cloud.png",
}

_REGIONAL_INDICATOR_BASE = 127397


def condition_icon(code: Optional[str]) -> str:
    """Map a condition code to an icon identifier. Never returns an empty value."""
    if not isinstance(code, str) or not code:
        return FALLBACK_ICON
    code = code.strip().lower()
    suffix = code[2:]
    if suffix not in ("", "d", "n"):
        return FALLBACK_ICON
    icon = PREFIX_ICONS.get(code[:2], FALLBACK_ICON)
    if icon == "clear-day" and suffix == "n":
        return "clear-night"
    return icon


def icon_url(code: Optional[str]) -> str:
    return ICON_URLS[condition_icon(code)]


def country_flag(country_code: Optional[str]) -> str:
    """'PT' → 🇵🇹. Empty string for missing or non-alphabetic codes."""
    if not isinstance(country_code, str) or not (country_code.isascii() and country_code.isalpha()):
        return ""
    return "".join(chr(_REGIONAL_INDICATOR_BASE + ord(c)) for c in country_code.upper())
