"""
Weather lookup — local web app entry point.

Serves the dashboard in the browser; all lookups go to OpenWeatherMap.

Usage:
  python app.py
"""

import logging

import config
from dashboard import create_app
from orchestrator import Orchestrator

logging.basicConfig(
    format="%(asctime)s [%(name)s] %(levelname)s %(message)s",
    level=getattr(logging, config.LOG_LEVEL.upper(), logging.INFO),
)
log = logging.getLogger("app")


def main():
    if not config.OPENWEATHER_API_KEY:
        log.warning("OPENWEATHER_API_KEY is not set; every lookup will fail")

    app = create_app(Orchestrator())
    # Suppress Flask request logs in the main console
    logging.getLogger("werkzeug").setLevel(logging.WARNING)

    log.info(f"Dashboard: http://{config.DASHBOARD_HOST}:{config.DASHBOARD_PORT}")
    app.run(host=config.DASHBOARD_HOST, port=config.DASHBOARD_PORT, use_reloader=False)


if __name__ == "__main__":
    main()
