# beachbbq/weather.py
import logging
from typing import Optional

import httpx

from beachbbq.config import settings
from beachbbq.errors import UpstreamError

logger = logging.getLogger(__name__)

DEFAULT_TIMEOUT = 5.0


class WeatherClient:
    """Current conditions at a beach, from OpenWeatherMap."""

    def __init__(
        self,
        api_key: Optional[str] = None,
        base_url: Optional[str] = None,
        transport: Optional[httpx.BaseTransport] = None,
    ):
        self.api_key = api_key if api_key is not None else settings.OPENWEATHERMAP_API_KEY
        self.base_url = base_url or settings.OPENWEATHERMAP_URL
        self.transport = transport

    def current(self, location_name: str) -> dict:
        if not self.api_key:
            raise UpstreamError("Weather service is not configured")

        params = {"q": f"{location_name},MT", "appid": self.api_key, "units": "metric"}
        try:
            with httpx.Client(timeout=DEFAULT_TIMEOUT, transport=self.transport) as client:
                resp = client.get(self.base_url, params=params)
                resp.raise_for_status()
                data = resp.json()
        except httpx.HTTPStatusError as e:
            message = _upstream_message(e.response)
            logger.error("Weather lookup for %s failed: %s", location_name, message)
            raise UpstreamError(f"Weather lookup failed: {message}")
        except httpx.HTTPError as e:
            logger.exception("Weather service unreachable")
            raise UpstreamError(f"Weather lookup failed: {e}")

        return {
            "location": location_name,
            "weather": data.get("weather", []),
            "main": data.get("main", {}),
            "wind": data.get("wind", {}),
        }


def _upstream_message(response: httpx.Response) -> str:
    try:
        return response.json().get("message") or response.reason_phrase
    except ValueError:
        return f"{response.status_code} {response.reason_phrase}"
