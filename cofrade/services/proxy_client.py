"""
services/proxy_client.py
------------------------
Calls the itinerary proxy (POST /api/generateItinerary) instead of Gemini.
- Sends {city, day, vibe}
- Raises ProxyError with the proxy's JSON error message on 4xx/5xx
- Parses the raw Gemini text returned by the proxy
The proxy forwards only the text, so no grounding sources are available here.
"""

from __future__ import annotations
import logging
from typing import Optional

import requests

from cofrade.ai.gemini import parse_itinerary
from cofrade.core.config import Settings, load_settings
from cofrade.core.errors import CofradeError, ProxyError
from cofrade.core.models import ItineraryRequest, ItineraryResult

logger = logging.getLogger(__name__)


def _post(url: str, payload: dict, timeout: float) -> str:
    r = requests.post(url, json=payload, timeout=timeout)

    if r.status_code >= 400:
        try:
            msg = r.json().get("error", r.text)
        except ValueError:
            msg = r.text
        raise ProxyError(r.status_code, str(msg))

    return r.text


def fetch_itinerary(
    req: ItineraryRequest,
    settings: Optional[Settings] = None,
) -> ItineraryResult:
    settings = settings or load_settings()
    if not settings.proxy_url:
        raise CofradeError("COFRADE_PROXY_URL is not set.")

    payload = {"city": req.city, "day": req.day, "vibe": req.vibe}
    logger.info("Requesting itinerary from proxy %s", settings.proxy_url)
    text = _post(settings.proxy_url, payload, settings.timeout)
    return ItineraryResult(response=parse_itinerary(text), sources=[])
