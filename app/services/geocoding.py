"""
Forward geocoding of free-text addresses through the Mapbox places API
"""

import logging
from typing import Any, Dict
from urllib.parse import quote

import httpx

from app import config
from app.errors import ValidationError

logger = logging.getLogger(__name__)

def _context_text(feature: Dict[str, Any], kind: str) -> str:
    for item in feature.get("context") or []:
        if kind in item.get("id", ""):
            return item.get("text", "")
    return ""

def forward_geocode(address: str) -> Dict[str, Any]:
    """Resolve an address to location fields, raising ValidationError when it cannot."""
    if not config.MAPBOX_ACCESS_TOKEN:
        raise ValidationError("Address geocoding is not configured; provide latitude and longitude")

    url = f"{config.MAPBOX_GEOCODING_URL}/{quote(address)}.json"
    try:
        with httpx.Client(timeout=config.GEOCODING_TIMEOUT_SECONDS) as client:
            response = client.get(url, params={"access_token": config.MAPBOX_ACCESS_TOKEN, "limit": 1})
            response.raise_for_status()
    except httpx.HTTPError as e:
        logger.warning(f"Geocoding request failed for '{address}': {e}")
        raise ValidationError("Invalid address") from e

    features = response.json().get("features") or []
    if not features:
        raise ValidationError("Invalid address")

    feature = features[0]
    longitude, latitude = feature["center"][0], feature["center"][1]
    return {
        "latitude": latitude,
        "longitude": longitude,
        "address": feature.get("place_name", address),
        "city": _context_text(feature, "place"),
        "country": _context_text(feature, "country"),
        "place_id": feature.get("id"),
    }

def resolve_location(location) -> Dict[str, Any]:
    """Use the submitted coordinates when present, otherwise geocode the address."""
    data = location.model_dump(exclude_none=True)
    if location.latitude is not None and location.longitude is not None:
        data.setdefault("city", "")
        data.setdefault("country", "")
        return data
    return forward_geocode(location.address)
