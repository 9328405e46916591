from __future__ import annotations

import logging
import re
from typing import Any

import requests

from ..recommendations.models import ExternalCandidate
from .config import DEFAULT_DISCOVERY_CONFIG, DiscoveryConfig

logger = logging.getLogger(__name__)

UNNAMED = "Unnamed Spot"
UNKNOWN_ADDRESS = "Address unknown"
RATING_TAGS = ("stars", "rating", "user_rating")

_LEADING_NUMBER = re.compile(r"\s*([-+]?\d*\.?\d+)")


def _escape(value: str) -> str:
    return value.replace("\\", "\\\\").replace('"', '\\"')


def build_query(lat: float, lng: float, radius: int, cuisine: str | None = None) -> str:
    """Return an Overpass QL query for restaurants within *radius* metres."""
    selector = f'["cuisine"~"{_escape(cuisine)}",i]' if cuisine else '["amenity"="restaurant"]'
    around = f"(around:{radius},{lat},{lng})"
    return (
        "[out:json][timeout:25];\n"
        "(\n"
        f"  node{selector}{around};\n"
        f"  way{selector}{around};\n"
        ");\n"
        "out center;"
    )


def _parse_rating(tags: dict[str, Any]) -> float | None:
    raw = next((tags[t] for t in RATING_TAGS if tags.get(t)), None)
    if raw is None:
        return None
    match = _LEADING_NUMBER.match(str(raw))
    if not match:
        return None
    value = float(match.group(1))
    return value if value > 0 else None


def map_price_range(tags: dict[str, Any]) -> int:
    """Guess a 1-3 price tier from OSM tags, defaulting to 2."""
    if tags.get("payment:coins") == "yes" or tags.get("cuisine") == "fast_food":
        return 1
    price = tags.get("price") or tags.get("fee")
    if price == "high" or tags.get("expensive") == "yes":
        return 3
    return 2


def _format_address(tags: dict[str, Any]) -> str:
    street = tags.get("addr:street")
    if not street:
        return UNKNOWN_ADDRESS
    return f"{street} {tags.get('addr:housenumber', '')}".strip()


def parse_element(element: dict[str, Any]) -> ExternalCandidate | None:
    """Convert one Overpass element into a candidate, or ``None`` if unnamed."""
    tags = element.get("tags") or {}
    name = tags.get("name") or UNNAMED
    if name == UNNAMED:
        return None

    center = element.get("center") or {}
    cuisine = tags.get("cuisine")

    return ExternalCandidate(
        id=f"osm-{element['id']}",
        name=name,
        address=_format_address(tags),
        cuisine_type=cuisine.split(";")[0] if cuisine else None,
        lat=element.get("lat", center.get("lat")),
        lng=element.get("lon", center.get("lon")),
        price_range=map_price_range(tags),
        rating=_parse_rating(tags),
    )


def discover_nearby_restaurants(
    lat: float,
    lng: float,
    radius: int | None = None,
    cuisine: str | None = None,
    config: DiscoveryConfig = DEFAULT_DISCOVERY_CONFIG,
) -> list[ExternalCandidate]:
    """
    Find restaurants around a point via the Overpass API.

    Returns an empty list when discovery is disabled or the request fails
    (network error, bad status, malformed payload). Elements that cannot be
    parsed are skipped on their own.
    """
    if not config.enabled:
        return []

    query = build_query(lat, lng, radius or config.default_radius, cuisine)

    try:
        response = requests.post(
            config.overpass_url,
            data=query,
            headers={"User-Agent": config.user_agent},
            timeout=config.timeout,
        )
        response.raise_for_status()
        elements = response.json().get("elements", [])
    except (requests.RequestException, ValueError, AttributeError):
        logger.warning("Overpass discovery failed, continuing without external places", exc_info=True)
        return []

    candidates: list[ExternalCandidate] = []
    for element in elements:
        try:
            candidate = parse_element(element)
        except (AttributeError, KeyError, TypeError, ValueError):
            logger.warning("Skipping malformed Overpass element", exc_info=True)
            continue
        if candidate is not None:
            candidates.append(candidate)

    logger.debug("Discovered %d places around (%s, %s)", len(candidates), lat, lng)
    return candidates
