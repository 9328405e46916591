from __future__ import annotations

import logging
import time

from ..analytics.store import record_event
from ..discovery.config import DEFAULT_DISCOVERY_CONFIG
from ..discovery.overpass import discover_nearby_restaurants
from ..i18n.render import localize_results
from .cache import discovery_key, get_discovery, store_discovery
from .engine import generate_recommendations
from .models import (
    ExternalCandidate,
    RecommendationRequest,
    RecommendationResponse,
)

logger = logging.getLogger(__name__)


def discover_places(
    lat: float,
    lng: float,
    radius: int | None = None,
    cuisine: str | None = None,
) -> tuple[list[ExternalCandidate], bool]:
    """Return nearby places and whether they came from the cache."""
    radius = radius or DEFAULT_DISCOVERY_CONFIG.default_radius
    key = discovery_key(lat, lng, radius, cuisine)

    cached = get_discovery(key)
    if cached is not None:
        logger.debug("Discovery cache hit for %s", key)
        return cached, True

    places = discover_nearby_restaurants(lat, lng, radius, cuisine)
    # An empty list may just be a failed lookup; try again next time
    if places:
        store_discovery(key, places)
    return places, False


def get_recommendations(request: RecommendationRequest) -> RecommendationResponse:
    start_time = time.time()

    # --- External discovery (never blocks the ranking) ---
    external = list(request.external_candidates)
    cache_hit: bool | None = None
    if request.location is not None and request.discover:
        discovered, cache_hit = discover_places(
            request.location.lat, request.location.lng, cuisine=request.cuisine,
        )
        known_ids = {c.id for c in external}
        external.extend(c for c in discovered if c.id not in known_ids)

    # --- Ranking ---
    visited_count = sum(1 for r in request.restaurants if r.is_visited)
    wishlist_count = len(request.restaurants) - visited_count
    cold_start = visited_count == 0

    results = generate_recommendations(
        request.restaurants,
        request.ratings,
        external,
        cuisine_filter=request.cuisine,
        user_location=request.location,
    )

    if request.language:
        results = localize_results(results, request.language)

    elapsed_ms = round((time.time() - start_time) * 1000, 1)
    record_event("recommendation", {
        "cuisine": request.cuisine,
        "has_location": request.location is not None,
        "visited_count": visited_count,
        "wishlist_count": wishlist_count,
        "external_count": len(external),
        "results_returned": len(results),
        "cold_start": cold_start,
        "discovery_cache_hit": cache_hit,
        "response_time_ms": elapsed_ms,
    })
    logger.info(
        "Ranked %d wishlist and %d external places into %d recommendations",
        wishlist_count, len(external), len(results),
    )

    return RecommendationResponse(
        recommendations=results,
        total_candidates=wishlist_count + len(external),
        cold_start=cold_start,
    )
