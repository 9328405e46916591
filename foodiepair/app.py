from __future__ import annotations

from fastapi import FastAPI

from .analytics.aggregator import compute_analytics
from .analytics.store import get_events
from .i18n.catalog import SUPPORTED_LANGUAGES
from .recommendations.cache import get_cache_stats
from .recommendations.models import (
    DiscoveryRequest,
    ExternalCandidate,
    RecommendationRequest,
    RecommendationResponse,
)
from .recommendations.service import discover_places, get_recommendations
from .stats.pair import PairStatsRequest, PairStatsResponse, compute_pair_stats

app = FastAPI(title="FoodiePair Recommendation API", version="1.0.0")

CRAVING_PRESETS = ["Sushi", "Pizza", "Italian", "Mexican", "Burger", "Asian", "Coffee", "Dessert"]


# ── Public endpoints ─────────────────────────────────────────────────────


@app.get("/health")
def health() -> dict[str, str]:
    return {"status": "ok"}


@app.get("/metadata")
def metadata() -> dict:
    return {"cravings": CRAVING_PRESETS, "languages": SUPPORTED_LANGUAGES}


# ── Pair endpoints ───────────────────────────────────────────────────────


@app.post("/recommendations", response_model=RecommendationResponse)
def recommendations(body: RecommendationRequest) -> RecommendationResponse:
    return get_recommendations(body)


@app.post("/discovery", response_model=list[ExternalCandidate])
def discovery(body: DiscoveryRequest) -> list[ExternalCandidate]:
    places, _ = discover_places(body.lat, body.lng, body.radius, body.cuisine)
    return places


@app.post("/stats", response_model=PairStatsResponse)
def pair_stats(body: PairStatsRequest) -> PairStatsResponse:
    return compute_pair_stats(body.ratings, body.members)


# ── Operational endpoints ────────────────────────────────────────────────


@app.get("/cache/stats")
def cache_stats() -> dict:
    return get_cache_stats()


@app.get("/analytics")
def analytics() -> dict:
    return compute_analytics(get_events())
