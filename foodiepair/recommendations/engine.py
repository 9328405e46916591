from __future__ import annotations

from dataclasses import dataclass, field
from typing import Sequence

import pandas as pd

from .geo import haversine_km
from .models import (
    ExternalCandidate,
    Location,
    Rating,
    ReasonKey,
    RecommendationReason,
    RecommendationResult,
    Restaurant,
)

SUB_SCORE_COLUMNS = ["food_score", "service_score", "vibe_score", "price_quality_score"]

MAX_RESULTS = 5
COLD_START_RESULTS = 3
AFFINITY_THRESHOLD = 4.0

CRAVING_BONUS = 10.0
EXTERNAL_CRAVING_BONUS = 8.0
FAVORITE_BONUS = 2.0
PRICE_AFFINITY_BONUS = 1.0
EXTERNAL_BASE_SCORE = 0.5

# (max distance km, bonus)
WISHLIST_DISTANCE_BANDS = ((1.0, 3.0), (3.0, 1.5))
EXTERNAL_DISTANCE_BANDS = ((1.0, 3.0), (5.0, 1.0))


@dataclass
class TasteProfile:
    """Mean restaurant score per cuisine label and per price tier."""

    cuisine: dict[str, float] = field(default_factory=dict)
    price: dict[int, float] = field(default_factory=dict)


def restaurant_averages(ratings: Sequence[Rating]) -> pd.Series:
    """Return the mean of every sub-score given to each restaurant.

    All four sub-scores of all ratings are pooled, so each one weighs the
    same no matter which member gave it.
    """
    df = pd.DataFrame(
        [r.model_dump(include={"restaurant_id", *SUB_SCORE_COLUMNS}) for r in ratings],
        columns=["restaurant_id", *SUB_SCORE_COLUMNS],
    )
    if df.empty:
        return pd.Series(dtype=float)
    pooled = df.melt(id_vars="restaurant_id", value_vars=SUB_SCORE_COLUMNS)
    return pooled.groupby("restaurant_id")["value"].mean()


def build_taste_profile(
    visited: Sequence[Restaurant], ratings: Sequence[Rating]
) -> TasteProfile:
    """Aggregate the pair's visited restaurants into cuisine and price affinities."""
    averages = restaurant_averages(ratings)

    frame = pd.DataFrame(
        {
            "id": [r.id for r in visited],
            "cuisine_type": [r.cuisine_type or "" for r in visited],
            "price_range": pd.Series([r.price_range for r in visited], dtype="float64"),
        }
    )
    # Unrated visits still count, with an average of zero
    frame["avg"] = frame["id"].map(averages).astype("float64").fillna(0.0)

    with_cuisine = frame[frame["cuisine_type"] != ""]
    cuisine = with_cuisine.groupby("cuisine_type")["avg"].mean()

    price = frame.dropna(subset=["price_range"]).groupby("price_range")["avg"].mean()

    return TasteProfile(
        cuisine={str(k): float(v) for k, v in cuisine.items()},
        price={int(k): float(v) for k, v in price.items()},
    )


def _matches_craving(cuisine_type: str | None, cuisine_filter: str | None) -> bool:
    if not cuisine_filter or not cuisine_type:
        return False
    return cuisine_filter.lower() in cuisine_type.lower()


def _distance_from(
    place: Restaurant | ExternalCandidate, user_location: Location | None
) -> float | None:
    if user_location is None or place.lat is None or place.lng is None:
        return None
    return haversine_km(user_location.lat, user_location.lng, place.lat, place.lng)


def _score_wishlist_item(
    restaurant: Restaurant,
    profile: TasteProfile,
    cuisine_filter: str | None,
    user_location: Location | None,
) -> RecommendationResult:
    reasons: list[RecommendationReason] = []
    score = 0.0

    if _matches_craving(restaurant.cuisine_type, cuisine_filter):
        score += CRAVING_BONUS
        reasons.append(RecommendationReason(key=ReasonKey.craving))
    elif restaurant.cuisine_type:
        affinity = profile.cuisine.get(restaurant.cuisine_type, 0.0)
        if affinity >= AFFINITY_THRESHOLD:
            score += (affinity - 3) * 2
            reasons.append(
                RecommendationReason(
                    key=ReasonKey.both_love_cuisine,
                    params={"cuisine": restaurant.cuisine_type},
                )
            )

    distance = _distance_from(restaurant, user_location)
    if distance is not None:
        (near_km, near_bonus), (mid_km, mid_bonus) = WISHLIST_DISTANCE_BANDS
        if distance < near_km:
            score += near_bonus
            reasons.append(
                RecommendationReason(
                    key=ReasonKey.very_close, params={"distance": round(distance, 1)}
                )
            )
        elif distance < mid_km:
            score += mid_bonus
            reasons.append(
                RecommendationReason(
                    key=ReasonKey.distance_away, params={"distance": round(distance, 1)}
                )
            )

    # Price affinity is a silent signal
    if restaurant.price_range and profile.price.get(restaurant.price_range, 0.0) >= AFFINITY_THRESHOLD:
        score += PRICE_AFFINITY_BONUS

    if restaurant.is_favorite:
        score += FAVORITE_BONUS
        reasons.append(RecommendationReason(key=ReasonKey.favorite))

    return RecommendationResult(
        restaurant=restaurant, score=score, reasons=reasons, distance=distance
    )


def _score_external(
    candidate: ExternalCandidate,
    cuisine_filter: str | None,
    user_location: Location | None,
) -> RecommendationResult:
    reasons = [RecommendationReason(key=ReasonKey.new_discovery)]
    score = EXTERNAL_BASE_SCORE

    if _matches_craving(candidate.cuisine_type, cuisine_filter):
        score += EXTERNAL_CRAVING_BONUS
        reasons.append(RecommendationReason(key=ReasonKey.matches_craving))

    distance = _distance_from(candidate, user_location)
    if distance is not None:
        (near_km, near_bonus), (mid_km, mid_bonus) = EXTERNAL_DISTANCE_BANDS
        if distance < near_km:
            score += near_bonus
            reasons.append(
                RecommendationReason(
                    key=ReasonKey.distance_away, params={"distance": round(distance, 1)}
                )
            )
        elif distance < mid_km:
            score += mid_bonus

    if candidate.rating is not None and candidate.rating >= AFFINITY_THRESHOLD:
        score += candidate.rating - 3
        reasons.append(
            RecommendationReason(
                key=ReasonKey.highly_rated, params={"rating": candidate.rating}
            )
        )

    return RecommendationResult(
        restaurant=candidate, score=score, reasons=reasons, distance=distance
    )


def generate_recommendations(
    restaurants: Sequence[Restaurant],
    ratings: Sequence[Rating],
    external_candidates: Sequence[ExternalCandidate] = (),
    cuisine_filter: str | None = None,
    user_location: Location | None = None,
) -> list[RecommendationResult]:
    """Rank the pair's wishlist and discovered places by predicted appeal.

    Pure function: inputs are never mutated and no I/O happens. Returns at
    most five results, best first.
    """
    visited = [r for r in restaurants if r.visit_status == "visited"]
    wishlist = [r for r in restaurants if r.visit_status in ("wishlist", None)]

    # --- Cold start: nothing rated yet, so nothing to learn from ---
    if not visited:
        return [
            RecommendationResult(
                restaurant=r,
                score=0.0,
                reasons=[RecommendationReason(key=ReasonKey.no_ratings_yet)],
            )
            for r in wishlist[:COLD_START_RESULTS]
        ]

    profile = build_taste_profile(visited, ratings)

    combined = [
        _score_wishlist_item(r, profile, cuisine_filter, user_location) for r in wishlist
    ]
    combined.extend(
        _score_external(c, cuisine_filter, user_location) for c in external_candidates
    )

    ranked = sorted(combined, key=lambda rec: rec.score, reverse=True)
    keep_all = len(combined) <= MAX_RESULTS
    return [rec for rec in ranked if rec.score > 0 or keep_all][:MAX_RESULTS]
