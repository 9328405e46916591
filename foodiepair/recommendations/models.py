from __future__ import annotations

from enum import Enum
from typing import Annotated, Any, Literal, Union

from pydantic import BaseModel, Field


class Location(BaseModel):
    lat: float = Field(..., ge=-90.0, le=90.0)
    lng: float = Field(..., ge=-180.0, le=180.0)


class Restaurant(BaseModel):
    """A restaurant on the pair's own list, visited or on the wishlist."""

    source: Literal["pair"] = "pair"
    id: str = Field(..., min_length=1)
    pair_id: str | None = None
    name: str = ""
    address: str | None = None
    cuisine_type: str | None = None
    price_range: int | None = Field(default=None, ge=1)
    lat: float | None = None
    lng: float | None = None
    is_favorite: bool = False
    visit_status: Literal["visited", "wishlist"] | None = None
    visit_date: str | None = None
    created_by: str | None = None

    @property
    def is_visited(self) -> bool:
        return self.visit_status == "visited"


class ExternalCandidate(BaseModel):
    """A place found by a discovery query, never part of the pair's list.

    Carries the same scoring fields as ``Restaurant`` with the status fixed
    to an unvisited, non-favorite entry so consumers can render both alike.
    """

    source: Literal["external"] = "external"
    id: str = Field(..., min_length=1)
    name: str
    address: str | None = None
    cuisine_type: str | None = None
    price_range: int = Field(default=2, ge=1)
    lat: float | None = None
    lng: float | None = None
    rating: float | None = None
    visit_status: Literal["wishlist"] = "wishlist"
    is_favorite: Literal[False] = False
    pair_id: None = None


class Rating(BaseModel):
    id: str | None = None
    restaurant_id: str = Field(..., min_length=1)
    user_id: str = Field(..., min_length=1)
    food_score: float = Field(..., ge=1.0, le=5.0)
    service_score: float = Field(..., ge=1.0, le=5.0)
    vibe_score: float = Field(..., ge=1.0, le=5.0)
    price_quality_score: float = Field(..., ge=1.0, le=5.0)
    favorite_dish: str | None = None


class ReasonKey(str, Enum):
    no_ratings_yet = "no_ratings_yet"
    craving = "craving"
    both_love_cuisine = "both_love_cuisine"
    very_close = "very_close"
    distance_away = "distance_away"
    favorite = "favorite"
    new_discovery = "new_discovery"
    matches_craving = "matches_craving"
    highly_rated = "highly_rated"


class RecommendationReason(BaseModel):
    key: ReasonKey
    params: dict[str, Any] = Field(default_factory=dict)
    message: str | None = None


RecommendedPlace = Annotated[
    Union[Restaurant, ExternalCandidate], Field(discriminator="source")
]


class RecommendationResult(BaseModel):
    restaurant: RecommendedPlace
    score: float
    reasons: list[RecommendationReason] = Field(default_factory=list)
    distance: float | None = None


# ── API bodies ───────────────────────────────────────────────────────────


class RecommendationRequest(BaseModel):
    restaurants: list[Restaurant] = Field(default_factory=list)
    ratings: list[Rating] = Field(default_factory=list)
    external_candidates: list[ExternalCandidate] = Field(default_factory=list)
    cuisine: str | None = Field(
        default=None, max_length=100, description="Craving to prioritise, e.g. \"sushi\""
    )
    location: Location | None = None
    discover: bool = Field(
        default=True,
        description="Query nearby places when a location is given",
    )
    language: str | None = Field(
        default=None, description="Render reason text in this language"
    )


class RecommendationResponse(BaseModel):
    recommendations: list[RecommendationResult]
    total_candidates: int
    cold_start: bool = False


class DiscoveryRequest(BaseModel):
    lat: float = Field(..., ge=-90.0, le=90.0)
    lng: float = Field(..., ge=-180.0, le=180.0)
    radius: int = Field(default=2000, ge=100, le=10000, description="Metres")
    cuisine: str | None = Field(default=None, max_length=100)
