from unittest.mock import patch

from fastapi.testclient import TestClient

from foodiepair.app import app
from foodiepair.recommendations.cache import clear_cache
from foodiepair.recommendations.models import ExternalCandidate

client = TestClient(app)

MADRID = {"lat": 40.4168, "lng": -3.7038}

RESTAURANTS = [
    {"id": "r1", "name": "Trattoria", "cuisine_type": "Italian", "price_range": 2, "visit_status": "visited"},
    {"id": "r2", "name": "Sushi Go", "cuisine_type": "Japanese", "price_range": 3, "visit_status": "visited"},
    {"id": "w1", "name": "Pasta Fresca", "cuisine_type": "Italian", "price_range": 2, "visit_status": "wishlist",
     "lat": 40.4200, "lng": -3.7038},
    {"id": "w2", "name": "Ramen Ya", "cuisine_type": "Japanese Ramen", "price_range": 1},
    {"id": "w3", "name": "Taco Loco", "cuisine_type": "Mexican", "price_range": 1, "is_favorite": True},
]

RATINGS = [
    {"restaurant_id": "r1", "user_id": "ana", "food_score": 5, "service_score": 4.5, "vibe_score": 5,
     "price_quality_score": 4.5},
    {"restaurant_id": "r1", "user_id": "ben", "food_score": 5, "service_score": 5, "vibe_score": 4.5,
     "price_quality_score": 5},
    {"restaurant_id": "r2", "user_id": "ana", "food_score": 3, "service_score": 3, "vibe_score": 2.5,
     "price_quality_score": 2},
]

DISCOVERED = [
    ExternalCandidate(id="osm-9", name="Izakaya", cuisine_type="japanese", lat=40.4170, lng=-3.7040, rating=4.6),
]


def _post(**body):
    payload = {"restaurants": RESTAURANTS, "ratings": RATINGS}
    payload.update(body)
    return client.post("/recommendations", json=payload)


def test_health():
    resp = client.get("/health")
    assert resp.status_code == 200
    assert resp.json() == {"status": "ok"}


def test_metadata_lists_cravings_and_languages():
    body = client.get("/metadata").json()
    assert "Sushi" in body["cravings"]
    assert body["languages"] == ["en", "es"]


def test_recommendations_without_location():
    resp = _post(discover=False)
    assert resp.status_code == 200
    body = resp.json()

    assert body["cold_start"] is False
    assert body["total_candidates"] == 3
    ids = [item["restaurant"]["id"] for item in body["recommendations"]]
    assert ids[0] == "w1"
    assert set(ids) == {"w1", "w2", "w3"}
    assert all(item["distance"] is None for item in body["recommendations"])


def test_recommendations_score_ordering():
    body = _post(discover=False, cuisine="ramen").json()
    scores = [item["score"] for item in body["recommendations"]]

    assert scores == sorted(scores, reverse=True)
    assert body["recommendations"][0]["restaurant"]["id"] == "w2"
    assert body["recommendations"][0]["reasons"][0]["key"] == "craving"


@patch("foodiepair.recommendations.service.discover_nearby_restaurants", return_value=DISCOVERED)
def test_recommendations_merge_discovered_places(mock_discover):
    clear_cache()
    body = _post(location=MADRID, cuisine="japanese").json()

    mock_discover.assert_called_once_with(MADRID["lat"], MADRID["lng"], 2000, "japanese")
    assert body["total_candidates"] == 4
    by_id = {item["restaurant"]["id"]: item for item in body["recommendations"]}
    external = by_id["osm-9"]
    assert external["restaurant"]["source"] == "external"
    assert [r["key"] for r in external["reasons"]] == [
        "new_discovery", "matches_craving", "distance_away", "highly_rated",
    ]
    assert external["distance"] < 1


@patch("foodiepair.recommendations.service.discover_nearby_restaurants")
def test_recommendations_skip_discovery_when_disabled(mock_discover):
    _post(location=MADRID, discover=False)
    mock_discover.assert_not_called()


@patch("foodiepair.recommendations.service.discover_nearby_restaurants", return_value=DISCOVERED)
def test_request_candidates_are_not_duplicated(mock_discover):
    clear_cache()
    supplied = [DISCOVERED[0].model_dump(mode="json")]
    body = _post(location=MADRID, external_candidates=supplied).json()

    ids = [item["restaurant"]["id"] for item in body["recommendations"]]
    assert ids.count("osm-9") == 1
    assert body["total_candidates"] == 4


def test_recommendations_cold_start():
    wishlist_only = [r for r in RESTAURANTS if r.get("visit_status") != "visited"]
    body = client.post("/recommendations", json={"restaurants": wishlist_only, "discover": False}).json()

    assert body["cold_start"] is True
    assert len(body["recommendations"]) == 3
    for item in body["recommendations"]:
        assert item["score"] == 0
        assert [r["key"] for r in item["reasons"]] == ["no_ratings_yet"]


def test_recommendations_localized_reasons():
    body = _post(discover=False, language="es-ES").json()
    top = body["recommendations"][0]

    assert top["reasons"][0]["key"] == "both_love_cuisine"
    assert top["reasons"][0]["message"] == "A los dos os encanta la comida Italian"


def test_recommendations_without_language_have_no_messages():
    body = _post(discover=False).json()
    for item in body["recommendations"]:
        assert all(r["message"] is None for r in item["reasons"])


def test_recommendations_validation_rejects_bad_score():
    bad = [dict(RATINGS[0], food_score=6)]
    resp = _post(ratings=bad)
    assert resp.status_code == 422


def test_recommendations_validation_rejects_bad_status():
    bad = [dict(RESTAURANTS[0], visit_status="maybe")]
    resp = _post(restaurants=bad)
    assert resp.status_code == 422
