from __future__ import annotations

from ..recommendations.models import ReasonKey

DEFAULT_LANGUAGE = "en"

CATALOGS: dict[str, dict[ReasonKey, str]] = {
    "en": {
        ReasonKey.no_ratings_yet: "Rate a few visits so we can learn your taste",
        ReasonKey.craving: "Matches your craving",
        ReasonKey.both_love_cuisine: "You both love {cuisine} food",
        ReasonKey.very_close: "Very close, only {distance} km away",
        ReasonKey.distance_away: "{distance} km away",
        ReasonKey.favorite: "Marked as a favorite",
        ReasonKey.new_discovery: "New place to discover",
        ReasonKey.matches_craving: "Matches what you're craving",
        ReasonKey.highly_rated: "Highly rated ({rating}★)",
    },
    "es": {
        ReasonKey.no_ratings_yet: "Valora algunas visitas para conocer vuestros gustos",
        ReasonKey.craving: "Coincide con tu antojo",
        ReasonKey.both_love_cuisine: "A los dos os encanta la comida {cuisine}",
        ReasonKey.very_close: "Muy cerca, a solo {distance} km",
        ReasonKey.distance_away: "A {distance} km",
        ReasonKey.favorite: "Marcado como favorito",
        ReasonKey.new_discovery: "Un sitio nuevo por descubrir",
        ReasonKey.matches_craving: "Justo lo que te apetece",
        ReasonKey.highly_rated: "Muy bien valorado ({rating}★)",
    },
}

SUPPORTED_LANGUAGES = sorted(CATALOGS)
