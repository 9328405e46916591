from __future__ import annotations

import logging

from ..recommendations.models import RecommendationReason, RecommendationResult
from .catalog import CATALOGS, DEFAULT_LANGUAGE

logger = logging.getLogger(__name__)


def resolve_language(language: str | None) -> str:
    """Map a requested language tag (``es-MX``, ``EN``) onto a known catalog."""
    if not language:
        return DEFAULT_LANGUAGE
    primary = language.strip().lower().replace("_", "-").split("-")[0]
    return primary if primary in CATALOGS else DEFAULT_LANGUAGE


def render_reason(reason: RecommendationReason, language: str | None = DEFAULT_LANGUAGE) -> str:
    catalog = CATALOGS[resolve_language(language)]
    template = catalog.get(reason.key) or CATALOGS[DEFAULT_LANGUAGE].get(reason.key)
    if template is None:
        return reason.key.value
    try:
        return template.format(**reason.params)
    except KeyError:
        logger.warning("Missing parameter for reason %s: %s", reason.key.value, reason.params)
        return reason.key.value


def localize_results(
    results: list[RecommendationResult], language: str | None
) -> list[RecommendationResult]:
    """Return copies of *results* whose reasons carry rendered ``message`` text."""
    return [
        result.model_copy(
            update={
                "reasons": [
                    reason.model_copy(update={"message": render_reason(reason, language)})
                    for reason in result.reasons
                ]
            }
        )
        for result in results
    ]
