from __future__ import annotations

from collections import Counter
from typing import Any


def _rate(count: int, total: int) -> float:
    return round(count / total * 100, 1) if total else 0.0


def compute_analytics(events: list[dict[str, Any]]) -> dict[str, Any]:
    requests = [e for e in events if e["type"] == "recommendation"]
    total = len(requests)

    times = [r["response_time_ms"] for r in requests if "response_time_ms" in r]
    avg_time = round(sum(times) / len(times), 1) if times else 0.0

    # Cravings are free text, so fold case before counting
    craving_counter: Counter[str] = Counter()
    for r in requests:
        craving = (r.get("cuisine") or "").strip().lower()
        if craving:
            craving_counter[craving] += 1
    top_cravings = [{"name": n, "count": c} for n, c in craving_counter.most_common(10)]

    with_location = sum(1 for r in requests if r.get("has_location"))
    cold_starts = sum(1 for r in requests if r.get("cold_start"))
    returned = [r.get("results_returned", 0) for r in requests]

    discovery_lookups = [r for r in requests if r.get("discovery_cache_hit") is not None]
    discovery_hits = sum(1 for r in discovery_lookups if r["discovery_cache_hit"])

    return {
        "total_requests": total,
        "avg_response_time_ms": avg_time,
        "avg_results_returned": round(sum(returned) / total, 2) if total else 0.0,
        "top_cravings": top_cravings,
        "location_usage_rate": _rate(with_location, total),
        "cold_start_rate": _rate(cold_starts, total),
        "discovery": {
            "lookups": len(discovery_lookups),
            "cache_hits": discovery_hits,
            "cache_hit_rate": _rate(discovery_hits, len(discovery_lookups)),
            "places_found": sum(r.get("external_count", 0) for r in requests),
        },
    }
