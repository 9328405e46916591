from __future__ import annotations

import hashlib
import json
import time
from typing import Any

from .models import ExternalCandidate

# Coordinates are rounded to ~11 m so jittery GPS fixes share an entry
COORD_PRECISION = 4
DISCOVERY_TTL = 300  # 5 minutes

_entries: dict[str, dict[str, Any]] = {}
_hits: int = 0
_misses: int = 0


def discovery_key(lat: float, lng: float, radius: int, cuisine: str | None) -> str:
    query = {
        "lat": round(lat, COORD_PRECISION),
        "lng": round(lng, COORD_PRECISION),
        "radius": radius,
        "cuisine": cuisine.strip().lower() if cuisine else None,
    }
    normalized = json.dumps(query, sort_keys=True)
    return hashlib.sha256(normalized.encode()).hexdigest()[:16]


def get_discovery(key: str, ttl: float = DISCOVERY_TTL) -> list[ExternalCandidate] | None:
    """Return the cached places for *key*, or ``None`` on miss or expiry."""
    global _hits, _misses
    entry = _entries.get(key)
    if entry and time.time() - entry["stored_at"] < ttl:
        _hits += 1
        return list(entry["places"])
    if entry:
        del _entries[key]
    _misses += 1
    return None


def store_discovery(key: str, places: list[ExternalCandidate], ttl: float = DISCOVERY_TTL) -> None:
    now = time.time()
    # Drop entries no lookup will ever reach again
    for stale in [k for k, e in _entries.items() if now - e["stored_at"] >= ttl]:
        del _entries[stale]
    _entries[key] = {"places": list(places), "stored_at": now}


def get_cache_stats() -> dict:
    lookups = _hits + _misses
    return {
        "size": len(_entries),
        "hits": _hits,
        "misses": _misses,
        "hit_rate": round(_hits / lookups * 100, 1) if lookups > 0 else 0.0,
    }


def clear_cache() -> None:
    global _hits, _misses
    _entries.clear()
    _hits = 0
    _misses = 0
