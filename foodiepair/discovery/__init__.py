"""
Nearby place discovery.

Responsibilities:
- Query OpenStreetMap's Overpass API for restaurants around a point.
- Normalise raw OSM elements into ``ExternalCandidate`` records.
- Fail soft: discovery problems never block a recommendation request.
"""
