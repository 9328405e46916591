"""
Recommendation engine.

Responsibilities:
- Learn cuisine and price-tier affinities from the pair's ratings.
- Score wishlist restaurants and externally discovered places.
- Return a short ranked list with symbolic reasons for each pick.
"""
