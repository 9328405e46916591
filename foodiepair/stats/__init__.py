"""
Pair statistics.

Compares how generously each member of the pair rates the places they visit.
"""
