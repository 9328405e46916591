"""
FoodiePair recommendation service.

Ranks a pair's wishlist restaurants and nearby discoveries using the
pair's own rating history.
"""
