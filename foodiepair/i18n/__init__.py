"""
Reason localization.

Responsibilities:
- Hold per-language message catalogs for recommendation reason keys.
- Render a symbolic reason and its parameters into display text.
"""
