"""Small helpers shared across the map engine."""
