"""API layer: application factory and operational routes."""
