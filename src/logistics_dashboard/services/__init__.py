"""Service layer for the logistics dashboard."""
