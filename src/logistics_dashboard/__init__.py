"""Logistics dashboard backend: shops, drivers, routes, targets and route optimization."""

__version__ = "0.1.0"
