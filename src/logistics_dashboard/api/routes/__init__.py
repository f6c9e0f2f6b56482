"""Route group exports."""

from . import analytics, drivers, health, routes, shops, targets

__all__ = ["analytics", "drivers", "health", "routes", "shops", "targets"]
