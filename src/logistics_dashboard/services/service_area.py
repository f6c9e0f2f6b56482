"""Operating-area geometry loaded from GeoJSON."""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Any, Mapping

from shapely.geometry import Point, shape
from shapely.geometry.base import BaseGeometry
from shapely.ops import unary_union

from ..errors import ConfigurationError

logger = logging.getLogger(__name__)

AREA_GEOMETRY_TYPES = {"Polygon", "MultiPolygon"}


class ServiceArea:
    """Union of the polygon features of a GeoJSON FeatureCollection.

    Non-area features such as roads (LineString) are ignored.
    """

    def __init__(self, geometry: BaseGeometry, names: list[str] | None = None) -> None:
        self.geometry = geometry
        self.names = names or []

    @classmethod
    def from_geojson(cls, data: Mapping[str, Any]) -> "ServiceArea":
        if not isinstance(data, Mapping) or data.get("type") != "FeatureCollection":
            raise ConfigurationError("Service area must be a GeoJSON FeatureCollection", setting="service_area_file")

        polygons = []
        names: list[str] = []
        for feature in data.get("features") or []:
            geometry = (feature or {}).get("geometry") or {}
            if geometry.get("type") not in AREA_GEOMETRY_TYPES:
                continue
            try:
                polygons.append(shape(geometry))
            except (ValueError, TypeError, AttributeError) as exc:
                raise ConfigurationError(f"Invalid service area geometry: {exc}", setting="service_area_file") from exc
            name = (feature.get("properties") or {}).get("name")
            if name:
                names.append(str(name))

        if not polygons:
            raise ConfigurationError("Service area contains no polygon features", setting="service_area_file")
        return cls(unary_union(polygons), names)

    @classmethod
    def from_file(cls, path: Path) -> "ServiceArea":
        try:
            data = json.loads(Path(path).read_text(encoding="utf-8"))
        except (OSError, json.JSONDecodeError) as exc:
            raise ConfigurationError(f"Could not read service area file {path}: {exc}", setting="service_area_file") from exc
        area = cls.from_geojson(data)
        logger.info("Loaded service area from %s (%s)", path, ", ".join(area.names) or "unnamed")
        return area

    def contains(self, lat: float, lon: float) -> bool:
        """Return True if the point lies inside or on the edge of the area."""
        # GeoJSON coordinates are (lon, lat)
        return self.geometry.intersects(Point(lon, lat))
