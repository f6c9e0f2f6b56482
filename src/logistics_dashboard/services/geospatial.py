"""Geospatial helper functions."""

from __future__ import annotations

import math
from typing import Sequence

EARTH_RADIUS_KM = 6371.0


def haversine_km(lat1: float, lon1: float, lat2: float, lon2: float) -> float:
    """Compute distance between two coordinates using the Haversine formula."""

    phi1, phi2 = math.radians(lat1), math.radians(lat2)
    d_phi = math.radians(lat2 - lat1)
    d_lambda = math.radians(lon2 - lon1)

    a = math.sin(d_phi / 2) ** 2 + math.cos(phi1) * math.cos(phi2) * math.sin(d_lambda / 2) ** 2
    c = 2 * math.atan2(math.sqrt(a), math.sqrt(1 - a))
    return EARTH_RADIUS_KM * c


def distance_matrix_km(points: Sequence[tuple[float, float]]) -> list[list[float]]:
    """Symmetric pairwise haversine distances for (lat, lon) points."""

    size = len(points)
    matrix = [[0.0] * size for _ in range(size)]
    for i in range(size):
        for j in range(i + 1, size):
            distance = haversine_km(points[i][0], points[i][1], points[j][0], points[j][1])
            matrix[i][j] = distance
            matrix[j][i] = distance
    return matrix


def path_length_km(matrix: Sequence[Sequence[float]], order: Sequence[int]) -> float:
    """Length of an open path visiting matrix nodes in ``order``."""

    return sum(matrix[a][b] for a, b in zip(order, order[1:]))
