"""Coordinate helpers for the normalized [0, 100] authoring surface."""

import math
from collections.abc import Sequence
from dataclasses import dataclass

import shapely
from shapely.geometry import Polygon

from lumamap.models import SURFACE_MAX, SURFACE_MIN, Point

# Vertex handle radius in surface percent
HANDLE_RADIUS = 1.5


@dataclass(frozen=True)
class SurfaceBounds:
    """Where the surface sits in client (pixel) coordinates."""

    left: float = 0.0
    top: float = 0.0
    width: float = 100.0
    height: float = 100.0

    @property
    def is_empty(self) -> bool:
        return self.width <= 0 or self.height <= 0


def clamp(value: float, low: float = SURFACE_MIN, high: float = SURFACE_MAX) -> float:
    return min(high, max(low, value))


def clamp_point(point: Point) -> Point:
    """Clamp both axes into the surface. Points already inside are returned unchanged."""
    if point.is_on_surface:
        return point
    return Point(x=clamp(point.x), y=clamp(point.y))


def normalize(client_x: float, client_y: float, bounds: SurfaceBounds) -> Point:
    """
    Map client coordinates to surface percent.

    `(client - origin) / size * 100` on each axis. The result is not
    clamped; a zero-sized surface maps everything to the origin.
    """
    if bounds.is_empty:
        return Point(x=0.0, y=0.0)
    return Point(
        x=(client_x - bounds.left) / bounds.width * SURFACE_MAX,
        y=(client_y - bounds.top) / bounds.height * SURFACE_MAX,
    )


def to_shape(polygon: Sequence[Point]) -> Polygon:
    """Shapely polygon for a region outline, closed implicitly."""
    return Polygon([vertex.to_tuple() for vertex in polygon])


def point_in_polygon(point: Point, polygon: Sequence[Point]) -> bool:
    """Interior containment test. Polygons with fewer than 3 points contain nothing."""
    if len(polygon) < 3:
        return False
    return bool(shapely.contains_xy(to_shape(polygon), point.x, point.y))


def find_vertex(point: Point, polygon: Sequence[Point], radius: float = HANDLE_RADIUS) -> int | None:
    """Index of the closest vertex within `radius` of `point`, or None."""
    best_index = None
    best_distance = radius
    for index, vertex in enumerate(polygon):
        distance = math.hypot(vertex.x - point.x, vertex.y - point.y)
        if distance <= best_distance:
            best_index = index
            best_distance = distance
    return best_index


def polygon_area(polygon: Sequence[Point]) -> float:
    """Unsigned area in square surface percent."""
    if len(polygon) < 3:
        return 0.0
    return float(to_shape(polygon).area)
