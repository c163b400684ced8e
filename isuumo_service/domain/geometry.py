"""
Planar geometry over (latitude, longitude) coordinates.

Latitude is treated as the x axis and longitude as the y axis, which is the
same orientation the polygon literal produced by ``serialize`` has when it is
handed to PostgreSQL. Polygons are always closed: the last vertex connects back
to the first whether or not the caller repeated it.

Points lying exactly on an edge or a vertex are considered inside. This is the
rule PostgreSQL applies for ``polygon @> point``, so the local test and the
database test agree on boundary points.
"""
from typing import Sequence

from .exceptions import BadRequestError
from .models import BoundingBox, Coordinate

# Tolerance for the collinearity check of on-edge points
EPSILON = 1e-9


def bounding_box_of(polygon: Sequence[Coordinate]) -> BoundingBox:
    """
    Compute the smallest axis-aligned box holding every vertex

    Raises:
        BadRequestError: If the polygon has no vertices
    """
    if not polygon:
        raise BadRequestError("polygon must have at least one coordinate")

    first = polygon[0]
    min_lat = max_lat = first.latitude
    min_lon = max_lon = first.longitude
    for vertex in polygon[1:]:
        min_lat = min(min_lat, vertex.latitude)
        min_lon = min(min_lon, vertex.longitude)
        max_lat = max(max_lat, vertex.latitude)
        max_lon = max(max_lon, vertex.longitude)

    return BoundingBox(
        low=Coordinate(min_lat, min_lon),
        high=Coordinate(max_lat, max_lon),
    )


def _on_segment(a: Coordinate, b: Coordinate, p: Coordinate) -> bool:
    cross = (b.latitude - a.latitude) * (p.longitude - a.longitude) - (
        b.longitude - a.longitude
    ) * (p.latitude - a.latitude)
    if abs(cross) > EPSILON:
        return False
    return (
        min(a.latitude, b.latitude) <= p.latitude <= max(a.latitude, b.latitude)
        and min(a.longitude, b.longitude) <= p.longitude <= max(a.longitude, b.longitude)
    )


def contains_point(polygon: Sequence[Coordinate], point: Coordinate) -> bool:
    """
    Exact point-in-polygon test (even-odd rule, boundary inclusive)

    A single-vertex polygon contains only that vertex and a two-vertex polygon
    contains only the points of its segment.

    Raises:
        BadRequestError: If the polygon has no vertices
    """
    if not polygon:
        raise BadRequestError("polygon must have at least one coordinate")

    n = len(polygon)
    if n == 1:
        return polygon[0] == point

    for i in range(n):
        if _on_segment(polygon[i], polygon[(i + 1) % n], point):
            return True
    if n == 2:
        return False

    x, y = point.latitude, point.longitude
    inside = False
    j = n - 1
    for i in range(n):
        xi, yi = polygon[i].latitude, polygon[i].longitude
        xj, yj = polygon[j].latitude, polygon[j].longitude
        if (yi > y) != (yj > y):
            x_intersect = (xj - xi) * (y - yi) / (yj - yi) + xi
            if x < x_intersect:
                inside = not inside
        j = i
    return inside


def serialize(polygon: Sequence[Coordinate]) -> str:
    """
    Render the polygon as a PostgreSQL polygon literal, e.g. ``((0,0),(0,10),(10,10))``

    Vertex order is kept exactly; PostgreSQL closes the ring itself.
    """
    if not polygon:
        raise BadRequestError("polygon must have at least one coordinate")
    points = ",".join(f"({c.latitude},{c.longitude})" for c in polygon)
    return f"({points})"
