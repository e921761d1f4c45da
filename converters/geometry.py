from typing import Iterable

from constants import UNIT_SCALE
from models.graphics import Point


def to_mm(value: float) -> float:
    """Convert an EasyEDA length (10 mil units) to millimetres."""
    return value * UNIT_SCALE


def bbox_center(points: Iterable[Point]) -> Point:
    """Midpoint of the axis-aligned bounding box; the origin when empty."""
    points = list(points)
    if not points:
        return Point(x=0.0, y=0.0)
    xs = [p.x for p in points]
    ys = [p.y for p in points]
    return Point(x=(min(xs) + max(xs)) / 2, y=(min(ys) + max(ys)) / 2)


def mean_center(points: Iterable[Point]) -> Point:
    """Centroid of the points; the origin when empty."""
    points = list(points)
    if not points:
        return Point(x=0.0, y=0.0)
    return Point(
        x=sum(p.x for p in points) / len(points),
        y=sum(p.y for p in points) / len(points),
    )


def outward_sign(coordinate: float) -> float:
    """Direction pointing away from the origin; negative on the axis itself."""
    return 1.0 if coordinate > 0 else -1.0

