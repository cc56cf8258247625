"""Splines and the lane splines that traffic drives along."""

from __future__ import annotations

import bisect
import enum
from dataclasses import dataclass, field
from itertools import accumulate, pairwise
from typing import Iterable

from .geometry import UP, ZERO, BoundingBox, Vector, lerp

Colour = tuple[int, int, int, int]

RED: Colour = (255, 0, 0, 255)
GREEN: Colour = (0, 255, 0, 255)
BLUE: Colour = (0, 0, 255, 255)
YELLOW: Colour = (255, 255, 0, 255)
CYAN: Colour = (0, 255, 255, 255)

DEBUG_COLOURS: tuple[Colour, ...] = (RED, BLUE, GREEN, YELLOW, CYAN)
LANE_STATUS_COLOURS: tuple[Colour, ...] = (RED, GREEN, BLUE)


@dataclass(frozen=True)
class SplinePoint:
    """A control point, with its position relative to the spline's origin."""

    position: Vector
    input_key: float = 0.0
    scale: Vector = Vector(1.0, 1.0, 1.0)


class Spline:
    """A piecewise-linear spline through ordered control points.

    Control point positions are local; world locations add ``origin``.
    """

    def __init__(self, points: Iterable[SplinePoint] = (), origin: Vector = ZERO):
        self.origin = origin
        self._points: list[SplinePoint] = []
        self.add_points(points)

    def __len__(self) -> int:
        return len(self._points)

    def __iter__(self):
        return iter(self._points)

    @property
    def points(self) -> list[SplinePoint]:
        return list(self._points)

    def add_point(self, point: SplinePoint) -> None:
        """Insert a point, keeping points ordered by input key."""
        keys = [p.input_key for p in self._points]
        self._points.insert(bisect.bisect_right(keys, point.input_key), point)

    def add_points(self, points: Iterable[SplinePoint]) -> None:
        for point in points:
            self.add_point(point)

    def clear(self) -> None:
        self._points.clear()

    def _world(self) -> list[Vector]:
        if not self._points:
            raise ValueError("spline has no points")
        return [self.origin + p.position for p in self._points]

    def _clamp_index(self, index: int) -> int:
        return min(max(index, 0), len(self._points) - 1)

    def _segment_lengths(self, world: list[Vector]) -> list[float]:
        return [a.distance(b) for a, b in pairwise(world)]

    def location_at_point(self, index: int) -> Vector:
        """World location of a control point; the index is clamped to the spline."""
        world = self._world()
        return world[self._clamp_index(index)]

    def direction_at_point(self, index: int) -> Vector:
        """Unit direction of travel at a control point."""
        world = self._world()
        if len(world) < 2:
            return ZERO
        i = self._clamp_index(index)
        before = world[max(i - 1, 0)]
        after = world[min(i + 1, len(world) - 1)]
        return (after - before).normalized()

    def length(self) -> float:
        return sum(self._segment_lengths(self._world()))

    def distance_at_point(self, index: int) -> float:
        """Distance along the spline to a control point."""
        world = self._world()
        cumulative = [0.0, *accumulate(self._segment_lengths(world))]
        return cumulative[self._clamp_index(index)]

    def _locate(self, distance: float) -> tuple[list[Vector], int, float]:
        world = self._world()
        if len(world) == 1:
            return world, 0, 0.0
        remaining = max(distance, 0.0)
        for i, segment in enumerate(self._segment_lengths(world)):
            if remaining <= segment:
                return world, i, (remaining / segment if segment else 0.0)
            remaining -= segment
        return world, len(world) - 2, 1.0

    def location_at_distance(self, distance: float) -> Vector:
        world, i, fraction = self._locate(distance)
        if len(world) == 1:
            return world[0]
        return lerp(world[i], world[i + 1], fraction)

    def direction_at_distance(self, distance: float) -> Vector:
        world, i, _ = self._locate(distance)
        if len(world) == 1:
            return ZERO
        return (world[i + 1] - world[i]).normalized()

    def right_vector_at_distance(self, distance: float) -> Vector:
        return UP.cross(self.direction_at_distance(distance)).normalized()

    def location_at_time(self, t: float) -> Vector:
        """Location at time ``t`` in ``[0, 1]``, spread evenly over the input keys."""
        world = self._world()
        if len(world) == 1:
            return world[0]
        key = min(max(t, 0.0), 1.0) * (len(world) - 1)
        i = min(int(key), len(world) - 2)
        return lerp(world[i], world[i + 1], key - i)

    def distance_at_location(self, location: Vector) -> float:
        """Distance along the spline of the point nearest to ``location``."""
        world = self._world()
        best_gap = None
        best_distance = 0.0
        travelled = 0.0
        for a, b in pairwise(world):
            segment = b - a
            seg_square = segment.dot(segment)
            fraction = 0.0
            if seg_square > 0:
                fraction = min(max((location - a).dot(segment) / seg_square, 0.0), 1.0)
            gap = location.distance(a + segment * fraction)
            if best_gap is None or gap < best_gap:
                best_gap = gap
                best_distance = travelled + fraction * segment.length()
            travelled += segment.length()
        return best_distance

    def bounding_box(self) -> BoundingBox:
        return BoundingBox.from_points(self._world())


class LaneSplineType(enum.IntEnum):
    ROAD = 0
    JUNCTION = 1
    PARKING = 2


@dataclass(eq=False)
class LaneConnection:
    """A link from the end of one lane to the start of another."""

    lane: LaneSpline
    connection_position: int = 0


@dataclass(eq=False)
class LaneSpline:
    """A lane that traffic follows, with its signal state and connections."""

    spline: Spline = field(default_factory=Spline)
    name: str = ""
    lane_direction: int = 0
    lane_status: int = 1
    lane_spline_type: LaneSplineType = LaneSplineType.ROAD
    is_junction_lane: bool = False
    signal_active_phase: list[int] = field(default_factory=list)
    connections: list[LaneConnection] = field(default_factory=list)

    def reverse(self) -> None:
        """Flip the direction of travel along the lane."""
        points = self.spline.points
        last = len(points) - 1
        self.spline.clear()
        for i, point in enumerate(points):
            self.spline.add_point(SplinePoint(point.position, float(last - i), point.scale))

    def start_position(self) -> Vector:
        return self.spline.location_at_point(0)

    def status_colour(self) -> Colour:
        if not 0 <= self.lane_status < len(LANE_STATUS_COLOURS):
            raise ValueError(f"unknown lane status {self.lane_status}")
        return LANE_STATUS_COLOURS[self.lane_status]