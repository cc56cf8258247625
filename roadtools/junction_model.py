"""Data describing a junction: its incoming roads, lanes and generated points."""

from __future__ import annotations

import enum
from dataclasses import dataclass, field
from typing import Iterable, Optional

from .geometry import ZERO, Vector, Vector2

FORWARD = Vector(1.0, 0.0, 0.0)
RIGHT = Vector(0.0, 1.0, 0.0)


class LaneTurningOption(enum.IntEnum):
    """Which ways a lane may turn on leaving a junction."""

    ALL = 0
    LEFT = 1
    LEFTFORWARD = 2
    FORWARD = 3
    FORWARDRIGHT = 4
    RIGHT = 5


class LaneDrivingType(enum.IntEnum):
    """What a lane is used for."""

    NONE = 0
    DRIVING = 1
    SHOULDER = 2
    BICYCLE = 3


@dataclass
class LaneMarking:
    """A painted strip along a lane edge."""

    marking_offset: float = 0.0
    marking_width: float = 10.0
    marking_material: Optional[str] = None
    uv_tiling: Vector2 = Vector2(1.0, 1.0)
    uv_offset: Vector2 = Vector2(0.0, 0.0)


@dataclass
class JunctionLaneData:
    """One lane of a road entering a junction."""

    lane_width: float = 350.0
    lane_forming_strength: float = 0.0
    start: float = 0.0
    end: float = 1.0
    lane_type: int = 0
    lane_width_resolution: int = 0
    material: Optional[str] = None
    uv_tiling: Vector2 = Vector2(1.0, 1.0)
    uv_offset: Vector2 = Vector2(0.0, 0.0)
    lane_markings: list[LaneMarking] = field(default_factory=list)
    turning_rule: LaneTurningOption = LaneTurningOption.ALL
    road_type: LaneDrivingType = LaneDrivingType.NONE
    signal_active_phase: list[int] = field(default_factory=list)


@dataclass
class CenterLinePoint:
    """A sample along the centre line of a road entering a junction."""

    location: Vector = ZERO
    forward_vector: Vector = FORWARD
    right_vector: Vector = RIGHT


@dataclass
class JunctionPoint:
    """A road entering the junction, with its lanes on either side."""

    road_id: int = 0
    location: Vector = ZERO
    end_location: Vector = ZERO
    junction_type: int = 0
    left_lanes: list[JunctionLaneData] = field(default_factory=list)
    right_lanes: list[JunctionLaneData] = field(default_factory=list)
    angle_from_center: float = 0.0
    index: int = 0
    u_length: float = 0.5
    u_resolution: int = 50
    forward_vector: Vector = ZERO
    right_vector: Vector = ZERO
    center_line_points: list[CenterLinePoint] = field(default_factory=list)


@dataclass
class CapPoint:
    """A point where a lane boundary meets the junction.

    ``point_type`` is -1 for the left-most point, 0 for a lane point,
    1 for the right-most point and 2 for the centre point.
    """

    location: Vector = ZERO
    junction_id: int = 0
    point_type: int = 0
    forward_vector: Vector = ZERO
    right_vector: Vector = ZERO
    angle_from_center: float = 0.0
    point_id: int = 0
    offset_distance: float = 0.0
    u_value: float = 0.0
    offset: float = 0.0
    lane_direction: int = 0
    turning_rule: LaneTurningOption = LaneTurningOption.ALL
    road_type: LaneDrivingType = LaneDrivingType.NONE
    signal_active_phase: list[int] = field(default_factory=list)


@dataclass
class IntersectPoint:
    """Where the edge of one road meets the edge of its neighbour."""

    location: Vector = ZERO
    intersected_point_id: int = 0
    junction_id: int = 0
    point_type: int = 0
    intersect_distance: float = 0.0
    forward_vector: Vector = ZERO


@dataclass
class CornerPoints:
    """The three points forming a junction corner: intersection, then both edges."""

    location: list[Vector] = field(default_factory=list)
    point_id: list[int] = field(default_factory=list)
    junction_ids: list[int] = field(default_factory=list)


@dataclass
class BezierCorner:
    """The curved edge joining two neighbouring roads at a corner."""

    corner_id: int = 0
    position: list[Vector] = field(default_factory=list)
    normal: list[Vector] = field(default_factory=list)
    start_junction_id: int = 0
    end_junction_id: int = 0


@dataclass
class TurningLanePoint:
    """Where a turning lane starts or ends. ``lane_direction`` 0 is forward."""

    location: Vector = ZERO
    junction_id: int = 0
    lane_id: int = 0
    lane_direction: int = 0
    turning_rule: LaneTurningOption = LaneTurningOption.ALL
    road_type: LaneDrivingType = LaneDrivingType.NONE
    forward_vector: Vector = ZERO
    signal_active_phase: list[int] = field(default_factory=list)


@dataclass
class TurningLaneConnection:
    """A lane entering the junction and every lane it may leave by."""

    start_point: TurningLanePoint
    end_points: list[TurningLanePoint] = field(default_factory=list)


@dataclass
class TurningLane:
    """A curved path through the junction."""

    turning_lane_id: int = 0
    points: list[Vector] = field(default_factory=list)
    normals: list[Vector] = field(default_factory=list)
    signal_active_phase: list[int] = field(default_factory=list)


@dataclass
class MeshSection:
    """A triangle mesh: vertices, triangle indices in threes, texture coordinates."""

    vertices: list[Vector] = field(default_factory=list)
    triangles: list[int] = field(default_factory=list)
    uvs: list[Vector2] = field(default_factory=list)
    material: Optional[str] = None

    def __post_init__(self) -> None:
        if len(self.triangles) % 3:
            raise ValueError("triangle indices must come in threes")

    @property
    def triangle_count(self) -> int:
        return len(self.triangles) // 3


def sort_junction_points(points: Iterable[JunctionPoint]) -> list[JunctionPoint]:
    """Junction points ordered by angle from the centre, largest first."""
    return sorted(points, key=lambda point: point.angle_from_center, reverse=True)