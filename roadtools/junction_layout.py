"""Lane meshes and cap points for every road entering a junction."""

from __future__ import annotations

from dataclasses import dataclass, field, replace
from typing import Sequence

from .geometry import UP, Vector
from .junction_mesh import (
    initialise_junction_points,
    lane_boundaries,
    lane_marking_vertices,
    lane_triangles,
    lane_vertices,
)
from .junction_model import CapPoint, JunctionLaneData, JunctionPoint, MeshSection

LEFT_EDGE = -1
LANE_POINT = 0
RIGHT_EDGE = 1
CENTER_POINT = 2


@dataclass
class JunctionLayout:
    """Everything built for the roads of a junction before its centre is filled.

    ``surface_sections`` holds the lane surfaces in section order;
    ``marking_sections`` maps a section index to its lane marking strip.
    ``sorted_points`` holds, for each road with right lanes, its cap points
    ordered by point type.
    """

    junction_points: list[JunctionPoint] = field(default_factory=list)
    cap_points: list[CapPoint] = field(default_factory=list)
    sorted_points: list[list[CapPoint]] = field(default_factory=list)
    center_line_ends: list[CapPoint] = field(default_factory=list)
    surface_sections: list[MeshSection] = field(default_factory=list)
    marking_sections: dict[int, MeshSection] = field(default_factory=dict)


def cap_points_for_side(
    junction_index: int,
    junction_point: JunctionPoint,
    boundaries: Sequence[Vector],
    lanes: Sequence[JunctionLaneData],
    right_side: bool,
) -> list[CapPoint]:
    """Cap points at the last cross section, outermost boundary first.

    The first point is the road's edge point; the rest are lane points.
    """
    if len(boundaries) < len(lanes):
        raise ValueError("not enough lane boundaries for the lanes given")
    edge_type = RIGHT_EDGE if right_side else LEFT_EDGE
    right_vector = junction_point.forward_vector.cross(UP)
    last = len(boundaries) - 1
    points = []
    for p, lane in enumerate(lanes):
        points.append(
            CapPoint(
                location=boundaries[last - p],
                junction_id=junction_index,
                point_type=edge_type if p == 0 else LANE_POINT,
                forward_vector=junction_point.forward_vector,
                right_vector=right_vector,
                angle_from_center=0.0,
                point_id=p,
                offset_distance=0.0,
                u_value=0.0,
                lane_direction=1 if right_side else 0,
                turning_rule=lane.turning_rule,
                road_type=lane.road_type,
                signal_active_phase=[] if right_side else list(lane.signal_active_phase),
            )
        )
    return points


def center_cap_point(junction_index: int, junction_point: JunctionPoint) -> CapPoint:
    """The cap point at the inner end of a road's centre line."""
    if not junction_point.left_lanes:
        raise ValueError("junction point has no left lanes")
    if not junction_point.center_line_points:
        raise ValueError("junction point has no centre line")
    end = junction_point.center_line_points[-1]
    first_lane = junction_point.left_lanes[0]
    return CapPoint(
        location=end.location,
        junction_id=junction_index,
        point_type=CENTER_POINT,
        forward_vector=end.forward_vector,
        right_vector=junction_point.forward_vector.cross(UP),
        lane_direction=0,
        turning_rule=first_lane.turning_rule,
        road_type=first_lane.road_type,
    )


def _build_side(
    layout: JunctionLayout,
    junction_point: JunctionPoint,
    lanes: Sequence[JunctionLaneData],
    right_side: bool,
    world_location: Vector,
) -> list[Vector]:
    boundaries = lane_boundaries(lanes, junction_point.center_line_points)
    point_count = len(junction_point.center_line_points)
    # Left surfaces wind in reverse, right markings wind in reverse.
    surface_reverse = not right_side
    marking_reverse = right_side
    for j, lane in enumerate(lanes):
        vertices, uvs = lane_vertices(
            boundaries, j, point_count, len(lanes), lane.uv_tiling, lane.uv_offset, world_location
        )
        layout.surface_sections.append(
            MeshSection(vertices, lane_triangles(point_count, surface_reverse), uvs, lane.material)
        )
        if lane.lane_markings:
            marking = lane.lane_markings[0]
            marking_vertices, marking_uvs = lane_marking_vertices(
                boundaries,
                j,
                point_count,
                len(lanes),
                marking.uv_tiling,
                marking.uv_offset,
                marking.marking_width,
                marking.marking_offset,
            )
            layout.marking_sections[len(layout.surface_sections)] = MeshSection(
                marking_vertices,
                lane_triangles(point_count, marking_reverse),
                marking_uvs,
                marking.marking_material,
            )
    return boundaries


def build_lane_geometry(
    junction_points: Sequence[JunctionPoint], junction_center: Vector, world_location: Vector
) -> JunctionLayout:
    """Initialise the roads, then build their lane meshes and cap points."""
    layout = JunctionLayout(
        junction_points=initialise_junction_points(junction_points, junction_center, world_location)
    )
    for i, point in enumerate(layout.junction_points):
        current: list[CapPoint] = []
        if point.left_lanes:
            boundaries = _build_side(layout, point, point.left_lanes, False, world_location)
            left = cap_points_for_side(i, point, boundaries, point.left_lanes, False)
            center = center_cap_point(i, point)
            layout.cap_points += left
            layout.cap_points.append(center)
            current += [replace(p) for p in left]
            current.append(replace(center))
            layout.center_line_ends.append(replace(center))
        if point.right_lanes:
            boundaries = _build_side(layout, point, point.right_lanes, True, world_location)
            right = cap_points_for_side(i, point, boundaries, point.right_lanes, True)
            layout.cap_points += right
            current += [replace(p) for p in right]
            layout.sorted_points.append(sorted(current, key=lambda p: p.point_type))
    return layout