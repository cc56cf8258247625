"""The centre of a junction: the fill between roads and the curved corners."""

from __future__ import annotations

import math
from dataclasses import dataclass, field, replace
from typing import Optional, Sequence

from .geometry import UP, Vector, Vector2, bezier_curve_position, lerp
from .junction_layout import LEFT_EDGE, RIGHT_EDGE, JunctionLayout
from .junction_mesh import line_intersection, triangle_indices_fan, triangle_indices_grid
from .junction_model import (
    BezierCorner,
    CapPoint,
    CornerPoints,
    IntersectPoint,
    JunctionPoint,
    MeshSection,
)

EDGE_REACH = 10000.0
BEZIER_STEPS = 30
MARKING_HALF_WIDTH = 15.0
MARKING_LIFT = Vector(0.0, 0.0, 10.0)


@dataclass
class CenterGeometry:
    """Meshes and intermediate points built for the centre of a junction.

    Section indices follow the order the meshes are built in: one section per
    road, then the centre fan, then one section per corner.
    """

    cap_points: list[CapPoint] = field(default_factory=list)
    intersect_points: list[IntersectPoint] = field(default_factory=list)
    corner_points: list[CornerPoints] = field(default_factory=list)
    sorted_points: list[list[CapPoint]] = field(default_factory=list)
    road_sections: list[MeshSection] = field(default_factory=list)
    center_section: Optional[MeshSection] = None
    corner_sections: list[MeshSection] = field(default_factory=list)
    bezier_corners: list[BezierCorner] = field(default_factory=list)


def sort_by_angle_from_center(cap_points: Sequence[CapPoint], center: Vector) -> list[CapPoint]:
    """Copies of the cap points with their angle around ``center`` set, sorted by it."""
    measured = []
    for point in cap_points:
        offset = point.location - center
        measured.append(replace(point, angle_from_center=math.atan2(offset.y, offset.x)))
    return sorted(measured, key=lambda p: p.angle_from_center)


def find_corner_intersections(
    edge_points: Sequence[CapPoint],
) -> tuple[list[IntersectPoint], list[CornerPoints]]:
    """Meet each left edge with the next edge point, following both roads inward.

    Returns the intersect points, two per corner, sorted by junction and point
    type, and the corner triangles in the order they were found. Where the two
    edges do not cross, the corner sits halfway between their starts.
    """
    intersects: list[IntersectPoint] = []
    corners: list[CornerPoints] = []
    count = len(edge_points)
    for i, here in enumerate(edge_points):
        if here.point_type == RIGHT_EDGE:
            continue
        there = edge_points[(i + 1) % count]
        a_start = here.location
        b_start = there.location
        crossing = line_intersection(
            a_start,
            a_start + here.forward_vector * -EDGE_REACH,
            b_start,
            b_start + there.forward_vector * -EDGE_REACH,
        )
        if crossing.length() == 0:
            crossing = lerp(a_start, b_start, 0.5)

        intersects.append(
            IntersectPoint(
                location=crossing,
                intersected_point_id=here.point_id,
                junction_id=here.junction_id,
                point_type=here.point_type,
                intersect_distance=a_start.distance(crossing),
                forward_vector=here.forward_vector,
            )
        )
        intersects.append(
            IntersectPoint(
                location=crossing,
                intersected_point_id=there.point_id,
                junction_id=there.junction_id,
                point_type=there.point_type,
                intersect_distance=b_start.distance(crossing),
                forward_vector=there.forward_vector,
            )
        )
        corners.append(
            CornerPoints(
                location=[crossing, a_start, b_start],
                point_id=[0, here.point_id, there.point_id],
                junction_ids=[-1, here.junction_id, there.junction_id],
            )
        )
    intersects.sort(key=lambda p: (p.junction_id, p.point_type))
    return intersects, corners


def _offset_road_points(
    points: Sequence[CapPoint], first: IntersectPoint, second: IntersectPoint
) -> list[CapPoint]:
    if len(points) < 2:
        raise ValueError("a road needs at least two cap points")
    start = points[0].location
    end = points[-2].location
    span = start.distance(end)
    if span == 0:
        raise ValueError("road cap points have no width")
    start_forward = (first.location - start).normalized()
    end_forward = (second.location - end).normalized()
    updated = []
    for point in points:
        u_value = start.distance(point.location) / span
        updated.append(
            replace(
                point,
                u_value=u_value,
                offset_distance=lerp(first.intersect_distance, second.intersect_distance, u_value),
                forward_vector=lerp(-start_forward, -end_forward, u_value),
            )
        )
    return updated


def _bezier_corner(index: int, corner: CornerPoints) -> BezierCorner:
    crossing, a_start, b_start = corner.location
    step = 1.0 / BEZIER_STEPS
    positions = [crossing]
    positions += [
        bezier_curve_position(b_start, crossing, a_start, j * step) for j in range(BEZIER_STEPS + 1)
    ]
    return BezierCorner(
        corner_id=index,
        position=positions,
        start_junction_id=corner.junction_ids[2],
        end_junction_id=corner.junction_ids[1],
    )


def build_center_geometry(
    layout: JunctionLayout, junction_center: Vector, world_location: Vector
) -> CenterGeometry:
    """Fill the junction centre between the roads of ``layout``."""
    if not layout.sorted_points:
        return CenterGeometry()

    center = junction_center + world_location
    cap_points = sort_by_angle_from_center(layout.cap_points, center)
    edges = [p for p in cap_points if p.point_type in (LEFT_EDGE, RIGHT_EDGE)]
    intersects, corners = find_corner_intersections(edges)
    if len(intersects) < 2 * len(layout.sorted_points):
        raise ValueError("not enough corner intersections for the roads of the junction")

    geometry = CenterGeometry(
        cap_points=cap_points, intersect_points=intersects, corner_points=corners
    )

    geometry.sorted_points = [
        _offset_road_points(points, intersects[2 * i], intersects[2 * i + 1])
        for i, points in enumerate(layout.sorted_points)
    ]

    inner_most: list[Vector] = []
    for points in geometry.sorted_points:
        ordered = sorted(points, key=lambda p: p.u_value)
        outer = [p.location for p in ordered]
        inner = [p.location + (-p.forward_vector * p.offset_distance) for p in ordered]
        inner_most += inner
        vertices = outer + inner
        geometry.road_sections.append(
            MeshSection(vertices, triangle_indices_grid(len(vertices), len(ordered), False))
        )

    inner_most.append(center)
    # The fan is rooted one past the last vertex, as the junction builder has always done.
    geometry.center_section = MeshSection(
        inner_most, triangle_indices_fan(len(inner_most), len(inner_most))
    )

    for i, corner in enumerate(corners):
        bezier = _bezier_corner(i, corner)
        geometry.bezier_corners.append(bezier)
        geometry.corner_sections.append(
            MeshSection(list(bezier.position), triangle_indices_fan(len(bezier.position), 0))
        )
    return geometry


def corner_marking_geometry(
    bezier_corners: Sequence[BezierCorner], junction_points: Sequence[JunctionPoint]
) -> list[MeshSection]:
    """Marking strips along each curved corner, offset by the neighbouring lane widths.

    Each corner's ``normal`` is filled in with the direction back along its curve.
    """
    sections: list[MeshSection] = []
    for corner in bezier_corners:
        positions = corner.position
        if len(positions) < 3:
            raise ValueError("a corner curve needs at least three points")
        normals = [a - b for a, b in zip(positions, positions[1:])]
        normals.append(normals[-1])
        corner.normal = normals

        start_road = junction_points[corner.start_junction_id]
        end_road = junction_points[corner.end_junction_id]
        if not start_road.right_lanes or not end_road.left_lanes:
            raise ValueError("corner roads need lanes on the sides they meet")
        start_offset = start_road.right_lanes[-1].lane_width
        end_offset = end_road.left_lanes[-1].lane_width

        step = 1.0 / (len(positions) - 2)
        vertices: list[Vector] = []
        uvs: list[Vector2] = []
        for j in range(1, len(positions)):
            right = normals[j].cross(UP).normalized()
            offset = lerp(-start_offset, end_offset, step * j)
            base = positions[j]
            vertices.append(base + right * (offset - MARKING_HALF_WIDTH) + MARKING_LIFT)
            vertices.append(base + right * (offset + MARKING_HALF_WIDTH) + MARKING_LIFT)
            uvs.append(Vector2(float(j), 0.0))
            uvs.append(Vector2(float(j), 0.5))
        sections.append(MeshSection(vertices, triangle_indices_grid(len(vertices), 2, False), uvs))
    return sections