"""Mesh building blocks for junction lanes: centre lines, boundaries and triangles."""

from __future__ import annotations

from dataclasses import replace
from typing import Sequence

from .geometry import UP, ZERO, Vector, Vector2, ease_in_out_quad, lerp
from .junction_model import CenterLinePoint, JunctionLaneData, JunctionPoint

FORWARD_TOLERANCE = 0.2
CENTER_LINE_TOLERANCE = 0.02
MARKING_LIFT = Vector(0.0, 0.0, 0.1)
LANE_COLUMNS = 2


def _clamp(value: float, low: float, high: float) -> float:
    return min(max(value, low), high)


def line_intersection(a_start: Vector, a_end: Vector, b_start: Vector, b_end: Vector) -> Vector:
    """Where segment A crosses segment B in the XY plane.

    Returns the zero vector when the segments do not cross or are parallel.
    """
    s1 = a_end - a_start
    s2 = b_end - b_start
    denominator = -s2.x * s1.y + s1.x * s2.y
    if denominator == 0:
        return ZERO
    dx = a_start.x - b_start.x
    dy = a_start.y - b_start.y
    s = (-s1.y * dx + s1.x * dy) / denominator
    t = (s2.x * dy - s2.y * dx) / denominator
    if 0 <= s <= 1 and 0 <= t <= 1:
        return a_start + s1 * t
    return ZERO


def triangle_indices_grid(vertex_count: int, column_count: int, reverse_winding: bool = False) -> list[int]:
    """Two triangles per quad for a grid of ``column_count`` columns.

    One row of quads is made for each vertex; the row root lags one row
    behind, so the first row of quads appears twice.
    """
    indices: list[int] = []
    root = 0
    for i in range(vertex_count):
        for j in range(column_count - 1):
            first = root + j
            second = first + 1
            third = first + column_count
            fourth = first + 1
            fifth = first + column_count + 1
            sixth = first + column_count
            if reverse_winding:
                indices += [second, first, third, fifth, fourth, sixth]
            else:
                indices += [first, second, third, fourth, fifth, sixth]
        root = i * column_count
    return indices


def triangle_indices_fan(vertex_count: int, root_index: int) -> list[int]:
    """A fan of triangles from ``root_index`` around every vertex in turn, wrapping at the end."""
    indices: list[int] = []
    for i in range(vertex_count):
        indices += [root_index, i, (i + 1) % vertex_count]
    return indices


def lane_triangles(point_count: int, reverse_winding: bool = False) -> list[int]:
    """Triangles for a lane strip two vertices wide."""
    return triangle_indices_grid(point_count, LANE_COLUMNS, reverse_winding)


def create_center_line(point: JunctionPoint, world_location: Vector) -> list[CenterLinePoint]:
    """Evenly spaced samples from a road's start to its end location."""
    if point.u_resolution <= 0:
        return []
    start = point.location + world_location
    step = 1.0 / point.u_resolution
    forward = (start - point.end_location).normalized(CENTER_LINE_TOLERANCE)
    right = forward.cross(UP)
    return [
        CenterLinePoint(lerp(start, point.end_location, i * step), forward, right)
        for i in range(point.u_resolution)
    ]


def initialise_junction_points(
    points: Sequence[JunctionPoint], junction_center: Vector, world_location: Vector
) -> list[JunctionPoint]:
    """Fill in direction vectors, end locations and centre lines for each road."""
    center = junction_center + world_location
    initialised = []
    for point in points:
        start = point.location + world_location
        forward = (start - center).normalized(FORWARD_TOLERANCE)
        updated = replace(
            point,
            forward_vector=forward,
            right_vector=forward.cross(UP),
            end_location=lerp(start, center, point.u_length),
        )
        updated.center_line_points = create_center_line(updated, world_location)
        initialised.append(updated)
    return initialised


def lane_boundaries(lanes: Sequence[JunctionLaneData], center_line: Sequence[CenterLinePoint]) -> list[Vector]:
    """Cross sections along the centre line: the centre point then each lane's outer edge."""
    if not center_line:
        return []
    u_increment = 1.0 / len(center_line)
    boundaries: list[Vector] = []
    for i, sample in enumerate(center_line):
        u_value = u_increment * i
        boundaries.append(sample.location)
        accumulated = 0.0
        for lane in lanes:
            scale = _clamp(
                ease_in_out_quad(lane.start, lane.end, u_value) + (1.0 - lane.lane_forming_strength),
                0.0,
                1.0,
            )
            accumulated += lane.lane_width * scale
            boundaries.append(sample.location + sample.right_vector * accumulated)
    return boundaries


def _uv_pair(i: int, uv_tiling: Vector2, uv_offset: Vector2) -> list[Vector2]:
    return [
        Vector2(float(i), 1.0) * uv_tiling + uv_offset,
        Vector2(float(i), 0.0) * uv_tiling + uv_offset,
    ]


def lane_vertices(
    boundaries: Sequence[Vector],
    index: int,
    point_count: int,
    lane_count: int,
    uv_tiling: Vector2,
    uv_offset: Vector2,
    world_location: Vector,
) -> tuple[list[Vector], list[Vector2]]:
    """Vertices, local to ``world_location``, and texture coordinates of one lane strip."""
    vertices: list[Vector] = []
    uvs: list[Vector2] = []
    for i in range(point_count):
        offset = i * (lane_count + 1)
        vertices.append(boundaries[offset + index] - world_location)
        vertices.append(boundaries[offset + index + 1] - world_location)
        uvs += _uv_pair(i, uv_tiling, uv_offset)
    return vertices, uvs


def lane_marking_vertices(
    boundaries: Sequence[Vector],
    index: int,
    point_count: int,
    lane_count: int,
    uv_tiling: Vector2,
    uv_offset: Vector2,
    marking_width: float,
    marking_offset: float,
) -> tuple[list[Vector], list[Vector2]]:
    """Vertices and texture coordinates of a marking strip along a lane's inner edge."""
    vertices: list[Vector] = []
    uvs: list[Vector2] = []
    for i in range(point_count):
        offset = i * (lane_count + 1)
        edge = boundaries[offset + index]
        across = (edge - boundaries[offset + index + 1]).normalized()
        first = edge + across * marking_offset
        second = first + across * marking_width
        vertices.append(first + MARKING_LIFT)
        vertices.append(second + MARKING_LIFT)
        uvs += _uv_pair(i, uv_tiling, uv_offset)
    return vertices, uvs