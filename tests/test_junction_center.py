import math

import pytest

from roadtools.geometry import ZERO, Vector
from roadtools.junction_center import (
    CenterGeometry,
    build_center_geometry,
    corner_marking_geometry,
    find_corner_intersections,
    sort_by_angle_from_center,
)
from roadtools.junction_layout import JunctionLayout, build_lane_geometry
from roadtools.junction_model import BezierCorner, CapPoint, JunctionLaneData, JunctionPoint


def _road(x, y):
    return JunctionPoint(
        location=Vector(x, y, 0.0),
        u_resolution=5,
        left_lanes=[JunctionLaneData(lane_width=-350.0)],
        right_lanes=[JunctionLaneData(lane_width=350.0)],
    )


def _crossroads(world=ZERO):
    roads = [_road(2000.0, 0.0), _road(0.0, 2000.0), _road(-2000.0, 0.0), _road(0.0, -2000.0)]
    return build_lane_geometry(roads, ZERO, world)


def _close(a, b, tol=1e-3):
    return all(math.isclose(p, q, abs_tol=tol) for p, q in zip(a, b))


def test_sort_by_angle_orders_and_sets_angles():
    points = [
        CapPoint(location=Vector(0.0, 1.0, 0.0)),
        CapPoint(location=Vector(-1.0, -1.0, 0.0)),
        CapPoint(location=Vector(1.0, 0.0, 0.0)),
    ]
    result = sort_by_angle_from_center(points, ZERO)
    angles = [p.angle_from_center for p in result]
    assert angles == sorted(angles)
    assert result[0].location == Vector(-1.0, -1.0, 0.0)
    assert math.isclose(result[-1].angle_from_center, math.pi / 2)
    assert points[0].angle_from_center == 0.0


def test_find_corner_parallel_edges_meet_halfway():
    a = CapPoint(location=Vector(0.0, 0.0, 0.0), point_type=-1, forward_vector=Vector(1.0, 0.0, 0.0), junction_id=0)
    b = CapPoint(location=Vector(0.0, 100.0, 0.0), point_type=1, forward_vector=Vector(1.0, 0.0, 0.0), junction_id=1)
    intersects, corners = find_corner_intersections([a, b])
    assert len(corners) == 1
    assert corners[0].location[0] == Vector(0.0, 50.0, 0.0)
    assert corners[0].junction_ids == [-1, 0, 1]
    assert [p.junction_id for p in intersects] == [0, 1]


def test_find_corner_skips_right_edges():
    b = CapPoint(location=Vector(0.0, 100.0, 0.0), point_type=1, forward_vector=Vector(1.0, 0.0, 0.0))
    assert find_corner_intersections([b]) == ([], [])


def test_empty_layout_gives_empty_geometry():
    geometry = build_center_geometry(JunctionLayout(), ZERO, ZERO)
    assert geometry == CenterGeometry()


def test_crossroads_corners_meet_at_lane_edges():
    geometry = build_center_geometry(_crossroads(), ZERO, ZERO)
    assert len(geometry.corner_points) == 4
    assert len(geometry.intersect_points) == 8
    for corner in geometry.corner_points:
        crossing = corner.location[0]
        assert math.isclose(abs(crossing.x), 350.0, abs_tol=1e-3)
        assert math.isclose(abs(crossing.y), 350.0, abs_tol=1e-3)
    distances = {round(p.intersect_distance, 3) for p in geometry.intersect_points}
    assert len(distances) == 1


def test_road_sections_reach_intersections():
    geometry = build_center_geometry(_crossroads(), ZERO, ZERO)
    assert len(geometry.road_sections) == 4
    for i, section in enumerate(geometry.road_sections):
        count = len(section.vertices) // 2
        assert len(section.vertices) == 2 * count
        assert _close(section.vertices[count], geometry.intersect_points[2 * i].location)
        assert _close(section.vertices[-1], geometry.intersect_points[2 * i + 1].location)


def test_u_values_span_zero_to_one():
    geometry = build_center_geometry(_crossroads(), ZERO, ZERO)
    for points in geometry.sorted_points:
        values = sorted(p.u_value for p in points)
        assert values[0] == pytest.approx(0.0)
        assert values[-1] == pytest.approx(1.0)


def test_center_section_ends_at_junction_center():
    world = Vector(10.0, 20.0, 5.0)
    geometry = build_center_geometry(_crossroads(world), ZERO, world)
    section = geometry.center_section
    assert section.vertices[-1] == world
    assert len(section.vertices) == 4 * 3 + 1
    assert section.triangles[0] == len(section.vertices)


def test_bezier_corners_run_between_edges():
    geometry = build_center_geometry(_crossroads(), ZERO, ZERO)
    for corner, points, section in zip(
        geometry.bezier_corners, geometry.corner_points, geometry.corner_sections
    ):
        assert len(corner.position) == 32
        assert corner.position[0] == points.location[0]
        assert _close(corner.position[1], points.location[2])
        assert _close(corner.position[-1], points.location[1])
        assert corner.start_junction_id == points.junction_ids[2]
        assert corner.end_junction_id == points.junction_ids[1]
        assert section.triangle_count == len(section.vertices)


def test_corner_markings_lifted_and_sized():
    layout = _crossroads()
    geometry = build_center_geometry(layout, ZERO, ZERO)
    sections = corner_marking_geometry(geometry.bezier_corners, layout.junction_points)
    assert len(sections) == 4
    for corner, section in zip(geometry.bezier_corners, sections):
        assert len(corner.normal) == len(corner.position)
        assert len(section.vertices) == 2 * (len(corner.position) - 1)
        assert len(section.uvs) == len(section.vertices)
        assert all(v.z == pytest.approx(10.0) for v in section.vertices)


def test_corner_markings_need_lanes():
    corner = BezierCorner(
        position=[Vector(0.0, 0.0, 0.0), Vector(1.0, 0.0, 0.0), Vector(2.0, 0.0, 0.0)],
        start_junction_id=0,
        end_junction_id=0,
    )
    with pytest.raises(ValueError):
        corner_marking_geometry([corner], [JunctionPoint()])


def test_no_corners_no_markings():
    assert corner_marking_geometry([], []) == []