import pytest

from roadtools.geometry import UP, Vector
from roadtools.junction_layout import (
    JunctionLayout,
    build_lane_geometry,
    cap_points_for_side,
    center_cap_point,
)
from roadtools.junction_mesh import create_center_line, lane_boundaries, lane_triangles
from roadtools.junction_model import (
    JunctionLaneData,
    JunctionPoint,
    LaneDrivingType,
    LaneMarking,
    LaneTurningOption,
)

ORIGIN = Vector(0.0, 0.0, 0.0)


def _road(left=1, right=1, resolution=4, markings=False):
    def lane(phase):
        return JunctionLaneData(
            lane_width=350.0,
            road_type=LaneDrivingType.DRIVING,
            turning_rule=LaneTurningOption.LEFT,
            signal_active_phase=[phase],
            lane_markings=[LaneMarking(marking_material="paint")] if markings else [],
            material="asphalt",
        )

    return JunctionPoint(
        location=Vector(1000.0, 0.0, 0.0),
        u_length=0.5,
        u_resolution=resolution,
        left_lanes=[lane(1) for _ in range(left)],
        right_lanes=[lane(2) for _ in range(right)],
    )


def _initialised(point):
    forward = Vector(1.0, 0.0, 0.0)
    point.forward_vector = forward
    point.right_vector = forward.cross(UP)
    point.end_location = Vector(500.0, 0.0, 0.0)
    point.center_line_points = create_center_line(point, ORIGIN)
    return point


def test_surface_sections_per_lane():
    layout = build_lane_geometry([_road()], ORIGIN, ORIGIN)
    assert isinstance(layout, JunctionLayout)
    assert len(layout.surface_sections) == 2
    for section in layout.surface_sections:
        assert len(section.vertices) == 2 * 4
        assert len(section.uvs) == 2 * 4
        assert section.material == "asphalt"
    assert layout.surface_sections[0].triangles == lane_triangles(4, True)
    assert layout.surface_sections[1].triangles == lane_triangles(4, False)


def test_marking_sections_keyed_after_surface():
    layout = build_lane_geometry([_road(markings=True)], ORIGIN, ORIGIN)
    assert sorted(layout.marking_sections) == [1, 2]
    assert layout.marking_sections[1].triangles == lane_triangles(4, False)
    assert layout.marking_sections[2].triangles == lane_triangles(4, True)
    assert layout.marking_sections[1].material == "paint"


def test_no_markings_without_marking_data():
    layout = build_lane_geometry([_road()], ORIGIN, ORIGIN)
    assert layout.marking_sections == {}


def test_cap_point_order_and_sorted_points():
    layout = build_lane_geometry([_road()], ORIGIN, ORIGIN)
    assert [p.point_type for p in layout.cap_points] == [-1, 2, 1]
    assert len(layout.sorted_points) == 1
    assert [p.point_type for p in layout.sorted_points[0]] == [-1, 1, 2]
    assert len(layout.center_line_ends) == 1
    assert layout.center_line_ends[0].point_type == 2


def test_sorted_points_are_independent_copies():
    layout = build_lane_geometry([_road()], ORIGIN, ORIGIN)
    layout.sorted_points[0][0].u_value = 0.75
    assert layout.cap_points[0].u_value == 0.0


def test_left_only_road_is_not_sorted():
    layout = build_lane_geometry([_road(left=2, right=0)], ORIGIN, ORIGIN)
    assert layout.sorted_points == []
    assert [p.point_type for p in layout.cap_points] == [-1, 0, 2]


def test_cap_points_for_left_side():
    point = _initialised(_road(left=2))
    boundaries = lane_boundaries(point.left_lanes, point.center_line_points)
    caps = cap_points_for_side(3, point, boundaries, point.left_lanes, False)
    assert [c.point_type for c in caps] == [-1, 0]
    assert [c.point_id for c in caps] == [0, 1]
    assert caps[0].location == boundaries[-1]
    assert caps[1].location == boundaries[-2]
    assert all(c.junction_id == 3 for c in caps)
    assert all(c.lane_direction == 0 for c in caps)
    assert caps[0].signal_active_phase == [1]
    assert caps[0].right_vector == point.forward_vector.cross(UP)


def test_cap_points_for_right_side():
    point = _initialised(_road(right=2))
    boundaries = lane_boundaries(point.right_lanes, point.center_line_points)
    caps = cap_points_for_side(0, point, boundaries, point.right_lanes, True)
    assert [c.point_type for c in caps] == [1, 0]
    assert all(c.lane_direction == 1 for c in caps)
    assert all(c.signal_active_phase == [] for c in caps)
    assert caps[0].turning_rule == LaneTurningOption.LEFT


def test_cap_points_need_boundaries():
    point = _initialised(_road(left=2))
    with pytest.raises(ValueError):
        cap_points_for_side(0, point, [], point.left_lanes, False)


def test_center_cap_point_uses_last_center_line_sample():
    point = _initialised(_road())
    center = center_cap_point(5, point)
    assert center.location == point.center_line_points[-1].location
    assert center.forward_vector == point.center_line_points[-1].forward_vector
    assert center.point_type == 2
    assert center.junction_id == 5
    assert center.road_type == LaneDrivingType.DRIVING


def test_center_cap_point_needs_left_lanes():
    point = _initialised(_road(left=0))
    with pytest.raises(ValueError):
        center_cap_point(0, point)


def test_lane_vertices_are_local_to_world_location():
    world = Vector(100.0, 200.0, 0.0)
    layout = build_lane_geometry([_road()], ORIGIN, world)
    first = layout.junction_points[0].center_line_points[0].location
    assert layout.surface_sections[0].vertices[0] == first - world
    assert layout.cap_points[1].location == layout.junction_points[0].center_line_points[-1].location


def test_empty_junction():
    layout = build_lane_geometry([], ORIGIN, ORIGIN)
    assert layout.surface_sections == []
    assert layout.cap_points == []