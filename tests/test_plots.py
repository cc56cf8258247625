from roadtools.geometry import Vector
from roadtools.plots import PLOT_TRIANGLES, SampledSplinePoint, generate_plot_areas


def _straight(count):
    return [
        SampledSplinePoint(Vector(100.0 * i, 0.0, 0.0), Vector(0.0, 1.0, 0.0), Vector(1.0, 0.0, 0.0))
        for i in range(count)
    ]


def test_one_plot_per_pair_of_fifth_samples():
    assert len(generate_plot_areas(_straight(11))) == 2
    assert len(generate_plot_areas(_straight(6))) == 1


def test_too_few_points_gives_no_plots():
    assert generate_plot_areas(_straight(5)) == []
    assert generate_plot_areas([]) == []


def test_far_edge_is_plot_depth_from_near_edge():
    for area in generate_plot_areas(_straight(16)):
        near_start, near_end, far_start, far_end = area.vertices
        assert far_start.distance(near_start) == 2000.0
        assert far_end.distance(near_end) == 2000.0


def test_plot_sits_beside_road():
    area = generate_plot_areas(_straight(6))[0]
    near_start, near_end, _, _ = area.vertices
    assert near_start.y == 500.0
    assert near_end.y == 500.0
    assert near_start.x < near_end.x


def test_triangles_fixed_by_source():
    area = generate_plot_areas(_straight(6))[0]
    assert area.triangles == (0, 2, 1, 1, 2, 3)
    assert area.triangles == PLOT_TRIANGLES