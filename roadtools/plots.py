"""Building plots laid out along the side of a road."""

from __future__ import annotations

from dataclasses import dataclass
from itertools import pairwise
from typing import Sequence

from .geometry import Vector

SAMPLE_STEP = 5
INSET = 50.0
ROAD_GAP = 500.0
PLOT_DEPTH = 2000.0
PLOT_TRIANGLES: tuple[int, ...] = (0, 2, 1, 1, 2, 3)
PLOT_COLOUR = (255, 112, 52, 200)


@dataclass(frozen=True)
class SampledSplinePoint:
    """A sample taken along a road spline."""

    location: Vector
    right_vector: Vector
    normal: Vector


@dataclass(frozen=True)
class PlotArea:
    """A quad beside the road: two points near it, then two further out."""

    vertices: tuple[Vector, Vector, Vector, Vector]
    triangles: tuple[int, ...] = PLOT_TRIANGLES


def generate_plot_areas(points: Sequence[SampledSplinePoint]) -> list[PlotArea]:
    """Lay one plot between every pair of consecutive fifth samples."""
    picked = list(points[::SAMPLE_STEP])
    areas = []
    for here, there in pairwise(picked):
        near_start = here.location + here.normal * INSET + here.right_vector * ROAD_GAP
        near_end = there.location - there.normal * INSET + there.right_vector * ROAD_GAP
        far_start = near_start + here.right_vector * PLOT_DEPTH
        far_end = near_end + there.right_vector * PLOT_DEPTH
        areas.append(PlotArea((near_start, near_end, far_start, far_end)))
    return areas