# roadtools

Geometry for procedural road networks: lane splines, road junction meshes,
traffic signal phasing, building plots and road layout queries. Everything is
plain Python data that you can hand to any renderer or traffic simulation. The
package has no dependencies outside the standard library.

## Installation

```
pip install .
```

To run the tests:

```
pip install .[test]
pytest
```

## What is inside

- `roadtools.geometry` provides the immutable `Vector` and `Vector2` types and
  `BoundingBox` (`from_points`, `contains_xy`). It also has interpolation
  helpers: `lerp`, `midpoint`, `ease_in_out_quad`, `custom_ease_in_out_quad`
  and the quadratic `bezier_curve_position`.
- `roadtools.lanes` is about splines. `Spline` is a polyline through
  `SplinePoint`s, kept in input-key order, that you can sample by control point
  (`location_at_point`, `direction_at_point`, `distance_at_point`), by distance
  (`location_at_distance`, `direction_at_distance`,
  `right_vector_at_distance`), by time (`location_at_time`) or by nearest
  location (`distance_at_location`). `LaneSpline` is a traffic lane with a
  `LaneSplineType`, a status, active signal phases and `LaneConnection`s to
  other lanes; `reverse` flips its direction of travel.
- `roadtools.layout` has `RoadLayoutManager`. `build` records each lane's
  length and bounds and `connect_all` links lanes whose end lies within
  `spline_search_distance` of another lane's start. `lane_data` looks a lane up
  by index, and `nearest_lane` returns a `NearestLane` (or `None`) for a
  location.
- `roadtools.junction_model` holds the junction data: `JunctionPoint`,
  `JunctionLaneData`, `LaneMarking`, `CapPoint`, `IntersectPoint`,
  `CornerPoints`, `BezierCorner`, `TurningLanePoint`, `TurningLaneConnection`,
  `TurningLane` and `MeshSection`, with the `LaneTurningOption` and
  `LaneDrivingType` enums and `sort_junction_points`.
- `roadtools.junction_mesh` has the building blocks of a junction mesh:
  `line_intersection`, `triangle_indices_grid`, `triangle_indices_fan`,
  `lane_triangles`, `create_center_line`, `initialise_junction_points`,
  `lane_boundaries`, `lane_vertices` and `lane_marking_vertices`.
- `roadtools.junction_layout` builds the lane surfaces, lane markings and cap
  points for every road entering a junction (`build_lane_geometry`, returning a
  `JunctionLayout`).
- `roadtools.junction_center` fills the centre of the junction from a
  `JunctionLayout` (`build_center_geometry`, returning `CenterGeometry`): one
  section per road, a centre fan and a curved Bezier piece at each corner.
  `corner_marking_geometry` builds marking strips along those corners.
- `roadtools.plots` lays out building plots (`PlotArea`) beside a road from
  its `SampledSplinePoint`s with `generate_plot_areas`.
- `roadtools.signal_controller` has `SignalController`, which builds
  `SignalPhase`s from junction lanes (`rebuild`), cycles through them with
  `begin`, `tick` and `phase_elapsed`, sets each lane's status to stop or go,
  and produces `SignalIndicator` markers for a phase. `maximum_phase_count`
  works out how many phases a junction needs.

## Example

```python
from roadtools.geometry import Vector, bezier_curve_position
from roadtools.lanes import LaneSpline, SplinePoint
from roadtools.layout import RoadLayoutManager

curve = [
    bezier_curve_position(Vector(0, 0, 0), Vector(500, 0, 0), Vector(500, 500, 0), t / 10)
    for t in range(11)
]

lane = LaneSpline()
lane.spline.add_points([SplinePoint(position=p, input_key=i) for i, p in enumerate(curve)])

manager = RoadLayoutManager()
manager.build([lane])
nearest = manager.nearest_lane(Vector(450, 100, 0))
```

## What it does not do

- It does not work out which lanes may turn into which inside a junction, and
  it does not generate turning-lane curves or lane splines from a junction's
  roads. The `TurningLanePoint`, `TurningLaneConnection` and `TurningLane`
  types are there to hold such data, but nothing in the package fills them.
  Lane splines for traffic have to be built by the caller.
- It does not render anything. Meshes come back as `MeshSection` data.
- It has no command-line tool.