"""Links lane splines into a network and finds the lane nearest a location."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Iterable, Optional

from .geometry import BoundingBox, Vector
from .lanes import LaneConnection, LaneSpline

SEARCH_LIMIT = 100000.0


@dataclass
class RoadNetworkLane:
    """A lane in the network with its cached length and bounds."""

    lane: LaneSpline
    spline_length: float
    bounding_box: BoundingBox


@dataclass
class NearestLane:
    """The lane found for a location and the distance along it."""

    lane: RoadNetworkLane
    distance_along_spline: float


@dataclass
class RoadLayoutManager:
    """Connects lanes whose end meets another lane's start."""

    spline_search_distance: float = 100.0
    lanes: list[RoadNetworkLane] = field(default_factory=list)

    def build(self, lane_splines: Iterable[LaneSpline]) -> None:
        lane_splines = list(lane_splines)
        self.lanes = [
            RoadNetworkLane(lane, lane.spline.length(), lane.spline.bounding_box())
            for lane in lane_splines
        ]
        self.connect_all(lane_splines)

    def connect_all(self, lane_splines: Iterable[LaneSpline]) -> None:
        """Replace each lane's connections with the lanes that start where it ends."""
        lane_splines = list(lane_splines)
        for current in lane_splines:
            current.connections.clear()
            end = current.spline.location_at_point(len(current.spline))
            for target in lane_splines:
                if target is current:
                    continue
                if end.distance(target.spline.location_at_point(0)) < self.spline_search_distance:
                    current.connections.append(LaneConnection(target, 0))

    def lane_data(self, index: int) -> Optional[RoadNetworkLane]:
        if 0 <= index < len(self.lanes):
            return self.lanes[index]
        return None

    def nearest_lane(self, location: Vector) -> Optional[NearestLane]:
        """Find the lane around ``location``, or None if no lane's bounds hold it.

        With several candidates the lane with the nearest control point wins
        and the distance is that control point's distance along the lane.
        """
        candidates = [lane for lane in self.lanes if lane.bounding_box.contains_xy(location)]
        if not candidates:
            return None
        if len(candidates) == 1:
            only = candidates[0]
            return NearestLane(only, only.lane.spline.distance_at_location(location))

        best: Optional[NearestLane] = None
        best_gap = SEARCH_LIMIT
        for candidate in candidates:
            spline = candidate.lane.spline
            for i in range(len(spline)):
                gap = spline.location_at_point(i).distance(location)
                if gap < best_gap:
                    best_gap = gap
                    best = NearestLane(candidate, spline.distance_at_point(i))
        return best