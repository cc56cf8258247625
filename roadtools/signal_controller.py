"""Traffic signal phases for a junction and the lanes they release or hold."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Iterable, Optional, Sequence

from .geometry import Vector
from .junction_model import JunctionPoint
from .lanes import GREEN, RED, Colour, LaneSpline, LaneSplineType

logger = logging.getLogger(__name__)

DEFAULT_PHASE_LENGTH = 20.0
INDICATOR_SETBACK = 200.0
PATH_SAMPLES = 20
LANE_STOP = 0
LANE_GO = 1


@dataclass(eq=False)
class SignalPhase:
    """Lanes allowed to proceed and lanes held for one phase."""

    phase_length: float = DEFAULT_PHASE_LENGTH
    proceed: list[LaneSpline] = field(default_factory=list)
    stop: list[LaneSpline] = field(default_factory=list)


@dataclass(frozen=True)
class SignalIndicator:
    """A signal marker placed before the start of a lane."""

    position: Vector
    direction: Vector
    colour: Colour
    path: tuple[Vector, ...] = ()


def _clamp(value: int, low: int, high: int) -> int:
    if value < low:
        return low
    return value if value < high else high


def maximum_phase_count(junction_points: Iterable[JunctionPoint]) -> int:
    """Number of phases needed to cover the first phase of every left lane."""
    highest = 0
    for i, point in enumerate(junction_points):
        for lane in point.left_lanes:
            if lane.signal_active_phase:
                highest = max(highest, lane.signal_active_phase[0])
            else:
                logger.error("junction point %d has no signal phase set", i)
    return 0 if highest == 0 else highest + 1


@dataclass
class SignalController:
    """Cycles a junction through its phases.

    ``tick`` returns the number of seconds until ``phase_elapsed`` should be
    called when it starts a new phase, and None otherwise.
    """

    phases: list[SignalPhase] = field(default_factory=list)
    enabled: bool = False
    phase_index: int = 0
    debug_phase_index: int = 0
    debug_signal_height: Vector = Vector(0.0, 0.0, 400.0)
    update_signals: bool = False
    indicators: list[SignalIndicator] = field(default_factory=list)

    def rebuild(self, lane_splines: Iterable[LaneSpline], junction_points: Sequence[JunctionPoint]) -> None:
        """Recreate the phases from the junction lanes' active phases."""
        junction_lanes = [
            lane for lane in lane_splines
            if lane is not None and lane.lane_spline_type == LaneSplineType.JUNCTION
        ]
        count = maximum_phase_count(junction_points)
        logger.info("junction signal controller has %d phases", count)
        self.phases = []
        for i in range(count):
            phase = SignalPhase(DEFAULT_PHASE_LENGTH)
            for lane in junction_lanes:
                (phase.proceed if i in lane.signal_active_phase else phase.stop).append(lane)
            self.phases.append(phase)

    def update_lanes(self, phase: int) -> None:
        """Set lane statuses for the given phase."""
        if not self.phases:
            return
        if not 0 <= phase < len(self.phases):
            raise IndexError(f"no signal phase {phase}")
        current = self.phases[phase]
        for lane in current.proceed:
            if lane is not None:
                lane.lane_status = LANE_GO
        for lane in current.stop:
            if lane is not None:
                lane.lane_status = LANE_STOP

    def begin(self) -> None:
        if self.enabled:
            self.update_lanes(_clamp(self.phase_index, 0, len(self.phases) - 1))
        self.update_signals = True

    def tick(self) -> Optional[float]:
        if self.enabled:
            self.update_lanes(_clamp(self.debug_phase_index, 0, len(self.phases) - 1))
        if not self.update_signals:
            return None
        if not self.phases:
            raise RuntimeError("signal controller has no phases")
        self.update_signals = False
        self.phase_index = (self.phase_index + 1) % len(self.phases)
        self.update_lanes(self.phase_index)
        self.debug_phase_index = self.phase_index
        self.indicators = self.phase_indicators(self.debug_phase_index)
        logger.debug("signal phase now %d", self.phase_index)
        return self.phases[self.phase_index].phase_length

    def phase_elapsed(self) -> None:
        """Mark the current phase as over; the next tick moves on."""
        self.update_signals = True

    def phase_indicators(self, phase_index: int) -> list[SignalIndicator]:
        """Green markers for proceeding lanes and red for held ones."""
        if not self.phases:
            return []
        phase = self.phases[_clamp(phase_index, 0, len(self.phases) - 1)]
        if not phase.proceed or not phase.stop:
            return []
        indicators = [
            self._indicator(lane, GREEN, with_path=True)
            for lane in phase.proceed if lane is not None
        ]
        indicators += [
            self._indicator(lane, RED, with_path=False)
            for lane in phase.stop if lane is not None
        ]
        return indicators

    def _indicator(self, lane: LaneSpline, colour: Colour, with_path: bool) -> SignalIndicator:
        spline = lane.spline
        location = spline.location_at_point(0) + self.debug_signal_height
        direction = spline.direction_at_point(0)
        path: tuple[Vector, ...] = ()
        if with_path:
            path = tuple(spline.location_at_time(j * 0.05) for j in range(PATH_SAMPLES))
        return SignalIndicator(location - direction * INDICATOR_SETBACK, direction, colour, path)