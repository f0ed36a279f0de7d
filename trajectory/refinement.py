from __future__ import annotations

from dataclasses import dataclass, field
from typing import Iterable, Tuple

from constants.parameters import EventParameters, FilterConfig
from trajectory.accumulator import accumulate_samples
from trajectory.event_detector import detect_events
from trajectory.filter_pipeline import refine_trajectory
from utilities.track_data_structures import (
    GeodeticPoint,
    Marker,
    TrajectoryPoint,
    TrajectorySample,
)


@dataclass
class TrajectoryOutput:
    """Output events of one run, grouped the way the document lays them out."""

    samples: list[TrajectorySample] = field(default_factory=list)
    line: list[TrajectoryPoint] = field(default_factory=list)
    markers: list[Marker] = field(default_factory=list)
    waypoints: list[Marker] = field(default_factory=list)


def refine_samples(
    samples: list[TrajectorySample],
    config: FilterConfig,
    event_params: EventParameters = EventParameters(),
) -> TrajectoryOutput:
    markers, waypoints = detect_events(samples, event_params)
    return TrajectoryOutput(
        samples=samples,
        line=refine_trajectory(samples, config),
        markers=markers,
        waypoints=waypoints,
    )


def refine_track(
    records: Iterable[Tuple[float, GeodeticPoint]],
    config: FilterConfig,
    event_params: EventParameters = EventParameters(),
) -> TrajectoryOutput:
    """Accumulate raw records, then filter/interpolate and detect events."""
    return refine_samples(accumulate_samples(records), config, event_params)
