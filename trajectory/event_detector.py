from __future__ import annotations

import logging
from typing import Optional, Sequence, Tuple

from constants.parameters import EventParameters
from frame_utils.frame_converter import cartesian_distance, cartesian_to_geodetic
from utilities.time_utils import format_label_time
from utilities.track_data_structures import (
    GeodeticPoint,
    Marker,
    MarkerKind,
    TrajectorySample,
)

logger = logging.getLogger(__name__)


def _altitude_str(geodetic: GeodeticPoint) -> str:
    return f"{geodetic.alt_m:.2f}"


class EventDetector:
    """
    One-shot triggers evaluated over the raw accumulated samples, in order.

    The start-of-data marker fires on the first sample. The significant-event
    marker fires on the first sample whose ECEF distance to the previous
    sample is below ``SIGNIFICANT_EVENT_DISTANCE_M``. Every sample also yields
    a waypoint marker.
    """

    def __init__(self, params: EventParameters = EventParameters()):
        self.params = params
        self.previous: Optional[TrajectorySample] = None
        self.significant_event_fired = False

    def observe(self, sample: TrajectorySample) -> Tuple[list[Marker], Marker]:
        """
        Process one sample.

        Returns:
            (markers, waypoint) where ``markers`` holds any start-of-data or
            significant-event marker fired by this sample
        """
        geodetic = cartesian_to_geodetic(sample.position)
        time_str = format_label_time(sample.timestamp)
        alt_str = _altitude_str(geodetic)
        markers: list[Marker] = []

        if self.previous is None:
            markers.append(
                Marker(
                    label=self.params.START_OF_DATA_LABEL,
                    timestamp=sample.timestamp,
                    altitude_m=geodetic.alt_m,
                    kind=MarkerKind.START_OF_DATA,
                    position=geodetic,
                    description=f"Time at {time_str} altitude : {alt_str} meters",
                )
            )
        elif not self.significant_event_fired and (
            cartesian_distance(self.previous.position, sample.position)
            < self.params.SIGNIFICANT_EVENT_DISTANCE_M
        ):
            self.significant_event_fired = True
            logger.info(
                "%s at %s (altitude %s m)",
                self.params.SIGNIFICANT_EVENT_LABEL,
                time_str,
                alt_str,
            )
            markers.append(
                Marker(
                    label=self.params.SIGNIFICANT_EVENT_LABEL,
                    timestamp=sample.timestamp,
                    altitude_m=geodetic.alt_m,
                    kind=MarkerKind.SIGNIFICANT_EVENT,
                    position=geodetic,
                    description=f"{time_str} altitude: {alt_str} meters",
                )
            )

        waypoint = Marker(
            label=f"Time: {time_str} altitude: {alt_str} meters (MSL)",
            timestamp=sample.timestamp,
            altitude_m=geodetic.alt_m,
            kind=MarkerKind.WAYPOINT,
            position=geodetic,
        )

        self.previous = sample
        return markers, waypoint


def detect_events(
    samples: Sequence[TrajectorySample],
    params: EventParameters = EventParameters(),
) -> Tuple[list[Marker], list[Marker]]:
    """Walk the samples once and return (markers, waypoints)."""
    detector = EventDetector(params)
    markers: list[Marker] = []
    waypoints: list[Marker] = []
    for sample in samples:
        fired, waypoint = detector.observe(sample)
        markers.extend(fired)
        waypoints.append(waypoint)

    if not detector.significant_event_fired:
        logger.info("No significant event detected in %d samples", len(samples))
    return markers, waypoints
