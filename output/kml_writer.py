"""KML serialization of refined trajectories."""

from __future__ import annotations

from typing import Optional

import simplekml

from constants.parameters import MARKER_DURATION_S
from frame_utils.frame_converter import cartesian_to_geodetic
from trajectory.refinement import TrajectoryOutput
from utilities.time_utils import format_kml_time
from utilities.track_data_structures import (
    CartesianPoint,
    GeodeticPoint,
    MarkerKind,
)

XML_HEADER = '<?xml version="1.0" encoding="UTF-8"?>'

DOCUMENT_NAME = "gpx2kml output"
TRACK_FOLDER_NAME = "Coordinates"
WAYPOINT_FOLDER_NAME = "Jump points"
WAYPOINT_FOLDER_DESCRIPTION = "Timestampped points along the jump"


class KmlTrajectoryWriter:
    """
    Builds the output document: a ``Coordinates`` folder holding the
    trajectory line and the start/significant-event placemarks, and a
    ``Jump points`` folder holding the time-windowed waypoints.
    """

    def __init__(self, name: str = DOCUMENT_NAME):
        self.kml = simplekml.Kml(name=name)
        self.track_folder = self.kml.newfolder(name=TRACK_FOLDER_NAME)
        self.waypoint_folder = self.kml.newfolder(
            name=WAYPOINT_FOLDER_NAME, description=WAYPOINT_FOLDER_DESCRIPTION
        )
        self.line = self.track_folder.newlinestring()
        self.line.altitudemode = simplekml.AltitudeMode.absolute
        self.line.extrude = 0
        self.line.tessellate = 0
        self.coords: list[tuple[float, float, float]] = []

    def emit_point(self, point: CartesianPoint) -> None:
        """Append one vertex to the trajectory line."""
        geodetic = cartesian_to_geodetic(point)
        self.coords.append((geodetic.lon_deg, geodetic.lat_deg, geodetic.alt_m))

    def emit_placemark(
        self,
        label: str,
        timestamp: float,
        altitude: float,
        position: GeodeticPoint,
        description: Optional[str] = None,
        kind: MarkerKind = MarkerKind.WAYPOINT,
    ) -> simplekml.Point:
        """
        Create a labeled point placemark.

        Waypoints go to the ``Jump points`` folder with a display window of
        ``MARKER_DURATION_S`` starting at ``timestamp``. Start-of-data and
        significant-event placemarks go to the ``Coordinates`` folder.
        """
        folder = self.waypoint_folder if kind == MarkerKind.WAYPOINT else self.track_folder
        point = folder.newpoint(
            name=label,
            coords=[(position.lon_deg, position.lat_deg, altitude)],
        )
        point.altitudemode = simplekml.AltitudeMode.absolute
        if description:
            point.description = description
        if kind == MarkerKind.WAYPOINT:
            point.timespan.begin = format_kml_time(timestamp)
            point.timespan.end = format_kml_time(timestamp + MARKER_DURATION_S)
        return point

    def to_string(self) -> str:
        """Serialize the document, starting with the XML declaration."""
        self.line.coords = self.coords
        text = self.kml.kml()
        if not text.lstrip().startswith("<?xml"):
            text = f"{XML_HEADER}\n{text}"
        return text


def render_kml(output: TrajectoryOutput, name: str = DOCUMENT_NAME) -> str:
    """Render the events of one run to a KML string."""
    writer = KmlTrajectoryWriter(name)
    for point in output.line:
        writer.emit_point(point.position)
    for marker in output.markers + output.waypoints:
        writer.emit_placemark(
            marker.label,
            marker.timestamp,
            marker.altitude_m,
            marker.position,
            description=marker.description,
            kind=marker.kind,
        )
    return writer.to_string()
