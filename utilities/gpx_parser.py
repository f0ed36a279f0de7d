"""GPX track parser.

Reads track points (``trkpt``) of every track and segment in file order. Files
without any track point fall back to route points (``rtept``). Every point
must carry a time and an elevation; the refinement works on timed 3D samples
only.
"""

from __future__ import annotations

import logging
from typing import List, Tuple

import gpxpy
import gpxpy.gpx

from utilities.time_utils import to_posix_seconds
from utilities.track_data_structures import GeodeticPoint

logger = logging.getLogger(__name__)


def _to_record(point: gpxpy.gpx.GPXTrackPoint, index: int) -> Tuple[float, GeodeticPoint]:
    if point.time is None:
        raise ValueError(f"GPX point {index} has no time")
    if point.elevation is None:
        raise ValueError(f"GPX point {index} has no elevation")
    return to_posix_seconds(point.time), GeodeticPoint(
        lat_deg=float(point.latitude),
        lon_deg=float(point.longitude),
        alt_m=float(point.elevation),
    )


def parse_gpx_text(gpx_text: str) -> List[Tuple[float, GeodeticPoint]]:
    """
    Parse GPX content.

    Parameters
    ----------
    gpx_text : str
        Complete GPX document.

    Returns
    -------
    List[Tuple[float, GeodeticPoint]]
        ``(POSIX seconds, position)`` pairs in file order.
    """
    try:
        gpx = gpxpy.parse(gpx_text)
    except gpxpy.gpx.GPXException as exc:
        raise ValueError(f"Malformed GPX document: {exc}") from exc

    points = [
        point
        for track in gpx.tracks
        for segment in track.segments
        for point in segment.points
    ]
    if not points:
        points = [point for route in gpx.routes for point in route.points]

    return [_to_record(point, i) for i, point in enumerate(points)]


def parse_gpx_track(file_path: str) -> List[Tuple[float, GeodeticPoint]]:
    """Parse a GPX file into ``(POSIX seconds, position)`` pairs."""
    with open(file_path, "r", encoding="utf-8") as f:
        records = parse_gpx_text(f.read())

    logger.info("Loaded %d GPX points from %s", len(records), file_path)
    return records
