from __future__ import annotations

from pathlib import Path
from typing import List, Tuple

from utilities.flysight_parser import parse_flysight_csv
from utilities.gpx_parser import parse_gpx_track
from utilities.track_data_structures import GeodeticPoint


def is_flysight_file(file_path: str) -> bool:
    """FlySight logs are recognised by ``.csv``/``.CSV`` in the file name."""
    name = Path(file_path).name
    return ".csv" in name or ".CSV" in name


def load_track(file_path: str) -> List[Tuple[float, GeodeticPoint]]:
    """Parse a track file with the adapter matching its name; GPX otherwise."""
    if is_flysight_file(file_path):
        return parse_flysight_csv(file_path)
    return parse_gpx_track(file_path)
