"""FlySight CSV parser.

FlySight (v1) logs start with a header row naming the columns and a second row
holding the units::

    time,lat,lon,hMSL,velN,velE,velD,hAcc,vAcc,sAcc,heading,cAcc,gpsFix,numSV
    ,(deg),(deg),(m),(m/s),(m/s),(m/s),(m),(m),(m/s),(deg),(deg),,
    2013-08-17T17:39:24.80Z,39.4560413,-104.6629683,2089.406,...

Only ``time``, ``lat``, ``lon`` and ``hMSL`` are used.
"""

from __future__ import annotations

import logging
from typing import List, Tuple

import pandas as pd

from utilities.time_utils import POSIX_EPOCH_UTC
from utilities.track_data_structures import GeodeticPoint

logger = logging.getLogger(__name__)

FLYSIGHT_REQUIRED_COLUMNS = ("time", "lat", "lon", "hMSL")


def _read_frame(source) -> pd.DataFrame:
    try:
        df = pd.read_csv(source, skipinitialspace=True)
    except (pd.errors.ParserError, pd.errors.EmptyDataError) as exc:
        raise ValueError(f"Malformed FlySight CSV: {exc}") from exc

    df.columns = [str(c).strip() for c in df.columns]
    missing = [c for c in FLYSIGHT_REQUIRED_COLUMNS if c not in df.columns]
    if missing:
        raise ValueError(f"FlySight CSV is missing columns: {', '.join(missing)}")

    # Units row: empty time cell and parenthesised units
    if len(df) > 0 and str(df["lat"].iloc[0]).startswith("("):
        df = df.iloc[1:]
    return df


def parse_flysight_frame(df: pd.DataFrame) -> List[Tuple[float, GeodeticPoint]]:
    """
    Convert a FlySight data frame to ``(POSIX seconds, position)`` pairs.

    Raises
    ------
    ValueError
        If any row holds an unparsable time or coordinate.
    """
    try:
        times = pd.to_datetime(df["time"], utc=True, format="ISO8601")
        lat = pd.to_numeric(df["lat"])
        lon = pd.to_numeric(df["lon"])
        alt = pd.to_numeric(df["hMSL"])
    except (ValueError, TypeError) as exc:
        raise ValueError(f"Unparsable FlySight row: {exc}") from exc

    if times.isna().any():
        raise ValueError("FlySight CSV contains rows without a time")

    posix_s = (times - POSIX_EPOCH_UTC) / pd.Timedelta(seconds=1)
    return [
        (float(t), GeodeticPoint(float(la), float(lo), float(h)))
        for t, la, lo, h in zip(posix_s, lat, lon, alt)
    ]


def parse_flysight_csv(file_path: str) -> List[Tuple[float, GeodeticPoint]]:
    """Parse a FlySight CSV file into ``(POSIX seconds, position)`` pairs."""
    records = parse_flysight_frame(_read_frame(file_path))
    logger.info("Loaded %d FlySight samples from %s", len(records), file_path)
    return records
