from datetime import datetime

import pandas as pd

from constants.common_utils import require_finite, wrap_two_pi
from constants.earth_constants import EarthConstants, SiderealConstants


POSIX_EPOCH_UTC = pd.Timestamp("1970-01-01T00:00:00", tz="UTC")


def to_utc_timestamp(posix_s: float) -> pd.Timestamp:
    """Return a tz-aware pandas Timestamp (UTC) for POSIX seconds."""
    require_finite("timestamp", posix_s)
    return POSIX_EPOCH_UTC + pd.Timedelta(seconds=posix_s)


def to_posix_seconds(timestamp: pd.Timestamp | datetime) -> float:
    """Convert a timestamp to POSIX seconds.

    The ``timestamp`` argument may be either a :class:`pandas.Timestamp` or
    a standard :class:`datetime.datetime`. Naive values are taken as UTC,
    which is what GPX and FlySight files record.
    """
    if timestamp.tzinfo is None or timestamp.utcoffset() is None:
        timestamp = pd.Timestamp(timestamp).tz_localize("UTC")
    return float(timestamp.timestamp())


def format_label_time(posix_s: float) -> str:
    """Whole-second UTC time used in placemark labels."""
    return to_utc_timestamp(posix_s).strftime("%Y-%m-%d %H:%M:%S")


def format_kml_time(posix_s: float) -> str:
    """ISO 8601 UTC time with milliseconds, as used by KML TimeSpan."""
    return to_utc_timestamp(posix_s).strftime("%Y-%m-%dT%H:%M:%S.%f")[:-3] + "Z"


def earth_rotation_angle_rad(posix_s: float) -> float:
    """
    Greenwich mean sidereal angle at the given time.

    Args:
        posix_s: POSIX timestamp in seconds
    Returns:
        Rotation angle of the Earth-fixed frame relative to the inertial
        frame, in radians within [0, 2pi)
    """
    require_finite("timestamp", posix_s)
    elapsed_s = posix_s - SiderealConstants.J2000_EPOCH_POSIX_S
    return wrap_two_pi(
        SiderealConstants.GMST_AT_J2000_RAD
        + EarthConstants.OMEGA_E_RAD_PER_SEC * elapsed_s
    )
