"""Conversions between the geodetic, Earth-fixed and inertial frames.

Geodetic <-> ECEF uses the WGS84 ellipsoid through ``pymap3d``. The inertial
frame is a true-of-date frame obtained by undoing the Earth rotation angle at
the sample time. Trajectory interpolation happens there because the
Earth-fixed frame rotates under the track between two samples.
"""

from __future__ import annotations

from typing import Optional

import numpy as np
import pymap3d as pm

from constants.common_utils import require_finite, rotation_z
from constants.earth_constants import EarthConstants
from utilities.time_utils import earth_rotation_angle_rad
from utilities.track_data_structures import (
    CartesianPoint,
    CartesianVelocityPoint,
    GeodeticPoint,
    InertialVelocityPoint,
)


def _ecef_to_inertial_rot_mat(timestamp: float) -> np.ndarray:
    # rotation_z maps inertial -> ECEF, so its transpose goes the other way
    return rotation_z(earth_rotation_angle_rad(timestamp)).T


def _inertial_to_ecef_rot_mat(timestamp: float) -> np.ndarray:
    return rotation_z(earth_rotation_angle_rad(timestamp))


def geodetic_to_cartesian(point: GeodeticPoint) -> CartesianPoint:
    """
    Convert geodetic latitude/longitude/altitude to ECEF.

    Args:
        point: Geodetic position (degrees, degrees, meters)

    Returns:
        ECEF position in meters
    """
    require_finite("geodetic point", point.lat_deg, point.lon_deg, point.alt_m)
    if abs(point.lat_deg) > 90.0:
        raise ValueError(f"Latitude out of range [-90, 90]: {point.lat_deg}")

    x, y, z = pm.geodetic2ecef(point.lat_deg, point.lon_deg, point.alt_m)
    return CartesianPoint(float(x), float(y), float(z))


def cartesian_to_geodetic(point: CartesianPoint) -> GeodeticPoint:
    """
    Convert an ECEF position to geodetic coordinates.

    Args:
        point: ECEF position in meters

    Returns:
        Geodetic position (degrees, degrees, meters)
    """
    require_finite("cartesian point", point.x_m, point.y_m, point.z_m)
    lat, lon, alt = pm.ecef2geodetic(point.x_m, point.y_m, point.z_m)
    return GeodeticPoint(float(lat), float(lon), float(alt))


def _as_tuple(vec: np.ndarray) -> tuple[float, float, float]:
    return float(vec[0]), float(vec[1]), float(vec[2])


def to_inertial(
    point: CartesianVelocityPoint,
    timestamp: float,
    ecef_velocity_mps: Optional[np.ndarray] = None,
) -> InertialVelocityPoint:
    """
    Rotate an Earth-fixed state into the inertial frame.

    Args:
        point: ECEF position and per-sample displacement
        timestamp: POSIX time at which ``point`` is valid
        ecef_velocity_mps: Velocity relative to the Earth-fixed frame; zero
            when omitted

    Returns:
        Inertial position, displacement and velocity. The velocity includes
        the Earth rotation term ``omega x r``.
    """
    rot = _ecef_to_inertial_rot_mat(timestamp)
    pos_ecef_m = point.as_array()
    if ecef_velocity_mps is None:
        ecef_velocity_mps = np.zeros(3)
    vel_i = rot @ (
        np.asarray(ecef_velocity_mps, dtype=float)
        + np.cross(EarthConstants.OMEGA_IEE_VEC, pos_ecef_m)
    )
    return InertialVelocityPoint(
        timestamp=float(timestamp),
        pos_m=_as_tuple(rot @ pos_ecef_m),
        displacement_m=_as_tuple(rot @ point.displacement_array()),
        velocity_mps=_as_tuple(vel_i),
    )


def from_inertial(
    point: InertialVelocityPoint, timestamp: float
) -> CartesianVelocityPoint:
    """Rotate an inertial state back into the Earth-fixed frame at ``timestamp``."""
    rot = _inertial_to_ecef_rot_mat(timestamp)
    return CartesianVelocityPoint.from_arrays(
        rot @ point.pos_array(), rot @ point.displacement_array()
    )


def ecef_velocity(point: InertialVelocityPoint, timestamp: float) -> np.ndarray:
    """Velocity of an inertial state relative to the Earth-fixed frame."""
    pos_ecef_m = _inertial_to_ecef_rot_mat(timestamp) @ point.pos_array()
    vel_ecef = _inertial_to_ecef_rot_mat(timestamp) @ point.velocity_array()
    return vel_ecef - np.cross(EarthConstants.OMEGA_IEE_VEC, pos_ecef_m)


def interpolate(
    first: InertialVelocityPoint,
    second: InertialVelocityPoint,
    at_time: float,
) -> InertialVelocityPoint:
    """
    Cubic Hermite blend of two inertial states.

    Positions follow the Hermite curve through both endpoints with the
    endpoint velocities as tangents, so a point at rest on the ground keeps
    to its circle of latitude instead of cutting the chord. Displacements are
    blended linearly.

    Args:
        first: State at t0
        second: State at t1, with t0 < t1
        at_time: Requested time, strictly between t0 and t1

    Returns:
        Inertial state tagged with ``at_time``
    """
    require_finite("interpolation time", at_time)
    t0 = first.timestamp
    t1 = second.timestamp
    if not t0 < at_time < t1:
        raise ValueError(
            f"Interpolation time {at_time} outside of open interval ({t0}, {t1})"
        )

    h = t1 - t0
    s = (at_time - t0) / h
    s2 = s * s
    s3 = s2 * s

    p0, p1 = first.pos_array(), second.pos_array()
    m0, m1 = first.velocity_array() * h, second.velocity_array() * h

    pos = (
        (2 * s3 - 3 * s2 + 1) * p0
        + (s3 - 2 * s2 + s) * m0
        + (-2 * s3 + 3 * s2) * p1
        + (s3 - s2) * m1
    )
    vel = (
        (6 * s2 - 6 * s) * p0
        + (3 * s2 - 4 * s + 1) * m0
        + (-6 * s2 + 6 * s) * p1
        + (3 * s2 - 2 * s) * m1
    ) / h
    disp = first.displacement_array() + s * (
        second.displacement_array() - first.displacement_array()
    )
    return InertialVelocityPoint(
        timestamp=float(at_time),
        pos_m=_as_tuple(pos),
        displacement_m=_as_tuple(disp),
        velocity_mps=_as_tuple(vel),
    )


def cartesian_distance(first: CartesianPoint, second: CartesianPoint) -> float:
    """Euclidean distance between two ECEF positions, ignoring displacements."""
    return float(np.linalg.norm(second.as_array() - first.as_array()))
