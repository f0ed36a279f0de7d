from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Union

import numpy as np


@dataclass(frozen=True)
class GeodeticPoint:
    """Latitude/longitude in degrees, altitude in meters."""

    lat_deg: float
    lon_deg: float
    alt_m: float

    def __repr__(self) -> str:
        return f"GeodeticPoint(lat={self.lat_deg:.7f}, lon={self.lon_deg:.7f}, alt={self.alt_m:.2f} m)"


@dataclass(frozen=True)
class CartesianPoint:
    """Position in the Earth-fixed (ECEF) frame, meters."""

    x_m: float
    y_m: float
    z_m: float

    def as_array(self) -> np.ndarray:
        return np.array([self.x_m, self.y_m, self.z_m])

    @classmethod
    def from_array(cls, pos_m: np.ndarray) -> CartesianPoint:
        return cls(float(pos_m[0]), float(pos_m[1]), float(pos_m[2]))


@dataclass(frozen=True)
class CartesianVelocityPoint(CartesianPoint):
    """
    ECEF position plus the finite-difference displacement from the previous
    accumulated sample (zero for the first sample).
    """

    dx_m: float = 0.0
    dy_m: float = 0.0
    dz_m: float = 0.0

    @property
    def position(self) -> CartesianPoint:
        return CartesianPoint(self.x_m, self.y_m, self.z_m)

    def displacement_array(self) -> np.ndarray:
        return np.array([self.dx_m, self.dy_m, self.dz_m])

    @classmethod
    def from_arrays(
        cls, pos_m: np.ndarray, displacement_m: np.ndarray
    ) -> CartesianVelocityPoint:
        return cls(
            float(pos_m[0]),
            float(pos_m[1]),
            float(pos_m[2]),
            float(displacement_m[0]),
            float(displacement_m[1]),
            float(displacement_m[2]),
        )


@dataclass(frozen=True)
class InertialVelocityPoint:
    """
    Position, displacement and velocity in the inertial frame, valid only at
    ``timestamp``.
    """

    timestamp: float
    pos_m: tuple[float, float, float]
    displacement_m: tuple[float, float, float]
    velocity_mps: tuple[float, float, float] = (0.0, 0.0, 0.0)

    def pos_array(self) -> np.ndarray:
        return np.asarray(self.pos_m, dtype=float)

    def displacement_array(self) -> np.ndarray:
        return np.asarray(self.displacement_m, dtype=float)

    def velocity_array(self) -> np.ndarray:
        return np.asarray(self.velocity_mps, dtype=float)


@dataclass(frozen=True)
class TrajectorySample:
    timestamp: float  # POSIX seconds
    position: CartesianVelocityPoint


class MarkerKind(Enum):
    START_OF_DATA = 1
    SIGNIFICANT_EVENT = 2
    WAYPOINT = 3


@dataclass(frozen=True)
class TrajectoryPoint:
    """One vertex of the output trajectory line."""

    timestamp: float
    position: CartesianPoint
    synthetic: bool = False


@dataclass(frozen=True)
class Marker:
    """A labeled, time-tagged placemark."""

    label: str
    timestamp: float
    altitude_m: float
    kind: MarkerKind
    position: GeodeticPoint
    description: str = ""

    def __repr__(self) -> str:
        return f"Marker({self.kind.name}, {self.label!r})"


OutputEvent = Union[TrajectoryPoint, Marker]
