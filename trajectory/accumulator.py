from __future__ import annotations

from typing import Iterable, Optional, Tuple

import numpy as np

from constants.common_utils import require_finite
from frame_utils.frame_converter import geodetic_to_cartesian
from utilities.track_data_structures import (
    CartesianVelocityPoint,
    GeodeticPoint,
    TrajectorySample,
)


class TrajectoryAccumulator:
    """
    Turns raw (timestamp, geodetic) records into ECEF samples carrying the
    displacement from the previously accumulated sample.
    """

    def __init__(self):
        self.samples: list[TrajectorySample] = []
        self.last_timestamp: Optional[float] = None
        self.last_point: Optional[CartesianVelocityPoint] = None

    def add_sample(self, timestamp: float, point: GeodeticPoint) -> TrajectorySample:
        require_finite("timestamp", timestamp)
        if self.last_timestamp is not None and timestamp < self.last_timestamp:
            raise ValueError(
                f"Sample at {timestamp} precedes previous sample at {self.last_timestamp}"
            )

        pos_ecef_m = geodetic_to_cartesian(point).as_array()
        if self.last_point is None:
            displacement_m = np.zeros(3)
        else:
            displacement_m = pos_ecef_m - self.last_point.as_array()

        sample = TrajectorySample(
            timestamp=float(timestamp),
            position=CartesianVelocityPoint.from_arrays(pos_ecef_m, displacement_m),
        )
        self.samples.append(sample)

        self.last_timestamp = sample.timestamp
        self.last_point = sample.position
        return sample

    def __len__(self) -> int:
        return len(self.samples)


def accumulate_samples(
    records: Iterable[Tuple[float, GeodeticPoint]],
) -> list[TrajectorySample]:
    """Run every record through a fresh accumulator and return the samples."""
    accumulator = TrajectoryAccumulator()
    for timestamp, point in records:
        accumulator.add_sample(timestamp, point)
    return accumulator.samples
