from dataclasses import dataclass

import numpy as np


# Synthetic points closer than this to the next real sample are not generated.
INTERPOLATION_GUARD_S = 0.05

# Display window of every waypoint placemark.
MARKER_DURATION_S = 0.9

DEFAULT_INTERPOLATION_STEP_S = 0.1


@dataclass(frozen=True)
class FilterConfig:
    min_altitude_m: float = 0.0  # Points below this altitude are dropped
    max_altitude_m: float = (
        0.0  # Points above this altitude are dropped when greater than 0
    )
    interpolation_step_s: float = 0.0  # Sub-interval step in seconds, <= 0 disables

    def __post_init__(self):
        values = (self.min_altitude_m, self.max_altitude_m, self.interpolation_step_s)
        if not np.all(np.isfinite(values)):
            raise ValueError(f"FilterConfig values must be finite, got {values}")

    @property
    def has_upper_bound(self) -> bool:
        return self.max_altitude_m > 0.0

    @property
    def interpolation_enabled(self) -> bool:
        return self.interpolation_step_s > 0.0


@dataclass(frozen=True)
class EventParameters:
    # Inter-sample ECEF distance below which the significant event fires
    SIGNIFICANT_EVENT_DISTANCE_M: float = 10.0

    START_OF_DATA_LABEL: str = "Start of Data"
    SIGNIFICANT_EVENT_LABEL: str = "Canopy Deployed"
