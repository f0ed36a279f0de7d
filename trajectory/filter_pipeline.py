"""Altitude filtering and sub-interval interpolation of accumulated samples.

For every pair of consecutive samples the later one is checked against the
altitude band. If it survives, synthetic points are generated between the two
samples in the inertial frame, each of them altitude-filtered on its own, and
the real sample is forwarded last.
"""

from __future__ import annotations

import logging
import math
from typing import Iterator, Optional, Sequence

from constants.parameters import INTERPOLATION_GUARD_S, FilterConfig
from frame_utils.frame_converter import (
    cartesian_to_geodetic,
    from_inertial,
    interpolate,
    to_inertial,
)
from trajectory.logger_utils import IntervalDebugRecord, log_interval_debug
from utilities.track_data_structures import (
    CartesianPoint,
    TrajectoryPoint,
    TrajectorySample,
)

logger = logging.getLogger(__name__)


def is_within_altitude_band(altitude_m: float, config: FilterConfig) -> bool:
    if altitude_m < config.min_altitude_m:
        return False
    if config.has_upper_bound and altitude_m > config.max_altitude_m:
        return False
    return True


def passes_altitude_filter(position: CartesianPoint, config: FilterConfig) -> bool:
    return is_within_altitude_band(cartesian_to_geodetic(position).alt_m, config)


def interpolation_times(
    start_time: float, end_time: float, step_s: float
) -> Iterator[float]:
    """
    Yield ``start_time + k * step_s`` for k = 1, 2, ... while the time stays
    below ``end_time - INTERPOLATION_GUARD_S``.

    A step that is not positive yields nothing. Values that round back onto
    ``start_time`` or onto the previous value are skipped, so the output is
    strictly increasing and strictly after ``start_time``.
    """
    if not step_s > 0.0:
        return

    limit = end_time - INTERPOLATION_GUARD_S
    max_steps = max(0, math.ceil((end_time - start_time) / step_s))
    last = start_time
    for k in range(1, max_steps + 1):
        t = start_time + k * step_s
        if t >= limit:
            break
        if t <= last:
            continue
        last = t
        yield t


def refine_interval(
    prev: Optional[TrajectorySample],
    cur: TrajectorySample,
    config: FilterConfig,
) -> list[TrajectoryPoint]:
    """
    Decide which points to forward for the interval ending at ``cur``.

    Args:
        prev: Previous raw sample, or None when ``cur`` is the first sample
        cur: Current raw sample
        config: Altitude band and interpolation step

    Returns:
        Synthetic points in increasing time order followed by ``cur``, or an
        empty list when ``cur`` is outside the altitude band
    """
    cur_alt_m = cartesian_to_geodetic(cur.position).alt_m
    debug = IntervalDebugRecord(
        start_time=prev.timestamp if prev is not None else None,
        end_time=cur.timestamp,
        end_altitude_m=cur_alt_m,
    )

    if not is_within_altitude_band(cur_alt_m, config):
        debug.end_rejected = True
        log_interval_debug(logger, debug)
        return []

    forwarded: list[TrajectoryPoint] = []
    interval_s = cur.timestamp - prev.timestamp if prev is not None else 0.0
    if interval_s > 0.0 and config.interpolation_enabled:
        # Per-second chord velocity, used as the Hermite tangent at both ends
        chord_velocity_mps = cur.position.displacement_array() / interval_s
        first = to_inertial(prev.position, prev.timestamp, chord_velocity_mps)
        second = to_inertial(cur.position, cur.timestamp, chord_velocity_mps)
        for t in interpolation_times(
            prev.timestamp, cur.timestamp, config.interpolation_step_s
        ):
            mid_ecef = from_inertial(interpolate(first, second, t), t)
            debug.synthetic_generated += 1
            # Synthetic points are only altitude filtered, never re-interpolated
            if not passes_altitude_filter(mid_ecef, config):
                debug.synthetic_rejected += 1
                continue
            forwarded.append(
                TrajectoryPoint(timestamp=t, position=mid_ecef.position, synthetic=True)
            )

    forwarded.append(
        TrajectoryPoint(timestamp=cur.timestamp, position=cur.position.position)
    )
    log_interval_debug(logger, debug)
    return forwarded


def refine_trajectory(
    samples: Sequence[TrajectorySample], config: FilterConfig
) -> list[TrajectoryPoint]:
    """Run every accumulated sample through the filter/interpolation pipeline."""
    line: list[TrajectoryPoint] = []
    prev: Optional[TrajectorySample] = None
    for sample in samples:
        line.extend(refine_interval(prev, sample, config))
        prev = sample

    logger.info(
        "Refined %d samples into %d trajectory points", len(samples), len(line)
    )
    return line
