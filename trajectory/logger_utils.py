"""Structured logging utilities for debugging trajectory intervals."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Optional

from utilities.time_utils import format_kml_time


@dataclass
class IntervalDebugRecord:
    start_time: Optional[float]
    end_time: float
    end_altitude_m: float
    end_rejected: bool = False
    synthetic_generated: int = 0
    synthetic_rejected: int = 0


def _fmt(value: Optional[float], fmt: str = "{:.2f}") -> str:
    return fmt.format(value) if value is not None else "-"


def log_interval_debug(logger: logging.Logger, record: IntervalDebugRecord) -> None:
    """Emit debug information for one refined trajectory interval."""

    if logger is None or not logger.isEnabledFor(logging.DEBUG):
        return

    start_str = format_kml_time(record.start_time) if record.start_time is not None else "-"
    logger.debug(
        "Interval %s -> %s | end_alt=%s m%s | synthetic=%d (rejected=%d)",
        start_str,
        format_kml_time(record.end_time),
        _fmt(record.end_altitude_m),
        " (rejected)" if record.end_rejected else "",
        record.synthetic_generated,
        record.synthetic_rejected,
    )
