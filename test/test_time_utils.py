import os
import sys
import unittest
from datetime import datetime, timezone

import numpy as np
import pandas as pd

sys.path.insert(0, os.path.abspath(os.path.join(os.path.dirname(__file__), "..")))

from constants.earth_constants import EarthConstants, SiderealConstants
from utilities.time_utils import (
    earth_rotation_angle_rad,
    format_kml_time,
    format_label_time,
    to_posix_seconds,
    to_utc_timestamp,
)


class TestTimeUtils(unittest.TestCase):
    def test_j2000_epoch_constants_agree(self):
        self.assertEqual(
            SiderealConstants.J2000_EPOCH_UTC.timestamp(),
            SiderealConstants.J2000_EPOCH_POSIX_S,
        )

    def test_rotation_angle_at_j2000(self):
        angle = earth_rotation_angle_rad(SiderealConstants.J2000_EPOCH_POSIX_S)
        self.assertAlmostEqual(angle, np.deg2rad(280.46061837), places=12)

    def test_rotation_angle_repeats_after_sidereal_day(self):
        t = 1376761164.0
        a = earth_rotation_angle_rad(t)
        b = earth_rotation_angle_rad(t + EarthConstants.SIDEREAL_DAY_S)
        diff = np.mod(b - a + np.pi, 2.0 * np.pi) - np.pi
        self.assertAlmostEqual(diff, 0.0, places=9)
        self.assertTrue(0.0 <= a < 2.0 * np.pi)

    def test_rotation_angle_rate(self):
        t = 1376761164.0
        diff = earth_rotation_angle_rad(t + 1.0) - earth_rotation_angle_rad(t)
        diff = np.mod(diff, 2.0 * np.pi)
        self.assertAlmostEqual(diff, EarthConstants.OMEGA_E_RAD_PER_SEC, places=9)

    def test_rotation_angle_rejects_nan(self):
        with self.assertRaises(ValueError):
            earth_rotation_angle_rad(float("nan"))

    def test_posix_conversions(self):
        aware = datetime(2013, 8, 17, 17, 39, 24, 800000, tzinfo=timezone.utc)
        naive = datetime(2013, 8, 17, 17, 39, 24, 800000)
        self.assertAlmostEqual(to_posix_seconds(aware), 1376761164.8, places=6)
        self.assertAlmostEqual(to_posix_seconds(naive), 1376761164.8, places=6)
        self.assertAlmostEqual(
            to_posix_seconds(pd.Timestamp("2013-08-17T17:39:24.80Z")),
            1376761164.8,
            places=6,
        )
        self.assertEqual(
            to_utc_timestamp(1376761164.0), pd.Timestamp("2013-08-17T17:39:24Z")
        )

    def test_formatting(self):
        self.assertEqual(format_label_time(0.0), "1970-01-01 00:00:00")
        self.assertEqual(format_label_time(1376761164.8), "2013-08-17 17:39:24")
        self.assertEqual(format_kml_time(0.9), "1970-01-01T00:00:00.900Z")


if __name__ == "__main__":
    unittest.main()
