import os
import sys
import unittest

sys.path.insert(0, os.path.abspath(os.path.join(os.path.dirname(__file__), "..")))

from constants.parameters import INTERPOLATION_GUARD_S, FilterConfig
from frame_utils.frame_converter import cartesian_to_geodetic
from trajectory.accumulator import accumulate_samples
from trajectory.filter_pipeline import (
    interpolation_times,
    is_within_altitude_band,
    refine_interval,
    refine_trajectory,
)
from utilities.track_data_structures import GeodeticPoint

T0 = 1376761164.0


def _vertical_track(altitudes, start=T0, lat=39.45, lon=-104.66):
    return accumulate_samples(
        (start + i, GeodeticPoint(lat, lon, alt)) for i, alt in enumerate(altitudes)
    )


class TestInterpolationTimes(unittest.TestCase):
    def test_strictly_increasing_within_bounds(self):
        times = list(interpolation_times(T0, T0 + 1.0, 0.1))
        self.assertEqual(len(times), 9)
        for a, b in zip(times, times[1:]):
            self.assertLess(a, b)
        for t in times:
            self.assertGreater(t, T0)
            self.assertLess(t, T0 + 1.0 - INTERPOLATION_GUARD_S)

    def test_disabled_step(self):
        self.assertEqual(list(interpolation_times(T0, T0 + 10.0, 0.0)), [])
        self.assertEqual(list(interpolation_times(T0, T0 + 10.0, -0.5)), [])

    def test_short_interval_yields_nothing(self):
        # t_cur - t_prev < step + guard
        self.assertEqual(list(interpolation_times(T0, T0 + 0.14, 0.1)), [])
        self.assertEqual(list(interpolation_times(T0, T0, 0.1)), [])

    def test_uneven_interval(self):
        times = list(interpolation_times(0.0, 2.5, 1.0))
        self.assertEqual(times, [1.0, 2.0])

    def test_step_below_float_resolution(self):
        # 1e-7 s is under half the spacing of doubles near T0
        times = list(interpolation_times(T0, T0 + 0.0500003, 1e-7))
        for t in times:
            self.assertGreater(t, T0)
            self.assertLess(t, T0 + 0.0500003 - INTERPOLATION_GUARD_S)
        for a, b in zip(times, times[1:]):
            self.assertLess(a, b)


class TestAltitudeBand(unittest.TestCase):
    def test_band(self):
        config = FilterConfig(min_altitude_m=10.0, max_altitude_m=100.0)
        self.assertTrue(is_within_altitude_band(10.0, config))
        self.assertTrue(is_within_altitude_band(100.0, config))
        self.assertFalse(is_within_altitude_band(9.99, config))
        self.assertFalse(is_within_altitude_band(100.01, config))

    def test_zero_max_means_no_upper_bound(self):
        config = FilterConfig(min_altitude_m=0.0, max_altitude_m=0.0)
        self.assertTrue(is_within_altitude_band(1e6, config))
        self.assertFalse(is_within_altitude_band(-1.0, config))

    def test_config_rejects_nan(self):
        with self.assertRaises(ValueError):
            FilterConfig(interpolation_step_s=float("nan"))


class TestRefineTrajectory(unittest.TestCase):
    def test_disabled_interpolation_forwards_one_point_per_sample(self):
        samples = _vertical_track([3000.0, 2950.0, 2900.0, 2850.0])
        line = refine_trajectory(samples, FilterConfig(interpolation_step_s=0.0))
        self.assertEqual([p.timestamp for p in line], [s.timestamp for s in samples])
        self.assertFalse(any(p.synthetic for p in line))
        for point, sample in zip(line, samples):
            self.assertEqual(point.position, sample.position.position)

    def test_scenario_min_altitude(self):
        samples = accumulate_samples(
            [
                (0.0, GeodeticPoint(39.45, -104.66, 100.0)),
                (1.0, GeodeticPoint(39.45, -104.66, 50.0)),
                (2.0, GeodeticPoint(39.45, -104.66, 5.0)),
            ]
        )
        line = refine_trajectory(samples, FilterConfig(min_altitude_m=10.0))
        self.assertEqual([p.timestamp for p in line], [0.0, 1.0])

        line = refine_trajectory(samples, FilterConfig(min_altitude_m=60.0))
        self.assertEqual([p.timestamp for p in line], [0.0])

    def test_max_altitude(self):
        samples = _vertical_track([3000.0, 1500.0, 800.0])
        line = refine_trajectory(samples, FilterConfig(max_altitude_m=2000.0))
        self.assertEqual([p.timestamp for p in line], [T0 + 1.0, T0 + 2.0])

    def test_interpolation_inserts_synthetic_points_before_sample(self):
        samples = _vertical_track([3000.0, 2950.0])
        line = refine_trajectory(samples, FilterConfig(interpolation_step_s=0.1))

        # first sample has no predecessor, so no synthetic points precede it
        self.assertEqual(line[0].timestamp, T0)
        self.assertFalse(line[0].synthetic)
        synthetic = line[1:-1]
        self.assertEqual(len(synthetic), 9)
        self.assertTrue(all(p.synthetic for p in synthetic))
        self.assertEqual(line[-1].timestamp, T0 + 1.0)
        self.assertFalse(line[-1].synthetic)

        times = [p.timestamp for p in line]
        self.assertEqual(times, sorted(times))
        self.assertEqual(len(set(times)), len(times))

        for k, point in enumerate(synthetic, start=1):
            alt = cartesian_to_geodetic(point.position).alt_m
            self.assertAlmostEqual(alt, 3000.0 - 5.0 * k, delta=0.05)

    def test_synthetic_points_are_altitude_filtered(self):
        samples = _vertical_track([100.0, 200.0])
        config = FilterConfig(min_altitude_m=155.0, interpolation_step_s=0.1)
        line = refine_interval(samples[0], samples[1], config)

        self.assertEqual(len(line), 5)
        for point in line:
            self.assertGreaterEqual(cartesian_to_geodetic(point.position).alt_m, 155.0)
        self.assertEqual(line[-1].timestamp, T0 + 1.0)

    def test_rejected_sample_produces_no_synthetic_points(self):
        samples = _vertical_track([3000.0, 50.0])
        config = FilterConfig(min_altitude_m=100.0, interpolation_step_s=0.1)
        self.assertEqual(refine_interval(samples[0], samples[1], config), [])

    def test_first_sample_is_never_interpolated(self):
        samples = _vertical_track([3000.0])
        line = refine_interval(None, samples[0], FilterConfig(interpolation_step_s=0.1))
        self.assertEqual(len(line), 1)

    def test_tiny_step_does_not_fail(self):
        samples = accumulate_samples(
            [
                (T0, GeodeticPoint(39.45, -104.66, 3000.0)),
                (T0 + 0.0500003, GeodeticPoint(39.45, -104.66, 2999.9)),
            ]
        )
        line = refine_interval(
            samples[0], samples[1], FilterConfig(interpolation_step_s=1e-7)
        )
        self.assertEqual(line[-1].timestamp, samples[1].timestamp)
        self.assertFalse(line[-1].synthetic)
        times = [p.timestamp for p in line]
        self.assertTrue(all(t > T0 for t in times))
        self.assertEqual(times, sorted(set(times)))

    def test_equal_timestamps_produce_no_synthetic_points(self):
        samples = accumulate_samples(
            [
                (T0, GeodeticPoint(39.45, -104.66, 3000.0)),
                (T0, GeodeticPoint(39.45, -104.66, 2990.0)),
            ]
        )
        line = refine_interval(
            samples[0], samples[1], FilterConfig(interpolation_step_s=0.1)
        )
        self.assertEqual(len(line), 1)

    def test_long_gap_stays_above_ground(self):
        point = GeodeticPoint(39.45, -104.66, 1000.0)
        samples = accumulate_samples([(T0, point), (T0 + 600.0, point)])
        line = refine_interval(
            samples[0], samples[1], FilterConfig(interpolation_step_s=300.0)
        )

        self.assertEqual(len(line), 2)
        self.assertTrue(line[0].synthetic)
        self.assertEqual(line[0].timestamp, T0 + 300.0)
        geo = cartesian_to_geodetic(line[0].position)
        self.assertAlmostEqual(geo.alt_m, 1000.0, delta=1.0)
        self.assertAlmostEqual(geo.lat_deg, 39.45, delta=1e-5)
        self.assertAlmostEqual(geo.lon_deg, -104.66, delta=1e-5)


if __name__ == "__main__":
    unittest.main()
