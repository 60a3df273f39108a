from __future__ import annotations

import unittest

import numpy as np

from sandbox_charts.scales import RANGE_EPSILON, AxisRange, loose_label, nice_number, tight_label


NICE_SAMPLES = (0.07, 0.3, 1.2, 2.5, 3.3, 4.4, 7.5, 12.0, 47.0, 99.0, 150.0, 2600.0, 7e5)


def _mantissa(value: float) -> float:
    return round(value / 10 ** np.floor(np.log10(value)), 9)


class NiceNumberTests(unittest.TestCase):
    def test_round_thresholds(self) -> None:
        self.assertEqual(nice_number(1.49, "round"), 1.0)
        self.assertEqual(nice_number(1.5, "round"), 2.0)
        self.assertEqual(nice_number(2.99, "round"), 2.0)
        self.assertEqual(nice_number(3.0, "round"), 5.0)
        self.assertEqual(nice_number(6.99, "round"), 5.0)
        self.assertEqual(nice_number(7.0, "round"), 10.0)

    def test_ceil_thresholds(self) -> None:
        self.assertEqual(nice_number(1.0, "ceil"), 1.0)
        self.assertEqual(nice_number(1.01, "ceil"), 2.0)
        self.assertEqual(nice_number(2.0, "ceil"), 2.0)
        self.assertEqual(nice_number(2.01, "ceil"), 5.0)
        self.assertEqual(nice_number(5.0, "ceil"), 5.0)
        self.assertEqual(nice_number(5.01, "ceil"), 10.0)

    def test_scales_with_decade(self) -> None:
        self.assertEqual(nice_number(470.0, "round"), 500.0)
        self.assertAlmostEqual(nice_number(0.0031, "ceil"), 0.005)
        self.assertEqual(nice_number(12.0, "ceil"), 20.0)

    def test_results_are_nice_and_idempotent(self) -> None:
        for mode in ("round", "ceil"):
            for value in NICE_SAMPLES:
                nice = nice_number(value, mode)
                self.assertIn(_mantissa(nice), (1.0, 2.0, 5.0), msg=f"{mode} {value} -> {nice}")
                self.assertAlmostEqual(nice_number(nice, mode), nice, delta=nice * 1e-12)

    def test_ceil_never_goes_below_input(self) -> None:
        for value in NICE_SAMPLES:
            self.assertGreaterEqual(nice_number(value, "ceil"), value * (1 - 1e-12))


class TickGeneratorTests(unittest.TestCase):
    def test_loose_label_zero_to_ten(self) -> None:
        ticks = loose_label(0.0, 10.0)
        self.assertEqual(ticks.tolist(), [0.0, 2.0, 4.0, 6.0, 8.0, 10.0])

    def test_loose_label_covers_range_with_uniform_step(self) -> None:
        cases = ((0.3, 9.7), (-3.2, 41.0), (1e-3, 7e-3), (1200.0, 1350.0), (-5.0, -1.0))
        for vmin, vmax in cases:
            ticks = loose_label(vmin, vmax)
            self.assertLessEqual(ticks[0], vmin)
            self.assertGreaterEqual(ticks[-1], vmax)
            steps = np.diff(ticks)
            self.assertTrue(np.all(steps > 0))
            self.assertTrue(np.allclose(steps, steps[0]))
            self.assertIn(_mantissa(float(steps[0])), (1.0, 2.0, 5.0))

    def test_loose_label_snaps_zero(self) -> None:
        ticks = loose_label(-0.3, 0.5)
        self.assertIn(0.0, ticks.tolist())
        zero = ticks[np.abs(ticks) < 1e-6]
        self.assertFalse(np.signbit(zero[0]))

    def test_loose_label_respects_tick_count(self) -> None:
        coarse = loose_label(0.0, 100.0, tick_count=3)
        fine = loose_label(0.0, 100.0, tick_count=11)
        self.assertLess(coarse.size, fine.size)

    def test_tight_label_includes_exact_bounds(self) -> None:
        ticks = tight_label(0.5, 9.7)
        self.assertEqual(ticks.tolist(), [0.5, 2.0, 4.0, 6.0, 8.0, 9.7])

    def test_tight_label_drops_interior_duplicates_of_bounds(self) -> None:
        ticks = tight_label(0.0, 10.0)
        self.assertEqual(ticks.tolist(), [0.0, 2.0, 4.0, 6.0, 8.0, 10.0])
        self.assertTrue(np.all(np.diff(ticks) > 0))

    def test_tight_label_narrow_range_is_strictly_increasing(self) -> None:
        ticks = tight_label(1.01, 1.02)
        self.assertEqual(ticks[0], 1.01)
        self.assertEqual(ticks[-1], 1.02)
        self.assertTrue(np.all(np.diff(ticks) > 0))

    def test_rejects_empty_or_reversed_range(self) -> None:
        with self.assertRaises(ValueError):
            loose_label(1.0, 1.0)
        with self.assertRaises(ValueError):
            tight_label(2.0, 1.0)
        with self.assertRaises(ValueError):
            loose_label(0.0, 1.0, tick_count=1)

    def test_rejects_span_beyond_float_range(self) -> None:
        with self.assertRaisesRegex(ValueError, "largest float"):
            loose_label(-1e308, 1e308)
        with self.assertRaisesRegex(ValueError, "largest float"):
            tight_label(-1e308, 1e308)

    def test_rejects_span_too_small_to_step(self) -> None:
        with self.assertRaisesRegex(ValueError, "float precision"):
            loose_label(0.0, 5e-324)
        with self.assertRaisesRegex(ValueError, "float precision"):
            tight_label(0.0, 5e-324)

    def test_rejects_grid_past_the_largest_float(self) -> None:
        with self.assertRaisesRegex(ValueError, "overflows"):
            loose_label(1.7e308, 1.79e308)

    def test_large_finite_range_still_labels(self) -> None:
        ticks = loose_label(0.0, 9e307)
        self.assertTrue(np.all(np.isfinite(ticks)))
        self.assertGreaterEqual(ticks[-1], 9e307)


class AxisRangeTests(unittest.TestCase):
    def test_zero_width_range_is_nudged(self) -> None:
        axis = AxisRange(3.0, 3.0).normalized()
        self.assertEqual(axis.low, 3.0)
        self.assertAlmostEqual(axis.high, 3.0 + RANGE_EPSILON)
        self.assertGreater(axis.span, 0.0)

    def test_huge_zero_width_range_still_has_span(self) -> None:
        axis = AxisRange(1e20, 1e20).normalized()
        self.assertGreater(axis.high, axis.low)

    def test_reversed_range_is_swapped(self) -> None:
        self.assertEqual(AxisRange(5.0, -5.0).normalized(), AxisRange(-5.0, 5.0))

    def test_covering_widens_to_ticks(self) -> None:
        axis = AxisRange(0.3, 9.7).covering(np.asarray([0.0, 5.0, 10.0]))
        self.assertEqual(axis, AxisRange(0.0, 10.0))


if __name__ == "__main__":
    unittest.main()
