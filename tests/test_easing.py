"""
Ease curve and track evaluation.
Run from project root: python -m pytest tests/ -v
"""
import sys
import unittest
from pathlib import Path

ROOT = Path(__file__).resolve().parent.parent
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from chart import GraphPoint
from easing import control_point, do_curve, sample_segment, segment_value, value_at


class TestDoCurve(unittest.TestCase):
    def test_default_shape_is_linear(self):
        for x in (0.0, 0.1, 0.25, 0.5, 0.9, 1.0):
            self.assertAlmostEqual(do_curve(x, 0.5, 0.5), x)

    def test_endpoints_are_fixed(self):
        for a in (0.0, 0.2, 0.5, 0.8, 1.0):
            for b in (0.0, 0.3, 1.0):
                self.assertAlmostEqual(do_curve(0.0, a, b), 0.0)
                self.assertAlmostEqual(do_curve(1.0, a, b), 1.0)

    def test_monotonic_for_all_knobs(self):
        knobs = [i / 4 for i in range(5)]
        xs = [i / 50 for i in range(51)]
        for a in knobs:
            for b in knobs:
                values = [do_curve(x, a, b) for x in xs]
                for lo, hi in zip(values, values[1:]):
                    self.assertLessEqual(lo, hi + 1e-12, f"a={a} b={b}")

    def test_b_pulls_the_curve(self):
        self.assertGreater(do_curve(0.5, 0.5, 0.9), 0.5)
        self.assertLess(do_curve(0.5, 0.5, 0.1), 0.5)


class TestValueAt(unittest.TestCase):
    def setUp(self):
        self.track = [GraphPoint(0, 0.0), GraphPoint(100, 3.0)]

    def test_empty_track(self):
        self.assertEqual(value_at([], 10), 0.0)

    def test_before_first_and_after_last(self):
        self.assertEqual(value_at(self.track, -5), 0.0)
        self.assertEqual(value_at(self.track, 500), 3.0)

    def test_after_last_uses_final_value(self):
        track = [GraphPoint(0, 0.0), GraphPoint(100, 1.0, vf=-2.0)]
        self.assertEqual(value_at(track, 100), -2.0)

    def test_midpoint_with_default_ease(self):
        self.assertAlmostEqual(value_at(self.track, 50), 1.5)

    def test_segment_starts_from_final_value(self):
        track = [GraphPoint(0, 1.0, vf=2.0), GraphPoint(100, 4.0)]
        self.assertAlmostEqual(value_at(track, 0), 2.0)
        self.assertAlmostEqual(value_at(track, 50), 3.0)

    def test_zero_length_segment_does_not_divide(self):
        self.assertEqual(segment_value(GraphPoint(10, 1.0), GraphPoint(10, 2.0), 10), 2.0)


class TestControlPoint(unittest.TestCase):
    def test_default_handle_is_segment_centre(self):
        self.assertEqual(control_point(GraphPoint(0, 0.0), GraphPoint(100, 3.0)), (50.0, 1.5))

    def test_handle_follows_stored_ease(self):
        start = GraphPoint(0, 0.0, a=0.25, b=1.0)
        self.assertEqual(control_point(start, GraphPoint(100, 2.0)), (25.0, 2.0))

    def test_zero_length_segment_has_no_handle(self):
        self.assertIsNone(control_point(GraphPoint(5, 0.0), GraphPoint(5, 1.0)))

    def test_sample_segment_hits_both_ends(self):
        samples = sample_segment(GraphPoint(0, 0.0), GraphPoint(100, 3.0), samples=11)
        self.assertEqual(len(samples), 11)
        self.assertEqual(samples[0], (0.0, 0.0))
        self.assertEqual(samples[-1], (100.0, 3.0))


if __name__ == "__main__":
    unittest.main()
