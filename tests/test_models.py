from __future__ import annotations

import math
import unittest

from primer_demos.models import (
    LinearModel,
    descent_path,
    gradient_step,
    least_squares_fit,
    mean_squared_error,
    quadratic_curve,
    train,
)
from primer_plot.layers import Point, points_from_pairs


class LinearModelTests(unittest.TestCase):
    def test_least_squares_recovers_exact_line(self) -> None:
        points = points_from_pairs([(x, 2.0 * x + 1.0) for x in (-3.0, -1.0, 0.0, 0.5, 2.0, 7.0)])
        fit = least_squares_fit(points)
        self.assertAlmostEqual(fit.m, 2.0, delta=1e-9)
        self.assertAlmostEqual(fit.b, 1.0, delta=1e-9)

    def test_least_squares_needs_distinct_x(self) -> None:
        with self.assertRaises(ValueError):
            least_squares_fit(points_from_pairs([(1.0, 2.0), (1.0, 3.0)]))
        with self.assertRaises(ValueError):
            least_squares_fit([])

    def test_mean_squared_error(self) -> None:
        points = points_from_pairs([(0.0, 1.0), (1.0, 1.0), (2.0, 5.0)])
        # Residuals against y = 2x + 1: 0, -2, 0.
        self.assertAlmostEqual(mean_squared_error(points, 2.0, 1.0), 4.0 / 3.0)
        self.assertEqual(mean_squared_error(points_from_pairs([(1.0, 3.0)]), 2.0, 1.0), 0.0)
        with self.assertRaises(ValueError):
            mean_squared_error([], 1.0, 0.0)

    def test_gradient_step_with_zero_learning_rate_is_identity(self) -> None:
        state = LinearModel(m=1.25, b=-0.5)
        points = points_from_pairs([(0.0, 1.0), (3.0, 2.0), (4.0, -1.0)])
        self.assertEqual(gradient_step(state, points, 0.0), state)

    def test_gradient_step_matches_hand_computation(self) -> None:
        points = points_from_pairs([(0.0, 0.0), (2.0, 4.0)])
        # error = [0, -4]; mGrad = (2/2) * -4 * 2 = -8; bGrad = (2/2) * -4 = -4.
        new_state = gradient_step(LinearModel(0.0, 0.0), points, 0.1)
        self.assertAlmostEqual(new_state.m, 0.8, places=12)
        self.assertAlmostEqual(new_state.b, 0.4, places=12)

    def test_gradient_step_returns_new_state(self) -> None:
        state = LinearModel()
        points = points_from_pairs([(1.0, 3.0), (2.0, 5.0)])
        new_state = gradient_step(state, points, 0.05)
        self.assertIsNot(new_state, state)
        self.assertEqual(state, LinearModel(0.0, 0.0))

    def test_training_reduces_error(self) -> None:
        points = points_from_pairs([(x, 3.0 * x + 1.0) for x in (0.0, 1.0, 2.0, 3.0, 4.0)])
        start = LinearModel()
        trained = train(start, points, 0.02, 200)
        self.assertLess(
            mean_squared_error(points, trained.m, trained.b),
            mean_squared_error(points, start.m, start.b),
        )
        self.assertEqual(train(start, points, 0.02, 0), start)
        with self.assertRaises(ValueError):
            train(start, points, 0.02, -1)


class QuadraticDescentTests(unittest.TestCase):
    def test_descent_path_records_each_iterate_and_final_point(self) -> None:
        path = descent_path(0.1, w0=3.5, steps=15)
        self.assertEqual(len(path.points), 16)
        self.assertEqual(path.points[0], Point(3.5, 12.25))
        self.assertAlmostEqual(path.points[1].x, 2.8)
        for p in path.points:
            self.assertAlmostEqual(p.y, p.x * p.x)
        self.assertAlmostEqual(path.final_w, 3.5 * 0.8**15)
        self.assertFalse(path.stopped_early)

    def test_zero_learning_rate_stays_put(self) -> None:
        path = descent_path(0.0, w0=3.5, steps=3)
        self.assertEqual([p.x for p in path.points], [3.5, 3.5, 3.5, 3.5])

    def test_overflowing_path_keeps_only_finite_points(self) -> None:
        path = descent_path(1e200, w0=3.5, steps=15)
        self.assertTrue(path.stopped_early)
        self.assertGreater(len(path.points), 0)
        for p in path.points:
            self.assertTrue(math.isfinite(p.x))
            self.assertTrue(math.isfinite(p.y))

    def test_quadratic_curve_samples(self) -> None:
        curve = quadratic_curve(-4.0, 4.0, 0.05)
        self.assertEqual(curve[0], Point(-4.0, 16.0))
        self.assertIn(len(curve), (160, 161))
        self.assertLessEqual(curve[-1].x, 4.0)
        for p in curve:
            self.assertAlmostEqual(p.y, p.x * p.x)

    def test_quadratic_curve_rejects_bad_arguments(self) -> None:
        with self.assertRaises(ValueError):
            quadratic_curve(-1.0, 1.0, 0.0)
        with self.assertRaises(ValueError):
            quadratic_curve(1.0, -1.0, 0.1)


if __name__ == "__main__":
    unittest.main()
