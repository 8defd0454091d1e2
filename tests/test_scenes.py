from __future__ import annotations

import unittest

from primer_demos.config import GradientDescentDemoConfig, RegressionDemoConfig, TaskDemoConfig
from primer_demos.datasets import make_rng, two_clusters, uniform_line
from primer_demos.models import LinearModel
from primer_demos.scenes import (
    draw_scene,
    gradient_descent_scene,
    regression_scene,
    task_scene,
    trainer_scene,
)
from primer_plot.layers import Axis, LabeledPoint, Point, PolylinePath, ScatterSet, points_from_pairs
from primer_plot.scales import Extent, plot_rect
from primer_plot.surface import RecordingSurface


class RegressionSceneTests(unittest.TestCase):
    def test_y_extent_keeps_line_endpoints_visible(self) -> None:
        points = points_from_pairs([(0.0, 0.0), (5.0, 0.5), (10.0, 1.0)])
        scene = regression_scene(points, 5.0, 0.0)
        self.assertEqual(scene.extent_x, Extent(0.0, 10.0))
        self.assertEqual(scene.extent_y, Extent(-1.0, 51.0))

    def test_padding_is_configurable(self) -> None:
        points = points_from_pairs([(0.0, 0.0), (10.0, 10.0)])
        scene = regression_scene(points, 1.0, 0.0, RegressionDemoConfig(y_padding=2.5))
        self.assertEqual(scene.extent_y, Extent(-2.5, 12.5))

    def test_layers_put_line_above_points(self) -> None:
        points = points_from_pairs([(0.0, 1.0), (2.0, 2.0), (4.0, 2.5)])
        scene = regression_scene(points, 0.5, 1.0)
        self.assertEqual([type(layer) for layer in scene.layers], [Axis, ScatterSet, PolylinePath])
        line = scene.layers[2]
        self.assertEqual(line.points, (Point(0.0, 1.0), Point(4.0, 3.0)))

    def test_readouts_format_parameters_and_mse(self) -> None:
        points = points_from_pairs([(0.0, 1.0), (1.0, 1.0), (2.0, 5.0)])
        scene = regression_scene(points, 2.0, 1.0)
        self.assertEqual(scene.readouts, {"slope": "2.00", "intercept": "1.00", "mse": "1.333"})

    def test_single_x_value_gets_padded_extent(self) -> None:
        points = points_from_pairs([(3.0, 1.0), (3.0, 2.0)])
        scene = regression_scene(points, 0.0, 1.5)
        self.assertEqual(scene.extent_x, Extent(2.0, 4.0))


class GradientDescentSceneTests(unittest.TestCase):
    def test_uses_fixed_extents(self) -> None:
        scene = gradient_descent_scene(0.1)
        self.assertEqual(scene.extent_x, Extent(-4.0, 4.0))
        self.assertEqual(scene.extent_y, Extent(0.0, 16.0))
        axis = scene.layers[0]
        self.assertIsInstance(axis, Axis)
        self.assertEqual((axis.tick_count, axis.x_decimals, axis.y_decimals), (4, 1, 0))

    def test_extent_defaults_are_configurable(self) -> None:
        cfg = GradientDescentDemoConfig(w_min=-2.0, w_max=2.0, loss_max=4.0, w0=1.5, steps=3)
        scene = gradient_descent_scene(0.25, cfg)
        self.assertEqual(scene.extent_x, Extent(-2.0, 2.0))
        self.assertEqual(scene.extent_y, Extent(0.0, 4.0))
        self.assertEqual(scene.readouts["steps"], "3")

    def test_curve_then_path_then_markers(self) -> None:
        scene = gradient_descent_scene(0.1)
        kinds = [type(layer) for layer in scene.layers]
        self.assertEqual(kinds, [Axis, PolylinePath, PolylinePath, ScatterSet])
        self.assertEqual(scene.layers[2].points, scene.layers[3].points)
        self.assertEqual(scene.readouts["learning_rate"], "0.10")

    def test_diverging_rate_logs_warning(self) -> None:
        with self.assertLogs("primer_demos.scenes", level="WARNING") as logs:
            gradient_descent_scene(1.5)
        self.assertIn("diverges", logs.output[0])


class TaskSceneTests(unittest.TestCase):
    def test_classification_splits_points_by_label(self) -> None:
        points = two_clusters(make_rng(3), n_per_class=10)
        scene = task_scene("classification", points)
        scatters = [layer for layer in scene.layers if isinstance(layer, ScatterSet)]
        self.assertEqual(len(scatters), 2)
        self.assertEqual([len(s.points) for s in scatters], [10, 10])
        self.assertEqual(scene.readouts, {"class_0": "10", "class_1": "10"})
        self.assertTrue(all(p.x < 3.0 for p in scatters[0].points))
        self.assertTrue(all(p.x >= 4.0 for p in scatters[1].points))
        self.assertEqual([s.style.label for s in scatters], ["Class 0", "Class 1"])
        self.assertEqual(scene.layers[0].x_title, "x")

    def test_regression_draws_fit_through_sorted_x(self) -> None:
        points = uniform_line(make_rng(5), n=40, x_max=5.0, slope=2.0, intercept=0.0, noise=2.0)
        scene = task_scene("regression", points, TaskDemoConfig(padding=0.5))
        line = scene.layers[-1]
        self.assertIsInstance(line, PolylinePath)
        xs = [p.x for p in line.points]
        self.assertEqual(xs, sorted(xs))
        self.assertEqual(len(line.points), 40)
        self.assertLessEqual(scene.extent_y.min, min(p.y for p in line.points) - 0.5)
        self.assertEqual(line.style.label, "Least squares fit")
        self.assertEqual(scene.layers[1].style.label, "Data points")

    def test_unknown_kind_is_rejected(self) -> None:
        with self.assertRaises(ValueError):
            task_scene("clustering", points_from_pairs([(0.0, 0.0), (1.0, 1.0)]))

    def test_classification_requires_labels(self) -> None:
        with self.assertRaises(ValueError):
            task_scene("classification", points_from_pairs([(0.0, 0.0), (1.0, 1.0)]))
        scene = task_scene("classification", (LabeledPoint(0.0, 0.0, 0), LabeledPoint(1.0, 1.0, 1)))
        self.assertEqual(scene.readouts["class_1"], "1")


class TrainerSceneTests(unittest.TestCase):
    def test_initial_model_line_stays_visible(self) -> None:
        points = points_from_pairs([(1.0, 4.0), (2.0, 7.0), (3.0, 10.0)])
        scene = trainer_scene(LinearModel(), points)
        self.assertEqual(scene.extent_y, Extent(-1.0, 11.0))
        line = scene.layers[-1]
        self.assertEqual([p.y for p in line.points], [0.0, 0.0, 0.0])
        self.assertEqual(scene.readouts["m"], "0.000")
        self.assertEqual(scene.readouts["learning_rate"], "0.010")

    def test_learning_rate_readout_uses_given_rate(self) -> None:
        points = points_from_pairs([(1.0, 4.0), (2.0, 7.0)])
        scene = trainer_scene(LinearModel(), points, learning_rate=0.25)
        self.assertEqual(list(scene.readouts), ["learning_rate", "m", "b", "mse"])
        self.assertEqual(scene.readouts["learning_rate"], "0.250")

    def test_series_are_labeled_and_axes_titled(self) -> None:
        points = points_from_pairs([(1.0, 4.0), (2.0, 7.0)])
        axis, data, model = trainer_scene(LinearModel(), points).layers
        self.assertEqual((axis.x_title, axis.y_title), ("x", "y"))
        self.assertEqual(data.style.label, "Training data")
        self.assertEqual(model.style.label, "Model prediction")

    def test_draw_scene_renders_through_renderer(self) -> None:
        points = points_from_pairs([(1.0, 4.0), (2.0, 7.0)])
        scene = trainer_scene(LinearModel(m=3.0, b=1.0), points)
        surface = RecordingSurface(width=600, height=400)
        draw_scene(surface, scene, plot_rect(600, 400, 40))
        self.assertEqual(surface.names()[0], "clear_rect")
        self.assertEqual(len(surface.of("arc")), 2)
        self.assertEqual(scene.readouts["mse"], "0.000")


if __name__ == "__main__":
    unittest.main()
