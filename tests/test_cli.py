from __future__ import annotations

import contextlib
import io
from pathlib import Path
import tempfile
import unittest

import numpy as np
from PIL import Image

from primer_demos.cli import main


class CliTests(unittest.TestCase):
    def _run(self, *argv: str) -> str:
        buf = io.StringIO()
        with contextlib.redirect_stdout(buf):
            code = main(list(argv))
        self.assertEqual(code, 0)
        return buf.getvalue()

    def test_regression_writes_png_and_prints_mse(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            out = Path(tmp) / "regression.png"
            text = self._run("regression", "--out", str(out), "--seed", "1", "--slope", "1.5", "--intercept", "-2")
            with Image.open(out) as image:
                self.assertEqual(image.size, (600, 400))
        self.assertIn("slope: 1.50", text)
        self.assertIn("intercept: -2.00", text)
        self.assertIn("mse: ", text)

    def test_gradient_descent_respects_canvas_size(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            out = Path(tmp) / "gd.png"
            text = self._run("gradient-descent", "--out", str(out), "--alpha", "0.3", "--width", "320", "--height", "240")
            with Image.open(out) as image:
                self.assertEqual(image.size, (320, 240))
        self.assertIn("learning_rate: 0.30", text)

    def test_task_and_train_commands(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            text = self._run("task", "--kind", "classification", "--out", str(Path(tmp) / "task.png"), "--seed", "2")
            self.assertIn("class_0: 50", text)
            text = self._run("train", "--lr", "0.01", "--steps", "5", "--out", str(Path(tmp) / "train.png"), "--seed", "2")
            self.assertIn("m: ", text)
            self.assertIn("learning_rate: 0.010", text)
            self.assertTrue((Path(tmp) / "train.png").exists())

    def test_seeded_runs_are_reproducible(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            first = self._run("regression", "--out", str(Path(tmp) / "a.png"), "--seed", "9")
            second = self._run("regression", "--out", str(Path(tmp) / "b.png"), "--seed", "9")
            self.assertEqual((Path(tmp) / "a.png").read_bytes(), (Path(tmp) / "b.png").read_bytes())
        self.assertEqual(first, second)

    def test_config_file_supplies_defaults(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            config = Path(tmp) / "demos.toml"
            config.write_text("[canvas]\nwidth = 300\nheight = 200\nmargin = 30\n", encoding="utf-8")
            out = Path(tmp) / "cfg.png"
            self._run("train", "--config", str(config), "--out", str(out), "--steps", "0")
            with Image.open(out) as image:
                self.assertEqual(image.size, (300, 200))

    def test_divergent_runs_still_write_a_frame(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            out = Path(tmp) / "gd.png"
            text = self._run("gradient-descent", "--alpha", "1.25", "--out", str(out))
            self.assertTrue(out.exists())
            self.assertIn("learning_rate: 1.25", text)

            out = Path(tmp) / "train.png"
            with np.errstate(all="ignore"):
                text = self._run("train", "--lr", "1", "--steps", "2000", "--seed", "1", "--out", str(out))
            self.assertTrue(out.exists())
            self.assertIn("learning_rate: 1.000", text)
            self.assertRegex(text, r"mse: (nan|inf)")


if __name__ == "__main__":
    unittest.main()
