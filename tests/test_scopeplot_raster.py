from __future__ import annotations

import importlib
import math
from pathlib import Path
import tempfile
import unittest
from unittest import mock

import numpy as np
from PIL import Image

from scopeplot.api import raster_graph
from scopeplot.canvas import FontSpec
from scopeplot.config import GraphConfig
from scopeplot.raster import DirtyRegion, RasterCanvas, union_rect
from scopeplot.raster.draw_lines import line_pixels
from scopeplot.raster.draw_markers import ellipse_mask
from scopeplot.scales import AxisRange
from scopeplot.theme import DEFAULT_THEME, parse_hex_color

# the package re-exports a draw_text function under the submodule name
draw_text = importlib.import_module("scopeplot.raster.draw_text")


RED = (255, 0, 0, 255)
BLACK = (0, 0, 0, 255)


class RasterCanvasTests(unittest.TestCase):
    def test_filled_rect_without_stroke(self) -> None:
        canvas = RasterCanvas(40, 30, background=BLACK)
        canvas.set_stroke(None)
        canvas.set_fill(RED)
        canvas.rect(5, 5, 10, 10, mode="corner")
        self.assertEqual(tuple(canvas.frame[7, 7]), RED)
        self.assertEqual(tuple(canvas.frame[14, 14]), RED)
        self.assertEqual(tuple(canvas.frame[15, 15]), BLACK)
        self.assertEqual(tuple(canvas.frame[2, 2]), BLACK)
        self.assertEqual(canvas.take_dirty_rect(), (5, 5, 10, 10))
        self.assertIsNone(canvas.take_dirty_rect())

    def test_lines_follow_stroke_width(self) -> None:
        canvas = RasterCanvas(40, 30, background=BLACK)
        canvas.set_stroke(RED, 1.0)
        canvas.line(2, 10, 30, 10)
        self.assertEqual(tuple(canvas.frame[10, 16]), RED)
        self.assertEqual(tuple(canvas.frame[11, 16]), BLACK)

        canvas.set_stroke(RED, 3.0)
        canvas.line(2, 20, 30, 20)
        self.assertEqual(tuple(canvas.frame[21, 16]), RED)

        canvas.set_stroke(RED, 1.0)
        canvas.line(0, 0, 29, 29)
        self.assertEqual(tuple(canvas.frame[15, 15]), RED)

    def test_line_pixels_cover_both_endpoints(self) -> None:
        xs, ys = line_pixels(0, 0, 4, 2)
        self.assertEqual(xs.tolist(), [0, 1, 2, 3, 4])
        self.assertEqual((int(ys[0]), int(ys[-1])), (0, 2))

    def test_translucent_thick_line_blends_once_per_pixel(self) -> None:
        canvas = RasterCanvas(30, 30, background=BLACK)
        canvas.set_stroke((255, 0, 0, 128), 3.0)
        canvas.line(2, 2, 25, 20)
        reds = canvas.frame[:, :, 0][canvas.frame[:, :, 0] > 0]
        self.assertEqual(set(reds.tolist()), {int(reds.max())})

    def test_disabled_stroke_draws_nothing(self) -> None:
        canvas = RasterCanvas(20, 20, background=BLACK)
        canvas.set_stroke(None)
        canvas.line(0, 5, 19, 5)
        self.assertTrue(np.all(canvas.frame[:, :, 0] == 0))
        self.assertIsNone(canvas.take_dirty_rect())

    def test_ellipse_covers_its_centre(self) -> None:
        canvas = RasterCanvas(20, 20, background=BLACK)
        canvas.set_stroke(None)
        canvas.set_fill(RED)
        canvas.ellipse(10, 10, 6, 6)
        self.assertEqual(tuple(canvas.frame[10, 10]), RED)
        self.assertEqual(tuple(canvas.frame[0, 0]), BLACK)
        x0, y0, mask = ellipse_mask(10.0, 10.0, 3.0, 3.0)
        self.assertEqual((x0, y0), (7, 7))
        self.assertTrue(mask.any())

    def test_alpha_blends_over_background(self) -> None:
        canvas = RasterCanvas(10, 10, background=BLACK)
        canvas.set_stroke(None)
        canvas.set_fill((255, 0, 0, 128))
        canvas.rect(0, 0, 10, 10)
        r = int(canvas.frame[5, 5, 0])
        self.assertGreater(r, 100)
        self.assertLess(r, 160)
        self.assertEqual(int(canvas.frame[5, 5, 3]), 255)

    def test_text_renders_and_measures(self) -> None:
        canvas = RasterCanvas(120, 40, background=BLACK)
        font = FontSpec(family="DejaVu Sans Mono", size_px=14.0, monospace=True)
        canvas.set_fill((255, 255, 255, 255))
        canvas.text("123", 60, 20, font=font, align_x="center", align_y="center")
        self.assertTrue(np.any(canvas.frame[:, :, 0] > 0))
        self.assertGreater(canvas.text_width("123", font), 0.0)
        self.assertGreater(canvas.text_width("12345", font), canvas.text_width("1", font))
        self.assertGreater(canvas.font_ascent(font), 0.0)
        self.assertGreaterEqual(canvas.font_descent(font), 0.0)

    def test_unreadable_font_falls_back_with_debug_log(self) -> None:
        self.addCleanup(draw_text._load_font.cache_clear)
        draw_text._load_font.cache_clear()
        with tempfile.TemporaryDirectory() as tmp:
            missing = Path(tmp) / "missing.ttf"
            with mock.patch.object(draw_text, "_resolve_font_path", return_value=missing):
                with self.assertLogs("scopeplot.raster.draw_text", level="DEBUG") as logs:
                    handle = draw_text._load_font("NoSuchFamily", 17.0, False)
        self.assertGreater(float(handle.getlength("abc")), 0.0)
        self.assertIn("missing.ttf", logs.output[0])

    def test_clear_overwrites_region(self) -> None:
        canvas = RasterCanvas(10, 10, background=BLACK)
        canvas.clear(0, 0, 5, 10, RED)
        self.assertEqual(tuple(canvas.frame[3, 2]), RED)
        self.assertEqual(tuple(canvas.frame[3, 7]), BLACK)
        self.assertEqual(canvas.region((0, 0, 5, 10)).shape, (10, 5, 4))


class DirtyRegionTests(unittest.TestCase):
    def test_union_grows_and_clips(self) -> None:
        region = DirtyRegion(width=100, height=50)
        region.add(10, 10, 20, 20)
        region.add(-5, 30, 5, 80)
        self.assertEqual(region.take(), (0, 10, 21, 40))
        self.assertIsNone(region.take())
        self.assertEqual(union_rect(None, (1, 2, 3, 4)), (1, 2, 3, 4))


class RasterGraphTests(unittest.TestCase):
    def test_canvas_follows_config_when_no_size_given(self) -> None:
        graph = raster_graph(config=GraphConfig(content_rect=(0.0, 320.0, 0.0, 200.0)))
        self.assertEqual((graph.canvas.width, graph.canvas.height), (320, 200))

    def test_explicit_size_fills_canvas(self) -> None:
        graph = raster_graph(400)
        self.assertEqual((graph.canvas.width, graph.canvas.height), (400, 225))
        self.assertEqual(graph.config.content_rect, (0.0, 400.0, 0.0, 225.0))
        with self.assertRaises(ValueError):
            raster_graph(0, 10)

    def test_live_sine_draws_incrementally(self) -> None:
        config = GraphConfig(x_range=AxisRange(0.0, 10.0), y_range=AxisRange(-1.5, 1.5), title="sine")
        graph = raster_graph(320, 180, config=config)
        canvas = graph.canvas
        graph.plot(0.0, 0.0)
        full = canvas.take_dirty_rect()
        self.assertEqual(full, (0, 0, 320, 180))
        graph.plot(0.1, math.sin(0.1))
        step = canvas.take_dirty_rect()
        self.assertIsNotNone(step)
        assert step is not None
        self.assertLess(step[2], 20)

        for i in range(2, 100):
            x = i / 10.0
            graph.plot(x, math.sin(x))
        series_rgb = np.asarray(DEFAULT_THEME.series_color(0)[:3], dtype=np.uint8)
        self.assertTrue(np.any(np.all(canvas.frame[:, :, :3] == series_rgb, axis=2)))
        background = np.asarray(parse_hex_color(DEFAULT_THEME.background), dtype=np.uint8)
        self.assertTrue(np.array_equal(canvas.frame[0, 0], background))

    def test_save_png(self) -> None:
        graph = raster_graph(160, 90, config=GraphConfig(style="bar"))
        for i in range(10):
            graph.plot(float(i), 0.5)
        with tempfile.TemporaryDirectory() as tmp:
            out = graph.canvas.save_png(Path(tmp) / "bars.png")
            with Image.open(out) as image:
                self.assertEqual(image.size, (160, 90))
                self.assertEqual(image.mode, "RGBA")


if __name__ == "__main__":
    unittest.main()
