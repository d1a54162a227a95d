from __future__ import annotations

import unittest
from unittest import mock

from canvas_fakes import RecordingCanvas

from scopeplot.config import GraphConfig
from scopeplot.layout import MAX_LAYOUT_PASSES, TickSet, label_ticks, solve_layout
from scopeplot.scales import AxisRange
from scopeplot.theme import DEFAULT_THEME


class SolveLayoutTests(unittest.TestCase):
    def setUp(self) -> None:
        self.metrics = RecordingCanvas()

    def test_layout_terminates_inside_content_for_many_inputs(self) -> None:
        rects = (
            (0.0, 640.0, 0.0, 360.0),
            (0.0, 200.0, 0.0, 120.0),
            (50.0, 300.0, 40.0, 200.0),
            (0.0, 40.0, 0.0, 30.0),
        )
        ranges = (
            AxisRange(0.0, 1.0),
            AxisRange(-1e6, 1e6),
            AxisRange(1000.0, 1000.5),
            AxisRange(-0.003, 0.002),
        )
        for rect in rects:
            for x_range in ranges:
                for y_range in ranges:
                    for equal_axes in (False, True):
                        config = GraphConfig(
                            content_rect=rect,
                            x_range=x_range,
                            y_range=y_range,
                            equal_axes=equal_axes,
                            title="t",
                        )
                        layout = solve_layout(self.metrics, config, DEFAULT_THEME)
                        c_left, c_right, c_top, c_bottom = rect
                        msg = f"rect={rect} x={x_range} y={y_range} equal={equal_axes}"
                        self.assertLess(c_left, layout.left, msg=msg)
                        self.assertLess(layout.left, layout.right, msg=msg)
                        self.assertLess(layout.right, c_right, msg=msg)
                        self.assertLess(c_top, layout.top, msg=msg)
                        self.assertLess(layout.top, layout.bottom, msg=msg)
                        self.assertLess(layout.bottom, c_bottom, msg=msg)
                        self.assertGreaterEqual(layout.passes, 1)
                        self.assertLessEqual(layout.passes, MAX_LAYOUT_PASSES)

    def test_hundred_unit_axis_with_room_for_five_labels(self) -> None:
        # 11px labels: top inset 10.5, bottom inset 24, leaving 110.5px for 22px per label
        config = GraphConfig(content_rect=(0.0, 640.0, 0.0, 145.0), y_range=AxisRange(0.0, 100.0))
        layout = solve_layout(self.metrics, config, DEFAULT_THEME)
        self.assertIn(layout.y_ticks.step, (20.0, 25.0))
        self.assertEqual(layout.y_ticks.labels[0], "0")
        self.assertEqual(layout.y_ticks.labels[-1], "100")

    def test_left_inset_fits_widest_y_label(self) -> None:
        config = GraphConfig(y_range=AxisRange(-1000.0, 1000.0))
        layout = solve_layout(self.metrics, config, DEFAULT_THEME)
        widest = max(self.metrics.text_width(label, DEFAULT_THEME.label_font()) for label in layout.y_ticks.labels)
        self.assertEqual(layout.y_ticks.max_label_width, widest)
        # border + pad + label + pad + tick
        self.assertAlmostEqual(layout.left, 1.0 + 4.0 + widest + 4.0 + 5.0)

    def test_titles_shrink_the_plot_rectangle(self) -> None:
        plain = solve_layout(self.metrics, GraphConfig(), DEFAULT_THEME)
        titled = solve_layout(self.metrics, GraphConfig(title="Voltage", x_title="time"), DEFAULT_THEME)
        self.assertGreater(titled.top, plain.top)
        self.assertLess(titled.bottom, plain.bottom)

    def test_equal_axes_share_one_step(self) -> None:
        config = GraphConfig(x_range=AxisRange(0.0, 100.0), y_range=AxisRange(0.0, 3.0), equal_axes=True)
        layout = solve_layout(self.metrics, config, DEFAULT_THEME)
        self.assertEqual(layout.x_ticks.step, layout.y_ticks.step)

    def test_x_labels_never_repeat(self) -> None:
        config = GraphConfig(x_range=AxisRange(1000.0, 1000.5))
        layout = solve_layout(self.metrics, config, DEFAULT_THEME)
        labels = layout.x_ticks.labels
        self.assertGreater(len(labels), 1)
        for a, b in zip(labels, labels[1:]):
            self.assertNotEqual(a, b)

    def test_scale_grows_insets(self) -> None:
        normal = solve_layout(self.metrics, GraphConfig(), DEFAULT_THEME)
        doubled = solve_layout(self.metrics, GraphConfig(scale=2.0), DEFAULT_THEME)
        self.assertGreater(doubled.left, normal.left)
        self.assertGreater(doubled.top, normal.top)

    def test_transform_matches_plot_rect(self) -> None:
        config = GraphConfig(x_range=AxisRange(0.0, 10.0), y_range=AxisRange(-1.0, 1.0))
        layout = solve_layout(self.metrics, config, DEFAULT_THEME)
        transform = layout.transform(config.x_range, config.y_range)
        px, py = transform.to_pixel(0.0, -1.0)
        self.assertAlmostEqual(px, layout.left)
        self.assertAlmostEqual(py, layout.bottom)
        px, py = transform.to_pixel(10.0, 1.0)
        self.assertAlmostEqual(px, layout.right)
        self.assertAlmostEqual(py, layout.top)
        self.assertTrue(layout.contains_pixel(layout.left, layout.top))
        self.assertFalse(layout.contains_pixel(layout.left - 1.0, layout.top))


class LabelTicksTests(unittest.TestCase):
    def test_precision_grows_until_neighbours_differ(self) -> None:
        metrics = RecordingCanvas()
        font = DEFAULT_THEME.label_font()
        with mock.patch("scopeplot.layout.required_precision", return_value=1):
            ticks = label_ticks(AxisRange(10.0, 11.0), 0.25, metrics, font)
        self.assertEqual(ticks.precision, 3)
        self.assertEqual(ticks.labels, ("10", "10.2", "10.5", "10.8", "11"))

    def test_tick_set_is_iterable_pairs(self) -> None:
        ticks = TickSet(ticks=((0.0, "0"), (5.0, "5")), step=5.0, precision=1, max_label_width=6.6)
        self.assertEqual(list(ticks), [(0.0, "0"), (5.0, "5")])
        self.assertEqual(len(ticks), 2)
        self.assertEqual(ticks.values, (0.0, 5.0))


if __name__ == "__main__":
    unittest.main()
