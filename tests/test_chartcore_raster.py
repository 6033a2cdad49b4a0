from __future__ import annotations

import unittest

import numpy as np

from chartcore import BarChart, Chart, ChartInfo, Dataset, XY, XYScatter, render_image
from chartcore.geometry import Point, Rect
from chartcore.raster import RasterContext, draw_hline, draw_polyline, fill_rect, new_canvas
from chartcore.series import FontSpec


RED = (255, 0, 0, 255)
BLACK = (0, 0, 0, 255)


class CanvasTests(unittest.TestCase):
    def test_new_canvas_rejects_empty_size(self) -> None:
        with self.assertRaises(ValueError):
            new_canvas(0, 10)

    def test_fill_rect_is_inclusive_and_clipped(self) -> None:
        canvas = new_canvas(10, 10)
        fill_rect(canvas, 8, 8, 20, 20, RED)
        self.assertEqual(canvas[9, 9].tolist(), [255, 0, 0, 255])
        self.assertEqual(int(canvas[7, 7, 3]), 0)

    def test_translucent_fill_blends(self) -> None:
        canvas = new_canvas(4, 4, color=(255, 255, 255, 255))
        fill_rect(canvas, 0, 0, 3, 3, (0, 0, 0, 128))
        self.assertTrue(100 < int(canvas[1, 1, 0]) < 160)
        self.assertEqual(int(canvas[1, 1, 3]), 255)

    def test_rounded_fill_leaves_corners_empty(self) -> None:
        canvas = new_canvas(10, 10)
        fill_rect(canvas, 0, 0, 9, 9, RED, radius=4)
        self.assertEqual(int(canvas[0, 0, 3]), 0)
        self.assertEqual(int(canvas[0, 4, 3]), 255)
        self.assertEqual(canvas[5, 5].tolist(), [255, 0, 0, 255])

    def test_hline_is_clipped_to_canvas(self) -> None:
        canvas = new_canvas(6, 3)
        draw_hline(canvas, -5, 20, 1, RED)
        self.assertTrue(np.all(canvas[1, :, 3] == 255))
        self.assertTrue(np.all(canvas[0, :, 3] == 0))
        draw_hline(canvas, 0, 5, 7, RED)

    def test_polyline_connects_points(self) -> None:
        canvas = new_canvas(20, 20)
        draw_polyline(canvas, np.asarray([0, 19]), np.asarray([0, 19]), RED)
        for i in range(20):
            self.assertEqual(int(canvas[i, i, 3]), 255)


class RasterContextTests(unittest.TestCase):
    def test_fill_rect_covers_half_open_box(self) -> None:
        ctx = RasterContext(20, 20)
        ctx.fill_rect(Rect(2.0, 2.0, 6.0, 6.0), RED)
        self.assertEqual(ctx.canvas[2, 2].tolist(), [255, 0, 0, 255])
        self.assertEqual(ctx.canvas[5, 5].tolist(), [255, 0, 0, 255])
        self.assertEqual(int(ctx.canvas[6, 6, 3]), 0)
        self.assertEqual(len(ctx.primitives), 1)

    def test_horizontal_line(self) -> None:
        ctx = RasterContext(20, 20)
        ctx.draw_line(Point(0.0, 10.0), Point(19.0, 10.0), BLACK)
        self.assertTrue(np.all(ctx.canvas[10, :, 3] == 255))
        self.assertTrue(np.all(ctx.canvas[9, :, 3] == 0))

    def test_text_has_antialiased_coverage(self) -> None:
        ctx = RasterContext(120, 40)
        ctx.draw_text(Point(4.0, 4.0), "Hello", FontSpec(size=18.0), BLACK)
        alpha = ctx.canvas[:, :, 3]
        self.assertTrue(np.any(alpha > 0))
        self.assertEqual(int(alpha[0, 0]), 0)

    def test_rotated_text_hangs_below_anchor(self) -> None:
        ctx = RasterContext(60, 80)
        ctx.draw_text(Point(30.0, 10.0), "label", FontSpec(size=14.0), BLACK, h_align="right", v_align="middle", rotation=90.0)
        rows = np.nonzero(ctx.canvas[:, :, 3])[0]
        self.assertGreater(rows.size, 0)
        self.assertGreaterEqual(int(rows.min()), 9)
        cols = np.nonzero(ctx.canvas[:, :, 3])[1]
        w, h = ctx.text_size("label", FontSpec(size=14.0))
        self.assertLessEqual(int(cols.max() - cols.min()) + 1, int(h) + 1)

    def test_reset_clears_canvas(self) -> None:
        ctx = RasterContext(8, 8, background=(1, 2, 3, 255))
        ctx.fill_rect(Rect(0.0, 0.0, 8.0, 8.0), RED)
        ctx.reset()
        self.assertEqual(ctx.canvas[4, 4].tolist(), [1, 2, 3, 255])
        self.assertEqual(ctx.primitives, [])


class RenderImageTests(unittest.TestCase):
    def test_scatter_chart_renders_to_rgba_image(self) -> None:
        chart = Chart(
            XYScatter(axis=XY("x", "y")),
            ChartInfo(datasets=(Dataset((XY(0.0, 1.0), XY(4.0, 3.0), XY(8.0, 2.0)), name="series"),), caption="Raster"),
        )
        image = render_image(chart, 320, 240)
        self.assertEqual(image.size, (320, 240))
        self.assertEqual(image.mode, "RGBA")
        pixels = np.asarray(image)
        self.assertTrue(np.any(pixels[:, :, :3] != 255))

    def test_bar_chart_renders_dataset_colour(self) -> None:
        chart = Chart(
            BarChart(categories=("a", "b")),
            ChartInfo(datasets=(Dataset((2.0, 5.0), colour=RED),)),
        )
        pixels = np.asarray(render_image(chart, 200, 160))
        red = (pixels[:, :, 0] == 255) & (pixels[:, :, 1] == 0) & (pixels[:, :, 2] == 0)
        self.assertGreater(int(red.sum()), 100)

    def test_size_must_be_positive(self) -> None:
        chart = Chart(BarChart(categories=("a",)), ChartInfo(datasets=(Dataset((1.0,)),)))
        with self.assertRaises(ValueError):
            render_image(chart, 0, 100)


if __name__ == "__main__":
    unittest.main()
