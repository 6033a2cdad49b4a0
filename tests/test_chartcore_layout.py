from __future__ import annotations

import unittest

from chartcore.errors import EmptyDatasetError, InvalidDatasetsError, NotEnoughSpaceError
from chartcore.geometry import Point, Rect
from chartcore.layout.bar import global_max_value, layout_bars
from chartcore.layout.grid import layout_grid
from chartcore.layout.legend import LegendEntry, draw_legend, layout_legend
from chartcore.layout.scatter import layout_scatter
from chartcore.primitives import FilledRect, Text
from chartcore.recording import RecordingContext
from chartcore.series import XY, FontSpec
from chartcore.steps import decide_steps


RED = (255, 0, 0, 255)
BLUE = (0, 0, 255, 255)


class BarLayoutTests(unittest.TestCase):
    def test_reference_block_geometry(self) -> None:
        area = Rect(0.0, 0.0, 12.0, 12.0)
        layout = layout_bars([[0.0, 10.0], [2.0, 5.0]], area, 2.0)
        self.assertAlmostEqual(layout.block_width, 2.5)
        block = layout.blocks_for_dataset(0)[1]
        self.assertEqual(block.category, 1)
        self.assertAlmostEqual(block.rect.x0, layout.block_width * 2 + 2.0)
        self.assertAlmostEqual(block.rect.x1, layout.block_width * 3 + 2.0)
        self.assertAlmostEqual(block.rect.height, 12.0)
        self.assertEqual(layout.category_centers, (2.5, 9.5))

    def test_blocks_lie_within_area(self) -> None:
        area = Rect(20.0, 5.0, 220.0, 105.0)
        layout = layout_bars([[1.0, 4.5, 3.0], [2.0, 0.0, 7.2], [6.0, 1.0, 1.0]], area, 4.0)
        self.assertEqual(len(layout.blocks), 9)
        for block in layout.blocks:
            self.assertTrue(area.contains_rect(block.rect), block)
            self.assertEqual(block.rect.y0, area.y0)

    def test_global_max_value_is_ceiling(self) -> None:
        self.assertEqual(global_max_value([[1.0, 7.2], [3.0]]), 8.0)
        self.assertEqual(global_max_value([]), 0.0)

    def test_explicit_max_value_scales_heights(self) -> None:
        layout = layout_bars([[5.0]], Rect(0.0, 0.0, 10.0, 100.0), 0.0, max_value=10.0)
        self.assertAlmostEqual(layout.blocks[0].rect.height, 50.0)

    def test_all_zero_values_give_flat_blocks(self) -> None:
        layout = layout_bars([[0.0, 0.0]], Rect(0.0, 0.0, 10.0, 10.0), 1.0)
        self.assertEqual(layout.max_value, 0.0)
        self.assertTrue(all(b.rect.height == 0.0 for b in layout.blocks))

    def test_category_count_mismatch(self) -> None:
        with self.assertRaises(InvalidDatasetsError):
            layout_bars([[1.0, 2.0], [3.0]], Rect(0.0, 0.0, 100.0, 100.0), 1.0)
        with self.assertRaises(InvalidDatasetsError):
            layout_bars([[1.0, 2.0]], Rect(0.0, 0.0, 100.0, 100.0), 1.0, categories=3)

    def test_negative_values_are_rejected(self) -> None:
        with self.assertRaisesRegex(InvalidDatasetsError, ">= 0"):
            layout_bars([[1.0, -2.0]], Rect(0.0, 0.0, 100.0, 100.0), 1.0)

    def test_no_datasets(self) -> None:
        with self.assertRaises(EmptyDatasetError):
            layout_bars([], Rect(0.0, 0.0, 100.0, 100.0), 1.0)

    def test_area_too_narrow(self) -> None:
        with self.assertRaises(NotEnoughSpaceError) as ctx:
            layout_bars([[1.0, 2.0, 3.0], [1.0, 2.0, 3.0]], Rect(0.0, 0.0, 8.0, 10.0), 2.0)
        self.assertEqual(ctx.exception.needed, 10.0)
        self.assertEqual(ctx.exception.available, 8.0)

    def test_negative_spacing_is_a_caller_error(self) -> None:
        with self.assertRaises(ValueError):
            layout_bars([[1.0]], Rect(0.0, 0.0, 10.0, 10.0), -1.0)


class ScatterLayoutTests(unittest.TestCase):
    def test_flip_scale_then_center(self) -> None:
        target = Rect(10.0, 10.0, 110.0, 60.0)
        layout = layout_scatter([[XY(0.0, 0.0), XY(10.0, 5.0), XY(20.0, 10.0)]], target)
        path = layout.paths[0]
        self.assertEqual([tuple(row) for row in path], [(10.0, 60.0), (60.0, 35.0), (110.0, 10.0)])

    def test_paths_fit_inside_target(self) -> None:
        target = Rect(0.0, 0.0, 100.0, 100.0)
        datasets = [
            [XY(5.0, 5.0), XY(10.0, 10.0)],
            [],
            [XY(2.0, 9.0), XY(7.5, 1.0), XY(3.0, 3.0)],
        ]
        layout = layout_scatter(datasets, target)
        self.assertEqual(len(layout.paths), 3)
        self.assertEqual(layout.paths[1].shape, (0, 2))
        for path in layout.paths:
            for x, y in path:
                self.assertTrue(target.contains_rect(Rect(x, y, x, y), tolerance=1e-6), (x, y))

    def test_frame_maps_onto_target(self) -> None:
        target = Rect(0.0, 0.0, 200.0, 100.0)
        layout = layout_scatter([[XY(1.0, 1.0), XY(3.0, 2.0)]], target, frame=Rect(0.0, 0.0, 4.0, 2.0))
        self.assertEqual(layout.bounds, Rect(0.0, 0.0, 4.0, 2.0))
        corner = layout.transform.apply(Point(0.0, 0.0))
        self.assertAlmostEqual(corner.x, 0.0)
        self.assertAlmostEqual(corner.y, 100.0)

    def test_empty_inputs(self) -> None:
        with self.assertRaises(EmptyDatasetError):
            layout_scatter([], Rect(0.0, 0.0, 10.0, 10.0))
        with self.assertRaises(EmptyDatasetError):
            layout_scatter([[], []], Rect(0.0, 0.0, 10.0, 10.0))


class GridLayoutTests(unittest.TestCase):
    def setUp(self) -> None:
        self.plot = Rect(50.0, 20.0, 250.0, 120.0)
        self.x_steps = decide_steps(200.0, 0.0, 10.0, 5.0)
        self.y_steps = decide_steps(100.0, 0.0, 4.0, 2.0)

    def test_default_grid_draws_horizontal_lines_only(self) -> None:
        grid = layout_grid(self.plot, self.x_steps, self.y_steps)
        self.assertEqual(len(grid.grid_lines), 3)
        self.assertEqual([seg.p0.y for seg in grid.grid_lines], [120.0, 70.0, 20.0])
        for seg in grid.grid_lines:
            self.assertEqual((seg.p0.x, seg.p1.x), (50.0, 250.0))
        self.assertEqual(len(grid.axis_lines), 2)

    def test_vertical_toggle(self) -> None:
        grid = layout_grid(self.plot, self.x_steps, self.y_steps, XY(True, False))
        self.assertEqual([seg.p0.x for seg in grid.grid_lines], [50.0, 150.0, 250.0])
        self.assertTrue(all(seg.p0.y == 20.0 and seg.p1.y == 120.0 for seg in grid.grid_lines))

    def test_label_alignment_and_offsets(self) -> None:
        grid = layout_grid(self.plot, self.x_steps, self.y_steps, margins=XY(4.0, 6.0))
        x_labels = grid.labels[:3]
        y_labels = grid.labels[3:]
        self.assertEqual([lbl.content for lbl in x_labels], ["0", "5", "10"])
        self.assertEqual(x_labels[1].position, Point(150.0, 126.0))
        self.assertEqual((x_labels[1].h_align, x_labels[1].v_align), ("center", "top"))
        self.assertEqual(y_labels[0].position, Point(46.0, 120.0))
        self.assertEqual((y_labels[0].h_align, y_labels[0].v_align), ("right", "middle"))

    def test_rotated_x_labels(self) -> None:
        grid = layout_grid(self.plot, self.x_steps, (), rotate_x_labels=True)
        self.assertTrue(all(lbl.rotation == 90.0 for lbl in grid.labels))
        self.assertTrue(all(lbl.h_align == "right" for lbl in grid.labels))


class LegendLayoutTests(unittest.TestCase):
    def setUp(self) -> None:
        self.ctx = RecordingContext()
        self.font = FontSpec(size=12.0)
        self.plot = Rect(0.0, 0.0, 400.0, 300.0)
        self.entries = [LegendEntry("alpha", RED), LegendEntry("beta", BLUE)]

    def test_rows_stack_downward(self) -> None:
        legend = layout_legend(self.entries, self.plot, self.ctx, self.font)
        assert legend is not None
        self.assertEqual(len(legend.rows), 2)
        first, second = legend.rows
        self.assertGreater(second.swatch.y0, first.swatch.y0)
        self.assertAlmostEqual(first.swatch.width, first.height)
        self.assertTrue(legend.box.contains_rect(second.swatch))

    def test_corner_placement(self) -> None:
        upper_right = layout_legend(self.entries, self.plot, self.ctx, self.font)
        assert upper_right is not None
        self.assertAlmostEqual(upper_right.origin.x + upper_right.box.width, 360.0)
        self.assertAlmostEqual(upper_right.origin.y, 30.0)

        lower_left = layout_legend(self.entries, self.plot, self.ctx, self.font, "lower-left")
        assert lower_left is not None
        self.assertAlmostEqual(lower_left.origin.x, 40.0)
        self.assertAlmostEqual(lower_left.origin.y + lower_left.box.height, 270.0)

    def test_no_entries_no_legend(self) -> None:
        self.assertIsNone(layout_legend([], self.plot, self.ctx, self.font))

    def test_draw_legend_translates_and_restores(self) -> None:
        legend = layout_legend(self.entries, self.plot, self.ctx, self.font)
        assert legend is not None
        draw_legend(self.ctx, legend, background=(255, 255, 255, 255), text_colour=(0, 0, 0, 255))
        self.assertEqual(self.ctx.depth, 0)
        rects = [p for p in self.ctx.primitives if isinstance(p, FilledRect)]
        texts = [p for p in self.ctx.primitives if isinstance(p, Text)]
        self.assertEqual(len(rects), 5)
        self.assertEqual([t.content for t in texts], ["alpha", "beta"])
        self.assertAlmostEqual(rects[0].rect.x0, legend.origin.x)
        self.assertAlmostEqual(rects[0].rect.y0, legend.origin.y)


if __name__ == "__main__":
    unittest.main()
