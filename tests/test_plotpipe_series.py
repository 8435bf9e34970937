from __future__ import annotations

from decimal import Decimal
import io
import unittest

import numpy as np
import pandas as pd

from plotpipe import Boxes, PlotDataError, boxes, lines, linespoints, points
from plotpipe.adapters import normalize_xy


def _emit(series, index: int = 0) -> tuple[str, str, str]:
    series.set_identity(index)
    settings, data, clause = io.StringIO(), io.StringIO(), io.StringIO()
    series.emit_settings(settings)
    series.emit_data(data)
    series.emit_plot_clause(clause)
    return settings.getvalue(), data.getvalue(), clause.getvalue()


class NormalizeTests(unittest.TestCase):
    def test_x_defaults_to_positions(self) -> None:
        data = normalize_xy([5, 6.5, 7])
        np.testing.assert_array_equal(data.x, [0.0, 1.0, 2.0])
        self.assertEqual(data.y.dtype, np.float64)

    def test_length_mismatch(self) -> None:
        with self.assertRaises(PlotDataError):
            normalize_xy([1, 2], x=[1])

    def test_empty_and_non_finite_inputs(self) -> None:
        with self.assertRaises(PlotDataError):
            normalize_xy([])
        with self.assertRaises(PlotDataError):
            normalize_xy([float("nan"), None])
        with self.assertRaises(PlotDataError):
            normalize_xy(None)

    def test_non_numeric_values(self) -> None:
        with self.assertRaises(PlotDataError):
            normalize_xy(["a", "b"])
        with self.assertRaises(PlotDataError):
            normalize_xy("abc")

    def test_two_dimensional_input_is_rejected(self) -> None:
        with self.assertRaises(PlotDataError):
            normalize_xy(np.zeros((2, 2)))

    def test_dataframe_columns(self) -> None:
        frame = pd.DataFrame({"t": [0.0, 1.0, 2.0], "v": [3.0, 4.0, 5.0]})
        data = normalize_xy("v", x="t", data=frame)
        np.testing.assert_array_equal(data.y, [3.0, 4.0, 5.0])
        with self.assertRaises(PlotDataError):
            normalize_xy("missing", data=frame)
        with self.assertRaises(PlotDataError):
            normalize_xy(data=frame)

    def test_none_and_decimal_values(self) -> None:
        data = normalize_xy([Decimal("1.5"), None, 3])
        self.assertEqual(data.y[0], 1.5)
        self.assertTrue(np.isnan(data.y[1]))
        np.testing.assert_array_equal(data.mask, [True, False, True])

    def test_mixed_and_ragged_inputs_are_rejected(self) -> None:
        with self.assertRaises(PlotDataError):
            normalize_xy([1, "two"])
        with self.assertRaises(PlotDataError):
            normalize_xy([[1, 2], [3]])
        with self.assertRaises(PlotDataError):
            normalize_xy({1, 2})

    def test_single_numeric_column_frame_is_used_when_y_is_omitted(self) -> None:
        frame = pd.DataFrame({"name": ["a", "b"], "v": [1, 2]})
        data = normalize_xy(data=frame)
        np.testing.assert_array_equal(data.y, [1.0, 2.0])

    def test_data_requires_a_dataframe(self) -> None:
        with self.assertRaises(PlotDataError):
            normalize_xy("v", data={"v": [1, 2]})

    def test_pandas_series(self) -> None:
        data = normalize_xy(pd.Series([1, 2, 3]))
        np.testing.assert_array_equal(data.y, [1.0, 2.0, 3.0])


class SeriesEmissionTests(unittest.TestCase):
    def test_data_block_skips_non_finite_rows(self) -> None:
        _, data, _ = _emit(lines([1.0, float("nan"), 3.5]), index=2)
        self.assertEqual(data, "$lines2 << EOD\n0 1\n2 3.5\nEOD\n\n")

    def test_unlabeled_series_has_no_title(self) -> None:
        _, _, clause = _emit(lines([1, 2], width=2))
        self.assertEqual(clause, "$lines0 using 1:2 with lines linewidth 2 notitle")

    def test_label_and_color(self) -> None:
        _, _, clause = _emit(points([1], label='say "x"', color="#00ff00", size=1.5))
        self.assertEqual(
            clause,
            '$points0 using 1:2 with points pointtype 7 pointsize 1.5 linecolor rgb "#00ff00" title "say \\"x\\""',
        )

    def test_linespoints_clause(self) -> None:
        _, _, clause = _emit(linespoints([1], label="lp"))
        self.assertEqual(
            clause,
            '$linespoints0 using 1:2 with linespoints linewidth 1 pointtype 7 pointsize 1 title "lp"',
        )

    def test_relative_boxes(self) -> None:
        settings, _, clause = _emit(boxes([1, 2], label="b", box_width=0.5, fill=0.25))
        self.assertEqual(settings, "set style fill solid 0.25\nset boxwidth 0.5 relative\n")
        self.assertEqual(clause, '$boxes0 using 1:2 with boxes title "b"')

    def test_absolute_boxes_carry_width_column(self) -> None:
        series = boxes([1, 2]).set_relative_box_width(False).set_box_width(2)
        settings, _, clause = _emit(series)
        self.assertEqual(settings, "set style fill solid 0.5\n")
        self.assertEqual(clause, "$boxes0 using 1:2:(2) with boxes notitle")

    def test_fluent_setters_return_series(self) -> None:
        series = boxes([1])
        self.assertIs(series.set_label("x").set_color("red"), series)
        self.assertIsInstance(series, Boxes)

    def test_invalid_style_values(self) -> None:
        with self.assertRaises(ValueError):
            boxes([1], box_width=0)
        with self.assertRaises(ValueError):
            boxes([1], fill=2)
        with self.assertRaises(ValueError):
            lines([1], width=0)
        with self.assertRaises(ValueError):
            points([1], size=-1)

    def test_emitting_without_identity_fails(self) -> None:
        with self.assertRaises(PlotDataError):
            lines([1]).emit_data(io.StringIO())


if __name__ == "__main__":
    unittest.main()
