import unittest
from unittest import mock

import numpy as np
import pandas as pd

from column_types import Align
from grid_pane import ELLIPSIS, GridPane, draw_blank, draw_message, fit_cell
from row_window import RowWindow
from table import Column, Table


class DummyWin:
    def __init__(self, h=24, w=120):
        self._h = h
        self._w = w
        self.writes = []
        self.erased = 0
        self.refreshed = 0

    def getmaxyx(self):
        return self._h, self._w

    def erase(self):
        self.erased += 1
        self.writes = []

    def refresh(self):
        self.refreshed += 1

    def addnstr(self, y, x, text, n, attr=0):
        self.writes.append((y, x, text[:n], attr))

    def line(self, y):
        return [w for w in self.writes if w[0] == y]


def _scenario_table():
    return Table.from_frame(
        pd.DataFrame({"id": [1, 2], "name": ["Alice", "Bob"], "score": [9.5, 7.0]})
    )


def _numbers(n, cols=2):
    return Table.from_frame(pd.DataFrame({f"c{i}": np.arange(n) for i in range(cols)}))


class FitCellTests(unittest.TestCase):
    def test_short_text_is_padded_by_alignment(self):
        self.assertEqual(fit_cell("ab", 5, Align.LEFT), "ab   ")
        self.assertEqual(fit_cell("ab", 5, Align.RIGHT), "   ab")
        self.assertEqual(fit_cell("ab", 6, Align.CENTER), "  ab  ")

    def test_exact_width_is_not_truncated(self):
        self.assertEqual(fit_cell("abcde", 5), "abcde")

    def test_long_text_gets_single_trailing_ellipsis(self):
        out = fit_cell("abcdefghij", 5)
        self.assertEqual(out, "abcd" + ELLIPSIS)
        self.assertEqual(out.count(ELLIPSIS), 1)

    def test_multiline_text_never_wraps(self):
        out = fit_cell("first\nsecond", 10, Align.RIGHT)
        self.assertEqual(out, ("first" + ELLIPSIS).rjust(10))
        self.assertNotIn("\n", out)

    def test_zero_width(self):
        self.assertEqual(fit_cell("abc", 0), "")

    def test_control_characters_are_replaced(self):
        out = fit_cell("x\x00y\x1bz\tw", 8)
        self.assertEqual(out, "x\ufffdy\ufffdz w ")
        self.assertNotIn("\x00", out)

    def test_nul_cell_from_table_is_drawable(self):
        table = Table.from_frame(pd.DataFrame({"a\x00b": ["x\x00y"]}))
        win = DummyWin(h=5, w=40)
        GridPane(table).draw(win, RowWindow(1, height=3))
        self.assertTrue(win.writes)
        self.assertFalse(any("\x00" in text for _, _, text, _ in win.writes))


class GridFrameTests(unittest.TestCase):
    def test_scenario_alignment_follows_column_type(self):
        table = _scenario_table()
        grid = GridPane(table)
        window = RowWindow(table.row_count, height=10)

        frame = grid.frame(window, 120)

        self.assertEqual(frame.columns, (0, 1, 2))
        self.assertEqual([r for r, _ in frame.rows], [0, 1])
        id_cell, name_cell, score_cell = frame.rows[0][1]
        self.assertEqual(id_cell, "1".rjust(len(id_cell)))
        self.assertEqual(name_cell, "Alice".ljust(len(name_cell)))
        self.assertEqual(score_cell, "9.5".rjust(len(score_cell)))
        self.assertEqual(frame.rows[1][1][2].strip(), "7.0")

    def test_alignment_is_per_column_not_per_row(self):
        table = _scenario_table()
        grid = GridPane(table)
        self.assertEqual(grid.alignments, (Align.RIGHT, Align.LEFT, Align.RIGHT))

    def test_header_is_centered_with_type_tag(self):
        table = _scenario_table()
        grid = GridPane(table)
        frame = grid.frame(RowWindow(table.row_count, height=5), 120)

        width = frame.widths[0]
        name_line, type_line = frame.header[0]
        self.assertEqual(name_line, "id".center(width))
        self.assertEqual(type_line.strip(), f"[{table.column(0).dtype_label}]")

    def test_row_display_is_capped(self):
        for n, expected in ((5, 5), (50_000, 1000)):
            window = RowWindow(n, height=20)
            window.scroll_to_end()
            frame = GridPane(_numbers(n)).frame(window, 80)
            self.assertEqual(frame.extent, expected)
            self.assertEqual(frame.rows[-1][0], expected - 1)

    def test_only_visible_rows_are_formatted(self):
        table = _numbers(50_000)
        grid = GridPane(table)
        window = RowWindow(table.row_count, height=15)
        window.scroll_by(400)

        original = Column.display
        formatted = []

        def spy(column, row):
            formatted.append(row)
            return original(column, row)

        with mock.patch.object(Column, "display", spy):
            frame = grid.frame(window, 80)

        self.assertEqual(set(formatted), set(range(400, 415)))
        self.assertEqual(len(frame.rows), 15)

    def test_long_cells_are_truncated_to_column_width(self):
        table = Table.from_frame(pd.DataFrame({"t": ["x" * 500, "line one\nline two"]}))
        grid = GridPane(table)
        frame = grid.frame(RowWindow(2, height=5), 120)

        width = frame.widths[0]
        self.assertEqual(width, grid.MAX_COL_WIDTH)
        long_cell = frame.rows[0][1][0]
        self.assertEqual(len(long_cell), width)
        self.assertTrue(long_cell.endswith(ELLIPSIS))
        self.assertTrue(frame.rows[1][1][0].startswith("line one" + ELLIPSIS))

    def test_last_visible_column_is_clipped_to_window(self):
        table = Table.from_frame(pd.DataFrame({"t": ["x" * 30]}))
        grid = GridPane(table)
        frame = grid.frame(RowWindow(1, height=5), 20)
        self.assertEqual(frame.columns, (0,))
        self.assertEqual(frame.widths[0], 20 - (frame.gutter + 1))


class GridColumnTests(unittest.TestCase):
    def test_resize_column_is_clamped(self):
        grid = GridPane(_scenario_table())
        start = grid.col_widths[1]
        grid.resize_column(1, 5)
        self.assertEqual(grid.col_widths[1], start + 5)
        grid.resize_column(1, -1000)
        self.assertEqual(grid.col_widths[1], grid.MIN_COL_WIDTH)

    def test_widths_reset_with_new_pane(self):
        table = _scenario_table()
        first = GridPane(table)
        default = first.col_widths[0]
        first.resize_column(0, 10)

        second = GridPane(table)
        self.assertEqual(second.col_widths[0], default)

    def test_config_width_bounds(self):
        grid = GridPane(Table.from_frame(pd.DataFrame({"t": ["x" * 100]})), max_col_width=12)
        self.assertEqual(grid.col_widths[0], 12)

    def test_adjust_col_viewport_brings_last_column_into_view(self):
        table = Table.from_frame(pd.DataFrame({f"column_{i}": [0] for i in range(50)}))
        grid = GridPane(table)
        window = RowWindow(1, height=5)

        grid.move_last()
        grid.adjust_col_viewport(80, window)

        avail_w = 80 - (grid.gutter_width(window) + 1)
        self.assertIn(49, grid.visible_columns(avail_w))
        self.assertGreater(grid.col_offset, 0)

        grid.move_first()
        grid.adjust_col_viewport(80, window)
        self.assertEqual(grid.col_offset, 0)

    def test_move_right_stops_at_last_column(self):
        grid = GridPane(_scenario_table())
        for _ in range(10):
            grid.move_right()
        self.assertEqual(grid.curr_col, 2)


class GridDrawTests(unittest.TestCase):
    def test_draw_writes_header_then_visible_rows(self):
        table = _numbers(1_000_000)
        grid = GridPane(table)
        win = DummyWin(h=12, w=60)
        window = RowWindow(table.row_count, height=12 - GridPane.HEADER_HEIGHT)
        window.scroll_to_end()

        grid.draw(win, window)

        gutters = [w[2].strip() for w in win.writes if w[1] == 0]
        self.assertEqual(gutters, [str(r) for r in range(990, 1000)])
        self.assertEqual(len(win.line(0)), 2)
        self.assertEqual(win.refreshed, 1)

    def test_draw_message_shows_plain_text(self):
        win = DummyWin(h=5, w=40)
        draw_message(win, "cannot read header\nsecond line")
        self.assertEqual([w[2] for w in win.writes], ["cannot read header", "second line"])

    def test_draw_message_replaces_nul(self):
        win = DummyWin(h=5, w=40)
        draw_message(win, "bad\x00byte")
        self.assertEqual([w[2] for w in win.writes], ["bad\ufffdbyte"])

    def test_draw_blank_writes_nothing(self):
        win = DummyWin()
        draw_blank(win)
        self.assertEqual(win.writes, [])
        self.assertEqual(win.erased, 1)


if __name__ == "__main__":
    unittest.main()
