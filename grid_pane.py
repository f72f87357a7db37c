import curses
import logging
from dataclasses import dataclass

from column_types import Align, alignment_for
from row_window import MAX_DISPLAY_ROWS, RowWindow
from table import Table

logger = logging.getLogger(__name__)

ELLIPSIS = "…"
REPLACEMENT = "\ufffd"

# curses rejects NUL outright and mangles the other C0 controls
_CONTROL_CHARS = {i: REPLACEMENT for i in list(range(0x20)) + [0x7F]}
_CONTROL_CHARS[ord("\t")] = " "


def printable(line: str) -> str:
    return line.translate(_CONTROL_CHARS)


def fit_cell(text: str, width: int, align: Align = Align.LEFT) -> str:
    """Project text onto exactly one line of ``width`` characters.

    Anything that does not fit, including a second line, is cut and marked
    with a single trailing ellipsis.
    """
    if width <= 0:
        return ""
    lines = text.splitlines() or [""]
    line = printable(lines[0])
    if len(lines) > 1 or len(line) > width:
        line = line[: width - 1] + ELLIPSIS
    if align is Align.RIGHT:
        return line.rjust(width)
    if align is Align.CENTER:
        return line.center(width)
    return line.ljust(width)


@dataclass(frozen=True)
class GridFrame:
    columns: tuple[int, ...]
    widths: tuple[int, ...]
    header: tuple[tuple[str, str], ...]
    rows: tuple[tuple[int, tuple[str, ...]], ...]
    gutter: int
    extent: int


class GridPane:
    HEADER_HEIGHT = 2
    ROW_HEIGHT = 1
    MIN_COL_WIDTH = 4
    MAX_COL_WIDTH = 40
    RESIZE_LIMIT = 200
    AUTO_WIDTH_SAMPLE = 50

    def __init__(self, table: Table, min_col_width=None, max_col_width=None):
        self.table = table
        if min_col_width is not None:
            self.MIN_COL_WIDTH = min_col_width
        if max_col_width is not None:
            self.MAX_COL_WIDTH = max(self.MIN_COL_WIDTH, max_col_width)

        self.alignments = tuple(alignment_for(c.column_type) for c in table.columns)
        self.col_widths = [self._auto_width(i) for i in range(table.column_count)]

        self.curr_col = 0
        self.col_offset = 0

    @staticmethod
    def header_lines(column) -> tuple[str, str]:
        return column.name, f"[{column.dtype_label}]"

    def _auto_width(self, col_idx):
        column = self.table.column(col_idx)
        sample = min(self.AUTO_WIDTH_SAMPLE, MAX_DISPLAY_ROWS, len(column))
        longest = max(len(line) for line in self.header_lines(column))
        for r in range(sample):
            first_line = (column.display(r).splitlines() or [""])[0]
            longest = max(longest, len(first_line))
        return max(self.MIN_COL_WIDTH, min(self.MAX_COL_WIDTH, longest + 2))

    def gutter_width(self, window: RowWindow) -> int:
        return max(3, len(str(max(window.displayed_rows - 1, 0))) + 1)

    # ---------- column sizing / navigation ----------
    def resize_column(self, col_idx, delta):
        if not 0 <= col_idx < len(self.col_widths):
            return
        old = self.col_widths[col_idx]
        new = max(self.MIN_COL_WIDTH, min(self.RESIZE_LIMIT, old + delta))
        self.col_widths[col_idx] = new
        logger.debug("column %d resized %d -> %d", col_idx, old, new)

    def move_left(self):
        self.curr_col = max(0, self.curr_col - 1)

    def move_right(self):
        self.curr_col = min(max(0, self.table.column_count - 1), self.curr_col + 1)

    def move_first(self):
        self.curr_col = 0

    def move_last(self):
        self.curr_col = max(0, self.table.column_count - 1)

    def visible_columns(self, avail_w) -> list[int]:
        cols = []
        used = 0
        for c in range(self.col_offset, self.table.column_count):
            cw = self.col_widths[c]
            if cols and used + cw + 1 > avail_w:
                break
            cols.append(c)
            used += cw + 1
            if used >= avail_w:
                break
        return cols

    def adjust_col_viewport(self, width, window: RowWindow):
        """Shift col_offset so curr_col is drawn. Call after cursor jumps."""
        ncols = self.table.column_count
        if ncols == 0:
            self.curr_col = 0
            self.col_offset = 0
            return
        self.curr_col = max(0, min(self.curr_col, ncols - 1))
        avail_w = max(1, width - (self.gutter_width(window) + 1))

        if self.curr_col < self.col_offset:
            self.col_offset = self.curr_col
        while self.col_offset < self.curr_col and self.curr_col not in self.visible_columns(avail_w):
            self.col_offset += 1

    # ---------- rendering ----------
    def frame(self, window: RowWindow, width: int) -> GridFrame:
        """Lay out the visible rows and columns only.

        Rows outside ``window.visible_rows()`` are never formatted; they
        only count towards ``extent``.
        """
        gutter = self.gutter_width(window)
        avail_w = max(1, width - (gutter + 1))
        columns = tuple(self.visible_columns(avail_w))

        widths = []
        used = 0
        for c in columns:
            eff = max(1, min(self.col_widths[c], avail_w - used))
            widths.append(eff)
            used += eff + 1

        header = []
        for c, cw in zip(columns, widths):
            name, label = self.header_lines(self.table.column(c))
            header.append((fit_cell(name, cw, Align.CENTER), fit_cell(label, cw, Align.CENTER)))

        rows = []
        for r in window.visible_rows():
            cells = tuple(
                fit_cell(self.table.column(c).display(r), cw, self.alignments[c])
                for c, cw in zip(columns, widths)
            )
            rows.append((r, cells))

        return GridFrame(
            columns=columns,
            widths=tuple(widths),
            header=tuple(header),
            rows=tuple(rows),
            gutter=gutter,
            extent=window.displayed_rows * self.ROW_HEIGHT,
        )

    def draw(self, win, window: RowWindow, active=True):
        win.erase()
        h, w = win.getmaxyx()
        frame = self.frame(window, w)

        x = frame.gutter + 1
        for c, cw, lines in zip(frame.columns, frame.widths, frame.header):
            attr = curses.A_BOLD
            if active and c == self.curr_col:
                attr |= curses.A_REVERSE
            for y, text in enumerate(lines):
                _put(win, y, x, text, attr)
            x += cw + 1

        y = self.HEADER_HEIGHT
        for r, cells in frame.rows:
            if y >= h:
                break
            _put(win, y, 0, str(r).rjust(frame.gutter))
            x = frame.gutter + 1
            for cw, text in zip(frame.widths, cells):
                _put(win, y, x, text)
                x += cw + 1
            y += self.ROW_HEIGHT

        win.refresh()


def _put(win, y, x, text, attr=0):
    h, w = win.getmaxyx()
    if y >= h or x >= w:
        return
    try:
        win.addnstr(y, x, text, w - x, attr)
    except curses.error:
        # writing the bottom-right cell moves the cursor off-window
        pass


def draw_message(win, message: str):
    win.erase()
    h, _ = win.getmaxyx()
    for y, line in enumerate(message.splitlines()[:h]):
        _put(win, y, 0, printable(line))
    win.refresh()


def draw_blank(win):
    win.erase()
    win.refresh()
