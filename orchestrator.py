import curses
import logging
import time

from app_state import SessionStatus
from grid_pane import GridPane, draw_blank, draw_message
from path_prompt import PathPrompt
from row_window import RowWindow
from screen_layout import ScreenLayout
from status_bar import render_status

logger = logging.getLogger(__name__)

KEY_CTRL_D = 4
KEY_CTRL_U = 21
KEY_CTRL_X = 24
KEY_CTRL_C = 3


class Orchestrator:
    def __init__(self, stdscr, app_state, config=None):
        self.stdscr = stdscr
        try:
            curses.curs_set(0)
        except curses.error:
            pass
        curses.raw()
        self.stdscr.nodelay(False)
        self.stdscr.timeout(100)

        self.state = app_state
        self.config = config or {}
        self.layout = ScreenLayout(stdscr)

        self.grid = None
        self.window = None
        self._sync_grid()

        self.prompt = PathPrompt(self._open_path, self._set_status)
        self.exit_requested = False

        # ---- status ----
        self.status_msg = None
        self.status_msg_until = 0

    # ---------------- helpers ----------------

    def _set_status(self, msg, seconds=3):
        self.status_msg = msg
        self.status_msg_until = time.time() + seconds

    def _sync_grid(self):
        """Rebuild the grid whenever the session holds a different table.

        Column widths live on the pane, so they reset with every load.
        """
        table = self.state.table
        if table is None:
            self.grid = None
            self.window = None
            return
        if self.grid is not None and self.grid.table is table:
            return
        self.grid = GridPane(
            table,
            min_col_width=self.config.get("MIN_COL_WIDTH"),
            max_col_width=self.config.get("MAX_COL_WIDTH"),
        )
        self.window = RowWindow(
            table.row_count, height=self.layout.grid_rows(GridPane.HEADER_HEIGHT)
        )

    def _open_path(self, path):
        status = self.state.submit(path)
        self._sync_grid()
        if status is SessionStatus.LOADED:
            rows, cols = self.state.table.shape
            self._set_status(f"Opened {path} ({rows} rows, {cols} cols)", 3)

    def _resize_layout(self):
        self.layout = ScreenLayout(self.stdscr)
        if self.window is not None:
            self.window.resize(self.layout.grid_rows(GridPane.HEADER_HEIGHT))

    # ---------------- UI ----------------

    def redraw(self):
        win = self.layout.grid_win
        if self.state.status is SessionStatus.FAILED:
            draw_message(win, self.state.error)
        elif self.grid is not None:
            _, w = win.getmaxyx()
            self.window.resize(self.layout.grid_rows(GridPane.HEADER_HEIGHT))
            self.grid.adjust_col_viewport(w, self.window)
            self.grid.draw(win, self.window, active=not self.prompt.active)
        else:
            draw_blank(win)

        sw = self.layout.status_win
        sw.erase()
        _, w = sw.getmaxyx()
        context = {
            "status_msg": self.status_msg,
            "status_until": self.status_msg_until,
            "state": self.state.status.value,
            "file_path": self.state.source,
        }
        if self.grid is not None:
            visible = self.window.visible_rows()
            context["columns"] = self.state.table.column_count
            if len(visible):
                context["first_row"] = visible.start
                context["last_row"] = visible.stop - 1
        try:
            sw.addnstr(0, 0, render_status(context, w), w)
        except curses.error:
            pass
        sw.refresh()

        pw = self.layout.prompt_win
        if self.prompt.active:
            try:
                curses.curs_set(1)
            except curses.error:
                pass
            self.prompt.draw(pw)
        else:
            try:
                curses.curs_set(0)
            except curses.error:
                pass
            pw.erase()
            pw.refresh()

    # ---------------- keys ----------------

    def _handle_grid_key(self, ch):
        if ch == ord("o"):
            self.prompt.start(self.state.source)
            return
        if ch == ord("r"):
            if self.state.source:
                self._open_path(self.state.source)
            return
        if self.grid is None:
            return

        if ch in (ord("j"), curses.KEY_DOWN):
            self.window.scroll_by(1)
        elif ch in (ord("k"), curses.KEY_UP):
            self.window.scroll_by(-1)
        elif ch in (KEY_CTRL_D, curses.KEY_NPAGE):
            self.window.page_down()
        elif ch in (KEY_CTRL_U, curses.KEY_PPAGE):
            self.window.page_up()
        elif ch == ord("g"):
            self.window.scroll_to_top()
        elif ch == ord("G"):
            self.window.scroll_to_end()
        elif ch in (ord("h"), curses.KEY_LEFT):
            self.grid.move_left()
        elif ch in (ord("l"), curses.KEY_RIGHT):
            self.grid.move_right()
        elif ch == ord("0"):
            self.grid.move_first()
        elif ch == ord("$"):
            self.grid.move_last()
        elif ch == ord("<"):
            self.grid.resize_column(self.grid.curr_col, -2)
        elif ch == ord(">"):
            self.grid.resize_column(self.grid.curr_col, 2)

    # ---------------- main loop ----------------

    def run(self):
        self.stdscr.clear()
        self.stdscr.refresh()
        self.redraw()

        while not self.exit_requested:
            ch = self.stdscr.getch()

            if ch in (KEY_CTRL_C, KEY_CTRL_X):
                break

            if ch == curses.KEY_RESIZE:
                self._resize_layout()
                self.redraw()
                continue

            if ch == -1:
                self.redraw()
                continue

            if self.prompt.active:
                self.prompt.handle_key(ch)
            elif ch == ord("q"):
                self.exit_requested = True
                break
            else:
                self._handle_grid_key(ch)

            self.redraw()
