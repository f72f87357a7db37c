import curses
from typing import Callable, Optional


class PathPrompt:
    PROMPT = "Open: "

    def __init__(self, on_submit: Callable[[str], None], set_status_cb: Callable[[str, int], None]):
        self._on_submit = on_submit
        self._set_status = set_status_cb

        self.active = False
        self.buffer = ""
        self.cursor = 0
        self.hscroll = 0

    def start(self, current_path: Optional[str] = None):
        self.active = True
        self.buffer = current_path or ""
        self.cursor = len(self.buffer)
        self.hscroll = 0

    def _reset(self):
        self.active = False
        self.buffer = ""
        self.cursor = 0
        self.hscroll = 0

    def handle_key(self, ch):
        if not self.active:
            return

        if ch in (10, 13, curses.KEY_ENTER):
            path = self.buffer.strip()
            self._reset()
            self._on_submit(path)
            return

        if ch == 27:  # Esc
            self._reset()
            self._set_status("Open canceled", 3)
            return

        if ch in (curses.KEY_BACKSPACE, 127, 8):
            if self.cursor > 0:
                self.buffer = self.buffer[: self.cursor - 1] + self.buffer[self.cursor :]
                self.cursor -= 1
            return

        if ch == curses.KEY_DC:
            self.buffer = self.buffer[: self.cursor] + self.buffer[self.cursor + 1 :]
            return

        if ch == 21:  # Ctrl+U
            self.buffer = self.buffer[self.cursor :]
            self.cursor = 0
            return

        if ch in (curses.KEY_LEFT, 2):  # Ctrl+B
            self.cursor = max(0, self.cursor - 1)
            return

        if ch in (curses.KEY_RIGHT, 6):  # Ctrl+F
            self.cursor = min(len(self.buffer), self.cursor + 1)
            return

        if ch in (curses.KEY_HOME, 1):  # Ctrl+A
            self.cursor = 0
            return

        if ch in (curses.KEY_END, 5):  # Ctrl+E
            self.cursor = len(self.buffer)
            return

        if 32 <= ch <= 126:
            self.buffer = self.buffer[: self.cursor] + chr(ch) + self.buffer[self.cursor :]
            self.cursor += 1
            return

    def draw(self, win):
        prompt = self.PROMPT
        h, w = win.getmaxyx()
        text_w = max(1, w - len(prompt) - 1)

        if self.cursor < self.hscroll:
            self.hscroll = self.cursor
        elif self.cursor > self.hscroll + text_w:
            self.hscroll = self.cursor - text_w

        start = self.hscroll
        end = start + text_w
        visible = self.buffer[start:end]

        win.erase()
        try:
            win.addnstr(0, 0, prompt, len(prompt))
            win.addnstr(0, len(prompt), visible, text_w)
            win.move(0, len(prompt) + (self.cursor - self.hscroll))
        except curses.error:
            pass
        win.refresh()
