MAX_DISPLAY_ROWS = 1000


class RowWindow:
    """Vertical viewport over the displayable rows of a table.

    Only the first ``cap`` rows are ever displayable. Every row is one line
    tall, so the scrollable extent is simply ``displayed_rows`` and the
    visible slice falls out of ``offset`` and ``height``.
    """

    def __init__(self, total_rows: int, height: int = 1, cap: int = MAX_DISPLAY_ROWS):
        self.cap = cap
        self.total_rows = max(0, total_rows)
        self.height = max(1, height)
        self.offset = 0
        self._clamp()

    def _clamp(self):
        max_offset = max(0, self.displayed_rows - self.height)
        self.offset = max(0, min(self.offset, max_offset))

    @property
    def displayed_rows(self) -> int:
        return min(self.cap, self.total_rows)

    def update_total_rows(self, total_rows: int):
        self.total_rows = max(0, total_rows)
        self._clamp()

    def resize(self, height: int):
        self.height = max(1, height)
        self._clamp()

    def scroll_by(self, delta: int):
        self.offset += delta
        self._clamp()

    def page_down(self):
        self.scroll_by(self.height)

    def page_up(self):
        self.scroll_by(-self.height)

    def scroll_to_top(self):
        self.offset = 0

    def scroll_to_end(self):
        self.offset = self.displayed_rows
        self._clamp()

    def visible_rows(self) -> range:
        return range(self.offset, min(self.offset + self.height, self.displayed_rows))
