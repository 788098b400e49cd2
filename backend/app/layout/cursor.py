"""
The vertical write cursor.

Tracks which page is being filled and how far down it we are. The cursor
only ever moves down within a page and never past the bottom of the
usable content band; callers ask can_fit() before they draw anything.
"""

from app.layout.model import PageMetrics

EPSILON = 1e-6


class PageCursor:
    def __init__(self, metrics: PageMetrics):
        self.metrics = metrics
        self.pages: list[list] = []
        self.index = -1
        self.y = metrics.content_top
        self.new_page()

    @property
    def current_page(self) -> list:
        """Draw-op buffer of the page being filled."""
        return self.pages[self.index]

    @property
    def at_page_top(self) -> bool:
        return self.y <= self.metrics.content_top + EPSILON

    def remaining_height(self) -> float:
        return self.metrics.content_bottom - self.y

    def can_fit(self, height: float) -> bool:
        return height <= self.remaining_height() + EPSILON

    def advance(self, height: float):
        if height < 0:
            raise ValueError(f"Cursor can only move down, got {height}")
        self.y = min(self.y + height, self.metrics.content_bottom)

    def new_page(self):
        self.pages.append([])
        self.index += 1
        self.y = self.metrics.content_top

    def draw(self, ops):
        self.current_page.extend(ops)
