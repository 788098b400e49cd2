"""
Report pagination — places every card of a document onto pages.

The algorithm is a single top-to-bottom pass:

1. For each block (a card, or a row of side-by-side cards) work out the
   height it needs. Auto-height cards are measured first.
2. If the block doesn't fit in what's left of the page, start a new page.
   A block that is taller than an entire page goes on a fresh page anyway
   and is clipped to the page (its content truncates inside the card).
3. Draw the block at the cursor and move the cursor down past it.
4. When every block is placed, stamp a header and a "Page N of M" footer
   on each page. This has to be the last step: M isn't known until the
   final page exists.

No state survives a paginate() call, so one paginator can be shared
between threads.
"""

from dataclasses import dataclass
from typing import Callable, Optional

from app.layout.card import CardLayout
from app.layout.cursor import PageCursor
from app.layout.errors import ConfigurationError
from app.layout.measure import ReportLabMeasurer, TextMeasurer
from app.layout.model import (
    CardSpec,
    FilledRect,
    Page,
    PageMetrics,
    ReportDocument,
    Row,
    Rule,
    TextLine,
)


@dataclass(frozen=True)
class PageDecoration:
    """Header and footer text and styling applied to every page."""
    footer_text: str = "Assessment Platform - Confidential Report"
    generated_at: str = ""
    band_color: str = "primary"
    text_color: str = "header_text"
    rule_color: str = "lavender"
    font: str = "Helvetica"
    bold_font: str = "Helvetica-Bold"
    title_size: float = 16
    subtitle_size: float = 8
    footer_size: float = 8


class ReportPaginator:
    """Usage:
        paginator = ReportPaginator(PageMetrics.a4())
        pages = paginator.paginate(document)
    """

    def __init__(
        self,
        metrics: PageMetrics,
        card_layout: Optional[CardLayout] = None,
        decoration: Optional[PageDecoration] = None,
        measurer_factory: Callable[[str, float], TextMeasurer] = ReportLabMeasurer,
    ):
        if not isinstance(metrics, PageMetrics):
            raise ConfigurationError(f"Expected PageMetrics, got {metrics!r}")
        self.metrics = metrics
        self.card_layout = card_layout or CardLayout(measurer_factory=measurer_factory)
        self.decoration = decoration or PageDecoration()
        self.footer_measurer = measurer_factory(self.decoration.font, self.decoration.footer_size)

    def paginate(self, document: ReportDocument) -> list[Page]:
        if not isinstance(document, ReportDocument):
            raise ConfigurationError(f"Expected ReportDocument, got {document!r}")

        cursor = PageCursor(self.metrics)
        for section in document.sections:
            for block in section.blocks:
                self._place_block(block, cursor)

        total = len(cursor.pages)
        return [
            Page(
                index=index,
                ops=tuple(ops),
                decorations=tuple(self._decorate(document, index, total)),
            )
            for index, ops in enumerate(cursor.pages)
        ]

    # ------------------------------------------------------------------
    # PLACEMENT
    # ------------------------------------------------------------------

    def _positions(self, block) -> list[tuple[CardSpec, float]]:
        """Horizontal position of every card in a block."""
        if isinstance(block, CardSpec):
            placed = [(block, block.x if block.x is not None else self.metrics.margin_left)]
        else:
            placed = []
            next_x = self.metrics.margin_left
            for card in block.cards:
                x = card.x if card.x is not None else next_x
                placed.append((card, x))
                next_x = x + card.width + block.gap

        for card, x in placed:
            if x + card.width > self.metrics.width:
                raise ConfigurationError(
                    f"Card '{card.title}' (x={x}, width={card.width}) extends past "
                    f"the page width {self.metrics.width}"
                )
        return placed

    def _place_block(self, block, cursor: PageCursor):
        placed = self._positions(block)
        heights = [self.card_layout.measure_height(card) for card, _ in placed]
        needed = max(heights)

        if not cursor.can_fit(needed) and not cursor.at_page_top:
            cursor.new_page()

        # Only true for blocks taller than a whole page
        available = cursor.remaining_height()

        for (card, x), height in zip(placed, heights):
            result = self.card_layout.place(card, x, cursor.y, min(height, available))
            cursor.draw(result.ops)

        cursor.advance(min(needed, available) + self.metrics.block_spacing)

    # ------------------------------------------------------------------
    # HEADER / FOOTER
    # ------------------------------------------------------------------

    def _decorate(self, document: ReportDocument, index: int, total: int) -> list:
        m = self.metrics
        d = self.decoration
        ops = []

        band_height = m.header_height - m.block_spacing
        if band_height > 0:
            top = m.margin_top
            ops.append(FilledRect(0, top, m.width, band_height, d.band_color))
            ops.append(Rule(0, top + band_height, m.width, top + band_height, d.rule_color))
            if document.title:
                ops.append(TextLine(m.margin_left, top + band_height * 0.55, document.title,
                                    d.bold_font, d.title_size, d.text_color))
            meta = " | ".join(part for part in (document.subtitle, d.generated_at) if part)
            if meta:
                ops.append(TextLine(m.margin_left, top + band_height * 0.85, meta,
                                    d.font, d.subtitle_size, d.text_color))

        if m.footer_height > 0:
            top = m.content_bottom
            baseline = top + m.footer_height * 0.65
            page_label = f"Page {index + 1} of {total}"
            label_width = self.footer_measurer.measure(page_label)

            ops.append(FilledRect(0, top, m.width, m.footer_height, d.band_color))
            ops.append(Rule(0, top, m.width, top, d.rule_color))
            if d.footer_text:
                ops.append(TextLine(m.margin_left, baseline, d.footer_text,
                                    d.font, d.footer_size, d.text_color))
            ops.append(TextLine(m.width - m.margin_left - label_width, baseline, page_label,
                                d.font, d.footer_size, d.text_color))

        return ops


def paginate(document: ReportDocument, metrics: PageMetrics, **kwargs) -> list[Page]:
    """One-shot helper: ReportPaginator(metrics, **kwargs).paginate(document)."""
    return ReportPaginator(metrics, **kwargs).paginate(document)
