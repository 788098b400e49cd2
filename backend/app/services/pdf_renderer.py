"""
PDF renderer — paints paginated layout pages onto a PDF.

The layout engine (app/layout) decides where everything goes; this module
only translates its draw ops into ReportLab canvas calls:

- FilledRect  → canvas.rect(..., fill=1, stroke=0)
- StrokedRect → canvas.rect(..., fill=0, stroke=1)
- TextLine    → canvas.drawString()
- Rule        → canvas.line()

Layout coordinates are millimetres from the top-left corner with Y going
down. ReportLab works in points from the bottom-left corner with Y going
up, so every Y is flipped against the page height.

Style tokens ("primary", "lavender", ...) are resolved against the brand
palette below. A literal hex color ("#1e3a8a") is accepted as-is.
"""

import re
from datetime import datetime
from io import BytesIO
from typing import Optional

from reportlab.lib import colors
from reportlab.lib.units import mm
from reportlab.pdfgen import canvas

from app.layout import (
    ConfigurationError,
    FilledRect,
    Page,
    PageMetrics,
    Rule,
    StrokedRect,
    TextLine,
)

# --- Brand Colors ---
# Three-color report palette (dark blue / lavender / white) plus status
# colors for callers that want to flag a card.
BRAND_PRIMARY = colors.HexColor("#1e3a8a")     # Dark blue: header bands, body text
BRAND_LAVENDER = colors.HexColor("#e6e6fa")    # Lavender: card borders, rules
BRAND_WHITE = colors.HexColor("#ffffff")       # White: card bodies, header text
BRAND_ACCENT = colors.HexColor("#38a169")      # Green: strengths/positive
BRAND_CAUTION = colors.HexColor("#d69e2e")     # Amber: growth areas
BRAND_DANGER = colors.HexColor("#e53e3e")      # Red: below target
BRAND_LIGHT_BG = colors.HexColor("#f7fafc")    # Light gray: tinted card bodies
BRAND_MUTED = colors.HexColor("#718096")       # Medium gray: captions

PALETTE = {
    "primary": BRAND_PRIMARY,
    "text": BRAND_PRIMARY,
    "lavender": BRAND_LAVENDER,
    "white": BRAND_WHITE,
    "header_text": BRAND_WHITE,
    "accent": BRAND_ACCENT,
    "caution": BRAND_CAUTION,
    "danger": BRAND_DANGER,
    "light_bg": BRAND_LIGHT_BG,
    "muted": BRAND_MUTED,
}

_HEX_COLOR = re.compile(r"^#[0-9a-fA-F]{6}$")


def resolve_color(token: str, palette: Optional[dict] = None):
    """Map a style token to a ReportLab color."""
    palette = palette or PALETTE
    if token in palette:
        return palette[token]
    if _HEX_COLOR.match(token):
        return colors.HexColor(token)
    raise ConfigurationError(f"Unknown color token: {token!r}")


_UNSAFE_FILENAME_CHARS = re.compile(r"[^A-Za-z0-9_-]+")


def safe_filename(text: str, fallback: str) -> str:
    """Reduce text to [A-Za-z0-9_-] so it can go in a Content-Disposition header."""
    return _UNSAFE_FILENAME_CHARS.sub("_", str(text)).strip("_") or fallback


def report_filename(candidate_id: str, ext: str = "pdf",
                    now: Optional[datetime] = None, prefix: str = "Report") -> str:
    """Download filename: <candidateId>_Report_<timestamp>.<ext>

    The candidate ID is reduced to filename-safe characters.
    """
    now = now or datetime.now()
    safe_id = safe_filename(candidate_id, "candidate")
    return f"{safe_id}_{prefix}_{now.strftime('%Y%m%d%H%M%S')}.{ext}"


class PDFRenderer:
    """Renders layout pages to PDF bytes.

    Usage:
        renderer = PDFRenderer(PageMetrics.a4())
        pdf_bytes = renderer.render(pages, title="Skill Gap Report")
    """

    def __init__(self, metrics: PageMetrics, palette: Optional[dict] = None):
        self.metrics = metrics
        self.palette = palette or PALETTE

    def render(self, pages: list[Page], title: str = "", author: str = "") -> bytes:
        if not pages:
            raise ConfigurationError("Nothing to render: no pages")

        buffer = BytesIO()
        pdf = canvas.Canvas(
            buffer,
            pagesize=(self.metrics.width * mm, self.metrics.height * mm),
        )
        if title:
            pdf.setTitle(title)
        if author:
            pdf.setAuthor(author)

        for page in pages:
            for op in page.draw_ops:
                self._draw(pdf, op)
            pdf.showPage()

        pdf.save()
        return buffer.getvalue()

    # ------------------------------------------------------------------

    def _y(self, y: float) -> float:
        """Top-left millimetres → bottom-left points."""
        return (self.metrics.height - y) * mm

    def _draw(self, pdf, op):
        color = resolve_color(op.color, self.palette)

        if isinstance(op, FilledRect):
            pdf.setFillColor(color)
            pdf.rect(op.x * mm, self._y(op.y + op.height), op.width * mm, op.height * mm,
                     stroke=0, fill=1)
        elif isinstance(op, StrokedRect):
            pdf.setStrokeColor(color)
            pdf.setLineWidth(op.line_width * mm)
            pdf.rect(op.x * mm, self._y(op.y + op.height), op.width * mm, op.height * mm,
                     stroke=1, fill=0)
        elif isinstance(op, TextLine):
            pdf.setFillColor(color)
            pdf.setFont(op.font, op.size)
            pdf.drawString(op.x * mm, self._y(op.y), op.text)
        elif isinstance(op, Rule):
            pdf.setStrokeColor(color)
            pdf.setLineWidth(op.line_width * mm)
            pdf.line(op.x1 * mm, self._y(op.y1), op.x2 * mm, self._y(op.y2))
        else:
            raise TypeError(f"Unsupported draw op: {type(op).__name__}")
