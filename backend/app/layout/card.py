"""
Card geometry and content placement.

A card is drawn as:

    ┌──────────────────────────────┐  ← y
    │ TITLE (header band, 12mm)    │
    ├──────────────────────────────┤
    │ Label: value                 │  ← first baseline at y + 18
    │ • bullet item that wraps     │
    │   under its own text         │  ← one line every 5mm
    │                              │
    └──────────────────────────────┘  ← y + height (5mm bottom padding)

Lines are written top to bottom. A line at cursor c is only written if
c + line_height stays within the card's bottom bound; the first line that
doesn't fit ends the card. Everything after it (rest of the field, all
later fields) is dropped without an error. That clipping is what keeps a
fixed-size card from drawing over its neighbours. A blank spacer that
starts at or past the bound ends the card the same way, and the title is
only drawn when its baseline lies inside the card.

Auto-height cards run the same loop without a bound first (measure pass)
and take exactly the height their content consumed.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Callable, Optional

from app.layout.errors import ConfigurationError
from app.layout.formatter import FieldFormatter
from app.layout.measure import ReportLabMeasurer, TextMeasurer
from app.layout.model import CardSpec, FilledRect, StrokedRect, TextLine

# Guards the auto-height round trip (measure, then place against that height)
# from floating point drift.
EPSILON = 1e-6


class CardState(str, Enum):
    EMPTY = "empty"
    PLACING = "placing"
    TRUNCATED = "truncated"
    COMPLETE = "complete"


@dataclass(frozen=True)
class CardGeometry:
    """Card dimensions and type sizes, in millimetres / points."""
    header_height: float = 12
    title_baseline: float = 8
    padding: float = 3
    first_baseline: float = 18
    line_height: float = 5
    bottom_padding: float = 5
    font: str = "Helvetica"
    bold_font: str = "Helvetica-Bold"
    title_size: float = 10
    body_size: float = 8
    title_color: str = "header_text"
    text_color: str = "text"
    border_width: float = 0.3

    def __post_init__(self):
        for name in ("header_height", "first_baseline", "line_height", "body_size", "title_size"):
            if getattr(self, name) <= 0:
                raise ConfigurationError(f"CardGeometry.{name} must be positive")
        for name in ("padding", "bottom_padding", "title_baseline"):
            if getattr(self, name) < 0:
                raise ConfigurationError(f"CardGeometry.{name} must not be negative")


@dataclass(frozen=True)
class CardResult:
    ops: tuple
    state: CardState
    height: float
    lines_written: int


class CardLayout:
    """Lays out one card at a time. Holds no per-card state."""

    def __init__(
        self,
        geometry: Optional[CardGeometry] = None,
        formatter: Optional[FieldFormatter] = None,
        measurer_factory: Callable[[str, float], TextMeasurer] = ReportLabMeasurer,
    ):
        self.geometry = geometry or CardGeometry()
        if formatter is None:
            body = measurer_factory(self.geometry.font, self.geometry.body_size)
            formatter = FieldFormatter(body, body.with_font(self.geometry.bold_font))
        self.formatter = formatter

    def interior_width(self, card: CardSpec) -> float:
        width = card.width - 2 * self.geometry.padding
        if width <= 0:
            raise ConfigurationError(
                f"Card '{card.title}' is too narrow ({card.width}) for its padding"
            )
        return width

    def _lines(self, card: CardSpec):
        width = self.interior_width(card)
        for field in card.fields:
            yield from self.formatter.format(field, width)

    def measure_height(self, card: CardSpec) -> float:
        """Height the card will occupy: fixed height, or content height for auto."""
        if not card.is_auto:
            return float(card.height)

        g = self.geometry
        cursor = g.first_baseline
        for line in self._lines(card):
            cursor += g.line_height / 2 if line.is_blank else g.line_height
        return cursor + g.bottom_padding

    def place(self, card: CardSpec, x: float, y: float,
              height: Optional[float] = None) -> CardResult:
        """Draw the card with its top-left corner at (x, y).

        height overrides the card's own height; the paginator uses this to
        clip a card that is taller than a whole page.
        """
        g = self.geometry
        if height is None:
            height = self.measure_height(card)

        ops = [
            FilledRect(x, y, card.width, height, card.body_color),
            FilledRect(x, y, card.width, min(g.header_height, height), card.header_color),
            StrokedRect(x, y, card.width, height, card.border_color, g.border_width),
        ]
        # A card clipped shorter than the title baseline gets no title
        if g.title_baseline <= height + EPSILON:
            ops.append(TextLine(x + g.padding, y + g.title_baseline, card.title,
                                g.bold_font, g.title_size, g.title_color))

        limit = height - g.bottom_padding
        cursor = g.first_baseline
        state = CardState.EMPTY
        written = 0

        for line in self._lines(card):
            state = CardState.PLACING
            if line.is_blank:
                if cursor >= limit - EPSILON:
                    state = CardState.TRUNCATED
                    break
                cursor += g.line_height / 2
                continue
            if cursor + g.line_height > limit + EPSILON:
                state = CardState.TRUNCATED
                break
            for run in line.runs:
                ops.append(TextLine(
                    x + g.padding + run.offset,
                    y + cursor,
                    run.text,
                    g.bold_font if run.bold else g.font,
                    g.body_size,
                    g.text_color,
                ))
            cursor += g.line_height
            written += 1

        if state is not CardState.TRUNCATED:
            state = CardState.COMPLETE

        return CardResult(ops=tuple(ops), state=state, height=height, lines_written=written)
