"""
Data model for the report layout engine.

Inputs (built once by the caller, never mutated):
- ReportDocument → Section → block (CardSpec or Row of CardSpecs)
- CardSpec holds a list of Fields: Label, KeyValue, BulletList, Paragraph
- PageMetrics fixes the page size and the usable content band

Outputs:
- Page: an index plus an ordered tuple of absolutely-positioned draw ops
  (FilledRect, StrokedRect, TextLine, Rule)

All coordinates are in millimetres with the origin at the top-left corner
of the page and Y growing downwards. Colors are opaque style tokens
("primary", "lavender", "#1e3a8a", ...) that only the renderer resolves.

Validation happens in __post_init__ so a bad definition fails at the line
that built it, not somewhere deep inside paginate().
"""

from dataclasses import dataclass, field
from numbers import Real
from typing import Optional, Union

from app.layout.errors import ConfigurationError

AUTO = "auto"

BULLET_STYLES = ("bullet", "lettered", "numbered")


def _is_number(value) -> bool:
    return isinstance(value, Real) and not isinstance(value, bool)


# --- Fields ---

@dataclass(frozen=True)
class Label:
    """A line of plain text. Label("") is a half-height spacer."""
    text: str


@dataclass(frozen=True)
class KeyValue:
    """Bold "label: " prefix followed by an inline value."""
    label: str
    value: str = ""


@dataclass(frozen=True)
class BulletList:
    """Independently wrapped items with a hanging bullet prefix.

    style: "bullet" (•), "lettered" (A), B), ...) or "numbered" (1., 2., ...)
    """
    items: tuple = ()
    style: str = "bullet"

    def __post_init__(self):
        object.__setattr__(self, "items", tuple(str(item) for item in self.items))
        if self.style not in BULLET_STYLES:
            raise ConfigurationError(
                f"BulletList style must be one of {BULLET_STYLES}, got {self.style!r}"
            )


@dataclass(frozen=True)
class Paragraph:
    """Free text, wrapped to the card width."""
    text: str


Field = Union[Label, KeyValue, BulletList, Paragraph]
FIELD_TYPES = (Label, KeyValue, BulletList, Paragraph)


# --- Cards, rows, sections ---

@dataclass(frozen=True)
class CardSpec:
    """One bordered card: a colored header band plus a field list.

    width is required and keyword-only (the caller owns the column layout).
    height is either a positive number or AUTO, meaning "exactly as tall
    as the fields need", measured before placement.
    x is optional; without it the card starts at the page's left margin
    (or at the next free slot when it sits inside a Row).
    """
    title: str
    fields: tuple = ()
    width: float = field(kw_only=True)
    height: Union[float, str] = AUTO
    header_color: str = "primary"
    body_color: str = "white"
    border_color: str = "lavender"
    x: Optional[float] = None

    def __post_init__(self):
        object.__setattr__(self, "fields", tuple(self.fields))

        if not _is_number(self.width) or self.width <= 0:
            raise ConfigurationError(
                f"Card '{self.title}': width must be a positive number, got {self.width!r}"
            )
        if self.height != AUTO and (not _is_number(self.height) or self.height <= 0):
            raise ConfigurationError(
                f"Card '{self.title}': height must be a positive number or "
                f"'{AUTO}', got {self.height!r}"
            )
        if self.x is not None and (not _is_number(self.x) or self.x < 0):
            raise ConfigurationError(
                f"Card '{self.title}': x must be a non-negative number, got {self.x!r}"
            )
        for item in self.fields:
            if not isinstance(item, FIELD_TYPES):
                raise ConfigurationError(
                    f"Card '{self.title}': unsupported field {item!r}"
                )

    @property
    def is_auto(self) -> bool:
        return self.height == AUTO


@dataclass(frozen=True)
class Row:
    """Cards drawn side by side at the same Y; moves to a new page as a unit."""
    cards: tuple = ()
    gap: float = 2

    def __post_init__(self):
        object.__setattr__(self, "cards", tuple(self.cards))
        if not self.cards:
            raise ConfigurationError("Row must contain at least one card")
        for card in self.cards:
            if not isinstance(card, CardSpec):
                raise ConfigurationError(f"Row members must be CardSpec, got {card!r}")
        if not _is_number(self.gap) or self.gap < 0:
            raise ConfigurationError(f"Row gap must be a non-negative number, got {self.gap!r}")


@dataclass(frozen=True)
class Section:
    """A label-less group of blocks, laid out top to bottom."""
    blocks: tuple = ()

    def __post_init__(self):
        object.__setattr__(self, "blocks", tuple(self.blocks))
        if not self.blocks:
            raise ConfigurationError("Section must contain at least one card")
        for block in self.blocks:
            if not isinstance(block, (CardSpec, Row)):
                raise ConfigurationError(
                    f"Section blocks must be CardSpec or Row, got {block!r}"
                )


@dataclass(frozen=True)
class ReportDocument:
    sections: tuple = ()
    title: str = ""
    subtitle: str = ""

    def __post_init__(self):
        object.__setattr__(self, "sections", tuple(self.sections))
        if not self.sections:
            raise ConfigurationError("ReportDocument must contain at least one section")
        for section in self.sections:
            if not isinstance(section, Section):
                raise ConfigurationError(f"Expected Section, got {section!r}")


@dataclass(frozen=True)
class PageMetrics:
    """Fixed page geometry for one document.

    The usable content band on every page is
    [margin_top + header_height, height - margin_bottom - footer_height].
    """
    width: float
    height: float
    margin_top: float = 10
    margin_bottom: float = 10
    header_height: float = 20
    footer_height: float = 10
    margin_left: float = 10
    block_spacing: float = 5

    def __post_init__(self):
        for name in ("width", "height"):
            value = getattr(self, name)
            if not _is_number(value) or value <= 0:
                raise ConfigurationError(f"PageMetrics.{name} must be positive, got {value!r}")
        for name in ("margin_top", "margin_bottom", "header_height",
                     "footer_height", "margin_left", "block_spacing"):
            value = getattr(self, name)
            if not _is_number(value) or value < 0:
                raise ConfigurationError(
                    f"PageMetrics.{name} must be a non-negative number, got {value!r}"
                )
        if self.content_bottom <= self.content_top:
            raise ConfigurationError(
                "PageMetrics leaves no usable content area "
                f"(top={self.content_top}, bottom={self.content_bottom})"
            )
        if self.margin_left >= self.width:
            raise ConfigurationError("PageMetrics.margin_left must be inside the page")

    @classmethod
    def a4(cls, **overrides) -> "PageMetrics":
        """A4 portrait in millimetres, the size every report uses."""
        values = dict(width=210, height=297, margin_top=10, margin_bottom=10,
                      header_height=20, footer_height=10)
        values.update(overrides)
        return cls(**values)

    @property
    def content_top(self) -> float:
        return self.margin_top + self.header_height

    @property
    def content_bottom(self) -> float:
        return self.height - self.margin_bottom - self.footer_height

    @property
    def usable_height(self) -> float:
        return self.content_bottom - self.content_top


# --- Draw operations ---

@dataclass(frozen=True)
class FilledRect:
    x: float
    y: float
    width: float
    height: float
    color: str


@dataclass(frozen=True)
class StrokedRect:
    x: float
    y: float
    width: float
    height: float
    color: str
    line_width: float = 0.3


@dataclass(frozen=True)
class TextLine:
    """A single run of text; y is the baseline."""
    x: float
    y: float
    text: str
    font: str
    size: float
    color: str


@dataclass(frozen=True)
class Rule:
    x1: float
    y1: float
    x2: float
    y2: float
    color: str
    line_width: float = 0.3


DrawOp = Union[FilledRect, StrokedRect, TextLine, Rule]


@dataclass(frozen=True)
class Page:
    """One output page.

    ops are the content (cards) in drawing order; decorations are the
    header and footer added once the final page count is known.
    draw_ops is what a renderer should paint, in order.
    """
    index: int
    ops: tuple = field(default_factory=tuple)
    decorations: tuple = field(default_factory=tuple)

    @property
    def draw_ops(self) -> tuple:
        return self.ops + self.decorations

    @property
    def text_lines(self) -> list[TextLine]:
        return [op for op in self.ops if isinstance(op, TextLine)]

    @property
    def texts(self) -> list[str]:
        return [op.text for op in self.text_lines]
