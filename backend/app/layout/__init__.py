from app.layout.card import CardGeometry, CardLayout, CardResult, CardState
from app.layout.cursor import PageCursor
from app.layout.errors import ConfigurationError
from app.layout.formatter import FieldFormatter, FormattedLine, TextRun
from app.layout.measure import ReportLabMeasurer, TextMeasurer
from app.layout.model import (
    AUTO,
    BulletList,
    CardSpec,
    FilledRect,
    KeyValue,
    Label,
    Page,
    PageMetrics,
    Paragraph,
    ReportDocument,
    Row,
    Rule,
    Section,
    StrokedRect,
    TextLine,
)
from app.layout.paginator import PageDecoration, ReportPaginator, paginate

__all__ = [
    "AUTO",
    "BulletList",
    "CardGeometry",
    "CardLayout",
    "CardResult",
    "CardSpec",
    "CardState",
    "ConfigurationError",
    "FieldFormatter",
    "FilledRect",
    "FormattedLine",
    "KeyValue",
    "Label",
    "Page",
    "PageCursor",
    "PageDecoration",
    "PageMetrics",
    "Paragraph",
    "ReportDocument",
    "ReportLabMeasurer",
    "ReportPaginator",
    "Row",
    "Rule",
    "Section",
    "StrokedRect",
    "TextLine",
    "TextMeasurer",
    "TextRun",
    "paginate",
]
