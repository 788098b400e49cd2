"""
Text measurement and word wrapping.

A TextMeasurer is bound to one font face and size. It answers two
questions: how wide is this string, and how does this string break into
lines no wider than N. Only measure() is renderer-specific; wrap() is
built on top of it so every measurer wraps the same way. That is also why
ReportLab's simpleSplit isn't used: it only knows registered fonts, while
wrap() has to work with any measurer.

Wrapping happens at word boundaries only. A single word wider than the
available width is put on its own line as-is (never hyphenated or split),
which matches how the printed reports have always behaved.
"""

from reportlab.lib.units import mm
from reportlab.pdfbase.pdfmetrics import stringWidth


class TextMeasurer:
    """Base measurer. Subclasses implement measure()."""

    def __init__(self, font_name: str, font_size: float):
        self.font_name = font_name
        self.font_size = font_size

    def measure(self, text: str) -> float:
        raise NotImplementedError

    def with_font(self, font_name: str) -> "TextMeasurer":
        """Same size, different face (e.g. the bold variant)."""
        return type(self)(font_name, self.font_size)

    def wrap(self, text: str, max_width: float) -> list[str]:
        """Break text into lines that fit max_width.

        Explicit newlines are kept as hard breaks. Empty or
        whitespace-only text gives an empty list.
        """
        lines = []
        for chunk in text.splitlines():
            words = chunk.split()
            if not words:
                continue

            current = words[0]
            for word in words[1:]:
                candidate = f"{current} {word}"
                if self.measure(candidate) <= max_width:
                    current = candidate
                else:
                    lines.append(current)
                    current = word
            lines.append(current)
        return lines


class ReportLabMeasurer(TextMeasurer):
    """Widths from ReportLab's font metrics, in millimetres.

    Works with the 14 standard PDF fonts out of the box (Helvetica,
    Helvetica-Bold, Times-Roman, ...). TTF fonts must be registered with
    pdfmetrics first; an unknown font raises from ReportLab and is not
    caught here.
    """

    def measure(self, text: str) -> float:
        return stringWidth(text, self.font_name, self.font_size) / mm

    def __repr__(self):
        return f"ReportLabMeasurer({self.font_name!r}, {self.font_size})"
