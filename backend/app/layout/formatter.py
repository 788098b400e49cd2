"""
Turns one Field into display lines for a given interior width.

Each FormattedLine is a tuple of TextRuns. A run carries its own horizontal
offset (relative to the card's text origin) and weight, which is how the
"bold label, inline value, overflow continues below" layout and hanging
bullet indents are expressed without the card knowing anything about
field types.
"""

import string
from dataclasses import dataclass
from typing import Optional

from app.layout.measure import TextMeasurer
from app.layout.model import BulletList, KeyValue, Label, Paragraph


@dataclass(frozen=True)
class TextRun:
    text: str
    offset: float = 0.0
    bold: bool = False


@dataclass(frozen=True)
class FormattedLine:
    runs: tuple = ()

    @property
    def text(self) -> str:
        return " ".join(run.text for run in self.runs)

    @property
    def is_blank(self) -> bool:
        return not self.runs


BLANK_LINE = FormattedLine()


def bullet_prefix(style: str, index: int) -> str:
    """Marker for the index-th (0-based) item of a list."""
    if style == "lettered":
        letters = string.ascii_uppercase
        marker = letters[index % 26] * (index // 26 + 1)
        return f"{marker})"
    if style == "numbered":
        return f"{index + 1}."
    return "•"


class FieldFormatter:
    """Formats fields with a regular and a bold measurer of the same size."""

    def __init__(self, measurer: TextMeasurer, bold_measurer: Optional[TextMeasurer] = None):
        self.measurer = measurer
        self.bold_measurer = bold_measurer or measurer

    def format(self, field, max_width: float) -> list[FormattedLine]:
        if isinstance(field, Label):
            return self._format_label(field, max_width)
        if isinstance(field, KeyValue):
            return self._format_key_value(field, max_width)
        if isinstance(field, BulletList):
            return self._format_bullets(field, max_width)
        if isinstance(field, Paragraph):
            return self._plain(field.text, max_width)
        raise TypeError(f"Unsupported field type: {type(field).__name__}")

    # ------------------------------------------------------------------

    def _plain(self, text: str, max_width: float) -> list[FormattedLine]:
        return [
            FormattedLine((TextRun(line),))
            for line in self.measurer.wrap(text, max_width)
        ]

    def _format_label(self, field: Label, max_width: float) -> list[FormattedLine]:
        if not field.text.strip():
            return [BLANK_LINE]
        return self._plain(field.text, max_width)

    def _format_key_value(self, field: KeyValue, max_width: float) -> list[FormattedLine]:
        label = f"{field.label}:"
        prefix_width = self.bold_measurer.measure(label + " ")
        words = field.value.split()

        # Label too wide for one line: wrap it on its own, value below
        if prefix_width > max_width:
            lines = [
                FormattedLine((TextRun(line, bold=True),))
                for line in self.bold_measurer.wrap(label, max_width)
            ]
            return lines + self._plain(" ".join(words), max_width)

        first, rest = self._fill(words, max_width - prefix_width)
        runs = [TextRun(label, bold=True)]
        if first:
            runs.append(TextRun(first, offset=prefix_width))
        lines = [FormattedLine(tuple(runs))]
        return lines + self._plain(" ".join(rest), max_width)

    def _fill(self, words: list[str], width: float) -> tuple[str, list[str]]:
        """Greedily take words that fit on one line of the given width.

        Returns ("", words) when not even the first word fits, so the
        caller can start the text on the next (full-width) line.
        """
        line = ""
        for i, word in enumerate(words):
            candidate = f"{line} {word}" if line else word
            if self.measurer.measure(candidate) > width:
                return line, words[i:]
            line = candidate
        return line, []

    def _format_bullets(self, field: BulletList, max_width: float) -> list[FormattedLine]:
        lines = []
        for index, item in enumerate(field.items):
            prefix = bullet_prefix(field.style, index)
            indent = self.measurer.measure(prefix + " ")
            wrapped = self.measurer.wrap(item, max_width - indent)

            first = [TextRun(prefix)]
            if wrapped:
                first.append(TextRun(wrapped[0], offset=indent))
            lines.append(FormattedLine(tuple(first)))
            lines.extend(
                FormattedLine((TextRun(text, offset=indent),))
                for text in wrapped[1:]
            )
        return lines
