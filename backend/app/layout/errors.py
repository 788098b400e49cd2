"""
Errors raised by the layout engine.

Only configuration problems are errors. Content that doesn't fit a card is
clipped silently (see card.py), and anything the text measurer raises is
left to propagate untouched.
"""


class ConfigurationError(ValueError):
    """Invalid card, page, or document definition.

    Raised as early as possible (usually on construction) so a broken
    report definition never produces an empty or half-drawn page.
    """
