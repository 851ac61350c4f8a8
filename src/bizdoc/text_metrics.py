"""Text width estimation used before glyphs are actually laid out."""

from dataclasses import dataclass
from typing import Dict

from reportlab.lib.units import mm
from reportlab.pdfbase.pdfmetrics import stringWidth


REGULAR = "regular"
BOLD = "bold"

# Average character width in mm at 10pt
AVERAGE_CHAR_WIDTH_MM: Dict[str, float] = {
    REGULAR: 1.8,
    BOLD: 2.0,
}

FONT_FOR_WEIGHT: Dict[str, str] = {
    REGULAR: "Helvetica",
    BOLD: "Helvetica-Bold",
}


def _check_weight(weight: str) -> str:
    if weight not in AVERAGE_CHAR_WIDTH_MM:
        raise ValueError(f"Unknown font weight: {weight!r}")
    return weight


class TextMetrics:
    """Interface for measuring a run of text in millimeters."""

    def estimate_width(self, text: str, font_size_pt: float, weight: str = REGULAR) -> float:
        raise NotImplementedError


@dataclass
class AverageCharWidthMetrics(TextMetrics):
    """
    Approximate width from a fixed average character width per weight.

    Width grows linearly with both text length and font size, so longer
    text or a larger size never produces a smaller estimate.
    """
    regular_char_width: float = AVERAGE_CHAR_WIDTH_MM[REGULAR]
    bold_char_width: float = AVERAGE_CHAR_WIDTH_MM[BOLD]

    def estimate_width(self, text: str, font_size_pt: float, weight: str = REGULAR) -> float:
        weight = _check_weight(weight)
        if not text:
            return 0.0
        char_width = self.bold_char_width if weight == BOLD else self.regular_char_width
        return len(text) * char_width * (font_size_pt / 10.0)


class ReportLabMetrics(TextMetrics):
    """Measure real glyph widths with ReportLab's standard font tables."""

    def estimate_width(self, text: str, font_size_pt: float, weight: str = REGULAR) -> float:
        weight = _check_weight(weight)
        if not text:
            return 0.0
        points = stringWidth(text, FONT_FOR_WEIGHT[weight], font_size_pt)
        return points / mm


_default_metrics = AverageCharWidthMetrics()


def estimate_width(text: str, font_size_pt: float, weight: str = REGULAR) -> float:
    """Estimate rendered width in mm using the default heuristic."""
    return _default_metrics.estimate_width(text, font_size_pt, weight)
