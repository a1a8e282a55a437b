"""Headless state of the prediction window.

Two free-text fields feed the unit; whenever either changes the prediction is
recomputed. Text that does not parse as a number counts as zero.
"""

from __future__ import annotations
import math
from train.linear_unit import LinearUnit


def parse_field(text: str) -> float:
    """Parse a field strictly; padding or digit separators count as garbage."""

    if text != text.strip() or "_" in text:
        return 0.0

    try:
        return float(text)

    except ValueError:
        return 0.0


def format_prediction(value: float) -> str:
    """Round half away from zero and render without a decimal part."""

    if math.isnan(value):
        return "NaN"

    if math.isinf(value):
        return "inf" if value > 0 else "-inf"

    rounded = math.copysign(math.floor(abs(value) + 0.5), value)

    if rounded == 0 and math.copysign(1.0, rounded) < 0:
        return "-0"

    return str(int(rounded))


class PredictionForm:
    def __init__(self, unit: LinearUnit) -> None:
        self.unit = unit
        self.first_value = ""
        self.second_value = ""
        self.prediction = ""

    def _refresh(self) -> None:
        value = self.unit.predict(
            [parse_field(self.first_value), parse_field(self.second_value)]
        )
        self.prediction = format_prediction(value)

    def on_first_input_changed(self, value: str) -> None:
        self.first_value = value
        self._refresh()

    def on_second_input_changed(self, value: str) -> None:
        self.second_value = value
        self._refresh()

    def title(self) -> str:
        strings = [self.first_value, self.second_value, self.prediction]

        return ", ".join(s if s else "0" for s in strings)
