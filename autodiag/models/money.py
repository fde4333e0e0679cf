# Costs travel as numbers; strings are produced only for display.

import math
import re
from typing import Tuple

from pydantic import BaseModel # type: ignore


_RANGE_RE = re.compile(r"\$(\d+(?:\.\d+)?)\s*-\s*\$(\d+(?:\.\d+)?)")

# Used when a legacy cost string cannot be parsed
DEFAULT_COST_RANGE: Tuple[float, float] = (100.0, 500.0)


def round_half_up(value: float) -> int:
    return int(math.floor(value + 0.5))


def format_usd(value: float) -> str:
    if float(value).is_integer():
        return f"${int(value)}"
    return f"${value:.2f}"


class CostRange(BaseModel):
    min: float
    max: float
    currency: str = "USD"

    @classmethod
    def point(cls, value: float) -> "CostRange":
        return cls(min=value, max=value)

    @classmethod
    def parse(cls, text: str) -> "CostRange":
        """
        Read a "$min - $max" display string back into a range.
        Anything else falls back to DEFAULT_COST_RANGE.
        """
        match = _RANGE_RE.search(text or "")
        if not match:
            return cls(min=DEFAULT_COST_RANGE[0], max=DEFAULT_COST_RANGE[1])
        return cls(min=float(match.group(1)), max=float(match.group(2)))

    @property
    def formatted(self) -> str:
        if self.min == self.max:
            return format_usd(self.min)
        return f"{format_usd(self.min)} - {format_usd(self.max)}"
