from typing import Literal, Optional, Tuple

from pydantic import BaseModel, ConfigDict, model_validator # type: ignore


Category = Literal[
    "engine",
    "transmission",
    "brakes",
    "electrical",
    "suspension",
    "cooling",
    "fuel",
    "exhaust",
    "hvac",
    "steering",
]
Difficulty = Literal["easy", "medium", "hard", "expert"]
WarningLevel = Literal["low", "medium", "high", "critical"]

WARNING_ORDER = {"low": 1, "medium": 2, "high": 3, "critical": 4}
DIFFICULTY_ORDER = {"easy": 1, "medium": 2, "hard": 3, "expert": 4}


class PriceRange(BaseModel):
    model_config = ConfigDict(frozen=True)

    min: float
    max: float
    oem: float
    aftermarket: float

    @model_validator(mode="after")
    def _check_bounds(self):
        if self.min < 0:
            raise ValueError("price min must be non-negative")
        for tier in (self.oem, self.aftermarket):
            if not self.min <= tier <= self.max:
                raise ValueError("oem/aftermarket price must sit inside [min, max]")
        return self


class LaborHours(BaseModel):
    model_config = ConfigDict(frozen=True)

    min: float
    max: float
    difficulty: Difficulty

    @model_validator(mode="after")
    def _check_bounds(self):
        if self.min < 0 or self.min > self.max:
            raise ValueError("labor hours need 0 <= min <= max")
        return self


class ComponentRecord(BaseModel):
    """
    One replaceable part and its failure profile.
    Loaded once from the catalog file and never mutated.
    """

    model_config = ConfigDict(frozen=True)

    id: str
    name: str
    category: Category
    part_number: Optional[str] = None
    price_range: PriceRange
    labor_hours: LaborHours
    symptoms: Tuple[str, ...]
    compatible_makes: Tuple[str, ...]
    description: str
    common_failure_reasons: Tuple[str, ...] = ()
    diagnostic_codes: Tuple[str, ...] = ()
    tools: Tuple[str, ...] = ()
    warning_level: WarningLevel

    @property
    def warning_rank(self) -> int:
        return WARNING_ORDER[self.warning_level]

    def searchable_text(self) -> str:
        return " ".join(
            [self.name, self.description, *self.common_failure_reasons]
        ).lower()
