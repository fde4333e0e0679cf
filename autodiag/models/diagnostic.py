# autodiag/models/diagnostic.py

from datetime import date, datetime
from typing import List, Literal, Optional

from pydantic import BaseModel, Field, computed_field, field_validator # type: ignore

from autodiag.models.catalog import ComponentRecord, WarningLevel
from autodiag.models.money import format_usd


Severity = Literal["low", "medium", "high", "critical"]
Urgency = Literal["immediate", "soon", "moderate", "low"]
Condition = Literal["good", "fair", "poor", "critical"]

MIN_VEHICLE_YEAR = 1990


class DiagnosticInputRequest(BaseModel):
    """
    What the engine consumes. Deliberately lenient: the form layer
    validates, the engine degrades.
    """

    vehicle_make: str = ""
    vehicle_model: str = ""
    vehicle_year: Optional[int] = None
    symptoms: str = ""
    issue_title: str = ""
    severity: Severity = "medium"
    urgency: Urgency = "moderate"
    estimated_cost: Optional[str] = None
    custom_name: Optional[str] = None
    notes: Optional[str] = None


class DiagnosticForm(DiagnosticInputRequest):
    """Submission as it arrives over HTTP."""

    vehicle_make: str = Field(..., max_length=50)
    vehicle_model: str = Field(..., max_length=50)
    vehicle_year: int
    symptoms: str = Field(..., max_length=2000)
    issue_title: str = Field(..., max_length=200)
    custom_name: Optional[str] = Field(None, max_length=100)
    notes: Optional[str] = Field(None, max_length=1000)

    @field_validator("vehicle_make", "vehicle_model", "issue_title")
    @classmethod
    def _required(cls, value: str) -> str:
        if not value.strip():
            raise ValueError("field is required")
        return value

    @field_validator("vehicle_year")
    @classmethod
    def _year_in_range(cls, value: int) -> int:
        latest = date.today().year + 1
        if not MIN_VEHICLE_YEAR <= value <= latest:
            raise ValueError(f"Year must be between {MIN_VEHICLE_YEAR} and {latest}")
        return value

    @field_validator("symptoms")
    @classmethod
    def _enough_detail(cls, value: str) -> str:
        if not value.strip():
            raise ValueError("Symptoms are required")
        if len(value) < 10:
            raise ValueError("Please provide more details about the symptoms")
        return value


# --------------------------------------------------
# Engine output
# --------------------------------------------------

class MatchedComponent(BaseModel):
    component: ComponentRecord
    likelihood: float
    condition: Condition
    priority: int
    replacement_cost: float
    labor_cost: float
    total_cost: float


class CostAggregate(BaseModel):
    parts_min: float = 0
    parts_max: float = 0
    labor_min: float = 0
    labor_max: float = 0
    total_min: float = 0
    total_max: float = 0

    @computed_field
    @property
    def formatted_range(self) -> str:
        return f"{format_usd(self.total_min)} - {format_usd(self.total_max)}"


class PartsSource(BaseModel):
    source: str
    type: Literal["OEM", "Aftermarket"]
    price_range: str
    availability: str


class EnhancedDiagnostic(BaseModel):
    id: str
    issue: str
    severity: Severity
    description: str
    affected_components: List[MatchedComponent]
    total_repair_cost: CostAggregate
    diagnostic_steps: List[str]
    preventive_measures: List[str]
    urgency_level: Urgency
    safety_risk: WarningLevel
    estimated_repair_time: str
    recommended_shops: List[str]
    parts_sources: List[PartsSource]
    # True when the make filter would have removed every candidate
    make_filter_relaxed: bool = False
    timestamp: datetime
