from datetime import datetime
from typing import Any, Dict, List, Literal, Optional

from pydantic import BaseModel, Field, field_validator # type: ignore

from autodiag.models.catalog import Difficulty
from autodiag.models.diagnostic import Condition, EnhancedDiagnostic, Severity, Urgency
from autodiag.models.money import CostRange


RepairStatus = Literal["pending", "in_progress", "completed", "cancelled"]
DiagnosticType = Literal["manual", "obd"]


class AffectedComponent(BaseModel):
    name: str
    condition: Condition
    replacement_cost: CostRange
    labor_cost: Optional[CostRange] = None
    total_cost: Optional[CostRange] = None

    @field_validator("replacement_cost", "labor_cost", "total_cost", mode="before")
    @classmethod
    def _accept_display_strings(cls, value):
        # Older rows stored "$min - $max" strings
        if isinstance(value, str):
            return CostRange.parse(value)
        return value


class RepairDetails(BaseModel):
    labor_hours: float
    labor_rate: float
    parts_cost: CostRange
    total_cost: CostRange
    difficulty: Difficulty


class Guide(BaseModel):
    title: str
    difficulty: str
    duration: str
    rating: float
    url: str = "#"


class Video(BaseModel):
    title: str
    channel: str
    duration: str
    views: str
    rating: float
    url: str = "#"


class Documentation(BaseModel):
    title: str
    type: str
    source: str
    url: str = "#"


class ForumDiscussion(BaseModel):
    title: str
    replies: int
    solved: bool
    last_activity: str
    url: str = "#"


class PartListing(BaseModel):
    name: str
    brand: str
    price: str
    availability: str
    rating: float
    vendor: str
    url: str = "#"


class Resources(BaseModel):
    guides: List[Guide] = Field(default_factory=list)
    videos: List[Video] = Field(default_factory=list)
    documentation: List[Documentation] = Field(default_factory=list)
    forum_discussions: List[ForumDiscussion] = Field(default_factory=list)
    parts: List[PartListing] = Field(default_factory=list)


class VehicleInfo(BaseModel):
    make: str
    model: str
    year: int


class DiagnosticResult(BaseModel):
    """Displayed and persisted shape of one diagnosis."""

    id: str
    issue: str
    severity: Severity
    description: str
    possible_causes: List[str] = Field(default_factory=list)
    recommended_actions: List[str] = Field(default_factory=list)
    estimated_cost: str
    urgency: Urgency
    consequences: List[str] = Field(default_factory=list)
    affected_components: List[AffectedComponent] = Field(default_factory=list)
    repair_details: RepairDetails
    resources: Resources = Field(default_factory=Resources)
    timestamp: datetime
    vehicle_info: Optional[VehicleInfo] = None
    diagnostic_type: DiagnosticType = "manual"
    custom_name: Optional[str] = None
    tags: Optional[List[str]] = None
    notes: Optional[str] = None
    is_bookmarked: bool = False
    repair_status: RepairStatus = "pending"


class StoredDiagnostic(BaseModel):
    """Row of the diagnostic_issues table."""

    id: Optional[str] = None
    user_id: Optional[str] = None
    vehicle_make: Optional[str] = None
    vehicle_model: Optional[str] = None
    vehicle_year: Optional[int] = None
    symptoms: Optional[str] = None
    issue_title: Optional[str] = None
    severity: Optional[Severity] = None
    urgency: Optional[Urgency] = None
    possible_causes: Optional[List[str]] = None
    recommended_actions: Optional[List[str]] = None
    estimated_cost: Optional[str] = None
    diagnostic_type: Optional[DiagnosticType] = None
    diagnostic_data: Optional[Dict[str, Any]] = None
    repair_status: Optional[RepairStatus] = None
    custom_name: Optional[str] = None
    tags: Optional[List[str]] = None
    notes: Optional[str] = None
    is_bookmarked: Optional[bool] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None


class DiagnosticUpdate(BaseModel):
    # Only the fields a user may edit after the fact
    custom_name: Optional[str] = Field(None, max_length=100)
    notes: Optional[str] = Field(None, max_length=1000)
    repair_status: Optional[RepairStatus] = None
    is_bookmarked: Optional[bool] = None
    tags: Optional[List[str]] = None


class DiagnosticRun(BaseModel):
    result: DiagnosticResult
    analysis: EnhancedDiagnostic
    saved: bool
    suggestions_degraded: bool = False
