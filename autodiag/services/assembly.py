# Builds the displayed / persisted DiagnosticResult from engine output

from typing import List

from autodiag.diagnostics.engine import LABOR_RATE
from autodiag.models.catalog import DIFFICULTY_ORDER
from autodiag.models.diagnostic import DiagnosticInputRequest, EnhancedDiagnostic
from autodiag.models.money import CostRange, round_half_up
from autodiag.models.result import (
    AffectedComponent,
    DiagnosticResult,
    Documentation,
    Guide,
    PartListing,
    RepairDetails,
    Resources,
    VehicleInfo,
    Video,
)
from autodiag.models.suggestions import SuggestionPayload

MAX_SUGGESTIONS = 5


def consequences_for_safety_risk(safety_risk: str) -> List[str]:
    if safety_risk in ("critical", "high"):
        return [
            "Potential safety hazard - immediate attention required",
            "Risk of further damage if not addressed promptly",
            "Possible breakdown or failure while driving",
        ]
    if safety_risk == "medium":
        return [
            "Reduced vehicle performance and reliability",
            "Potential for more serious issues if ignored",
            "Increased repair costs if delayed",
        ]
    return [
        "Minor impact on vehicle performance",
        "Gradual deterioration over time",
    ]


def average_difficulty(analysis: EnhancedDiagnostic) -> str:
    matched = analysis.affected_components
    if not matched:
        return "easy"

    avg = sum(
        DIFFICULTY_ORDER[m.component.labor_hours.difficulty] for m in matched
    ) / len(matched)

    if avg >= 3.5:
        return "expert"
    if avg >= 2.5:
        return "hard"
    if avg >= 1.5:
        return "medium"
    return "easy"


def build_resources(analysis: EnhancedDiagnostic) -> Resources:
    components = [m.component for m in analysis.affected_components]
    lead_name = components[0].name if components else "Component"

    return Resources(
        guides=[
            Guide(
                title=f"{c.name} Replacement Guide",
                difficulty=c.labor_hours.difficulty,
                duration=f"{c.labor_hours.min:g}-{c.labor_hours.max:g} hours",
                rating=4.5,
            )
            for c in components
        ],
        videos=[
            Video(
                title=f"How to Replace {c.name}",
                channel="AutoRepair Pro",
                duration="15:30",
                views="250K",
                rating=4.7,
            )
            for c in components
        ],
        documentation=[
            Documentation(
                title=f"{c.name} Service Manual",
                type="PDF",
                source="Manufacturer",
            )
            for c in components
        ],
        parts=[
            PartListing(
                name=lead_name,
                brand=source.type,
                price=source.price_range,
                availability=source.availability,
                rating=4.5,
                vendor=source.source,
            )
            for source in analysis.parts_sources
        ],
    )


def build_diagnostic_result(
    request: DiagnosticInputRequest,
    analysis: EnhancedDiagnostic,
    suggestions: SuggestionPayload,
) -> DiagnosticResult:
    total = analysis.total_repair_cost

    affected = [
        AffectedComponent(
            name=m.component.name,
            condition=m.condition,
            replacement_cost=CostRange.point(m.replacement_cost),
            labor_cost=CostRange.point(m.labor_cost),
            total_cost=CostRange.point(m.total_cost),
        )
        for m in analysis.affected_components
    ]

    vehicle_info = None
    if request.vehicle_make and request.vehicle_model and request.vehicle_year:
        vehicle_info = VehicleInfo(
            make=request.vehicle_make,
            model=request.vehicle_model,
            year=request.vehicle_year,
        )

    return DiagnosticResult(
        id=f"manual-{int(analysis.timestamp.timestamp() * 1000)}",
        issue=request.issue_title,
        severity=request.severity,
        description=request.symptoms,
        possible_causes=suggestions.common_causes[:MAX_SUGGESTIONS],
        recommended_actions=suggestions.common_actions[:MAX_SUGGESTIONS],
        estimated_cost=request.estimated_cost or total.formatted_range,
        urgency=request.urgency,
        consequences=consequences_for_safety_risk(analysis.safety_risk),
        affected_components=affected,
        repair_details=RepairDetails(
            labor_hours=round_half_up(total.labor_min / LABOR_RATE),
            labor_rate=LABOR_RATE,
            parts_cost=CostRange(min=total.parts_min, max=total.parts_max),
            total_cost=CostRange(min=total.total_min, max=total.total_max),
            difficulty=average_difficulty(analysis),
        ),
        resources=build_resources(analysis),
        timestamp=analysis.timestamp,
        vehicle_info=vehicle_info,
        diagnostic_type="manual",
        custom_name=request.custom_name,
        notes=request.notes,
        repair_status="pending",
    )
