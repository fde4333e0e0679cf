"""
Conversion between DiagnosticResult and diagnostic_issues rows.

to_storage_record flattens vehicle info and packs the derived parts of a
result (components, consequences, repair details, resources) into the
diagnostic_data JSON column. from_storage_record reverses it; rows written
without diagnostic_data get placeholder components, consequences and repair
details derived from severity so history always has something to show.
"""

import logging
from datetime import datetime, timezone
from typing import Any, Dict, List, Union

from pydantic import ValidationError # type: ignore

from autodiag.models.money import CostRange
from autodiag.models.result import (
    AffectedComponent,
    DiagnosticResult,
    RepairDetails,
    Resources,
    StoredDiagnostic,
    VehicleInfo,
)

log = logging.getLogger(__name__)

LABOR_RATE = 120

LABOR_HOURS_BY_SEVERITY = {"critical": 4, "high": 3, "medium": 2, "low": 1}
DIFFICULTY_BY_SEVERITY = {"critical": "expert", "high": "hard", "medium": "medium", "low": "easy"}
CONDITION_BY_SEVERITY = {"critical": "critical", "high": "poor", "medium": "fair", "low": "good"}


# --------------------------------------------------
# Result -> row
# --------------------------------------------------

def to_storage_record(result: DiagnosticResult, owner_id: str) -> StoredDiagnostic:
    vehicle = result.vehicle_info

    diagnostic_data = {
        "affected_components": [
            c.model_dump(mode="json") for c in result.affected_components
        ],
        "consequences": list(result.consequences),
        "repair_details": result.repair_details.model_dump(mode="json"),
        "resources": result.resources.model_dump(mode="json"),
    }

    return StoredDiagnostic(
        user_id=owner_id,
        vehicle_make=vehicle.make if vehicle else None,
        vehicle_model=vehicle.model if vehicle else None,
        vehicle_year=vehicle.year if vehicle else None,
        symptoms=result.description or None,
        issue_title=result.issue or None,
        severity=result.severity,
        urgency=result.urgency,
        possible_causes=result.possible_causes or None,
        recommended_actions=result.recommended_actions or None,
        estimated_cost=result.estimated_cost or None,
        diagnostic_type=result.diagnostic_type or "manual",
        diagnostic_data=diagnostic_data,
        repair_status=result.repair_status or "pending",
        custom_name=result.custom_name or None,
        tags=result.tags or None,
        notes=result.notes or None,
        is_bookmarked=bool(result.is_bookmarked),
    )


# --------------------------------------------------
# Row -> result
# --------------------------------------------------

def consequences_for_severity(severity: str) -> List[str]:
    if severity in ("critical", "high"):
        return [
            "Potential vehicle damage if left untreated",
            "Safety risk while driving",
            "Increased repair costs if delayed",
        ]
    if severity == "medium":
        return [
            "Reduced vehicle performance",
            "Potential for more serious issues if ignored",
            "Possible decrease in fuel efficiency",
        ]
    return [
        "Minor impact on vehicle performance",
        "Potential for gradual deterioration",
    ]


def placeholder_components(symptoms: str, severity: str) -> List[AffectedComponent]:
    text = (symptoms or "").lower()
    condition = CONDITION_BY_SEVERITY.get(severity, "fair")
    components = []

    if "engine" in text:
        components.append(
            AffectedComponent(
                name="Engine Components",
                condition=condition,
                replacement_cost=CostRange(min=500, max=3000),
            )
        )

    if "brake" in text or "stopping" in text:
        components.append(
            AffectedComponent(
                name="Brake System",
                # Brakes are never reported as "good"
                condition=condition if condition != "good" else "fair",
                replacement_cost=CostRange(min=200, max=800),
            )
        )

    if not components:
        components.append(
            AffectedComponent(
                name="Vehicle Components",
                condition=condition,
                replacement_cost=CostRange(min=200, max=1000),
            )
        )

    return components


def repair_details_for(severity: str, components: List[AffectedComponent]) -> RepairDetails:
    labor_hours = LABOR_HOURS_BY_SEVERITY.get(severity, 2)
    labor = labor_hours * LABOR_RATE

    parts_min = sum(c.replacement_cost.min for c in components)
    parts_max = sum(c.replacement_cost.max for c in components)

    return RepairDetails(
        labor_hours=labor_hours,
        labor_rate=LABOR_RATE,
        parts_cost=CostRange(min=parts_min, max=parts_max),
        total_cost=CostRange(min=parts_min + labor, max=parts_max + labor),
        difficulty=DIFFICULTY_BY_SEVERITY.get(severity, "medium"),
    )


def _blob_section(blob: Dict[str, Any], key: str, parse, fallback, record_id):
    """
    Parse one diagnostic_data section; a missing or malformed section is
    rebuilt by fallback() so one bad row cannot break a whole history.
    """
    raw = blob.get(key)
    if raw is None:
        return fallback()

    try:
        return parse(raw)
    except (ValidationError, TypeError, ValueError):
        log.warning("Malformed %s in diagnostic %s; regenerating", key, record_id, exc_info=True)
        return fallback()


def _parse_consequences(raw: Any) -> List[str]:
    if not isinstance(raw, list) or not all(isinstance(c, str) for c in raw):
        raise TypeError("consequences must be a list of strings")
    return list(raw)


def from_storage_record(record: Union[StoredDiagnostic, Dict[str, Any]]) -> DiagnosticResult:
    if not isinstance(record, StoredDiagnostic):
        record = StoredDiagnostic.model_validate(record)

    severity = record.severity or "medium"
    blob = record.diagnostic_data or {}

    components = _blob_section(
        blob,
        "affected_components",
        lambda raw: [AffectedComponent.model_validate(c) for c in raw],
        lambda: placeholder_components(record.symptoms, severity),
        record.id,
    )
    consequences = _blob_section(
        blob,
        "consequences",
        _parse_consequences,
        lambda: consequences_for_severity(severity),
        record.id,
    )
    repair_details = _blob_section(
        blob,
        "repair_details",
        RepairDetails.model_validate,
        lambda: repair_details_for(severity, components),
        record.id,
    )
    resources = _blob_section(
        blob,
        "resources",
        Resources.model_validate,
        Resources,
        record.id,
    )

    vehicle_info = None
    if record.vehicle_make and record.vehicle_model and record.vehicle_year:
        vehicle_info = VehicleInfo(
            make=record.vehicle_make,
            model=record.vehicle_model,
            year=record.vehicle_year,
        )

    return DiagnosticResult(
        id=record.id or "unsaved",
        issue=record.issue_title or "Unknown Issue",
        severity=severity,
        description=record.symptoms or "",
        possible_causes=record.possible_causes or [],
        recommended_actions=record.recommended_actions or [],
        estimated_cost=record.estimated_cost or "Unknown",
        urgency=record.urgency or "moderate",
        consequences=consequences,
        affected_components=components,
        repair_details=repair_details,
        resources=resources,
        timestamp=record.created_at or datetime.now(timezone.utc),
        vehicle_info=vehicle_info,
        diagnostic_type=record.diagnostic_type or "manual",
        custom_name=record.custom_name or None,
        tags=record.tags or None,
        notes=record.notes or None,
        is_bookmarked=bool(record.is_bookmarked),
        repair_status=record.repair_status or "pending",
    )
