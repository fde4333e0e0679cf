from datetime import datetime, timezone

from autodiag.diagnostics.engine import generate_diagnostic
from autodiag.models.money import CostRange
from autodiag.models.suggestions import SuggestionPayload
from autodiag.services.adapter import from_storage_record, to_storage_record
from autodiag.services.assembly import build_diagnostic_result

CREATED = "2024-05-01T12:00:00+00:00"


def _result(request, **updates):
    analysis = generate_diagnostic(request)
    suggestions = SuggestionPayload(common_causes=["Worn pads"], common_actions=["Replace pads"])
    result = build_diagnostic_result(request, analysis, suggestions)
    return result.model_copy(update=updates)


def _as_row(record, **extra):
    # What PostgREST hands back after an insert
    row = record.model_dump(mode="json")
    row.update({"id": "7d7c1d5e-0000-4000-8000-000000000001", "created_at": CREATED})
    row.update(extra)
    return row


def test_round_trip_with_diagnostic_data(brake_request):
    result = _result(
        brake_request,
        custom_name="Squeaky",
        tags=["brakes", "urgent"],
        notes="Started last week",
        is_bookmarked=True,
        repair_status="in_progress",
    )

    back = from_storage_record(_as_row(to_storage_record(result, "user-1")))

    assert back.severity == result.severity
    assert back.urgency == result.urgency
    assert back.vehicle_info == result.vehicle_info
    assert back.custom_name == "Squeaky"
    assert back.tags == ["brakes", "urgent"]
    assert back.notes == "Started last week"
    assert back.is_bookmarked is True
    assert back.repair_status == "in_progress"
    assert back.issue == result.issue
    assert back.description == result.description
    assert back.possible_causes == result.possible_causes
    assert back.recommended_actions == result.recommended_actions
    assert back.estimated_cost == result.estimated_cost
    assert back.affected_components == result.affected_components
    assert back.consequences == result.consequences
    assert back.repair_details == result.repair_details
    assert back.resources == result.resources
    assert back.timestamp == datetime(2024, 5, 1, 12, tzinfo=timezone.utc)


def test_storage_record_flattens_and_nulls(brake_request):
    result = _result(brake_request, vehicle_info=None, possible_causes=[], estimated_cost="")

    record = to_storage_record(result, "user-1")

    assert record.user_id == "user-1"
    assert record.vehicle_make is None
    assert record.vehicle_model is None
    assert record.vehicle_year is None
    assert record.possible_causes is None
    assert record.estimated_cost is None
    assert record.custom_name is None
    assert record.tags is None
    assert record.notes is None
    assert record.is_bookmarked is False
    assert record.repair_status == "pending"
    assert set(record.diagnostic_data) == {
        "affected_components", "consequences", "repair_details", "resources"
    }


def test_storage_record_vehicle_fields(brake_request):
    record = to_storage_record(_result(brake_request), "user-1")

    assert (record.vehicle_make, record.vehicle_model, record.vehicle_year) == ("Toyota", "Corolla", 2018)
    assert record.symptoms == brake_request.symptoms
    assert record.issue_title == "Noisy brakes"


def test_without_blob_consequences_come_from_severity():
    row = {
        "id": "abc",
        "severity": "high",
        "urgency": "soon",
        "symptoms": "Engine stalls and the brake pedal feels soft",
        "issue_title": "Stalling",
        "vehicle_make": "Ford",
        "vehicle_model": "Focus",
        "vehicle_year": 2012,
        "diagnostic_data": None,
        "created_at": CREATED,
    }

    result = from_storage_record(row)

    assert result.consequences == [
        "Potential vehicle damage if left untreated",
        "Safety risk while driving",
        "Increased repair costs if delayed",
    ]
    assert [(c.name, c.condition) for c in result.affected_components] == [
        ("Engine Components", "poor"),
        ("Brake System", "poor"),
    ]
    details = result.repair_details
    assert details.labor_hours == 3
    assert details.labor_rate == 120
    assert (details.parts_cost.min, details.parts_cost.max) == (700, 3800)
    assert (details.total_cost.min, details.total_cost.max) == (1060, 4160)
    assert details.difficulty == "hard"
    assert result.vehicle_info.year == 2012


def test_without_blob_generic_component_fallback():
    result = from_storage_record({"id": "abc", "severity": "low", "symptoms": "strange rattle"})

    assert [(c.name, c.condition) for c in result.affected_components] == [
        ("Vehicle Components", "good"),
    ]
    assert len(result.consequences) == 2
    assert result.repair_details.labor_hours == 1
    assert result.repair_details.difficulty == "easy"


def test_brake_placeholder_never_good():
    result = from_storage_record({"id": "abc", "severity": "low", "symptoms": "Hard stopping"})

    assert [(c.name, c.condition) for c in result.affected_components] == [("Brake System", "fair")]


def test_sparse_row_gets_defaults():
    result = from_storage_record({"id": "abc"})

    assert result.issue == "Unknown Issue"
    assert result.severity == "medium"
    assert result.urgency == "moderate"
    assert result.estimated_cost == "Unknown"
    assert result.diagnostic_type == "manual"
    assert result.repair_status == "pending"
    assert result.is_bookmarked is False
    assert result.vehicle_info is None
    assert result.possible_causes == []
    assert result.consequences[0] == "Reduced vehicle performance"


def test_legacy_cost_strings_are_parsed():
    row = {
        "id": "abc",
        "severity": "medium",
        "diagnostic_data": {
            "affected_components": [
                {"name": "Alternator", "condition": "poor", "replacement_cost": "$200 - $600"},
                {"name": "Starter Motor", "condition": "fair", "replacement_cost": "$220 + $180 labor"},
            ],
        },
    }

    result = from_storage_record(row)

    first, second = result.affected_components
    assert (first.replacement_cost.min, first.replacement_cost.max) == (200, 600)
    assert (second.replacement_cost.min, second.replacement_cost.max) == (100, 500)
    assert (result.repair_details.parts_cost.min, result.repair_details.parts_cost.max) == (300, 1100)
    assert result.consequences[0] == "Reduced vehicle performance"


def test_cost_range_parse_and_format():
    assert CostRange.parse("$1200 - $3400").formatted == "$1200 - $3400"
    assert CostRange.parse("about three hundred").min == 100
    assert CostRange.point(60.5).formatted == "$60.50"


def test_malformed_components_fall_back_to_placeholders():
    row = {
        "id": "x",
        "severity": "low",
        "symptoms": "squeal when stopping",
        "diagnostic_data": {"affected_components": [{"name": "A", "condition": "worn"}]},
    }

    result = from_storage_record(row)

    assert [(c.name, c.condition) for c in result.affected_components] == [("Brake System", "fair")]
    assert result.repair_details.labor_hours == 1


def test_each_malformed_section_is_regenerated_independently():
    row = {
        "id": "x",
        "severity": "high",
        "diagnostic_data": {
            "affected_components": "not a list",
            "consequences": [1, 2],
            "repair_details": {"labor_hours": "lots"},
            "resources": {"guides": [{"title": "No other fields"}]},
        },
    }

    result = from_storage_record(row)

    assert [c.name for c in result.affected_components] == ["Vehicle Components"]
    assert result.consequences[1] == "Safety risk while driving"
    assert result.repair_details.difficulty == "hard"
    assert result.resources.guides == []


def test_good_sections_survive_next_to_bad_ones():
    row = {
        "id": "x",
        "severity": "medium",
        "diagnostic_data": {
            "affected_components": [{"name": "A", "condition": "worn"}],
            "consequences": ["Custom consequence"],
        },
    }

    result = from_storage_record(row)

    assert result.consequences == ["Custom consequence"]
    assert [c.name for c in result.affected_components] == ["Vehicle Components"]


def test_history_survives_one_corrupt_row(monkeypatch):
    from autodiag.services import diagnostic_service

    rows = [
        {"id": "good", "issue_title": "Fine"},
        {"id": "bad", "diagnostic_data": {"repair_details": {"difficulty": "impossible"}}},
    ]
    monkeypatch.setattr(diagnostic_service, "list_diagnostics", lambda user_id, limit: rows)

    history = diagnostic_service.list_history("user-1")

    assert [r.id for r in history] == ["good", "bad"]
    assert history[1].repair_details.difficulty == "medium"
