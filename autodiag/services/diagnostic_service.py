import logging
import re
from typing import List, Optional

from autodiag.db.db import (
    delete_diagnostic,
    fetch_diagnostic_suggestions,
    insert_diagnostic,
    list_diagnostics,
    update_diagnostic,
)
from autodiag.diagnostics.engine import DiagnosticEngine
from autodiag.errors import DatastoreError, NoFieldsToUpdate
from autodiag.models.diagnostic import DiagnosticInputRequest
from autodiag.models.result import DiagnosticResult, DiagnosticRun, DiagnosticUpdate
from autodiag.models.suggestions import SuggestionPayload
from autodiag.services.adapter import from_storage_record, to_storage_record
from autodiag.services.assembly import build_diagnostic_result

log = logging.getLogger(__name__)

HISTORY_LIMIT = 25

_UUID_RE = re.compile(
    r"^[0-9a-f]{8}-[0-9a-f]{4}-[0-9a-f]{4}-[0-9a-f]{4}-[0-9a-f]{12}$"
)

engine = DiagnosticEngine()


def get_suggestions(form: DiagnosticInputRequest) -> SuggestionPayload:
    data = fetch_diagnostic_suggestions(
        form.symptoms,
        form.vehicle_make,
        form.vehicle_model,
        form.vehicle_year,
    )
    return SuggestionPayload.from_rpc(data)


def run_diagnostic(form: DiagnosticInputRequest, user_id: str) -> DiagnosticRun:
    """
    Diagnose, then try to save.

    Neither a failed suggestion lookup nor a failed save stops the user
    from getting their result; both are logged and flagged on the run.
    """

    # 1️⃣ Causes / actions from the suggestions RPC
    degraded = False
    try:
        suggestions = get_suggestions(form)
    except DatastoreError:
        log.warning("Suggestion lookup failed; using default causes/actions", exc_info=True)
        suggestions = SuggestionPayload()
        degraded = True

    # 2️⃣ Match and score components
    analysis = engine.generate_diagnostic(form)
    result = build_diagnostic_result(form, analysis, suggestions)

    # 3️⃣ Persist
    record = to_storage_record(result, user_id)
    saved = False
    try:
        row = insert_diagnostic(
            record.model_dump(
                mode="json",
                exclude={"id", "created_at", "updated_at"},
            )
        )
        saved = True
        if row and row.get("id"):
            result = result.model_copy(update={"id": str(row["id"])})
    except DatastoreError:
        log.exception("Saving diagnostic for user %s failed", user_id)

    return DiagnosticRun(
        result=result,
        analysis=analysis,
        saved=saved,
        suggestions_degraded=degraded,
    )


def list_history(user_id: str, limit: int = HISTORY_LIMIT) -> List[DiagnosticResult]:
    rows = list_diagnostics(user_id, limit=limit)
    return [from_storage_record(row) for row in rows]


def update_user_diagnostic(
    user_id: str,
    issue_id: str,
    updates: DiagnosticUpdate,
) -> Optional[DiagnosticResult]:
    data = updates.model_dump(exclude_unset=True)

    if not data:
        raise NoFieldsToUpdate("No fields to update")

    row = update_diagnostic(issue_id, user_id, data)
    return from_storage_record(row) if row else None


def delete_user_diagnostic(user_id: str, issue_id: str) -> bool:
    # Ids that never reached the database (e.g. "manual-1700000000000")
    if not _UUID_RE.match(issue_id):
        log.info("Skipping deletion for non-database id %s", issue_id)
        return False

    delete_diagnostic(issue_id, user_id)
    return True
