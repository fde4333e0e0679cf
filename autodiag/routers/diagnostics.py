from typing import List

from fastapi import APIRouter, Depends, HTTPException, Query  # type: ignore
from fastapi.security import HTTPBearer  # type: ignore

from autodiag.auth.auth import get_current_user_id
from autodiag.errors import NoFieldsToUpdate
from autodiag.models.diagnostic import DiagnosticForm, EnhancedDiagnostic
from autodiag.models.result import DiagnosticResult, DiagnosticRun, DiagnosticUpdate
from autodiag.services import diagnostic_service

router = APIRouter(
    prefix="/diagnostics",
    tags=["Diagnostics"]
)

# Swagger auth UI ONLY
security = HTTPBearer(auto_error=False)


@router.post("", response_model=DiagnosticRun)
def create_diagnostic(
    form: DiagnosticForm,
    _=Depends(security),
    user_id: str = Depends(get_current_user_id),
):
    return diagnostic_service.run_diagnostic(form, user_id)


# Runs the engine only; nothing is saved
@router.post("/preview", response_model=EnhancedDiagnostic)
def preview_diagnostic(form: DiagnosticForm):
    return diagnostic_service.engine.generate_diagnostic(form)


@router.get("/history", response_model=List[DiagnosticResult])
def get_history(
    limit: int = Query(diagnostic_service.HISTORY_LIMIT, ge=1, le=100),
    user_id: str = Depends(get_current_user_id),
):
    return diagnostic_service.list_history(user_id, limit=limit)


@router.put("/{issue_id}", response_model=DiagnosticResult)
def update_diagnostic(
    issue_id: str,
    payload: DiagnosticUpdate,
    user_id: str = Depends(get_current_user_id),
):
    try:
        result = diagnostic_service.update_user_diagnostic(user_id, issue_id, payload)
    except NoFieldsToUpdate as exc:
        raise HTTPException(status_code=400, detail=str(exc))

    if result is None:
        raise HTTPException(status_code=404, detail="Diagnostic not found")

    return result


@router.delete("/{issue_id}", status_code=204)
def delete_diagnostic(
    issue_id: str,
    user_id: str = Depends(get_current_user_id),
):
    diagnostic_service.delete_user_diagnostic(user_id, issue_id)
