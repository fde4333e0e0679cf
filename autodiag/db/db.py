# Database helpers for diagnostic history (Supabase / PostgREST)

import logging
from functools import lru_cache
from typing import Any, Dict, List, Optional

import httpx
from postgrest.exceptions import APIError  # type: ignore
from supabase import Client, create_client  # type: ignore

from autodiag.config import SUPABASE_SERVICE_KEY, SUPABASE_URL
from autodiag.errors import DatastoreError

log = logging.getLogger(__name__)

DIAGNOSTICS_TABLE = "diagnostic_issues"
SUGGESTIONS_RPC = "get_diagnostic_suggestions"

_FAILURES = (APIError, httpx.HTTPError)


@lru_cache(maxsize=1)
def get_supabase() -> Client:
    """
    Create the Supabase client on first use
    """
    if not SUPABASE_URL or not SUPABASE_SERVICE_KEY:
        raise DatastoreError("SUPABASE_URL / SUPABASE_SERVICE_KEY not set")

    return create_client(SUPABASE_URL, SUPABASE_SERVICE_KEY)


def insert_diagnostic(record: Dict[str, Any]) -> Optional[Dict[str, Any]]:
    try:
        res = (
            get_supabase()
            .table(DIAGNOSTICS_TABLE)
            .insert(record)
            .execute()
        )
    except _FAILURES as exc:
        raise DatastoreError(f"Failed to save diagnostic: {exc}") from exc

    return res.data[0] if res.data else None


def list_diagnostics(user_id: str, limit: int = 25) -> List[Dict[str, Any]]:
    """
    Newest first
    """
    try:
        res = (
            get_supabase()
            .table(DIAGNOSTICS_TABLE)
            .select("*")
            .eq("user_id", user_id)
            .order("created_at", desc=True)
            .limit(limit)
            .execute()
        )
    except _FAILURES as exc:
        raise DatastoreError(f"Failed to fetch diagnostic history: {exc}") from exc

    return res.data or []


def update_diagnostic(
    issue_id: str,
    user_id: str,
    fields: Dict[str, Any],
) -> Optional[Dict[str, Any]]:
    try:
        res = (
            get_supabase()
            .table(DIAGNOSTICS_TABLE)
            .update(fields)
            .eq("id", issue_id)
            .eq("user_id", user_id)
            .execute()
        )
    except _FAILURES as exc:
        raise DatastoreError(f"Failed to update diagnostic: {exc}") from exc

    return res.data[0] if res.data else None


def delete_diagnostic(issue_id: str, user_id: str) -> None:
    try:
        (
            get_supabase()
            .table(DIAGNOSTICS_TABLE)
            .delete()
            .eq("id", issue_id)
            .eq("user_id", user_id)
            .execute()
        )
    except _FAILURES as exc:
        raise DatastoreError(f"Failed to delete diagnostic: {exc}") from exc

    log.info("Deleted diagnostic issue %s", issue_id)


def fetch_diagnostic_suggestions(
    symptoms: str,
    make: str,
    model: str,
    year: Optional[int],
) -> Any:
    """
    Raw RPC payload; shape is validated by SuggestionPayload.
    """
    try:
        res = get_supabase().rpc(
            SUGGESTIONS_RPC,
            {
                "input_symptoms": symptoms,
                "input_make": make,
                "input_model": model,
                "input_year": year,
            },
        ).execute()
    except _FAILURES as exc:
        raise DatastoreError(f"Failed to get diagnostic suggestions: {exc}") from exc

    return res.data or {}
