from typing import Optional


class CatalogError(Exception):
    """Component catalog file is missing or inconsistent."""


class DatastoreError(Exception):
    """Supabase call failed (network, RLS, bad query)."""


class RateLimitExceeded(Exception):
    def __init__(self, key: str, reset_at: Optional[float] = None):
        super().__init__(f"Rate limit exceeded for {key}")
        self.key = key
        self.reset_at = reset_at


class AIServiceUnavailable(Exception):
    """AI analysis add-on is not configured."""


class AIServiceError(Exception):
    """Groq call failed (transport, auth, upstream error)."""


class AIQuotaExceeded(AIServiceError):
    """Groq refused the call for rate or quota reasons."""


class NoFieldsToUpdate(Exception):
    """Update request carried no editable fields."""
