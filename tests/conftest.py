from types import SimpleNamespace

import pytest

from autodiag.diagnostics.matcher import ComponentMatcher
from autodiag.models.catalog import ComponentRecord
from autodiag.models.diagnostic import DiagnosticInputRequest


def make_component(
    component_id,
    *,
    name=None,
    category="engine",
    warning="medium",
    price=(100, 300, 200, 150),
    labor=(1.0, 2.0, "medium"),
    symptoms=("rough idle",),
    makes=("Honda",),
    description="Test part",
    reasons=(),
    codes=(),
):
    price_min, price_max, oem, aftermarket = price
    labor_min, labor_max, difficulty = labor
    return ComponentRecord(
        id=component_id,
        name=name or component_id.replace("-", " ").title(),
        category=category,
        price_range={"min": price_min, "max": price_max, "oem": oem, "aftermarket": aftermarket},
        labor_hours={"min": labor_min, "max": labor_max, "difficulty": difficulty},
        symptoms=symptoms,
        compatible_makes=makes,
        description=description,
        common_failure_reasons=reasons,
        diagnostic_codes=codes,
        warning_level=warning,
    )


@pytest.fixture
def matcher():
    return ComponentMatcher()


@pytest.fixture
def honda_request():
    return DiagnosticInputRequest(
        vehicle_make="Honda",
        vehicle_model="Civic",
        vehicle_year=2015,
        symptoms="rough idle and check engine light, poor fuel economy",
        issue_title="Rough running",
        severity="high",
        urgency="soon",
    )


@pytest.fixture
def brake_request():
    return DiagnosticInputRequest(
        vehicle_make="Toyota",
        vehicle_model="Corolla",
        vehicle_year=2018,
        symptoms="squealing brakes and grinding noise when stopping",
        issue_title="Noisy brakes",
        severity="low",
        urgency="moderate",
    )


class FakeQuery:
    """Stands in for a supabase-py query builder; records the chain."""

    def __init__(self, client, target):
        self.client = client
        self.calls = [target]

    def __getattr__(self, name):
        def _record(*args, **kwargs):
            self.calls.append((name, args, kwargs))
            return self
        return _record

    def execute(self):
        self.client.executed.append(self.calls)
        if self.client.error is not None:
            raise self.client.error
        return SimpleNamespace(data=self.client.data)


class FakeSupabase:
    def __init__(self, data=None, error=None):
        self.data = data
        self.error = error
        self.executed = []

    def table(self, name):
        return FakeQuery(self, ("table", name))

    def rpc(self, name, params):
        return FakeQuery(self, ("rpc", name, params))


@pytest.fixture
def fake_supabase(monkeypatch):
    from autodiag.db import db

    client = FakeSupabase()
    monkeypatch.setattr(db, "get_supabase", lambda: client)
    return client
