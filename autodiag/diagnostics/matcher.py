# autodiag/diagnostics/matcher.py

from typing import Iterable, List, Optional, Sequence

from autodiag.models.catalog import ComponentRecord
from autodiag.models.diagnostic import CostAggregate


DEFAULT_LABOR_RATE = 120


def phrases_overlap(a: str, b: str) -> bool:
    """Either phrase contains the other (both already lowercased)."""
    return a in b or b in a


class ComponentMatcher:
    """
    Read-only queries over the component catalog.
    No query raises for "no match"; they return empty lists.
    """

    def __init__(self, catalog: Optional[Sequence[ComponentRecord]] = None):
        if catalog is None:
            from autodiag.data import COMPONENTS
            catalog = COMPONENTS
        self.catalog = tuple(catalog)

    def match_by_symptoms(self, symptoms: Iterable[str]) -> List[ComponentRecord]:
        # Most severe first, cheapest to confirm within a severity tier
        wanted = [s.lower() for s in symptoms]

        matches = [
            component
            for component in self.catalog
            if any(
                phrases_overlap(user_symptom, symptom.lower())
                for symptom in component.symptoms
                for user_symptom in wanted
            )
        ]

        return sorted(
            matches,
            key=lambda c: (-c.warning_rank, c.price_range.min),
        )

    def match_by_trouble_codes(self, codes: Iterable[str]) -> List[ComponentRecord]:
        wanted = set(codes)
        return [
            component
            for component in self.catalog
            if wanted.intersection(component.diagnostic_codes)
        ]

    def match_by_make(self, make: str) -> List[ComponentRecord]:
        make = make.lower()
        return [
            component
            for component in self.catalog
            if any(m.lower() == make for m in component.compatible_makes)
        ]

    def search_free_text(self, query: str) -> List[ComponentRecord]:
        query = query.lower().strip()
        if not query:
            return []

        return [
            component
            for component in self.catalog
            if query in component.name.lower()
            or query in component.description.lower()
            or any(query in s.lower() for s in component.symptoms)
            or any(query in r.lower() for r in component.common_failure_reasons)
        ]

    def by_category(self, category: str) -> List[ComponentRecord]:
        return [c for c in self.catalog if c.category == category]

    def get(self, component_id: str) -> Optional[ComponentRecord]:
        for component in self.catalog:
            if component.id == component_id:
                return component
        return None

    @staticmethod
    def aggregate_cost(
        components: Sequence[ComponentRecord],
        labor_rate: float = DEFAULT_LABOR_RATE,
    ) -> CostAggregate:
        parts_min = sum(c.price_range.min for c in components)
        parts_max = sum(c.price_range.max for c in components)
        labor_min = sum(c.labor_hours.min * labor_rate for c in components)
        labor_max = sum(c.labor_hours.max * labor_rate for c in components)

        return CostAggregate(
            parts_min=parts_min,
            parts_max=parts_max,
            labor_min=labor_min,
            labor_max=labor_max,
            total_min=parts_min + labor_min,
            total_max=parts_max + labor_max,
        )
