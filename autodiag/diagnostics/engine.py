"""
Enhanced diagnostic engine.

Turns a free-text symptom description into ranked candidate components
with likelihood scores, inferred conditions and repair cost estimates.

Flow:
    description -> symptom phrases + keywords
                -> ComponentMatcher (symptoms, make, free-text fallback)
                -> top 5 candidates, scored and costed
                -> steps, preventive measures, urgency, safety risk

Everything here is a pure function of the request and the catalog, apart
from the result's id and timestamp.
"""

import logging
import re
from datetime import datetime, timezone
from typing import List, Optional, Sequence, Tuple

from autodiag.diagnostics import vocabulary
from autodiag.diagnostics.matcher import ComponentMatcher, phrases_overlap
from autodiag.models.catalog import WARNING_ORDER, ComponentRecord
from autodiag.models.diagnostic import (
    CostAggregate,
    DiagnosticInputRequest,
    EnhancedDiagnostic,
    MatchedComponent,
    PartsSource,
)
from autodiag.models.money import round_half_up

log = logging.getLogger(__name__)

LABOR_RATE = 120
MAX_CANDIDATES = 5

SYMPTOM_WEIGHT = 60
KEYWORD_WEIGHT = 40

_NON_WORD_RE = re.compile(r"[^\w\s]")


# --------------------------------------------------
# Extraction
# --------------------------------------------------

def extract_symptoms(description: str) -> List[str]:
    text = description.lower()
    return [s for s in vocabulary.COMMON_SYMPTOMS if s in text]


def extract_keywords(description: str) -> List[str]:
    words = _NON_WORD_RE.sub(" ", description.lower()).split()

    keywords = [
        w for w in words
        if len(w) > vocabulary.MIN_KEYWORD_LENGTH and w not in vocabulary.STOP_WORDS
    ]

    # dedupe while preserving order
    return list(dict.fromkeys(keywords))


# --------------------------------------------------
# Scoring
# --------------------------------------------------

def calculate_likelihood(
    component: ComponentRecord,
    symptoms: Sequence[str],
    keywords: Sequence[str],
) -> float:
    score = 0.0

    if component.symptoms:
        symptom_matches = [
            s for s in component.symptoms
            if any(phrases_overlap(user, s.lower()) for user in symptoms)
        ]
        score += len(symptom_matches) / len(component.symptoms) * SYMPTOM_WEIGHT

    text = component.searchable_text()
    keyword_matches = [k for k in keywords if k in text]
    score += len(keyword_matches) / max(len(keywords), 1) * KEYWORD_WEIGHT

    return max(0.0, min(score, 100.0))


def determine_condition(severity: str, likelihood: float) -> str:
    # First matching rule wins
    if severity == "critical" or likelihood > 80:
        return "critical"
    if severity == "high" or likelihood > 60:
        return "poor"
    if severity == "medium" or likelihood > 40:
        return "fair"
    return "good"


def parts_cost_for_condition(component: ComponentRecord, condition: str) -> float:
    prices = component.price_range

    if condition == "critical":
        return prices.oem
    if condition == "poor":
        return round_half_up((prices.oem + prices.aftermarket) / 2)
    if condition == "fair":
        return prices.aftermarket
    return prices.min


# --------------------------------------------------
# Roll-ups
# --------------------------------------------------

def generate_diagnostic_steps(components: Sequence[ComponentRecord]) -> List[str]:
    steps = list(vocabulary.INITIAL_STEPS)

    for component in components:
        template = vocabulary.CATEGORY_STEP_TEMPLATES.get(
            component.category, vocabulary.DEFAULT_STEP_TEMPLATE
        )
        steps.append(template.format(name=component.name))

    steps.append(vocabulary.CLOSING_STEP)
    return steps


def generate_preventive_measures(components: Sequence[ComponentRecord]) -> List[str]:
    measures = []

    for component in components:
        measures.extend(vocabulary.CATEGORY_PREVENTIVE_MEASURES.get(component.category, []))

    measures.extend(vocabulary.GENERAL_PREVENTIVE_MEASURES)
    return list(dict.fromkeys(measures))


def determine_urgency(severity: str, components: Sequence[ComponentRecord]) -> str:
    if severity == "critical" or any(c.warning_level == "critical" for c in components):
        return "immediate"
    if severity == "high":
        return "soon"
    if severity == "medium":
        return "moderate"
    return "low"


def determine_safety_risk(components: Sequence[ComponentRecord]) -> str:
    worst = max((c.warning_rank for c in components), default=WARNING_ORDER["low"])
    return next(level for level, rank in WARNING_ORDER.items() if rank == worst)


def estimate_repair_time(components: Sequence[ComponentRecord]) -> str:
    total_hours = sum(c.labor_hours.max for c in components)

    for limit, label in vocabulary.REPAIR_TIME_BUCKETS:
        if total_hours <= limit:
            return label
    return vocabulary.LONG_REPAIR_TIME


# --------------------------------------------------
# Engine
# --------------------------------------------------

class DiagnosticEngine:
    def __init__(self, matcher: Optional[ComponentMatcher] = None):
        self.matcher = matcher or ComponentMatcher()

    def find_candidates(
        self,
        request: DiagnosticInputRequest,
        symptoms: Sequence[str],
        keywords: Sequence[str],
    ) -> Tuple[List[ComponentRecord], bool]:
        """
        Returns (candidates in priority order, make_filter_relaxed).
        """
        candidates = self.matcher.match_by_symptoms([*symptoms, *keywords])
        relaxed = False

        if request.vehicle_make and candidates:
            make_ids = {c.id for c in self.matcher.match_by_make(request.vehicle_make)}
            for_make = [c for c in candidates if c.id in make_ids]

            if for_make:
                candidates = for_make
            else:
                # Broader matches beat no matches
                relaxed = True
                log.info(
                    "Make filter %r removed all %d candidates; using make-agnostic matches",
                    request.vehicle_make,
                    len(candidates),
                )

        if not candidates:
            candidates = self.matcher.search_free_text(request.symptoms)

        return candidates[:MAX_CANDIDATES], relaxed

    def score(
        self,
        request: DiagnosticInputRequest,
        candidates: Sequence[ComponentRecord],
        symptoms: Sequence[str],
        keywords: Sequence[str],
    ) -> List[MatchedComponent]:
        scored = []

        for priority, component in enumerate(candidates, start=1):
            likelihood = calculate_likelihood(component, symptoms, keywords)
            condition = determine_condition(request.severity, likelihood)

            parts = parts_cost_for_condition(component, condition)
            labor = component.labor_hours.min * LABOR_RATE

            scored.append(
                MatchedComponent(
                    component=component,
                    likelihood=likelihood,
                    condition=condition,
                    priority=priority,
                    replacement_cost=parts,
                    labor_cost=labor,
                    total_cost=parts + labor,
                )
            )

        return scored

    def generate_diagnostic(self, request: DiagnosticInputRequest) -> EnhancedDiagnostic:
        symptoms = extract_symptoms(request.symptoms)
        keywords = extract_keywords(request.symptoms)

        candidates, relaxed = self.find_candidates(request, symptoms, keywords)
        affected = self.score(request, candidates, symptoms, keywords)

        total: CostAggregate = ComponentMatcher.aggregate_cost(candidates, LABOR_RATE)
        now = datetime.now(timezone.utc)

        log.debug(
            "Diagnostic for %r: %d symptoms, %d keywords, %d candidates",
            request.issue_title,
            len(symptoms),
            len(keywords),
            len(candidates),
        )

        return EnhancedDiagnostic(
            id=f"enhanced-{int(now.timestamp() * 1000)}",
            issue=request.issue_title,
            severity=request.severity,
            description=request.symptoms,
            affected_components=affected,
            total_repair_cost=total,
            diagnostic_steps=generate_diagnostic_steps(candidates),
            preventive_measures=generate_preventive_measures(candidates),
            urgency_level=determine_urgency(request.severity, candidates),
            safety_risk=determine_safety_risk(candidates),
            estimated_repair_time=estimate_repair_time(candidates),
            recommended_shops=list(vocabulary.RECOMMENDED_SHOPS),
            parts_sources=[PartsSource(**source) for source in vocabulary.PARTS_SOURCES],
            make_filter_relaxed=relaxed,
            timestamp=now,
        )


def generate_diagnostic(
    request: DiagnosticInputRequest,
    matcher: Optional[ComponentMatcher] = None,
) -> EnhancedDiagnostic:
    return DiagnosticEngine(matcher).generate_diagnostic(request)
