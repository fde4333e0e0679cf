import json
import logging
from functools import lru_cache

import groq # type: ignore
import httpx
from langchain_groq import ChatGroq # type: ignore
from langchain_core.messages import SystemMessage, HumanMessage # type: ignore
from pydantic import ValidationError # type: ignore

from autodiag.agent.prompts.analysis_prompt import analysis_prompt
from autodiag.config import GROQ_API_KEY, GROQ_MODEL
from autodiag.errors import AIQuotaExceeded, AIServiceError, AIServiceUnavailable
from autodiag.models.ai_analysis import AIAnalysisResponse
from autodiag.models.diagnostic import DiagnosticInputRequest

log = logging.getLogger(__name__)

_LLM_FAILURES = (groq.APIError, httpx.HTTPError, ConnectionError, TimeoutError)


FALLBACK_RESPONSE = {
    "analysis": {
        "primary_diagnosis": "Unable to determine",
        "confidence": 0,
        "reasoning": "The AI response could not be safely interpreted.",
    },
    "possible_causes": [],
    "recommended_actions": [
        {
            "action": "Professional inspection",
            "priority": "high",
            "description": "Have a certified mechanic inspect the vehicle.",
        }
    ],
    "risk_assessment": {
        "safety_risk": "medium",
        "driving_recommendation": "Drive with caution until the vehicle is inspected.",
        "timeframe": "As soon as possible",
    },
    "additional_insights": {},
    "disclaimer": (
        "AI analysis is informational only and is not a substitute for "
        "an inspection by a qualified mechanic."
    ),
}


@lru_cache(maxsize=1)
def get_llm() -> ChatGroq:
    if not GROQ_API_KEY:
        raise AIServiceUnavailable("GROQ_API_KEY not set")

    return ChatGroq(
        api_key=GROQ_API_KEY,
        model=GROQ_MODEL,
        temperature=0.2,
    )


def build_messages(request: DiagnosticInputRequest):
    prompt = analysis_prompt.format(
        make=request.vehicle_make or "Unknown",
        model=request.vehicle_model or "Unknown",
        year=request.vehicle_year or "Unknown",
        issue_title=request.issue_title,
        severity=request.severity,
        urgency=request.urgency,
        estimated_cost=request.estimated_cost or "Not provided",
        symptoms=request.symptoms,
    )

    return [
        SystemMessage(content=prompt),
        HumanMessage(content="Respond strictly in JSON."),
    ]


def run_ai_analysis(request: DiagnosticInputRequest, llm=None) -> AIAnalysisResponse:
    llm = llm or get_llm()

    try:
        response = llm.invoke(build_messages(request))
    except groq.RateLimitError as exc:
        log.warning("Groq quota exceeded: %s", exc)
        raise AIQuotaExceeded("AI quota exceeded. Please try again later.") from exc
    except _LLM_FAILURES as exc:
        log.error("Groq analysis call failed: %s", exc)
        raise AIServiceError("AI analysis failed") from exc

    ai_text = response.content

    # Parse AI response safely
    try:
        return AIAnalysisResponse.model_validate(json.loads(ai_text))
    except (json.JSONDecodeError, TypeError, ValidationError):
        log.warning("Unparseable AI analysis response: %.200s", ai_text)
        return AIAnalysisResponse.model_validate(FALLBACK_RESPONSE)
