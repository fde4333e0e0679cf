# autodiag/models/ai_analysis.py

from pydantic import BaseModel, Field # type: ignore
from typing import List, Literal, Optional


class PrimaryAnalysis(BaseModel):
    primary_diagnosis: str
    confidence: float
    reasoning: str


class AICause(BaseModel):
    cause: str
    probability: float
    description: str


class AIAction(BaseModel):
    action: str
    priority: Literal["immediate", "high", "medium", "low"]
    description: str
    estimated_cost: Optional[str] = None


class RiskAssessment(BaseModel):
    safety_risk: Literal["low", "medium", "high", "critical"]
    driving_recommendation: str
    timeframe: str


class AdditionalInsights(BaseModel):
    preventive_measures: List[str] = Field(default_factory=list)
    related_issues: List[str] = Field(default_factory=list)
    maintenance_recommendations: List[str] = Field(default_factory=list)


class AIAnalysisResponse(BaseModel):
    analysis: PrimaryAnalysis
    possible_causes: List[AICause]
    recommended_actions: List[AIAction]
    risk_assessment: RiskAssessment
    additional_insights: AdditionalInsights
    disclaimer: str
