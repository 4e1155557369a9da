"""Pydantic schemas for derived engine output.

Everything here is built fresh on every engine call and never stored.
"""
from pydantic import BaseModel

from compliance_engine.schemas.framework import Level, MaturityLevel, Priority


# ═══════════════════ Scores ═══════════════════

class SectionAnalysis(BaseModel):
    section_id: str
    section: str
    score: int = 0
    questions_answered: int = 0
    total_questions: int = 0
    completion_rate: int = 0


class CategoryPerformance(BaseModel):
    section: str
    category: str
    score: int = 0
    questions_answered: int = 0
    total_questions: int = 0
    priority: Priority = "medium"


class Gap(CategoryPerformance):
    """Category scoring below the benchmark."""
    improvement_needed: int = 0


class AssessmentReport(BaseModel):
    framework_id: str
    framework_name: str
    overall_score: int = 0
    maturity_level: MaturityLevel | None = None
    total_questions: int = 0
    answered_questions: int = 0
    completion_rate: int = 0
    benchmark: int = 75
    section_analysis: list[SectionAnalysis] = []
    category_performance: list[CategoryPerformance] = []
    gaps: list[Gap] = []


# ═══════════════════ Section gap analysis ═══════════════════

class SectionGap(BaseModel):
    section_id: str
    section: str
    current_score: int
    target_score: int
    gap: int
    priority: Priority
    estimated_effort: Level
    timeframe: str
    recommendations: list[str] = []
    business_impact: str
    required_actions: list[str] = []


# ═══════════════════ Remediation ═══════════════════

class RemediationItem(BaseModel):
    id: str
    title: str
    description: str
    priority: Priority
    effort: Level
    timeline: str
    phase: int
    expected_impact: str
    resources: list[str] = []


class RemediationPhase(BaseModel):
    number: int
    title: str
    description: str
    timeframe: str
    items: list[RemediationItem] = []


class RemediationPlanOut(BaseModel):
    framework_id: str
    total_items: int = 0
    phases: list[RemediationPhase] = []


# ═══════════════════ Recommendations ═══════════════════

class RecommendationResource(BaseModel):
    type: str
    name: str
    description: str
    url: str | None = None
    cost: str | None = None


class SmartRecommendation(BaseModel):
    id: str
    title: str
    description: str
    priority: Priority
    effort: Level
    timeframe: str
    cost: Level
    impact: int
    risk_reduction: int
    category: str
    steps: list[str] = []
    resources: list[RecommendationResource] = []
    compliance_impact: list[str] = []
    business_value: str
    success_metrics: list[str] = []


class RecommendationSummary(BaseModel):
    total_impact: int = 0
    critical_count: int = 0
    average_risk_reduction: int = 0


class RecommendationsOut(BaseModel):
    framework_id: str
    strong_posture: bool = False
    summary: RecommendationSummary
    recommendations: list[SmartRecommendation] = []
