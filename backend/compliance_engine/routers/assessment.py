"""
Assessment Engine: /api/v1/assessments

Scoring report, gap analysis, remediation plan and recommendations for a
posted response snapshot. Nothing is stored; every call recomputes.
"""
from __future__ import annotations

from fastapi import APIRouter, HTTPException, Query

from compliance_engine.config import settings
from compliance_engine.schemas.assessment import AssessmentRequest, out_of_domain
from compliance_engine.schemas.framework import Framework
from compliance_engine.schemas.report import (
    AssessmentReport, Gap, RecommendationsOut, RemediationPlanOut, SectionGap,
)
from compliance_engine.services.assessment_report import build_report
from compliance_engine.services.framework_registry import FrameworkNotFoundError, get_framework
from compliance_engine.services.gap_analysis import analyze_section_gaps, find_gaps
from compliance_engine.services.recommendation_engine import recommend, summarize
from compliance_engine.services.remediation import group_by_phase, phase
from compliance_engine.services.scoring import category_performance

router = APIRouter(prefix="/api/v1/assessments", tags=["Assessments"])


# ── helpers ──

def _resolve_framework(body: AssessmentRequest) -> Framework:
    if body.framework is not None:
        return body.framework
    try:
        fw = get_framework(body.assessment.framework_id)
    except FrameworkNotFoundError:
        raise HTTPException(404, f"Framework '{body.assessment.framework_id}' not found")

    bad = out_of_domain(body.assessment.responses, fw.max_answer_value)
    if bad:
        raise HTTPException(422, f"Response values outside 0..{fw.max_answer_value}: {bad}")
    return fw


# ═══════════════════════════════════════════════
# SCORING
# ═══════════════════════════════════════════════

@router.post("/report", response_model=AssessmentReport, summary="Scoring report")
async def assessment_report(
    body: AssessmentRequest,
    benchmark: int = Query(settings.GAP_BENCHMARK, ge=0, le=100),
    limit: int = Query(settings.GAP_LIMIT, ge=1),
):
    fw = _resolve_framework(body)
    return build_report(fw, body.assessment, benchmark=benchmark, gap_limit=limit)


# ═══════════════════════════════════════════════
# GAPS
# ═══════════════════════════════════════════════

@router.post("/gaps", response_model=list[Gap], summary="Category gaps below benchmark")
async def assessment_gaps(
    body: AssessmentRequest,
    benchmark: int = Query(settings.GAP_BENCHMARK, ge=0, le=100),
    limit: int = Query(settings.GAP_LIMIT, ge=1),
):
    fw = _resolve_framework(body)
    categories = category_performance(fw, body.assessment.responses)
    return find_gaps(categories, benchmark=benchmark, limit=limit)


@router.post("/section-gaps", response_model=list[SectionGap], summary="Section gaps vs target")
async def assessment_section_gaps(
    body: AssessmentRequest,
    target_score: int = Query(settings.GAP_BENCHMARK, ge=0, le=100),
):
    fw = _resolve_framework(body)
    return analyze_section_gaps(fw, body.assessment.responses, target_score=target_score)


# ═══════════════════════════════════════════════
# REMEDIATION
# ═══════════════════════════════════════════════

@router.post("/remediation", response_model=RemediationPlanOut, summary="Phased remediation plan")
async def assessment_remediation(
    body: AssessmentRequest,
    benchmark: int = Query(settings.GAP_BENCHMARK, ge=0, le=100),
):
    fw = _resolve_framework(body)
    categories = category_performance(fw, body.assessment.responses)
    items = phase(find_gaps(categories, benchmark=benchmark), benchmark=benchmark)
    return RemediationPlanOut(
        framework_id=fw.id,
        total_items=len(items),
        phases=group_by_phase(items),
    )


# ═══════════════════════════════════════════════
# RECOMMENDATIONS
# ═══════════════════════════════════════════════

@router.post(
    "/recommendations", response_model=RecommendationsOut, summary="Smart recommendations",
)
async def assessment_recommendations(
    body: AssessmentRequest,
    limit: int = Query(settings.RECOMMENDATION_LIMIT, ge=1),
):
    fw = _resolve_framework(body)
    recs = recommend(fw, body.assessment.responses, limit=limit)
    return RecommendationsOut(
        framework_id=fw.id,
        strong_posture=not recs,
        summary=summarize(recs),
        recommendations=recs,
    )
