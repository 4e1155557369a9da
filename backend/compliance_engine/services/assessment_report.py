"""
Assessment Report Service.

Builds the full scoring report for one (framework, responses) snapshot:
  - Overall score over every framework question (stale response ids ignored)
  - Maturity level for the overall score
  - Completion % over the whole framework
  - Section analysis, category performance and the capped gap list
"""
from __future__ import annotations

import logging

from compliance_engine.config import settings
from compliance_engine.schemas.assessment import AssessmentData
from compliance_engine.schemas.framework import Framework
from compliance_engine.schemas.report import AssessmentReport
from compliance_engine.services.gap_analysis import find_gaps
from compliance_engine.services.maturity import classify
from compliance_engine.services.scoring import (
    analyze_sections,
    category_performance,
    completion_rate,
    overall_score,
)

logger = logging.getLogger(__name__)


def build_report(
    framework: Framework,
    assessment: AssessmentData,
    benchmark: int | None = None,
    gap_limit: int | None = None,
) -> AssessmentReport:
    benchmark = settings.GAP_BENCHMARK if benchmark is None else benchmark
    responses = assessment.responses
    questions = framework.questions
    known_ids = {q.id for q in questions}
    answered = sum(1 for qid in responses if qid in known_ids)

    overall = overall_score(framework, responses)
    categories = category_performance(framework, responses)

    logger.debug(
        "Report for framework=%s: %d/%d answered, overall=%d",
        framework.id, answered, len(questions), overall,
    )

    return AssessmentReport(
        framework_id=framework.id,
        framework_name=framework.name,
        overall_score=overall,
        maturity_level=classify(overall, framework.maturity_levels),
        total_questions=len(questions),
        answered_questions=answered,
        completion_rate=completion_rate(questions, responses),
        benchmark=benchmark,
        section_analysis=analyze_sections(framework, responses),
        category_performance=categories,
        gaps=find_gaps(categories, benchmark=benchmark, limit=gap_limit),
    )
