"""
Smart Recommendation Engine: rule-based, one candidate per weak answer.

A question qualifies when it has a response below the threshold (default 2,
i.e. "not implemented" or "partially implemented" on the 0-3 scale).
Candidates are ranked by priority (critical=4 ... low=1) then impact, both
descending, and truncated to the top N (default 10). Ties keep framework
order.
"""
from __future__ import annotations

import logging
from collections.abc import Mapping
from decimal import Decimal

from compliance_engine.config import settings
from compliance_engine.schemas.framework import Category, Framework, Question, Section
from compliance_engine.schemas.report import RecommendationSummary, SmartRecommendation
from compliance_engine.services.recommendation_rules import RecommendationRules, rules_for
from compliance_engine.services.remediation import PRIORITY_RANK
from compliance_engine.services.scoring import round_half_up

logger = logging.getLogger(__name__)


def _build(
    rules: RecommendationRules,
    framework: Framework,
    section: Section,
    category: Category,
    question: Question,
    response: int,
) -> SmartRecommendation:
    content = rules.template(framework, section, category, question, response)
    return SmartRecommendation(
        **content,
        id=f"{section.id}-{category.id}-{question.id}",
        category=category.name,
        impact=rules.impact_for(response),
        risk_reduction=rules.risk_reduction_for(response),
        compliance_impact=rules.compliance_impact(framework),
    )


def recommend(
    framework: Framework,
    responses: Mapping[str, int],
    limit: int | None = None,
    threshold: int | None = None,
) -> list[SmartRecommendation]:
    """Ranked recommendations for every answered question below ``threshold``."""
    limit = settings.RECOMMENDATION_LIMIT if limit is None else limit
    threshold = settings.RECOMMENDATION_THRESHOLD if threshold is None else threshold
    rules = rules_for(framework.id)

    candidates = [
        _build(rules, framework, section, category, question, responses[question.id])
        for section in framework.sections
        for category in section.categories
        for question in category.questions
        if question.id in responses and responses[question.id] < threshold
    ]

    ranked = sorted(candidates, key=lambda r: (-PRIORITY_RANK[r.priority], -r.impact))
    logger.debug(
        "Recommendations for framework=%s: %d candidates, returning %d",
        framework.id, len(candidates), min(len(ranked), limit),
    )
    return ranked[:limit]


def summarize(recommendations: list[SmartRecommendation]) -> RecommendationSummary:
    if not recommendations:
        return RecommendationSummary()
    total_risk = sum(r.risk_reduction for r in recommendations)
    return RecommendationSummary(
        total_impact=sum(r.impact for r in recommendations),
        critical_count=sum(1 for r in recommendations if r.priority == "critical"),
        average_risk_reduction=round_half_up(Decimal(total_risk) / len(recommendations)),
    )
