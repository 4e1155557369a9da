"""
Assessment Scoring Service.

Calculates:
  - Score (0-100): mean of answered values scaled by 100 / max_answer_value,
    counting only questions that have a response
  - Completion %: answered / total questions in the subtree
  - Section analysis and category performance
  - Overall framework score

The same ``score`` function is used for every granularity; only the question
slice changes. Response ids that do not belong to the slice are ignored.
"""
from __future__ import annotations

from collections.abc import Iterable, Mapping
from decimal import ROUND_HALF_UP, Decimal

from compliance_engine.schemas.framework import DEFAULT_MAX_ANSWER_VALUE, Framework, Question
from compliance_engine.schemas.report import CategoryPerformance, SectionAnalysis


def round_half_up(value: Decimal | int) -> int:
    return int(Decimal(value).quantize(Decimal(1), rounding=ROUND_HALF_UP))


def _clamp(v: int) -> int:
    return max(0, min(100, v))


def _answered(questions: Iterable[Question], responses: Mapping[str, int]) -> list[int]:
    return [responses[q.id] for q in questions if q.id in responses]


def score(
    questions: Iterable[Question],
    responses: Mapping[str, int],
    max_answer_value: int = DEFAULT_MAX_ANSWER_VALUE,
) -> int:
    """Percentage score of the answered questions; 0 when nothing is answered."""
    values = _answered(questions, responses)
    if not values or max_answer_value <= 0:
        return 0
    pct = Decimal(sum(values)) * 100 / (Decimal(len(values)) * max_answer_value)
    return _clamp(round_half_up(pct))


def completion_rate(questions: Iterable[Question], responses: Mapping[str, int]) -> int:
    """Answered share of *all* questions in the subtree."""
    questions = list(questions)
    if not questions:
        return 0
    answered = len(_answered(questions, responses))
    return round_half_up(Decimal(answered) * 100 / len(questions))


def analyze_sections(framework: Framework, responses: Mapping[str, int]) -> list[SectionAnalysis]:
    out = []
    for section in framework.sections:
        questions = section.questions
        out.append(SectionAnalysis(
            section_id=section.id,
            section=section.name,
            score=score(questions, responses, framework.max_answer_value),
            questions_answered=len(_answered(questions, responses)),
            total_questions=len(questions),
            completion_rate=completion_rate(questions, responses),
        ))
    return out


def category_performance(
    framework: Framework, responses: Mapping[str, int],
) -> list[CategoryPerformance]:
    """Per-category scores; priority is inherited from the owning section."""
    return [
        CategoryPerformance(
            section=section.name,
            category=category.name,
            score=score(category.questions, responses, framework.max_answer_value),
            questions_answered=len(_answered(category.questions, responses)),
            total_questions=len(category.questions),
            priority=section.priority,
        )
        for section in framework.sections
        for category in section.categories
    ]


def overall_score(framework: Framework, responses: Mapping[str, int]) -> int:
    return score(framework.questions, responses, framework.max_answer_value)
