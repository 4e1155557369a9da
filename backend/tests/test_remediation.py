"""Tests for remediation phasing."""
import pytest

from compliance_engine.schemas.report import Gap
from compliance_engine.services.remediation import (
    DEFAULT_RESOURCES,
    group_by_phase,
    phase,
    resources_for,
)


def _gap(category, score, priority="medium"):
    return Gap(
        section="Sec", category=category, score=score, priority=priority,
        improvement_needed=max(0, 75 - score),
    )


def test_high_priority_gap_goes_to_phase_one():
    [item] = phase([_gap("Access Control", 40, priority="high")])

    assert item.phase == 1
    assert item.priority == "critical"
    assert item.effort == "medium"
    assert item.timeline == "1-3 months"
    assert item.title == "Improve Access Control"
    assert item.description == (
        "Address security gaps in access control to reach target maturity level"
    )
    assert item.expected_impact == "+25% improvement"
    assert item.resources == ["IT Team", "Identity Management System", "Security Team"]


def test_medium_priority_small_gap_goes_to_phase_two():
    [item] = phase([_gap("Data Security", 68)])
    assert item.phase == 2
    assert item.priority == "medium"
    assert item.effort == "medium"
    assert item.timeline == "3-6 months"
    assert item.expected_impact == "+7% improvement"


@pytest.mark.parametrize("score,expected_phase,expected_effort", [
    (70, 3, "low"),      # gap 5
    (45, 2, "medium"),   # gap 30 > 25
    (20, 1, "medium"),   # gap 55 > 50
    (10, 1, "high"),     # gap 65 > 60
])
def test_low_priority_phase_by_gap_size(score, expected_phase, expected_effort):
    [item] = phase([_gap("Analysis", score, priority="low")])
    assert item.phase == expected_phase
    assert item.effort == expected_effort
    assert item.priority == "low"


def test_impact_cap_and_custom_benchmark():
    [item] = phase([_gap("Analysis", 30, priority="low")], benchmark=90, impact_cap=40)
    assert item.expected_impact == "+40% improvement"
    assert item.phase == 1


def test_unknown_category_gets_default_resources():
    [item] = phase([_gap("Something Bespoke", 60)])
    assert item.resources == DEFAULT_RESOURCES
    assert resources_for("Something Bespoke") is not DEFAULT_RESOURCES


def test_items_ordered_by_phase_then_priority():
    gaps = [
        _gap("Analysis", 70, priority="low"),            # phase 3
        _gap("Data Security", 60, priority="medium"),    # phase 2
        _gap("Mitigation", 10, priority="low"),          # phase 1, low
        _gap("Access Control", 50, priority="high"),     # phase 1, critical
    ]
    items = phase(gaps)

    assert [(i.phase, i.priority) for i in items] == [
        (1, "critical"), (1, "low"), (2, "medium"), (3, "low"),
    ]
    # ids follow input order, not output order
    assert [i.id for i in items] == [
        "remediation-3", "remediation-2", "remediation-1", "remediation-0",
    ]


def test_every_gap_gets_exactly_one_item():
    gaps = [_gap(f"Cat {i}", i * 7, priority=p) for i, p in enumerate(["high", "medium", "low"] * 3)]
    items = phase(gaps)
    assert len(items) == len(gaps)
    assert len({i.id for i in items}) == len(gaps)
    assert all(i.phase in (1, 2, 3) for i in items)


def test_empty_gap_list():
    assert phase([]) == []


def test_group_by_phase_includes_empty_phases():
    items = phase([_gap("Access Control", 40, priority="high")])
    grouped = group_by_phase(items)

    assert [p.number for p in grouped] == [1, 2, 3]
    assert grouped[0].title == "Immediate Actions"
    assert len(grouped[0].items) == 1
    assert grouped[1].items == []
    assert grouped[2].items == []


def test_phase_is_deterministic():
    gaps = [
        _gap("Analysis", 70, priority="low"),
        _gap("Access Control", 50, priority="high"),
        _gap("Data Security", 60),
        _gap("Unknown Area", 5, priority="low"),
    ]
    first = [i.model_dump() for i in phase(gaps)]
    assert [i.model_dump() for i in phase(gaps)] == first
