"""Tests for maturity classification and band validation."""
import logging

import pytest

from compliance_engine.schemas.framework import MaturityLevel
from compliance_engine.services.maturity import (
    FrameworkConfigError,
    classify,
    validate_maturity_levels,
)


def _levels(*bands):
    return [
        MaturityLevel(level=i + 1, name=f"L{i + 1}", min_score=lo, max_score=hi)
        for i, (lo, hi) in enumerate(bands)
    ]


def test_classify_picks_matching_band():
    levels = _levels((0, 39), (40, 74), (75, 100))
    assert classify(0, levels).name == "L1"
    assert classify(40, levels).name == "L2"
    assert classify(74, levels).name == "L2"
    assert classify(75, levels).name == "L3"
    assert classify(100, levels).name == "L3"


def test_classify_first_match_wins_on_overlap():
    levels = _levels((0, 60), (50, 100))
    assert classify(55, levels).name == "L1"


def test_classify_falls_back_to_first_level_and_warns(caplog):
    levels = _levels((10, 50), (51, 90))
    with caplog.at_level(logging.WARNING, logger="compliance_engine.services.maturity"):
        level = classify(95, levels)
    assert level.name == "L1"
    assert "matches no maturity band" in caplog.text


def test_classify_without_levels_returns_none():
    assert classify(50, []) is None


def test_validate_accepts_single_full_band():
    validate_maturity_levels(_levels((0, 100)))


def test_validate_accepts_unsorted_contiguous_bands():
    validate_maturity_levels(_levels((50, 100), (0, 49)))


@pytest.mark.parametrize("bands", [
    [],
    [(5, 100)],
    [(0, 90)],
    [(0, 50), (50, 100)],
    [(0, 40), (45, 100)],
])
def test_validate_rejects_malformed_bands(bands):
    with pytest.raises(FrameworkConfigError):
        validate_maturity_levels(_levels(*bands))
