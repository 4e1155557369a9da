"""Maturity level classification and band validation."""
from __future__ import annotations

import logging

from compliance_engine.schemas.framework import MaturityLevel

logger = logging.getLogger(__name__)


class FrameworkConfigError(ValueError):
    """Framework definition is malformed (e.g. maturity bands do not tile 0-100)."""


def classify(score: int, levels: list[MaturityLevel]) -> MaturityLevel | None:
    """Return the first level whose band contains ``score``.

    Falls back to ``levels[0]`` when no band matches so that a report can
    always be rendered.
    """
    if not levels:
        logger.warning("No maturity levels defined; cannot classify score %s", score)
        return None

    for level in levels:
        if level.min_score <= score <= level.max_score:
            return level

    logger.warning(
        "Score %s matches no maturity band (%s); falling back to level %s",
        score,
        ", ".join(f"{lv.min_score}-{lv.max_score}" for lv in levels),
        levels[0].level,
    )
    return levels[0]


def validate_maturity_levels(levels: list[MaturityLevel]) -> None:
    """Raise FrameworkConfigError unless bands are contiguous and cover [0, 100]."""
    if not levels:
        raise FrameworkConfigError("Framework defines no maturity levels")

    bands = sorted(levels, key=lambda lv: lv.min_score)
    if bands[0].min_score != 0:
        raise FrameworkConfigError(f"Maturity bands start at {bands[0].min_score}, expected 0")
    if bands[-1].max_score != 100:
        raise FrameworkConfigError(f"Maturity bands end at {bands[-1].max_score}, expected 100")

    for band in bands:
        if band.min_score > band.max_score:
            raise FrameworkConfigError(
                f"Maturity level '{band.name}' has min_score > max_score "
                f"({band.min_score} > {band.max_score})"
            )

    for prev, nxt in zip(bands, bands[1:]):
        if nxt.min_score <= prev.max_score:
            raise FrameworkConfigError(
                f"Maturity levels '{prev.name}' and '{nxt.name}' overlap"
            )
        if nxt.min_score != prev.max_score + 1:
            raise FrameworkConfigError(
                f"Gap between maturity levels '{prev.name}' and '{nxt.name}'"
            )
