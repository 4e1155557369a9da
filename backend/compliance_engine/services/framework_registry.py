"""
Framework Registry: loads built-in framework definitions from YAML.

Every ``*.yaml`` / ``*.yml`` file in ``settings.FRAMEWORKS_DIR`` holds one
framework. Definitions are validated once at load time (schema, unique
question ids, maturity bands tiling 0-100) and then served read-only.
"""
from __future__ import annotations

import logging
from functools import lru_cache
from pathlib import Path

import yaml
from pydantic import ValidationError

from compliance_engine.config import settings
from compliance_engine.schemas.framework import Framework, FrameworkBrief
from compliance_engine.services.maturity import FrameworkConfigError, validate_maturity_levels

log = logging.getLogger(__name__)

# Legacy ids still used by saved assessments
FRAMEWORK_ALIASES = {
    "cmmc-level1": "cmmc-2.0-level1",
}


class FrameworkNotFoundError(LookupError):
    pass


def parse_framework(data: dict, source: str = "<memory>") -> Framework:
    """Validate raw framework data; raise FrameworkConfigError on any defect."""
    try:
        fw = Framework.model_validate(data)
    except ValidationError as exc:
        raise FrameworkConfigError(f"Invalid framework definition in {source}: {exc}") from exc

    seen: set[str] = set()
    for q in fw.questions:
        if q.id in seen:
            raise FrameworkConfigError(f"Duplicate question id '{q.id}' in {source}")
        seen.add(q.id)

    validate_maturity_levels(fw.maturity_levels)
    return fw


def load_frameworks(directory: str | Path) -> dict[str, Framework]:
    directory = Path(directory)
    frameworks: dict[str, Framework] = {}
    if not directory.is_dir():
        log.warning("Frameworks directory %s does not exist", directory)
        return frameworks

    for path in sorted([*directory.glob("*.yaml"), *directory.glob("*.yml")]):
        with path.open(encoding="utf-8") as fh:
            data = yaml.safe_load(fh)
        if not isinstance(data, dict):
            raise FrameworkConfigError(f"{path.name}: expected a mapping at top level")
        fw = parse_framework(data, source=path.name)
        if fw.id in frameworks:
            raise FrameworkConfigError(f"Framework id '{fw.id}' defined twice ({path.name})")
        frameworks[fw.id] = fw
        log.info(
            "Loaded framework %s (%d sections, %d questions) from %s",
            fw.id, len(fw.sections), len(fw.questions), path.name,
        )
    return frameworks


@lru_cache
def get_registry() -> dict[str, Framework]:
    return load_frameworks(settings.FRAMEWORKS_DIR)


def list_frameworks() -> list[FrameworkBrief]:
    return [
        FrameworkBrief(
            id=fw.id,
            name=fw.name,
            version=fw.version,
            total_sections=len(fw.sections),
            total_questions=len(fw.questions),
        )
        for fw in get_registry().values()
    ]


def get_framework(framework_id: str | None = None) -> Framework:
    """Look up a framework by id (aliases resolved); ``None`` means the default framework."""
    fid = framework_id or settings.DEFAULT_FRAMEWORK_ID
    fid = FRAMEWORK_ALIASES.get(fid, fid)
    fw = get_registry().get(fid)
    if fw is None:
        raise FrameworkNotFoundError(f"Framework '{framework_id}' not found")
    return fw
