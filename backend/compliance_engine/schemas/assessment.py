"""Pydantic schemas for assessment input (the response snapshot)."""
from collections.abc import Mapping
from datetime import datetime

from pydantic import BaseModel, StrictInt, model_validator

from compliance_engine.schemas.framework import Framework


def out_of_domain(responses: Mapping[str, int], ceiling: int) -> dict[str, int]:
    """Answers outside ``0..ceiling``."""
    return {qid: value for qid, value in responses.items() if value < 0 or value > ceiling}


class OrganizationInfo(BaseModel):
    name: str | None = None
    industry: str | None = None
    size: str | None = None
    assessor: str | None = None


class AssessmentData(BaseModel):
    framework_id: str | None = None
    responses: dict[str, StrictInt] = {}
    organization_info: OrganizationInfo | None = None
    last_modified: datetime | None = None
    is_complete: bool = False


class AssessmentRequest(BaseModel):
    """Request body for engine endpoints.

    An inline ``framework`` takes precedence over the registry lookup by
    ``assessment.framework_id``. Answers are checked against an inline
    framework's answer domain here; registry frameworks are checked by the
    router once the id is resolved.
    """
    assessment: AssessmentData
    framework: Framework | None = None

    @model_validator(mode="after")
    def _check_answer_domain(self):
        if self.framework is None:
            return self
        ceiling = self.framework.max_answer_value
        bad = out_of_domain(self.assessment.responses, ceiling)
        if bad:
            raise ValueError(f"Response values outside 0..{ceiling}: {bad}")
        return self
