"""
Framework Registry: /api/v1/frameworks

Read-only access to the built-in framework definitions.
"""
from fastapi import APIRouter, HTTPException

from compliance_engine.schemas.framework import Framework, FrameworkBrief
from compliance_engine.services.framework_registry import (
    FrameworkNotFoundError,
    get_framework,
    list_frameworks,
)

router = APIRouter(prefix="/api/v1/frameworks", tags=["Frameworks"])


@router.get("", response_model=list[FrameworkBrief], summary="List frameworks")
async def list_all():
    return list_frameworks()


@router.get("/{framework_id}", response_model=Framework, summary="Framework definition")
async def get_one(framework_id: str):
    try:
        return get_framework(framework_id)
    except FrameworkNotFoundError:
        raise HTTPException(404, f"Framework '{framework_id}' not found")
