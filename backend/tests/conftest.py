"""
Shared test fixtures: framework builders + FastAPI AsyncClient.

Environment is set before anything from the package is imported so that
Settings picks up test values.
"""
import os
from collections.abc import AsyncGenerator

import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient

# ── 1. Environment ──
os.environ["DEBUG"] = "false"
os.environ["LOG_LEVEL"] = "WARNING"

# ── 2. Now import the app ──
from compliance_engine.main import app as fastapi_app  # noqa: E402
from compliance_engine.schemas.framework import Framework  # noqa: E402
from compliance_engine.services.framework_registry import get_framework  # noqa: E402


# ── Framework builders ──

def make_framework(
    fw_id: str = "test-fw",
    sections: list[dict] | None = None,
    levels: list[dict] | None = None,
    name: str = "Test Framework",
) -> Framework:
    """Build a framework from compact section specs.

    Each section: {"id", "name", "priority", "categories": [{"id", "name", "questions": [ids]}]}
    """
    if levels is None:
        levels = [
            {"level": 1, "name": "Initial", "min_score": 0, "max_score": 39},
            {"level": 2, "name": "Developing", "min_score": 40, "max_score": 74},
            {"level": 3, "name": "Managed", "min_score": 75, "max_score": 100},
        ]
    data = {
        "id": fw_id,
        "name": name,
        "version": "1.0",
        "maturity_levels": levels,
        "sections": [
            {
                "id": s["id"],
                "name": s.get("name", s["id"].title()),
                "priority": s.get("priority", "medium"),
                "categories": [
                    {
                        "id": c["id"],
                        "name": c.get("name", c["id"].title()),
                        "questions": [{"id": qid, "text": f"Question {qid}"} for qid in c["questions"]],
                    }
                    for c in s["categories"]
                ],
            }
            for s in (sections or [])
        ],
    }
    return Framework.model_validate(data)


@pytest.fixture
def small_framework() -> Framework:
    """1 section, 1 category, 2 questions."""
    return make_framework(sections=[{
        "id": "sec", "name": "Section", "priority": "high",
        "categories": [{"id": "cat", "name": "Category", "questions": ["q1", "q2"]}],
    }])


@pytest.fixture
def multi_framework() -> Framework:
    """2 sections, 3 categories, 6 questions, mixed priorities."""
    return make_framework(sections=[
        {
            "id": "protect", "name": "Protect", "priority": "high",
            "categories": [
                {"id": "access-control", "name": "Access Control", "questions": ["p1", "p2"]},
                {"id": "data-security", "name": "Data Security", "questions": ["p3", "p4"]},
            ],
        },
        {
            "id": "detect", "name": "Detect", "priority": "low",
            "categories": [
                {"id": "anomalies", "name": "Anomalies and Events", "questions": ["d1", "d2"]},
            ],
        },
    ])


@pytest.fixture
def cmmc_framework() -> Framework:
    return get_framework("cmmc-2.0-level1")


# ── HTTP client ──

@pytest_asyncio.fixture
async def client() -> AsyncGenerator[AsyncClient, None]:
    transport = ASGITransport(app=fastapi_app)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac
