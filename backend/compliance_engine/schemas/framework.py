"""Pydantic schemas for compliance framework definitions."""
from typing import Literal

from pydantic import BaseModel, Field

Priority = Literal["critical", "high", "medium", "low"]
Level = Literal["low", "medium", "high"]

DEFAULT_MAX_ANSWER_VALUE = 3


# ═══════════════════ Questions ═══════════════════

class QuestionOption(BaseModel):
    value: int
    label: str
    description: str | None = None
    risk_level: Priority | None = None


class EvidenceRequirement(BaseModel):
    type: Literal["document", "screenshot", "policy", "procedure"] = "document"
    description: str
    required: bool = False


class Question(BaseModel):
    id: str
    text: str
    guidance: str | None = None
    priority: Priority = "medium"
    references: list[str] = []
    options: list[QuestionOption] = []
    evidence_requirements: list[EvidenceRequirement] = []


# ═══════════════════ Hierarchy ═══════════════════

class Category(BaseModel):
    id: str
    name: str
    description: str | None = None
    weight: float = 100
    questions: list[Question] = []


class Section(BaseModel):
    id: str
    name: str
    description: str | None = None
    weight: float = 0
    priority: Priority = "medium"
    categories: list[Category] = []

    @property
    def questions(self) -> list[Question]:
        return [q for c in self.categories for q in c.questions]


class MaturityLevel(BaseModel):
    level: int
    name: str
    min_score: int = Field(..., ge=0, le=100)
    max_score: int = Field(..., ge=0, le=100)
    description: str | None = None
    color: str | None = Field(None, max_length=7)


# ═══════════════════ Framework ═══════════════════

class Framework(BaseModel):
    id: str
    name: str
    version: str | None = None
    description: str | None = None
    max_answer_value: int = Field(DEFAULT_MAX_ANSWER_VALUE, ge=1)
    applicable_regulations: list[str] = []
    maturity_levels: list[MaturityLevel] = []
    sections: list[Section] = []

    @property
    def questions(self) -> list[Question]:
        return [q for s in self.sections for q in s.questions]


class FrameworkBrief(BaseModel):
    id: str
    name: str
    version: str | None = None
    total_sections: int = 0
    total_questions: int = 0
