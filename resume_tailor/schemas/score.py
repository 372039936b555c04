from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

from .resume import ResumeDocument


class ScoreBreakdown(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    match_ratio: float = 0.0
    required_match_ratio: float = 0.0
    keyword_score: float = 0.0
    content_score: float = 0.0
    structure_bonus: float = 0.0
    skill_category_bonus: float = 0.0


class ScoreResult(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    score: int = Field(default=0, ge=0, le=100)
    matched_keywords: list[str] = Field(default_factory=list)
    missing_keywords: list[str] = Field(default_factory=list)
    breakdown: ScoreBreakdown = Field(default_factory=ScoreBreakdown)
    suggestions: list[str] = Field(default_factory=list)

    def display_matched(self, limit: int = 6) -> list[str]:
        return self.matched_keywords[:limit]

    def display_missing(self, limit: int = 5) -> list[str]:
        return self.missing_keywords[:limit]


class KeywordAnalysis(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    all_keywords: list[str] = Field(default_factory=list)
    matched_keywords: list[str] = Field(default_factory=list)
    missing_keywords: list[str] = Field(default_factory=list)
    suggested_competencies: list[str] = Field(default_factory=list)


class TailoringResult(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    resume: ResumeDocument
    keyword_analysis: KeywordAnalysis
    before: ScoreResult
    after: ScoreResult
    highlighted_resume: ResumeDocument | None = None
