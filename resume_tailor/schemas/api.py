from __future__ import annotations

from typing import Any

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

from .resume import ResumeDocument
from .score import ScoreResult


class ApiModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class KeywordsRequest(ApiModel):
    job_text: str = Field(default="", max_length=50000)
    title: str | None = Field(default=None, max_length=200)
    company_name: str | None = Field(default=None, max_length=200)


class ScoreRequest(ApiModel):
    job_text: str = Field(default="", max_length=50000)
    resume: ResumeDocument = Field(default_factory=ResumeDocument)


class ScoreResponse(ApiModel):
    available: bool
    result: ScoreResult | None = None


class ReconcileRequest(ApiModel):
    job_text: str = Field(default="", max_length=50000)
    base_resume: ResumeDocument = Field(default_factory=ResumeDocument)
    draft: Any = None


class ErrorResponse(ApiModel):
    code: str
    message: str
