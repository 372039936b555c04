from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


class ExtractedKeywords(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    required_skills: list[str] = Field(default_factory=list)
    extracted_keywords: list[str] = Field(default_factory=list)


class JobPosting(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, frozen=True)

    title: str = ""
    company_name: str = ""
    text: str = ""
    required_skills: list[str] = Field(default_factory=list)
    extracted_keywords: list[str] = Field(default_factory=list)
