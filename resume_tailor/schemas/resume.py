from __future__ import annotations

from typing import Any

from pydantic import AliasChoices, BaseModel, ConfigDict, Field, field_validator
from pydantic.alias_generators import to_camel


def _coerce_text(value: Any) -> str:
    if value is None:
        return ""
    if isinstance(value, str):
        return value
    if isinstance(value, (int, float)) and not isinstance(value, bool):
        return str(value)
    return ""


def _coerce_text_list(value: Any) -> list[str]:
    if value is None:
        return []
    if isinstance(value, str):
        return [line.strip() for line in value.splitlines() if line.strip()]
    if isinstance(value, (list, tuple)):
        return [text for text in (_coerce_text(item).strip() for item in value) if text]
    return []


class ResumeModel(BaseModel):
    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        extra="ignore",
    )


class PersonalInfo(ResumeModel):
    name: str = ""
    email: str = ""
    phone: str = ""
    location: str = ""
    linkedin: str = ""

    @field_validator("*", mode="before")
    @classmethod
    def _text_fields(cls, value: Any) -> str:
        return _coerce_text(value)


class ExperienceEntry(ResumeModel):
    id: str = ""
    title: str = ""
    company: str = ""
    location: str = ""
    start_date: str = ""
    end_date: str = ""
    current: bool = False
    bullets: list[str] = Field(default_factory=list)

    @field_validator("id", "title", "company", "location", "start_date", "end_date", mode="before")
    @classmethod
    def _text_fields(cls, value: Any) -> str:
        return _coerce_text(value)

    @field_validator("current", mode="before")
    @classmethod
    def _current(cls, value: Any) -> bool:
        if isinstance(value, bool):
            return value
        if isinstance(value, str):
            return value.strip().lower() in {"true", "yes", "1", "present"}
        return False

    @field_validator("bullets", mode="before")
    @classmethod
    def _bullets(cls, value: Any) -> list[str]:
        return _coerce_text_list(value)


class EducationEntry(ResumeModel):
    id: str = ""
    degree: str = ""
    institution: str = ""
    location: str = ""
    graduation_date: str = ""
    gpa: str = ""

    @field_validator("*", mode="before")
    @classmethod
    def _text_fields(cls, value: Any) -> str:
        return _coerce_text(value)


class ProjectEntry(ResumeModel):
    id: str = ""
    name: str = ""
    description: str = ""
    bullets: list[str] = Field(default_factory=list)
    link: str = ""
    start_date: str = ""
    end_date: str = ""

    @field_validator("id", "name", "description", "link", "start_date", "end_date", mode="before")
    @classmethod
    def _text_fields(cls, value: Any) -> str:
        return _coerce_text(value)

    @field_validator("bullets", mode="before")
    @classmethod
    def _bullets(cls, value: Any) -> list[str]:
        return _coerce_text_list(value)


class SkillCategory(ResumeModel):
    name: str = Field(default="", validation_alias=AliasChoices("name", "category"))
    skills: list[str] = Field(default_factory=list)

    @field_validator("name", mode="before")
    @classmethod
    def _name(cls, value: Any) -> str:
        return _coerce_text(value)

    @field_validator("skills", mode="before")
    @classmethod
    def _skills(cls, value: Any) -> list[str]:
        if isinstance(value, str):
            return [item.strip() for item in value.split(",") if item.strip()]
        return _coerce_text_list(value)


class KeywordInsight(ResumeModel):
    keyword: str = ""
    section: str = ""
    context: str = ""

    @field_validator("*", mode="before")
    @classmethod
    def _text_fields(cls, value: Any) -> str:
        return _coerce_text(value)


class ResumeDocument(ResumeModel):
    personal: PersonalInfo = Field(default_factory=PersonalInfo)
    summary: str = ""
    core_competencies: list[str] = Field(default_factory=list)
    experience: list[ExperienceEntry] = Field(default_factory=list)
    education: list[EducationEntry] = Field(default_factory=list)
    projects: list[ProjectEntry] = Field(default_factory=list)
    skills: list[str] = Field(default_factory=list)
    skill_categories: list[SkillCategory] = Field(default_factory=list)
    certifications: list[str] = Field(default_factory=list)
    keyword_insights: list[KeywordInsight] = Field(default_factory=list)

    @field_validator("summary", mode="before")
    @classmethod
    def _summary(cls, value: Any) -> str:
        return _coerce_text(value)

    @field_validator("core_competencies", "skills", "certifications", mode="before")
    @classmethod
    def _string_lists(cls, value: Any) -> list[str]:
        if isinstance(value, str):
            return [item.strip() for item in value.split(",") if item.strip()]
        return _coerce_text_list(value)

    @field_validator("experience", "education", "projects", "skill_categories", "keyword_insights", mode="before")
    @classmethod
    def _record_lists(cls, value: Any) -> list[Any]:
        if isinstance(value, list):
            return [item for item in value if isinstance(item, (dict, BaseModel))]
        return []
