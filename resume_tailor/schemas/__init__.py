from .api import ErrorResponse, KeywordsRequest, ReconcileRequest, ScoreRequest, ScoreResponse
from .job import ExtractedKeywords, JobPosting
from .resume import (
    EducationEntry,
    ExperienceEntry,
    KeywordInsight,
    PersonalInfo,
    ProjectEntry,
    ResumeDocument,
    SkillCategory,
)
from .score import KeywordAnalysis, ScoreBreakdown, ScoreResult, TailoringResult

__all__ = [
    "ExtractedKeywords",
    "JobPosting",
    "PersonalInfo",
    "ExperienceEntry",
    "EducationEntry",
    "ProjectEntry",
    "SkillCategory",
    "KeywordInsight",
    "ResumeDocument",
    "ScoreBreakdown",
    "ScoreResult",
    "KeywordAnalysis",
    "TailoringResult",
    "KeywordsRequest",
    "ScoreRequest",
    "ScoreResponse",
    "ReconcileRequest",
    "ErrorResponse",
]
