"""Data models for the resume analyzer."""

from resume_ats.models.analysis import (
    AnalysisResult,
    Check,
    CheckStatus,
    Impact,
    ImprovementAction,
    ResultStatus,
)
from resume_ats.models.document import (
    CertificationEntry,
    EducationEntry,
    ExperienceEntry,
    Profile,
    ProjectEntry,
    ResumeDocument,
    SkillGroup,
)

__all__ = [
    "AnalysisResult",
    "CertificationEntry",
    "Check",
    "CheckStatus",
    "EducationEntry",
    "ExperienceEntry",
    "Impact",
    "ImprovementAction",
    "Profile",
    "ProjectEntry",
    "ResultStatus",
    "ResumeDocument",
    "SkillGroup",
]
