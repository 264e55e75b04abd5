"""Domain entities for the text adaptation service."""

from .job import BaseJob, JobStatus, new_job_id
from .adaptation_job import AdaptationJob
from .analysis import (
    AnalysisMetrics,
    AnalysisReport,
    Improvements,
    QuantitativeAnalysis,
    ReportSummary,
)
from .glossary import GENERAL_TAG, GlossaryEntry, GlossaryJob, TermCandidate, TermDefinition
from .guideline_set import GuidelineSet
from .paragraph import Paragraph
from .question import PreReadingQuestion, PreReadingQuestionSet, QuestionType
from .reading_profile import ReadingProfile, SentenceLevel, VocabularyLevel
from .user import AuthenticatedUser

__all__ = [
    # Job entities
    "AdaptationJob",
    "BaseJob",
    "GlossaryJob",
    "JobStatus",
    "new_job_id",
    # Analysis entities
    "AnalysisMetrics",
    "AnalysisReport",
    "Improvements",
    "QuantitativeAnalysis",
    "ReportSummary",
    # Glossary entities
    "GENERAL_TAG",
    "GlossaryEntry",
    "TermCandidate",
    "TermDefinition",
    # Pre-reading questions
    "PreReadingQuestion",
    "PreReadingQuestionSet",
    "QuestionType",
    # Guideline entities
    "GuidelineSet",
    # Text entities
    "Paragraph",
    # Profile entities
    "ReadingProfile",
    "SentenceLevel",
    "VocabularyLevel",
    # Identity
    "AuthenticatedUser",
]
