"""Request bodies and response documents of the HTTP API."""

from typing import Any, Dict, Optional

from pydantic import BaseModel, ConfigDict, Field, StrictBool, StrictStr, field_validator
from pydantic.alias_generators import to_camel

from ..domain.entities import GlossaryJob, Paragraph, ReadingProfile, SentenceLevel, VocabularyLevel
from ..domain.services import AdaptationSubmission


class SubmitRequest(BaseModel):
    """Article to adapt."""

    title: str = Field(min_length=1)
    paragraphs: list[Paragraph] = Field(min_length=1)

    @field_validator("paragraphs")
    @classmethod
    def _unique_ids(cls, paragraphs: list[Paragraph]) -> list[Paragraph]:
        ids = [p.id for p in paragraphs]
        if len(set(ids)) != len(ids):
            raise ValueError("paragraph ids must be unique")
        return paragraphs


class SummarizeRequest(BaseModel):
    paragraphs: list[Paragraph] = Field(min_length=1)


class ArticleParagraph(BaseModel):
    """Paragraph of an article sent for questions or a glossary; ids are optional."""

    id: Optional[int] = None
    text: StrictStr


class QuestionsRequest(BaseModel):
    url: str = Field(min_length=1)
    title: str = Field(min_length=1)
    paragraphs: list[ArticleParagraph] = Field(min_length=1)

    def texts(self) -> list[str]:
        return [p.text for p in self.paragraphs]


class GlossaryRequest(BaseModel):
    paragraphs: list[ArticleParagraph] = Field(min_length=1)

    def texts(self) -> list[str]:
        return [p.text for p in self.paragraphs]


class ReadingLevels(BaseModel):
    sentence: SentenceLevel
    vocabulary: VocabularyLevel


class ProfileRequest(BaseModel):
    """Profile create/update body: ``{readingProfile, knownTopics}``."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    reading_profile: ReadingLevels
    known_topics: list[str]


class RecommendationSettingsRequest(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    get_recommendations: StrictBool


def submission_document(submission: AdaptationSubmission) -> Dict[str, Any]:
    """Fast response of the submit endpoint."""
    return {
        "status": "processing",
        "jobId": submission.job_id,
        "data": {
            "title": submission.title,
            "simplified_paragraphs": [p.model_dump() for p in submission.simplified_paragraphs],
        },
    }


def profile_document(profile: ReadingProfile) -> Dict[str, Any]:
    """Profile as exposed to clients."""
    return {
        "readingProfile": {
            "sentence": profile.sentence.value,
            "vocabulary": profile.vocabulary.value,
        },
        "knownTopics": list(profile.known_topics),
        "email": profile.email,
        "displayName": profile.display_name,
        "getRecommendations": profile.get_recommendations,
        "updatedAt": profile.updated_at.isoformat() if profile.updated_at else None,
    }


def glossary_document(job: GlossaryJob) -> Dict[str, Any]:
    """Poll response of a glossary job: ``{status, data, error}``."""
    return {
        "status": job.status.value,
        "data": [e.model_dump(by_alias=True) for e in job.entries] if job.entries is not None else None,
        "error": job.error or None,
    }
