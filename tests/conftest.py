"""Shared fixtures for easyread tests."""

import pytest

from easyread.domain.entities import GlossaryJob, Paragraph, ReadingProfile, SentenceLevel, VocabularyLevel
from easyread.domain.services import AdaptationService, GlossaryService, ReportService
from easyread.infrastructure.echo_rewrite_oracle import EchoRewriteOracle
from easyread.infrastructure.local_job_repository import LocalJobRepository
from easyread.infrastructure.local_reading_profile_provider import LocalReadingProfileProvider

OWNER_ID = "user-owner"


@pytest.fixture
def paragraphs():
    """A short two-paragraph article."""
    return [
        Paragraph(id=1, text="이것은 긴 문장입니다. 짧다."),
        Paragraph(id=2, text="그리고 두 번째 문단은 조금 더 복잡한 구조를 가지고 있습니다!"),
    ]


@pytest.fixture
def active_profile():
    """Profile with both guideline dimensions enabled."""
    return ReadingProfile(
        sentence=SentenceLevel.SPLIT,
        vocabulary=VocabularyLevel.EXPLAIN,
        known_topics=["IT"],
    )


@pytest.fixture
def profile_provider(active_profile):
    """Profile provider that knows OWNER_ID."""
    return LocalReadingProfileProvider({OWNER_ID: active_profile})


@pytest.fixture
def job_repository():
    """Create a fresh LocalJobRepository for each test."""
    return LocalJobRepository()


@pytest.fixture
def glossary_repository():
    return LocalJobRepository(GlossaryJob)


@pytest.fixture
def rewrite_oracle():
    return EchoRewriteOracle()


@pytest.fixture
def adaptation_service(profile_provider, rewrite_oracle, job_repository):
    return AdaptationService(
        profile_provider=profile_provider,
        rewrite_oracle=rewrite_oracle,
        job_repository=job_repository,
    )


@pytest.fixture
def report_service(job_repository):
    return ReportService(job_repository=job_repository)


@pytest.fixture
def glossary_service(profile_provider, rewrite_oracle, glossary_repository):
    return GlossaryService(
        profile_provider=profile_provider,
        oracle=rewrite_oracle,
        job_repository=glossary_repository,
    )
