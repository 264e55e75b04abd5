"""Glossary jobs: accept an article now, build its glossary in the background."""

import asyncio
import logging
import re
from datetime import datetime, timezone
from typing import Optional, Sequence

from ..entities.glossary import GENERAL_TAG, GlossaryEntry, GlossaryJob, TermCandidate, TermDefinition
from ..entities.job import JobStatus
from ..errors import (
    ForbiddenError,
    JobAlreadyFinalizedError,
    JobNotFoundError,
    OracleMalformedResponseError,
    ProfileNotFoundError,
    RequestValidationFailed,
)
from ..interfaces.image_search import ImageSearch
from ..interfaces.job_repository import JobRepository
from ..interfaces.reading_aid_oracle import ReadingAidOracle
from ..interfaces.reading_profile_provider import ReadingProfileProvider
from .paragraphs import join_texts

logger = logging.getLogger(__name__)

# Used when the reader has not picked any topic
DEFAULT_TOPICS = ("정치", "경제", "사회", "생활/문화", "IT", "과학")
MAX_TERMS = 15

_CONTEXT_SENTENCE = re.compile(r"[^.!?]+[.!?]+")


def available_tags(known_topics: Sequence[str]) -> list[str]:
    """Topics plus the general tag, without duplicates, in order."""
    return list(dict.fromkeys([*known_topics, GENERAL_TAG]))


def context_sentences(text: str) -> list[str]:
    """Split text into punctuation-terminated sentences.

    Text without terminal punctuation is a single sentence.
    """
    return _CONTEXT_SENTENCE.findall(text) or [text]


def find_context(sentences: Sequence[str], term: str) -> str:
    return next((s for s in sentences if term in s), "")


class GlossaryService:
    """
    Builds per-article glossaries.

    ``submit`` only records a ``processing`` job. ``finalize_glossary``
    extracts terms, defines each one in its sentence and stores the entries.
    Like the report path it never raises and finishes a job only once.
    """

    def __init__(
        self,
        profile_provider: ReadingProfileProvider,
        oracle: ReadingAidOracle,
        job_repository: JobRepository,
        image_search: Optional[ImageSearch] = None,
    ):
        self.profile_provider = profile_provider
        self.oracle = oracle
        self.job_repository = job_repository
        self.image_search = image_search

    async def submit(self, owner_id: str, texts: Sequence[str]) -> str:
        """Open a glossary job for the article made of ``texts``.

        Raises:
            RequestValidationFailed: If the article has no text.
        """
        text = join_texts(texts)
        if not text.strip():
            raise RequestValidationFailed("분석할 텍스트가 비어 있습니다.")

        job_id = await self.job_repository.create_job(GlossaryJob(owner_id=owner_id, text=text))
        logger.info(f"Created glossary job {job_id} for user {owner_id}")
        return job_id

    async def get_glossary(self, job_id: str, caller_id: str) -> GlossaryJob:
        """Return a glossary job owned by ``caller_id``.

        Raises:
            JobNotFoundError: If the job does not exist.
            ForbiddenError: If the caller does not own the job.
        """
        job = await self.job_repository.get_job(job_id)
        if job.owner_id != caller_id:
            logger.warning(f"User {caller_id} denied access to glossary job {job_id}")
            raise ForbiddenError("접근 권한이 없습니다.")
        return job

    async def finalize_glossary(self, job_id: str) -> None:
        try:
            job = await self.job_repository.get_job(job_id)
        except JobNotFoundError:
            logger.error(f"[Job ID: {job_id}] cannot build glossary, job not found")
            return
        except Exception as e:
            logger.error(f"[Job ID: {job_id}] cannot load job: {e}", exc_info=True)
            return

        if job.status.is_terminal:
            logger.debug(f"[Job ID: {job_id}] already {job.status.value}, skipping")
            return

        try:
            entries = await self._build_entries(job)
            await self.job_repository.update_job(job_id, {
                "status": JobStatus.COMPLETED,
                "entries": entries,
                "updated_at": datetime.now(timezone.utc),
            })
            logger.info(f"[Job ID: {job_id}] glossary completed with {len(entries)} entries")
        except JobAlreadyFinalizedError:
            logger.info(f"[Job ID: {job_id}] finalized by another worker, result kept")
        except Exception as e:
            logger.error(f"[Job ID: {job_id}] glossary build failed: {e}", exc_info=True)
            await self._mark_failed(job_id, str(e))

    async def resume_pending(self) -> int:
        """Finalize every glossary job still in ``processing``."""
        pending = await self.job_repository.list_jobs(JobStatus.PROCESSING)
        for job in pending:
            await self.finalize_glossary(job.job_id)
        if pending:
            logger.info(f"Resumed {len(pending)} pending glossary job(s)")
        return len(pending)

    async def _build_entries(self, job: GlossaryJob) -> list[GlossaryEntry]:
        topics = self._known_topics(job)
        try:
            candidates = await self.oracle.extract_terms(job.text, topics, available_tags(topics))
        except OracleMalformedResponseError as e:
            logger.warning(f"[Job ID: {job.job_id}] unreadable term extraction, no terms: {e.details}")
            candidates = []

        if not candidates:
            return []

        sentences = context_sentences(job.text)
        entries = await asyncio.gather(*(
            self._describe(candidate, sentences, topics)
            for candidate in candidates[:MAX_TERMS]
        ))
        return list(entries)

    def _known_topics(self, job: GlossaryJob) -> list[str]:
        try:
            topics = list(self.profile_provider.get_profile(job.owner_id).known_topics)
        except ProfileNotFoundError:
            topics = []
        if not topics:
            logger.warning(f"[Job ID: {job.job_id}] user {job.owner_id} has no known topics, using all topics")
            topics = list(DEFAULT_TOPICS)
        return topics

    async def _describe(
        self,
        candidate: TermCandidate,
        sentences: Sequence[str],
        topics: Sequence[str],
    ) -> GlossaryEntry:
        word = candidate.word
        try:
            definition = await self.oracle.define_term(word, find_context(sentences, word), topics)
        except OracleMalformedResponseError:
            logger.warning(f"Failed to parse definition for '{word}'")
            definition = TermDefinition(
                short_definition=f"{word}에 대한 정의를 찾을 수 없습니다.",
                long_definition=f"{word}에 대한 상세 정의를 찾을 수 없습니다.",
            )

        image_url = await self.image_search.find_image(word) if self.image_search else ""
        return GlossaryEntry(
            term=word,
            tag=candidate.tag or GENERAL_TAG,
            short_definition=definition.short_definition,
            long_definition=definition.long_definition,
            image_url=image_url,
        )

    async def _mark_failed(self, job_id: str, message: str) -> None:
        try:
            await self.job_repository.update_job(job_id, {
                "status": JobStatus.FAILED,
                "error": message,
                "updated_at": datetime.now(timezone.utc),
            })
        except JobAlreadyFinalizedError:
            logger.info(f"[Job ID: {job_id}] finalized by another worker, failure not recorded")
        except Exception as e:
            logger.error(f"[Job ID: {job_id}] could not record failure: {e}", exc_info=True)
