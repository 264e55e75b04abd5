"""Adaptation orchestration: rewrite now, report later."""

import logging
from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Sequence

from ..entities.adaptation_job import AdaptationJob, JobStatus
from ..entities.paragraph import Paragraph
from ..errors import AnalysisInternalError, JobAlreadyFinalizedError, JobNotFoundError
from ..interfaces.job_repository import JobRepository
from ..interfaces.reading_profile_provider import ReadingProfileProvider
from ..interfaces.rewrite_oracle import RewriteOracle
from .guidelines import build_guidelines
from .paragraphs import ensure_aligned, join_paragraphs
from .report_builder import build_report

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class AdaptationSubmission:
    """Fast-path result handed back to the caller."""

    job_id: str
    title: str
    simplified_paragraphs: list[Paragraph]


class AdaptationService:
    """
    Coordinates one adaptation request.

    The synchronous part (``submit``) validates the profile, calls the
    rewrite oracle and persists a ``processing`` job before returning. The
    report is produced afterwards by ``finalize_report``, which always moves
    the job to a terminal state and never raises.

    Failures before the job exists propagate to the caller and leave nothing
    behind. Failures after it exists are recorded on the job.
    """

    def __init__(
        self,
        profile_provider: ReadingProfileProvider,
        rewrite_oracle: RewriteOracle,
        job_repository: JobRepository,
    ):
        self.profile_provider = profile_provider
        self.rewrite_oracle = rewrite_oracle
        self.job_repository = job_repository

    async def submit(
        self,
        owner_id: str,
        title: str,
        paragraphs: Sequence[Paragraph],
    ) -> AdaptationSubmission:
        """Rewrite the paragraphs for the owner's profile and open a job.

        Raises:
            ProfileNotFoundError: The owner has no profile.
            GuidelineRejectedError: The profile requests no adaptation.
            OracleUnavailableError: The oracle failed upstream.
            OracleMalformedResponseError: The oracle output was invalid.
        """
        profile = self.profile_provider.get_profile(owner_id)
        guidelines = build_guidelines(profile)

        rewritten = await self.rewrite_oracle.rewrite(paragraphs, guidelines)
        simplified = ensure_aligned(paragraphs, rewritten)

        job = AdaptationJob(
            owner_id=owner_id,
            title=title,
            original_text=join_paragraphs(paragraphs),
            simplified_text=join_paragraphs(simplified),
        )
        job_id = await self.job_repository.create_job(job)
        logger.info(f"Created adaptation job {job_id} for user {owner_id}")

        return AdaptationSubmission(
            job_id=job_id,
            title=title,
            simplified_paragraphs=simplified,
        )

    async def finalize_report(self, job_id: str) -> None:
        """Compute the report for a job and store the terminal state.

        Meant to run detached from the request that created the job. A job
        that is already terminal is left untouched.
        """
        try:
            job = await self.job_repository.get_job(job_id)
        except JobNotFoundError:
            logger.error(f"[Job ID: {job_id}] cannot finalize report, job not found")
            return
        except Exception as e:
            logger.error(f"[Job ID: {job_id}] cannot load job: {e}", exc_info=True)
            return

        if job.status.is_terminal:
            logger.debug(f"[Job ID: {job_id}] already {job.status.value}, skipping")
            return

        try:
            try:
                report = build_report(job.original_text, job.simplified_text)
            except Exception as e:
                raise AnalysisInternalError(f"Report generation failed: {e}") from e

            await self.job_repository.update_job(job_id, {
                "status": JobStatus.COMPLETED,
                "analysis": report,
                "updated_at": datetime.now(timezone.utc),
            })
            logger.info(f"[Job ID: {job_id}] report completed")
        except JobAlreadyFinalizedError:
            logger.info(f"[Job ID: {job_id}] finalized by another worker, result kept")
        except Exception as e:
            logger.error(f"[Job ID: {job_id}] report generation failed: {e}", exc_info=True)
            await self._mark_failed(job_id, str(e))

    async def resume_pending_reports(self) -> int:
        """Finalize every job still in ``processing``.

        Returns:
            int: Number of jobs that were picked up.
        """
        pending = await self.job_repository.list_jobs(JobStatus.PROCESSING)
        for job in pending:
            await self.finalize_report(job.job_id)
        if pending:
            logger.info(f"Resumed {len(pending)} pending report(s)")
        return len(pending)

    async def summarize(self, paragraphs: Sequence[Paragraph]) -> str:
        """Summarize paragraphs through the oracle."""
        summary = await self.rewrite_oracle.summarize(paragraphs)
        return summary.strip()

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
            logger.error(
                f"[Job ID: {job_id}] could not record failure: {e}", exc_info=True
            )
