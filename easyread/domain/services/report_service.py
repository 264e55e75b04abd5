"""Read path over stored adaptation jobs."""

import logging
from typing import Optional

from pydantic import BaseModel

from ..entities.adaptation_job import JobStatus
from ..entities.analysis import AnalysisReport
from ..errors import ForbiddenError
from ..interfaces.job_repository import JobRepository

logger = logging.getLogger(__name__)


class ReportStatus(BaseModel):
    """What a caller polling for a report gets back."""

    job_id: str
    status: JobStatus
    analysis: Optional[AnalysisReport] = None
    error: Optional[str] = None


class ReportService:
    """Answers report polls, enforcing job ownership."""

    def __init__(self, job_repository: JobRepository):
        self.job_repository = job_repository

    async def get_report(self, job_id: str, caller_id: str) -> ReportStatus:
        """Return the status of a job owned by ``caller_id``.

        Raises:
            JobNotFoundError: If the job does not exist.
            ForbiddenError: If the caller does not own the job.
        """
        job = await self.job_repository.get_job(job_id)
        if job.owner_id != caller_id:
            logger.warning(f"User {caller_id} denied access to job {job_id}")
            raise ForbiddenError("이 작업에 접근할 권한이 없습니다.")

        if job.status is JobStatus.COMPLETED:
            return ReportStatus(job_id=job_id, status=job.status, analysis=job.analysis)
        if job.status is JobStatus.FAILED:
            return ReportStatus(job_id=job_id, status=job.status, error=job.error)
        return ReportStatus(job_id=job_id, status=job.status)
