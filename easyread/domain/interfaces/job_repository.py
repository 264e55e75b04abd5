"""Job Repository interface."""

from typing import Any, Mapping, Protocol, runtime_checkable

from ..entities.job import BaseJob, JobStatus


@runtime_checkable
class JobRepository(Protocol):
    """Protocol defining the interface for background job storage.

    One repository stores one kind of job (adaptation jobs, glossary jobs).
    Implementations (in-memory, DynamoDB, ...) must apply ``update_job``
    atomically per job: a concurrent reader sees the job either before or
    after the update, never in between. A job that reached a terminal state
    is never written again, even by concurrent writers.
    """

    async def create_job(self, job: BaseJob) -> str:
        """Store a new job.

        Args:
            job: The job entity to store. Its ``job_id`` must be unused.

        Returns:
            str: The job id.

        Raises:
            ValueError: If a job with the same id already exists.
        """
        ...

    async def get_job(self, job_id: str) -> BaseJob:
        """Retrieve a job by ID.

        Args:
            job_id: The unique identifier of the job.

        Returns:
            BaseJob: The job entity.

        Raises:
            JobNotFoundError: If the job is not found.
        """
        ...

    async def update_job(self, job_id: str, fields: Mapping[str, Any]) -> BaseJob:
        """Apply only the given fields to a stored ``processing`` job.

        Args:
            job_id: The unique identifier of the job.
            fields: Field names of the job model mapped to new values.

        Returns:
            BaseJob: The job after the update.

        Raises:
            JobNotFoundError: If the job is not found.
            JobAlreadyFinalizedError: If the job is already terminal.
        """
        ...

    async def list_jobs(self, status: JobStatus) -> list[BaseJob]:
        """List all jobs currently in ``status``."""
        ...
