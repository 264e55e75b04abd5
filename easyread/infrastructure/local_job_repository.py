"""Local in-memory implementation of Job Repository."""

from typing import Any, Dict, Mapping, Type

from ..domain.entities.adaptation_job import AdaptationJob
from ..domain.entities.job import BaseJob, JobStatus
from ..domain.errors import JobAlreadyFinalizedError, JobNotFoundError
from ..domain.interfaces.job_repository import JobRepository


class LocalJobRepository(JobRepository):
    """Local in-memory implementation of the Job Repository.

    Stores jobs in a dictionary for testing and development purposes. Updates
    build a new validated job and swap it in with a single assignment, so
    readers never observe a half-applied update. Nothing awaits between the
    status check and the swap, so the check cannot race within one event loop.
    """

    def __init__(self, job_model: Type[BaseJob] = AdaptationJob):
        """Initialize the local job repository with an empty dictionary.

        Args:
            job_model: The job class this repository stores.
        """
        self.job_model = job_model
        self._jobs: Dict[str, BaseJob] = {}

    async def create_job(self, job: BaseJob) -> str:
        """Store a new job in the in-memory dictionary.

        Args:
            job: The job entity to store.

        Returns:
            str: The job id.

        Raises:
            ValueError: If the job id is already taken.
        """
        if job.job_id in self._jobs:
            raise ValueError(f"Job with id {job.job_id} already exists")

        self._jobs[job.job_id] = job.model_copy(deep=True)
        return job.job_id

    async def get_job(self, job_id: str) -> BaseJob:
        """Retrieve a job by ID from the in-memory dictionary.

        Args:
            job_id: The unique identifier of the job.

        Returns:
            BaseJob: A copy of the stored job.

        Raises:
            JobNotFoundError: If the job is not found.
        """
        if job_id not in self._jobs:
            raise JobNotFoundError(f"Job with id {job_id} not found")

        return self._jobs[job_id].model_copy(deep=True)

    async def update_job(self, job_id: str, fields: Mapping[str, Any]) -> BaseJob:
        """Apply the given fields to a stored processing job.

        Args:
            job_id: The unique identifier of the job.
            fields: Field names mapped to new values.

        Returns:
            BaseJob: The job after the update.

        Raises:
            JobNotFoundError: If the job is not found.
            JobAlreadyFinalizedError: If the job is already terminal.
            ValueError: If a field is unknown or the result is inconsistent.
        """
        if job_id not in self._jobs:
            raise JobNotFoundError(f"Job with id {job_id} not found")

        unknown = [name for name in fields if name not in self.job_model.model_fields or name == "job_id"]
        if unknown:
            raise ValueError(f"Cannot update job fields: {unknown}")

        current = self._jobs[job_id]
        if current.status.is_terminal:
            raise JobAlreadyFinalizedError(f"Job with id {job_id} is already {current.status.value}")

        merged = current.model_dump()
        merged.update(fields)
        updated = self.job_model.model_validate(merged)

        self._jobs[job_id] = updated
        return updated.model_copy(deep=True)

    async def list_jobs(self, status: JobStatus) -> list[BaseJob]:
        """List jobs in the given status.

        Args:
            status: The status to filter on.

        Returns:
            list[BaseJob]: Copies of the matching jobs.
        """
        return [
            job.model_copy(deep=True)
            for job in self._jobs.values()
            if job.status is status
        ]

    def clear(self) -> None:
        """Clear all jobs from the dictionary."""
        self._jobs.clear()

    def get_all_jobs(self) -> Dict[str, BaseJob]:
        """Get all jobs.

        Returns:
            Dict[str, BaseJob]: Dictionary of all jobs.
        """
        return self._jobs.copy()
