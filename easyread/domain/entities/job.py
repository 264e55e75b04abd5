"""State shared by every background job."""

import uuid
from datetime import datetime, timezone
from enum import Enum
from typing import Any, ClassVar, Optional

from pydantic import BaseModel, Field, model_validator


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


def new_job_id() -> str:
    """Generate a fresh opaque job identifier."""
    return uuid.uuid4().hex


class JobStatus(str, Enum):
    """Externally visible job states."""

    PROCESSING = "processing"
    COMPLETED = "completed"
    FAILED = "failed"

    @property
    def is_terminal(self) -> bool:
        return self is not JobStatus.PROCESSING


class BaseJob(BaseModel):
    """A job created as ``processing`` and finished once in the background.

    Subclasses name the field holding their result in ``result_field``. A
    ``processing`` job carries neither result nor ``error``; a ``completed``
    job carries only the result; a ``failed`` job carries only ``error``.
    """

    result_field: ClassVar[str]

    job_id: str = Field(default_factory=new_job_id)
    owner_id: str
    status: JobStatus = JobStatus.PROCESSING
    error: Optional[str] = None
    created_at: datetime = Field(default_factory=_utcnow)
    updated_at: datetime = Field(default_factory=_utcnow)

    @property
    def result(self) -> Any:
        return getattr(self, self.result_field)

    @model_validator(mode="after")
    def _check_terminal_fields(self) -> "BaseJob":
        name = self.result_field
        if self.status is JobStatus.PROCESSING:
            if self.result is not None or self.error is not None:
                raise ValueError(f"processing job cannot carry {name} or error")
        elif self.status is JobStatus.COMPLETED:
            if self.result is None or self.error is not None:
                raise ValueError(f"completed job must carry {name} and no error")
        elif self.error is None or self.result is not None:
            raise ValueError(f"failed job must carry error and no {name}")
        return self
