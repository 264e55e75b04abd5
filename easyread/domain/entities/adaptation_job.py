"""Adaptation job entity."""

from typing import ClassVar, Optional

from pydantic import ConfigDict

from .analysis import AnalysisReport
from .job import BaseJob, JobStatus, new_job_id

__all__ = ["AdaptationJob", "JobStatus", "new_job_id"]


class AdaptationJob(BaseJob):
    """Durable record of one adaptation request's report computation.

    The report lives in ``analysis``.
    """

    model_config = ConfigDict(
        json_schema_extra={
            "example": {
                "job_id": "3f2b8c0e9d7a4c1e8b6f5a4d3c2b1a09",
                "owner_id": "user-123",
                "status": "processing",
                "title": "기사 제목",
                "original_text": "원문 문단.\n\n두 번째 문단.",
                "simplified_text": "쉬운 문단.\n\n두 번째 문단.",
            }
        }
    )

    result_field: ClassVar[str] = "analysis"

    title: str = ""
    original_text: str
    simplified_text: str
    analysis: Optional[AnalysisReport] = None
