"""Domain interfaces for the text adaptation service."""

from .image_search import ImageSearch
from .job_repository import JobRepository
from .reading_aid_oracle import ReadingAidOracle
from .reading_profile_provider import ReadingProfileProvider
from .rewrite_oracle import RewriteOracle
from .token_verifier import TokenVerifier

__all__ = [
    "ImageSearch",
    "JobRepository",
    "ReadingAidOracle",
    "ReadingProfileProvider",
    "RewriteOracle",
    "TokenVerifier",
]
