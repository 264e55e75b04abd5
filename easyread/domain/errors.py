"""Typed errors raised across the adaptation pipeline.

Every error carries an ``ErrorKind``. The HTTP layer maps kinds to status
codes in one place; nothing inspects error messages to decide a status.
"""

from enum import Enum
from typing import Optional


class ErrorKind(str, Enum):
    """Closed set of failure categories."""

    UNAUTHORIZED = "unauthorized"
    VALIDATION = "validation"
    REJECTED = "rejected"
    PROFILE_NOT_FOUND = "profile_not_found"
    ORACLE_UNAVAILABLE = "oracle_unavailable"
    ORACLE_MALFORMED_RESPONSE = "oracle_malformed_response"
    ANALYSIS_INTERNAL = "analysis_internal"
    FORBIDDEN = "forbidden"
    JOB_NOT_FOUND = "job_not_found"
    JOB_ALREADY_FINALIZED = "job_already_finalized"
    PROFILE_INVALID = "profile_invalid"


class AdaptationError(Exception):
    """Base class for all pipeline errors."""

    kind: ErrorKind = ErrorKind.ANALYSIS_INTERNAL

    def __init__(self, message: str, details: Optional[str] = None):
        super().__init__(message)
        self.message = message
        self.details = details


class UnauthorizedError(AdaptationError):
    """Missing or invalid credential."""

    kind = ErrorKind.UNAUTHORIZED


class RequestValidationFailed(AdaptationError):
    """Malformed request shape."""

    kind = ErrorKind.VALIDATION


class GuidelineRejectedError(AdaptationError):
    """The reading profile asks for no adaptation at all."""

    kind = ErrorKind.REJECTED


class ProfileNotFoundError(AdaptationError):
    """The caller has not set up a reading profile yet."""

    kind = ErrorKind.PROFILE_NOT_FOUND


class OracleUnavailableError(AdaptationError):
    """The rewrite oracle failed upstream (network, quota, server error)."""

    kind = ErrorKind.ORACLE_UNAVAILABLE


class OracleMalformedResponseError(AdaptationError):
    """The rewrite oracle answered with structurally invalid output."""

    kind = ErrorKind.ORACLE_MALFORMED_RESPONSE


class AnalysisInternalError(AdaptationError):
    """Defect while computing a report in the background."""

    kind = ErrorKind.ANALYSIS_INTERNAL


class ForbiddenError(AdaptationError):
    """The caller does not own the requested job."""

    kind = ErrorKind.FORBIDDEN


class JobNotFoundError(AdaptationError):
    """No job exists with the requested id."""

    kind = ErrorKind.JOB_NOT_FOUND


class JobAlreadyFinalizedError(AdaptationError):
    """The job already reached a terminal state and cannot change again."""

    kind = ErrorKind.JOB_ALREADY_FINALIZED


class ProfileInvalidError(AdaptationError):
    """A stored reading profile holds values outside the known levels."""

    kind = ErrorKind.PROFILE_INVALID
