"""Adaptation controller for handling business logic and coordination."""

import logging
from datetime import datetime, timezone
from typing import Optional, Sequence

from ..domain.entities import AuthenticatedUser, GlossaryJob, Paragraph, PreReadingQuestionSet, ReadingProfile
from ..domain.errors import UnauthorizedError
from ..domain.interfaces.image_search import ImageSearch
from ..domain.interfaces.job_repository import JobRepository
from ..domain.interfaces.reading_aid_oracle import ReadingAidOracle
from ..domain.interfaces.reading_profile_provider import ReadingProfileProvider
from ..domain.interfaces.rewrite_oracle import RewriteOracle
from ..domain.interfaces.token_verifier import TokenVerifier
from ..domain.services import (
    AdaptationService,
    AdaptationSubmission,
    GlossaryService,
    PreReadingService,
    ReportService,
    ReportStatus,
)
from .schemas import ProfileRequest

logger = logging.getLogger(__name__)

BEARER_PREFIX = "Bearer "


class AdaptationController:
    """
    Controller for coordinating text adaptation operations.

    This controller is injected with all necessary providers and handles
    the business logic for each endpoint, keeping the API layer thin.
    """

    def __init__(
        self,
        profile_provider: ReadingProfileProvider,
        rewrite_oracle: RewriteOracle,
        job_repository: JobRepository,
        token_verifier: TokenVerifier,
        glossary_repository: JobRepository,
        reading_aid_oracle: Optional[ReadingAidOracle] = None,
        image_search: Optional[ImageSearch] = None,
    ):
        """
        Initialize the controller with injected dependencies.

        Args:
            profile_provider: Provider for reading profiles
            rewrite_oracle: External rewriting capability
            job_repository: Repository for adaptation jobs
            token_verifier: Verifier for bearer tokens
            glossary_repository: Repository for glossary jobs
            reading_aid_oracle: Question and glossary capability; defaults to
                the rewrite oracle
            image_search: Optional image lookup for glossary entries
        """
        self.profile_provider = profile_provider
        self.rewrite_oracle = rewrite_oracle
        self.job_repository = job_repository
        self.token_verifier = token_verifier
        self.glossary_repository = glossary_repository
        self.reading_aid_oracle = reading_aid_oracle or rewrite_oracle
        self.image_search = image_search

        self.adaptation_service = AdaptationService(
            profile_provider=profile_provider,
            rewrite_oracle=rewrite_oracle,
            job_repository=job_repository,
        )
        self.report_service = ReportService(job_repository=job_repository)
        self.glossary_service = GlossaryService(
            profile_provider=profile_provider,
            oracle=self.reading_aid_oracle,
            job_repository=glossary_repository,
            image_search=image_search,
        )
        self.pre_reading_service = PreReadingService(oracle=self.reading_aid_oracle)

        logger.info("AdaptationController initialized with providers")

    def authenticate(self, authorization: Optional[str]) -> AuthenticatedUser:
        """
        Resolve the caller from an ``Authorization`` header value.

        Raises:
            UnauthorizedError: If the header is missing, not a Bearer token,
                or the token does not verify.
        """
        if not authorization or not authorization.startswith(BEARER_PREFIX):
            raise UnauthorizedError("인증 토큰이 없습니다. (No token)")

        token = authorization[len(BEARER_PREFIX):].strip()
        if not token:
            raise UnauthorizedError("인증 토큰이 없습니다. (No token)")
        return self.token_verifier.verify(token)

    async def submit_adaptation(
        self,
        user: AuthenticatedUser,
        title: str,
        paragraphs: Sequence[Paragraph],
    ) -> AdaptationSubmission:
        return await self.adaptation_service.submit(user.uid, title, paragraphs)

    async def finalize_report(self, job_id: str) -> None:
        await self.adaptation_service.finalize_report(job_id)

    async def get_report(self, user: AuthenticatedUser, job_id: str) -> ReportStatus:
        return await self.report_service.get_report(job_id, user.uid)

    async def summarize(self, paragraphs: Sequence[Paragraph]) -> str:
        return await self.adaptation_service.summarize(paragraphs)

    async def generate_questions(self, texts: Sequence[str]) -> PreReadingQuestionSet:
        return await self.pre_reading_service.generate_questions(texts)

    async def submit_glossary(self, user: AuthenticatedUser, texts: Sequence[str]) -> str:
        return await self.glossary_service.submit(user.uid, texts)

    async def finalize_glossary(self, job_id: str) -> None:
        await self.glossary_service.finalize_glossary(job_id)

    async def get_glossary(self, user: AuthenticatedUser, job_id: str) -> GlossaryJob:
        return await self.glossary_service.get_glossary(job_id, user.uid)

    async def resume_pending_reports(self) -> int:
        """Finish reports and glossaries left in ``processing``; returns how many."""
        resumed = await self.adaptation_service.resume_pending_reports()
        resumed += await self.glossary_service.resume_pending()
        return resumed

    def get_profile(self, user: AuthenticatedUser) -> ReadingProfile:
        return self.profile_provider.get_profile(user.uid)

    def save_profile(self, user: AuthenticatedUser, request: ProfileRequest) -> ReadingProfile:
        """
        Create or replace the caller's reading profile.

        Returns:
            The stored profile.
        """
        profile = ReadingProfile(
            sentence=request.reading_profile.sentence,
            vocabulary=request.reading_profile.vocabulary,
            known_topics=request.known_topics,
            email=user.email,
            display_name=user.name,
            get_recommendations=True,
            updated_at=datetime.now(timezone.utc),
        )
        self.profile_provider.save_profile(user.uid, profile)
        logger.info(f"Saved reading profile for user {user.uid}")
        return profile

    def update_recommendation_settings(
        self,
        user: AuthenticatedUser,
        get_recommendations: bool,
    ) -> ReadingProfile:
        """
        Toggle recommendations on an existing profile.

        Raises:
            ProfileNotFoundError: If the caller has no profile.
        """
        profile = self.profile_provider.get_profile(user.uid)
        updated = profile.model_copy(update={
            "get_recommendations": get_recommendations,
            "updated_at": datetime.now(timezone.utc),
        })
        self.profile_provider.save_profile(user.uid, updated)
        return updated

    def get_health_status(self) -> dict:
        """
        Get application health status.

        Returns:
            Dict containing health status information
        """
        return {
            "status": "healthy",
            "providers": {
                "profile_provider": type(self.profile_provider).__name__,
                "rewrite_oracle": type(self.rewrite_oracle).__name__,
                "job_repository": type(self.job_repository).__name__,
                "token_verifier": type(self.token_verifier).__name__,
                "glossary_repository": type(self.glossary_repository).__name__,
                "image_search": type(self.image_search).__name__ if self.image_search else None,
            },
        }
