"""FastAPI application entry point."""

import logging
from contextlib import asynccontextmanager
from typing import Optional

from fastapi import BackgroundTasks, Depends, FastAPI, Header, Query, Request, status
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse, Response
from starlette.datastructures import Headers

from .config import Settings, settings
from .controller import AdaptationController
from .schemas import (
    GlossaryRequest,
    ProfileRequest,
    QuestionsRequest,
    RecommendationSettingsRequest,
    SubmitRequest,
    SummarizeRequest,
    glossary_document,
    profile_document,
    submission_document,
)
from ..domain.entities import AuthenticatedUser, GlossaryJob, JobStatus, ReadingProfile, SentenceLevel, VocabularyLevel
from ..domain.errors import AdaptationError, ErrorKind, ProfileNotFoundError
from ..infrastructure.dynamodb_job_repository import DynamoDBJobRepository
from ..infrastructure.dynamodb_reading_profile_provider import DynamoDBReadingProfileProvider
from ..infrastructure.echo_rewrite_oracle import EchoRewriteOracle
from ..infrastructure.google_image_search import GoogleImageSearch
from ..infrastructure.jwt_token_verifier import JWTTokenVerifier
from ..infrastructure.local_job_repository import LocalJobRepository
from ..infrastructure.local_reading_profile_provider import LocalReadingProfileProvider
from ..infrastructure.openai_rewrite_oracle import OpenAIOracleConfig, OpenAIRewriteOracle
from ..infrastructure.static_token_verifier import StaticTokenVerifier

# Configure logging
logging.basicConfig(
    level=settings.log_level,
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s"
)
logger = logging.getLogger(__name__)

STATUS_BY_KIND = {
    ErrorKind.UNAUTHORIZED: status.HTTP_401_UNAUTHORIZED,
    ErrorKind.VALIDATION: status.HTTP_400_BAD_REQUEST,
    ErrorKind.REJECTED: status.HTTP_400_BAD_REQUEST,
    ErrorKind.PROFILE_NOT_FOUND: status.HTTP_404_NOT_FOUND,
    ErrorKind.ORACLE_UNAVAILABLE: status.HTTP_500_INTERNAL_SERVER_ERROR,
    ErrorKind.ORACLE_MALFORMED_RESPONSE: status.HTTP_500_INTERNAL_SERVER_ERROR,
    ErrorKind.ANALYSIS_INTERNAL: status.HTTP_500_INTERNAL_SERVER_ERROR,
    ErrorKind.FORBIDDEN: status.HTTP_403_FORBIDDEN,
    ErrorKind.JOB_NOT_FOUND: status.HTTP_404_NOT_FOUND,
    ErrorKind.JOB_ALREADY_FINALIZED: status.HTTP_409_CONFLICT,
    ErrorKind.PROFILE_INVALID: status.HTTP_500_INTERNAL_SERVER_ERROR,
}


class PreflightCORSMiddleware(CORSMiddleware):
    """CORS middleware that answers accepted preflights with an empty 204."""

    def preflight_response(self, request_headers: Headers) -> Response:
        response = super().preflight_response(request_headers)
        if response.status_code != status.HTTP_200_OK:
            return response
        headers = {
            key: value
            for key, value in response.headers.items()
            if key not in ("content-length", "content-type")
        }
        return Response(status_code=status.HTTP_204_NO_CONTENT, headers=headers)


def build_controller(config: Settings) -> AdaptationController:
    """Wire adapters according to the configuration."""
    if config.storage_backend == "dynamodb":
        profile_provider = DynamoDBReadingProfileProvider(
            table_name=config.profiles_table_name, region_name=config.aws_region
        )
        job_repository = DynamoDBJobRepository(
            table_name=config.jobs_table_name, region_name=config.aws_region
        )
        glossary_repository = DynamoDBJobRepository(
            table_name=config.glossary_table_name, region_name=config.aws_region, job_model=GlossaryJob
        )
    elif config.storage_backend == "local":
        profile_provider = LocalReadingProfileProvider()
        job_repository = LocalJobRepository()
        glossary_repository = LocalJobRepository(GlossaryJob)
        # Pre-populate development users so the API is usable out of the box
        for uid in config.dev_tokens.values():
            profile_provider.save_profile(uid, ReadingProfile(
                sentence=SentenceLevel.SPLIT,
                vocabulary=VocabularyLevel.SUBSTITUTE,
            ))
    else:
        raise ValueError(f"Unknown storage backend: {config.storage_backend}")

    if config.rewrite_oracle_type == "openai":
        rewrite_oracle = OpenAIRewriteOracle(OpenAIOracleConfig(
            api_key=config.openai_api_key,
            model=config.openai_model,
            temperature=config.openai_temperature,
            timeout_seconds=config.openai_timeout_seconds,
            max_retries=config.openai_max_retries,
            questions_model=config.openai_questions_model,
        ))
    elif config.rewrite_oracle_type == "echo":
        rewrite_oracle = EchoRewriteOracle()
    else:
        raise ValueError(f"Unknown rewrite oracle type: {config.rewrite_oracle_type}")

    image_search = None
    if config.google_cse_api_key and config.google_cse_cx:
        image_search = GoogleImageSearch(api_key=config.google_cse_api_key, cx=config.google_cse_cx)

    if config.auth_type == "jwt":
        if not config.jwt_secret:
            raise ValueError("JWT_SECRET must be set when AUTH_TYPE is 'jwt'")
        token_verifier = JWTTokenVerifier(
            key=config.jwt_secret,
            algorithms=config.jwt_algorithms,
            audience=config.jwt_audience,
            issuer=config.jwt_issuer,
        )
    elif config.auth_type == "static":
        token_verifier = StaticTokenVerifier({
            token: AuthenticatedUser(uid=uid) for token, uid in config.dev_tokens.items()
        })
    else:
        raise ValueError(f"Unknown auth type: {config.auth_type}")

    return AdaptationController(
        profile_provider=profile_provider,
        rewrite_oracle=rewrite_oracle,
        job_repository=job_repository,
        token_verifier=token_verifier,
        glossary_repository=glossary_repository,
        image_search=image_search,
    )


def create_app(
    controller: AdaptationController,
    resume_pending_reports: bool = settings.resume_pending_reports_on_startup,
) -> FastAPI:
    """Create the FastAPI app around an already wired controller."""

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        if resume_pending_reports:
            try:
                await controller.resume_pending_reports()
            except Exception as e:
                logger.error(f"Could not resume pending reports: {e}", exc_info=True)
        yield

    app = FastAPI(
        title=settings.app_name,
        version=settings.app_version,
        debug=settings.debug,
        lifespan=lifespan,
    )

    # Add CORS middleware
    app.add_middleware(
        PreflightCORSMiddleware,
        allow_origins=["*"],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    @app.exception_handler(AdaptationError)
    async def adaptation_error_handler(request: Request, exc: AdaptationError):
        status_code = STATUS_BY_KIND[exc.kind]
        if status_code >= 500:
            logger.error(f"{request.method} {request.url.path} failed: {exc.message} ({exc.details})")
        else:
            logger.warning(f"{request.method} {request.url.path} rejected: {exc.message}")

        body = {
            "status": "rejected" if exc.kind is ErrorKind.REJECTED else "error",
            "message": exc.message,
        }
        if exc.details:
            body["details"] = exc.details
        return JSONResponse(status_code=status_code, content=body)

    @app.exception_handler(RequestValidationError)
    async def validation_error_handler(request: Request, exc: RequestValidationError):
        return JSONResponse(
            status_code=status.HTTP_400_BAD_REQUEST,
            content={
                "status": "error",
                "message": "Invalid request data.",
                "details": jsonable_encoder(exc.errors()),
            },
        )

    async def current_user(authorization: Optional[str] = Header(None)) -> AuthenticatedUser:
        return controller.authenticate(authorization)

    @app.options("/{path:path}", include_in_schema=False)
    async def options_handler(path: str):
        """Bare OPTIONS requests get an empty 204 like preflights."""
        return Response(status_code=status.HTTP_204_NO_CONTENT)

    @app.get("/health")
    async def health_check():
        """Health check endpoint."""
        return controller.get_health_status()

    @app.post("/simplify")
    async def simplify_text(
        request: SubmitRequest,
        background_tasks: BackgroundTasks,
        user: AuthenticatedUser = Depends(current_user),
    ):
        """Adapt an article to the caller's reading profile.

        Returns the simplified paragraphs right away; the readability report
        is computed after the response is sent and polled via ``/report``.
        """
        submission = await controller.submit_adaptation(user, request.title, request.paragraphs)
        # The job exists at this point, so the report task can only see it.
        background_tasks.add_task(controller.finalize_report, submission.job_id)
        return submission_document(submission)

    @app.get("/report")
    async def get_simplification_report(
        job_id: str = Query(..., alias="jobId", min_length=1),
        user: AuthenticatedUser = Depends(current_user),
    ):
        """Poll the readability report of an adaptation job."""
        report = await controller.get_report(user, job_id)

        if report.status is JobStatus.COMPLETED:
            return JSONResponse(
                status_code=status.HTTP_200_OK,
                content={
                    "status": report.status.value,
                    "analysis": report.analysis.model_dump(by_alias=True),
                },
            )
        if report.status is JobStatus.PROCESSING:
            return JSONResponse(
                status_code=status.HTTP_202_ACCEPTED,
                content={
                    "status": report.status.value,
                    "message": "리포트가 아직 생성 중입니다. 잠시 후 다시 시도해주세요.",
                },
            )
        return JSONResponse(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            content={
                "status": report.status.value,
                "message": "리포트 생성에 실패했습니다.",
                "details": report.error,
            },
        )

    @app.post("/summarize")
    async def summarize_text(
        request: SummarizeRequest,
        user: AuthenticatedUser = Depends(current_user),
    ):
        """Summarize an article into one short paragraph."""
        summary = await controller.summarize(request.paragraphs)
        return {"status": "success", "summary": summary}

    @app.post("/questions")
    async def generate_questions(
        request: QuestionsRequest,
        user: AuthenticatedUser = Depends(current_user),
    ):
        """Three yes/no questions to ask before adapting an article."""
        question_set = await controller.generate_questions(request.texts())
        return {
            "questions": [q.model_dump(mode="json") for q in question_set.questions],
            "original_text_hash": question_set.original_text_hash,
            "message": "Successfully generated preliminary questions.",
        }

    @app.post("/dictionary", status_code=status.HTTP_202_ACCEPTED)
    async def create_glossary(
        request: GlossaryRequest,
        background_tasks: BackgroundTasks,
        user: AuthenticatedUser = Depends(current_user),
    ):
        """Start building a glossary; poll it with ``GET /dictionary``."""
        job_id = await controller.submit_glossary(user, request.texts())
        background_tasks.add_task(controller.finalize_glossary, job_id)
        return {"status": "processing", "jobId": job_id}

    @app.get("/dictionary")
    async def get_glossary(
        job_id: str = Query(..., alias="jobId", min_length=1),
        user: AuthenticatedUser = Depends(current_user),
    ):
        job = await controller.get_glossary(user, job_id)
        return glossary_document(job)

    @app.get("/profile")
    async def get_user_profile(user: AuthenticatedUser = Depends(current_user)):
        """Return the caller's reading profile, if any."""
        try:
            profile = controller.get_profile(user)
        except ProfileNotFoundError:
            return {"status": "not_found"}
        return {"status": "found", "profile": profile_document(profile)}

    @app.post("/profile", status_code=status.HTTP_201_CREATED)
    async def create_user_profile(
        request: ProfileRequest,
        user: AuthenticatedUser = Depends(current_user),
    ):
        """Create or replace the caller's reading profile."""
        profile = controller.save_profile(user, request)
        return {
            "status": "success",
            "message": "Profile created/updated successfully.",
            "profile": profile_document(profile),
        }

    @app.post("/profile/recommendations")
    async def update_recommendation_settings(
        request: RecommendationSettingsRequest,
        user: AuthenticatedUser = Depends(current_user),
    ):
        """Enable or disable further-reading recommendations."""
        profile = controller.update_recommendation_settings(user, request.get_recommendations)
        return {
            "status": "success",
            "message": "Recommendation settings updated successfully.",
            "settings": {"getRecommendations": profile.get_recommendations},
        }

    return app


# Initialize controller with injected dependencies
controller = build_controller(settings)
app = create_app(controller)
