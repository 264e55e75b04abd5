"""Infrastructure layer components."""

from .dynamodb_job_repository import DynamoDBJobRepository
from .dynamodb_reading_profile_provider import DynamoDBReadingProfileProvider
from .echo_rewrite_oracle import EchoRewriteOracle
from .google_image_search import GoogleImageSearch
from .jwt_token_verifier import JWTTokenVerifier
from .local_job_repository import LocalJobRepository
from .local_reading_profile_provider import LocalReadingProfileProvider
from .openai_rewrite_oracle import OpenAIOracleConfig, OpenAIRewriteOracle
from .static_token_verifier import StaticTokenVerifier

__all__ = [
    "DynamoDBJobRepository",
    "DynamoDBReadingProfileProvider",
    "EchoRewriteOracle",
    "GoogleImageSearch",
    "JWTTokenVerifier",
    "LocalJobRepository",
    "LocalReadingProfileProvider",
    "OpenAIOracleConfig",
    "OpenAIRewriteOracle",
    "StaticTokenVerifier",
]
