"""Application configuration using Pydantic Settings."""

from typing import Optional
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # Application settings
    app_name: str = "easyread"
    app_version: str = "0.1.0"
    debug: bool = False

    # API settings
    api_host: str = "0.0.0.0"
    api_port: int = 8000

    # Logging
    log_level: str = "INFO"

    # Storage: "local" (in-memory) or "dynamodb"
    storage_backend: str = "local"
    aws_region: str = "ap-northeast-2"
    jobs_table_name: str = "SimplificationJobs"
    profiles_table_name: str = "Users"
    glossary_table_name: str = "DictionaryJobs"

    # Rewrite oracle: "echo" (no-op stub) or "openai"
    rewrite_oracle_type: str = "echo"
    openai_api_key: Optional[str] = None
    openai_model: str = "gpt-4-turbo"
    openai_temperature: float = 0.3
    openai_timeout_seconds: float = 120.0
    openai_max_retries: int = 0
    openai_questions_model: str = "gpt-3.5-turbo-1106"

    # Glossary images come from Google Custom Search when both are set
    google_cse_api_key: Optional[str] = None
    google_cse_cx: Optional[str] = None

    # Authentication: "static" (development token table) or "jwt"
    auth_type: str = "static"
    jwt_secret: Optional[str] = None
    jwt_algorithms: list[str] = ["HS256"]
    jwt_audience: Optional[str] = None
    jwt_issuer: Optional[str] = None
    # token -> user id, used when auth_type is "static"
    dev_tokens: dict[str, str] = {"dev-token": "dev-user"}

    # Resume reports left in "processing" when the app starts
    resume_pending_reports_on_startup: bool = True


# Create a singleton instance
settings = Settings()
