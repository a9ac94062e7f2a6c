"""Gallery configuration with environment variables and parameter store support."""
import os
from functools import lru_cache
from typing import Any
from urllib.parse import quote_plus

from pydantic import Field, SecretStr, field_validator, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from gallery.core.config_loader import get_env_files
from gallery.core.enums import Environment

# =============================================================================
# LOCAL DEBUG OVERRIDE - Change this to test other environments locally
# =============================================================================
LOCAL_ENV_OVERRIDE: Environment | None = None  # e.g., Environment.DEV

ENV_FILES = tuple(get_env_files(LOCAL_ENV_OVERRIDE))


# =============================================================================
# Config Classes
# =============================================================================


class AWSConfig(BaseSettings):
    """Region, bucket and database name shared by the S3 and SSM clients."""

    model_config = SettingsConfigDict(env_file=ENV_FILES, env_prefix="AWS_", extra="ignore")

    region: str = "us-east-1"
    s3_bucket_name: str = ""
    database_name: str = "gallery"
    endpoint_url: str | None = None


class ParameterStoreConfig(BaseSettings):
    """Names of the database parameters held in the parameter store."""

    model_config = SettingsConfigDict(
        env_file=ENV_FILES, env_prefix="PARAMETER_STORE_", extra="ignore"
    )

    username_name: str = "/project-two/db/username"
    password_name: str = "/project-two/db/password"
    host_name: str = "/project-two/db/endpoint"
    secrets_mode: str = "ssm"


class DatabaseCredentials(BaseSettings):
    """Resolved connection parameters for the images database."""

    model_config = SettingsConfigDict(env_file=ENV_FILES, env_prefix="DATABASE_", extra="ignore")

    host: str
    port: int = 5432
    user: str
    password: SecretStr | None = Field(default=None)
    db_name: str
    ssl_reject_unauthorized: bool = False


class DatabaseConfig(BaseSettings):
    """Database configuration with connection pooling settings."""

    model_config = SettingsConfigDict(env_file=ENV_FILES, env_prefix="DATABASE_", extra="ignore")

    driver: str = "postgresql+asyncpg"
    port: int = 5432
    ssl_reject_unauthorized: bool = False
    url: str | None = None
    pool_size: int = 5
    max_overflow: int = 10
    pool_timeout: int = 15
    pool_recycle: int = 900
    pool_pre_ping: bool = True
    echo: bool = False

    def url_for(self, creds: DatabaseCredentials) -> str:
        """Build database URL from credentials."""
        password = creds.password.get_secret_value() if creds.password else ""
        return (
            f"{self.driver}://{quote_plus(creds.user)}:{quote_plus(password)}"
            f"@{creds.host}:{creds.port}/{creds.db_name}"
        )


class GalleryConfig(BaseSettings):
    model_config = SettingsConfigDict(env_file=ENV_FILES, env_prefix="GALLERY_", extra="ignore")

    compensate_partial_failures: bool = True
    max_upload_bytes: int | None = None
    default_page_size: int = 12


class CORSConfig(BaseSettings):
    model_config = SettingsConfigDict(env_file=ENV_FILES, env_prefix="CORS_", extra="ignore")

    allow_origins: str = "http://localhost:5173,http://localhost:3000"
    allow_credentials: bool = True
    allow_methods: str = "*"
    allow_headers: str = "*"

    @property
    def origins_list(self) -> list[str]:
        return [o.strip() for o in self.allow_origins.split(",")]

    @property
    def methods_list(self) -> list[str]:
        return ["*"] if self.allow_methods == "*" else [m.strip() for m in self.allow_methods.split(",")]

    @property
    def headers_list(self) -> list[str]:
        return ["*"] if self.allow_headers == "*" else [h.strip() for h in self.allow_headers.split(",")]


class LoggingConfig(BaseSettings):
    model_config = SettingsConfigDict(env_file=ENV_FILES, env_prefix="LOG_", extra="ignore")

    level: str = "INFO"
    format: str = "console"  # "console" or "json"
    level_sqlalchemy: str = "WARNING"
    level_httpx: str = "WARNING"
    level_botocore: str = "WARNING"
    level_uvicorn_access: str = "INFO"


class FastAPIConfig(BaseSettings):
    """FastAPI application configuration."""

    model_config = SettingsConfigDict(env_file=ENV_FILES, env_prefix="FASTAPI_", extra="ignore")

    title: str = "Gallery API"
    description: str = "Upload, list and delete images stored in S3"
    version: str = "0.1.0"
    docs_url: str | None = "/docs"
    redoc_url: str | None = "/redoc"
    openapi_url: str | None = "/openapi.json"
    debug: bool = False

    @field_validator("docs_url", "redoc_url", "openapi_url")
    @classmethod
    def _disable_docs(cls, v: str | None) -> str | None:
        # Docs URLs can be disabled by setting to empty string in env
        return v if v else None


class Settings(BaseSettings):
    model_config = SettingsConfigDict(env_file=ENV_FILES, extra="ignore")

    env: Environment = Field(default=Environment.LOCAL)
    app_name: str = Field(default="Gallery API")
    host: str = Field(default="0.0.0.0")
    port: int = Field(default=8000)
    debug: bool = Field(default=False)
    reload: bool = Field(default=False)

    @model_validator(mode="before")
    @classmethod
    def _default_env(cls, data: dict[str, Any]) -> dict[str, Any]:
        if isinstance(data, dict) and not data.get("env"):
            data["env"] = os.getenv("ENV", Environment.LOCAL.value)
        return data

    @field_validator("debug", "reload")
    @classmethod
    def _no_debug_in_prod(cls, v: bool, info) -> bool:
        if info.data.get("env") == Environment.PROD and v:
            raise ValueError(f"{info.field_name} cannot be True in production")
        return v


# =============================================================================
# Lazy Loaders (cached)
# =============================================================================


@lru_cache
def get_settings() -> Settings:
    return Settings()


@lru_cache
def get_aws_config() -> AWSConfig:
    return AWSConfig()


@lru_cache
def get_parameter_store_config() -> ParameterStoreConfig:
    return ParameterStoreConfig()


@lru_cache
def get_database_config() -> DatabaseConfig:
    return DatabaseConfig()


@lru_cache
def get_gallery_config() -> GalleryConfig:
    return GalleryConfig()


@lru_cache
def get_cors_config() -> CORSConfig:
    return CORSConfig()


@lru_cache
def get_logging_config() -> LoggingConfig:
    return LoggingConfig()


@lru_cache
def get_fastapi_config() -> FastAPIConfig:
    return FastAPIConfig()
