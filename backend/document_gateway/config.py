from pathlib import Path

from pydantic_settings import BaseSettings
from functools import lru_cache

_BACKEND_DIR = Path(__file__).resolve().parents[1]
_ENV_FILES = (
    _BACKEND_DIR / ".env",
    ".env",
)


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    app_title: str = "Historical Document Gateway"
    app_version: str = "0.1.0"
    app_env: str = "development"
    cors_origins: list[str] = ["http://localhost:3020"]

    # Document repository (search API)
    repository_base_url: str = "http://localhost:8080/AppXtenderRest/api/AXDataSources/historical"
    repository_adhoc_query_path: str = "adhocqueryresults"
    repository_index_lookup_path: str = "selectindexlookup"
    repository_credentials: str = ""  # base64 "user:password" for Basic auth
    repository_media_type: str = "application/vnd.emc.ax+json"
    repository_timeout: float = 30.0

    # Metadata store (page counts)
    metadata_database_url: str = "sqlite:///data/metadata.db"

    # Object storage (scanned PDFs)
    s3_bucket_name: str = "historical-documents"
    s3_region: str = "us-east-1"
    s3_access_key_id: str = ""
    s3_secret_access_key: str = ""
    presigned_url_expiry_seconds: int = 120

    # Catalog of entities / categories (relative to backend directory)
    catalog_file: str = "data/catalog.yaml"

    # Logging — per-category log levels (DEBUG, INFO, WARNING, ERROR, CRITICAL)
    log_level: str = "INFO"                  # Root / app-wide
    log_level_sql: str = "WARNING"           # sqlalchemy.engine — SQL queries
    log_level_http: str = "WARNING"          # httpx / httpcore — outbound HTTP
    log_level_uvicorn: str = "INFO"          # uvicorn.access / uvicorn.error
    log_level_repository: str = "INFO"       # document repository client
    log_level_storage: str = "INFO"          # boto3 / presigned URLs

    model_config = {
        "env_file": _ENV_FILES,
        "env_file_encoding": "utf-8",
    }

    @property
    def catalog_path(self) -> Path:
        """Catalog file resolved against the backend directory when relative."""
        path = Path(self.catalog_file)
        if path.is_absolute():
            return path
        return _BACKEND_DIR / path


@lru_cache
def get_settings() -> Settings:
    """Cached settings instance — reads .env once."""
    return Settings()
