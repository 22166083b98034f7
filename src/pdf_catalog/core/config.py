"""Configuration management for pdf-catalog."""

from typing import Optional

from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    """Application settings with environment variable support."""

    log_level: str = "INFO"
    otel_enabled: bool = False
    otel_service_name: str = "pdf-catalog"
    otel_exporter_endpoint: str = "http://localhost:4317"

    # Bucket and S3 client
    bucket_name: str = "pdf-catalog"
    region_name: str = "us-east-1"
    endpoint_url: Optional[str] = None
    access_key_id: Optional[str] = None
    secret_access_key: Optional[str] = None
    session_token: Optional[str] = None
    aws_profile: Optional[str] = None

    manifest_key: str = "pdfs-as-jpegs/manifest.json"
    site_url: str = "https://epstein-files-browser.vercel.app"
    external_documents_url: str = "https://www.justice.gov/epstein/files"

    # HTTP headers
    cors_allow_origin: str = "*"
    cache_control: str = "public, max-age=31536000, immutable"
    preview_cache_control: str = "public, max-age=86400"

    model_config = {
        "env_prefix": "PDF_CATALOG_",
        "case_sensitive": False,
    }


settings = Settings()
