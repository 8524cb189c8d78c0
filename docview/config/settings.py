from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application configuration loaded from environment variables."""

    model_config = SettingsConfigDict(env_file=".env", extra="ignore")

    app_env: str = "dev"
    log_level: str = "INFO"

    pdf_engine: str = "pymupdf"
    document_mime_type: str = "application/pdf"

    render_resolution: int = Field(default=300, gt=0)
    search_reference_resolution: int = Field(default=72, gt=0)
    debounce_ms: int = Field(default=600, gt=0)
    max_hits_per_page: int = Field(default=100, gt=0)

    document_cache_size: int = Field(default=1, ge=0)
