"""Configuration management for the rerank search service."""

from typing import Optional
from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings with environment variable support."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        populate_by_name=True,
        extra="ignore"
    )

    # API Configuration
    api_host: str = Field(default="0.0.0.0", alias="HOST")
    api_port: int = Field(default=3000, alias="PORT")

    # Supabase Configuration
    supabase_url: Optional[str] = Field(default=None, alias="SUPABASE_URL")
    supabase_service_role_key: Optional[str] = Field(default=None, alias="SUPABASE_SERVICE_ROLE_KEY")
    documents_table: str = Field(default="documents", alias="DOCUMENTS_TABLE")
    match_function: str = Field(default="match_documents", alias="MATCH_FUNCTION")
    match_threshold: float = Field(default=0.3, alias="MATCH_THRESHOLD")
    match_count: int = Field(default=10, alias="MATCH_COUNT")

    # Embedding Configuration
    openai_api_key: Optional[str] = Field(default=None, alias="OPENAI_API_KEY")
    embedding_model: str = Field(default="text-embedding-3-small", alias="EMBEDDING_MODEL")

    # Reranker Configuration
    cohere_api_key: Optional[str] = Field(default=None, alias="CO_API_KEY")
    rerank_model: str = Field(default="rerank-v3.5", alias="RERANK_MODEL")
    rerank_top_n: int = Field(default=3, alias="RERANK_TOP_N")

    # Performance Configuration
    # Unset means no timeout beyond the HTTP client defaults
    request_timeout: Optional[float] = Field(default=None, alias="REQUEST_TIMEOUT")

    # Logging Configuration
    log_level: str = Field(default="INFO", alias="LOG_LEVEL")
    log_file: Optional[str] = Field(default=None, alias="LOG_FILE")


# Global settings instance
settings = Settings()
