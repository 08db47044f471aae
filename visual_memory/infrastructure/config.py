"""
Visual Memory Client Configuration
"""

from typing import Optional
from pydantic import Field, field_validator
from pydantic_settings import BaseSettings
from functools import lru_cache


class Settings(BaseSettings):
    """Configuration settings for the Visual Memory client."""

    # Application Settings
    app_name: str = Field("Visual Memory Search", validation_alias="APP_NAME")
    log_level: str = Field("INFO", validation_alias="LOG_LEVEL")

    # Visual Memory Backend
    base_url: str = Field("http://localhost:8000", validation_alias="VISUAL_MEMORY_BASE_URL")
    request_timeout: float = Field(60.0, validation_alias="REQUEST_TIMEOUT")  # Uploads wait on AI analysis
    connect_timeout: float = Field(10.0, validation_alias="CONNECT_TIMEOUT")

    # Session credentials (only one is needed)
    token: Optional[str] = Field(None, validation_alias="VISUAL_MEMORY_TOKEN")
    token_file: Optional[str] = Field(None, validation_alias="VISUAL_MEMORY_TOKEN_FILE")

    # Search Configuration
    search_max_results: int = Field(5, validation_alias="SEARCH_MAX_RESULTS")

    @field_validator("log_level")
    @classmethod
    def validate_log_level(cls, v: str) -> str:
        allowed = ["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]
        if v.upper() not in allowed:
            raise ValueError(f"Log level must be one of: {allowed}")
        return v.upper()

    @field_validator("base_url")
    @classmethod
    def strip_trailing_slash(cls, v: str) -> str:
        return v.rstrip("/")

    @field_validator("search_max_results")
    @classmethod
    def validate_max_results(cls, v: int) -> int:
        if v < 1:
            raise ValueError("Search max results must be positive")
        return v

    model_config = {
        "env_file": ".env",
        "env_file_encoding": "utf-8",
        "case_sensitive": False,
        "extra": "ignore"
    }


@lru_cache()
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()
