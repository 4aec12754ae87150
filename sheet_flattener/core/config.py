"""
Configuration module for Sheet Flattener.
All settings are loaded from environment variables (prefix SHEET_FLATTENER_) or a .env file.
"""
import logging
from functools import lru_cache
from pathlib import Path

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from sheet_flattener import __version__


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_prefix="SHEET_FLATTENER_",
        env_file=".env",
        case_sensitive=True,
        extra="ignore",
    )

    # Application Metadata
    APP_NAME: str = "Sheet Flattener"
    APP_VERSION: str = __version__

    # Logging
    LOG_LEVEL: str = Field(default="INFO", description="Logging level")
    LOG_DIR: Path = Field(default=Path("./logs"), description="Directory for log files")

    # Upload Limits
    MAX_UPLOAD_BYTES: int = Field(
        default=200 * 1024 * 1024,  # 200 MB
        description="Maximum size of a single uploaded workbook in bytes"
    )
    SKIP_INVALID_FILES: bool = Field(
        default=False,
        description="Keep the decodable files of a batch instead of rejecting the whole batch"
    )

    # Export
    WORKBOOK_EXPORT_NAME: str = Field(default="processed_data.xlsx", description="Download name for XLSX export")
    CSV_EXPORT_NAME: str = Field(default="processed_data.csv", description="Download name for CSV export")
    EXPORT_SHEET_TITLE: str = Field(default="ProcessedData", description="Sheet title in the exported workbook")

    # UI Server
    SERVER_PORT: int = Field(default=8501, description="Port the Streamlit UI listens on")

    @field_validator("LOG_LEVEL")
    @classmethod
    def validate_log_level(cls, v):
        """Ensure log level is a known logging level name."""
        level = str(v).upper()
        if not isinstance(logging.getLevelName(level), int):
            raise ValueError(f"LOG_LEVEL must be a logging level name, got '{v}'")
        return level

    @field_validator("EXPORT_SHEET_TITLE")
    @classmethod
    def validate_sheet_title(cls, v):
        """Excel limits sheet titles to 31 characters."""
        if not v or len(v) > 31:
            raise ValueError("EXPORT_SHEET_TITLE must be 1-31 characters")
        return v


@lru_cache()
def get_settings() -> Settings:
    """Get the global settings instance."""
    return Settings()
