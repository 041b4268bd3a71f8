"""Application configuration using Pydantic Settings V2."""

from functools import cached_property
from pathlib import Path

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

from uploader.core.settings import FileUploadConfig


class Settings(BaseSettings):
    """Application settings loaded from environment variables.

    Flat fields are loaded directly from environment variables.
    Domain properties provide grouped access (e.g. settings.file_upload.root_dir).
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # File Upload
    upload_root_dir: Path = Field(
        default=Path("./data/uploads"),
        description="Directory accepted files are written to",
    )
    upload_max_size_bytes: int = Field(
        default=10 * 1024 * 1024,
        ge=1,
        description="Maximum accepted file size in bytes",
    )
    upload_name_pattern: str = Field(
        default="20060102150405",
        min_length=1,
        description="Time layout used to name stored files",
    )
    upload_allowed_extensions: str = Field(
        default="jpg,jpeg,png,gif",
        description="Comma-separated list of allowed file extensions",
    )
    upload_field_name: str = Field(
        default="files",
        min_length=1,
        description="Multipart form field carrying the uploads",
    )

    # Multipart parsing bounds
    max_form_field_bytes: int = Field(
        default=32 << 20,
        ge=1024,
        description="Maximum size of a non-file form field; file parts are spooled to disk",
    )
    max_form_files: int = Field(
        default=100,
        ge=1,
        le=10000,
        description="Maximum number of files in one multipart form",
    )

    # --- Domain properties ---

    @cached_property
    def file_upload(self) -> FileUploadConfig:
        """File upload configuration."""
        return FileUploadConfig(
            root_dir=self.upload_root_dir,
            max_size_bytes=self.upload_max_size_bytes,
            name_pattern=self.upload_name_pattern,
            allowed_extensions=self.upload_allowed_extensions,
            field_name=self.upload_field_name,
            max_form_field_bytes=self.max_form_field_bytes,
            max_form_files=self.max_form_files,
        )


# Global settings instance
settings = Settings()
