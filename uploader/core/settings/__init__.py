"""Domain-specific configuration models."""

from uploader.core.settings.file_upload_config import FileUploadConfig

__all__ = [
    "FileUploadConfig",
]
