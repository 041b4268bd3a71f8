"""File upload configuration."""

from pathlib import Path

from pydantic import BaseModel


class FileUploadConfig(BaseModel, frozen=True):
    """File upload settings."""

    root_dir: Path
    max_size_bytes: int
    name_pattern: str
    allowed_extensions: str
    field_name: str
    max_form_field_bytes: int
    max_form_files: int

    @property
    def allowed_extensions_list(self) -> list[str]:
        """Get allowed extensions as a list.

        Entries are stripped but keep their case; matching is case-sensitive.
        """
        return [ext.strip() for ext in self.allowed_extensions.split(",") if ext.strip()]
