"""Upload result schemas."""

from pydantic import BaseModel, ConfigDict, Field


class UploadResult(BaseModel):
    """Names of the stored files, relative to the upload root, in form order."""

    model_config = ConfigDict(frozen=True)

    field: str
    filenames: list[str] = Field(default_factory=list)