"""Global dependencies for the application."""

from functools import lru_cache

import structlog
from fastapi import Request
from starlette.concurrency import run_in_threadpool
from starlette.datastructures import UploadFile

from uploader.core.config import settings
from uploader.core.exceptions import MissingUploadFieldError
from uploader.schemas.upload_schema import UploadResult
from uploader.services.uploader import Uploader

logger = structlog.get_logger()


@lru_cache
def get_uploader() -> Uploader:
    """Get the uploader built from the file upload settings."""
    config = settings.file_upload
    return Uploader.configure(
        config.root_dir,
        config.max_size_bytes,
        config.name_pattern,
        *config.allowed_extensions_list,
    )


async def handle_upload(
    request: Request,
    field: str | None = None,
    uploader: Uploader | None = None,
) -> UploadResult:
    """Parse the multipart body with bounded limits and store the files of one field.

    Raises ``MissingUploadFieldError`` when the field carries no files, unlike
    ``Uploader.process`` which returns an empty list. Storing runs in a worker
    thread since it blocks on disk I/O.
    """
    field = field or settings.file_upload.field_name
    uploader = uploader or get_uploader()
    limits = settings.file_upload

    async with request.form(
        max_files=limits.max_form_files,
        max_part_size=limits.max_form_field_bytes,
    ) as form:
        if not any(isinstance(value, UploadFile) for value in form.getlist(field)):
            raise MissingUploadFieldError(field)
        filenames = await run_in_threadpool(uploader.process, field, form)

    logger.info("Upload request handled", field=field, stored=len(filenames))
    return UploadResult(field=field, filenames=filenames)
