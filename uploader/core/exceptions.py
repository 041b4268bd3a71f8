"""Application exception classes and handlers."""

from fastapi import Request
from fastapi.responses import JSONResponse


class AppException(Exception):
    """Base application exception."""

    def __init__(self, message: str, code: str, status_code: int = 400) -> None:
        self.message = message
        self.code = code
        self.status_code = status_code
        super().__init__(message)


# --- Configuration (500) ---


class RootNotADirectoryError(AppException):
    """Configured upload root exists but is not a directory."""

    def __init__(self, path: str) -> None:
        self.path = path
        super().__init__(
            message=f"Upload root is not a directory: {path}",
            code="ROOT_NOT_A_DIRECTORY",
            status_code=500,
        )


# --- Upload rejection ---


class UploadError(AppException):
    """Base upload error."""

    def __init__(
        self, message: str = "Upload failed", code: str = "UPLOAD_ERROR", status_code: int = 400
    ) -> None:
        super().__init__(message=message, code=code, status_code=status_code)


class NotAllowExtError(UploadError):
    """File extension is empty or not in the allow-list."""

    def __init__(self, extension: str = "") -> None:
        self.extension = extension
        super().__init__(
            message="File type is not allowed",
            code="NOT_ALLOW_EXT",
            status_code=415,
        )


class NotAllowSizeError(UploadError):
    """File is empty or larger than the configured maximum."""

    def __init__(self) -> None:
        super().__init__(
            message="File size is zero or exceeds the maximum allowed size",
            code="NOT_ALLOW_SIZE",
            status_code=413,
        )


class UnknownFileSizeError(UploadError):
    """File handle reports neither a stat nor a size."""

    def __init__(self) -> None:
        super().__init__(
            message="Unknown file size",
            code="UNKNOWN_FILE_SIZE",
        )


class OpenFailedError(UploadError):
    """Uploaded file content could not be opened."""

    def __init__(self, filename: str | None = None) -> None:
        self.filename = filename
        super().__init__(
            message="Uploaded file could not be opened",
            code="OPEN_FAILED",
        )


class MissingUploadFieldError(UploadError):
    """Form field carries no files."""

    def __init__(self, field: str) -> None:
        self.field = field
        super().__init__(
            message=f"No files were uploaded in field '{field}'",
            code="MISSING_UPLOAD_FIELD",
        )


class UnsupportedWatermarkTypeError(UploadError):
    """Watermark mode is not recognized."""

    def __init__(self, mode: str = "") -> None:
        self.mode = mode
        super().__init__(
            message="Unsupported watermark type",
            code="UNSUPPORTED_WATERMARK_TYPE",
        )


class InvalidPosError(UploadError):
    """Invalid position value. Reserved for offset validation."""

    def __init__(self) -> None:
        super().__init__(
            message="Invalid pos value",
            code="INVALID_POS",
        )


# --- Exception Handler ---


async def app_exception_handler(request: Request, exc: AppException) -> JSONResponse:
    """Central exception handler for AppException."""
    return JSONResponse(
        status_code=exc.status_code,
        content={
            "status": exc.status_code,
            "message": exc.message,
            "code": exc.code,
        },
    )
