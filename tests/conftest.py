"""Pytest configuration and fixtures."""

import io
from collections.abc import AsyncGenerator
from datetime import datetime, timedelta
from pathlib import Path

import pytest
from fastapi import FastAPI, Request
from httpx import ASGITransport, AsyncClient
from starlette.datastructures import UploadFile

from uploader.core.exceptions import AppException, app_exception_handler
from uploader.dependencies import handle_upload
from uploader.schemas.upload_schema import UploadResult
from uploader.services.naming import TimestampNameGenerator
from uploader.services.uploader import Uploader

START_TIME = datetime(2024, 1, 1, 12, 0, 0)
NAME_PATTERN = "20060102150405"
MAX_SIZE = 1024


class SteppingClock:
    """Clock that advances one second every time it is read."""

    def __init__(self, start: datetime = START_TIME) -> None:
        self._next = start

    def __call__(self) -> datetime:
        now = self._next
        self._next += timedelta(seconds=1)
        return now


def make_upload(filename: str | None, content: bytes, size: int | None = -1) -> UploadFile:
    """Build an UploadFile the way the multipart parser does."""
    return UploadFile(
        file=io.BytesIO(content),
        filename=filename,
        size=len(content) if size == -1 else size,
    )


# --- Uploader fixtures ---


@pytest.fixture
def upload_root(tmp_path: Path) -> Path:
    """Upload root directory that does not exist yet."""
    return tmp_path / "uploads"


@pytest.fixture
def clock() -> SteppingClock:
    return SteppingClock()


@pytest.fixture
def uploader(upload_root: Path, clock: SteppingClock) -> Uploader:
    """Uploader accepting .jpg and .png up to 1 KiB with pinned time."""
    return Uploader.configure(
        upload_root,
        MAX_SIZE,
        NAME_PATTERN,
        "jpg",
        "png",
        name_generator=TimestampNameGenerator(NAME_PATTERN, clock=clock),
    )


# --- App & client fixtures ---


def build_app(uploader: Uploader) -> FastAPI:
    """Minimal app exposing the upload pipeline over HTTP."""
    application = FastAPI()
    application.add_exception_handler(AppException, app_exception_handler)  # type: ignore[arg-type]

    @application.post("/upload", response_model=UploadResult)
    async def upload(request: Request) -> UploadResult:
        return await handle_upload(request, uploader=uploader)

    return application


@pytest.fixture
async def async_client(uploader: Uploader) -> AsyncGenerator[AsyncClient, None]:
    """Create an async test client bound to the test uploader."""
    transport = ASGITransport(app=build_app(uploader))
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac
