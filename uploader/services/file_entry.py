"""Uploaded file entries and size detection.

An entry is one file attached to a form field: it has the filename the client
submitted and can be opened for reading. The opened stream reports its size
through one of two capabilities, ``stat()`` (an object with ``st_size``) or
``size`` (an int attribute or a callable returning one).
"""

import os
from pathlib import Path
from typing import Any, BinaryIO, Protocol, runtime_checkable

from starlette.datastructures import UploadFile

from uploader.core.exceptions import UnknownFileSizeError


@runtime_checkable
class UploadEntry(Protocol):
    """A file attached to a multipart form field."""

    @property
    def filename(self) -> str | None: ...

    def open(self) -> Any: ...


class _StreamProxy:
    """Readable, closable wrapper around a binary stream."""

    def __init__(self, stream: BinaryIO) -> None:
        self._stream = stream

    def read(self, size: int = -1) -> bytes:
        return self._stream.read(size)

    def close(self) -> None:
        self._stream.close()

    def __enter__(self) -> "_StreamProxy":
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.close()


class SizedStream(_StreamProxy):
    """Stream whose length is already known to the form parser."""

    def __init__(self, stream: BinaryIO, size: int) -> None:
        super().__init__(stream)
        self.size = size


class StatStream(_StreamProxy):
    """Stream backed by an OS file descriptor."""

    def stat(self) -> os.stat_result:
        return os.fstat(self._stream.fileno())


class UploadFileEntry:
    """Adapts a Starlette ``UploadFile`` parsed from a multipart body."""

    def __init__(self, upload: UploadFile) -> None:
        self._upload = upload

    @property
    def filename(self) -> str | None:
        return self._upload.filename

    def open(self) -> _StreamProxy:
        self._upload.file.seek(0)
        if self._upload.size is None:
            return _StreamProxy(self._upload.file)
        return SizedStream(self._upload.file, self._upload.size)


class LocalFileEntry:
    """A file already on local disk, e.g. spooled by an upstream proxy."""

    def __init__(self, path: str | Path, filename: str | None = None) -> None:
        self._path = Path(path)
        self._filename = filename if filename is not None else self._path.name

    @property
    def filename(self) -> str | None:
        return self._filename

    def open(self) -> StatStream:
        return StatStream(self._path.open("rb"))


def as_entry(value: object) -> UploadEntry | None:
    """Wrap a parsed form value as an entry, or return None for plain fields."""
    if isinstance(value, UploadFile):
        return UploadFileEntry(value)
    if isinstance(value, UploadEntry):
        return value
    return None


def probe_size(handle: object) -> int:
    """Return the size reported by ``handle``'s stat or size capability."""
    stat = getattr(handle, "stat", None)
    if callable(stat):
        return int(stat().st_size)

    size = getattr(handle, "size", None)
    if callable(size):
        size = size()
    if isinstance(size, int):
        return size

    raise UnknownFileSizeError()
