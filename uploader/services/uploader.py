"""Validate uploaded files and persist them under a root directory."""

import os
import shutil
import stat
from collections.abc import Iterable, Mapping
from contextlib import closing
from typing import Any

import structlog
from pydantic import BaseModel

from uploader.core.exceptions import (
    NotAllowExtError,
    NotAllowSizeError,
    OpenFailedError,
    RootNotADirectoryError,
    UnsupportedWatermarkTypeError,
)
from uploader.services.file_entry import UploadEntry, as_entry, probe_size
from uploader.services.naming import NameGenerator, TimestampNameGenerator

logger = structlog.get_logger()

# Mode used when the root directory has to be created.
DEFAULT_DIR_MODE = 0o750

WATERMARK_MODES = frozenset({"image", "text"})


class UploaderConfig(BaseModel, frozen=True):
    """Immutable uploader settings."""

    root_dir: str
    max_size_bytes: int
    name_pattern: str
    allowed_extensions: tuple[str, ...]


def normalize_extensions(extensions: Iterable[str]) -> tuple[str, ...]:
    """Prefix every extension with a dot. Case and duplicates are kept."""
    return tuple(ext if ext.startswith(".") else "." + ext for ext in extensions)


def normalize_root_dir(root_dir: str | os.PathLike[str]) -> str:
    """Make sure the root directory ends with a path separator."""
    path = os.fspath(root_dir)
    if not path:
        raise ValueError("Upload root directory must not be empty")
    if not path.endswith(("/", os.sep)):
        path += os.sep
    return path


def file_extension(filename: str) -> str:
    """Return the suffix from the last dot of the base name, dot included.

    Unlike ``os.path.splitext``, a leading dot counts: ``".png"`` yields ``".png"``.
    """
    base = filename[max(filename.rfind("/"), filename.rfind(os.sep)) + 1 :]
    dot = base.rfind(".")
    return base[dot:] if dot >= 0 else ""


def ensure_root_dir(root_dir: str) -> None:
    """Create ``root_dir`` if missing and check that it is a directory."""
    try:
        info = os.stat(root_dir)
    except FileNotFoundError:
        os.makedirs(root_dir, mode=DEFAULT_DIR_MODE)
        logger.info("Upload root created", root_dir=root_dir)
        info = os.stat(root_dir)
    except NotADirectoryError as e:
        # A trailing separator on a regular file fails the stat itself.
        raise RootNotADirectoryError(root_dir) from e

    if not stat.S_ISDIR(info.st_mode):
        raise RootNotADirectoryError(root_dir)


class Uploader:
    """Checks and stores the files attached to one multipart form field.

    The batch is not transactional: processing stops at the first rejected
    or failing file, and files stored before it stay on disk.
    """

    def __init__(
        self, config: UploaderConfig, name_generator: NameGenerator | None = None
    ) -> None:
        self._config = config
        self._names = name_generator or TimestampNameGenerator(config.name_pattern)

    @classmethod
    def configure(
        cls,
        root_dir: str | os.PathLike[str],
        max_size_bytes: int,
        name_pattern: str,
        *extensions: str,
        name_generator: NameGenerator | None = None,
    ) -> "Uploader":
        """Normalize the settings, prepare the root directory and build an uploader.

        An empty extension list builds an uploader that rejects every file.
        """
        config = UploaderConfig(
            root_dir=normalize_root_dir(root_dir),
            max_size_bytes=max_size_bytes,
            name_pattern=name_pattern,
            allowed_extensions=normalize_extensions(extensions),
        )
        ensure_root_dir(config.root_dir)
        logger.info(
            "Uploader configured",
            root_dir=config.root_dir,
            max_size_bytes=config.max_size_bytes,
            allowed_extensions=list(config.allowed_extensions),
        )
        return cls(config, name_generator=name_generator)

    @property
    def config(self) -> UploaderConfig:
        return self._config

    def check_extension(self, ext: str) -> bool:
        """Files without an extension are never allowed."""
        if not ext:
            return False
        return ext in self._config.allowed_extensions

    def check_size(self, handle: object) -> bool:
        """Check that the file is non-empty and within the size limit."""
        size = probe_size(handle)
        return 0 < size <= self._config.max_size_bytes

    def generate_name(self, ext: str) -> str:
        return self._names.generate(ext)

    def set_watermark(self, source: str, mode: str) -> None:
        """Watermarking is not implemented; known modes are accepted and ignored."""
        if mode not in WATERMARK_MODES:
            raise UnsupportedWatermarkTypeError(mode)
        logger.warning("Watermark not applied", mode=mode, source=source)

    def process(self, field: str, form: Any) -> list[str]:
        """Store every file of ``field`` and return their names relative to the root."""
        stored: list[str] = []
        for entry in _field_entries(form, field):
            stored.append(self._store(entry))
        logger.info("Upload batch stored", field=field, count=len(stored))
        return stored

    def _store(self, entry: UploadEntry) -> str:
        try:
            stream = entry.open()
        except (OSError, ValueError) as e:
            logger.warning("Upload rejected", filename=entry.filename, reason="open_failed")
            raise OpenFailedError(entry.filename) from e

        with closing(stream):
            ext = file_extension(entry.filename or "")
            if not self.check_extension(ext):
                logger.warning(
                    "Upload rejected", filename=entry.filename, reason="extension", ext=ext
                )
                raise NotAllowExtError(ext)

            if not self.check_size(stream):
                logger.warning("Upload rejected", filename=entry.filename, reason="size")
                raise NotAllowSizeError()

            name = self.generate_name(ext)
            with open(self._config.root_dir + name, "wb") as dest:
                shutil.copyfileobj(stream, dest)

        logger.info("Upload stored", filename=entry.filename, stored_as=name)
        return name


def _field_entries(form: Any, field: str) -> list[UploadEntry]:
    """Collect the file entries of ``field`` in submission order."""
    if hasattr(form, "getlist"):
        values = form.getlist(field)
    elif isinstance(form, Mapping):
        values = form.get(field) or []
    else:
        raise TypeError(f"Unsupported form type: {type(form).__name__}")

    entries = []
    for value in values:
        entry = as_entry(value)
        if entry is None:
            logger.debug("Skipping non-file form value", field=field)
            continue
        entries.append(entry)
    return entries
