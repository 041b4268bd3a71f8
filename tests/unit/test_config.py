"""Tests for domain-specific configuration."""

from pathlib import Path

import pytest
from pydantic import ValidationError

from uploader.core.config import Settings
from uploader.core.settings import FileUploadConfig


def _file_upload_config(**overrides: object) -> FileUploadConfig:
    values: dict[str, object] = {
        "root_dir": Path("/tmp/up"),
        "max_size_bytes": 1024,
        "name_pattern": "20060102150405",
        "allowed_extensions": "jpg,png",
        "field_name": "files",
        "max_form_field_bytes": 32 << 20,
        "max_form_files": 100,
    }
    values.update(overrides)
    return FileUploadConfig(**values)  # type: ignore[arg-type]


class TestFileUploadConfig:
    """FileUploadConfig frozen immutability and property tests."""

    def test_frozen_immutability(self) -> None:
        config = _file_upload_config()
        with pytest.raises(ValidationError):
            config.max_size_bytes = 20  # type: ignore[misc]

    def test_allowed_extensions_list(self) -> None:
        config = _file_upload_config(allowed_extensions="jpg, .png , gif")
        assert config.allowed_extensions_list == ["jpg", ".png", "gif"]

    def test_allowed_extensions_keep_case(self) -> None:
        config = _file_upload_config(allowed_extensions="JPG,png")
        assert config.allowed_extensions_list == ["JPG", "png"]

    def test_empty_allowed_extensions(self) -> None:
        config = _file_upload_config(allowed_extensions="")
        assert config.allowed_extensions_list == []


class TestSettingsDomainProperties:
    """Settings domain property access tests."""

    def test_file_upload_defaults(self) -> None:
        s = Settings(_env_file=None)  # type: ignore[call-arg]
        assert s.file_upload.root_dir == Path("./data/uploads")
        assert s.file_upload.max_size_bytes == 10 * 1024 * 1024
        assert s.file_upload.name_pattern == "20060102150405"
        assert s.file_upload.field_name == "files"
        assert s.file_upload.max_form_field_bytes == 32 << 20

    def test_file_upload_from_env(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("UPLOAD_ROOT_DIR", "/srv/uploads")
        monkeypatch.setenv("UPLOAD_MAX_SIZE_BYTES", "2048")
        monkeypatch.setenv("UPLOAD_NAME_PATTERN", "%Y%m%d")
        monkeypatch.setenv("UPLOAD_ALLOWED_EXTENSIONS", "pdf,txt")
        monkeypatch.setenv("UPLOAD_FIELD_NAME", "attachments")
        s = Settings(_env_file=None)  # type: ignore[call-arg]
        assert s.file_upload.root_dir == Path("/srv/uploads")
        assert s.file_upload.max_size_bytes == 2048
        assert s.file_upload.name_pattern == "%Y%m%d"
        assert s.file_upload.field_name == "attachments"
        assert s.file_upload.allowed_extensions_list == ["pdf", "txt"]

    def test_max_size_must_be_positive(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("UPLOAD_MAX_SIZE_BYTES", "0")
        with pytest.raises(ValidationError):
            Settings(_env_file=None)  # type: ignore[call-arg]

    def test_default_allowed_extensions(self) -> None:
        s = Settings(_env_file=None)  # type: ignore[call-arg]
        assert s.file_upload.allowed_extensions_list == ["jpg", "jpeg", "png", "gif"]

    def test_form_limits_from_env(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("MAX_FORM_FIELD_BYTES", "4096")
        monkeypatch.setenv("MAX_FORM_FILES", "3")
        s = Settings(_env_file=None)  # type: ignore[call-arg]
        assert s.file_upload.max_form_field_bytes == 4096
        assert s.file_upload.max_form_files == 3
