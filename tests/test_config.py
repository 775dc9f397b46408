"""Tests for configuration, upload validation and logging setup."""

import logging
import os
from logging.handlers import RotatingFileHandler
from unittest.mock import patch

import pytest

from config import Settings, settings
from core.domain import ErrorCode, ServiceError
from services.factory import build_services, get_vector_cache
from services.logger_config import setup_logging
from utils.common import get_content_hash, get_file_extension, make_snippet, validate_text_upload
from tests.conftest import run


class TestSettings:

    def test_default_values(self):
        with patch.dict(os.environ, {}, clear=True):
            defaults = Settings(_env_file=None)
            assert defaults.ALLOWED_FILE_EXTENSIONS == ["txt"]
            assert defaults.DEFAULT_DAILY_CREDITS == 20
            assert defaults.MAX_CREDIT_REQUEST == 100
            assert defaults.VECTOR_CACHE_ENABLED is False

    def test_environment_override(self):
        with patch.dict(os.environ, {"VECTOR_CACHE_ENABLED": "true", "DEFAULT_DAILY_CREDITS": "5"}):
            overridden = Settings(_env_file=None)
            assert overridden.VECTOR_CACHE_ENABLED is True
            assert overridden.DEFAULT_DAILY_CREDITS == 5


class TestFactory:

    def test_cache_disabled_by_default(self):
        with patch.object(settings, "VECTOR_CACHE_ENABLED", False):
            assert get_vector_cache() is None
            assert build_services(configure_logging=False).search.vector_cache is None

    def test_cache_enabled(self):
        with patch.object(settings, "VECTOR_CACHE_ENABLED", True):
            assert build_services(configure_logging=False).search.vector_cache is not None

    def test_build_services_configures_logging(self):
        with patch("services.factory.setup_logging") as mock_setup:
            build_services()
            build_services(configure_logging=False)
        mock_setup.assert_called_once_with()


class TestUploadValidation:

    def test_valid_upload(self):
        assert validate_text_upload("Notes.TXT", "héllo".encode("utf-8")) == "héllo"

    def test_too_large(self):
        with patch.object(settings, "MAX_FILE_SIZE", 4):
            with pytest.raises(ServiceError) as exc:
                validate_text_upload("a.txt", b"12345")
        assert exc.value.error_code == ErrorCode.FILE_TOO_LARGE

    def test_missing_filename(self):
        with pytest.raises(ServiceError) as exc:
            validate_text_upload("", b"text")
        assert exc.value.error_code == ErrorCode.INVALID_FORMAT


class TestCommonUtils:

    def test_content_hash_is_stable(self):
        assert get_content_hash("abc") == get_content_hash("abc")
        assert get_content_hash("abc") != get_content_hash("abd")

    def test_file_extension(self):
        assert get_file_extension("Report.Final.TXT") == "txt"
        assert get_file_extension("noext") == ""

    def test_make_snippet(self):
        assert make_snippet("short", 10) == "short"
        assert make_snippet("abcdef", 3) == "abc..."


class TestLogging:

    @pytest.fixture
    def log_path(self, tmp_path):
        path = tmp_path / "logs" / "test.log"
        with patch.object(settings, "LOG_FILE_PATH", str(path)):
            yield path
        logger = logging.getLogger(settings.LOGGER_NAME)
        for handler in list(logger.handlers):
            handler.close()
            logger.removeHandler(handler)

    def test_setup_logging_is_idempotent(self, log_path):
        logger = setup_logging()
        first_handlers = list(logger.handlers)
        setup_logging()

        assert logger.name == settings.LOGGER_NAME
        assert len(logger.handlers) == 2
        assert not set(first_handlers) & set(logger.handlers)
        assert log_path.exists()

    def test_levels_and_rotation_come_from_settings(self, log_path):
        with patch.object(settings, "LOG_LEVEL", "warning"), \
                patch.object(settings, "LOG_CONSOLE_LEVEL", "ERROR"), \
                patch.object(settings, "LOG_MAX_BYTES", 1024), \
                patch.object(settings, "LOG_BACKUP_COUNT", 2):
            logger = setup_logging()

        assert logger.level == logging.WARNING
        file_handler = next(h for h in logger.handlers if isinstance(h, RotatingFileHandler))
        console_handler = next(h for h in logger.handlers if not isinstance(h, RotatingFileHandler))
        assert file_handler.maxBytes == 1024
        assert file_handler.backupCount == 2
        assert console_handler.level == logging.ERROR

    def test_file_logging_can_be_disabled(self, log_path):
        with patch.object(settings, "LOG_TO_FILE", False):
            logger = setup_logging()
        assert len(logger.handlers) == 1
        assert not log_path.exists()

    def test_build_services_writes_to_log_file(self, log_path, accounts):
        services = build_services(accounts=accounts)
        run(services.scans.upload_document("2", "a.txt", b"hello"))
        for handler in logging.getLogger(settings.LOGGER_NAME).handlers:
            handler.flush()
        assert "Stored document 'a.txt'" in log_path.read_text(encoding="utf-8")
