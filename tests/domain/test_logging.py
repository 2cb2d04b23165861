"""Tests for logging configuration helpers."""

import logging
import logging.handlers

import pytest
import structlog
from storefront.utils.logging import (
    bind_request_context,
    clear_request_context,
    get_log_level,
    is_production,
    setup_stdlib_logging,
)


@pytest.fixture()
def restore_root_logger():
    root = logging.getLogger()
    handlers, level = list(root.handlers), root.level
    yield root
    root.handlers = handlers
    root.setLevel(level)


class TestEnvironment:
    def test_test_environment_is_quiet(self, monkeypatch):
        monkeypatch.delenv("ENV", raising=False)
        monkeypatch.delenv("ENVIRONMENT", raising=False)
        monkeypatch.delenv("LOG_LEVEL", raising=False)
        monkeypatch.setenv("PROTEAN_ENV", "test")
        assert get_log_level() == "WARNING"
        assert not is_production()

    def test_log_level_override(self, monkeypatch):
        monkeypatch.setenv("LOG_LEVEL", "ERROR")
        assert get_log_level() == "ERROR"


class TestHandlers:
    def test_test_environment_writes_no_files(self, monkeypatch, tmp_path, restore_root_logger):
        monkeypatch.delenv("ENV", raising=False)
        monkeypatch.delenv("ENVIRONMENT", raising=False)
        monkeypatch.setenv("PROTEAN_ENV", "test")
        setup_stdlib_logging(log_dir=str(tmp_path / "logs"))

        assert len(restore_root_logger.handlers) == 1
        assert not (tmp_path / "logs").exists()

    def test_other_environments_rotate_files(self, monkeypatch, tmp_path, restore_root_logger):
        monkeypatch.delenv("ENV", raising=False)
        monkeypatch.delenv("ENVIRONMENT", raising=False)
        monkeypatch.setenv("PROTEAN_ENV", "development")
        monkeypatch.delenv("LOG_LEVEL", raising=False)
        setup_stdlib_logging(log_dir=str(tmp_path / "logs"))

        rotating = [h for h in restore_root_logger.handlers if isinstance(h, logging.handlers.RotatingFileHandler)]
        assert len(rotating) == 2
        assert {h.level for h in rotating} == {logging.DEBUG, logging.ERROR}
        for handler in rotating:
            handler.close()


class TestRequestContext:
    def test_bind_replaces_previous_request(self):
        bind_request_context(method="GET", path="/carts")
        bind_request_context(method="POST", path="/orders")
        assert structlog.contextvars.get_contextvars() == {"method": "POST", "path": "/orders"}

        clear_request_context()
        assert structlog.contextvars.get_contextvars() == {}
