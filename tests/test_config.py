"""Tests for settings, error status mapping and logging setup."""

from __future__ import annotations

import logging
from pathlib import Path

import pytest
from pydantic import ValidationError as PydanticValidationError

from genoquery.config import GenoQueryConfig
from genoquery.core.errors import (
    NotFoundError,
    ParseError,
    RequestCancelled,
    StoreError,
    ValidationError,
    status_for,
)
from genoquery.core.log import setup_logging
from genoquery.models.enums import ErrorKind


class TestConfig:

    def test_defaults(self, monkeypatch):
        for name in ("GENOQUERY_HOST", "GENOQUERY_PORT", "GENOQUERY_DISTINCT_ERROR_STATUS"):
            monkeypatch.delenv(name, raising=False)
        config = GenoQueryConfig()

        assert config.addr == "localhost:1323"
        assert config.distinct_error_status is False
        assert config.log_level == "INFO"

    def test_environment_overrides(self, monkeypatch, tmp_path):
        monkeypatch.setenv("GENOQUERY_HOST", "0.0.0.0")
        monkeypatch.setenv("GENOQUERY_PORT", "8080")
        monkeypatch.setenv("GENOQUERY_DATA_DIR", str(tmp_path))
        monkeypatch.setenv("GENOQUERY_DISTINCT_ERROR_STATUS", "true")

        config = GenoQueryConfig()

        assert config.addr == "0.0.0.0:8080"
        assert config.resolved_database_path() == tmp_path / "genoquery.db"
        assert config.distinct_error_status is True

    def test_explicit_database_path_wins(self, tmp_path):
        config = GenoQueryConfig(data_dir=tmp_path, database_path=tmp_path / "other.db")
        assert config.resolved_database_path() == tmp_path / "other.db"

    def test_log_level_normalised(self):
        assert GenoQueryConfig(log_level="debug").log_level == "DEBUG"

    def test_bad_log_level_rejected(self):
        with pytest.raises(PydanticValidationError):
            GenoQueryConfig(log_level="chatty")

    def test_port_range_checked(self):
        with pytest.raises(PydanticValidationError):
            GenoQueryConfig(port=0)


class TestStatusMapping:

    @pytest.mark.parametrize("kind", list(ErrorKind))
    def test_everything_is_400_by_default(self, kind):
        assert status_for(kind) == 400

    @pytest.mark.parametrize("kind,status", [
        (ErrorKind.VALIDATION, 400),
        (ErrorKind.PARSE, 400),
        (ErrorKind.INVALID_INPUT, 400),
        (ErrorKind.NOT_FOUND, 404),
        (ErrorKind.CANCELLED, 499),
        (ErrorKind.STORE, 500),
    ])
    def test_distinct_statuses(self, kind, status):
        assert status_for(kind, distinct=True) == status

    def test_error_kinds(self):
        assert ValidationError("x").kind == ErrorKind.VALIDATION
        assert ParseError("x").kind == ErrorKind.PARSE
        assert NotFoundError("x").kind == ErrorKind.NOT_FOUND
        assert StoreError("x").kind == ErrorKind.STORE
        assert RequestCancelled("x").kind == ErrorKind.CANCELLED

    def test_error_body(self):
        assert NotFoundError("Genome 3 not found").to_dict() == {
            "message": "Genome 3 not found",
            "kind": "not_found",
        }


def test_setup_logging_writes_file(tmp_path: Path):
    log_file = tmp_path / "logs" / "genoquery.log"
    root = logging.getLogger()
    saved_handlers, saved_level = root.handlers[:], root.level
    try:
        setup_logging("debug", log_file)
        logging.getLogger("genoquery.test").info("hello from the test")
        for handler in root.handlers:
            handler.flush()

        assert root.level == logging.DEBUG
        assert "hello from the test" in log_file.read_text()
    finally:
        for handler in root.handlers:
            if handler not in saved_handlers:
                handler.close()
        root.handlers[:] = saved_handlers
        root.setLevel(saved_level)
