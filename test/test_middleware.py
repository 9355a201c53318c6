"""
Tests for the structured logging middleware and formatter
"""

import json
import logging
import sys

from fastapi import FastAPI
from fastapi.testclient import TestClient

from wysiwym.middleware.logging import (
    RequestIdFilter,
    StructuredFormatter,
    StructuredLoggingMiddleware,
    get_request_id,
    request_id_var,
)


def _record(message: str = "hello", **extra) -> logging.LogRecord:
    record = logging.LogRecord("wysiwym.test", logging.INFO, __file__, 1, message, None, None)
    for key, value in extra.items():
        setattr(record, key, value)
    return record


class TestStructuredFormatter:
    """Test JSON log formatting"""

    def test_basic_fields(self):
        data = json.loads(StructuredFormatter().format(_record()))
        assert data["level"] == "INFO"
        assert data["logger"] == "wysiwym.test"
        assert data["message"] == "hello"
        assert "timestamp" in data

    def test_conversion_fields(self):
        record = _record(error_code="CONVERSION_UNKNOWN_KIND", kind="table", details={"direction": "to_editor"})
        data = json.loads(StructuredFormatter().format(record))
        assert data["error_code"] == "CONVERSION_UNKNOWN_KIND"
        assert data["kind"] == "table"
        assert data["details"] == {"direction": "to_editor"}

    def test_unserializable_extra(self):
        data = json.loads(StructuredFormatter().format(_record(details={"flow": object()})))
        assert data["details"]["flow"].startswith("<object")

    def test_exception_info(self):
        try:
            raise ValueError("boom")
        except ValueError:
            record = logging.LogRecord("wysiwym.test", logging.ERROR, __file__, 1, "failed", None, sys.exc_info())
        data = json.loads(StructuredFormatter().format(record))
        assert "ValueError: boom" in data["exception"]


class TestRequestId:
    def test_filter_adds_request_id(self):
        token = request_id_var.set("abc")
        try:
            record = _record()
            assert RequestIdFilter().filter(record)
            assert record.request_id == "abc"
            assert get_request_id() == "abc"
        finally:
            request_id_var.reset(token)


class TestStructuredLoggingMiddleware:
    """Test request logging"""

    def _app(self) -> FastAPI:
        app = FastAPI()
        app.add_middleware(StructuredLoggingMiddleware)

        @app.get("/ping")
        def ping():
            return {"request_id": get_request_id()}

        @app.get("/health")
        def health():
            return {"status": "ok"}

        return app

    def test_request_logged(self, caplog):
        client = TestClient(self._app())
        with caplog.at_level(logging.INFO, logger="wysiwym.access"):
            response = client.get("/ping", headers={"X-Request-ID": "r-1"})
        assert response.json() == {"request_id": "r-1"}
        record = next(r for r in caplog.records if r.name == "wysiwym.access")
        assert record.path == "/ping"
        assert record.status_code == 200

    def test_health_not_logged(self, caplog):
        client = TestClient(self._app())
        with caplog.at_level(logging.INFO, logger="wysiwym.access"):
            client.get("/health")
        assert not [r for r in caplog.records if r.name == "wysiwym.access"]

    def test_client_error_logged_as_warning(self, caplog):
        client = TestClient(self._app())
        with caplog.at_level(logging.INFO, logger="wysiwym.access"):
            client.get("/missing")
        record = next(r for r in caplog.records if r.name == "wysiwym.access")
        assert record.levelno == logging.WARNING
