"""Unit tests for error handling middleware and PII filtering."""

import json
import logging
from unittest.mock import Mock

import pytest
from fastapi import Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from sqlalchemy.exc import IntegrityError

from app.api.middleware.error_handler import (
    handle_categorization_error,
    handle_generic_error,
    handle_integrity_error,
    handle_validation_error,
)
from app.api.middleware.logging import JSONLogFormatter, filter_pii
from app.core.errors import ERROR_CATALOG, get_error
from app.core.exceptions import (
    CategorizationError,
    InvalidRequestError,
    NoCategoryAvailableError,
    NotFoundError,
    PersistenceError,
    ProviderError,
)

REQUIRED_FIELDS = ["error_code", "message", "user_message", "suggestion", "retry_allowed"]


def _request(path: str = "/api/v1/expenses", method: str = "GET") -> Mock:
    request = Mock(spec=Request)
    request.url.path = path
    request.method = method
    return request


class TestExceptionHierarchy:
    """Each exception carries a catalogued code and HTTP status."""

    @pytest.mark.parametrize(
        "exc_class, code, http_status",
        [
            (InvalidRequestError, "API_001", 400),
            (NotFoundError, "API_002", 404),
            (ProviderError, "LLM_001", 502),
            (NoCategoryAvailableError, "CAT_001", 422),
            (PersistenceError, "DB_001", 500),
        ],
    )
    def test_defaults(self, exc_class, code, http_status):
        exc = exc_class()

        assert isinstance(exc, CategorizationError)
        assert exc.error_code == code
        assert exc.http_status == http_status
        assert code in ERROR_CATALOG

    def test_overrides(self):
        exc = InvalidRequestError("VAL_001", {"field": "category"})

        assert exc.error_code == "VAL_001"
        assert exc.details == {"field": "category"}
        assert exc.http_status == 400

    def test_unknown_code_returns_generic_definition(self):
        assert get_error("NOPE_999")["code"] == "UNKNOWN"


class TestCategorizationErrorHandler:
    """Test custom exception handling."""

    async def test_handle_invalid_request(self):
        response = await handle_categorization_error(
            _request("/api/v1/expenses/categorize", "POST"), InvalidRequestError()
        )

        assert isinstance(response, JSONResponse)
        assert response.status_code == 400
        content = json.loads(response.body.decode())
        assert content["error_code"] == "API_001"
        assert content["user_message"] == "Please provide valid expense IDs."

    async def test_handle_not_found(self):
        response = await handle_categorization_error(_request(), NotFoundError())

        assert response.status_code == 404
        content = json.loads(response.body.decode())
        assert content["message"] == "Expense not found"

    async def test_error_includes_all_fields(self):
        response = await handle_categorization_error(_request(), PersistenceError())

        content = json.loads(response.body.decode())
        for field in REQUIRED_FIELDS:
            assert field in content, f"Missing required field: {field}"

    async def test_client_errors_logged_as_warning(self, caplog):
        with caplog.at_level(logging.WARNING):
            await handle_categorization_error(_request(), NotFoundError())

        assert "API_002" in caplog.text
        assert caplog.records[-1].levelno == logging.WARNING

    async def test_server_errors_logged_as_error(self, caplog):
        with caplog.at_level(logging.ERROR):
            await handle_categorization_error(_request(), PersistenceError())

        assert "DB_001" in caplog.text
        assert caplog.records[-1].levelno == logging.ERROR


class TestValidationErrorHandler:
    """Test validation error handling."""

    async def test_handle_validation_error(self):
        exc = RequestValidationError(
            errors=[
                {"loc": ("body", "expenseIds"), "msg": "Field required", "type": "missing"}
            ]
        )

        response = await handle_validation_error(_request(method="POST"), exc)

        assert response.status_code == 400
        content = json.loads(response.body.decode())
        assert content["error_code"] == "VAL_001"
        assert "expenseIds" in content["message"]

    async def test_validation_error_multiple_fields(self):
        exc = RequestValidationError(
            errors=[
                {"loc": ("body", "amount"), "msg": "must be greater than 0", "type": "value_error"},
                {"loc": ("body", "description"), "msg": "too short", "type": "value_error"},
            ]
        )

        response = await handle_validation_error(_request(method="POST"), exc)

        content = json.loads(response.body.decode())
        assert "amount" in content["message"]
        assert "description" in content["message"]


class TestIntegrityErrorHandler:
    """Test database integrity error handling."""

    async def test_handle_duplicate_key_error(self):
        exc = IntegrityError("statement", "params", Exception("UNIQUE constraint failed"))

        response = await handle_integrity_error(_request(method="POST"), exc)

        assert response.status_code == 409
        assert json.loads(response.body.decode())["error_code"] == "DB_002"

    async def test_handle_generic_db_error(self):
        exc = IntegrityError("statement", "params", Exception("NOT NULL constraint failed"))

        response = await handle_integrity_error(_request(method="POST"), exc)

        assert response.status_code == 500
        assert json.loads(response.body.decode())["error_code"] == "DB_001"


class TestGenericErrorHandler:
    """Test generic exception handling."""

    async def test_does_not_expose_internals(self):
        exc = Exception("Database connection failed: host=localhost port=5432")

        response = await handle_generic_error(_request(), exc)

        assert response.status_code == 500
        content = json.loads(response.body.decode())
        assert content["error_code"] == "SYS_001"
        assert "localhost" not in json.dumps(content)


class TestPIIFiltering:
    """Test PII filtering functionality."""

    def test_filter_card_number(self):
        filtered = filter_pii("Refund to card 4532015112830366")
        assert "4532015112830366" not in filtered
        assert "[CARD]" in filtered

    def test_filter_email(self):
        filtered = filter_pii("Invoice from billing@example.com")
        assert "billing@example.com" not in filtered
        assert "[EMAIL]" in filtered

    def test_filter_phone_number(self):
        filtered = filter_pii("Call us at +1-555-123-4567")
        assert "555-123-4567" not in filtered
        assert "[PHONE]" in filtered

    def test_filter_preserves_non_pii(self):
        text = "Lunch for $50.00 at Starbucks"
        assert filter_pii(text) == text

    def test_filter_empty_and_none(self):
        assert filter_pii("") == ""
        assert filter_pii(None) is None


class TestJSONLogFormatter:
    def test_formats_extra_fields_and_filters_message(self):
        record = logging.LogRecord(
            name="app.services.categorization",
            level=logging.INFO,
            pathname=__file__,
            lineno=1,
            msg="Categorized expense for jane@example.com",
            args=(),
            exc_info=None,
        )
        record.category = "Food"
        record.source = "keyword"

        data = json.loads(JSONLogFormatter().format(record))

        assert data["level"] == "INFO"
        assert data["category"] == "Food"
        assert data["source"] == "keyword"
        assert "jane@example.com" not in data["message"]
