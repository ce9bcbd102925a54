import logging

from backend.app.core.errors import (
    ConflictError,
    NotFoundError,
    PaymentValidationError,
    ServerFaultError,
    Violation,
    ViolationKind,
)
from backend.app.core.logging_config import configure_logging, reset_logging


def test_error_status_codes():
    assert PaymentValidationError("x").status_code == 400
    assert NotFoundError("x").status_code == 404
    assert ConflictError("x").status_code == 409
    assert ServerFaultError("x").status_code == 500


def test_error_carries_violations():
    violation = Violation("currency_id", "Active currency with ID 9 not found.", ViolationKind.NOT_FOUND)
    error = NotFoundError("Referenced entity not found.", [violation])
    assert error.violations == [violation]
    assert violation.as_dict() == {
        "field": "currency_id",
        "message": "Active currency with ID 9 not found.",
        "kind": "not_found",
    }


def test_configure_logging_is_idempotent():
    reset_logging()
    logger = configure_logging("debug")
    configure_logging("debug")
    try:
        assert logger.level == logging.DEBUG
        assert len(logger.handlers) == 1
    finally:
        reset_logging()
