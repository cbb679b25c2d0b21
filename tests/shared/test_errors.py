"""Tests for the domain error hierarchy."""

import pytest
from shared.errors import (
    ConcurrencyConflict,
    DuplicateKey,
    InsufficientAvailable,
    InsufficientReserved,
    InsufficientStock,
    InvalidArgument,
    InvalidTransition,
    NotFound,
    StockroomError,
)


@pytest.mark.parametrize(
    "error_cls, code, status_code",
    [
        (NotFound, "not_found", 404),
        (DuplicateKey, "duplicate_key", 409),
        (InsufficientStock, "insufficient_stock", 400),
        (InsufficientAvailable, "insufficient_available", 400),
        (InsufficientReserved, "insufficient_reserved", 400),
        (InvalidArgument, "invalid_argument", 400),
        (InvalidTransition, "invalid_transition", 409),
        (ConcurrencyConflict, "concurrency_conflict", 409),
    ],
)
def test_codes_and_status(error_cls, code, status_code):
    error = error_cls("boom")
    assert isinstance(error, StockroomError)
    assert error.code == code
    assert error.status_code == status_code


def test_to_dict_includes_details():
    error = InsufficientStock("Cannot remove 5", details={"requested": 5})
    assert error.to_dict() == {
        "error": "InsufficientStock",
        "code": "insufficient_stock",
        "message": "Cannot remove 5",
        "details": {"requested": 5},
    }


def test_default_message_and_str():
    error = NotFound()
    assert error.message
    assert str(error) == f"[not_found] {error.message}"
