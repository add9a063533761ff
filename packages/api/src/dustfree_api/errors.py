"""Service-layer exceptions and their HTTP mapping."""

from __future__ import annotations

from typing import Any


class DustfreeError(Exception):
    """Base class for errors raised by the service layer."""

    status_code = 400
    code = "bad_request"

    def __init__(self, message: str, *, details: dict[str, Any] | None = None) -> None:
        super().__init__(message)
        self.message = message
        self.details = details or {}


class NotFoundError(DustfreeError):
    status_code = 404
    code = "not_found"


class ConflictError(DustfreeError):
    status_code = 409
    code = "conflict"


class ValidationFailed(DustfreeError):
    status_code = 422
    code = "validation_failed"
