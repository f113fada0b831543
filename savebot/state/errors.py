# savebot/state/errors.py
from __future__ import annotations


class StoreError(Exception):
    """Base error of the save store; ``code`` is a stable machine-readable id."""

    code = "STORE_ERROR"

    def __init__(self, message: str, code: str | None = None):
        super().__init__(message)
        self.message = message
        if code:
            self.code = code


class ValidationError(StoreError):
    code = "VALIDATION_ERROR"


class NotFound(StoreError):
    code = "SAVE_NOT_FOUND"


class Expired(StoreError):
    code = "SAVE_EXPIRED"


class AccessDenied(StoreError):
    code = "ACCESS_DENIED"
