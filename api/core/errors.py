"""
Error types shared by the store and the HTTP layer.

The HTTP status for each kind lives on the class; `main.py` registers one
exception handler for the base type that renders `{"error": "<message>"}`.
"""

from __future__ import annotations


class TodoError(Exception):
    status_code = 500

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message


# Missing/empty required field, or an update with nothing to apply.
class ValidationError(TodoError):
    status_code = 400


class NotFoundError(TodoError):
    status_code = 404


# Persistence failures carry the raw driver message to the caller.
class StoreError(TodoError):
    status_code = 500
