"""
Store dependency for todo routes.
"""

from __future__ import annotations

from fastapi import Request

from .service import TaskStore


def get_repository(request: Request) -> TaskStore:
    # Set by `main.create_app`; tests construct the app with a fake store.
    return request.app.state.repository
