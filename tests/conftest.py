# tests/conftest.py

from __future__ import annotations

from collections.abc import Iterator

import pytest
from fastapi import FastAPI
from fastapi.testclient import TestClient

from main import create_app

from .fakes import FakeTaskRepo


@pytest.fixture()
def repo() -> FakeTaskRepo:
    return FakeTaskRepo()


@pytest.fixture()
def app(repo: FakeTaskRepo) -> FastAPI:
    """
    App wired to the in-memory store; no DB pool is opened.
    """
    return create_app(repository=repo)


@pytest.fixture()
def client(app: FastAPI) -> Iterator[TestClient]:
    with TestClient(app) as c:
        yield c
