from __future__ import annotations

import pytest
from fastapi.testclient import TestClient

from dmserver.core.config import Settings
from dmserver.db.session import Database
from dmserver.main import create_app


@pytest.fixture
def settings():
    return Settings(database_url="sqlite://", log_level="DEBUG")


@pytest.fixture
def database():
    db = Database("sqlite://")
    db.init()
    try:
        yield db
    finally:
        db.dispose()


@pytest.fixture
def db_session(database):
    session = database.session()
    try:
        yield session
    finally:
        session.close()


@pytest.fixture
def client(settings):
    with TestClient(create_app(settings)) as c:
        yield c
