"""Shared fixtures: a temporary SQLite file database and a TestClient."""

import pytest
from fastapi.testclient import TestClient

from catalog.app import create_app
from catalog.config import build_settings
from catalog.database import Database


@pytest.fixture
def settings(tmp_path):
    """Settings pointing at a throwaway SQLite file."""
    return build_settings({"DATABASE_URL": f"sqlite:///{tmp_path / 'catalog.db'}"})


@pytest.fixture
def database(settings):
    db = Database(settings)
    db.create_tables()
    yield db
    db.dispose()


@pytest.fixture
def session(database):
    db = database.SessionLocal()
    try:
        yield db
    finally:
        db.close()


@pytest.fixture
def app(settings):
    return create_app(settings)


@pytest.fixture
def client(app):
    # entering the context runs the lifespan (engine + tables)
    with TestClient(app) as c:
        yield c
