"""Shared fixtures: an in-memory SQLite Database, a session, and an API client."""

import sys
import os
sys.path.insert(0, os.path.join(os.path.dirname(__file__), ".."))

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.pool import StaticPool
from parking_app.database import Database
from parking_app.main import create_app
from parking_app.models.lot import Lot

ALL_PERMITS = {"resident": False, "facstaff": True, "visitor": False, "commuter": True}


@pytest.fixture
def database():
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    db = Database(engine=engine)
    db.create_tables()
    yield db
    db.dispose()


@pytest.fixture
def session(database):
    s = database.session()
    try:
        yield s
    finally:
        s.close()


@pytest.fixture
def lot_a(session):
    lot = Lot(lot_id="lot-a", title="Lot A", capacity=100,
              location="41.7436,-74.0799", allows=dict(ALL_PERMITS))
    session.add(lot)
    session.commit()
    return lot


@pytest.fixture
def client(database):
    return TestClient(create_app(database))
