"""Shared fixtures: an in-memory SQLite database per test."""
import os
from decimal import Decimal

# Must be set before the app modules build their engine
os.environ["DATABASE_URL"] = "sqlite://"

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from inventory_api import models  # noqa: F401
from inventory_api.database import Base, get_db
from inventory_api.main import app
from inventory_api.schemas import InventoryItemCreate
from inventory_api.service import InventoryService


@pytest.fixture
def engine():
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    Base.metadata.create_all(bind=engine)
    yield engine
    Base.metadata.drop_all(bind=engine)
    engine.dispose()


@pytest.fixture
def session_factory(engine):
    return sessionmaker(autocommit=False, autoflush=False, bind=engine)


@pytest.fixture
def db(session_factory):
    session = session_factory()
    yield session
    session.close()


@pytest.fixture
def service(db) -> InventoryService:
    return InventoryService(db)


@pytest.fixture
def client(session_factory):
    def override_get_db():
        session = session_factory()
        try:
            yield session
        finally:
            session.close()

    app.dependency_overrides[get_db] = override_get_db
    yield TestClient(app)
    app.dependency_overrides.clear()


def make_item(**overrides) -> InventoryItemCreate:
    """Build a valid create payload, overriding any field."""
    fields = {
        "item_name": "Hex Bolt M8",
        "quantity": 50,
        "reorder_level": 10,
        "unit_price": Decimal("0.35"),
        "supplier_name": "Fastenal",
    }
    fields.update(overrides)
    return InventoryItemCreate(**fields)
