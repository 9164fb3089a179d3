"""Shared fixtures: an in-memory SQLite store wired into the app."""

import os

# Keep settings away from any developer .env / real database
os.environ.setdefault("DATABASE_URL", "sqlite://")

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine, event
from sqlalchemy.pool import StaticPool

from storefront.db.database import Base, Database
from storefront.main import app
from storefront.models import Category, Product


@pytest.fixture()
def database():
    engine = create_engine(
        "sqlite+pysqlite:///:memory:",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )

    @event.listens_for(engine, "connect")
    def _enable_foreign_keys(dbapi_connection, connection_record):
        cursor = dbapi_connection.cursor()
        cursor.execute("PRAGMA foreign_keys=ON")
        cursor.close()

    Base.metadata.create_all(engine)
    db = Database("sqlite://", engine=engine)
    yield db
    Base.metadata.drop_all(engine)
    engine.dispose()


@pytest.fixture()
def client(database):
    app.state.db = database
    try:
        yield TestClient(app)
    finally:
        del app.state.db


@pytest.fixture()
def seed(database):
    """Insert a category and its products directly through a session"""

    def _seed(name, product_names=()):
        session = database.session()
        try:
            category = Category(name=name)
            session.add(category)
            session.flush()
            for index, product_name in enumerate(product_names, start=1):
                session.add(Product(
                    name=product_name,
                    price_cents=index * 100,
                    category_id=category.id,
                ))
            session.commit()
            return category.id
        finally:
            session.close()

    return _seed
