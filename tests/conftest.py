# Shared pytest fixtures
from __future__ import annotations

import pytest
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from app.database import Base, get_db
import app.models  # noqa: F401
from app.services.dataset_store import DatasetStore


@pytest.fixture()
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


@pytest.fixture()
def session_factory(engine):
    return sessionmaker(autocommit=False, autoflush=False, bind=engine)


@pytest.fixture()
def db(session_factory):
    session = session_factory()
    try:
        yield session
    finally:
        session.close()


@pytest.fixture()
def store(db) -> DatasetStore:
    return DatasetStore(db)


@pytest.fixture()
def client(session_factory):
    from fastapi.testclient import TestClient
    from main import app

    def override_get_db():
        session = session_factory()
        try:
            yield session
        finally:
            session.close()

    app.dependency_overrides[get_db] = override_get_db
    try:
        yield TestClient(app)
    finally:
        app.dependency_overrides.clear()


@pytest.fixture()
def sales_csv() -> bytes:
    return (
        "Region, Total (R$) ,Order Date,Paid\n"
        "North,10,2024-01-01,yes\n"
        "South,5,2024-01-02,no\n"
        "North,3,2024-01-03,yes\n"
        " , ,,\n"
    ).encode("utf-8")
