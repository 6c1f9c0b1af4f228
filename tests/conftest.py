"""Pytest fixtures for testing"""

import os

os.environ.setdefault("DATABASE_URL", "sqlite:///./test.db")

import pytest
from typing import Generator
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker, Session
from budget_gateway.api.main import create_app
from budget_gateway.infrastructure.database.models import Base
from budget_gateway.infrastructure.database.session import get_db
from budget_gateway.domain.models import DebtSnapshot


# Test database
TEST_DATABASE_URL = "sqlite:///./test.db"
engine = create_engine(TEST_DATABASE_URL, connect_args={"check_same_thread": False})
TestingSessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)


@pytest.fixture
def db() -> Generator[Session, None, None]:
    """Create test database and session"""
    Base.metadata.create_all(bind=engine)
    db = TestingSessionLocal()
    try:
        yield db
    finally:
        db.close()
        Base.metadata.drop_all(bind=engine)


@pytest.fixture
def client(db: Session) -> TestClient:
    """Create FastAPI test client with test database"""
    app = create_app()

    def override_get_db():
        try:
            yield db
        finally:
            pass

    app.dependency_overrides[get_db] = override_get_db
    return TestClient(app)


@pytest.fixture
def household_debts() -> list[DebtSnapshot]:
    """Typical mix: credit card, car loan, student loan"""
    return [
        DebtSnapshot(balance=5000.0, apr=22.0, minimum_payment=150.0, name="Credit Card"),
        DebtSnapshot(balance=2000.0, apr=18.0, minimum_payment=60.0, name="Store Card"),
        DebtSnapshot(balance=8000.0, apr=6.0, minimum_payment=200.0, name="Car Loan"),
    ]
