"""
Pytest configuration and fixtures for tests.

This file is automatically loaded by pytest and provides shared fixtures
and configuration for all tests.
"""

import sys
import os

import pytest
from sqlalchemy import create_engine
from sqlalchemy.orm import Session

# Add parent directory to Python path so tests can import modules
sys.path.insert(0, os.path.abspath(os.path.join(os.path.dirname(__file__), '..')))

# Test configuration must be in place before config is imported
os.environ.setdefault("RUNTIME_ENVIRONMENT", "TEST")
os.environ.setdefault("DB_URL", "sqlite:///:memory:")
os.environ.setdefault("SHOP_API_URL", "http://shop.test/api")
os.environ.setdefault("TAX_RATE", "0.15")
os.environ.setdefault("FREE_SHIPPING_THRESHOLD", "100")
os.environ.setdefault("FLAT_SHIPPING_FEE", "10")
os.environ.setdefault("LANGUAGE", "en")
os.environ.setdefault("CURRENCY", "PKR")

from models.base import Base  # noqa: E402
from models.user import UserDTO  # noqa: E402
from services.cart import CartStore  # noqa: E402


# ============================================================================
# Database Fixtures
# ============================================================================

@pytest.fixture
def engine():
    """Create in-memory SQLite database with client storage tables."""
    engine = create_engine("sqlite:///:memory:", echo=False)
    Base.metadata.create_all(engine)
    yield engine
    engine.dispose()


@pytest.fixture
def session(engine):
    """Create database session."""
    session = Session(engine, expire_on_commit=False)
    yield session
    session.rollback()
    session.close()


# ============================================================================
# Domain Fixtures
# ============================================================================

@pytest.fixture
def cart(session):
    """Empty cart bound to the test storage."""
    return CartStore(session)


@pytest.fixture
def user():
    """Authenticated user."""
    return UserDTO(
        id="u-1",
        first_name="Ayesha",
        last_name="Khan",
        email="ayesha@example.com",
        token="test-token-abcdefghijklmnopqrstuvwxyz"
    )


@pytest.fixture
def product():
    """Catalog product record as served by the shop API."""
    return {
        "_id": "p-1",
        "name": "Dog Food",
        "pricePKR": 1000,
        "stock": 5,
        "images": ["dog-food.jpg"],
    }


@pytest.fixture
def pet():
    """Catalog pet record as served by the shop API."""
    return {
        "_id": "pet-1",
        "name": "Milo",
        "price": 5000,
        "status": "available",
        "images": ["milo.jpg"],
    }
