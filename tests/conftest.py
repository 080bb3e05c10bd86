# =============================================================================
# tests/conftest.py - Pytest Configuration
# =============================================================================
# This module provides pytest fixtures and configuration for all tests.
#
# Key features:
# - Sets up mock environment variables before any imports
# - Provides a seeded in-memory store, a mock mailer and an HTTP client
# =============================================================================

import os

# =============================================================================
# Set up test environment BEFORE any imports
# =============================================================================
# This must happen before importing app.config which loads settings immediately

os.environ.setdefault("SUPABASE_URL", "https://test-project.supabase.co")
os.environ.setdefault("SUPABASE_ANON_KEY", "test-anon-key")
os.environ.setdefault("ORDER_NOTIFY_EMAIL", "orders@shop.test")
os.environ.setdefault("SMTP_USERNAME", "noreply@shop.test")
os.environ.setdefault("ENVIRONMENT", "development")
os.environ.setdefault("DEBUG", "true")

from unittest.mock import AsyncMock, MagicMock

import pytest
from fastapi.testclient import TestClient

from lib.mailer import Mailer
from tests.fakes import FakeSupabase


# =============================================================================
# Fixtures
# =============================================================================

@pytest.fixture
def sample_products():
    """Seed rows for the products table (store order = id order)."""
    return [
        {"id": 1, "name": "Desk Lamp", "category": "lighting", "price": 24.5, "instock": True},
        {"id": 2, "name": "Floor Lamp", "category": "lighting", "price": 89.0, "instock": False},
        {"id": 3, "name": "Oak Desk", "category": "furniture", "price": 310.0, "instock": True},
        {"id": 4, "name": "LED Strip", "category": "lighting", "price": 15.0, "instock": True},
        {"id": 5, "name": "Bookshelf", "category": "furniture", "price": 15.0, "instock": True},
    ]


@pytest.fixture
def fake_db(sample_products):
    """In-memory store seeded with sample products."""
    return FakeSupabase({
        "products": sample_products,
        "customers": [
            {"id": 1, "email": "known@customer.io", "name": "Known Customer"},
        ],
        "orders": [],
        "order_items": [],
    })


@pytest.fixture
def fake_mailer():
    """Mailer whose send() succeeds without touching the network."""
    mailer = MagicMock(spec=Mailer)
    mailer.send = AsyncMock(return_value=None)
    return mailer


@pytest.fixture
def order_payload():
    """Checkout payload for a customer not yet in the store."""
    return {
        "customer": {
            "email": "new@customer.io",
            "name": "Ada Lovelace",
            "address": "12 St James's Square, London",
            "phone": "+44 20 7946 0000",
        },
        "order": {
            "order_number": "ORD-20240115-0001",
            "subtotal": 113.5,
            "shipping_cost": 5.0,
            "total_amount": 118.5,
            "estimated_delivery": "2024-01-20",
        },
        "items": [
            {"product_id": 1, "quantity": 1, "price": 24.5, "product_name": "Desk Lamp"},
            {"product_id": 2, "quantity": 1, "price": 89.0, "product_name": "Floor Lamp"},
        ],
    }


@pytest.fixture
def client(fake_db, fake_mailer):
    """TestClient with the store and mailer swapped for fakes."""
    from app.dependencies import get_mailer, get_supabase_client
    from app.main import app

    app.dependency_overrides[get_supabase_client] = lambda: fake_db
    app.dependency_overrides[get_mailer] = lambda: fake_mailer

    yield TestClient(app)

    app.dependency_overrides.clear()
