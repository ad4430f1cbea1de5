"""Pytest configuration and fixtures."""

from collections.abc import AsyncGenerator, Generator
from pathlib import Path

import pytest

import marginbook.infrastructure.storage.sqlite.connection as conn_module
from marginbook.application.services import reset_services
from marginbook.config import reset_settings
from marginbook.core.entities import User
from marginbook.infrastructure.storage.sqlite.connection import ConnectionPool, close_pool
from marginbook.infrastructure.storage.sqlite.migrations import initialize_database
from marginbook.infrastructure.storage.sqlite.user_store import SQLiteUserStore


@pytest.fixture(autouse=True)
def isolated_settings(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Generator[None, None, None]:
    """Point settings at a per-test data dir and drop cached singletons."""
    monkeypatch.setenv("ENVIRONMENT", "test")
    monkeypatch.setenv("STORAGE_DATA_DIR", str(tmp_path / "data"))
    monkeypatch.setenv("AUTH_SECRET_KEY", "test-secret")
    monkeypatch.setenv("NUMBERING_RETRY_DELAY", "0")
    reset_settings()
    reset_services()
    yield
    reset_settings()
    reset_services()


@pytest.fixture
async def migrated_db(tmp_path: Path) -> Path:
    """Temporary database with every migration applied."""
    db_path = tmp_path / "marginbook_test.db"
    results = await initialize_database(db_path)
    assert all(r.success for r in results)
    return db_path


@pytest.fixture
async def sqlite_pool(migrated_db: Path) -> AsyncGenerator[ConnectionPool, None]:
    """Install a connection pool on the migrated database as the global pool."""
    pool = ConnectionPool(db_path=migrated_db, pool_size=5, busy_timeout=5000)
    await pool.initialize()
    conn_module._pool = pool
    yield pool
    await close_pool()


@pytest.fixture
async def user(sqlite_pool: ConnectionPool) -> User:
    """A stored user."""
    return await SQLiteUserStore().create_user(User(email="ada@example.com"))


@pytest.fixture
async def other_user(sqlite_pool: ConnectionPool) -> User:
    """A second stored user."""
    return await SQLiteUserStore().create_user(User(email="grace@example.com"))


@pytest.fixture
def sample_calc_input() -> dict:
    """One product, no extras: revenue 1000, margin ~48.98%."""
    return {
        "base_currency": "NGN",
        "usd_rate": 1,
        "products": [
            {
                "id": "p1",
                "name": "Tote bag",
                "quantity": 10,
                "unit_sell_price": 100,
                "unit_supplier_cost": 40,
                "unit_production_overhead": 10,
            }
        ],
        "extras": [],
        "target_margin_pct": 0,
    }


@pytest.fixture
def sample_invoice_data() -> dict:
    """One item, 10% discount, 5% tax, 20 shipping: total 587."""
    return {
        "invoice_number": "INV-2024-001",
        "issue_date": "2024-01-15",
        "due_date": "2024-02-15",
        "currency": "NGN",
        "from": {"name": "Seller Ltd", "email": "billing@seller.test"},
        "to": {"name": "Buyer Co", "address": "12 Marina, Lagos"},
        "discount_pct": 10,
        "tax_pct": 5,
        "shipping": 20,
        "items": [{"id": "i1", "description": "Printed tote", "quantity": 3, "unit_price": 200}],
    }
