"""
Pytest configuration and fixtures for the resource inventory tests.

Every test gets its own SQLite database file; the app's session and
inventory config dependencies are overridden to use it.
"""
import os
from pathlib import Path
from types import SimpleNamespace

import pytest

# Set test environment before importing app modules
os.environ["DATABASE_URL"] = "sqlite+aiosqlite://"
os.environ["API_VERSION"] = "1"

from httpx import ASGITransport, AsyncClient  # noqa: E402
from sqlalchemy.ext.asyncio import async_sessionmaker, create_async_engine  # noqa: E402

import db.models  # noqa: E402,F401
from core.config import InventoryConfig, get_inventory_config  # noqa: E402
from db.database import Base, get_async_session  # noqa: E402
from db.repositories import (  # noqa: E402
    ItemRepository,
    PartyRepository,
    StockRepository,
    WarehouseRepository,
)
from main import app  # noqa: E402

FIXTURES_PATH = str(Path(__file__).parent / "fixtures")
API = "/v1"


@pytest.fixture
def anyio_backend():
    return "asyncio"


@pytest.fixture
def config() -> InventoryConfig:
    return InventoryConfig()


@pytest.fixture
async def session_maker(tmp_path):
    engine = create_async_engine(f"sqlite+aiosqlite:///{tmp_path / 'inventory.db'}")
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    yield async_sessionmaker(engine, expire_on_commit=False)
    await engine.dispose()


@pytest.fixture
async def client(session_maker, config):
    async def _session():
        async with session_maker() as session:
            yield session

    app.dependency_overrides[get_async_session] = _session
    app.dependency_overrides[get_inventory_config] = lambda: config
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as c:
        yield c
    app.dependency_overrides.clear()


@pytest.fixture
async def refs(session_maker, config) -> SimpleNamespace:
    """A party, a warehouse and an item to hang stocks and adjustments on."""
    async with session_maker() as session:
        party = await PartyRepository(config).create(session, {"name": "Red Cross Society"})
        warehouse = await WarehouseRepository(config).create(session, {"name": "Central Relief Warehouse"})
        item = await ItemRepository(config).create(session, {"name": "Bar Soap", "type": "Consumable"})
    return SimpleNamespace(party=party, warehouse=warehouse, item=item)


@pytest.fixture
async def stock(session_maker, config, refs):
    async with session_maker() as session:
        return await StockRepository(config).create(
            session,
            {
                "store_id": refs.warehouse.id,
                "owner_id": refs.party.id,
                "item_id": refs.item.id,
                "quantity": 10,
            },
        )
