"""
Seed parties, warehouses, items, stocks and adjustments.

Run locally (from backend/):
  python -m scripts.seed

Seed files are read from SEEDS_PATH (default ./seeds): parties.json,
warehouses.json, items.json, stocks.json, adjustments.json. Missing files are
skipped. Every item without a stock gets one, owned by the seeded parties
and kept in the seeded warehouses round robin.
"""

from __future__ import annotations

import asyncio
import logging
from typing import Optional

from core.config import InventoryConfig, settings
from core.logging_config import configure_logging
from db.database import async_session_maker, create_db_and_tables
from db.repositories import (
    AdjustmentRepository,
    ItemRepository,
    PartyRepository,
    StockRepository,
    WarehouseRepository,
)

logger = logging.getLogger(__name__)


def _stocks_for(items: list, parties: list, warehouses: list) -> list[dict]:
    if not parties or not warehouses:
        return []
    return [
        {
            "store_id": str(warehouses[i % len(warehouses)].id),
            "owner_id": str(parties[i % len(parties)].id),
            "item_id": str(item.id),
            "min_allowed": item.min_stock_allowed,
            "max_allowed": item.max_stock_allowed,
        }
        for i, item in enumerate(items)
    ]


async def run(session_maker=async_session_maker, seeds_path: Optional[str] = None) -> dict:
    config = InventoryConfig.from_settings(settings)

    parties = await PartyRepository(config).seed(session_maker, seeds_path=seeds_path)
    warehouses = await WarehouseRepository(config).seed(session_maker, seeds_path=seeds_path)
    items = await ItemRepository(config).seed(session_maker, seeds_path=seeds_path)
    stocks = await StockRepository(config).seed(
        session_maker, _stocks_for(items, parties, warehouses), seeds_path=seeds_path
    )
    adjustments = await AdjustmentRepository(config).seed(session_maker, seeds_path=seeds_path)

    return {
        "parties": parties,
        "warehouses": warehouses,
        "items": items,
        "stocks": stocks,
        "adjustments": adjustments,
    }


async def main() -> None:
    configure_logging(settings.log_level)
    await create_db_and_tables()
    seeded = await run()
    logger.info(
        "Done. %s",
        ", ".join(f"{name}: {len(records)}" for name, records in seeded.items()),
    )


if __name__ == "__main__":
    asyncio.run(main())
