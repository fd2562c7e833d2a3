import logging
from typing import Dict

from sqlalchemy import update
from sqlalchemy.ext.asyncio import AsyncSession

from core.config import ADJUSTMENT_TYPE_ADDITION, start_case
from core.derivation import (
    backfill_from_stock,
    validate_and_derive_adjustment,
    validate_and_derive_item,
    validate_and_derive_stock,
)
from core.errors import ValidationError
from .database import utcnow
from .feature import Feature, WAREHOUSE_CATEGORY, WAREHOUSE_TYPE
from .inventory.adjustment import Adjustment
from .inventory.item import Item
from .inventory.stock import Stock
from .party import Party
from .repository import CrudRepository

logger = logging.getLogger(__name__)


def warehouse_conditions() -> list:
    """Features that are live warehouses."""
    return [
        Feature.category == WAREHOUSE_CATEGORY,
        Feature.type == WAREHOUSE_TYPE,
        Feature.deleted_at.is_(None),
    ]


class PartyRepository(CrudRepository):
    model = Party
    entity_name = "Party"
    natural_key = ("name",)
    searchable = ("name", "email", "mobile")
    seed_name = "parties"

    async def prepare(self, session: AsyncSession, record: Dict) -> Dict:
        name = (record.get("name") or "").strip()
        if not name:
            raise ValidationError({"name": "field is required"})
        return {**record, "name": name}


class WarehouseRepository(CrudRepository):
    """Features restricted to category Building / type Warehouse, soft deleted."""

    model = Feature
    entity_name = "Warehouse"
    natural_key = ("category", "type", "name")
    searchable = ("name", "description")
    seed_name = "warehouses"

    def default_conditions(self) -> list:
        return warehouse_conditions()

    async def normalize(self, session: AsyncSession, record: Dict) -> Dict:
        return {**record, "category": WAREHOUSE_CATEGORY, "type": WAREHOUSE_TYPE}

    async def prepare(self, session: AsyncSession, record: Dict) -> Dict:
        name = (record.get("name") or "").strip()
        if not name:
            raise ValidationError({"name": "field is required"})
        return {**record, "name": name, "category": WAREHOUSE_CATEGORY, "type": WAREHOUSE_TYPE}

    async def delete(self, session: AsyncSession, record_id):
        obj = await self._load(session, record_id)
        async with self.transaction(session):
            obj.deleted_at = utcnow()
            obj.updated_at = obj.deleted_at
        logger.info("warehouse %s soft deleted", obj.id)
        return obj


class ItemRepository(CrudRepository):
    model = Item
    entity_name = "Item"
    natural_key = ("type", "name")
    searchable = ("code", "name", "description", "type", "uom")
    seed_name = "items"

    async def normalize(self, session: AsyncSession, record: Dict) -> Dict:
        # match the stored (start cased) name
        if record.get("name"):
            record = {**record, "name": start_case(record["name"].strip())}
        return record

    async def prepare(self, session: AsyncSession, record: Dict) -> Dict:
        return validate_and_derive_item(record, self.config)


class StockRepository(CrudRepository):
    model = Stock
    entity_name = "Stock"
    natural_key = ("owner_id", "item_id")
    references = {"store_id": Feature, "owner_id": Party, "item_id": Item}
    eager = ("store", "owner", "item")
    seed_name = "stocks"

    def reference_conditions(self, key: str) -> list:
        return warehouse_conditions() if key == "store_id" else []

    async def prepare(self, session: AsyncSession, record: Dict) -> Dict:
        return validate_and_derive_stock(record)


class AdjustmentRepository(CrudRepository):
    """
    Adjustments against a stock.

    Inserting an adjustment moves the stock quantity in the same
    transaction: additions add, deductions subtract and may not take the
    stock below zero. Editing or deleting an adjustment leaves the stock
    alone.
    """

    model = Adjustment
    entity_name = "Adjustment"
    natural_key = ("type", "reason", "item_id", "stock_id", "store_id")
    references = {"item_id": Item, "stock_id": Stock, "store_id": Feature, "party_id": Party}
    eager = ("item", "stock", "store", "party")
    searchable = ("type", "reason", "remarks")
    seed_name = "adjustments"

    async def _stock(self, session: AsyncSession, record: Dict):
        stock_id = record.get("stock_id")
        if stock_id is None:
            return None
        stock = await session.get(Stock, stock_id)
        if stock is None:
            raise ValidationError({"stock_id": "Stock not found"})
        return stock

    async def normalize(self, session: AsyncSession, record: Dict) -> Dict:
        return backfill_from_stock(record, await self._stock(session, record))

    def reference_conditions(self, key: str) -> list:
        return warehouse_conditions() if key == "store_id" else []

    async def prepare(self, session: AsyncSession, record: Dict) -> Dict:
        stock = await self._stock(session, record)
        return validate_and_derive_adjustment(record, self.config, stock)

    async def patch(self, session: AsyncSession, record_id, changes: Dict):
        """Moving an adjustment to another stock takes that stock's item and store too."""
        obj = await self._load(session, record_id)
        changes = self.coerce(changes)
        if changes.get("stock_id") and changes["stock_id"] != obj.stock_id:
            stock = await self._stock(session, changes)
            changes.setdefault("item_id", stock.item_id)
            changes.setdefault("store_id", stock.store_id)
        return await self._update(session, obj, {**self.to_dict(obj), **changes})

    async def after_insert(self, session: AsyncSession, obj: Adjustment) -> None:
        delta = obj.quantity if obj.type == ADJUSTMENT_TYPE_ADDITION else -obj.quantity
        stmt = update(Stock).where(Stock.id == obj.stock_id)
        if delta < 0:
            stmt = stmt.where(Stock.quantity >= -delta)
        stmt = stmt.values(quantity=Stock.quantity + delta, updated_at=utcnow())
        res = await session.execute(stmt.execution_options(synchronize_session=False))
        if res.rowcount == 0:
            raise ValidationError({"quantity": "deduction exceeds available stock"})
        logger.info("stock %s adjusted by %s (%s)", obj.stock_id, delta, obj.reason)
