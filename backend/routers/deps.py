import json
from typing import Dict, Optional

from fastapi import Depends, Query

from core.config import InventoryConfig, get_inventory_config
from core.errors import ValidationError
from db.repositories import (
    AdjustmentRepository,
    ItemRepository,
    StockRepository,
    WarehouseRepository,
)


def list_options(
    page: int = Query(1, ge=1),
    limit: int = Query(10, ge=1, le=1000),
    sort: Optional[str] = None,
    q: Optional[str] = None,
    filter: Optional[str] = Query(None, description='JSON object, e.g. {"type": "Equipment"}'),
) -> Dict:
    filters = {}
    if filter:
        try:
            filters = json.loads(filter)
        except ValueError:
            raise ValidationError({"filter": "must be a JSON object"})
        if not isinstance(filters, dict):
            raise ValidationError({"filter": "must be a JSON object"})
    return {"page": page, "limit": limit, "sort": sort, "q": q, "filter": filters}


def get_item_repository(config: InventoryConfig = Depends(get_inventory_config)) -> ItemRepository:
    return ItemRepository(config)


def get_stock_repository(config: InventoryConfig = Depends(get_inventory_config)) -> StockRepository:
    return StockRepository(config)


def get_adjustment_repository(config: InventoryConfig = Depends(get_inventory_config)) -> AdjustmentRepository:
    return AdjustmentRepository(config)


def get_warehouse_repository(config: InventoryConfig = Depends(get_inventory_config)) -> WarehouseRepository:
    return WarehouseRepository(config)
