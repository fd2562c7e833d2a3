from typing import Dict
from uuid import UUID

from fastapi import APIRouter, Depends, status
from sqlalchemy.ext.asyncio import AsyncSession

from core.config import InventoryConfig, get_inventory_config
from db.database import get_async_session
from db.repositories import ItemRepository
from routers.deps import get_item_repository, list_options
from schemas.common import Page
from schemas.inventory import ItemCreate, ItemOut, ItemUpdate

router = APIRouter()


@router.get("", response_model=Page[ItemOut])
async def list_items(
    options: Dict = Depends(list_options),
    repo: ItemRepository = Depends(get_item_repository),
    db: AsyncSession = Depends(get_async_session),
):
    return await repo.get(db, options)


@router.get("/schema", response_model=Dict)
async def get_item_schema(config: InventoryConfig = Depends(get_inventory_config)):
    schema = ItemCreate.model_json_schema()
    schema["properties"]["type"]["enum"] = list(config.item_types)
    schema["properties"]["type"]["default"] = config.default_item_type
    schema["properties"]["uom"]["enum"] = list(config.item_uoms)
    schema["properties"]["uom"]["default"] = config.default_uom
    return schema


@router.post("", response_model=ItemOut, status_code=status.HTTP_201_CREATED)
async def create_item(
    payload: ItemCreate,
    repo: ItemRepository = Depends(get_item_repository),
    db: AsyncSession = Depends(get_async_session),
):
    return await repo.create(db, payload.model_dump(exclude_unset=True))


@router.get("/{item_id}", response_model=ItemOut)
async def get_item(
    item_id: UUID,
    repo: ItemRepository = Depends(get_item_repository),
    db: AsyncSession = Depends(get_async_session),
):
    return await repo.get_by_id(db, item_id)


@router.patch("/{item_id}", response_model=ItemOut)
async def patch_item(
    item_id: UUID,
    payload: ItemUpdate,
    repo: ItemRepository = Depends(get_item_repository),
    db: AsyncSession = Depends(get_async_session),
):
    return await repo.patch(db, item_id, payload.model_dump(exclude_unset=True))


@router.put("/{item_id}", response_model=ItemOut)
async def put_item(
    item_id: UUID,
    payload: ItemCreate,
    repo: ItemRepository = Depends(get_item_repository),
    db: AsyncSession = Depends(get_async_session),
):
    return await repo.put(db, item_id, payload.model_dump(exclude_unset=True, exclude={"id"}))


@router.delete("/{item_id}", response_model=ItemOut)
async def delete_item(
    item_id: UUID,
    repo: ItemRepository = Depends(get_item_repository),
    db: AsyncSession = Depends(get_async_session),
):
    return await repo.delete(db, item_id)
