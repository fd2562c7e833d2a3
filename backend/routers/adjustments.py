from typing import Dict
from uuid import UUID

from fastapi import APIRouter, Depends, status
from sqlalchemy.ext.asyncio import AsyncSession

from core.config import InventoryConfig, get_inventory_config
from db.database import get_async_session
from db.repositories import AdjustmentRepository
from routers.deps import get_adjustment_repository, list_options
from schemas.common import Page
from schemas.inventory import AdjustmentCreate, AdjustmentOut, AdjustmentUpdate

router = APIRouter()


@router.get("", response_model=Page[AdjustmentOut])
async def list_adjustments(
    options: Dict = Depends(list_options),
    repo: AdjustmentRepository = Depends(get_adjustment_repository),
    db: AsyncSession = Depends(get_async_session),
):
    return await repo.get(db, options)


@router.get("/schema", response_model=Dict)
async def get_adjustment_schema(config: InventoryConfig = Depends(get_inventory_config)):
    schema = AdjustmentCreate.model_json_schema()
    schema["properties"]["reason"]["enum"] = list(config.adjustment_reasons)
    return schema


@router.post("", response_model=AdjustmentOut, status_code=status.HTTP_201_CREATED)
async def create_adjustment(
    payload: AdjustmentCreate,
    repo: AdjustmentRepository = Depends(get_adjustment_repository),
    db: AsyncSession = Depends(get_async_session),
):
    """Record an adjustment; the referenced stock's quantity moves with it."""
    return await repo.create(db, payload.model_dump(exclude_unset=True))


@router.get("/{adjustment_id}", response_model=AdjustmentOut)
async def get_adjustment(
    adjustment_id: UUID,
    repo: AdjustmentRepository = Depends(get_adjustment_repository),
    db: AsyncSession = Depends(get_async_session),
):
    return await repo.get_by_id(db, adjustment_id)


@router.patch("/{adjustment_id}", response_model=AdjustmentOut)
async def patch_adjustment(
    adjustment_id: UUID,
    payload: AdjustmentUpdate,
    repo: AdjustmentRepository = Depends(get_adjustment_repository),
    db: AsyncSession = Depends(get_async_session),
):
    return await repo.patch(db, adjustment_id, payload.model_dump(exclude_unset=True))


@router.put("/{adjustment_id}", response_model=AdjustmentOut)
async def put_adjustment(
    adjustment_id: UUID,
    payload: AdjustmentCreate,
    repo: AdjustmentRepository = Depends(get_adjustment_repository),
    db: AsyncSession = Depends(get_async_session),
):
    return await repo.put(db, adjustment_id, payload.model_dump(exclude_unset=True, exclude={"id"}))


@router.delete("/{adjustment_id}", response_model=AdjustmentOut)
async def delete_adjustment(
    adjustment_id: UUID,
    repo: AdjustmentRepository = Depends(get_adjustment_repository),
    db: AsyncSession = Depends(get_async_session),
):
    return await repo.delete(db, adjustment_id)
