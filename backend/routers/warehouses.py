from typing import Dict
from uuid import UUID

from fastapi import APIRouter, Depends, status
from sqlalchemy.ext.asyncio import AsyncSession

from db.database import get_async_session
from db.repositories import WarehouseRepository
from routers.deps import get_warehouse_repository, list_options
from schemas.common import Page
from schemas.features import WarehouseCreate, WarehouseOut, WarehouseUpdate

router = APIRouter()


@router.get("", response_model=Page[WarehouseOut])
async def list_warehouses(
    options: Dict = Depends(list_options),
    repo: WarehouseRepository = Depends(get_warehouse_repository),
    db: AsyncSession = Depends(get_async_session),
):
    return await repo.get(db, options)


@router.get("/schema", response_model=Dict)
async def get_warehouse_schema():
    return WarehouseCreate.model_json_schema()


@router.post("", response_model=WarehouseOut, status_code=status.HTTP_201_CREATED)
async def create_warehouse(
    payload: WarehouseCreate,
    repo: WarehouseRepository = Depends(get_warehouse_repository),
    db: AsyncSession = Depends(get_async_session),
):
    return await repo.create(db, payload.model_dump(exclude_unset=True))


@router.get("/{warehouse_id}", response_model=WarehouseOut)
async def get_warehouse(
    warehouse_id: UUID,
    repo: WarehouseRepository = Depends(get_warehouse_repository),
    db: AsyncSession = Depends(get_async_session),
):
    return await repo.get_by_id(db, warehouse_id)


@router.patch("/{warehouse_id}", response_model=WarehouseOut)
async def patch_warehouse(
    warehouse_id: UUID,
    payload: WarehouseUpdate,
    repo: WarehouseRepository = Depends(get_warehouse_repository),
    db: AsyncSession = Depends(get_async_session),
):
    return await repo.patch(db, warehouse_id, payload.model_dump(exclude_unset=True))


@router.put("/{warehouse_id}", response_model=WarehouseOut)
async def put_warehouse(
    warehouse_id: UUID,
    payload: WarehouseCreate,
    repo: WarehouseRepository = Depends(get_warehouse_repository),
    db: AsyncSession = Depends(get_async_session),
):
    return await repo.put(db, warehouse_id, payload.model_dump(exclude_unset=True, exclude={"id"}))


@router.delete("/{warehouse_id}", response_model=WarehouseOut)
async def delete_warehouse(
    warehouse_id: UUID,
    repo: WarehouseRepository = Depends(get_warehouse_repository),
    db: AsyncSession = Depends(get_async_session),
):
    """Soft delete: sets deleted_at, the warehouse disappears from reads."""
    return await repo.delete(db, warehouse_id)
