from typing import Dict
from uuid import UUID

from fastapi import APIRouter, Depends, status
from sqlalchemy.ext.asyncio import AsyncSession

from db.database import get_async_session
from db.repositories import StockRepository
from routers.deps import get_stock_repository, list_options
from schemas.common import Page
from schemas.inventory import StockCreate, StockOut, StockUpdate

router = APIRouter()

# quantity only moves through adjustments
READONLY_FIELDS = {"quantity"}


@router.get("", response_model=Page[StockOut])
async def list_stocks(
    options: Dict = Depends(list_options),
    repo: StockRepository = Depends(get_stock_repository),
    db: AsyncSession = Depends(get_async_session),
):
    return await repo.get(db, options)


@router.get("/schema", response_model=Dict)
async def get_stock_schema():
    return StockCreate.model_json_schema()


@router.post("", response_model=StockOut, status_code=status.HTTP_201_CREATED)
async def create_stock(
    payload: StockCreate,
    repo: StockRepository = Depends(get_stock_repository),
    db: AsyncSession = Depends(get_async_session),
):
    return await repo.create(db, payload.model_dump(exclude_unset=True, exclude=READONLY_FIELDS))


@router.get("/{stock_id}", response_model=StockOut)
async def get_stock(
    stock_id: UUID,
    repo: StockRepository = Depends(get_stock_repository),
    db: AsyncSession = Depends(get_async_session),
):
    return await repo.get_by_id(db, stock_id)


@router.patch("/{stock_id}", response_model=StockOut)
async def patch_stock(
    stock_id: UUID,
    payload: StockUpdate,
    repo: StockRepository = Depends(get_stock_repository),
    db: AsyncSession = Depends(get_async_session),
):
    return await repo.patch(db, stock_id, payload.model_dump(exclude_unset=True, exclude=READONLY_FIELDS))


@router.put("/{stock_id}", response_model=StockOut)
async def put_stock(
    stock_id: UUID,
    payload: StockCreate,
    repo: StockRepository = Depends(get_stock_repository),
    db: AsyncSession = Depends(get_async_session),
):
    updates = payload.model_dump(exclude_unset=True, exclude=READONLY_FIELDS | {"id"})
    return await repo.put(db, stock_id, updates, preserve=READONLY_FIELDS)


@router.delete("/{stock_id}", response_model=StockOut)
async def delete_stock(
    stock_id: UUID,
    repo: StockRepository = Depends(get_stock_repository),
    db: AsyncSession = Depends(get_async_session),
):
    return await repo.delete(db, stock_id)
