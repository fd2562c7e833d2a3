import logging

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse
import uvicorn
from fastapi.middleware.cors import CORSMiddleware
from contextlib import asynccontextmanager

from core.config import settings
from core.errors import InventoryError
from core.logging_config import configure_logging
from db.database import create_db_and_tables
from routers.adjustments import router as adjustments_router
from routers.items import router as items_router
from routers.stocks import router as stocks_router
from routers.warehouses import router as warehouses_router

configure_logging(settings.log_level)
logger = logging.getLogger(__name__)

API_PREFIX = f"/v{settings.api_version}"


@asynccontextmanager
async def lifespan(app: FastAPI):
    await create_db_and_tables()
    logger.info("resource inventory API ready under %s", API_PREFIX)
    yield


app = FastAPI(
    title="Emergency Resource Inventory API",
    description="Items, stocks, adjustments and warehouses for emergency management",
    version="0.1.0",
    docs_url="/docs",
    redoc_url="/redoc",
    lifespan=lifespan,
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.exception_handler(InventoryError)
async def inventory_error_handler(request: Request, exc: InventoryError):
    logger.warning("%s %s -> %s %s", request.method, request.url.path, exc.status_code, exc.message)
    return JSONResponse(status_code=exc.status_code, content=exc.to_dict())


app.include_router(warehouses_router, prefix=f"{API_PREFIX}/warehouses", tags=["warehouses"])
app.include_router(items_router, prefix=f"{API_PREFIX}/items", tags=["items"])
app.include_router(stocks_router, prefix=f"{API_PREFIX}/stocks", tags=["stocks"])
app.include_router(adjustments_router, prefix=f"{API_PREFIX}/adjustments", tags=["adjustments"])

if __name__ == "__main__":
    uvicorn.run("main:app", host="0.0.0.0", port=8000, reload=True)
