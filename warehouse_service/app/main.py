# app/main.py
from contextlib import asynccontextmanager
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from shared.core.config import settings
from shared.core.database import Base, warehouse_engine
from shared.helpers.exception_handler import setup_exception_handlers
from shared.wrappers.response_wrapper import JsonResponseMiddleware
from shared.utils.logger import get_logger
from .models.catalog import brands, categories, colors, products
from .models.stock import receipts, realizations
from .router.stock import stock_router, reports_router, receipts_router, realizations_router

logger = get_logger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    # Create tables
    Base.metadata.create_all(bind=warehouse_engine)
    logger.info("Warehouse service started")
    yield


# This MUST exist for uvicorn
app = FastAPI(title="Warehouse Stock Service API", lifespan=lifespan)

# 1️⃣ CORS middleware
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# 2️⃣ Custom JSON response wrapper middleware
app.add_middleware(JsonResponseMiddleware)

# Register exception handlers
setup_exception_handlers(app)

# Routers
app.include_router(stock_router.router)
app.include_router(reports_router.router)
app.include_router(receipts_router.router)
app.include_router(realizations_router.router)


@app.get("/api/health")
def health():
    return {"status": "healthy"}
