import logging
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from shared.core.config import settings
from shared.core.database import Base, engine
from shared.helpers.exception_handler import setup_exception_handlers
from shared.wrappers.response_wrapper import RequestLoggingMiddleware
from shared.models import users
from .models.asset_management import assets, asset_transfers, categories
from .router.asset_management import assets_router, asset_transfers_router, category_router

logging.basicConfig(
    level=settings.LOG_LEVEL,
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
)

app = FastAPI(title="Inventory Service API")

# Create all tables
Base.metadata.create_all(bind=engine)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
    expose_headers=["X-Process-Time"],
)

app.add_middleware(RequestLoggingMiddleware)

# Register exception handlers
setup_exception_handlers(app)

# Include routers
app.include_router(assets_router.router)
app.include_router(asset_transfers_router.router)
app.include_router(category_router.router)


@app.get("/api/inventory/health")
def health():
    return {"status": "healthy"}
