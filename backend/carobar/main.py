import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from carobar.config import settings
from carobar.database import engine
from carobar.middleware.exceptions import register_exception_handlers
from carobar.routers import (
    chart_of_accounts,
    counterparties,
    fuel_types,
    health,
    purchase_reference,
)
from carobar.routers.reference_data import routers as reference_routers
from carobar.utils.cache import close_redis


def configure_logging() -> None:
    logging.basicConfig(
        level=settings.log_level.upper(),
        format="[%(levelname)s] [%(asctime)s] %(name)s - %(message)s",
    )


@asynccontextmanager
async def lifespan(app: FastAPI):
    configure_logging()
    yield
    await close_redis()
    await engine.dispose()


app = FastAPI(
    title="Carobar",
    description="Vehicle dealership back office: reference data API",
    version="0.1.0",
    lifespan=lifespan,
)

# ── Exception Handlers ───────────────────────────────────────
register_exception_handlers(app)

# ── Middleware ───────────────────────────────────────────────
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.allowed_origins.split(","),
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# ── Routers ──────────────────────────────────────────────────
app.include_router(health.router)

# Tenant-scoped reference data (company taken from the JWT)
for slug, router in reference_routers.items():
    app.include_router(router, prefix=f"/api/{slug}", tags=[slug])

app.include_router(counterparties.router, prefix="/api/counterparties", tags=["counterparties"])
app.include_router(
    chart_of_accounts.router, prefix="/api/chart-of-accounts", tags=["chart-of-accounts"]
)

# Global lookups and form bundles
app.include_router(fuel_types.router, prefix="/api/fuel-types", tags=["fuel-types"])
app.include_router(
    purchase_reference.router, prefix="/api/reference-data", tags=["reference-data"]
)
