"""
Accounting Core: FastAPI Application.

This is the entry point for the application.
All routers are registered here.
"""

from contextlib import asynccontextmanager

from fastapi import FastAPI

from accounting_core.config import get_settings
from accounting_core.logging_config import setup_logging
from accounting_core.models import Base
from accounting_core.models.base import engine
from accounting_core.api.health import router as health_router
from accounting_core.api.accounts import router as accounts_router
from accounting_core.api.journals import router as journals_router
from accounting_core.api.currencies import router as currencies_router

settings = get_settings()
setup_logging(settings.LOG_LEVEL)


@asynccontextmanager
async def lifespan(app: FastAPI):
    Base.metadata.create_all(bind=engine)
    yield


app = FastAPI(
    title=settings.APP_NAME,
    version=settings.APP_VERSION,
    description="Double-entry accounting ledger",
    debug=settings.DEBUG,
    lifespan=lifespan,
)

# Register routers
app.include_router(health_router)
app.include_router(accounts_router)
app.include_router(journals_router)
app.include_router(currencies_router)
