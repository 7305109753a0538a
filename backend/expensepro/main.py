# expensepro/main.py
import logging
from contextlib import asynccontextmanager
from typing import Optional

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from expensepro.api.v1 import admin, analytics, auth, categories, files, health, logs, settings as settings_api, transactions, users
from expensepro.core.config import settings
from expensepro.core.errors import ExpenseProError
from expensepro.db.store import RecordStore

logger = logging.getLogger(__name__)


def create_app(store: Optional[RecordStore] = None) -> FastAPI:
    """Build the API around one record store (a fresh one on DATABASE_URL by default)."""
    store = store or RecordStore(settings.DATABASE_URL)

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        store.open()
        yield
        store.close()

    app = FastAPI(title="ExpensePro API", version="0.2.0", lifespan=lifespan)
    app.state.store = store

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.CORS_ORIGINS,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    @app.exception_handler(ExpenseProError)
    async def expensepro_error(request: Request, exc: ExpenseProError):
        if exc.status_code >= 500:
            logger.error("%s %s failed: %s", request.method, request.url.path, exc.message)
        return JSONResponse(status_code=exc.status_code, content={"detail": exc.message})

    app.include_router(health.router, prefix="/api/v1")
    app.include_router(auth.router, prefix="/api/v1/auth", tags=["auth"])
    app.include_router(users.router, prefix="/api/v1/users", tags=["users"])
    app.include_router(transactions.router, prefix="/api/v1/transactions", tags=["transactions"])
    app.include_router(categories.router, prefix="/api/v1/categories", tags=["categories"])
    app.include_router(settings_api.router, prefix="/api/v1/settings", tags=["settings"])
    app.include_router(logs.router, prefix="/api/v1/logs", tags=["logs"])
    app.include_router(analytics.router, prefix="/api/v1/analytics", tags=["analytics"])
    app.include_router(admin.router, prefix="/api/v1/admin", tags=["admin"])
    app.include_router(files.router, prefix="/api/v1/files", tags=["files"])

    @app.get("/")
    def root():
        return {"message": "ExpensePro API - visit /api/v1/health"}

    return app


logging.basicConfig(level=settings.LOG_LEVEL, format="%(asctime)s %(levelname)s %(name)s: %(message)s")
app = create_app()
