# app/api/__init__.py
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from app.api.errors import register_error_handlers
from app.api.middleware import LoggingMiddleware
from app.api.routers import admin, auth, health, orders, products
from app.data.backend import build_backend
from app.utils.settings import ALLOWED_ORIGINS
from app.utils.logging import get_logger, setup_logging

logger = get_logger(__name__)


def create_app(backend=None) -> FastAPI:
    """
    Build the API around a storage backend (JsonBackend or SqlBackend).
    Without one, the backend named by STORAGE_BACKEND is used.
    """
    setup_logging()
    backend = backend if backend is not None else build_backend()

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        logger.info(f"Initializing '{backend.name}' storage")
        backend.init()
        yield
        backend.close()

    app = FastAPI(title="Storefront Service", version="1.0.0", lifespan=lifespan)
    app.state.backend = backend

    app.add_middleware(
        CORSMiddleware,
        allow_origins=ALLOWED_ORIGINS,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )
    app.add_middleware(LoggingMiddleware)
    register_error_handlers(app)

    # Include routers
    app.include_router(health.router)
    app.include_router(auth.router)
    app.include_router(products.router)
    app.include_router(orders.router)
    app.include_router(admin.router)

    return app
