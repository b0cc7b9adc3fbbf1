"""
Создание FastAPI-приложения
"""
import logging
from contextlib import asynccontextmanager
from typing import Optional

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from driveeasy.config import ALLOW_ORIGINS, SEED_SAMPLE_DATA
from driveeasy.database.store import JsonStore, store as default_store
from driveeasy.utils.errors import StoreError
from .routes import bookings_router, cars_router, users_router

logger = logging.getLogger(__name__)

SERVICE_NAME = "DriveEasy API"


async def store_error_handler(request: Request, exc: StoreError) -> JSONResponse:
    """Поврежденный файл хранилища -> 500"""
    logger.error(f"Ошибка хранилища при {request.method} {request.url.path}: {exc.message}")
    return JSONResponse(status_code=500, content={"error": exc.message})


def create_app(store: Optional[JsonStore] = None, seed: Optional[bool] = None) -> FastAPI:
    """
    Создает приложение

    Args:
        store: Хранилище (по умолчанию - из конфигурации)
        seed: Заполнять пустое хранилище тестовыми данными при старте
    """
    app_store = store or default_store
    seed_data = SEED_SAMPLE_DATA if seed is None else seed

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        await app_store.initialize(seed=seed_data)
        yield

    app = FastAPI(title=SERVICE_NAME, lifespan=lifespan)
    app.state.store = app_store

    app.add_middleware(
        CORSMiddleware,
        allow_origins=ALLOW_ORIGINS,
        allow_credentials=False,
        allow_methods=["*"],
        allow_headers=["*"],
    )
    app.add_exception_handler(StoreError, store_error_handler)

    @app.get("/")
    def read_root():
        return {"service": SERVICE_NAME, "status": "ok"}

    app.include_router(cars_router)
    app.include_router(users_router)
    app.include_router(bookings_router)

    return app
