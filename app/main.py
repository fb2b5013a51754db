# app/main.py
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.exceptions import RequestValidationError
import uvicorn

from app.api import validation_exception_handler
from app.api.routers import carts, orders, health
from app.data.database import init_db
from app.utils.logging import get_logger, setup_logging

logger = get_logger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    logger.info("Initializing database tables")
    try:
        init_db()
    except Exception as e:
        logger.error(f"Failed to create tables: {e}")
        raise
    logger.info("Database tables ready")
    yield


def create_app() -> FastAPI:
    setup_logging()

    app = FastAPI(
        title="Order Service",
        version="1.0.0",
        lifespan=lifespan,
    )

    app.add_exception_handler(RequestValidationError, validation_exception_handler)

    # Include routers
    app.include_router(health.router)
    app.include_router(carts.router)
    app.include_router(orders.router)

    return app


app = create_app()

if __name__ == "__main__":
    uvicorn.run(app, host="0.0.0.0", port=8000)
