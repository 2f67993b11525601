# app/main.py
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse
from sqlalchemy.exc import SQLAlchemyError
import uvicorn

from app.api import ROUTERS
from app.data.database import Base, engine
from app.domain.errors import NotFoundError, ValidationFailure, PersistenceFailure
from app.utils.logging import get_logger

# import wszystkich modeli zanim zawolamy create_all
from app.data import models  # noqa: F401

logger = get_logger(__name__)


def init_db():
    logger.info(f"Initializing database, tables: {list(Base.metadata.tables.keys())}")
    try:
        Base.metadata.create_all(bind=engine)
    except SQLAlchemyError as e:
        logger.error(f"Failed to create tables: {e}", exc_info=True)
        raise
    logger.info("Database tables created")


@asynccontextmanager
async def lifespan(app: FastAPI):
    init_db()
    yield


def _error(status_code: int, message: str) -> JSONResponse:
    return JSONResponse(status_code=status_code, content={"error": message})


def register_exception_handlers(app: FastAPI):
    @app.exception_handler(NotFoundError)
    async def not_found_handler(request: Request, exc: NotFoundError):
        return _error(404, exc.message)

    @app.exception_handler(ValidationFailure)
    async def validation_handler(request: Request, exc: ValidationFailure):
        return _error(400, exc.message)

    @app.exception_handler(PersistenceFailure)
    async def persistence_handler(request: Request, exc: PersistenceFailure):
        logger.error(f"{request.method} {request.url.path} persistence failure: {exc.message}")
        return _error(500, "Internal server error")

    @app.exception_handler(Exception)
    async def unhandled_handler(request: Request, exc: Exception):
        logger.exception(f"{request.method} {request.url.path} failed: {exc}")
        return _error(500, "Internal server error")


def create_app(with_lifespan: bool = True) -> FastAPI:
    app = FastAPI(
        title="Storefront API",
        version="1.0.0",
        lifespan=lifespan if with_lifespan else None,
    )

    for router in ROUTERS:
        app.include_router(router)

    register_exception_handlers(app)

    return app


app = create_app()

if __name__ == "__main__":
    uvicorn.run(app, host="0.0.0.0", port=8000)
