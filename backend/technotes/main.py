"""FastAPI application entrypoint."""
from __future__ import annotations

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from sqlalchemy.exc import SQLAlchemyError

from technotes.api import api_router
from technotes.core.config import get_settings
from technotes.core.errors import StorageUnavailable, UserServiceError
from technotes.db.session import dispose_engine, init_models

logger = logging.getLogger(__name__)

settings = get_settings()


def configure_logging(level: str) -> None:
    logging.basicConfig(
        level=level,
        format="%(asctime)s %(levelname)s [%(name)s] %(message)s",
    )


@asynccontextmanager
async def lifespan(_: FastAPI):
    startup_settings = get_settings()
    configure_logging(startup_settings.log_level)
    # A store that cannot be reached at startup is logged, not fatal: the API
    # keeps serving and each request reports "Storage unavailable".
    if not startup_settings.database_url:
        logger.error("TECHNOTES_DATABASE_URL is not configured; user requests will fail")
    else:
        try:
            await init_models()
        except (StorageUnavailable, SQLAlchemyError, OSError):
            logger.exception("Could not connect to the database")
        else:
            logger.info("Connected to the database")

    try:
        yield
    finally:
        await dispose_engine()


app = FastAPI(title=settings.app_name, lifespan=lifespan)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.allowed_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.exception_handler(UserServiceError)
async def user_service_error_handler(_: Request, exc: UserServiceError) -> JSONResponse:
    return JSONResponse(status_code=exc.status_code, content={"message": exc.message})


@app.exception_handler(RequestValidationError)
async def request_validation_error_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    message = "User ID Required" if request.method == "DELETE" else "All Fields are Required"
    logger.debug("Rejected %s %s body: %s", request.method, request.url.path, exc.errors())
    return JSONResponse(status_code=status.HTTP_400_BAD_REQUEST, content={"message": message})


app.include_router(api_router)
