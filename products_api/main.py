from __future__ import annotations

from contextlib import asynccontextmanager

from fastapi import FastAPI, Request, status
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from products_api.api.routes import router
from products_api.core.config import settings
from products_api.core.db import create_client, get_products_collection_from_client
from products_api.core.logging import configure_logging, get_logger
from products_api.middlewares.request_id import RequestIdMiddleware

configure_logging(settings.log_level)
logger = get_logger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    client = create_client(settings)
    app.state.products_collection = get_products_collection_from_client(client, settings)
    logger.info(
        "%s started",
        settings.app_name,
        extra={
            "env": settings.environment,
            "mongoUrl": settings.mongo_url_redacted,
            "collection": settings.mongo_collection,
            "corsOrigins": settings.cors_origins_list(),
        },
    )
    try:
        yield
    finally:
        client.close()
        logger.info("%s stopped", settings.app_name)


app = FastAPI(title=settings.app_name, version=settings.app_version, lifespan=lifespan)

app.add_middleware(RequestIdMiddleware)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins_list(),
    allow_credentials=settings.cors_allow_credentials,
    allow_methods=["GET", "POST", "PUT", "DELETE", "OPTIONS"],
    allow_headers=["Content-Type", "Accept", "X-Request-Id"],
    expose_headers=["X-Request-Id"],
)


# Malformed or incomplete bodies are client errors: 400, not FastAPI's 422.
@app.exception_handler(RequestValidationError)
async def request_validation_exception_handler(request: Request, exc: RequestValidationError):
    logger.info(
        "Rejected invalid request body on %s %s",
        request.method,
        request.url.path,
        extra={"requestId": getattr(request.state, "request_id", None)},
    )
    # The rejected input is not echoed: it may hold NaN/Infinity, which JSON cannot carry.
    errors = [{k: v for k, v in e.items() if k != "input"} for e in exc.errors()]
    return JSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST,
        content={"detail": jsonable_encoder(errors)},
    )


@app.exception_handler(Exception)
async def unhandled_exception_handler(request: Request, exc: Exception):
    # Internal details stay in the log.
    request_id = getattr(request.state, "request_id", None)
    logger.exception("Unhandled exception", extra={"requestId": request_id})
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content={
            "error": "internal_server_error",
            "message": "Unexpected error",
            "requestId": request_id,
        },
        # This handler runs outside RequestIdMiddleware, so the header is set here.
        headers={"X-Request-Id": request_id} if request_id else None,
    )


app.include_router(router)
