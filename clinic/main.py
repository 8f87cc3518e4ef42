from contextlib import asynccontextmanager
import logging

import uvicorn
from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from clinic.core.config import settings
from clinic.core.exceptions import (
    BaseCustomException,
    ValidationError,
    create_error_response,
    create_validation_error_response,
    group_validation_errors,
)
from clinic.core.logging_config import configure_logging
from clinic.infrastructure.database import engine, init_db, close_db
from clinic.api.v1.api import api_router
from clinic.web.routes import router as web_router

configure_logging(settings.LOG_LEVEL)
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    await init_db()
    logger.info(
        f"{settings.PROJECT_NAME} listening on port {settings.SERVER_PORT} "
        f"({engine.url.get_backend_name()} backend)"
    )
    yield
    await close_db()


app = FastAPI(
    title=settings.PROJECT_NAME,
    openapi_url=f"{settings.RPC_PREFIX}/openapi.json",
    docs_url="/docs",
    redoc_url="/redoc",
    lifespan=lifespan,
)

# Set all CORS enabled origins; an empty list allows any origin
if settings.BACKEND_CORS_ORIGINS:
    app.add_middleware(
        CORSMiddleware,
        allow_origins=[str(origin).rstrip("/") for origin in settings.BACKEND_CORS_ORIGINS],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )
else:
    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_methods=["*"],
        allow_headers=["*"],
    )


@app.exception_handler(BaseCustomException)
async def custom_exception_handler(request: Request, exc: BaseCustomException):
    return JSONResponse(status_code=exc.status_code, content=create_error_response(exc))


@app.exception_handler(RequestValidationError)
async def request_validation_handler(request: Request, exc: RequestValidationError):
    logger.info(f"Rejected input for {request.url.path}: {len(exc.errors())} error(s)")
    content = create_validation_error_response(
        ValidationError("Request validation failed"),
        validation_errors=group_validation_errors(exc.errors()),
    )
    return JSONResponse(status_code=status.HTTP_422_UNPROCESSABLE_ENTITY, content=content)


app.include_router(api_router, prefix=settings.RPC_PREFIX)
app.include_router(web_router)


def run() -> None:
    uvicorn.run(
        "clinic.main:app",
        host=settings.SERVER_HOST,
        port=settings.SERVER_PORT,
        log_level=settings.LOG_LEVEL.lower(),
    )
