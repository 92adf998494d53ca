"""Restaurant back-office API - FastAPI application."""

import asyncio
import time
import traceback
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager, suppress
from datetime import datetime
from typing import Any
from uuid import uuid4

import structlog
from fastapi import Depends, FastAPI, Request, Response
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from sqlalchemy import text
from sqlalchemy.ext.asyncio import AsyncSession
from starlette.exceptions import HTTPException as StarletteHTTPException

from restaurant_api.boot import Bootloader, BootMode
from restaurant_api.config import settings
from restaurant_api.database import get_db, get_session_maker, init_db
from restaurant_api.logger import configure_logging, get_logger
from restaurant_api.rate_limit import feedback_rate_limiter
from restaurant_api.routers import (
    analytics,
    auth,
    call_waiter,
    expenses,
    feedback,
    footer,
    menu,
    report_receivers,
    reports,
    stock,
    tables,
    wastage,
)
from restaurant_api.services.errors import DependencyFailure
from restaurant_api.services.report_dispatcher import run_report_scheduler

# Initialize logging early
configure_logging()
logger = get_logger(__name__)

GENERIC_ERROR = "An internal server error occurred. Please try again later."


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncIterator[None]:
    """Validate the environment, then run the report scheduler for the app's lifetime."""
    # Exits the process when the database is unreachable
    await Bootloader.validate(mode=BootMode.CRITICAL)
    Bootloader.print_config()

    await init_db()
    stop_event = asyncio.Event()
    scheduler_task = None
    if settings.report_scheduler_enabled:
        scheduler_task = asyncio.create_task(run_report_scheduler(stop_event, get_session_maker()))
    logger.info("Application started", version="0.1.0", scheduler=scheduler_task is not None)
    yield
    stop_event.set()
    if scheduler_task is not None:
        scheduler_task.cancel()
        with suppress(asyncio.CancelledError):
            await scheduler_task
    feedback_rate_limiter.close()
    logger.info("Application shutting down")


app = FastAPI(
    title="Restaurant Back-Office API",
    description="Menu, stock, expenses, analytics and period reports for restaurant admins",
    version="0.1.0",
    lifespan=lifespan,
)


@app.middleware("http")
async def logging_middleware(request: Request, call_next: Any) -> Response:
    """Middleware to inject Request-ID and log request details."""
    request_id = request.headers.get("X-Request-ID", str(uuid4()))

    # structlog contextvars are isolated per task; start clean for each request
    structlog.contextvars.clear_contextvars()
    structlog.contextvars.bind_contextvars(
        request_id=request_id,
        method=request.method,
        path=request.url.path,
    )

    start_time = time.perf_counter()
    try:
        response = await call_next(request)
        duration = time.perf_counter() - start_time

        logger.info(
            "HTTP Request",
            status_code=response.status_code,
            duration_ms=round(duration * 1000, 2),
        )

        response.headers["X-Request-ID"] = request_id
        return response
    except Exception as exc:
        duration = time.perf_counter() - start_time
        logger.exception(
            "HTTP Request Failed",
            duration_ms=round(duration * 1000, 2),
            error=str(exc),
        )
        raise


@app.exception_handler(StarletteHTTPException)
async def http_exception_handler(request: Request, exc: StarletteHTTPException) -> JSONResponse:
    """Error bodies are {"error": message}."""
    return JSONResponse(
        status_code=exc.status_code,
        content={"error": exc.detail},
        headers=getattr(exc, "headers", None),
    )


@app.exception_handler(RequestValidationError)
async def validation_exception_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    """Malformed bodies and query parameters are client errors (400)."""
    errors = exc.errors()
    first = errors[0] if errors else {}
    location = ".".join(str(part) for part in first.get("loc", ()) if part not in ("body", "query", "path"))
    message = first.get("msg", "Invalid request")
    return JSONResponse(
        status_code=400,
        content={
            "error": f"{location}: {message}" if location else message,
            "details": jsonable_encoder(errors),
        },
    )


@app.exception_handler(DependencyFailure)
async def dependency_failure_handler(request: Request, exc: DependencyFailure) -> JSONResponse:
    """Database/mail/rendering failures: generic 500, details only in logs."""
    logger.error(
        "Dependency failure",
        error=str(exc),
        cause=repr(exc.__cause__) if exc.__cause__ else None,
    )
    return JSONResponse(
        status_code=500,
        content={
            "error": GENERIC_ERROR,
            "request_id": structlog.contextvars.get_contextvars().get("request_id"),
        },
    )


@app.exception_handler(Exception)
async def global_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    """Global exception handler to ensure JSON response."""
    # Only show exception details in DEBUG mode
    if settings.debug:
        detail = str(exc)
        trace = traceback.format_exc()
    else:
        detail = GENERIC_ERROR
        trace = None

    return JSONResponse(
        status_code=500,
        content={
            "error": detail,
            "trace": trace,
            "request_id": structlog.contextvars.get_contextvars().get("request_id"),
        },
    )


# CORS for frontend
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_credentials=True,
    allow_methods=["GET", "POST", "PUT", "DELETE"],
    allow_headers=["Content-Type", "Authorization", "X-Request-ID"],
)

app.include_router(auth.router)
app.include_router(menu.router)
app.include_router(analytics.router)
app.include_router(reports.router)
app.include_router(report_receivers.router)
app.include_router(expenses.router)
app.include_router(stock.router)
app.include_router(wastage.router)
app.include_router(tables.router)
app.include_router(call_waiter.router)
app.include_router(feedback.router)
app.include_router(footer.router)


@app.get("/health")
async def health_check(db: AsyncSession = Depends(get_db)) -> Response:
    """Return 200 when the database answers, 503 otherwise."""
    try:
        await db.execute(text("SELECT 1"))
        database_ok = True
    except Exception as exc:
        logger.warning("Health check: database unreachable", error=str(exc))
        database_ok = False

    return JSONResponse(
        status_code=200 if database_ok else 503,
        content={
            "status": "healthy" if database_ok else "unhealthy",
            "timestamp": datetime.now().isoformat(),
            "checks": {"database": database_ok},
        },
    )
