"""
Apartment Treasury — FastAPI Application Entry Point

Aggregates all routers, configures middleware and error handlers,
serves uploaded payment proofs, and initializes storage on startup.
"""
import logging
import os
import time
from datetime import datetime

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from fastapi.staticfiles import StaticFiles
from starlette.exceptions import HTTPException as StarletteHTTPException

from treasury.config import get_settings
from treasury.errors import InternalError, NotFoundError, TreasuryError
from treasury.logging_config import configure_logging
from treasury.routes import admin_router, payment_router, system_router
from treasury.services.payment_store import get_payment_store
from treasury.services.proof_storage import PUBLIC_PREFIX

settings = get_settings()
logger = logging.getLogger("treasury")

# ─── Application Instance ───────────────────────────────────────────
app = FastAPI(
    title=settings.APP_NAME,
    version=settings.APP_VERSION,
    description=(
        "Apartment maintenance collections. Residents submit payment proofs; "
        "the treasurer reviews monthly totals, pending dues and exports reports."
    ),
    docs_url="/docs",
    redoc_url="/redoc",
)


# ─── Startup ─────────────────────────────────────────────────────────
@app.on_event("startup")
def on_startup():
    """Configure logging, prepare the uploads directory, and open the store."""
    configure_logging(settings.LOG_LEVEL, os.path.join(settings.LOG_DIR, "server.log"))
    os.makedirs(settings.UPLOAD_DIR, exist_ok=True)
    store = get_payment_store()

    logger.info(
        "\n%s\n  %s v%s\n  TIME: %s\n  STORAGE: %s\n  ADMIN: %s\n  SECRET_KEY: %s\n  UPLOADS: %s\n  DEBUG: %s\n%s",
        "=" * 60,
        settings.APP_NAME, settings.APP_VERSION,
        datetime.now().isoformat(),
        getattr(store, "backend", type(store).__name__),
        "[OK] Configured" if settings.ADMIN_EMAIL and settings.ADMIN_PASSWORD else "[!] Missing (login disabled)",
        "[OK] Loaded" if settings.SECRET_KEY else "[!] Missing (ephemeral key)",
        settings.UPLOAD_DIR,
        settings.DEBUG,
        "=" * 60,
    )


# ─── Middleware ──────────────────────────────────────────────────────
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.middleware("http")
async def log_requests(request: Request, call_next):
    """Log every API request with timing."""
    start = time.time()
    response = await call_next(request)
    duration = round((time.time() - start) * 1000, 1)

    if request.url.path.startswith("/api"):
        logger.info("%s %s -> %s (%sms)", request.method, request.url.path, response.status_code, duration)

    return response


# ─── Error Handlers ──────────────────────────────────────────────────
def _error_response(error: TreasuryError) -> JSONResponse:
    return JSONResponse(status_code=error.status_code, content={"message": error.message})


@app.exception_handler(TreasuryError)
async def treasury_error_handler(request: Request, exc: TreasuryError):
    return _error_response(exc)


@app.exception_handler(RequestValidationError)
async def request_validation_handler(request: Request, exc: RequestValidationError):
    logger.debug("Request validation failed on %s: %s", request.url.path, exc.errors())
    return JSONResponse(status_code=400, content={"message": "Invalid request"})


@app.exception_handler(StarletteHTTPException)
async def http_error_handler(request: Request, exc: StarletteHTTPException):
    if exc.status_code == 404 and request.url.path.startswith("/api"):
        return _error_response(NotFoundError("API endpoint not found"))
    return JSONResponse(status_code=exc.status_code, content={"message": str(exc.detail)}, headers=exc.headers)


@app.exception_handler(Exception)
async def unhandled_error_handler(request: Request, exc: Exception):
    logger.exception("Unhandled error on %s %s", request.method, request.url.path)
    return _error_response(InternalError("Internal server error"))


# ─── API Routers ─────────────────────────────────────────────────────
app.include_router(system_router)
app.include_router(admin_router)
app.include_router(payment_router)


# ─── Uploaded Proofs (Static Files) ─────────────────────────────────
# Directory is created on startup; check_dir=False so importing the app has no side effects.
app.mount(PUBLIC_PREFIX, StaticFiles(directory=settings.UPLOAD_DIR, check_dir=False), name="uploads")
